"""
Quantity and price formatting against instrument step sizes.

Values are rounded to the nearest step (not truncated) and rendered as plain
decimal strings. When the instrument rules cannot be resolved the formatter
degrades to a fixed 4-decimal rendering instead of failing the order.
"""

import logging

from aiohttp import ClientSession

from .exceptions import InstrumentNotFoundError
from .http_client import HttpClientError
from .instruments import InstrumentCache
from .symbols import to_instrument_id
from .utils import Number, format_fixed, format_to_step, parse_amount

logger = logging.getLogger(__name__)


class OrderFormatter:
    """Formats order quantities and trigger prices for one exchange account."""

    def __init__(self, instrument_cache: InstrumentCache):
        self._instrument_cache = instrument_cache

    async def format_quantity(self, session: ClientSession, symbol: str, quantity: Number) -> str:
        """Align a quantity to the instrument's lot size."""
        amount = parse_amount(quantity, "quantity")
        instrument_id = to_instrument_id(symbol)
        step_text = await self._step_text(session, instrument_id, "quantity")
        return self._format(amount, step_text, instrument_id)

    async def format_price(self, session: ClientSession, instrument_id: str, price: Number) -> str:
        """Align a price to the instrument's tick size."""
        amount = parse_amount(price, "price")
        step_text = await self._step_text(session, instrument_id, "price")
        return self._format(amount, step_text, instrument_id)

    async def _step_text(self, session: ClientSession, instrument_id: str, kind: str) -> str:
        try:
            instrument = await self._instrument_cache.get_instrument(session, instrument_id)
        except (InstrumentNotFoundError, HttpClientError) as e:
            logger.warning(
                f"⚠️ Instrument rules unavailable for {instrument_id}, "
                f"using fixed precision: {e}"
            )
            return ""
        if kind == "quantity":
            return instrument.quantity_step_text or str(instrument.quantity_step)
        return instrument.price_step_text or str(instrument.price_step)

    @staticmethod
    def _format(value: Number, step_text: str, instrument_id: str) -> str:
        formatted = format_to_step(value, step_text) if step_text else None
        if formatted is None:
            logger.debug(f"No usable step for {instrument_id}, formatting {value} with fixed precision")
            return format_fixed(value)
        return formatted
