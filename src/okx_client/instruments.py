"""
Instrument rules cache.

Step sizes are fetched from the public instruments endpoint on first use and
kept for the lifetime of the cache; instrument definitions are treated as
static within a session.
"""

import logging
from typing import Dict, Optional

from aiohttp import ClientSession

from .api_methods import APIMethods
from .exceptions import InstrumentNotFoundError
from .models.market import Instrument

logger = logging.getLogger(__name__)


class InstrumentCache:
    """Memoizes per-instrument step sizes. No eviction."""

    def __init__(self, api_methods: APIMethods):
        self._api_methods = api_methods
        self._instruments: Dict[str, Instrument] = {}

    async def get_instrument(self, session: ClientSession, instrument_id: str) -> Instrument:
        """
        Get the rules of one instrument, fetching the instrument list on a miss.

        Raises:
            InstrumentNotFoundError: If the exchange does not list the instrument
        """
        cached = self._instruments.get(instrument_id)
        if cached is not None:
            return cached

        logger.debug(f"Fetching instrument rules for {instrument_id} from API")
        for instrument in await self._api_methods.get_instruments(session):
            if instrument.instrument_id == instrument_id:
                self._instruments[instrument_id] = instrument
                return instrument

        raise InstrumentNotFoundError(instrument_id)

    async def warmup(self, session: ClientSession) -> int:
        """Cache every instrument of the product type and return the count."""
        logger.info("Warming up instrument cache...")
        instruments = await self._api_methods.get_instruments(session)
        for instrument in instruments:
            if instrument.instrument_id:
                self._instruments[instrument.instrument_id] = instrument
        logger.info(f"Instrument cache warmed up with {len(self._instruments)} instruments")
        return len(self._instruments)

    def get_cached(self, instrument_id: str) -> Optional[Instrument]:
        return self._instruments.get(instrument_id)

    def __contains__(self, instrument_id: str) -> bool:
        return instrument_id in self._instruments

    def __len__(self) -> int:
        return len(self._instruments)
