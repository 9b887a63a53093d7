"""
API method implementations for OKX client.

One method per REST endpoint. Each issues a single signed request and turns
the response envelope into typed models; no method composes several calls.
"""

from decimal import Decimal
from typing import Any, Dict, List

from aiohttp import ClientSession

from .constants import API_PREFIX, DEFAULT_INSTRUMENT_TYPE, POSITION_MODE_HEDGE, QUOTE_CURRENCY
from .exceptions import EmptyResponseError
from .http_client import HttpClient
from .models.account import Balance, Position
from .models.envelope import ApiResponse
from .models.market import Instrument, Ticker
from .models.orders import (
    MarginMode,
    OrderRequest,
    PendingAlgoOrder,
    PendingOrder,
    PositionSide,
)
from .symbols import to_symbol
from .utils import safe_get, to_decimal

# Endpoint paths
BALANCE = f"{API_PREFIX}/account/balance"
POSITIONS = f"{API_PREFIX}/account/positions"
SET_POSITION_MODE = f"{API_PREFIX}/account/set-position-mode"
SET_LEVERAGE = f"{API_PREFIX}/account/set-leverage"
ORDER = f"{API_PREFIX}/trade/order"
ORDER_ALGO = f"{API_PREFIX}/trade/order-algo"
ORDERS_PENDING = f"{API_PREFIX}/trade/orders-pending"
ORDERS_ALGO_PENDING = f"{API_PREFIX}/trade/orders-algo-pending"
CANCEL_ORDER = f"{API_PREFIX}/trade/cancel-order"
CANCEL_ALGOS = f"{API_PREFIX}/trade/cancel-algos"
INSTRUMENTS = f"{API_PREFIX}/public/instruments"
TICKER = f"{API_PREFIX}/market/ticker"


def _parse_instrument(data: Dict[str, Any]) -> Instrument:
    lot_size = str(data.get("lotSz") or "")
    tick_size = str(data.get("tickSz") or "")
    return Instrument(
        instrument_id=data.get("instId", ""),
        quantity_step=to_decimal(lot_size),
        price_step=to_decimal(tick_size),
        quantity_step_text=lot_size,
        price_step_text=tick_size,
    )


def _parse_position(data: Dict[str, Any]) -> Position:
    side = PositionSide.LONG if str(data.get("posSide", "")).lower() == "long" else PositionSide.SHORT
    margin_mode = data.get("mgnMode")
    return Position(
        symbol=to_symbol(data.get("instId", "")),
        side=side,
        quantity=abs(to_decimal(data.get("pos"))),
        entry_price=to_decimal(data.get("avgPx")),
        mark_price=to_decimal(data.get("markPx")),
        unrealized_pnl=to_decimal(data.get("upl")),
        leverage=to_decimal(data.get("lever")),
        liquidation_price=to_decimal(data.get("liqPx")),
        margin_mode=MarginMode(margin_mode) if margin_mode in ("cross", "isolated") else None,
    )


def _parse_ticker(data: Dict[str, Any]) -> Ticker:
    return Ticker(
        instrument_id=data.get("instId", ""),
        last=to_decimal(data.get("last")),
        bid=to_decimal(data.get("bidPx"), default=None),
        ask=to_decimal(data.get("askPx"), default=None),
    )


def _parse_pending_order(data: Dict[str, Any]) -> PendingOrder:
    return PendingOrder(instrument_id=data.get("instId", ""), order_id=data.get("ordId", ""))


def _parse_pending_algo(data: Dict[str, Any]) -> PendingAlgoOrder:
    return PendingAlgoOrder(instrument_id=data.get("instId", ""), algo_id=data.get("algoId", ""))


def _raw(data: Dict[str, Any]) -> Dict[str, Any]:
    return data


class APIMethods:
    """Container for all API method implementations."""

    def __init__(self, http_client: HttpClient, instrument_type: str = DEFAULT_INSTRUMENT_TYPE):
        """Initialize API methods with HTTP client."""
        self._http_client = http_client
        self._instrument_type = instrument_type

    # Account
    async def get_balance(self, session: ClientSession, currency: str = QUOTE_CURRENCY) -> Balance:
        """Get the balance of one currency."""
        response = await self._http_client.request(
            session, "GET", BALANCE, params={"ccy": currency}
        )
        envelope = ApiResponse.from_payload(response, _raw)
        if not envelope.data:
            raise EmptyResponseError("Account balance response is empty", endpoint=BALANCE)

        data = envelope.first
        total_equity = to_decimal(data.get("totalEq"))
        available = Decimal("0")
        unrealized = Decimal("0")
        cash = Decimal("0")
        for detail in safe_get(data, "details", []) or []:
            if str(detail.get("ccy", "")).upper() == currency.upper():
                available = to_decimal(detail.get("availBal"))
                unrealized = to_decimal(detail.get("upl"))
                cash = to_decimal(detail.get("cashBal"))
                break

        # totalEq includes unrealized PnL; prefer the cash balance when reported
        wallet = cash if cash != 0 else total_equity - unrealized

        return Balance(
            wallet_balance=wallet,
            available_balance=available,
            unrealized_pnl=unrealized,
            total_equity=total_equity,
        )

    async def get_positions(self, session: ClientSession) -> List[Position]:
        """Get all open positions; zero-size entries are dropped."""
        response = await self._http_client.request(
            session, "GET", POSITIONS, params={"instType": self._instrument_type}
        )
        envelope = ApiResponse.from_payload(response, _parse_position)
        return [position for position in envelope.data if position.quantity != 0]

    async def set_position_mode(
        self, session: ClientSession, position_mode: str = POSITION_MODE_HEDGE
    ) -> Dict[str, Any]:
        """Switch the account-wide position mode."""
        return await self._http_client.request(
            session, "POST", SET_POSITION_MODE, data={"posMode": position_mode}
        )

    async def set_leverage(
        self,
        session: ClientSession,
        instrument_id: str,
        leverage: int,
        margin_mode: MarginMode,
    ) -> Dict[str, Any]:
        """Set leverage and margin mode of one instrument."""
        if leverage < 1:
            raise ValueError(f"Leverage must be at least 1, got {leverage}")

        return await self._http_client.request(
            session,
            "POST",
            SET_LEVERAGE,
            data={
                "instId": instrument_id,
                "lever": str(leverage),
                "mgnMode": margin_mode.value,
            },
        )

    # Orders
    async def place_order(self, session: ClientSession, order: OrderRequest) -> str:
        """Submit a market order and return its order id."""
        response = await self._http_client.request(
            session, "POST", ORDER, data=order.to_payload()
        )
        envelope = ApiResponse.from_payload(response, _raw)
        return str(envelope.first.get("ordId", "")) if envelope.data else ""

    async def place_algo_order(self, session: ClientSession, order: OrderRequest) -> str:
        """Submit a trigger order and return its algo id."""
        response = await self._http_client.request(
            session, "POST", ORDER_ALGO, data=order.to_payload()
        )
        envelope = ApiResponse.from_payload(response, _raw)
        return str(envelope.first.get("algoId", "")) if envelope.data else ""

    async def get_pending_orders(
        self, session: ClientSession, instrument_id: str
    ) -> List[PendingOrder]:
        """List resting orders of one instrument."""
        response = await self._http_client.request(
            session,
            "GET",
            ORDERS_PENDING,
            params={"instType": self._instrument_type, "instId": instrument_id},
        )
        return ApiResponse.from_payload(response, _parse_pending_order).data

    async def get_pending_algo_orders(
        self, session: ClientSession, instrument_id: str, order_type: str = "trigger"
    ) -> List[PendingAlgoOrder]:
        """List resting trigger orders of one instrument."""
        response = await self._http_client.request(
            session,
            "GET",
            ORDERS_ALGO_PENDING,
            params={
                "instType": self._instrument_type,
                "instId": instrument_id,
                "ordType": order_type,
            },
        )
        return ApiResponse.from_payload(response, _parse_pending_algo).data

    async def cancel_order(
        self, session: ClientSession, instrument_id: str, order_id: str
    ) -> Dict[str, Any]:
        """Cancel one resting order."""
        if not order_id:
            raise ValueError("Order id is required")

        return await self._http_client.request(
            session, "POST", CANCEL_ORDER, data={"instId": instrument_id, "ordId": order_id}
        )

    async def cancel_algo_order(
        self, session: ClientSession, instrument_id: str, algo_id: str
    ) -> Dict[str, Any]:
        """Cancel one trigger order. The endpoint takes a list of orders."""
        if not algo_id:
            raise ValueError("Algo id is required")

        return await self._http_client.request(
            session, "POST", CANCEL_ALGOS, data=[{"instId": instrument_id, "algoId": algo_id}]
        )

    # Market
    async def get_instruments(self, session: ClientSession) -> List[Instrument]:
        """Get trading rules of every instrument of the product type."""
        response = await self._http_client.request(
            session, "GET", INSTRUMENTS, params={"instType": self._instrument_type}
        )
        return ApiResponse.from_payload(response, _parse_instrument).data

    async def get_ticker(self, session: ClientSession, instrument_id: str) -> Ticker:
        """Get the latest ticker of one instrument."""
        response = await self._http_client.request(
            session, "GET", TICKER, params={"instId": instrument_id}
        )
        envelope = ApiResponse.from_payload(response, _parse_ticker)
        if not envelope.data:
            raise EmptyResponseError(f"No ticker returned for {instrument_id}", endpoint=TICKER)
        return envelope.first
