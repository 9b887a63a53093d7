"""
OKX Client - Main orchestration module.

This module provides the OkxClient class, the OKX implementation of the
Trader contract. It composes the pieces below into position lifecycle
operations:
- Request signing and transport live in auth.py and http_client.py
- Endpoint bindings are implemented in api_methods.py
- Instrument rules and number formatting are in instruments.py and formatter.py
- Metrics and swallowed-failure events are collected by monitoring.py

Every public operation runs under one lock per client, so the instrument
cache and the recorded margin mode are never touched by two operations at
once. Each operation reads the margin mode once and uses it for all of its
exchange calls.
"""

import asyncio
import logging
import os
from decimal import Decimal
from typing import Any, Awaitable, Callable, List, Optional, TypeVar, Union

from aiohttp import ClientSession
from dotenv import load_dotenv

from .api_methods import APIMethods
from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_INSTRUMENT_TYPE,
    DEFAULT_TIMEOUT,
    ERROR_STATUS_CODE,
    FILLED_STATUS,
    SUCCESS_STATUS_CODE,
)
from .exceptions import OkxClientError, PositionNotFoundError
from .formatter import OrderFormatter
from .http_client import HttpClient, HttpClientError
from .instruments import InstrumentCache
from .models import (
    AlgoOrderResult,
    Balance,
    CancelSummary,
    ConnectionConfig,
    MarginMode,
    OrderRequest,
    OrderResult,
    OrderType,
    Position,
    PositionSide,
    Ticker,
)
from .monitoring import PerformanceMonitor, Statistics, WarningEvent
from .session_manager import SessionManager
from .symbols import to_instrument_id
from .trader import Trader
from .utils import Number, parse_amount

logger = logging.getLogger(__name__)

T = TypeVar("T")

_TRUTHY = ("1", "true", "yes", "on")


class OkxClient(Trader):
    """
    OKX perpetual-swap trading client.

    Coordinates signing, formatting and order sequencing while keeping the
    exchange-specific shapes out of the caller's view.
    """

    def __init__(
        self,
        config: ConnectionConfig,
        margin_mode: MarginMode = MarginMode.CROSS,
    ):
        """Initialize OKX client with configuration."""
        self._config = config
        self._session_manager = SessionManager(config)
        self._http_client = HttpClient(config)
        self._api_methods = APIMethods(self._http_client, config.instrument_type)
        self._instrument_cache = InstrumentCache(self._api_methods)
        self._formatter = OrderFormatter(self._instrument_cache)
        self._monitor = PerformanceMonitor()
        self._margin_mode = margin_mode
        self._lock = asyncio.Lock()
        self._closed = False

    @classmethod
    def from_env(cls, simulated: Optional[bool] = None) -> "OkxClient":
        """Create client from environment variables (a .env file is honoured)."""
        load_dotenv()

        if simulated is None:
            simulated = os.getenv("OKX_SIMULATED", "").strip().lower() in _TRUTHY

        config = ConnectionConfig(
            api_key=os.getenv("OKX_API_KEY", ""),
            api_secret=os.getenv("OKX_API_SECRET", ""),
            passphrase=os.getenv("OKX_PASSPHRASE", ""),
            base_url=os.getenv("OKX_BASE_URL", DEFAULT_BASE_URL),
            timeout=float(os.getenv("OKX_TIMEOUT", str(DEFAULT_TIMEOUT))),
            simulated=simulated,
        )

        return cls(config)

    @property
    def margin_mode(self) -> MarginMode:
        """Margin mode applied to every order and leverage call."""
        return self._margin_mode

    # Account methods
    async def get_balance(self) -> Balance:
        """Get the USDT balance."""
        balance = await self._execute_with_monitoring(
            self._api_methods.get_balance, "GET", "/account/balance"
        )
        logger.info(
            f"✓ OKX account: equity={balance.total_equity}, wallet={balance.wallet_balance}, "
            f"available={balance.available_balance}, unrealized={balance.unrealized_pnl}"
        )
        return balance

    async def get_positions(self) -> List[Position]:
        """Get all open positions."""
        return await self._execute_with_monitoring(
            self._api_methods.get_positions, "GET", "/account/positions"
        )

    async def set_margin_mode(
        self, symbol: str, margin_mode: Union[MarginMode, bool, str]
    ) -> None:
        """
        Switch to hedge position mode and set the symbol's margin mode.

        Exchange rejections (for example an open position blocking the switch)
        are logged and reported as warning events; the requested mode is
        recorded locally either way so later orders use it consistently.
        """
        await self._execute_with_monitoring(
            self._set_margin_mode, "POST", "/account/set-leverage",
            symbol, MarginMode.parse(margin_mode),
        )

    async def set_leverage(self, symbol: str, leverage: int) -> None:
        """Set leverage for a symbol using the recorded margin mode."""
        await self._execute_with_monitoring(
            self._set_leverage, "POST", "/account/set-leverage",
            symbol, leverage, self._margin_mode,
        )

    # Position lifecycle
    async def open_long(self, symbol: str, quantity: Number, leverage: int) -> OrderResult:
        """Open (or add to) a long position with a market order."""
        return await self._execute_with_monitoring(
            self._open_position, "POST", "/trade/order",
            symbol, quantity, leverage, PositionSide.LONG,
        )

    async def open_short(self, symbol: str, quantity: Number, leverage: int) -> OrderResult:
        """Open (or add to) a short position with a market order."""
        return await self._execute_with_monitoring(
            self._open_position, "POST", "/trade/order",
            symbol, quantity, leverage, PositionSide.SHORT,
        )

    async def close_long(self, symbol: str, quantity: Number = 0) -> OrderResult:
        """Close a long position; quantity 0 closes the whole position."""
        return await self._execute_with_monitoring(
            self._close_position, "POST", "/trade/order",
            symbol, quantity, PositionSide.LONG,
        )

    async def close_short(self, symbol: str, quantity: Number = 0) -> OrderResult:
        """Close a short position; quantity 0 closes the whole position."""
        return await self._execute_with_monitoring(
            self._close_position, "POST", "/trade/order",
            symbol, quantity, PositionSide.SHORT,
        )

    async def set_stop_loss(
        self,
        symbol: str,
        position_side: Union[PositionSide, str],
        quantity: Number,
        stop_price: Number,
    ) -> AlgoOrderResult:
        """Place a reduce-only trigger order that exits at market below/above stop_price."""
        return await self._execute_with_monitoring(
            self._place_trigger_order, "POST", "/trade/order-algo",
            symbol, PositionSide.parse(position_side), quantity, stop_price, "stop-loss",
        )

    async def set_take_profit(
        self,
        symbol: str,
        position_side: Union[PositionSide, str],
        quantity: Number,
        take_profit_price: Number,
    ) -> AlgoOrderResult:
        """Place a reduce-only trigger order that exits at market at take_profit_price."""
        return await self._execute_with_monitoring(
            self._place_trigger_order, "POST", "/trade/order-algo",
            symbol, PositionSide.parse(position_side), quantity, take_profit_price, "take-profit",
        )

    async def cancel_all_orders(self, symbol: str) -> CancelSummary:
        """Cancel every resting order and trigger order of a symbol."""
        return await self._execute_with_monitoring(
            self._cancel_all_orders, "POST", "/trade/cancel-order", symbol
        )

    # Market data
    async def get_market_price(self, symbol: str) -> Decimal:
        """Get the last traded price of a symbol."""
        ticker = await self.get_ticker(symbol)
        return ticker.last

    async def get_ticker(self, symbol: str) -> Ticker:
        """Get the latest ticker of a symbol."""
        return await self._execute_with_monitoring(
            self._api_methods.get_ticker, "GET", "/market/ticker", to_instrument_id(symbol)
        )

    async def format_quantity(self, symbol: str, quantity: Number) -> str:
        """Format a quantity to the symbol's lot size."""
        return await self._execute_with_monitoring(
            self._formatter.format_quantity, "GET", "/public/instruments", symbol, quantity
        )

    async def format_price(self, symbol: str, price: Number) -> str:
        """Format a price to the symbol's tick size."""
        return await self._execute_with_monitoring(
            self._formatter.format_price, "GET", "/public/instruments",
            to_instrument_id(symbol), price,
        )

    async def warmup_instruments(self) -> int:
        """Preload the rules of every instrument; returns the number cached."""
        return await self._execute_with_monitoring(
            self._instrument_cache.warmup, "GET", "/public/instruments"
        )

    # Operation bodies; callers hold the lock
    async def _set_margin_mode(
        self, session: ClientSession, symbol: str, margin_mode: MarginMode
    ) -> None:
        instrument_id = to_instrument_id(symbol)

        try:
            await self._api_methods.set_position_mode(session)
        except HttpClientError as e:
            self._warn("set_margin_mode", symbol, f"Failed to switch to hedge position mode: {e}")

        self._margin_mode = margin_mode

        try:
            await self._api_methods.set_leverage(session, instrument_id, 1, margin_mode)
        except HttpClientError as e:
            self._warn(
                "set_margin_mode", symbol,
                f"Failed to set {margin_mode.value} margin (an open position may block the switch): {e}",
            )
            return

        logger.info(f"  ✓ {symbol} margin mode set to {margin_mode.value} (hedge position mode)")

    async def _set_leverage(
        self, session: ClientSession, symbol: str, leverage: int, margin_mode: MarginMode
    ) -> None:
        await self._api_methods.set_leverage(
            session, to_instrument_id(symbol), leverage, margin_mode
        )
        logger.info(f"  ✓ {symbol} leverage set to {leverage}x ({margin_mode.value})")

    async def _open_position(
        self,
        session: ClientSession,
        symbol: str,
        quantity: Number,
        leverage: int,
        position_side: PositionSide,
    ) -> OrderResult:
        amount = _positive(quantity, "quantity")
        margin_mode = self._margin_mode
        instrument_id = to_instrument_id(symbol)

        # Stale TP/SL orders must not fire against the new position
        await self._cancel_best_effort(session, symbol, f"open_{position_side.value}")
        await self._set_leverage(session, symbol, leverage, margin_mode)

        size = await self._formatter.format_quantity(session, symbol, amount)
        order = OrderRequest(
            instrument_id=instrument_id,
            side=position_side.open_side,
            position_side=position_side,
            order_type=OrderType.MARKET,
            quantity=size,
            margin_mode=margin_mode,
        )
        order_id = await self._api_methods.place_order(session, order)

        logger.info(f"✅ Opened {position_side.value} {symbol}: size={size} leverage={leverage}x id={order_id}")
        return OrderResult(order_id=order_id, symbol=symbol, status=FILLED_STATUS)

    async def _close_position(
        self,
        session: ClientSession,
        symbol: str,
        quantity: Number,
        position_side: PositionSide,
    ) -> OrderResult:
        margin_mode = self._margin_mode
        instrument_id = to_instrument_id(symbol)

        amount = parse_amount(quantity, "quantity")
        if amount < 0:
            raise ValueError(f"Close quantity must not be negative, got {quantity}")
        if amount == 0:
            amount = await self._resolve_position_size(session, symbol, position_side)

        size = await self._formatter.format_quantity(session, symbol, amount)
        order = OrderRequest(
            instrument_id=instrument_id,
            side=position_side.close_side,
            position_side=position_side,
            order_type=OrderType.MARKET,
            quantity=size,
            margin_mode=margin_mode,
            reduce_only=True,
        )
        order_id = await self._api_methods.place_order(session, order)

        await self._cancel_best_effort(session, symbol, f"close_{position_side.value}")

        logger.info(f"✅ Closed {position_side.value} {symbol}: size={size} id={order_id}")
        return OrderResult(order_id=order_id, symbol=symbol, status=FILLED_STATUS)

    async def _resolve_position_size(
        self, session: ClientSession, symbol: str, position_side: PositionSide
    ) -> Decimal:
        for position in await self._api_methods.get_positions(session):
            if position.symbol == symbol.upper() and position.side is position_side:
                return position.quantity
        raise PositionNotFoundError(symbol, position_side.value)

    async def _place_trigger_order(
        self,
        session: ClientSession,
        symbol: str,
        position_side: PositionSide,
        quantity: Number,
        trigger_price: Number,
        label: str,
    ) -> AlgoOrderResult:
        amount = _positive(quantity, "quantity")
        trigger = _positive(trigger_price, f"{label} price")
        instrument_id = to_instrument_id(symbol)
        size = await self._formatter.format_quantity(session, symbol, amount)
        price = await self._formatter.format_price(session, instrument_id, trigger)

        order = OrderRequest(
            instrument_id=instrument_id,
            side=position_side.close_side,
            position_side=position_side,
            order_type=OrderType.TRIGGER,
            quantity=size,
            margin_mode=self._margin_mode,
            reduce_only=True,
            trigger_price=price,
        )
        algo_id = await self._api_methods.place_algo_order(session, order)

        logger.info(f"  {label} order placed: {symbol} {position_side.value} size={size} trigger={price}")
        return AlgoOrderResult(
            algo_id=algo_id,
            symbol=symbol,
            position_side=position_side,
            quantity=size,
            trigger_price=price,
        )

    async def _cancel_all_orders(self, session: ClientSession, symbol: str) -> CancelSummary:
        instrument_id = to_instrument_id(symbol)
        summary = CancelSummary(symbol=symbol)

        for pending in await self._api_methods.get_pending_orders(session, instrument_id):
            try:
                await self._api_methods.cancel_order(session, instrument_id, pending.order_id)
                summary.cancelled_orders.append(pending.order_id)
            except (HttpClientError, ValueError) as e:
                message = f"Failed to cancel order ordId={pending.order_id}: {e}"
                summary.failures.append(message)
                self._warn("cancel_all_orders", symbol, message)

        try:
            algo_orders = await self._api_methods.get_pending_algo_orders(session, instrument_id)
        except HttpClientError as e:
            message = f"Failed to list trigger orders: {e}"
            summary.failures.append(message)
            self._warn("cancel_all_orders", symbol, message)
            algo_orders = []

        for algo in algo_orders:
            try:
                await self._api_methods.cancel_algo_order(session, instrument_id, algo.algo_id)
                summary.cancelled_algo_orders.append(algo.algo_id)
            except (HttpClientError, ValueError) as e:
                message = f"Failed to cancel trigger order algoId={algo.algo_id}: {e}"
                summary.failures.append(message)
                self._warn("cancel_all_orders", symbol, message)

        logger.info(
            f"  ✓ Cancelled {len(summary.cancelled_orders)} orders and "
            f"{len(summary.cancelled_algo_orders)} trigger orders for {symbol}"
        )
        return summary

    async def _cancel_best_effort(
        self, session: ClientSession, symbol: str, operation: str
    ) -> Optional[CancelSummary]:
        try:
            return await self._cancel_all_orders(session, symbol)
        except (HttpClientError, OkxClientError) as e:
            self._warn(operation, symbol, f"Failed to cancel resting orders: {e}")
            return None

    def _warn(self, operation: str, symbol: Optional[str], message: str) -> WarningEvent:
        logger.warning(f"  ⚠️ {operation} {symbol or ''}: {message}")
        return self._monitor.record_warning(operation, symbol, message)

    # Monitoring and health
    async def health_check(self) -> bool:
        """Check client health."""
        if self._closed:
            return False
        try:
            await self._session_manager.create_session()
            return await self._session_manager.health_check()
        except Exception as e:
            logger.error(f"Health check failed: {e}")
            return False

    def get_statistics(self) -> Statistics:
        """Get performance statistics."""
        return self._monitor.statistics

    def get_recent_events(self, count: int = 10) -> List[WarningEvent]:
        """Get the most recent swallowed failures."""
        return self._monitor.get_recent_events(count)

    def subscribe_events(self, listener: Callable[[WarningEvent], None]) -> Callable[[], None]:
        """Receive every swallowed failure as it happens."""
        return self._monitor.subscribe(listener)

    async def close(self) -> None:
        """Close client and cleanup resources."""
        if not self._closed:
            await self._session_manager.close_session()
            self._closed = True
            logger.info("OKX client closed")

    async def _execute_with_monitoring(
        self,
        operation: Callable[..., Awaitable[T]],
        method: str,
        endpoint: str,
        *args: Any,
    ) -> T:
        """Run one operation under the client lock with performance monitoring."""
        if self._closed:
            raise RuntimeError("Client is closed")

        async with self._lock:
            start_time = asyncio.get_running_loop().time()
            session = await self._session_manager.create_session()

            try:
                result = await operation(session, *args)
            except Exception as e:
                duration_ms = (asyncio.get_running_loop().time() - start_time) * 1000
                status_code = getattr(e, "status_code", None) or ERROR_STATUS_CODE
                self._monitor.record_operation(f"{method} {endpoint}", status_code, duration_ms)
                raise

            duration_ms = (asyncio.get_running_loop().time() - start_time) * 1000
            self._monitor.record_operation(f"{method} {endpoint}", SUCCESS_STATUS_CODE, duration_ms)
            return result

    # Context manager support
    async def __aenter__(self):
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    def __del__(self):
        """Cleanup on deletion."""
        if hasattr(self, '_closed') and not self._closed:
            logger.warning("OkxClient not properly closed - call close() explicitly")


def _positive(value: Number, name: str) -> Decimal:
    amount = parse_amount(value, name)
    if amount <= 0:
        raise ValueError(f"{name.capitalize()} must be positive, got {value}")
    return amount


def create_okx_client(
    api_key: str,
    api_secret: str,
    passphrase: str,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    simulated: bool = False,
    instrument_type: str = DEFAULT_INSTRUMENT_TYPE,
    margin_mode: MarginMode = MarginMode.CROSS,
) -> OkxClient:
    """
    Factory function to create OKX client with common configuration.

    Args:
        api_key: API key for authentication
        api_secret: API secret for signing
        passphrase: API passphrase chosen when the key was created
        base_url: Base URL for API endpoints
        timeout: Per-request deadline in seconds
        simulated: Send requests to the demo trading environment
        instrument_type: Product type whose instruments are traded
        margin_mode: Initial margin mode

    Returns:
        Configured OkxClient instance
    """
    config = ConnectionConfig(
        api_key=api_key,
        api_secret=api_secret,
        passphrase=passphrase,
        base_url=base_url,
        timeout=timeout,
        simulated=simulated,
        instrument_type=instrument_type,
    )

    return OkxClient(config, margin_mode=margin_mode)
