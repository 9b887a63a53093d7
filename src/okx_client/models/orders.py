"""
Order-related models for OKX client.

Immutable data structures for order management.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..constants import FILLED_STATUS, MARKET_TRIGGER_PRICE


class MarginMode(Enum):
    """Margin mode enumeration (OKX tdMode / mgnMode)."""
    CROSS = "cross"
    ISOLATED = "isolated"

    @classmethod
    def parse(cls, value: Union["MarginMode", bool, str]) -> "MarginMode":
        """Accept a MarginMode, an is-cross flag or the wire value."""
        if isinstance(value, MarginMode):
            return value
        if isinstance(value, bool):
            return cls.CROSS if value else cls.ISOLATED
        return cls(str(value).lower())


class OrderSide(Enum):
    """Order side enumeration."""
    BUY = "buy"
    SELL = "sell"


class PositionSide(Enum):
    """Position side under hedge (long/short) position mode."""
    LONG = "long"
    SHORT = "short"

    @classmethod
    def parse(cls, value: Union["PositionSide", str]) -> "PositionSide":
        """Accept a PositionSide or a case-insensitive 'long'/'short'."""
        if isinstance(value, PositionSide):
            return value
        return cls(str(value).lower())

    @property
    def close_side(self) -> OrderSide:
        """Order side that reduces a position on this side."""
        return OrderSide.SELL if self is PositionSide.LONG else OrderSide.BUY

    @property
    def open_side(self) -> OrderSide:
        """Order side that increases a position on this side."""
        return OrderSide.BUY if self is PositionSide.LONG else OrderSide.SELL


class OrderType(Enum):
    """Order type enumeration."""
    MARKET = "market"
    TRIGGER = "trigger"


@dataclass(frozen=True)
class OrderRequest:
    """Order request data structure. Quantity and prices are pre-formatted."""
    instrument_id: str
    side: OrderSide
    position_side: PositionSide
    order_type: OrderType
    quantity: str
    margin_mode: MarginMode
    reduce_only: bool = False
    trigger_price: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        """Render the request body expected by /trade/order and /trade/order-algo."""
        payload: Dict[str, Any] = {
            "instId": self.instrument_id,
            "tdMode": self.margin_mode.value,
            "side": self.side.value,
            "posSide": self.position_side.value,
            "ordType": self.order_type.value,
            "sz": self.quantity,
        }
        if self.order_type is OrderType.TRIGGER:
            if self.trigger_price is None:
                raise ValueError("Trigger orders require a trigger price")
            payload["triggerPx"] = self.trigger_price
            payload["orderPx"] = MARKET_TRIGGER_PRICE
        if self.reduce_only:
            payload["reduceOnly"] = True
        return payload


@dataclass(frozen=True)
class OrderResult:
    """Result of a market order submission."""
    order_id: str
    symbol: str
    status: str = FILLED_STATUS


@dataclass(frozen=True)
class AlgoOrderResult:
    """Result of a stop-loss / take-profit trigger order submission."""
    algo_id: str
    symbol: str
    position_side: PositionSide
    quantity: str
    trigger_price: str


@dataclass(frozen=True)
class PendingOrder:
    """Resting order identifier."""
    instrument_id: str
    order_id: str


@dataclass(frozen=True)
class PendingAlgoOrder:
    """Resting trigger order identifier."""
    instrument_id: str
    algo_id: str


@dataclass(frozen=True)
class CancelSummary:
    """Outcome of cancelling every resting order of a symbol.

    Attributes:
        symbol: Unified symbol
        cancelled_orders: Ids of cancelled resting orders
        cancelled_algo_orders: Ids of cancelled trigger orders
        failures: Human-readable description of each failed step
    """
    symbol: str
    cancelled_orders: List[str] = field(default_factory=list)
    cancelled_algo_orders: List[str] = field(default_factory=list)
    failures: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures
