"""
Trader capability contract.

Strategy engines, schedulers and the CLI depend on this interface only; the
OKX client is one implementation of it.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Union

from .models.account import Balance, Position
from .models.orders import (
    AlgoOrderResult,
    CancelSummary,
    MarginMode,
    OrderResult,
    PositionSide,
)
from .utils import Number


class Trader(ABC):
    """Position lifecycle operations shared by every exchange integration."""

    @abstractmethod
    async def get_balance(self) -> Balance:
        ...

    @abstractmethod
    async def get_positions(self) -> List[Position]:
        """Open positions; zero-size positions are never returned."""
        ...

    @abstractmethod
    async def set_margin_mode(self, symbol: str, margin_mode: Union[MarginMode, bool]) -> None:
        ...

    @abstractmethod
    async def set_leverage(self, symbol: str, leverage: int) -> None:
        ...

    @abstractmethod
    async def open_long(self, symbol: str, quantity: Number, leverage: int) -> OrderResult:
        ...

    @abstractmethod
    async def open_short(self, symbol: str, quantity: Number, leverage: int) -> OrderResult:
        ...

    @abstractmethod
    async def close_long(self, symbol: str, quantity: Number = 0) -> OrderResult:
        """Close a long position; quantity 0 closes all of it."""
        ...

    @abstractmethod
    async def close_short(self, symbol: str, quantity: Number = 0) -> OrderResult:
        """Close a short position; quantity 0 closes all of it."""
        ...

    @abstractmethod
    async def cancel_all_orders(self, symbol: str) -> CancelSummary:
        ...

    @abstractmethod
    async def get_market_price(self, symbol: str) -> Decimal:
        ...

    @abstractmethod
    async def set_stop_loss(
        self,
        symbol: str,
        position_side: Union[PositionSide, str],
        quantity: Number,
        stop_price: Number,
    ) -> AlgoOrderResult:
        ...

    @abstractmethod
    async def set_take_profit(
        self,
        symbol: str,
        position_side: Union[PositionSide, str],
        quantity: Number,
        take_profit_price: Number,
    ) -> AlgoOrderResult:
        ...

    @abstractmethod
    async def format_quantity(self, symbol: str, quantity: Number) -> str:
        ...
