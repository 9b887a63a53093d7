"""
Data models for OKX client.

This package contains all data structures used throughout the OKX client,
following the state-first principle with immutable data structures.
"""

from .config import ConnectionConfig
from .envelope import ApiResponse
from .orders import (
    AlgoOrderResult,
    CancelSummary,
    MarginMode,
    OrderRequest,
    OrderResult,
    OrderSide,
    OrderType,
    PendingAlgoOrder,
    PendingOrder,
    PositionSide,
)
from .account import Balance, Position
from .market import Instrument, Ticker

__all__ = [
    # Configuration
    "ConnectionConfig",
    # Envelope
    "ApiResponse",
    # Orders
    "AlgoOrderResult",
    "CancelSummary",
    "MarginMode",
    "OrderRequest",
    "OrderResult",
    "OrderSide",
    "OrderType",
    "PendingAlgoOrder",
    "PendingOrder",
    "PositionSide",
    # Account
    "Balance",
    "Position",
    # Market
    "Instrument",
    "Ticker",
]
