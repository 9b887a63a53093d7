"""
Account-related models for OKX client.

Immutable data structures for balance and position information.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .orders import MarginMode, PositionSide


@dataclass(frozen=True)
class Balance:
    """USDT balance of the trading account."""
    wallet_balance: Decimal  # cash balance, excluding unrealized PnL
    available_balance: Decimal
    unrealized_pnl: Decimal
    total_equity: Decimal = Decimal("0")


@dataclass(frozen=True)
class Position:
    """Open position data structure. Quantity is always absolute."""
    symbol: str
    side: PositionSide
    quantity: Decimal
    entry_price: Decimal
    mark_price: Decimal
    unrealized_pnl: Decimal
    leverage: Decimal
    liquidation_price: Decimal
    margin_mode: Optional[MarginMode] = None
