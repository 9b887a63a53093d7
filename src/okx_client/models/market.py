"""
Market-related models for OKX client.

Immutable data structures for instrument rules and tickers.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Instrument:
    """
    Trading rules of a single contract.

    The step texts keep the exchange's own representation ("0.01", "1"),
    which decides how many decimals a formatted value carries.
    """
    instrument_id: str
    quantity_step: Decimal  # lotSz
    price_step: Decimal  # tickSz
    quantity_step_text: str = ""
    price_step_text: str = ""


@dataclass(frozen=True)
class Ticker:
    """Latest ticker data structure."""
    instrument_id: str
    last: Decimal
    bid: Optional[Decimal] = None
    ask: Optional[Decimal] = None
