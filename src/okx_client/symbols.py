"""
Conversion between unified symbols (BTCUSDT) and OKX instrument ids (BTC-USDT-SWAP).
"""

from .constants import INSTRUMENT_SUFFIX, QUOTE_CURRENCY


def to_instrument_id(symbol: str) -> str:
    """BTCUSDT -> BTC-USDT-SWAP."""
    upper = symbol.upper()
    if upper.endswith(QUOTE_CURRENCY):
        upper = upper[: -len(QUOTE_CURRENCY)]
    return upper + INSTRUMENT_SUFFIX


def to_symbol(instrument_id: str) -> str:
    """BTC-USDT-SWAP -> BTCUSDT; ids without two '-' segments are only upper-cased."""
    parts = instrument_id.split("-")
    if len(parts) >= 2:
        return (parts[0] + parts[1]).upper()
    return instrument_id.upper()
