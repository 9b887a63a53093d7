"""
Domain exceptions raised by OKX client operations.

Transport failures live in http_client.py; everything here means the exchange
answered but the answer cannot satisfy the operation.
"""

from typing import Optional


class OkxClientError(Exception):
    """Base exception for domain failures."""
    pass


class EmptyResponseError(OkxClientError):
    """The exchange returned an empty data array where one item was required."""

    def __init__(self, message: str, endpoint: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint


class InstrumentNotFoundError(OkxClientError):
    """No instrument definition matches the requested id."""

    def __init__(self, instrument_id: str):
        super().__init__(f"Instrument rules not found: {instrument_id}")
        self.instrument_id = instrument_id


class PositionNotFoundError(OkxClientError):
    """No open position matches the symbol and side to close."""

    def __init__(self, symbol: str, side: str):
        super().__init__(f"No {side} position found for {symbol}")
        self.symbol = symbol
        self.side = side
