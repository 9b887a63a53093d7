"""
OKX Client - Python client for the OKX v5 perpetual-swap trading API.

This package provides an authenticated client that opens, protects and closes
leveraged positions while aligning quantities and prices to each
instrument's step sizes.
"""

from .account_client import OkxClient, create_okx_client
from .auth import ApiCredentials, OkxSigner, okx_timestamp
from .exceptions import (
    EmptyResponseError,
    InstrumentNotFoundError,
    OkxClientError,
    PositionNotFoundError,
)
from .http_client import (
    ExchangeAPIError,
    HttpClientError,
    HttpDecodeError,
    HttpSerializationError,
    HttpStatusError,
    HttpTransportError,
)
from .models import (
    # Configuration
    ConnectionConfig,
    # Orders
    AlgoOrderResult,
    CancelSummary,
    MarginMode,
    OrderResult,
    OrderSide,
    PositionSide,
    # Account
    Balance,
    Position,
    # Market
    Instrument,
    Ticker,
)
from .monitoring import WarningEvent
from .symbols import to_instrument_id, to_symbol
from .trader import Trader

__all__ = [
    # Main Client
    "OkxClient",
    "create_okx_client",
    "Trader",
    # Signing
    "ApiCredentials",
    "OkxSigner",
    "okx_timestamp",
    # Models
    "ConnectionConfig",
    "AlgoOrderResult",
    "CancelSummary",
    "MarginMode",
    "OrderResult",
    "OrderSide",
    "PositionSide",
    "Balance",
    "Position",
    "Instrument",
    "Ticker",
    "WarningEvent",
    # Symbols
    "to_instrument_id",
    "to_symbol",
    # Exceptions
    "OkxClientError",
    "EmptyResponseError",
    "InstrumentNotFoundError",
    "PositionNotFoundError",
    "HttpClientError",
    "HttpSerializationError",
    "HttpTransportError",
    "HttpStatusError",
    "HttpDecodeError",
    "ExchangeAPIError",
]
