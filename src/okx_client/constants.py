"""
Constants for the OKX client.
"""

# API Configuration
DEFAULT_BASE_URL = "https://www.okx.com"
API_PREFIX = "/api/v5"
DEFAULT_TIMEOUT = 15.0
DEFAULT_INSTRUMENT_TYPE = "SWAP"

# Symbol mapping
QUOTE_CURRENCY = "USDT"
INSTRUMENT_SUFFIX = "-USDT-SWAP"

# Formatting
FALLBACK_DECIMALS = 4

# Order constants
MARKET_TRIGGER_PRICE = "-1"  # orderPx for trigger orders: execute at market
POSITION_MODE_HEDGE = "long_short_mode"
FILLED_STATUS = "FILLED"
SUCCESS_CODE = "0"

# Authentication headers
HEADER_API_KEY = "OK-ACCESS-KEY"
HEADER_SIGN = "OK-ACCESS-SIGN"
HEADER_TIMESTAMP = "OK-ACCESS-TIMESTAMP"
HEADER_PASSPHRASE = "OK-ACCESS-PASSPHRASE"
HEADER_SIMULATED = "x-simulated-trading"

# HTTP Status Codes
SUCCESS_STATUS_CODE = 200
ERROR_STATUS_CODE = 500
