# -*- coding: utf-8 -*-
"""
Shared fixtures and utilities for testing OKX client.
"""

import json
from decimal import Decimal
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from okx_client.account_client import OkxClient
from okx_client.http_client import HttpClient
from okx_client.models import ConnectionConfig, Instrument


TEST_API_KEY = "0d3b5c1e-7a3f-4d2b-9b9e-2c1f8e6a4b70"
TEST_API_SECRET = "3F2A9C7B1E5D4A6F8B0C2D4E6F8A0B1C"
TEST_PASSPHRASE = "Passphrase-123"


def envelope(data: Optional[List[Dict[str, Any]]] = None, code: str = "0", msg: str = "") -> Dict[str, Any]:
    """Build an OKX response envelope."""
    return {"code": code, "msg": msg, "data": data or []}


def make_session(status: int = 200, body: Any = None, text: Optional[str] = None) -> MagicMock:
    """Mock aiohttp ClientSession whose request() yields one canned response."""
    if text is None:
        text = json.dumps(envelope() if body is None else body)

    response = MagicMock()
    response.status = status
    response.text = AsyncMock(return_value=text)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.request = MagicMock(return_value=context)
    return session


@pytest.fixture
def connection_config() -> ConnectionConfig:
    """Production connection config."""
    return ConnectionConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        passphrase=TEST_PASSPHRASE,
    )


@pytest.fixture
def simulated_config() -> ConnectionConfig:
    """Demo trading connection config."""
    return ConnectionConfig(
        api_key=TEST_API_KEY,
        api_secret=TEST_API_SECRET,
        passphrase=TEST_PASSPHRASE,
        simulated=True,
    )


@pytest.fixture
def http_client(connection_config) -> HttpClient:
    return HttpClient(connection_config)


@pytest.fixture
def btc_instrument() -> Instrument:
    return Instrument(
        instrument_id="BTC-USDT-SWAP",
        quantity_step=Decimal("0.01"),
        price_step=Decimal("0.1"),
        quantity_step_text="0.01",
        price_step_text="0.1",
    )


@pytest.fixture
def eth_instrument() -> Instrument:
    return Instrument(
        instrument_id="ETH-USDT-SWAP",
        quantity_step=Decimal("0.1"),
        price_step=Decimal("0.01"),
        quantity_step_text="0.1",
        price_step_text="0.01",
    )


@pytest.fixture
def instruments_payload() -> Dict[str, Any]:
    """Mock /public/instruments response."""
    return envelope([
        {"instId": "BTC-USDT-SWAP", "lotSz": "0.01", "tickSz": "0.1"},
        {"instId": "ETH-USDT-SWAP", "lotSz": "0.1", "tickSz": "0.01"},
        {"instId": "DOGE-USDT-SWAP", "lotSz": "1", "tickSz": "0.00001"},
    ])


@pytest.fixture
def balance_payload() -> Dict[str, Any]:
    """Mock /account/balance response."""
    return envelope([{
        "totalEq": "10250.5",
        "details": [
            {"ccy": "BTC", "cashBal": "0.1", "availBal": "0.1", "upl": "0"},
            {"ccy": "USDT", "cashBal": "10000", "availBal": "8000.25", "upl": "250.5"},
        ],
    }])


@pytest.fixture
def positions_payload() -> Dict[str, Any]:
    """Mock /account/positions response; the SOL entry is flat."""
    return envelope([
        {
            "instId": "BTC-USDT-SWAP", "posSide": "long", "pos": "3", "avgPx": "64000",
            "markPx": "64500.5", "upl": "15.01", "lever": "10", "liqPx": "58000", "mgnMode": "cross",
        },
        {
            "instId": "ETH-USDT-SWAP", "posSide": "short", "pos": "-2.5", "avgPx": "3200",
            "markPx": "3150", "upl": "12.5", "lever": "5", "liqPx": "3800", "mgnMode": "isolated",
        },
        {
            "instId": "SOL-USDT-SWAP", "posSide": "long", "pos": "0", "avgPx": "",
            "markPx": "150", "upl": "0", "lever": "3", "liqPx": "", "mgnMode": "cross",
        },
    ])


@pytest.fixture
def okx_client(connection_config, btc_instrument, eth_instrument):
    """OkxClient with the HTTP layer replaced by AsyncMocks."""
    client = OkxClient(connection_config)
    client._session_manager.create_session = AsyncMock(return_value=MagicMock(name="session"))

    api = client._api_methods
    api.get_balance = AsyncMock()
    api.get_positions = AsyncMock(return_value=[])
    api.set_position_mode = AsyncMock(return_value=envelope())
    api.set_leverage = AsyncMock(return_value=envelope())
    api.place_order = AsyncMock(return_value="1001")
    api.place_algo_order = AsyncMock(return_value="2001")
    api.get_pending_orders = AsyncMock(return_value=[])
    api.get_pending_algo_orders = AsyncMock(return_value=[])
    api.cancel_order = AsyncMock(return_value=envelope())
    api.cancel_algo_order = AsyncMock(return_value=envelope())
    api.get_instruments = AsyncMock(return_value=[btc_instrument, eth_instrument])
    api.get_ticker = AsyncMock()

    yield client

    client._closed = True
