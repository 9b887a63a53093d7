# -*- coding: utf-8 -*-
"""
Tests for symbol <-> instrument id mapping.
"""

import pytest

from okx_client.symbols import to_instrument_id, to_symbol


class TestSymbolMapping:

    def test_to_instrument_id(self):
        assert to_instrument_id("BTCUSDT") == "BTC-USDT-SWAP"

    def test_to_instrument_id_lowercase(self):
        assert to_instrument_id("ethusdt") == "ETH-USDT-SWAP"

    def test_to_symbol(self):
        assert to_symbol("BTC-USDT-SWAP") == "BTCUSDT"

    def test_to_symbol_lowercase(self):
        assert to_symbol("eth-usdt-swap") == "ETHUSDT"

    @pytest.mark.parametrize("malformed", ["BTCUSDT", "btc", ""])
    def test_to_symbol_malformed_returns_uppercased_input(self, malformed):
        assert to_symbol(malformed) == malformed.upper()

    @pytest.mark.parametrize("symbol", ["BTCUSDT", "ETHUSDT", "1000PEPEUSDT", "SOLUSDT"])
    def test_round_trip(self, symbol):
        assert to_symbol(to_instrument_id(symbol)) == symbol
