# -*- coding: utf-8 -*-
"""
Tests for data models and configuration validation.
"""

import dataclasses

import pytest

from okx_client.models import (
    ApiResponse,
    CancelSummary,
    ConnectionConfig,
    MarginMode,
    OrderRequest,
    OrderSide,
    OrderType,
    PositionSide,
)


def market_order(**overrides) -> OrderRequest:
    fields = dict(
        instrument_id="BTC-USDT-SWAP",
        side=OrderSide.SELL,
        position_side=PositionSide.LONG,
        order_type=OrderType.MARKET,
        quantity="0.03",
        margin_mode=MarginMode.ISOLATED,
    )
    fields.update(overrides)
    return OrderRequest(**fields)


class TestOrderRequest:

    def test_market_payload(self):
        assert market_order().to_payload() == {
            "instId": "BTC-USDT-SWAP",
            "tdMode": "isolated",
            "side": "sell",
            "posSide": "long",
            "ordType": "market",
            "sz": "0.03",
        }

    def test_reduce_only_flag(self):
        assert market_order(reduce_only=True).to_payload()["reduceOnly"] is True

    def test_trigger_payload_executes_at_market(self):
        payload = market_order(order_type=OrderType.TRIGGER, trigger_price="61000.1").to_payload()

        assert payload["ordType"] == "trigger"
        assert payload["triggerPx"] == "61000.1"
        assert payload["orderPx"] == "-1"

    def test_trigger_without_price(self):
        with pytest.raises(ValueError):
            market_order(order_type=OrderType.TRIGGER).to_payload()

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            market_order().quantity = "1"


class TestEnums:

    @pytest.mark.parametrize("value, expected", [
        (True, MarginMode.CROSS),
        (False, MarginMode.ISOLATED),
        ("cross", MarginMode.CROSS),
        ("ISOLATED", MarginMode.ISOLATED),
        (MarginMode.CROSS, MarginMode.CROSS),
    ])
    def test_margin_mode_parse(self, value, expected):
        assert MarginMode.parse(value) is expected

    def test_margin_mode_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            MarginMode.parse("portfolio")

    @pytest.mark.parametrize("value, expected", [
        ("long", PositionSide.LONG),
        ("SHORT", PositionSide.SHORT),
        ("Long", PositionSide.LONG),
    ])
    def test_position_side_parse(self, value, expected):
        assert PositionSide.parse(value) is expected

    def test_position_side_parse_rejects_unknown(self):
        with pytest.raises(ValueError):
            PositionSide.parse("both")

    def test_order_sides(self):
        assert PositionSide.LONG.open_side is OrderSide.BUY
        assert PositionSide.LONG.close_side is OrderSide.SELL
        assert PositionSide.SHORT.open_side is OrderSide.SELL
        assert PositionSide.SHORT.close_side is OrderSide.BUY


class TestApiResponse:

    def test_parses_each_item(self):
        response = ApiResponse.from_payload(
            {"code": "0", "msg": "", "data": [{"v": 1}, {"v": 2}, "junk"]},
            lambda item: item["v"],
        )

        assert response.code == "0"
        assert response.data == [1, 2]
        assert response.first == 1

    def test_missing_data(self):
        response = ApiResponse.from_payload({"code": "0"}, dict)

        assert response.data == []
        with pytest.raises(IndexError):
            response.first

    def test_single_object_data(self):
        response = ApiResponse.from_payload({"code": "0", "data": {"ts": "1"}}, dict)

        assert response.data == [{"ts": "1"}]


class TestCancelSummary:

    def test_success(self):
        assert CancelSummary("BTCUSDT", cancelled_orders=["1"]).success
        assert not CancelSummary("BTCUSDT", failures=["cancel order 1: boom"]).success


class TestConnectionConfig:

    def test_defaults(self, connection_config):
        assert connection_config.base_url == "https://www.okx.com"
        assert connection_config.timeout == 15.0
        assert connection_config.simulated is False
        assert connection_config.instrument_type == "SWAP"

    @pytest.mark.parametrize("field, value, message", [
        ("api_key", "", "API key"),
        ("api_secret", "", "API secret"),
        ("passphrase", "", "passphrase"),
        ("base_url", "www.okx.com", "Base URL"),
        ("timeout", 0, "Timeout"),
        ("timeout", -1.5, "Timeout"),
    ])
    def test_validation(self, connection_config, field, value, message):
        with pytest.raises(ValueError, match=message):
            dataclasses.replace(connection_config, **{field: value})
