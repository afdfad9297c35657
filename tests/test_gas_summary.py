"""Display gas summary tests."""

from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace

import pytest

from swapmeter.integrations.rubic.gas_structures import GasCostSummary
from swapmeter.integrations.rubic.gas_summary import extract_gas_price


class _ExplodingTrade:
    @property
    def gasFeeInfo(self):
        raise RuntimeError("proxy detached")


class TestTradeFields:
    """Values read straight from the trade are not estimates."""

    def test_same_chain_fee_in_usd(self):
        trade = {"gasFeeInfo": {"gasFeeInUsd": "1.25"}}

        assert extract_gas_price(trade) == GasCostSummary("1.25", None, is_estimated=False)

    def test_same_chain_ignores_cross_chain_fields(self):
        trade = {"crossChain": {"gasData": {"gasPrice": "3.5"}}}

        summary = extract_gas_price(trade, is_cross_chain=False, chain="eth")

        assert summary.gas_price_in_usd == "8.00"
        assert summary.is_estimated is True

    @pytest.mark.parametrize("trade", [
        {"trade": {"gasData": {"gasPrice": "3.5"}}},
        SimpleNamespace(crossChain=SimpleNamespace(gasData={"gasPrice": "3.5"})),
        {"gasAmount": "3.5"},
    ])
    def test_cross_chain_paths(self, trade):
        summary = extract_gas_price(trade, is_cross_chain=True)

        assert summary.gas_price_in_usd == "3.5"
        assert summary.is_estimated is False

    def test_cross_chain_path_order(self):
        trade = {"trade": {"gasData": {"gasPrice": "1"}}, "gasAmount": "2"}

        assert extract_gas_price(trade, is_cross_chain=True).gas_price_in_usd == "1"

    def test_implausible_value_is_capped(self):
        assert extract_gas_price({"gasAmount": "5000000000"}, is_cross_chain=True).gas_price_in_usd == "20.00"

    def test_negative_value_is_floored(self):
        assert extract_gas_price({"gasFeeInfo": {"gasFeeInUsd": "-1"}}).gas_price_in_usd == "0.10"


class TestFallbacks:
    """Raw price and limit, then the static table."""

    def test_raw_limit_and_price(self):
        summary = extract_gas_price({"gasLimit": "21000", "gasPrice": "50000000000"}, is_cross_chain=True)

        assert Decimal(summary.gas_price_in_native) == Decimal("0.00105")
        assert Decimal(summary.gas_price_in_usd) == Decimal("1.89")
        assert summary.is_estimated is True

    @pytest.mark.parametrize("is_cross_chain, chain, expected", [
        (True, "eth", "25.00"),
        (False, "ethereum", "8.00"),
        (True, None, "15.00"),
        (False, "unknown-chain", "5.00"),
    ])
    def test_static_defaults(self, is_cross_chain, chain, expected):
        summary = extract_gas_price({}, is_cross_chain=is_cross_chain, chain=chain)

        assert summary == GasCostSummary(expected, None, is_estimated=True)

    def test_missing_trade(self):
        assert extract_gas_price(None) == GasCostSummary(None, None, is_estimated=True)

    def test_unreadable_trade_falls_back_to_default(self):
        summary = extract_gas_price(_ExplodingTrade(), is_cross_chain=False, chain="eth")

        assert summary.gas_price_in_usd == "8.00"
