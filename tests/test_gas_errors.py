"""Gas error classification tests."""

from __future__ import annotations

import pytest

from swapmeter.integrations.rubic.gas_errors import (
    GasPriceError,
    InsufficientFundsGasPriceValueError,
    LowGasError,
    MaxGasPriceOverflowError,
    classify_gas_error,
)


class _RpcError(Exception):
    """Error shaped like the ones EVM client libraries raise: a `code` and a `message`."""

    def __init__(self, message: str, code=None) -> None:
        super().__init__(f"RPC failure ({code})")
        self.message = message
        self.code = code


class TestTypedCodes:
    """Typed error codes are checked before any message matching."""

    def test_insufficient_funds_code(self):
        error = _RpcError("gas price too low", code="INSUFFICIENT_FUNDS")

        assert isinstance(classify_gas_error(error), InsufficientFundsGasPriceValueError)

    def test_code_is_case_insensitive(self):
        assert isinstance(classify_gas_error(_RpcError("", code="insufficient_funds")),
                          InsufficientFundsGasPriceValueError)

    def test_replacement_underpriced_code(self):
        assert isinstance(classify_gas_error(_RpcError("rejected", code="REPLACEMENT_UNDERPRICED")), LowGasError)

    def test_numeric_code_is_ignored(self):
        error = _RpcError("max fee per gas less than block base fee", code=-32000)

        assert isinstance(classify_gas_error(error), MaxGasPriceOverflowError)


class TestMessagePatterns:
    """Substring matching on the lowercased message."""

    @pytest.mark.parametrize("message, expected", [
        ("Insufficient funds for gas * price + value", InsufficientFundsGasPriceValueError),
        ("INSUFFICIENT BALANCE for transfer", InsufficientFundsGasPriceValueError),
        ("Gas price too low to replace", LowGasError),
        ("transaction underpriced: min gas price not met", LowGasError),
        ("max fee per gas less than block base fee", MaxGasPriceOverflowError),
        ("gas price exceeds the configured cap", MaxGasPriceOverflowError),
    ])
    def test_patterns(self, message, expected):
        assert type(classify_gas_error(RuntimeError(message))) is expected

    def test_message_attribute_is_preferred(self):
        assert isinstance(classify_gas_error(_RpcError("insufficient funds")), InsufficientFundsGasPriceValueError)

    def test_other_gas_message_keeps_text(self):
        classified = classify_gas_error(RuntimeError("intrinsic gas too low"))

        assert type(classified) is GasPriceError
        assert str(classified) == "intrinsic gas too low"


class TestPassThrough:
    """Errors are never wrapped twice, and unrelated errors are left alone."""

    def test_gas_error_is_returned_as_is(self):
        error = LowGasError("custom")

        assert classify_gas_error(error) is error

    def test_unrelated_error_is_returned_as_is(self):
        error = ConnectionError("connection reset by peer")

        assert classify_gas_error(error) is error

    def test_default_messages(self):
        assert str(GasPriceError()) == "Gas price error"
        assert str(InsufficientFundsGasPriceValueError()) == "Insufficient funds for gas"
        assert str(LowGasError()) == "Gas price is too low"
        assert str(MaxGasPriceOverflowError()) == "Gas price exceeds maximum allowed"
