"""Swap error presentation tests."""

from __future__ import annotations

import pytest

from swapmeter.integrations.rubic.swap_errors import (
    SwapErrorMessage,
    describe_swap_error,
    format_error,
    is_user_rejection_error,
)


# Stand-ins named like the swap SDK's error classes.
class RubicSdkError(Exception):
    pass


class InsufficientFundsError(RubicSdkError):
    pass


class TooLowAmountError(RubicSdkError):
    pass


class WalletNotConnectedError(RubicSdkError):
    pass


class CrossChainIsUnavailableError(RubicSdkError):
    pass


class _ProviderError(Exception):
    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


class TestDescribeSdkErrors:
    """SDK error classes are recognized by name, including subclasses."""

    def test_insufficient_funds(self):
        described = describe_swap_error(InsufficientFundsError())

        assert described.title == "Insufficient Funds"
        assert described.is_warning is True

    def test_subclass_is_recognized(self):
        class PolygonInsufficientFundsError(InsufficientFundsError):
            pass

        assert describe_swap_error(PolygonInsufficientFundsError()).title == "Insufficient Funds"

    def test_alternate_names(self):
        assert describe_swap_error(TooLowAmountError()).title == "Amount Too Low"
        assert describe_swap_error(WalletNotConnectedError()).title == "Wallet Not Connected"

    def test_other_sdk_error(self):
        described = describe_swap_error(CrossChainIsUnavailableError("Provider is unavailable"))

        assert described == SwapErrorMessage("Swap Error", "Provider is unavailable", False)


class TestDescribeByMessage:
    """Plain errors are classified by message, first match wins."""

    @pytest.mark.parametrize("message, title", [
        ("MetaMask Tx Signature: User denied transaction signature.", "Transaction Rejected"),
        ("gas required exceeds allowance limit", "Gas Limit Error"),
        ("nonce too low", "Nonce Error"),
        ("insufficient funds for transfer", "Insufficient Funds"),
        ("execution reverted: STF", "Transaction Reverted"),
        ("Network disconnected", "Network Error"),
        ("Request timeout after 30s", "Request Timeout"),
        ("Return amount is not enough, increase slippage", "Slippage Error"),
        ("CORS request blocked", "API Error"),
    ])
    def test_patterns(self, message, title):
        described = describe_swap_error(RuntimeError(message))

        assert described.title == title
        assert described.is_warning is True

    def test_unmatched_message(self):
        assert describe_swap_error(RuntimeError("something odd")) == SwapErrorMessage(
            "Transaction Error", "something odd", False,
        )

    def test_not_an_exception(self):
        described = describe_swap_error("oops")

        assert described.title == "Error"
        assert described.message == "An unknown error occurred. Please try again."


class TestFormatError:

    def test_prefixes_are_stripped(self):
        assert format_error("Error: MetaMask: something went wrong") == "Something went wrong"
        assert format_error("WalletConnect: session expired") == "Session expired"

    def test_hex_blobs_are_masked(self):
        assert format_error(RuntimeError("failed for 0xc02aaa39b223fe8d")) == "Failed for [address]"

    def test_urls_are_removed(self):
        formatted = format_error("see https://docs.example.com/errors#42 for details")

        assert "https://" not in formatted
        assert formatted.startswith("See")

    def test_mappings(self):
        assert format_error({"message": "user denied"}) == "User denied"
        assert format_error({"reason": "execution reverted"}) == "Execution reverted"
        assert format_error({"status": 500}) == '{"status": 500}'

    @pytest.mark.parametrize("error", [None, "", {}, 42])
    def test_unknown(self, error):
        assert format_error(error) == "Unknown error"


class TestUserRejection:

    @pytest.mark.parametrize("error", [
        {"code": 4001},
        {"message": "Rejected by user"},
        RuntimeError("User denied transaction signature"),
        _ProviderError("request failed", 4001),
        "user cancelled",
    ])
    def test_rejections(self, error):
        assert is_user_rejection_error(error) is True

    @pytest.mark.parametrize("error", [
        None,
        {"code": -32603, "message": "Internal JSON-RPC error"},
        RuntimeError("execution reverted"),
        _ProviderError("rate limited", 429),
    ])
    def test_other_errors(self, error):
        assert is_user_rejection_error(error) is False
