from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Mapping, Optional, Set, Tuple

_USER_REJECTION_PATTERNS: Tuple[str, ...] = ("user rejected", "user denied", "rejected by user", "user cancelled")
_USER_REJECTED_REQUEST_CODE = 4001


@dataclass(frozen=True)
class SwapErrorMessage:
    title: str
    message: str
    is_warning: bool = False


_UNKNOWN_ERROR = SwapErrorMessage("Error", "An unknown error occurred. Please try again.", False)

# SDK error classes are matched by name so the SDK does not need to be importable here.
_SDK_ERROR_MESSAGES: Tuple[Tuple[Tuple[str, ...], SwapErrorMessage], ...] = (
    (("InsufficientFundsError",), SwapErrorMessage(
        "Insufficient Funds", "You don't have enough balance to complete this swap.", True)),
    (("InsufficientLiquidityError",), SwapErrorMessage(
        "Insufficient Liquidity",
        "Not enough liquidity available for this swap amount. Try a smaller amount or different token pair.", True)),
    (("LowSlippageDeflationaryTokenError",), SwapErrorMessage(
        "Slippage Too Low", "This token has a transfer fee. Please increase slippage tolerance.", True)),
    (("MaxAmountError",), SwapErrorMessage(
        "Amount Too High", "The swap amount is too high. Please try a smaller amount.", True)),
    (("MinAmountError", "TooLowAmountError"), SwapErrorMessage(
        "Amount Too Low", "The swap amount is below the minimum required. Please increase the amount.", True)),
    (("UpdatedRatesError",), SwapErrorMessage(
        "Rates Updated", "Market rates changed. Please get a new quote and try again.", True)),
    (("WalletNotConnectedError", "NoLinkedAccountError"), SwapErrorMessage(
        "Wallet Not Connected", "Please connect your wallet to continue.", True)),
)
_SDK_BASE_ERROR = "RubicSdkError"


def _error_class_names(error: BaseException) -> Set[str]:
    return {cls.__name__ for cls in type(error).__mro__}


def _message_rule(lowered: str) -> Optional[SwapErrorMessage]:
    if "user rejected" in lowered or "user denied" in lowered:
        return SwapErrorMessage(
            "Transaction Rejected", "You rejected the transaction. Please try again if this was not intended.", True)
    if "gas" in lowered and "limit" in lowered:
        return SwapErrorMessage(
            "Gas Limit Error",
            "The gas limit for this transaction is too low or too high. Try adjusting your settings.", True)
    if "nonce" in lowered:
        return SwapErrorMessage(
            "Nonce Error",
            "Transaction nonce error. Try resetting your wallet's transaction history or wait for pending transactions.",
            True)
    if "insufficient funds" in lowered:
        return SwapErrorMessage(
            "Insufficient Funds", "You don't have enough funds to cover gas fees for this transaction.", True)
    if "rejected" in lowered or "reverted" in lowered:
        return SwapErrorMessage(
            "Transaction Reverted",
            "The transaction was rejected by the blockchain. This could be due to network congestion or contract errors.",
            True)
    if "network" in lowered or "disconnect" in lowered:
        return SwapErrorMessage(
            "Network Error", "Network connection issue. Please check your internet connection and try again.", True)
    if "timeout" in lowered:
        return SwapErrorMessage(
            "Request Timeout", "The request timed out. The network might be congested. Please try again later.", True)
    if "slippage" in lowered:
        return SwapErrorMessage(
            "Slippage Error",
            "Transaction would result in too much slippage. "
            "Try increasing your slippage tolerance or use a smaller amount.", True)
    if "api" in lowered or "cors" in lowered:
        return SwapErrorMessage(
            "API Error", "Error connecting to one of our services. Please try again later.", True)
    return None


def describe_swap_error(error: object) -> SwapErrorMessage:
    """Title, user-facing message and severity for an error raised while quoting or executing a swap."""
    if not isinstance(error, BaseException):
        return _UNKNOWN_ERROR

    class_names = _error_class_names(error)
    for names, described in _SDK_ERROR_MESSAGES:
        if class_names.intersection(names):
            return described
    if _SDK_BASE_ERROR in class_names:
        return SwapErrorMessage("Swap Error", str(error), False)

    described = _message_rule(str(error).lower())
    if described is not None:
        return described
    return SwapErrorMessage("Transaction Error", str(error), False)


def _clean_error_message(message: str) -> str:
    message = re.sub(r"^Error: ", "", message, flags=re.IGNORECASE)
    message = re.sub(r"^Exception: ", "", message, flags=re.IGNORECASE)
    message = re.sub(r"^MetaMask: ", "", message, flags=re.IGNORECASE)
    message = re.sub(r"^WalletConnect: ", "", message, flags=re.IGNORECASE)
    message = re.sub(r"0x[a-fA-F0-9]{8,}", "[address]", message)
    message = re.sub(r"https?://\S+", "", message)
    return message[:1].upper() + message[1:]


def format_error(error: object) -> str:
    """Short, display-safe description of an error, string or error-like mapping."""
    if not error:
        return "Unknown error"
    if isinstance(error, str):
        return _clean_error_message(error)
    if isinstance(error, BaseException):
        return _clean_error_message(str(error))
    if isinstance(error, Mapping):
        for key in ("message", "reason", "description"):
            value = error.get(key)
            if value:
                return _clean_error_message(str(value))
        try:
            return _clean_error_message(json.dumps(error, default=str))
        except (TypeError, ValueError):
            return "Unknown error object"
    return "Unknown error"


def is_user_rejection_error(error: object) -> bool:
    """True when the wallet user declined the request (message patterns or EIP-1193 code 4001)."""
    if not error:
        return False
    if isinstance(error, Mapping):
        if error.get("code") == _USER_REJECTED_REQUEST_CODE:
            return True
        message = error.get("message")
    elif isinstance(error, BaseException):
        if getattr(error, "code", None) == _USER_REJECTED_REQUEST_CODE:
            return True
        message = str(error)
    else:
        message = error if isinstance(error, str) else None

    if not isinstance(message, str):
        return False
    lowered = message.lower()
    return any(pattern in lowered for pattern in _USER_REJECTION_PATTERNS)
