from __future__ import annotations

from typing import Dict, Optional, Tuple, Type


class GasPriceError(Exception):
    """Gas-related failure reported by the swap SDK or the RPC node."""

    default_message = "Gas price error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class InsufficientFundsGasPriceValueError(GasPriceError):
    default_message = "Insufficient funds for gas"


class LowGasError(GasPriceError):
    default_message = "Gas price is too low"


class MaxGasPriceOverflowError(GasPriceError):
    default_message = "Gas price exceeds maximum allowed"


# Typed error codes exposed by EVM client libraries, checked before any message matching.
_ERROR_CODE_CLASSES: Dict[str, Type[GasPriceError]] = {
    "INSUFFICIENT_FUNDS": InsufficientFundsGasPriceValueError,
    "REPLACEMENT_UNDERPRICED": LowGasError,
}

_MESSAGE_PATTERNS: Tuple[Tuple[Tuple[str, ...], Type[GasPriceError]], ...] = (
    (("insufficient funds", "insufficient balance"), InsufficientFundsGasPriceValueError),
    (("gas price too low", "min gas price"), LowGasError),
    (("max fee per gas", "gas price exceeds"), MaxGasPriceOverflowError),
)


def _error_message(error: BaseException) -> str:
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error)


def classify_gas_error(error: BaseException) -> BaseException:
    """
    Map an arbitrary exception onto the gas error family.

    Typed `code` attributes are consulted first; substring matching on the message is
    the last resort. Exceptions that are already gas errors, or that match no gas
    pattern, are returned unchanged.
    """
    if isinstance(error, GasPriceError):
        return error

    code = getattr(error, "code", None)
    if isinstance(code, str) and code.upper() in _ERROR_CODE_CLASSES:
        return _ERROR_CODE_CLASSES[code.upper()]()

    message = _error_message(error)
    lowered = message.lower()
    for patterns, error_class in _MESSAGE_PATTERNS:
        if any(pattern in lowered for pattern in patterns):
            return error_class()

    if "gas" in lowered:
        return GasPriceError(message)

    return error
