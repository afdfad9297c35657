from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional

ZERO = Decimal("0")


def _to_decimal(value: object) -> Optional[Decimal]:
    """
    Parse an int/float/str/Decimal (or anything with a numeric str()) into a Decimal.

    Returns None for missing, empty, boolean or unparsable inputs. NaN and
    infinities are returned as-is so callers can decide how to treat them.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    text = str(value).strip()
    if not text:
        return None
    try:
        if text.lower().startswith("0x"):
            return Decimal(int(text, 16))
        return Decimal(text)
    except (InvalidOperation, ValueError):
        return None


def _to_finite_decimal(value: object) -> Optional[Decimal]:
    """Parse a number and drop NaN/Infinity."""
    parsed = _to_decimal(value)
    if parsed is None or not parsed.is_finite():
        return None
    return parsed


def _to_decimal_or_zero(value: object) -> Decimal:
    parsed = _to_finite_decimal(value)
    return parsed if parsed is not None else ZERO


def _is_positive(value: Optional[Decimal]) -> bool:
    return value is not None and value.is_finite() and value > ZERO
