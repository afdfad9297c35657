from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional, Union

from swapmeter.core.utils.number_utils import _to_decimal

Amount = Union[str, int, float, Decimal, None]

_MAX_SMALL_AMOUNT_PRECISION = 10


def _tail(address: str, n: int = 6) -> str:
    """Return the last n characters of a lowercased address (for concise logs)."""
    addr = (address or "").lower()
    return addr[-n:] if len(addr) >= n else addr


def _grouped(value: Decimal, places: int) -> str:
    """Round half-up to a fixed number of places and add thousands separators."""
    if value.as_tuple().exponent < -places:
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
            value = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return f"{value:,.{places}f}"


def _parse_display_amount(amount: Amount) -> Optional[Decimal]:
    """Finite, non-zero amount or None; parsed before any comparison so signaling NaNs never raise."""
    parsed = _to_decimal(amount)
    if parsed is None or not parsed.is_finite() or parsed.is_zero():
        return None
    return parsed


def format_token_amount(amount: Amount, decimals: int = 6) -> str:
    """
    Format a token amount with thousands separators and `decimals` places.

    Amounts smaller than one unit of the last displayed place keep at least two
    significant digits so they never render as zero.
    """
    parsed = _parse_display_amount(amount)
    if parsed is None:
        return "0"

    smallest_shown = Decimal(1).scaleb(-decimals)
    if Decimal(0) < parsed < smallest_shown:
        fraction = format(parsed.copy_abs(), "f").partition(".")[2]
        if fraction:
            leading_zeros = len(fraction) - len(fraction.lstrip("0"))
            precision = min(leading_zeros + 2, _MAX_SMALL_AMOUNT_PRECISION)
            return _grouped(parsed, precision)

    return _grouped(parsed, decimals)


def format_usd_price(amount: Amount) -> str:
    """Format a USD amount with a '$' prefix and magnitude-dependent precision."""
    parsed = _parse_display_amount(amount)
    if parsed is None:
        return "$0.00"
    if parsed >= Decimal(1_000_000):
        return "$" + _grouped(parsed, 0)
    if parsed >= Decimal(1):
        return "$" + _grouped(parsed, 2)
    if parsed > Decimal(0):
        if parsed < Decimal("0.001"):
            return "$<0.001"
        return "$" + _grouped(parsed, 3)
    return "$0.00"


def format_gas_price(gas_price_in_usd: Amount) -> str:
    """Format an estimated gas cost for display, '~$N/A' when it cannot be shown."""
    price = _to_decimal(gas_price_in_usd)
    if price is None or not price.is_finite():
        return "~$N/A"

    if price < Decimal("0.01"):
        return "<$0.01"
    if price < Decimal(10):
        return f"~${price.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)}"
    if price < Decimal(100):
        return f"~${price.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}"
    if price > Decimal(1_000_000):
        return "~$N/A"
    return f"~${price.quantize(Decimal('1'), rounding=ROUND_HALF_UP)}"


def truncate_address(address: str, prefix_length: int = 6, suffix_length: int = 4) -> str:
    """Shorten an address to '0x1234...abcd' for display."""
    if not address:
        return ""
    if len(address) <= prefix_length + suffix_length:
        return address
    return f"{address[:prefix_length]}...{address[-suffix_length:]}"
