from __future__ import annotations

from typing import Any, Optional

from swapmeter.core.utils.dict_utils import _read_path
from swapmeter.core.utils.number_utils import ZERO, _to_finite_decimal
from swapmeter.integrations.rubic.gas_constants import (
    SUMMARY_CAPPED_USD,
    SUMMARY_FALLBACK_NATIVE_PRICE_USD,
    SUMMARY_MAX_PLAUSIBLE_USD,
    SUMMARY_NEGATIVE_USD,
    WEI_PER_NATIVE_UNIT,
)
from swapmeter.integrations.rubic.gas_helpers import default_gas_usd
from swapmeter.integrations.rubic.gas_structures import GasCostSummary
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)


def _validate_usd(value: Any) -> Optional[str]:
    """Plausible USD string, or None. Absurdly large values are capped, negative ones floored."""
    number = _to_finite_decimal(value)
    if number is None:
        return None
    if number > SUMMARY_MAX_PLAUSIBLE_USD:
        return SUMMARY_CAPPED_USD
    if number < ZERO:
        return SUMMARY_NEGATIVE_USD
    return str(number)


def _default_summary(is_cross_chain: bool, chain: Optional[str]) -> GasCostSummary:
    return GasCostSummary(
        gas_price_in_usd=f"{default_gas_usd(chain, is_cross_chain):.2f}",
        gas_price_in_native=None,
        is_estimated=True,
    )


def _summary_from_trade(trade: Any, is_cross_chain: bool, chain: Optional[str]) -> GasCostSummary:
    if not is_cross_chain:
        fee_in_usd = _validate_usd(_read_path(trade, ("gasFeeInfo", "gasFeeInUsd")))
        if fee_in_usd is not None:
            return GasCostSummary(fee_in_usd, None, is_estimated=False)

    if is_cross_chain:
        for path in (("trade", "gasData", "gasPrice"), ("crossChain", "gasData", "gasPrice"), ("gasAmount",)):
            fee_in_usd = _validate_usd(_read_path(trade, path))
            if fee_in_usd is not None:
                return GasCostSummary(fee_in_usd, None, is_estimated=False)

    gas_limit = _to_finite_decimal(_read_path(trade, ("gasLimit",)))
    gas_price = _to_finite_decimal(_read_path(trade, ("gasPrice",)))
    if gas_limit and gas_price:
        cost_in_native = gas_limit * gas_price / WEI_PER_NATIVE_UNIT
        cost_in_usd = cost_in_native * SUMMARY_FALLBACK_NATIVE_PRICE_USD
        return GasCostSummary(str(cost_in_usd), str(cost_in_native), is_estimated=True)

    return _default_summary(is_cross_chain, chain)


def extract_gas_price(trade: Any, is_cross_chain: bool = False, chain: Optional[str] = None) -> GasCostSummary:
    """
    Synchronous gas cost summary for display, read from the shapes trades carried historically.

    Never raises: an empty trade yields an empty summary, anything unreadable falls back
    to the static default for the chain and direction.
    """
    if trade is None:
        return GasCostSummary(None, None, is_estimated=True)
    try:
        return _summary_from_trade(trade, is_cross_chain, chain)
    except Exception as exc:
        log.error("[GAS][SUMMARY] Error extracting gas price: %s", exc)
        return _default_summary(is_cross_chain, chain)
