from __future__ import annotations

import inspect
from decimal import Decimal, InvalidOperation, Overflow, localcontext
from typing import Any, Optional

from swapmeter.core.networks.network_normalizer import normalize_network
from swapmeter.core.utils.dict_utils import _read_callable
from swapmeter.core.utils.number_utils import ZERO, _is_positive, _to_decimal, _to_finite_decimal
from swapmeter.integrations.rubic.gas_constants import (
    DEFAULT_CROSS_CHAIN_GAS_USD,
    DEFAULT_GAS_USD_BY_NETWORK,
    DEFAULT_HIGH_GAS_THRESHOLD_USD,
    DEFAULT_ON_CHAIN_GAS_USD,
    HIGH_GAS_THRESHOLDS_USD,
    WEI_PER_NATIVE_UNIT,
)
from swapmeter.integrations.rubic.gas_structures import NativePriceProvider
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)


async def _maybe_await(value: Any) -> Any:
    """SDK methods may be sync or async; resolve both the same way."""
    if inspect.isawaitable(value):
        return await value
    return value


def default_gas_usd(chain: Optional[str], is_cross_chain: bool) -> Decimal:
    """Static USD gas estimate for a chain and trade direction."""
    if chain:
        defaults = DEFAULT_GAS_USD_BY_NETWORK.get(normalize_network(chain))
        if defaults is not None:
            cross_chain_usd, on_chain_usd = defaults
            return cross_chain_usd if is_cross_chain else on_chain_usd
    return DEFAULT_CROSS_CHAIN_GAS_USD if is_cross_chain else DEFAULT_ON_CHAIN_GAS_USD


def high_gas_threshold(chain: Optional[str]) -> Decimal:
    if not chain:
        return DEFAULT_HIGH_GAS_THRESHOLD_USD
    return HIGH_GAS_THRESHOLDS_USD.get(normalize_network(chain), DEFAULT_HIGH_GAS_THRESHOLD_USD)


def is_high_gas_price(gas_price_in_usd: Any, chain: Optional[str]) -> bool:
    """True iff the USD gas cost strictly exceeds the chain's threshold."""
    usd = _to_finite_decimal(gas_price_in_usd)
    if usd is None:
        return False
    return usd > high_gas_threshold(chain)


def _sanitize_usd(value: Optional[Decimal], chain: Optional[str], is_cross_chain: bool) -> Decimal:
    """Keep the USD cost finite and non-negative."""
    if value is None or not value.is_finite():
        fallback = default_gas_usd(chain, is_cross_chain)
        log.debug("[GAS][USD] Non-finite USD cost %s replaced by default %s.", value, fallback)
        return fallback
    if value < ZERO:
        return ZERO
    return value


async def _native_coin_price(
        sdk: Any,
        chain: str,
        native_price_provider: Optional[NativePriceProvider],
) -> Optional[Decimal]:
    """Native coin USD price from the SDK price service, then from the injected provider."""
    get_native_coin_price = _read_callable(sdk, ("priceTokenService", "getNativeCoinPrice"))
    if get_native_coin_price is not None:
        try:
            price = _to_decimal(await _maybe_await(get_native_coin_price(chain)))
            if _is_positive(price):
                return price
        except Exception as exc:
            log.warning("[GAS][USD] priceTokenService.getNativeCoinPrice failed for %s: %s", chain, exc)

    if native_price_provider is not None:
        try:
            price = _to_decimal(await native_price_provider(chain))
            if _is_positive(price):
                return price
        except Exception as exc:
            log.warning("[GAS][USD] Native price provider failed for %s: %s", chain, exc)

    return None


async def estimate_gas_price_in_usd(
        sdk: Any,
        chain: str,
        gas_price: Decimal,
        gas_limit: Decimal,
        *,
        is_cross_chain: bool = True,
        native_price_provider: Optional[NativePriceProvider] = None,
) -> Decimal:
    """
    Convert a gas price (wei) and limit into a USD cost.

    cost = gas_price * gas_limit / 10^18 * native coin USD price. When no positive
    native price is available, the static default for the chain is returned.
    """
    native_price = await _native_coin_price(sdk, chain, native_price_provider)
    if native_price is not None:
        with localcontext() as ctx:
            # absurd trade values saturate to Infinity/NaN; _sanitize_usd replaces them
            ctx.traps[Overflow] = False
            ctx.traps[InvalidOperation] = False
            cost_in_native = gas_price * gas_limit / WEI_PER_NATIVE_UNIT
            cost_in_usd = cost_in_native * native_price
        log.debug(
            "[GAS][USD] chain=%s gas_price=%s gas_limit=%s native_usd=%s -> $%s",
            chain, gas_price, gas_limit, native_price, cost_in_usd,
        )
        return cost_in_usd

    fallback = default_gas_usd(chain, is_cross_chain)
    log.debug("[GAS][USD] No native price for %s, using static default $%s.", chain, fallback)
    return fallback
