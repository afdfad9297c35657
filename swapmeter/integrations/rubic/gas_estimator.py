from __future__ import annotations

from typing import Any, Optional, Sequence

from swapmeter.core.networks.network_normalizer import normalize_network
from swapmeter.integrations.rubic.gas_errors import classify_gas_error
from swapmeter.integrations.rubic.gas_helpers import (
    _sanitize_usd,
    estimate_gas_price_in_usd,
    is_high_gas_price,
)
from swapmeter.integrations.rubic.gas_strategies import GasExtractionStrategy, default_strategies
from swapmeter.integrations.rubic.gas_structures import (
    GasEstimate,
    GasExtractionContext,
    GasFields,
    NativePriceProvider,
)
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)


async def _finalize(fields: GasFields, context: GasExtractionContext) -> GasEstimate:
    usd = fields.gas_price_in_usd
    if usd is None:
        usd = await estimate_gas_price_in_usd(
            context.sdk,
            context.chain,
            fields.gas_price,
            fields.gas_limit,
            is_cross_chain=context.is_cross_chain,
            native_price_provider=context.native_price_provider,
        )
    usd = _sanitize_usd(usd, context.chain, context.is_cross_chain)
    threshold_chain = fields.network or context.chain
    return GasEstimate(
        gas_price=fields.gas_price,
        gas_limit=fields.gas_limit,
        gas_price_in_usd=usd,
        is_high_gas_price=is_high_gas_price(usd, threshold_chain),
        source=fields.source,
    )


async def _run_strategies(
        strategies: Sequence[GasExtractionStrategy],
        context: GasExtractionContext,
) -> Optional[GasFields]:
    for strategy in strategies:
        if strategy.calls_sdk:
            try:
                fields = await strategy.try_extract(context)
            except Exception as exc:
                log.warning("[GAS][STRATEGY] %s failed on %s: %s", strategy.name, context.network_id, exc)
                continue
        else:
            fields = await strategy.try_extract(context)

        if fields is not None:
            log.debug("[GAS][STRATEGY] %s resolved gas data on %s.", strategy.name, context.network_id)
            return fields
    return None


async def extract_gas_estimate(
        sdk: Any,
        trade: Any,
        chain: str,
        is_cross_chain: bool,
        *,
        native_price_provider: Optional[NativePriceProvider] = None,
        strategies: Optional[Sequence[GasExtractionStrategy]] = None,
) -> GasEstimate:
    """
    Recover a best-effort gas estimate from a swap SDK trade.

    Strategies are tried in order until one yields gas data; partial results are
    completed with a USD estimate. SDK call failures are logged and skipped. Any
    other exception is mapped onto the gas error family and raised.

    Args:
        sdk: Swap SDK instance (object or mapping).
        trade: Trade object whose shape depends on the SDK release.
        chain: Source chain, any identifier accepted by the network normalizer.
        is_cross_chain: Whether the trade moves value between two chains.
        native_price_provider: Optional coroutine giving the native coin USD price.
        strategies: Override the extraction order (defaults to `default_strategies()`).
    """
    if sdk is None or trade is None:
        raise ValueError("SDK instance and trade object are required")

    context = GasExtractionContext(
        sdk=sdk,
        trade=trade,
        chain=chain,
        network_id=normalize_network(chain),
        is_cross_chain=is_cross_chain,
        native_price_provider=native_price_provider,
    )
    chain_of_strategies = list(strategies) if strategies is not None else default_strategies()

    try:
        fields = await _run_strategies(chain_of_strategies, context)
        if fields is None:
            raise ValueError(f"No gas data could be extracted for chain '{chain}'")
        estimate = await _finalize(fields, context)
    except Exception as exc:
        direction = "cross-chain" if is_cross_chain else "on-chain"
        log.error("[GAS][ESTIMATE] Error getting %s gas data on %s: %s", direction, context.network_id, exc)
        classified = classify_gas_error(exc)
        if classified is exc:
            raise
        raise classified from exc

    log.info(
        "[GAS][ESTIMATE] chain=%s cross_chain=%s source=%s usd=%s high=%s",
        context.network_id, is_cross_chain, estimate.source, estimate.gas_price_in_usd, estimate.is_high_gas_price,
    )
    return estimate


async def get_cross_chain_gas_data(
        sdk: Any,
        trade: Any,
        chain: str,
        *,
        native_price_provider: Optional[NativePriceProvider] = None,
) -> GasEstimate:
    return await extract_gas_estimate(sdk, trade, chain, True, native_price_provider=native_price_provider)


async def get_on_chain_gas_data(
        sdk: Any,
        trade: Any,
        chain: str,
        *,
        native_price_provider: Optional[NativePriceProvider] = None,
) -> GasEstimate:
    return await extract_gas_estimate(sdk, trade, chain, False, native_price_provider=native_price_provider)
