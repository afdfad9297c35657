from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional, Sequence, Tuple

from swapmeter.core.utils.dict_utils import _first_present, _read_callable, _read_path
from swapmeter.core.utils.number_utils import ZERO, _is_positive, _to_decimal_or_zero, _to_finite_decimal
from swapmeter.integrations.rubic.gas_constants import DEFAULT_GAS_LIMIT
from swapmeter.integrations.rubic.gas_helpers import _maybe_await, default_gas_usd
from swapmeter.integrations.rubic.gas_structures import GasExtractionContext, GasFields
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)

_GAS_VALUE_KEYS: Tuple[str, ...] = ("gasPrice", "gasLimit", "gasPriceInUsd")


def _fields_from_gas_data(
        gas_data: Any,
        *,
        source: str,
        usd_key: str = "gasPriceInUsd",
        default_limit: Decimal = ZERO,
        network: Optional[str] = None,
) -> GasFields:
    gas_limit = _to_decimal_or_zero(_read_path(gas_data, ("gasLimit",)))
    return GasFields(
        gas_price=_to_decimal_or_zero(_read_path(gas_data, ("gasPrice",))),
        gas_limit=gas_limit if gas_limit > ZERO else default_limit,
        gas_price_in_usd=_to_finite_decimal(_read_path(gas_data, (usd_key,))),
        source=source,
        network=network,
    )


class GasExtractionStrategy:
    """
    One way of recovering gas data from a swap SDK trade.

    `try_extract` returns None when the trade does not expose the shape this strategy
    understands. Strategies with `calls_sdk` set invoke SDK code; their exceptions are
    contained by the extractor and the next strategy is tried.
    """
    name: str = "strategy"
    calls_sdk: bool = False

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        raise NotImplementedError


class DirectTradeFieldsStrategy(GasExtractionStrategy):
    """`trade.gasData` (cross-chain) or `trade.gasFeeInfo` (same-chain) with both price and limit set."""
    name = "trade_fields"

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        if context.is_cross_chain:
            container_key, usd_key = "gasData", "gasPriceInUsd"
        else:
            container_key, usd_key = "gasFeeInfo", "gasFeeInUsd"

        gas_data = _read_path(context.trade, (container_key,))
        gas_price = _to_finite_decimal(_read_path(gas_data, ("gasPrice",)))
        gas_limit = _to_finite_decimal(_read_path(gas_data, ("gasLimit",)))
        if not _is_positive(gas_price) or not _is_positive(gas_limit):
            return None

        return GasFields(
            gas_price=gas_price,
            gas_limit=gas_limit,
            gas_price_in_usd=_to_finite_decimal(_read_path(gas_data, (usd_key,))),
            source=f"{self.name}.{container_key}",
        )


class TradeCallbackStrategy(GasExtractionStrategy):
    """`trade.getGasData()`, sync or async."""
    name = "trade_callback"
    calls_sdk = True

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        get_gas_data = _read_callable(context.trade, ("getGasData",))
        if get_gas_data is None:
            return None
        gas_data = await _maybe_await(get_gas_data())
        if not gas_data:
            return None
        return _fields_from_gas_data(gas_data, source=self.name)


class ManagerEstimationStrategy(GasExtractionStrategy):
    """
    Ask the SDK manager for an estimate, feeding it the tokens and amount found on the trade.

    Cross-chain: `sdk.crossChainManager.getGasData(fromChain, toChain, fromAddress, toAddress, amount)`.
    Same-chain: `sdk.onChainManager.getGasData(chain, fromAddress, toAddress, amount)`.
    """
    name = "manager"
    calls_sdk = True

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        if context.is_cross_chain:
            return await self._cross_chain(context)
        return await self._on_chain(context)

    async def _cross_chain(self, context: GasExtractionContext) -> Optional[GasFields]:
        get_gas_data = _read_callable(context.sdk, ("crossChainManager", "getGasData"))
        if get_gas_data is None:
            return None

        trade = context.trade
        from_token = _first_present(trade, (("from",), ("trade", "from")))
        to_token = _first_present(trade, (("to",), ("trade", "to")))
        amount = _first_present(trade, (("amount",), ("trade", "amount"))) or "0"
        from_blockchain = _read_path(from_token, ("blockchain",)) or context.chain
        to_blockchain = _read_path(to_token, ("blockchain",)) or ""
        if from_token is None or to_token is None or not from_blockchain or not to_blockchain:
            return None

        gas_data = await _maybe_await(get_gas_data(
            from_blockchain,
            to_blockchain,
            _read_path(from_token, ("address",)),
            _read_path(to_token, ("address",)),
            amount,
        ))
        if not gas_data:
            return None
        return _fields_from_gas_data(gas_data, source=f"{self.name}.crossChainManager", network=str(from_blockchain))

    async def _on_chain(self, context: GasExtractionContext) -> Optional[GasFields]:
        get_gas_data = _read_callable(context.sdk, ("onChainManager", "getGasData"))
        if get_gas_data is None:
            return None

        trade = context.trade
        from_token = _read_path(trade, ("from",))
        to_token = _read_path(trade, ("to",))
        amount = _read_path(trade, ("amount",)) or "0"
        if from_token is None or to_token is None:
            return None

        gas_data = await _maybe_await(get_gas_data(
            context.chain,
            _read_path(from_token, ("address",)),
            _read_path(to_token, ("address",)),
            amount,
        ))
        if not gas_data:
            return None
        return _fields_from_gas_data(gas_data, source=f"{self.name}.onChainManager")


class SdkGasPriceStrategy(GasExtractionStrategy):
    """`sdk.getGasPrice(chain)` paired with the default gas limit."""
    name = "sdk_gas_price"
    calls_sdk = True

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        get_gas_price = _read_callable(context.sdk, ("getGasPrice",))
        if get_gas_price is None:
            return None
        gas_price = _to_finite_decimal(await _maybe_await(get_gas_price(context.chain)))
        if gas_price is None:
            return None
        return GasFields(gas_price=gas_price, gas_limit=DEFAULT_GAS_LIMIT, gas_price_in_usd=None, source=self.name)


class NestedGasDataStrategy(GasExtractionStrategy):
    """Gas data stored under the nested properties used by older SDK releases."""
    name = "nested_gas_data"

    _PATHS: Sequence[Tuple[str, ...]] = (
        ("trade", "gasData"),
        ("crossChain", "gasData"),
        ("onChainTrade", "gasData"),
        ("gasData",),
    )

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        for path in self._PATHS:
            gas_data = _read_path(context.trade, path)
            if gas_data is None:
                continue
            if all(_read_path(gas_data, (key,)) in (None, "") for key in _GAS_VALUE_KEYS):
                continue
            return _fields_from_gas_data(
                gas_data,
                source=f"{self.name}.{'.'.join(path)}",
                default_limit=DEFAULT_GAS_LIMIT,
            )
        return None


class StaticDefaultStrategy(GasExtractionStrategy):
    """Static per-chain USD estimate with whatever raw price/limit the trade carries."""
    name = "static_default"

    async def try_extract(self, context: GasExtractionContext) -> Optional[GasFields]:
        return GasFields(
            gas_price=_to_decimal_or_zero(_read_path(context.trade, ("gasPrice",))),
            gas_limit=_to_decimal_or_zero(_read_path(context.trade, ("gasLimit",))),
            gas_price_in_usd=default_gas_usd(context.chain, context.is_cross_chain),
            source=self.name,
        )


def default_strategies() -> List[GasExtractionStrategy]:
    """Extraction order, most precise source first; the last strategy always succeeds."""
    return [
        DirectTradeFieldsStrategy(),
        TradeCallbackStrategy(),
        ManagerEstimationStrategy(),
        SdkGasPriceStrategy(),
        NestedGasDataStrategy(),
        StaticDefaultStrategy(),
    ]
