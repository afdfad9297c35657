from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Awaitable, Callable, Dict, Optional

NativePriceProvider = Callable[[str], Awaitable[Decimal]]


@dataclass(frozen=True)
class GasFields:
    """
    Partial result of one extraction strategy.

    `gas_price_in_usd` is None when the source only exposes the raw price/limit;
    the USD cost is then estimated. `network` overrides the trade's chain for the
    high-gas threshold (e.g. the source chain reported by a cross-chain manager).
    """
    gas_price: Decimal
    gas_limit: Decimal
    gas_price_in_usd: Optional[Decimal]
    source: str
    network: Optional[str] = None


@dataclass(frozen=True)
class GasEstimate:
    """Best-effort gas data for a trade. `gas_price_in_usd` is always finite and non-negative."""
    gas_price: Decimal
    gas_limit: Decimal
    gas_price_in_usd: Decimal
    is_high_gas_price: bool
    source: str

    def to_plain_dict(self) -> Dict[str, Any]:
        return {
            "gasPrice": str(self.gas_price),
            "gasLimit": str(self.gas_limit),
            "gasPriceInUsd": str(self.gas_price_in_usd),
            "isHighGasPrice": self.is_high_gas_price,
            "source": self.source,
        }


@dataclass(frozen=True)
class GasCostSummary:
    """USD (and optionally native-coin) gas cost for display."""
    gas_price_in_usd: Optional[str]
    gas_price_in_native: Optional[str]
    is_estimated: bool


@dataclass(frozen=True)
class GasExtractionContext:
    """Everything a strategy may read: the SDK, the trade and the chain being traded on."""
    sdk: Any
    trade: Any
    chain: str
    network_id: str
    is_cross_chain: bool
    native_price_provider: Optional[NativePriceProvider] = None
