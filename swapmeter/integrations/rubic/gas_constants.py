from decimal import Decimal
from typing import Dict, Final, Tuple

from swapmeter.configuration.config import settings

DEFAULT_GAS_LIMIT: Final[Decimal] = Decimal(int(settings.GAS_DEFAULT_LIMIT))
WEI_PER_NATIVE_UNIT: Final[Decimal] = Decimal(10) ** 18

# (cross-chain, same-chain) USD gas estimates used when no live data is recoverable.
DEFAULT_CROSS_CHAIN_GAS_USD: Final[Decimal] = Decimal("15.00")
DEFAULT_ON_CHAIN_GAS_USD: Final[Decimal] = Decimal("5.00")
DEFAULT_GAS_USD_BY_NETWORK: Final[Dict[str, Tuple[Decimal, Decimal]]] = {
    "eth": (Decimal("25.00"), Decimal("8.00")),
    "arb": (Decimal("12.00"), Decimal("1.50")),
    "op": (Decimal("12.00"), Decimal("1.50")),
    "polygon": (Decimal("10.00"), Decimal("0.50")),
    "bsc": (Decimal("10.00"), Decimal("0.50")),
    "avax": (Decimal("8.00"), Decimal("0.60")),
    "base": (Decimal("7.00"), Decimal("0.70")),
}

# USD gas cost above which a trade is flagged as expensive.
DEFAULT_HIGH_GAS_THRESHOLD_USD: Final[Decimal] = Decimal("3.0")
HIGH_GAS_THRESHOLDS_USD: Final[Dict[str, Decimal]] = {
    "eth": Decimal("12.0"),
    "arb": Decimal("3.0"),
    "op": Decimal("3.0"),
    "polygon": Decimal("1.5"),
    "bsc": Decimal("1.0"),
    "avax": Decimal("1.2"),
    "base": Decimal("1.0"),
}

# Display summary (legacy trade shapes)
SUMMARY_FALLBACK_NATIVE_PRICE_USD: Final[Decimal] = Decimal(1800)
SUMMARY_MAX_PLAUSIBLE_USD: Final[Decimal] = Decimal(1_000_000_000)
SUMMARY_CAPPED_USD: Final[str] = "20.00"
SUMMARY_NEGATIVE_USD: Final[str] = "0.10"
