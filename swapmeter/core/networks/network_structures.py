from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class NetworkInfo:
    """
    Canonical registry entry for a network known to the swap UI.

    Attributes:
        network_id: Short canonical code used to key every lookup table (e.g. 'eth', 'bsc').
        slug: URL-friendly name (e.g. 'ethereum').
        name: Human-readable name.
        price_key: Identifier expected by the price API (e.g. 'binance-smart-chain').
        chain_id: EVM chain id, None for non-EVM networks.
        native_symbol: Ticker of the native coin.
        explorer_url: Base URL of the block explorer.
        aliases: Alternative spellings that resolve to this network.
    """
    network_id: str
    slug: str
    name: str
    price_key: str
    chain_id: Optional[int]
    native_symbol: str
    explorer_url: str
    aliases: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_evm(self) -> bool:
        return self.chain_id is not None
