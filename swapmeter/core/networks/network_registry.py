from __future__ import annotations

import re
from typing import Dict, List, Optional

from swapmeter.core.networks.network_structures import NetworkInfo

CANONICAL_ID_PATTERN = re.compile(r"^[a-z0-9-]+$")
_SEPARATORS = re.compile(r"[\s_]+")
_FUZZY_STRIP = re.compile(r"[\s\-_]+")

_NETWORKS: List[NetworkInfo] = [
    NetworkInfo("eth", "ethereum", "Ethereum", "ethereum", 1, "ETH", "https://etherscan.io",
                ("ethereum", "ethereum-network", "ethereum-mainnet", "mainnet")),
    NetworkInfo("bsc", "bsc", "Binance Smart Chain", "binance-smart-chain", 56, "BNB", "https://bscscan.com",
                ("binance-smart-chain", "bnb-chain", "binance", "bnb smart chain", "bsc-mainnet", "bnb")),
    NetworkInfo("polygon", "polygon", "Polygon", "polygon", 137, "MATIC", "https://polygonscan.com",
                ("matic", "polygon-pos", "polygon-network", "polygon-mainnet")),
    NetworkInfo("avax", "avalanche", "Avalanche", "avalanche", 43114, "AVAX", "https://snowtrace.io",
                ("avalanche", "avalanche-network", "avalanche-c")),
    NetworkInfo("arb", "arbitrum", "Arbitrum", "arbitrum", 42161, "ETH", "https://arbiscan.io",
                ("arbitrum", "arbitrum-one")),
    NetworkInfo("op", "optimism", "Optimism", "optimistic-ethereum", 10, "ETH", "https://optimistic.etherscan.io",
                ("optimism", "optimistic-ethereum", "optimism-mainnet")),
    NetworkInfo("ftm", "fantom", "Fantom", "fantom", 250, "FTM", "https://ftmscan.com",
                ("fantom", "fantom-opera")),
    NetworkInfo("base", "base", "Base", "base", 8453, "ETH", "https://basescan.org",
                ("base-network", "base-chain")),
    NetworkInfo("zksync", "zksync-era", "zkSync Era", "zksync", 324, "ETH", "https://explorer.zksync.io",
                ("zksync-era", "zk-sync", "era")),
    NetworkInfo("linea", "linea", "Linea", "linea", 59144, "ETH", "https://lineascan.build"),
    NetworkInfo("scroll", "scroll", "Scroll", "scroll", 534352, "ETH", "https://scrollscan.com"),
    NetworkInfo("blast", "blast", "Blast", "blast", 81457, "ETH", "https://blastscan.io"),
    NetworkInfo("polygonzk", "polygon-zkevm", "Polygon zkEVM", "polygon-zkevm", 1101, "ETH",
                "https://zkevm.polygonscan.com", ("polygon-zk-evm",)),
    NetworkInfo("cro", "cronos", "Cronos", "cronos", 25, "CRO", "https://cronoscan.com"),
    NetworkInfo("gno", "gnosis", "Gnosis", "xdai", 100, "xDAI", "https://gnosisscan.io", ("xdai",)),
    NetworkInfo("mantle", "mantle", "Mantle", "mantle", 5000, "MNT", "https://explorer.mantle.xyz"),
    NetworkInfo("celo", "celo", "Celo", "celo", 42220, "CELO", "https://celoscan.io"),
    NetworkInfo("kava", "kava", "Kava", "kava", 2222, "KAVA", "https://kavascan.com"),
    NetworkInfo("metis", "metis", "Metis", "metis", 1088, "METIS", "https://andromeda-explorer.metis.io"),
    NetworkInfo("moonbeam", "moonbeam", "Moonbeam", "moonbeam", 1284, "GLMR", "https://moonscan.io"),
    NetworkInfo("moonriver", "moonriver", "Moonriver", "moonriver", 1285, "MOVR", "https://moonriver.moonscan.io"),
    NetworkInfo("aurora", "aurora", "Aurora", "aurora", 1313161554, "ETH", "https://aurorascan.dev"),
    NetworkInfo("sol", "solana", "Solana", "solana", None, "SOL", "https://solscan.io"),
    NetworkInfo("trx", "tron", "Tron", "tron", None, "TRX", "https://tronscan.org"),
]


def _lookup_key(value: str) -> str:
    """Lowercase, trim and collapse spaces/underscores into hyphens."""
    return _SEPARATORS.sub("-", value.strip().lower())


def _fuzzy_key(value: str) -> str:
    return _FUZZY_STRIP.sub("", value.strip().lower())


def _build_indexes() -> tuple[Dict[str, NetworkInfo], Dict[str, NetworkInfo], Dict[str, NetworkInfo]]:
    by_id: Dict[str, NetworkInfo] = {}
    by_alias: Dict[str, NetworkInfo] = {}
    by_fuzzy: Dict[str, NetworkInfo] = {}
    for network in _NETWORKS:
        by_id[network.network_id] = network
    for network in _NETWORKS:
        spellings = (network.slug, network.name, network.price_key, *network.aliases)
        for spelling in spellings:
            key = _lookup_key(spelling)
            # canonical ids always win over another network's alias
            if key in by_id and by_id[key] is not network:
                continue
            by_alias.setdefault(key, network)
        for spelling in (network.network_id, *spellings):
            by_fuzzy.setdefault(_fuzzy_key(spelling), network)
    return by_id, by_alias, by_fuzzy


NETWORKS_BY_ID, NETWORKS_BY_ALIAS, NETWORKS_BY_FUZZY_KEY = _build_indexes()


def find_network(network_id: str) -> Optional[NetworkInfo]:
    """Return the registry entry for a canonical id, None if unknown."""
    return NETWORKS_BY_ID.get(network_id)


def all_networks() -> List[NetworkInfo]:
    return list(_NETWORKS)
