from __future__ import annotations

from typing import Optional

from swapmeter.configuration.config import settings
from swapmeter.core.networks.network_registry import (
    CANONICAL_ID_PATTERN,
    NETWORKS_BY_ALIAS,
    NETWORKS_BY_FUZZY_KEY,
    NETWORKS_BY_ID,
    _fuzzy_key,
    _lookup_key,
)
from swapmeter.core.networks.network_structures import NetworkInfo
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)


def _resolve_network_id(value: str) -> str:
    lowered = value.strip().lower()
    if CANONICAL_ID_PATTERN.match(lowered) and lowered in NETWORKS_BY_ID:
        return lowered

    key = _lookup_key(value)
    network = NETWORKS_BY_ALIAS.get(key)
    if network is not None:
        return network.network_id

    network = NETWORKS_BY_FUZZY_KEY.get(_fuzzy_key(value))
    if network is not None:
        return network.network_id

    log.warning("[NETWORK][NORMALIZE] Unknown network '%s', using heuristic form '%s'.", value, key)
    return key


def normalize_network(value: Optional[str]) -> str:
    """
    Convert any network identifier (id, slug, name, alias, SDK constant) into the canonical short id.

    Resolution order:
        1. Already a canonical id (strict lowercase/digit/hyphen pattern) -> unchanged.
        2. Exact alias lookup after collapsing spaces/underscores into hyphens.
        3. Alias lookup ignoring all separators.
        4. Heuristic: lowercased input with underscores replaced by hyphens.

    Never raises. Blank input and unexpected internal failures resolve to
    `settings.DEFAULT_NETWORK_ID`.
    """
    if value is None or not str(value).strip():
        log.debug("[NETWORK][NORMALIZE] Blank network, defaulting to '%s'.", settings.DEFAULT_NETWORK_ID)
        return settings.DEFAULT_NETWORK_ID
    try:
        resolved = _resolve_network_id(str(value))
    except Exception as exc:
        log.error("[NETWORK][NORMALIZE] Failed to normalize '%s' (%s), defaulting to '%s'.",
                  value, exc, settings.DEFAULT_NETWORK_ID)
        return settings.DEFAULT_NETWORK_ID
    return resolved or settings.DEFAULT_NETWORK_ID


def get_network_info(value: Optional[str]) -> Optional[NetworkInfo]:
    """Return the registry entry for any network identifier, None if unknown."""
    if value is None or not str(value).strip():
        return None
    return NETWORKS_BY_ID.get(normalize_network(value))


def to_price_network(value: Optional[str]) -> str:
    """
    Map any network identifier to the price API vocabulary.

    Example: 'BNB-Chain' -> 'bsc' -> 'binance-smart-chain'.
    Unknown networks pass through in their heuristic normalized form.
    """
    network_id = normalize_network(value)
    network = NETWORKS_BY_ID.get(network_id)
    if network is None:
        return network_id
    if network.price_key != network_id:
        log.debug("[NETWORK][PRICE_KEY] '%s' -> '%s' -> '%s'", value, network_id, network.price_key)
    return network.price_key


def get_network_slug(value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        return ""
    network = get_network_info(value)
    return network.slug if network else normalize_network(value)


def get_network_name(value: Optional[str]) -> str:
    if value is None or not str(value).strip():
        return ""
    network = get_network_info(value)
    return network.name if network else normalize_network(value)


def get_network_chain_id(value: Optional[str]) -> Optional[int]:
    network = get_network_info(value)
    return network.chain_id if network else None


def is_same_network(left: Optional[str], right: Optional[str]) -> bool:
    """True when both identifiers resolve to the same canonical network."""
    if not left or not right:
        return False
    return normalize_network(left) == normalize_network(right)


_DEFAULT_EXPLORER_URL = "https://etherscan.io"


def get_explorer_url(value: Optional[str]) -> str:
    network = get_network_info(value)
    return network.explorer_url if network else _DEFAULT_EXPLORER_URL


def get_address_explorer_url(value: Optional[str], address: str) -> str:
    base_url = get_explorer_url(value)
    return f"{base_url}/address/{address}" if address else base_url


def get_tx_explorer_url(value: Optional[str], tx_hash: str) -> str:
    base_url = get_explorer_url(value)
    return f"{base_url}/tx/{tx_hash}" if tx_hash else base_url


def get_token_explorer_url(value: Optional[str], token_address: str) -> str:
    base_url = get_explorer_url(value)
    return f"{base_url}/token/{token_address}" if token_address else base_url
