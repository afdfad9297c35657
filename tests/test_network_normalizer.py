"""Network identifier normalization tests."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from swapmeter.core.networks import network_normalizer
from swapmeter.core.networks.network_normalizer import (
    get_address_explorer_url,
    get_explorer_url,
    get_network_chain_id,
    get_network_info,
    get_network_name,
    get_network_slug,
    get_token_explorer_url,
    get_tx_explorer_url,
    is_same_network,
    normalize_network,
    to_price_network,
)
from swapmeter.core.networks.network_registry import CANONICAL_ID_PATTERN, all_networks, find_network


class TestNormalizeNetwork:
    """Any spelling resolves to one canonical short id."""

    @pytest.mark.parametrize("value, expected", [
        ("eth", "eth"),
        ("ETH", "eth"),
        ("ethereum", "eth"),
        ("Ethereum", "eth"),
        ("ETHEREUM", "eth"),
        ("bsc", "bsc"),
        ("BSC", "bsc"),
        ("BNB-Chain", "bsc"),
        ("binance-smart-chain", "bsc"),
        ("BINANCE_SMART_CHAIN", "bsc"),
        ("BNB Smart Chain", "bsc"),
        ("binance", "bsc"),
        ("matic", "polygon"),
        ("POLYGON", "polygon"),
        ("avalanche", "avax"),
        ("arbitrum", "arb"),
        ("optimism", "op"),
        ("optimistic-ethereum", "op"),
        ("fantom", "ftm"),
        ("zksync-era", "zksync"),
        ("ZK_SYNC", "zksync"),
        ("POLYGON_ZKEVM", "polygonzk"),
        ("xdai", "gno"),
        ("  base  ", "base"),
    ])
    def test_known_spellings(self, value, expected):
        assert normalize_network(value) == expected

    def test_idempotent_for_every_registered_network(self):
        for network in all_networks():
            assert normalize_network(network.network_id) == network.network_id
            assert normalize_network(normalize_network(network.name)) == network.network_id

    def test_unknown_network_uses_heuristic_form(self):
        """Unknown identifiers are lowercased with underscores turned into hyphens."""
        assert normalize_network("Some_New_Chain") == "some-new-chain"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_blank_input_falls_back_to_default(self, value):
        assert normalize_network(value) == "eth"

    def test_internal_failure_falls_back_to_default(self):
        with patch.object(network_normalizer, "_resolve_network_id", side_effect=RuntimeError("boom")):
            assert normalize_network("polygon") == "eth"

    def test_result_is_always_canonical_for_registered_networks(self):
        for network in all_networks():
            for alias in network.aliases:
                assert CANONICAL_ID_PATTERN.match(normalize_network(alias))


class TestPriceNetwork:
    """Translation into the price API vocabulary."""

    @pytest.mark.parametrize("value, expected", [
        ("BNB-Chain", "binance-smart-chain"),
        ("bsc", "binance-smart-chain"),
        ("eth", "ethereum"),
        ("ethereum", "ethereum"),
        ("matic", "polygon"),
        ("op", "optimistic-ethereum"),
        ("avax", "avalanche"),
        ("gnosis", "xdai"),
    ])
    def test_price_keys(self, value, expected):
        assert to_price_network(value) == expected

    def test_unknown_network_passes_through(self):
        assert to_price_network("Some_New_Chain") == "some-new-chain"


class TestRegistryLookups:
    """Display and explorer helpers built on the registry."""

    def test_network_info(self):
        info = get_network_info("bnb-chain")

        assert info is not None
        assert info.network_id == "bsc"
        assert info.chain_id == 56
        assert info.native_symbol == "BNB"
        assert info.is_evm

    def test_non_evm_network(self):
        info = get_network_info("solana")

        assert info is not None
        assert info.chain_id is None
        assert not info.is_evm

    def test_unknown_and_blank_lookups(self):
        assert get_network_info("unknown-chain") is None
        assert get_network_info("") is None
        assert get_network_chain_id("unknown-chain") is None
        assert find_network("ethereum") is None
        assert find_network("eth").name == "Ethereum"

    def test_slug_and_name(self):
        assert get_network_slug("ETH") == "ethereum"
        assert get_network_name("arb") == "Arbitrum"
        assert get_network_name("") == ""
        assert get_network_slug(None) == ""
        assert get_network_name("Some_New_Chain") == "some-new-chain"

    def test_chain_id(self):
        assert get_network_chain_id("polygon") == 137
        assert get_network_chain_id("base") == 8453

    def test_same_network(self):
        assert is_same_network("ETH", "ethereum")
        assert is_same_network("bnb-chain", "BSC")
        assert not is_same_network("eth", "polygon")
        assert not is_same_network("", "eth")

    def test_explorer_urls(self):
        assert get_explorer_url("polygon") == "https://polygonscan.com"
        assert get_explorer_url("unknown-chain") == "https://etherscan.io"
        assert get_address_explorer_url("bsc", "0xabc") == "https://bscscan.com/address/0xabc"
        assert get_tx_explorer_url("eth", "0xdead") == "https://etherscan.io/tx/0xdead"
        assert get_token_explorer_url("arb", "0xbeef") == "https://arbiscan.io/token/0xbeef"
        assert get_tx_explorer_url("eth", "") == "https://etherscan.io"
