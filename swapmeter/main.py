from __future__ import annotations

from swapmeter.logging.logger import init_logging

init_logging()

import argparse
import asyncio
from typing import Optional, Sequence

from swapmeter.core.networks.network_normalizer import (
    get_network_name,
    normalize_network,
    to_price_network,
)
from swapmeter.core.utils.format_utils import format_usd_price
from swapmeter.integrations.pricing.price_client import TokenPriceClient


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="swapmeter", description="Token prices and network identifiers for swaps.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    price = subparsers.add_parser("price", help="USD price of a token")
    price.add_argument("--network", required=True, help="network identifier or alias, e.g. eth, bnb-chain")
    price.add_argument("--address", required=True, help="token contract address")

    native = subparsers.add_parser("native", help="USD price of a network's native coin")
    native.add_argument("--network", required=True, help="network identifier or alias")

    normalize = subparsers.add_parser("normalize", help="canonical id and price-API key of a network identifier")
    normalize.add_argument("value")
    return parser


async def _print_token_price(network: str, address: str) -> None:
    async with TokenPriceClient() as client:
        quote = await client.fetch_quote(address, network)
    line = f"{quote.address} on {quote.price_network}: {format_usd_price(quote.price_or_zero())}"
    if not quote.is_found:
        line += f" ({quote.status.value}: {quote.error})"
    print(line)


async def _print_native_price(network: str) -> None:
    async with TokenPriceClient() as client:
        price = await client.resolve_native_price(network)
    print(f"{get_network_name(network) or network} native coin: {format_usd_price(price)}")


def _print_normalized(value: str) -> None:
    network_id = normalize_network(value)
    print(f"{network_id}\t{to_price_network(network_id)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.command == "price":
        asyncio.run(_print_token_price(args.network, args.address))
    elif args.command == "native":
        asyncio.run(_print_native_price(args.network))
    else:
        _print_normalized(args.value)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
