from __future__ import annotations

import asyncio
import time
from collections import deque
from decimal import Decimal
from typing import Callable, Deque, Dict, Optional, Tuple

import httpx

from swapmeter.configuration.config import settings
from swapmeter.core.networks.network_normalizer import normalize_network, to_price_network
from swapmeter.core.utils.format_utils import _tail
from swapmeter.core.utils.number_utils import ZERO
from swapmeter.integrations.pricing.price_constants import (
    BASE_URL,
    RATE_LIMIT_WINDOW_SECONDS,
    WRAPPED_NATIVE_ADDRESSES,
)
from swapmeter.integrations.pricing.price_errors import (
    PriceHttpError,
    PriceNetworkBuildError,
    PriceNotFoundError,
)
from swapmeter.integrations.pricing.price_helpers import (
    _build_price_headers,
    _build_price_url,
    _build_timeout,
    _failed_quote,
    _http_get_price_payload,
    _is_native_sentinel,
    _normalize_token_address,
    _quote_from_payload,
)
from swapmeter.integrations.pricing.price_structures import PriceQuoteStatus, TokenPriceQuote
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)


def wrapped_native_address(network: Optional[str]) -> Optional[str]:
    """Return the wrapped-native token contract used to price a chain's native coin."""
    return WRAPPED_NATIVE_ADDRESSES.get(normalize_network(network))


class TokenPriceClient:
    """
    USD price lookups against the external price API.

    Failures never propagate: every lookup resolves to a `TokenPriceQuote` (or a zero
    `Decimal` for the convenience methods). Successful quotes are reused for
    `revalidate_seconds` and outbound requests are bounded by a sliding one-minute window.
    """

    def __init__(
            self,
            *,
            base_url: Optional[str] = None,
            http_client: Optional[httpx.AsyncClient] = None,
            revalidate_seconds: Optional[float] = None,
            max_requests_per_minute: Optional[int] = None,
            clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._base_url = (base_url or BASE_URL).rstrip("/")
        self._http_client = http_client
        self._owns_http_client = http_client is None
        self._revalidate_seconds = float(
            settings.PRICE_REVALIDATE_SECONDS if revalidate_seconds is None else revalidate_seconds
        )
        self._max_requests_per_minute = int(
            settings.PRICE_MAX_REQUESTS_PER_MINUTE if max_requests_per_minute is None else max_requests_per_minute
        )
        self._clock = clock
        self._cache: Dict[Tuple[str, str], Tuple[float, TokenPriceQuote]] = {}
        self._request_timestamps: Deque[float] = deque()

    async def __aenter__(self) -> "TokenPriceClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_http_client:
            await self._http_client.aclose()
            self._http_client = None

    def _client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=_build_timeout(), headers=_build_price_headers())
            self._owns_http_client = True
        return self._http_client

    def _rate_limit_ok(self) -> bool:
        if self._max_requests_per_minute <= 0:
            return True
        now = self._clock()
        while self._request_timestamps and now - self._request_timestamps[0] >= RATE_LIMIT_WINDOW_SECONDS:
            self._request_timestamps.popleft()
        if len(self._request_timestamps) >= self._max_requests_per_minute:
            return False
        self._request_timestamps.append(now)
        return True

    def _cached_quote(self, key: Tuple[str, str]) -> Optional[TokenPriceQuote]:
        if self._revalidate_seconds <= 0:
            return None
        cached = self._cache.get(key)
        if cached is None:
            return None
        stored_at, quote = cached
        if self._clock() - stored_at >= self._revalidate_seconds:
            del self._cache[key]
            return None
        return quote

    def _store_quote(self, key: Tuple[str, str], quote: TokenPriceQuote) -> None:
        if self._revalidate_seconds > 0 and quote.status is PriceQuoteStatus.OK:
            self._cache[key] = (self._clock(), quote)

    def clear_cache(self) -> None:
        self._cache.clear()

    async def fetch_quote(self, address: str, network: str) -> TokenPriceQuote:
        """
        Fetch the USD price of a token as a typed quote.

        404 and "token not found" payloads resolve to NOT_FOUND, unparsable prices to
        INVALID, HTTP/transport failures and exhausted request budget to FAILED.
        """
        network_id = normalize_network(network)
        price_network = to_price_network(network_id)
        token_address = _normalize_token_address(address)
        key = (price_network, token_address)

        cached = self._cached_quote(key)
        if cached is not None:
            log.debug("[PRICE][CACHE] Hit for %s on %s.", _tail(token_address), price_network)
            return cached

        try:
            url = _build_price_url(self._base_url, price_network, token_address)
        except PriceNetworkBuildError as exc:
            log.info("[PRICE][FETCH] Unusable token or network for %r on %r: %s", token_address, price_network, exc)
            return _failed_quote(
                network=network_id,
                price_network=price_network,
                address=token_address,
                status=PriceQuoteStatus.NOT_FOUND,
                error=str(exc),
            )

        if not self._rate_limit_ok():
            log.warning("[PRICE][RATE_LIMIT] Request budget exhausted, skipping %s on %s.",
                        _tail(token_address), price_network)
            return _failed_quote(
                network=network_id,
                price_network=price_network,
                address=token_address,
                status=PriceQuoteStatus.FAILED,
                error="Rate limited: too many price requests",
            )

        log.debug("[PRICE][FETCH] token=%s network=%s (original: %s)", token_address, price_network, network)

        try:
            payload = await _http_get_price_payload(self._client(), url)
        except PriceNotFoundError:
            log.info("[PRICE][FETCH] Token not found at address %s on %s.", token_address, price_network)
            return _failed_quote(
                network=network_id,
                price_network=price_network,
                address=token_address,
                status=PriceQuoteStatus.NOT_FOUND,
                error=f"Token not found at address {token_address} on {price_network}",
            )
        except PriceNetworkBuildError as exc:
            log.warning("[PRICE][FETCH] Malformed response for %s on %s: %s", token_address, price_network, exc)
            return _failed_quote(
                network=network_id,
                price_network=price_network,
                address=token_address,
                status=PriceQuoteStatus.NOT_FOUND,
                error=str(exc),
            )
        except (PriceHttpError, httpx.HTTPError, httpx.InvalidURL) as exc:
            log.warning("[PRICE][FETCH] Request failed for %s on %s: %s", token_address, price_network, exc)
            return _failed_quote(
                network=network_id,
                price_network=price_network,
                address=token_address,
                status=PriceQuoteStatus.FAILED,
                error=str(exc) or type(exc).__name__,
            )

        quote = _quote_from_payload(payload, network=network_id, price_network=price_network, address=token_address)
        if quote.is_found:
            log.debug("[PRICE][FETCH] Token price for %s on %s: $%s", token_address, price_network, quote.usd_price)
        else:
            log.info("[PRICE][FETCH] No usable price for %s on %s: %s", token_address, price_network, quote.error)
        self._store_quote(key, quote)
        return quote

    async def get_token_price(self, address: str, network: str) -> Decimal:
        """
        USD price of a token, zero when it cannot be determined.

        The all-zero native sentinel is priced through the chain's wrapped-native token.
        """
        if _is_native_sentinel(address):
            return await self.resolve_native_price(network)
        quote = await self.fetch_quote(address, network)
        return quote.price_or_zero()

    async def resolve_native_price(self, network: str) -> Decimal:
        """
        USD price of a chain's native coin, defined as the price of its wrapped token.

        Returns zero without any request when the chain has no known wrapped token.
        """
        network_id = normalize_network(network)
        wrapped_address = WRAPPED_NATIVE_ADDRESSES.get(network_id)
        if wrapped_address is None:
            log.info("[PRICE][NATIVE] No wrapped-native token known for '%s'.", network_id)
            return ZERO

        price = await self.get_token_price(wrapped_address, network_id)
        log.debug("[PRICE][NATIVE] Native token price for %s: $%s", network_id, price)
        return price


_default_clients: Dict[asyncio.AbstractEventLoop, TokenPriceClient] = {}


def get_default_client() -> TokenPriceClient:
    """
    Shared client for the running event loop.

    Pooled connections are bound to the loop that opened them, so each loop gets its
    own client and clients of closed loops are dropped.
    """
    loop = asyncio.get_running_loop()
    for closed_loop in [known for known in _default_clients if known.is_closed()]:
        del _default_clients[closed_loop]
    client = _default_clients.get(loop)
    if client is None:
        client = TokenPriceClient()
        _default_clients[loop] = client
    return client


async def get_token_price(address: str, network: str, *, client: Optional[TokenPriceClient] = None) -> Decimal:
    return await (client or get_default_client()).get_token_price(address, network)


async def resolve_native_price(network: str, *, client: Optional[TokenPriceClient] = None) -> Decimal:
    return await (client or get_default_client()).resolve_native_price(network)
