from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError
from web3 import Web3

from swapmeter.configuration.config import settings
from swapmeter.core.utils.number_utils import ZERO, _to_finite_decimal
from swapmeter.integrations.pricing.price_constants import (
    NATIVE_TOKEN_ZERO_ADDRESS,
    TOKEN_NOT_FOUND_DETAIL,
    TOKEN_PRICE_ENDPOINT,
)
from swapmeter.integrations.pricing.price_errors import (
    PriceHttpError,
    PriceNetworkBuildError,
    PriceNotFoundError,
)
from swapmeter.integrations.pricing.price_structures import (
    PriceQuoteStatus,
    TokenPricePayload,
    TokenPriceQuote,
)
from swapmeter.logging.logger import get_logger

log = get_logger(__name__)


def _build_price_headers() -> Dict[str, str]:
    """
    Construct price API HTTP headers, optionally including an API key if configured.
    """
    headers: Dict[str, str] = {"Accept": "application/json"}
    api_key = settings.PRICE_API_KEY
    if isinstance(api_key, str) and api_key.strip():
        headers["x-api-key"] = api_key.strip()
    return headers


def _build_timeout() -> httpx.Timeout:
    return httpx.Timeout(
        float(settings.PRICE_HTTP_TIMEOUT_SECONDS),
        connect=float(settings.PRICE_HTTP_CONNECT_TIMEOUT_SECONDS),
    )


def _normalize_token_address(address: str) -> str:
    """
    Lowercase EVM hex addresses; other address formats (Solana, Tron) are case-sensitive
    and are only trimmed.
    """
    candidate = (address or "").strip()
    if Web3.is_address(candidate.lower()):
        return candidate.lower()
    return candidate


def _is_native_sentinel(address: str) -> bool:
    return _normalize_token_address(address) == NATIVE_TOKEN_ZERO_ADDRESS


def _path_segment(value: str) -> str:
    """Percent-encode one URL path segment; '/', '?' and '#' never leave it."""
    if value in ("", ".", ".."):
        raise PriceNetworkBuildError(f"Invalid price path segment {value!r}")
    return quote(value, safe="")


def _build_price_url(base_url: str, price_network: str, address: str) -> str:
    return (f"{base_url.rstrip('/')}/{TOKEN_PRICE_ENDPOINT}/"
            f"{_path_segment(price_network)}/{_path_segment(address)}")


async def _http_get_price_payload(client: httpx.AsyncClient, url: str) -> TokenPricePayload:
    """
    Perform a GET request against the price API and validate the JSON body.

    Raises:
        PriceNotFoundError on HTTP 404.
        PriceHttpError on other non-2xx responses.
        PriceNetworkBuildError when the body is not valid JSON or fails validation.
        httpx.RequestError on connection/timeout errors.
    """
    response = await client.get(url)
    if response.status_code == 404:
        raise PriceNotFoundError(url)
    if response.is_error:
        log.warning("[PRICE][HTTP] GET fails: url=%s status=%s body=%s", url, response.status_code, response.text)
        raise PriceHttpError(response.status_code, response.text)

    try:
        raw = response.json()
    except ValueError as exc:
        raise PriceNetworkBuildError(f"Invalid JSON body from {url}") from exc
    if not isinstance(raw, dict):
        raise PriceNetworkBuildError(f"Unexpected payload type {type(raw).__name__} from {url}")
    try:
        return TokenPricePayload.model_validate(raw)
    except ValidationError as exc:
        raise PriceNetworkBuildError(f"Invalid payload from {url}: {exc.error_count()} error(s)") from exc


def _quote_from_payload(
        payload: TokenPricePayload,
        *,
        network: str,
        price_network: str,
        address: str,
) -> TokenPriceQuote:
    """Turn a validated payload into a quote, rejecting non-numeric, non-finite and negative prices."""
    if payload.detail == TOKEN_NOT_FOUND_DETAIL or payload.error:
        return TokenPriceQuote(
            network=network,
            price_network=price_network,
            address=address,
            usd_price=None,
            status=PriceQuoteStatus.NOT_FOUND,
            error=payload.detail or payload.error or TOKEN_NOT_FOUND_DETAIL,
        )

    if payload.usd_price is None:
        return TokenPriceQuote(
            network=network,
            price_network=price_network,
            address=address,
            usd_price=None,
            status=PriceQuoteStatus.NOT_FOUND,
            error=f"No price for {address} on {price_network}",
        )

    price = _to_finite_decimal(payload.usd_price)
    if price is None or price < ZERO:
        return TokenPriceQuote(
            network=network,
            price_network=price_network,
            address=address,
            usd_price=None,
            status=PriceQuoteStatus.INVALID,
            error=f"Invalid price value {payload.usd_price!r}",
        )

    return TokenPriceQuote(
        network=network,
        price_network=price_network,
        address=address,
        usd_price=price,
        status=PriceQuoteStatus.OK,
    )


def _failed_quote(
        *,
        network: str,
        price_network: str,
        address: str,
        status: PriceQuoteStatus,
        error: Optional[str],
) -> TokenPriceQuote:
    return TokenPriceQuote(
        network=network,
        price_network=price_network,
        address=address,
        usd_price=None,
        status=status,
        error=error,
    )
