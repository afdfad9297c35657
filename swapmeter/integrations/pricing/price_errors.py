from typing import Optional


class PriceLookupError(Exception):
    """Base class for failures while talking to the price API. Never escapes the price client."""


class PriceNotFoundError(PriceLookupError):
    """The price API does not know the token (HTTP 404)."""


class PriceHttpError(PriceLookupError):
    """The price API answered with a non-2xx status other than 404."""

    def __init__(self, status_code: int, body: Optional[str] = None) -> None:
        super().__init__(f"HTTP error! status: {status_code}")
        self.status_code = status_code
        self.body = body


class PriceNetworkBuildError(PriceLookupError):
    """The price API answered with a payload that cannot be parsed or validated."""
