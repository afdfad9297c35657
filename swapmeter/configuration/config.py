from __future__ import annotations

import os


def _as_bool(value: str | None, default: bool = False) -> bool:
    """Parse a truthy/falsey string into a boolean."""
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


class Settings:
    # Price API
    PRICE_API_BASE_URL: str = os.getenv("PRICE_API_BASE_URL", "https://api.rubic.exchange/api/v2")
    PRICE_API_KEY: str = os.getenv("PRICE_API_KEY", "")
    PRICE_HTTP_TIMEOUT_SECONDS: float = float(os.getenv("PRICE_HTTP_TIMEOUT_SECONDS", "12"))
    PRICE_HTTP_CONNECT_TIMEOUT_SECONDS: float = float(os.getenv("PRICE_HTTP_CONNECT_TIMEOUT_SECONDS", "6"))
    PRICE_REVALIDATE_SECONDS: int = int(os.getenv("PRICE_REVALIDATE_SECONDS", "15"))
    PRICE_MAX_REQUESTS_PER_MINUTE: int = int(os.getenv("PRICE_MAX_REQUESTS_PER_MINUTE", "120"))

    # Gas estimation
    GAS_DEFAULT_LIMIT: int = int(os.getenv("GAS_DEFAULT_LIMIT", "300000"))

    # Networks
    DEFAULT_NETWORK_ID: str = os.getenv("DEFAULT_NETWORK_ID", "eth").strip().lower()

    # Debug / logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()
    LOG_LEVEL_SWAPMETER: str = os.getenv("LOG_LEVEL_SWAPMETER", "INFO").upper()
    LOG_LEVEL_LIB_HTTPX: str = os.getenv("LOG_LEVEL_LIB_HTTPX", "WARNING").upper()
    LOG_LEVEL_LIB_HTTPCORE: str = os.getenv("LOG_LEVEL_LIB_HTTPCORE", "WARNING").upper()
    LOG_LEVEL_LIB_ASYNCIO: str = os.getenv("LOG_LEVEL_LIB_ASYNCIO", "WARNING").upper()
    LOG_LEVEL_LIB_WEB3: str = os.getenv("LOG_LEVEL_LIB_WEB3", "WARNING").upper()
    NO_COLOR: bool = _as_bool(os.getenv("NO_COLOR"), False)


settings = Settings()
