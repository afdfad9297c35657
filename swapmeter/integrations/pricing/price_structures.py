from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from swapmeter.core.utils.number_utils import ZERO


class PriceQuoteStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    FAILED = "failed"


class TokenPricePayload(BaseModel):
    """
    Untrusted JSON body returned by `GET /tokens/price/{network}/{address}`.

    Only the fields we read are declared; `usd_price` is kept raw and
    validated numerically by the client.
    """
    model_config = ConfigDict(extra="ignore")

    network: Optional[str] = None
    address: Optional[str] = None
    usd_price: Optional[Union[Decimal, int, float, str]] = None
    error: Optional[str] = None
    detail: Optional[str] = None

    @field_validator("error", "detail", mode="before")
    @classmethod
    def _stringify_message(cls, value: Any) -> Optional[str]:
        if value is None or value == "":
            return None
        return value if isinstance(value, str) else str(value)


@dataclass(frozen=True)
class TokenPriceQuote:
    """
    Outcome of a single price lookup.

    `network` is the canonical network id, `price_network` the identifier sent to
    the price API. `usd_price` is only set when `status` is OK.
    """
    network: str
    price_network: str
    address: str
    usd_price: Optional[Decimal]
    status: PriceQuoteStatus
    error: Optional[str] = None

    @property
    def is_found(self) -> bool:
        return self.status is PriceQuoteStatus.OK and self.usd_price is not None

    def price_or_zero(self) -> Decimal:
        """Price for display: zero whenever no valid price is available."""
        return self.usd_price if self.is_found else ZERO

    def to_plain_dict(self) -> dict:
        return {
            "network": self.network,
            "address": self.address,
            "usd_price": str(self.usd_price) if self.usd_price is not None else None,
            "status": self.status.value,
            "error": self.error,
        }
