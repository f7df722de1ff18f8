"""Quote request and response schemas."""

from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.services.quote_engine import PaymentMethod

_PAYMENT_ALIASES = {"fiat": PaymentMethod.CARD.value}


class QuoteRequest(BaseModel):
    """Input payload for quoting a stay."""

    checkin: datetime.date
    checkout: datetime.date
    room_code: str = Field(min_length=1, max_length=64)
    payment_method: PaymentMethod = PaymentMethod.CARD
    requester_id: str | None = None
    as_of: datetime.date | None = None

    @field_validator("payment_method", mode="before")
    @classmethod
    def _normalize_payment_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            normalized = value.strip().lower()
            return _PAYMENT_ALIASES.get(normalized, normalized)
        return value


class QuoteRead(BaseModel):
    """Itemized price breakdown for a stay."""

    nights: int
    daily_rate: Decimal
    base_price: Decimal
    discount_name: str | None
    discount_percentage: Decimal
    discount_amount: Decimal
    is_role_based_discount: bool
    price_after_discount: Decimal
    payment_fee: Decimal
    subtotal_before_tax: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    duration_tier_applied: int

    model_config = ConfigDict(from_attributes=True)


class QuoteError(BaseModel):
    """Reason a quote was rejected."""

    kind: str
    message: str
