"""Stay price quote engine.

Pure computation over a stay request, a room category's rate tiers and the
discount registry. The engine performs no I/O and never reads the clock: the
caller passes ``today`` explicitly so that discount windows are evaluated
deterministically.

Money is carried as :class:`~decimal.Decimal` at full precision through every
step and only quantized to cents when the :class:`PriceQuote` is assembled.
"""

from __future__ import annotations

import datetime
import enum
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, Sequence

MONEY_PLACES = Decimal("0.01")
CARD_FEE_RATE = Decimal("0.03")
TAX_RATE = Decimal("0.038")
_HUNDRED = Decimal("100")
_ZERO = Decimal("0")
_SECONDS_PER_DAY = 24 * 60 * 60


class PaymentMethod(str, enum.Enum):
    """Supported payment rails."""

    CARD = "card"
    CRYPTO = "crypto"


class MemberRole(str, enum.Enum):
    """Community roles a requester may hold."""

    NONE = "none"
    ADMIN = "admin"
    CO_DESIGNER = "co-designer"
    CO_CURATOR = "co-curator"


DISCOUNT_ELIGIBLE_ROLES = frozenset({MemberRole.CO_DESIGNER, MemberRole.CO_CURATOR})


class QuoteErrorKind(str, enum.Enum):
    """Reasons a stay request cannot be quoted."""

    NON_POSITIVE_DURATION = "non_positive_duration"
    NO_APPLICABLE_RATE = "no_applicable_rate"
    UNKNOWN_ROOM_CATEGORY = "unknown_room_category"
    MINIMUM_STAY_NOT_MET = "minimum_stay_not_met"


class InvalidRequest(ValueError):
    """Raised when a stay request violates a quoting precondition."""

    def __init__(self, kind: QuoteErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


@dataclass(slots=True, frozen=True)
class StayRequest:
    """Stay to be priced; ``checkout`` is exclusive."""

    checkin: datetime.date
    checkout: datetime.date
    room_category: str
    payment_method: PaymentMethod
    requester_role: MemberRole | None = None


@dataclass(slots=True, frozen=True)
class RateTier:
    """Nightly rate that activates once a stay reaches ``min_duration_nights``."""

    room_category: str
    min_duration_nights: int
    nightly_rate: Decimal


@dataclass(slots=True, frozen=True)
class DiscountRule:
    """Percentage discount valid between two dates, inclusive."""

    active: bool
    is_role_based: bool
    percentage: Decimal
    start_date: datetime.date
    end_date: datetime.date
    name: str | None = None

    def applies_on(self, day: datetime.date) -> bool:
        return self.active and self.start_date <= day <= self.end_date

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        return (
            f"Special Discount ({self.start_date.isoformat()}"
            f" - {self.end_date.isoformat()})"
        )


@dataclass(slots=True, frozen=True)
class PriceQuote:
    """Itemized, rounded price breakdown for a stay."""

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

    def to_dict(self) -> dict[str, Any]:
        """Serialize the quote to plain types for responses."""

        return {
            "nights": self.nights,
            "daily_rate": _to_str(self.daily_rate),
            "base_price": _to_str(self.base_price),
            "discount_name": self.discount_name,
            "discount_percentage": str(self.discount_percentage),
            "discount_amount": _to_str(self.discount_amount),
            "is_role_based_discount": self.is_role_based_discount,
            "price_after_discount": _to_str(self.price_after_discount),
            "payment_fee": _to_str(self.payment_fee),
            "subtotal_before_tax": _to_str(self.subtotal_before_tax),
            "tax_amount": _to_str(self.tax_amount),
            "total_amount": _to_str(self.total_amount),
            "duration_tier_applied": self.duration_tier_applied,
        }


def _to_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


def _to_str(value: Decimal) -> str:
    return f"{_to_money(value):.2f}"


def stay_nights(checkin: datetime.date, checkout: datetime.date) -> int:
    """Return the number of started days between check-in and check-out."""

    delta = checkout - checkin
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


def _as_decimal(value: Decimal | float | int | str) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # Floats convert via their shortest repr, never their binary expansion.
    return Decimal(str(value))


def select_rate_tier(
    rate_table: Iterable[RateTier], room_category: str, nights: int
) -> RateTier:
    """Pick the longest-duration tier the stay qualifies for.

    A category with no tiers at all, including an empty rate table, is
    reported the same way as a stay shorter than every tier.
    """

    eligible = [
        tier
        for tier in rate_table
        if tier.room_category == room_category and tier.min_duration_nights <= nights
    ]
    if not eligible:
        raise InvalidRequest(
            QuoteErrorKind.NO_APPLICABLE_RATE,
            f"No applicable rate for {room_category!r} and {nights} nights",
        )
    # max() keeps the first of equal keys, so duplicate tiers resolve by table order.
    return max(eligible, key=lambda tier: tier.min_duration_nights)


def resolve_discount(
    discount_rules: Sequence[DiscountRule],
    requester_role: MemberRole | None,
    today: datetime.date,
) -> DiscountRule | None:
    """Return the single discount to apply, if any.

    Role-based rules are considered only for eligible roles and take priority
    over generic rules. Within each kind the first applicable rule in registry
    order wins; discounts never stack.
    """

    if requester_role in DISCOUNT_ELIGIBLE_ROLES:
        role_rule = _first_applicable(discount_rules, today, role_based=True)
        if role_rule is not None:
            return role_rule
    return _first_applicable(discount_rules, today, role_based=False)


def _first_applicable(
    discount_rules: Sequence[DiscountRule],
    today: datetime.date,
    *,
    role_based: bool,
) -> DiscountRule | None:
    for rule in discount_rules:
        if rule.is_role_based == role_based and rule.applies_on(today):
            return rule
    return None


def quote(
    request: StayRequest,
    rate_table: Iterable[RateTier],
    discount_rules: Sequence[DiscountRule],
    today: datetime.date,
) -> PriceQuote:
    """Compute the itemized price of a stay."""

    nights = stay_nights(request.checkin, request.checkout)
    if nights <= 0:
        raise InvalidRequest(
            QuoteErrorKind.NON_POSITIVE_DURATION,
            "Invalid date range - checkout must be after checkin",
        )

    tier = select_rate_tier(rate_table, request.room_category, nights)
    nightly_rate = _as_decimal(tier.nightly_rate)
    base_price = nightly_rate * nights

    discount = resolve_discount(discount_rules, request.requester_role, today)
    if discount is not None:
        discount_percentage = _as_decimal(discount.percentage)
        discount_amount = base_price * discount_percentage / _HUNDRED
    else:
        discount_percentage = _ZERO
        discount_amount = _ZERO
    price_after_discount = base_price - discount_amount

    if request.payment_method == PaymentMethod.CARD:
        payment_fee = price_after_discount * CARD_FEE_RATE
    else:
        payment_fee = _ZERO

    subtotal_before_tax = price_after_discount + payment_fee
    tax_amount = subtotal_before_tax * TAX_RATE
    total_amount = subtotal_before_tax + tax_amount

    return PriceQuote(
        nights=nights,
        daily_rate=_to_money(nightly_rate),
        base_price=_to_money(base_price),
        discount_name=discount.display_name if discount is not None else None,
        discount_percentage=discount_percentage,
        discount_amount=_to_money(discount_amount),
        is_role_based_discount=discount is not None and discount.is_role_based,
        price_after_discount=_to_money(price_after_discount),
        payment_fee=_to_money(payment_fee),
        subtotal_before_tax=_to_money(subtotal_before_tax),
        tax_amount=_to_money(tax_amount),
        total_amount=_to_money(total_amount),
        duration_tier_applied=tier.min_duration_nights,
    )


__all__ = [
    "CARD_FEE_RATE",
    "DISCOUNT_ELIGIBLE_ROLES",
    "DiscountRule",
    "InvalidRequest",
    "MemberRole",
    "PaymentMethod",
    "PriceQuote",
    "QuoteErrorKind",
    "RateTier",
    "StayRequest",
    "TAX_RATE",
    "quote",
    "resolve_discount",
    "select_rate_tier",
    "stay_nights",
]
