"""Tests for the pure stay quote engine."""

from __future__ import annotations

import datetime
from decimal import Decimal

import pytest

from app.services.quote_engine import (
    DiscountRule,
    InvalidRequest,
    MemberRole,
    PaymentMethod,
    QuoteErrorKind,
    RateTier,
    StayRequest,
    quote,
    resolve_discount,
    stay_nights,
)

TODAY = datetime.date(2025, 6, 15)
CHECKIN = datetime.date(2025, 7, 1)
SUITE_TIERS = [
    RateTier("suite", 1, Decimal("320")),
    RateTier("suite", 8, Decimal("315")),
]


def _request(
    nights: int = 10,
    *,
    payment_method: PaymentMethod = PaymentMethod.CARD,
    role: MemberRole | None = None,
    room: str = "suite",
) -> StayRequest:
    return StayRequest(
        checkin=CHECKIN,
        checkout=CHECKIN + datetime.timedelta(days=nights),
        room_category=room,
        payment_method=payment_method,
        requester_role=role,
    )


def _rule(
    percentage: str,
    *,
    role_based: bool = False,
    active: bool = True,
    start: datetime.date = datetime.date(2025, 6, 1),
    end: datetime.date = datetime.date(2025, 6, 30),
    name: str | None = None,
) -> DiscountRule:
    return DiscountRule(
        active=active,
        is_role_based=role_based,
        percentage=Decimal(percentage),
        start_date=start,
        end_date=end,
        name=name,
    )


def test_card_quote_uses_longest_qualifying_tier() -> None:
    result = quote(_request(10), SUITE_TIERS, [], TODAY)

    assert result.nights == 10
    assert result.duration_tier_applied == 8
    assert result.daily_rate == Decimal("315.00")
    assert result.base_price == Decimal("3150.00")
    assert result.discount_amount == Decimal("0.00")
    assert result.discount_name is None
    assert result.price_after_discount == Decimal("3150.00")
    assert result.payment_fee == Decimal("94.50")
    assert result.subtotal_before_tax == Decimal("3244.50")
    assert result.tax_amount == Decimal("123.29")
    assert result.total_amount == Decimal("3367.79")


def test_crypto_quote_has_no_payment_fee() -> None:
    result = quote(
        _request(10, payment_method=PaymentMethod.CRYPTO), SUITE_TIERS, [], TODAY
    )

    assert result.payment_fee == Decimal("0.00")
    assert result.subtotal_before_tax == Decimal("3150.00")
    assert result.tax_amount == Decimal("119.70")
    assert result.total_amount == Decimal("3269.70")


def test_generic_discount_applies_before_fee_and_tax() -> None:
    rules = [_rule("20", name="Summer Sale")]

    result = quote(_request(10), SUITE_TIERS, rules, TODAY)

    assert result.discount_name == "Summer Sale"
    assert result.discount_percentage == Decimal("20")
    assert result.is_role_based_discount is False
    assert result.discount_amount == Decimal("630.00")
    assert result.price_after_discount == Decimal("2520.00")
    assert result.payment_fee == Decimal("75.60")
    assert result.subtotal_before_tax == Decimal("2595.60")
    assert result.tax_amount == Decimal("98.63")
    assert result.total_amount == Decimal("2694.23")


def test_short_stay_below_every_tier_is_rejected() -> None:
    tiers = [RateTier("suite", 8, Decimal("315")), RateTier("suite", 15, Decimal("310"))]

    with pytest.raises(InvalidRequest) as excinfo:
        quote(_request(5), tiers, [], TODAY)

    assert excinfo.value.kind is QuoteErrorKind.NO_APPLICABLE_RATE


def test_unknown_room_category_has_no_applicable_rate() -> None:
    with pytest.raises(InvalidRequest) as excinfo:
        quote(_request(3, room="penthouse"), SUITE_TIERS, [], TODAY)

    assert excinfo.value.kind is QuoteErrorKind.NO_APPLICABLE_RATE


@pytest.mark.parametrize(
    "rate_table",
    [[], [RateTier("loft", 1, Decimal("200"))]],
    ids=["empty-table", "other-category-only"],
)
def test_category_without_tiers_has_no_applicable_rate(
    rate_table: list[RateTier],
) -> None:
    with pytest.raises(InvalidRequest) as excinfo:
        quote(_request(10), rate_table, [], TODAY)

    assert excinfo.value.kind is QuoteErrorKind.NO_APPLICABLE_RATE


@pytest.mark.parametrize("nights", [0, -3])
def test_non_positive_duration_is_rejected(nights: int) -> None:
    with pytest.raises(InvalidRequest) as excinfo:
        quote(_request(nights, room="penthouse"), [], [], TODAY)

    assert excinfo.value.kind is QuoteErrorKind.NON_POSITIVE_DURATION


def test_partial_days_round_up_to_whole_nights() -> None:
    checkin = datetime.datetime(2025, 7, 1, 15, 0)
    checkout = datetime.datetime(2025, 7, 3, 11, 0)

    assert stay_nights(checkin, checkout) == 2
    assert stay_nights(CHECKIN, CHECKIN + datetime.timedelta(days=8)) == 8


def test_role_based_discount_takes_priority_over_generic() -> None:
    rules = [_rule("20"), _rule("10", role_based=True, name="Co-designer rate")]

    result = quote(_request(10, role=MemberRole.CO_DESIGNER), SUITE_TIERS, rules, TODAY)

    assert result.is_role_based_discount is True
    assert result.discount_name == "Co-designer rate"
    assert result.discount_amount == Decimal("315.00")


def test_role_based_discount_ignored_for_ineligible_roles() -> None:
    rules = [_rule("10", role_based=True), _rule("20")]

    for role in (None, MemberRole.NONE, MemberRole.ADMIN):
        result = quote(_request(10, role=role), SUITE_TIERS, rules, TODAY)
        assert result.is_role_based_discount is False
        assert result.discount_amount == Decimal("630.00")


def test_eligible_role_falls_back_to_generic_when_role_rule_expired() -> None:
    rules = [
        _rule(
            "10",
            role_based=True,
            start=datetime.date(2025, 5, 1),
            end=datetime.date(2025, 5, 31),
        ),
        _rule("20"),
    ]

    result = quote(_request(10, role=MemberRole.CO_CURATOR), SUITE_TIERS, rules, TODAY)

    assert result.is_role_based_discount is False
    assert result.discount_percentage == Decimal("20")


def test_first_applicable_rule_wins_among_overlapping_rules() -> None:
    rules = [
        _rule("5", active=False, name="Disabled"),
        _rule("15", name="First"),
        _rule("25", name="Second"),
    ]

    selected = resolve_discount(rules, None, TODAY)

    assert selected is not None
    assert selected.name == "First"


def test_first_applicable_role_rule_wins_for_eligible_role() -> None:
    rules = [
        _rule("30"),
        _rule("10", role_based=True, name="Designers spring"),
        _rule("15", role_based=True, name="Designers summer"),
    ]

    result = quote(_request(10, role=MemberRole.CO_DESIGNER), SUITE_TIERS, rules, TODAY)

    assert result.is_role_based_discount is True
    assert result.discount_name == "Designers spring"
    assert result.discount_amount == Decimal("315.00")


def test_discount_window_is_inclusive() -> None:
    rule = _rule("10", start=TODAY, end=TODAY)

    assert rule.applies_on(TODAY)
    assert not rule.applies_on(TODAY + datetime.timedelta(days=1))
    assert not rule.applies_on(TODAY - datetime.timedelta(days=1))


def test_unnamed_discount_gets_window_label() -> None:
    result = quote(_request(10), SUITE_TIERS, [_rule("10")], TODAY)

    assert result.discount_name == "Special Discount (2025-06-01 - 2025-06-30)"


def test_rounding_happens_once_on_output() -> None:
    tiers = [RateTier("cabin", 1, Decimal("5.48"))]
    result = quote(_request(1, room="cabin"), tiers, [], TODAY)

    assert result.payment_fee == Decimal("0.16")
    assert result.subtotal_before_tax == Decimal("5.64")
    assert result.tax_amount == Decimal("0.21")
    # 5.6444 * 1.038 = 5.8588872; summing the rounded parts would give 5.85.
    assert result.total_amount == Decimal("5.86")


def test_full_discount_yields_zero_total() -> None:
    result = quote(_request(10), SUITE_TIERS, [_rule("100")], TODAY)

    assert result.price_after_discount == Decimal("0.00")
    assert result.payment_fee == Decimal("0.00")
    assert result.total_amount == Decimal("0.00")


def test_quote_is_deterministic() -> None:
    rules = [_rule("12.5", name="Half-term")]

    first = quote(_request(9), SUITE_TIERS, rules, TODAY)
    second = quote(_request(9), SUITE_TIERS, rules, TODAY)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_to_dict_serializes_money_as_strings() -> None:
    data = quote(_request(10), SUITE_TIERS, [], TODAY).to_dict()

    assert data["total_amount"] == "3367.79"
    assert data["payment_fee"] == "94.50"
    assert data["discount_name"] is None
    assert data["duration_tier_applied"] == 8


def test_float_inputs_do_not_carry_binary_error() -> None:
    tiers = [RateTier("cabin", 1, 1.005)]  # type: ignore[arg-type]
    rule = DiscountRule(
        active=True,
        is_role_based=False,
        percentage=33.3,  # type: ignore[arg-type]
        start_date=datetime.date(2025, 6, 1),
        end_date=datetime.date(2025, 6, 30),
    )

    crypto_night = _request(1, room="cabin", payment_method=PaymentMethod.CRYPTO)

    plain = quote(crypto_night, tiers, [], TODAY)
    discounted = quote(_request(10), SUITE_TIERS, [rule], TODAY)

    assert plain.daily_rate == Decimal("1.01")
    assert plain.base_price == Decimal("1.01")
    assert discounted.discount_percentage == Decimal("33.3")
    assert discounted.discount_amount == Decimal("1048.95")
