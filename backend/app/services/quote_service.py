"""Quote orchestration: fetch pricing data and run the quote engine."""

from __future__ import annotations

import datetime
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.services import discount_service, profile_service, rate_table_service
from app.services.quote_engine import (
    InvalidRequest,
    PaymentMethod,
    PriceQuote,
    QuoteErrorKind,
    StayRequest,
    quote,
    stay_nights,
)
from app.services.rate_table_service import CategoryNotFoundError

logger = logging.getLogger(__name__)


async def quote_stay(
    session: AsyncSession,
    *,
    checkin: datetime.date,
    checkout: datetime.date,
    room_code: str,
    payment_method: PaymentMethod,
    today: datetime.date,
    requester_id: str | None = None,
) -> PriceQuote:
    """Produce a price quote for a stay using the current rate and discount data.

    Database errors raised while loading rates or discounts propagate to the
    caller unchanged; they are never treated as "no discount".
    """

    nights = stay_nights(checkin, checkout)
    if nights <= 0:
        raise InvalidRequest(
            QuoteErrorKind.NON_POSITIVE_DURATION,
            "Invalid date range - checkout must be after checkin",
        )

    try:
        room_type = await rate_table_service.get_room_type(session, room_code)
        rate_table = await rate_table_service.get_rate_tiers(
            session, room_code, room_type=room_type
        )
    except CategoryNotFoundError as exc:
        logger.info("Quote rejected for unknown room type %s", room_code)
        raise InvalidRequest(QuoteErrorKind.UNKNOWN_ROOM_CATEGORY, str(exc)) from exc

    if room_type.min_stay_nights and nights < room_type.min_stay_nights:
        raise InvalidRequest(
            QuoteErrorKind.MINIMUM_STAY_NOT_MET,
            f"Minimum stay for this room type is {room_type.min_stay_nights} nights",
        )

    discount_rules = await discount_service.list_applicable_discounts(session, today)
    requester_role = await profile_service.get_member_role(session, requester_id)

    request = StayRequest(
        checkin=checkin,
        checkout=checkout,
        room_category=room_code,
        payment_method=payment_method,
        requester_role=requester_role,
    )
    try:
        result = quote(request, rate_table, discount_rules, today)
    except InvalidRequest as exc:
        logger.info("Quote rejected for %s (%s): %s", room_code, exc.kind.value, exc)
        raise

    logger.info(
        "Quoted %s for %s nights at tier %s: total %s (%s)",
        room_code,
        result.nights,
        result.duration_tier_applied,
        result.total_amount,
        payment_method.value,
    )
    return result
