"""Discount registry lookups."""
from __future__ import annotations

import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.discount import Discount
from app.services.quote_engine import DiscountRule


def to_rule(discount: Discount) -> DiscountRule:
    """Convert a persisted discount into the engine's rule type."""
    return DiscountRule(
        active=discount.active,
        is_role_based=discount.is_role_based,
        percentage=discount.percentage,
        start_date=discount.start_date,
        end_date=discount.end_date,
        name=discount.name,
    )


async def list_applicable_discounts(
    session: AsyncSession, today: datetime.date
) -> list[DiscountRule]:
    """Return discounts active on ``today`` in first-match order.

    Rules are ordered by creation time, then id, which makes the engine's
    first-match selection stable when windows overlap.
    """
    result = await session.execute(
        select(Discount)
        .where(
            Discount.active.is_(True),
            Discount.start_date <= today,
            Discount.end_date >= today,
        )
        .order_by(Discount.created_at, Discount.id)
    )
    return [to_rule(discount) for discount in result.scalars().all()]
