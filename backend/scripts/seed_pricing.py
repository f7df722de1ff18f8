"""Seed baseline room types, rate tiers and a sample discount."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import select

from app.db.session import get_sessionmaker
from app.models import Discount, RateTierRecord, RoomType

ROOM_TYPES: dict[str, dict[str, object]] = {
    "private-room": {
        "display_name": "Private Room",
        "min_stay_nights": 7,
        "tiers": [(1, "320.00"), (8, "315.00"), (15, "310.00"), (29, "300.00")],
    },
    "shared-room": {
        "display_name": "Shared Room",
        "min_stay_nights": None,
        "tiers": [(1, "120.00"), (8, "110.00"), (29, "95.00")],
    },
}
DISCOUNT_NAME = "Early Builder Discount"


async def seed_pricing() -> None:
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        existing_codes = set(
            (await session.execute(select(RoomType.code))).scalars().all()
        )
        rooms_created = 0
        tiers_created = 0

        for code, room in ROOM_TYPES.items():
            if code in existing_codes:
                continue
            tiers = [
                RateTierRecord(min_duration_nights=min_nights, nightly_rate=Decimal(rate))
                for min_nights, rate in room["tiers"]  # type: ignore[attr-defined]
            ]
            session.add(
                RoomType(
                    code=code,
                    display_name=str(room["display_name"]),
                    min_stay_nights=room["min_stay_nights"],  # type: ignore[arg-type]
                    rate_tiers=tiers,
                )
            )
            rooms_created += 1
            tiers_created += len(tiers)

        discount_exists = (
            await session.execute(select(Discount).where(Discount.name == DISCOUNT_NAME))
        ).scalar_one_or_none()

        discounts_created = 0
        if discount_exists is None:
            session.add(
                Discount(
                    name=DISCOUNT_NAME,
                    percentage=Decimal("10"),
                    is_role_based=True,
                    start_date=date.today(),
                    end_date=date.today() + timedelta(days=90),
                    active=True,
                )
            )
            discounts_created += 1

        if rooms_created or discounts_created:
            await session.commit()

        print(
            f"Seeded {rooms_created} room type(s), {tiers_created} rate tier(s) "
            f"and {discounts_created} discount(s)."
        )


def main() -> None:
    asyncio.run(seed_pricing())


if __name__ == "__main__":
    main()
