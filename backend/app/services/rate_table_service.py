"""Rate table lookups for room categories."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.pricing import RateTierRecord
from app.models.room_type import RoomType
from app.services.quote_engine import RateTier


class CategoryNotFoundError(LookupError):
    """Raised when a room category is missing or inactive."""

    def __init__(self, room_code: str) -> None:
        super().__init__(f"Room type {room_code!r} not found")
        self.room_code = room_code


async def get_room_type(session: AsyncSession, room_code: str) -> RoomType:
    """Return the active room type for ``room_code``."""
    result = await session.execute(
        select(RoomType).where(RoomType.code == room_code, RoomType.active.is_(True))
    )
    room_type = result.scalar_one_or_none()
    if room_type is None:
        raise CategoryNotFoundError(room_code)
    return room_type


async def get_rate_tiers(
    session: AsyncSession,
    room_code: str,
    *,
    room_type: RoomType | None = None,
) -> list[RateTier]:
    """Return the category's tiers ordered by minimum duration.

    ``room_type`` skips the existence check when the caller already loaded it.
    """
    if room_type is None:
        room_type = await get_room_type(session, room_code)
    result = await session.execute(
        select(RateTierRecord)
        .where(RateTierRecord.room_code == room_type.code)
        .order_by(RateTierRecord.min_duration_nights, RateTierRecord.created_at)
    )
    return [
        RateTier(
            room_category=record.room_code,
            min_duration_nights=record.min_duration_nights,
            nightly_rate=record.nightly_rate,
        )
        for record in result.scalars().all()
    ]
