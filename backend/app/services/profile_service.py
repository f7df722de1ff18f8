"""Member profile lookups."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.member_profile import MemberProfile
from app.services.quote_engine import MemberRole


async def get_member_role(
    session: AsyncSession, external_id: str | None
) -> MemberRole | None:
    """Return the role for an identity subject, or ``None`` when anonymous."""
    if not external_id:
        return None
    result = await session.execute(
        select(MemberProfile.role).where(MemberProfile.external_id == external_id)
    )
    return result.scalar_one_or_none()
