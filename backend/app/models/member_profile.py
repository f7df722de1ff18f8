"""Community member profile model."""
from __future__ import annotations

import uuid

from sqlalchemy import Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import TimestampMixin
from app.services.quote_engine import MemberRole


class MemberProfile(TimestampMixin, Base):
    """Profile keyed by the identity provider's subject id."""

    __tablename__ = "member_profiles"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    external_id: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(120))
    role: Mapped[MemberRole] = mapped_column(
        Enum(MemberRole, values_callable=lambda enum_cls: [m.value for m in enum_cls]),
        default=MemberRole.NONE,
        nullable=False,
    )
