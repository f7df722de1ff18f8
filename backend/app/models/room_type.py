"""Room type catalog model."""
from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from app.models.pricing import RateTierRecord


class RoomType(TimestampMixin, Base):
    """Bookable room category identified by a short code."""

    __tablename__ = "room_types"

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    min_stay_nights: Mapped[int | None] = mapped_column(Integer)
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    rate_tiers: Mapped[list["RateTierRecord"]] = relationship(
        "RateTierRecord",
        back_populates="room_type",
        cascade="all, delete-orphan",
        order_by="RateTierRecord.min_duration_nights",
    )
