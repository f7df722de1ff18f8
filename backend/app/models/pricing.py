"""Duration-tiered nightly rate model."""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models.mixins import TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from app.models.room_type import RoomType


class RateTierRecord(TimestampMixin, Base):
    """Nightly rate applied once a stay reaches ``min_duration_nights``."""

    __tablename__ = "rate_tiers"
    __table_args__ = (
        UniqueConstraint(
            "room_code", "min_duration_nights", name="uq_rate_tiers_room_duration"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    room_code: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("room_types.code", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    min_duration_nights: Mapped[int] = mapped_column(Integer, nullable=False)
    nightly_rate: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    room_type: Mapped["RoomType"] = relationship(
        "RoomType", back_populates="rate_tiers"
    )
