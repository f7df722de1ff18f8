"""Time-windowed percentage discount model."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal

from sqlalchemy import Boolean, CheckConstraint, Date, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base
from app.models.mixins import TimestampMixin


class Discount(TimestampMixin, Base):
    """Percentage discount, either generic or reserved for eligible roles."""

    __tablename__ = "discounts"
    __table_args__ = (
        CheckConstraint(
            "percentage >= 0 AND percentage <= 100", name="ck_discounts_percentage"
        ),
        CheckConstraint("start_date <= end_date", name="ck_discounts_window"),
    )

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    name: Mapped[str | None] = mapped_column(String(160))
    percentage: Mapped[Decimal] = mapped_column(Numeric(5, 2), nullable=False)
    is_role_based: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    start_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    end_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
