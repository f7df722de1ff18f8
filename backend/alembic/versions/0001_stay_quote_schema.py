"""Create room types, rate tiers, discounts and member profiles."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
            onupdate=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    member_role = sa.Enum(
        "none", "admin", "co-designer", "co-curator", name="memberrole"
    )
    member_role.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "room_types",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("code", sa.String(length=64), nullable=False, unique=True),
        sa.Column("display_name", sa.String(length=120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("min_stay_nights", sa.Integer(), nullable=True),
        sa.Column(
            "active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        *_timestamps(),
    )

    op.create_table(
        "rate_tiers",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "room_code",
            sa.String(length=64),
            sa.ForeignKey("room_types.code", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("min_duration_nights", sa.Integer(), nullable=False),
        sa.Column("nightly_rate", sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint(
            "room_code", "min_duration_nights", name="uq_rate_tiers_room_duration"
        ),
    )
    op.create_index("ix_rate_tiers_room_code", "rate_tiers", ["room_code"])

    op.create_table(
        "discounts",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(length=160), nullable=True),
        sa.Column("percentage", sa.Numeric(5, 2), nullable=False),
        sa.Column(
            "is_role_based",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "active", sa.Boolean(), nullable=False, server_default=sa.true()
        ),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        *_timestamps(),
        sa.CheckConstraint(
            "percentage >= 0 AND percentage <= 100", name="ck_discounts_percentage"
        ),
        sa.CheckConstraint("start_date <= end_date", name="ck_discounts_window"),
    )

    op.create_table(
        "member_profiles",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("external_id", sa.String(length=191), nullable=False, unique=True),
        sa.Column("display_name", sa.String(length=120), nullable=True),
        sa.Column("role", member_role, nullable=False, server_default="none"),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("member_profiles")
    op.drop_table("discounts")
    op.drop_index("ix_rate_tiers_room_code", table_name="rate_tiers")
    op.drop_table("rate_tiers")
    op.drop_table("room_types")
    sa.Enum(name="memberrole").drop(op.get_bind(), checkfirst=True)
