"""ORM models package export."""

from app.models.discount import Discount
from app.models.member_profile import MemberProfile
from app.models.pricing import RateTierRecord
from app.models.room_type import RoomType

__all__ = [
    "Discount",
    "MemberProfile",
    "RateTierRecord",
    "RoomType",
]
