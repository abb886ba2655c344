"""
Room schemas.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from hostel_admin.models.base.enums import Gender, RoomType
from hostel_admin.schemas.common.base import BaseCreateSchema, BaseDBSchema, BaseSchema

__all__ = [
    "RoomCreate",
    "RoomResponse",
    "RoomAvailabilityUpdate",
    "AvailableRoomResponse",
]


class RoomCreate(BaseCreateSchema):
    room_number: str = Field(..., min_length=1, max_length=10)
    floor: int = Field(..., ge=0)
    room_type: RoomType
    capacity: int = Field(..., ge=1, le=10)
    rent_amount: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    has_ac: bool = False
    has_attached_bathroom: bool = False
    is_available: bool = True


class RoomResponse(BaseDBSchema):
    hostel_id: int
    room_number: str
    floor: int
    room_type: RoomType
    capacity: int
    current_occupancy: int
    free_beds: int
    rent_amount: Decimal
    has_ac: bool
    has_attached_bathroom: bool
    is_available: bool


class RoomAvailabilityUpdate(BaseSchema):
    is_available: bool


class AvailableRoomResponse(BaseSchema):
    """Row of the available-rooms listing."""

    room_id: int
    hostel_id: int
    hostel_name: str
    gender_allowed: Gender
    room_number: str
    floor: int
    room_type: RoomType
    capacity: int
    current_occupancy: int
    available_beds: int
    rent_amount: float
    has_ac: bool
    has_attached_bathroom: bool
