from hostel_admin.schemas.room.room import (
    AvailableRoomResponse,
    RoomAvailabilityUpdate,
    RoomCreate,
    RoomResponse,
)

__all__ = [
    "AvailableRoomResponse",
    "RoomAvailabilityUpdate",
    "RoomCreate",
    "RoomResponse",
]
