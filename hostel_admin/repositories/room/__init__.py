from hostel_admin.repositories.room.allocation_repository import AllocationRepository
from hostel_admin.repositories.room.room_repository import RoomRepository

__all__ = ["RoomRepository", "AllocationRepository"]
