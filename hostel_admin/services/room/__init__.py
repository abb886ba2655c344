from hostel_admin.services.room.allocation_service import AllocationService
from hostel_admin.services.room.room_ledger import RoomLedger

__all__ = ["AllocationService", "RoomLedger"]
