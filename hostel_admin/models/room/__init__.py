from hostel_admin.models.room.allocation import Allocation
from hostel_admin.models.room.room import Room

__all__ = ["Room", "Allocation"]
