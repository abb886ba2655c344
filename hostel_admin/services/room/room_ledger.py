# hostel_admin/services/room/room_ledger.py
"""
Room ledger: the only writer of a room's ``current_occupancy``.

Both operations run inside the caller's transaction and never commit.
Failures are raised as domain exceptions so that the enclosing unit of
work rolls back as a whole.
"""

from hostel_admin.core.exceptions import (
    ResourceNotFoundError,
    RoomFullError,
    RoomUnavailableError,
)
from hostel_admin.core.logging import get_logger
from hostel_admin.models.room import Room
from hostel_admin.repositories.room import RoomRepository

logger = get_logger(__name__)


class RoomLedger:
    """Canonical ``(capacity, current_occupancy)`` bookkeeping per room."""

    def __init__(self, room_repository: RoomRepository):
        self.rooms = room_repository

    def reserve_slot(self, room_id: int) -> Room:
        """
        Take one bed in ``room_id``.

        Raises:
            ResourceNotFoundError: The room does not exist
            RoomUnavailableError: The room is blocked for allocation
            RoomFullError: No free bed is left
        """
        if self.rooms.increment_occupancy_if_free(room_id):
            room = self.rooms.reload(room_id)
            logger.debug(
                "Slot reserved",
                extra={"room_id": room_id, "occupancy": room.current_occupancy},
            )
            return room

        room = self.rooms.reload(room_id)
        if room is None:
            raise ResourceNotFoundError("Room", room_id)
        if not room.is_available:
            raise RoomUnavailableError(room_id)
        raise RoomFullError(room_id, room.capacity, room.current_occupancy)

    def release_slot(self, room_id: int) -> None:
        """Give one bed back. A counter already at zero stays at zero."""
        if not self.rooms.decrement_occupancy_floored(room_id):
            logger.warning("Release requested for unknown room", extra={"room_id": room_id})
            return
        self.rooms.reload(room_id)
        logger.debug("Slot released", extra={"room_id": room_id})
