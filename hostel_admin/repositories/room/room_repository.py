# hostel_admin/repositories/room/room_repository.py
"""
Room repository: room queries plus the guarded occupancy counter updates
used by the room ledger.
"""

from typing import List, Optional

from sqlalchemy import and_, case, func, select, update
from sqlalchemy.orm import Session, joinedload

from hostel_admin.models.base.enums import Gender
from hostel_admin.models.hostel import Hostel
from hostel_admin.models.room import Allocation, Room
from hostel_admin.repositories.base.base_repository import BaseRepository


class RoomRepository(BaseRepository[Room]):
    """
    Repository for Room entity.

    Handles:
    - Room lookups and listings
    - Conditional occupancy increments and floored decrements
    - Available-room search
    """

    resource_name = "Room"

    def __init__(self, session: Session):
        super().__init__(Room, session)

    # ============================================================================
    # ROOM BASIC OPERATIONS
    # ============================================================================

    def find_with_hostel(self, room_id: int) -> Optional[Room]:
        return (
            self.db.query(Room)
            .options(joinedload(Room.hostel))
            .filter(Room.id == room_id)
            .first()
        )

    def find_by_room_number(self, hostel_id: int, room_number: str) -> Optional[Room]:
        return self.find_one_by_criteria({"hostel_id": hostel_id, "room_number": room_number})

    def reload(self, room_id: int) -> Optional[Room]:
        """Re-read a room inside the current transaction, bypassing cached state."""
        return self.db.get(Room, room_id, populate_existing=True)

    def list_rooms(
        self,
        hostel_id: Optional[int] = None,
        is_available: Optional[bool] = None,
    ) -> List[Room]:
        query = self.db.query(Room).options(joinedload(Room.hostel))
        if hostel_id is not None:
            query = query.filter(Room.hostel_id == hostel_id)
        if is_available is not None:
            query = query.filter(Room.is_available == is_available)
        return query.order_by(Room.hostel_id, Room.room_number).all()

    # ============================================================================
    # ROOM OCCUPANCY OPERATIONS
    # ============================================================================

    def increment_occupancy_if_free(self, room_id: int) -> bool:
        """
        Take one slot in ``room_id`` if the room is available and not full.

        Check and increment happen in a single UPDATE statement so concurrent
        callers can never push the counter past capacity.

        Returns:
            True when a slot was taken
        """
        stmt = (
            update(Room)
            .where(
                and_(
                    Room.id == room_id,
                    Room.is_available == True,  # noqa: E712
                    Room.current_occupancy < Room.capacity,
                )
            )
            .values(current_occupancy=Room.current_occupancy + 1)
            .execution_options(synchronize_session=False)
        )
        self.db.flush()
        result = self.db.execute(stmt)
        return result.rowcount == 1

    def decrement_occupancy_floored(self, room_id: int) -> bool:
        """
        Give back one slot in ``room_id``; the counter never drops below zero.

        Returns:
            True when the room row exists
        """
        stmt = (
            update(Room)
            .where(Room.id == room_id)
            .values(
                current_occupancy=case(
                    (Room.current_occupancy > 0, Room.current_occupancy - 1),
                    else_=0,
                )
            )
            .execution_options(synchronize_session=False)
        )
        self.db.flush()
        result = self.db.execute(stmt)
        return result.rowcount == 1

    # ============================================================================
    # ROOM SEARCH AND FILTERING
    # ============================================================================

    def search_available_rooms(
        self,
        gender: Optional[Gender] = None,
        hostel_id: Optional[int] = None,
    ) -> List[Room]:
        """
        Available rooms that still have at least one free bed.

        Args:
            gender: Only rooms whose hostel admits this gender
            hostel_id: Hostel filter
        """
        query = (
            select(Room)
            .join(Hostel, Room.hostel_id == Hostel.id)
            .options(joinedload(Room.hostel))
            .where(
                and_(
                    Room.is_available == True,  # noqa: E712
                    Room.current_occupancy < Room.capacity,
                )
            )
        )

        if gender is not None:
            query = query.where(Hostel.gender_allowed.in_([gender, Gender.OTHER]))

        if hostel_id is not None:
            query = query.where(Room.hostel_id == hostel_id)

        query = query.order_by(Hostel.name, Room.floor, Room.room_number)

        result = self.db.execute(query)
        return list(result.scalars().unique().all())

    def count_allocations(self, room_id: int) -> int:
        """Number of allocation rows (active or not) referencing a room."""
        return (
            self.db.query(func.count(Allocation.id))
            .filter(Allocation.room_id == room_id)
            .scalar()
            or 0
        )
