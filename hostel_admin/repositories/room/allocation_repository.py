# hostel_admin/repositories/room/allocation_repository.py
"""
Allocation repository.
"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import Query, Session, joinedload

from hostel_admin.core.utils import today
from hostel_admin.models.room import Allocation, Room
from hostel_admin.repositories.base.base_repository import BaseRepository
from hostel_admin.repositories.base.pagination import PaginatedResult


class AllocationRepository(BaseRepository[Allocation]):
    """Repository for Allocation entity."""

    resource_name = "Allocation"

    def __init__(self, session: Session):
        super().__init__(Allocation, session)

    def find_active_for_student(self, student_id: int) -> Optional[Allocation]:
        return (
            self.db.query(Allocation)
            .filter(Allocation.student_id == student_id, Allocation.is_active == True)  # noqa: E712
            .first()
        )

    def find_detail(self, allocation_id: int) -> Optional[Allocation]:
        return (
            self._detail_query()
            .filter(Allocation.id == allocation_id)
            .first()
        )

    def _detail_query(self) -> Query:
        return self.db.query(Allocation).options(
            joinedload(Allocation.student),
            joinedload(Allocation.room).joinedload(Room.hostel),
        )

    def deactivate_if_active(self, allocation_id: int) -> bool:
        """
        Check an allocation out today, only if it is still active.

        The active check and the write are one UPDATE, so of two concurrent
        checkouts exactly one sees ``True``. Caller owns the transaction.
        """
        self.db.flush()
        stmt = (
            update(Allocation)
            .where(Allocation.id == allocation_id, Allocation.is_active == True)  # noqa: E712
            .values(is_active=False, actual_checkout=today())
            .execution_options(synchronize_session=False)
        )
        changed = self.db.execute(stmt).rowcount == 1
        self.reload(allocation_id)
        return changed

    def reload(self, allocation_id: int) -> Optional[Allocation]:
        return self.db.get(Allocation, allocation_id, populate_existing=True)

    def search(
        self,
        student_id: Optional[int] = None,
        room_id: Optional[int] = None,
        hostel_id: Optional[int] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> PaginatedResult:
        query = self._detail_query().join(Allocation.room)

        if student_id is not None:
            query = query.filter(Allocation.student_id == student_id)
        if room_id is not None:
            query = query.filter(Allocation.room_id == room_id)
        if hostel_id is not None:
            query = query.filter(Room.hostel_id == hostel_id)
        if is_active is not None:
            query = query.filter(Allocation.is_active == is_active)

        query = query.order_by(Allocation.allocation_date.desc(), Allocation.id.desc())
        return self.paginate_query(query, page, limit)
