# hostel_admin/repositories/complaint/complaint_repository.py
"""
Complaint repository with listing, detail loading and status timestamps.
"""

from typing import Optional

from sqlalchemy import case
from sqlalchemy.orm import Query, Session, joinedload

from hostel_admin.core.utils import utcnow
from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus
from hostel_admin.models.complaint import Complaint
from hostel_admin.models.room import Room
from hostel_admin.repositories.base.base_repository import BaseRepository
from hostel_admin.repositories.base.pagination import PaginatedResult

# Active statuses first, in lifecycle order
STATUS_SORT_ORDER = case(
    (Complaint.status == ComplaintStatus.OPEN, 1),
    (Complaint.status == ComplaintStatus.ASSIGNED, 2),
    (Complaint.status == ComplaintStatus.IN_PROGRESS, 3),
    else_=4,
)


class ComplaintRepository(BaseRepository[Complaint]):
    """
    Repository for Complaint entity.

    Handles:
    - Complaint lookups with related student/room/staff
    - Filtered, prioritized listings
    - One-time status timestamps
    """

    resource_name = "Complaint"

    def __init__(self, session: Session):
        super().__init__(Complaint, session)

    def _detail_query(self) -> Query:
        return self.db.query(Complaint).options(
            joinedload(Complaint.student),
            joinedload(Complaint.room).joinedload(Room.hostel),
            joinedload(Complaint.assigned_staff),
        )

    def find_detail(self, complaint_id: int) -> Optional[Complaint]:
        return self._detail_query().filter(Complaint.id == complaint_id).first()

    def find_for_update(self, complaint_id: int) -> Optional[Complaint]:
        """Load a complaint with a row lock held until the transaction ends."""
        return (
            self.db.query(Complaint)
            .filter(Complaint.id == complaint_id)
            .populate_existing()
            .with_for_update()
            .first()
        )

    def search_complaints(
        self,
        status: Optional[ComplaintStatus] = None,
        category: Optional[ComplaintCategory] = None,
        student_id: Optional[int] = None,
        room_id: Optional[int] = None,
        hostel_id: Optional[int] = None,
        priority: Optional[int] = None,
        assigned: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> PaginatedResult:
        """
        Search complaints.

        Results are ordered open, assigned, in progress, then everything
        else; within a status by priority (1 first) and newest first.
        """
        query = self._detail_query()

        if status is not None:
            query = query.filter(Complaint.status == status)
        if category is not None:
            query = query.filter(Complaint.category == category)
        if student_id is not None:
            query = query.filter(Complaint.student_id == student_id)
        if room_id is not None:
            query = query.filter(Complaint.room_id == room_id)
        if hostel_id is not None:
            query = query.join(Room, Complaint.room_id == Room.id).filter(Room.hostel_id == hostel_id)
        if priority is not None:
            query = query.filter(Complaint.priority == priority)
        if assigned is True:
            query = query.filter(Complaint.assigned_to.isnot(None))
        elif assigned is False:
            query = query.filter(Complaint.assigned_to.is_(None))

        query = query.order_by(
            STATUS_SORT_ORDER,
            Complaint.priority.asc(),
            Complaint.created_at.desc(),
            Complaint.id.desc(),
        )
        return self.paginate_query(query, page, limit)

    def count_for_student(self, student_id: int, active_only: bool = False) -> int:
        criteria = {"student_id": student_id}
        if active_only:
            criteria["status"] = list(ComplaintStatus.active())
        return self.count(criteria)

    @staticmethod
    def apply_status_timestamps(complaint: Complaint, new_status: ComplaintStatus) -> None:
        """
        Stamp the first time a complaint reaches assigned, resolved or closed.

        Timestamps already set are never overwritten.
        """
        now = utcnow()

        if new_status == ComplaintStatus.ASSIGNED and not complaint.assigned_at:
            complaint.assigned_at = now

        elif new_status == ComplaintStatus.RESOLVED and not complaint.resolved_at:
            complaint.resolved_at = now

        elif new_status == ComplaintStatus.CLOSED and not complaint.closed_at:
            complaint.closed_at = now
