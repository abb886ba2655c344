# hostel_admin/repositories/analytics/analytics_repository.py
"""
Read-only queries feeding the analytics service.

Everything here returns plain rows; aggregation happens in the service so
that empty data sets and zero denominators are handled in one place.
"""

from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.engine import Row
from sqlalchemy.orm import Session, joinedload

from hostel_admin.models.complaint import Complaint
from hostel_admin.models.hostel import Hostel
from hostel_admin.models.maintenance import MaintenanceStaff
from hostel_admin.models.room import Allocation, Room


class AnalyticsRepository:
    """Read model queries over complaints, rooms, hostels and staff."""

    def __init__(self, session: Session):
        self.db = session

    def complaint_facts(
        self,
        hostel_id: Optional[int] = None,
        since: Optional[datetime] = None,
    ) -> List[Row]:
        """
        One row per complaint with the fields analytics needs.

        Columns: id, room_id, hostel_id, category, status, priority,
        assigned_to, created_at, assigned_at, resolved_at.
        """
        stmt = (
            select(
                Complaint.id,
                Complaint.room_id,
                Room.hostel_id,
                Complaint.category,
                Complaint.status,
                Complaint.priority,
                Complaint.assigned_to,
                Complaint.created_at,
                Complaint.assigned_at,
                Complaint.resolved_at,
            )
            .join(Room, Complaint.room_id == Room.id)
        )
        if hostel_id is not None:
            stmt = stmt.where(Room.hostel_id == hostel_id)
        if since is not None:
            stmt = stmt.where(Complaint.created_at >= since)
        return list(self.db.execute(stmt.order_by(Complaint.id)).all())

    def category_status_counts(self) -> List[Row]:
        """(category, status, count) for every combination present."""
        stmt = (
            select(Complaint.category, Complaint.status, func.count(Complaint.id))
            .group_by(Complaint.category, Complaint.status)
        )
        return list(self.db.execute(stmt).all())

    def rooms(self, hostel_id: Optional[int] = None) -> List[Room]:
        query = self.db.query(Room).options(joinedload(Room.hostel))
        if hostel_id is not None:
            query = query.filter(Room.hostel_id == hostel_id)
        return query.order_by(Room.hostel_id, Room.room_number).all()

    def hostels(self) -> List[Hostel]:
        return self.db.query(Hostel).order_by(Hostel.name).all()

    def housed_students_by_hostel(self) -> Dict[int, int]:
        """Number of students with an active allocation, per hostel."""
        stmt = (
            select(Room.hostel_id, func.count(func.distinct(Allocation.student_id)))
            .join(Room, Allocation.room_id == Room.id)
            .where(Allocation.is_active == True)  # noqa: E712
            .group_by(Room.hostel_id)
        )
        return {hostel_id: count for hostel_id, count in self.db.execute(stmt).all()}

    def staff_members(self) -> List[MaintenanceStaff]:
        return self.db.query(MaintenanceStaff).order_by(MaintenanceStaff.name, MaintenanceStaff.id).all()
