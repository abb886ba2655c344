# hostel_admin/repositories/complaint/complaint_log_repository.py
"""
Append-only complaint log repository.

Only inserts and reads are exposed.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostel_admin.core.exceptions import ConflictError
from hostel_admin.models.base.enums import ComplaintStatus
from hostel_admin.models.complaint import ComplaintLog
from hostel_admin.repositories.base.base_repository import BaseRepository


class ComplaintLogRepository(BaseRepository[ComplaintLog]):
    """Repository for ComplaintLog entries."""

    resource_name = "Complaint log"

    def __init__(self, session: Session):
        super().__init__(ComplaintLog, session)

    def append(
        self,
        complaint_id: int,
        old_status: Optional[ComplaintStatus],
        new_status: ComplaintStatus,
        changed_by: str = "system",
        notes: Optional[str] = None,
    ) -> ComplaintLog:
        entry = ComplaintLog(
            complaint_id=complaint_id,
            old_status=old_status,
            new_status=new_status,
            changed_by=changed_by or "system",
            notes=notes,
        )
        return self.create(entry, commit=False)

    def list_for_complaint(self, complaint_id: int) -> List[ComplaintLog]:
        """History of one complaint, newest first."""
        return self.find_by_criteria(
            {"complaint_id": complaint_id},
            order_by=["-changed_at", "-id"],
        )

    def update(self, entity, data, commit=True):
        raise ConflictError("Complaint logs are append-only", details={"log_id": entity.id})

    def delete(self, entity, commit=True):
        raise ConflictError("Complaint logs are append-only", details={"log_id": entity.id})
