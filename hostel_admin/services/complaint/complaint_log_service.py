# hostel_admin/services/complaint/complaint_log_service.py
"""
Audit log of complaint status changes.

Append-only: entries are written by the complaint state machine inside its
own transaction and are never updated or deleted.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostel_admin.models.base.enums import ComplaintStatus
from hostel_admin.models.complaint import Complaint, ComplaintLog
from hostel_admin.repositories.complaint import ComplaintLogRepository
from hostel_admin.services.base import BaseService, ServiceResult


class ComplaintLogService(BaseService[ComplaintLog, ComplaintLogRepository]):
    """Append and read complaint status history."""

    def __init__(self, repository: ComplaintLogRepository, db_session: Session):
        super().__init__(repository, db_session)

    def append(
        self,
        complaint_id: int,
        old_status: Optional[ComplaintStatus],
        new_status: ComplaintStatus,
        changed_by: str = "system",
        notes: Optional[str] = None,
    ) -> ComplaintLog:
        """Write one history row in the caller's transaction."""
        entry = self.repository.append(
            complaint_id,
            old_status,
            new_status,
            changed_by=changed_by,
            notes=notes,
        )
        self._logger.debug(
            "Complaint status logged",
            extra={
                "complaint_id": complaint_id,
                "old_status": old_status.value if old_status else None,
                "new_status": new_status.value,
            },
        )
        return entry

    def list_for_complaint(self, complaint_id: int) -> ServiceResult[List[ComplaintLog]]:
        """History of a complaint, newest first."""
        try:
            if self.db.get(Complaint, complaint_id) is None:
                return ServiceResult.not_found("Complaint", complaint_id)
            return ServiceResult.success(self.repository.list_for_complaint(complaint_id))
        except Exception as e:
            return self._handle_exception(e, "list complaint history", complaint_id)
