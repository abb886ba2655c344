# hostel_admin/services/complaint/complaint_service.py
"""
Core complaint service: creation, state transitions and listings.

Every status change and its history row are written in one transaction;
all checks run before the first write.
"""

from typing import Any, List, Optional, Union

from sqlalchemy.orm import Session

from hostel_admin.config.settings import settings
from hostel_admin.core.exceptions import (
    InvalidStatusError,
    MissingAssignmentError,
    ResourceNotFoundError,
    StaffUnavailableError,
    StudentInactiveError,
    ValidationError,
)
from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus
from hostel_admin.models.complaint import Complaint
from hostel_admin.models.room import Room
from hostel_admin.repositories.complaint import ComplaintLogRepository, ComplaintRepository
from hostel_admin.repositories.maintenance import MaintenanceStaffRepository
from hostel_admin.repositories.student import StudentRepository
from hostel_admin.schemas.complaint import ComplaintDetail, ComplaintLogResponse
from hostel_admin.services.base import BaseService, ServiceResult
from hostel_admin.services.complaint.complaint_log_service import ComplaintLogService

# Marks a keyword argument the caller did not pass at all
UNSET: Any = object()

CREATED_NOTE = "Complaint created"


def parse_category(value: Union[str, ComplaintCategory]) -> ComplaintCategory:
    try:
        return ComplaintCategory(value)
    except ValueError:
        allowed = ", ".join(c.value for c in ComplaintCategory)
        raise ValidationError(f"Invalid category. Must be one of: {allowed}", field="category")


def parse_status(value: Union[str, ComplaintStatus]) -> ComplaintStatus:
    try:
        return ComplaintStatus(value)
    except ValueError:
        raise InvalidStatusError(value, [s.value for s in ComplaintStatus])


def validate_priority(priority: Any) -> int:
    if isinstance(priority, bool) or not isinstance(priority, int) or not 1 <= priority <= 5:
        raise ValidationError("Priority must be between 1 and 5", field="priority")
    return priority


def status_change_note(
    new_status: ComplaintStatus,
    assigned_to: Optional[int],
    resolution_notes: Optional[str],
) -> Optional[str]:
    """History note for a status change."""
    if new_status == ComplaintStatus.ASSIGNED:
        return f"Assigned to staff ID: {assigned_to}"
    if new_status == ComplaintStatus.RESOLVED:
        return f"Resolution: {resolution_notes or 'No notes'}"
    return None


class ComplaintService(BaseService[Complaint, ComplaintRepository]):
    """
    Complaint state machine.

    Any status may move to any other status (reopening included); the
    assigned/resolved/closed timestamps are only set the first time.
    """

    def __init__(
        self,
        repository: ComplaintRepository,
        student_repository: StudentRepository,
        staff_repository: MaintenanceStaffRepository,
        audit_log: ComplaintLogService,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.student_repository = student_repository
        self.staff_repository = staff_repository
        self.audit_log = audit_log

    @classmethod
    def from_session(cls, db: Session) -> "ComplaintService":
        return cls(
            ComplaintRepository(db),
            StudentRepository(db),
            MaintenanceStaffRepository(db),
            ComplaintLogService(ComplaintLogRepository(db), db),
            db,
        )

    # -------------------------------------------------------------------------
    # Create & Update Operations
    # -------------------------------------------------------------------------

    def create(
        self,
        student_id: int,
        room_id: int,
        category: Union[str, ComplaintCategory],
        title: str,
        description: str,
        priority: int = 3,
        actor: Optional[str] = "system",
    ) -> ServiceResult[Complaint]:
        """
        Open a new complaint and record its first history row.
        """
        try:
            category = parse_category(category)
            priority = validate_priority(priority)
            if not title or not title.strip():
                raise ValidationError("Title is required", field="title")
            if not description or not description.strip():
                raise ValidationError("Description is required", field="description")

            with self.transaction():
                student = self.student_repository.find_by_id(student_id)
                if student is None:
                    raise ResourceNotFoundError("Student", student_id)
                if not student.is_active:
                    raise StudentInactiveError(student_id)
                if self.db.get(Room, room_id) is None:
                    raise ResourceNotFoundError("Room", room_id)

                complaint = Complaint(
                    student_id=student_id,
                    room_id=room_id,
                    category=category,
                    title=title.strip(),
                    description=description.strip(),
                    priority=priority,
                    status=ComplaintStatus.OPEN,
                )
                self.repository.create(complaint, commit=False)
                self.audit_log.append(
                    complaint.id,
                    None,
                    ComplaintStatus.OPEN,
                    changed_by=actor or "system",
                    notes=CREATED_NOTE,
                )

            self._log_operation(
                "create complaint",
                complaint.id,
                {"category": category.value, "priority": priority},
            )
            return ServiceResult.success(complaint, message="Complaint created successfully")

        except Exception as e:
            return self._handle_exception(e, "create complaint", f"student={student_id} room={room_id}")

    def transition(
        self,
        complaint_id: int,
        status: Optional[Union[str, ComplaintStatus]] = None,
        assigned_staff_id: Optional[int] = UNSET,
        resolution_notes: Optional[str] = None,
        priority: Optional[int] = None,
        actor: Optional[str] = "system",
    ) -> ServiceResult[Complaint]:
        """
        Update a complaint's status, assignment, notes and/or priority.

        Passing ``assigned_staff_id=None`` unassigns; leaving it out keeps the
        current assignment. Assigning staff to an open complaint without an
        explicit status moves it to ``assigned``. A history row is written
        only when the status actually changes.
        """
        try:
            staff_given = assigned_staff_id is not UNSET
            if status is None and not staff_given and resolution_notes is None and priority is None:
                raise ValidationError("No fields to update")

            new_status = parse_status(status) if status is not None else None
            if priority is not None:
                validate_priority(priority)

            with self.transaction():
                complaint = self.repository.find_for_update(complaint_id)
                if complaint is None:
                    raise ResourceNotFoundError("Complaint", complaint_id)

                if staff_given and assigned_staff_id is not None:
                    if self.staff_repository.find_available(assigned_staff_id) is None:
                        raise StaffUnavailableError(assigned_staff_id)

                assigned_to = assigned_staff_id if staff_given else complaint.assigned_to

                if new_status == ComplaintStatus.ASSIGNED and assigned_to is None:
                    raise MissingAssignmentError(complaint_id)

                if (
                    new_status is None
                    and staff_given
                    and assigned_staff_id is not None
                    and complaint.status == ComplaintStatus.OPEN
                ):
                    new_status = ComplaintStatus.ASSIGNED

                old_status = complaint.status
                if staff_given:
                    complaint.assigned_to = assigned_staff_id
                if resolution_notes is not None:
                    complaint.resolution_notes = resolution_notes
                if priority is not None:
                    complaint.priority = priority

                status_changed = new_status is not None and new_status != old_status
                if status_changed:
                    complaint.status = new_status
                    self.repository.apply_status_timestamps(complaint, new_status)

                self.db.flush()

                if status_changed:
                    self.audit_log.append(
                        complaint.id,
                        old_status,
                        new_status,
                        changed_by=actor or "system",
                        notes=status_change_note(
                            new_status, complaint.assigned_to, complaint.resolution_notes
                        ),
                    )

            self._log_operation(
                "update complaint",
                complaint_id,
                {
                    "old_status": old_status.value,
                    "new_status": complaint.status.value,
                    "status_changed": status_changed,
                },
            )
            return ServiceResult.success(complaint, message="Complaint updated successfully")

        except Exception as e:
            return self._handle_exception(e, "update complaint", complaint_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_detail(self, complaint_id: int) -> ServiceResult[ComplaintDetail]:
        """Complaint with related names and history (newest first)."""
        try:
            complaint = self.repository.find_detail(complaint_id)
            if complaint is None:
                return ServiceResult.not_found("Complaint", complaint_id)

            history = self.audit_log.list_for_complaint(complaint_id)
            if not history:
                return history

            return ServiceResult.success(self.to_detail(complaint, history.data))
        except Exception as e:
            return self._handle_exception(e, "get complaint", complaint_id)

    def list(
        self,
        status: Optional[Union[str, ComplaintStatus]] = None,
        category: Optional[Union[str, ComplaintCategory]] = None,
        student_id: Optional[int] = None,
        room_id: Optional[int] = None,
        hostel_id: Optional[int] = None,
        priority: Optional[int] = None,
        assigned: Optional[bool] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[ComplaintDetail]]:
        try:
            status = parse_status(status) if status is not None else None
            category = parse_category(category) if category is not None else None
            if priority is not None:
                validate_priority(priority)
            limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)

            result = self.repository.search_complaints(
                status=status,
                category=category,
                student_id=student_id,
                room_id=room_id,
                hostel_id=hostel_id,
                priority=priority,
                assigned=assigned,
                page=page,
                limit=limit,
            )
            return ServiceResult.success(
                [self.to_detail(c) for c in result.items],
                metadata=self._page_meta(result.page_info),
            )
        except Exception as e:
            return self._handle_exception(e, "list complaints")

    @staticmethod
    def to_detail(complaint: Complaint, history=None) -> ComplaintDetail:
        room = complaint.room
        staff = complaint.assigned_staff
        return ComplaintDetail(
            id=complaint.id,
            created_at=complaint.created_at,
            updated_at=complaint.updated_at,
            student_id=complaint.student_id,
            room_id=complaint.room_id,
            category=complaint.category,
            title=complaint.title,
            description=complaint.description,
            status=complaint.status,
            priority=complaint.priority,
            assigned_to=complaint.assigned_to,
            resolution_notes=complaint.resolution_notes,
            assigned_at=complaint.assigned_at,
            resolved_at=complaint.resolved_at,
            closed_at=complaint.closed_at,
            student_name=complaint.student.full_name,
            registration_number=complaint.student.registration_number,
            room_number=room.room_number,
            hostel_id=room.hostel_id,
            hostel_name=room.hostel.name,
            assigned_staff_name=staff.name if staff else None,
            history=[ComplaintLogResponse.model_validate(entry) for entry in history or []],
        )
