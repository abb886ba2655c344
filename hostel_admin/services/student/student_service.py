# hostel_admin/services/student/student_service.py
"""
Student records, deactivation and the student dashboard.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from hostel_admin.config.settings import settings
from hostel_admin.core.exceptions import (
    EntityAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from hostel_admin.models.base.enums import Gender, PaymentStatus
from hostel_admin.models.student import Student
from hostel_admin.repositories.complaint import ComplaintRepository
from hostel_admin.repositories.payment import PaymentRepository
from hostel_admin.repositories.room import AllocationRepository
from hostel_admin.repositories.student import StudentRepository
from hostel_admin.schemas.student import (
    CurrentRoom,
    StudentDashboard,
    StudentDetail,
    StudentResponse,
)
from hostel_admin.services.base import BaseService, ServiceResult
from hostel_admin.services.room.allocation_service import AllocationService

CREATE_FIELDS = (
    "registration_number",
    "first_name",
    "last_name",
    "email",
    "phone",
    "gender",
    "date_of_birth",
    "address",
    "guardian_name",
    "guardian_phone",
    "department",
    "year_of_study",
)
PROFILE_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "address",
    "guardian_name",
    "guardian_phone",
    "department",
    "year_of_study",
)
REQUIRED_PROFILE_FIELDS = ("first_name", "last_name", "email", "phone", "address")

# Outstanding amounts on the dashboard
UNPAID_STATUSES = (PaymentStatus.PENDING, PaymentStatus.OVERDUE, PaymentStatus.PARTIAL)


class StudentService(BaseService[Student, StudentRepository]):
    """Student management."""

    def __init__(
        self,
        repository: StudentRepository,
        allocation_repository: AllocationRepository,
        complaint_repository: ComplaintRepository,
        payment_repository: PaymentRepository,
        allocations: AllocationService,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.allocation_repository = allocation_repository
        self.complaint_repository = complaint_repository
        self.payment_repository = payment_repository
        self.allocations = allocations

    @classmethod
    def from_session(cls, db: Session) -> "StudentService":
        return cls(
            StudentRepository(db),
            AllocationRepository(db),
            ComplaintRepository(db),
            PaymentRepository(db),
            AllocationService.from_session(db),
            db,
        )

    # -------------------------------------------------------------------------
    # Create & Update Operations
    # -------------------------------------------------------------------------

    def create(self, data: Dict[str, Any]) -> ServiceResult[Student]:
        try:
            data = {k: v for k, v in data.items() if k in CREATE_FIELDS}
            try:
                data["gender"] = Gender(data.get("gender"))
            except ValueError:
                raise ValidationError(
                    "Invalid gender. Must be one of: " + ", ".join(g.value for g in Gender),
                    field="gender",
                )
            if data.get("email"):
                data["email"] = data["email"].lower()

            with self.transaction():
                if self.repository.find_by_registration_number(data.get("registration_number")):
                    raise EntityAlreadyExistsError(
                        "Registration number already registered",
                        {"registration_number": data.get("registration_number")},
                    )
                if self.repository.find_by_email(data.get("email")):
                    raise EntityAlreadyExistsError(
                        "Email already registered", {"email": data.get("email")}
                    )
                student = self.repository.create(Student(is_active=True, **data), commit=False)

            self._log_operation("create student", student.id)
            return ServiceResult.success(student, message="Student created successfully")
        except Exception as e:
            return self._handle_exception(e, "create student")

    def update(self, student_id: int, changes: Dict[str, Any]) -> ServiceResult[Student]:
        """
        Update profile fields.

        Activity, gender and registration number are not editable here;
        deactivation goes through :meth:`deactivate`.
        """
        try:
            data = {k: v for k, v in changes.items() if k in PROFILE_FIELDS}
            if not data:
                raise ValidationError("No fields to update")
            for field in REQUIRED_PROFILE_FIELDS:
                if field in data and data[field] is None:
                    raise ValidationError(f"{field} cannot be null", field=field)
            if data.get("email"):
                data["email"] = data["email"].lower()

            with self.transaction():
                student = self.repository.get_by_id(student_id)
                if "email" in data and data["email"] != student.email:
                    if self.repository.find_by_email(data["email"]):
                        raise EntityAlreadyExistsError(
                            "Email already registered", {"email": data["email"]}
                        )
                self.repository.update(student, data, commit=False)

            self._log_operation("update student", student_id, {"fields": sorted(data)})
            return ServiceResult.success(student, message="Student updated successfully")
        except Exception as e:
            return self._handle_exception(e, "update student", student_id)

    def deactivate(self, student_id: int) -> ServiceResult[Student]:
        """
        Mark a student inactive and check out their active allocation.

        Both happen in one transaction. Deactivating an inactive student is
        a no-op success.
        """
        try:
            with self.transaction():
                student = self.repository.find_for_update(student_id)
                if student is None:
                    raise ResourceNotFoundError("Student", student_id)
                student.is_active = False
                self.db.flush()
                released = self.allocations.release_active_allocation(student_id)

            self._log_operation(
                "deactivate student",
                student_id,
                {"released_allocation_id": released.id if released else None},
            )
            return ServiceResult.success(student, message="Student deactivated successfully")
        except Exception as e:
            return self._handle_exception(e, "deactivate student", student_id)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get(self, student_id: int) -> ServiceResult[StudentDetail]:
        try:
            student = self.repository.find_by_id(student_id)
            if student is None:
                return ServiceResult.not_found("Student", student_id)

            detail = StudentDetail(
                **StudentResponse.model_validate(student).model_dump(),
                current_room=self._current_room(student_id),
            )
            return ServiceResult.success(detail)
        except Exception as e:
            return self._handle_exception(e, "get student", student_id)

    def list(
        self,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[Student]]:
        try:
            limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
            result = self.repository.search(search=search, is_active=is_active, page=page, limit=limit)
            return ServiceResult.success(result.items, metadata=self._page_meta(result.page_info))
        except Exception as e:
            return self._handle_exception(e, "list students")

    def dashboard(self, student_id: int) -> ServiceResult[StudentDashboard]:
        """Room, fee and complaint summary for one student."""
        try:
            student = self.repository.find_by_id(student_id)
            if student is None:
                return ServiceResult.not_found("Student", student_id)

            totals = self.payment_repository.totals_by_status(student_id)
            pending = sum((totals.get(s, Decimal("0")) for s in UNPAID_STATUSES), Decimal("0"))

            return ServiceResult.success(
                StudentDashboard(
                    student_id=student.id,
                    student_name=student.full_name,
                    registration_number=student.registration_number,
                    email=student.email,
                    department=student.department,
                    year_of_study=student.year_of_study,
                    is_active=student.is_active,
                    current_room=self._current_room(student_id),
                    total_paid=totals.get(PaymentStatus.PAID, Decimal("0")),
                    pending_amount=pending,
                    total_complaints=self.complaint_repository.count_for_student(student_id),
                    active_complaints=self.complaint_repository.count_for_student(
                        student_id, active_only=True
                    ),
                )
            )
        except Exception as e:
            return self._handle_exception(e, "get student dashboard", student_id)

    def _current_room(self, student_id: int) -> Optional[CurrentRoom]:
        allocation = self.allocation_repository.find_active_for_student(student_id)
        if allocation is None:
            return None
        room = allocation.room
        return CurrentRoom(
            allocation_id=allocation.id,
            room_id=room.id,
            room_number=room.room_number,
            floor=room.floor,
            hostel_id=room.hostel_id,
            hostel_name=room.hostel.name,
            allocation_date=allocation.allocation_date,
            expected_checkout=allocation.expected_checkout,
        )
