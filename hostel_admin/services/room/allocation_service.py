# hostel_admin/services/room/allocation_service.py
"""
Allocation manager: creates and ends room allocations.

Every allocation change is paired with the matching room ledger operation
in the same transaction, so a room's occupancy, its allocation rows and a
student's current room never disagree.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from hostel_admin.config.settings import settings
from hostel_admin.core.exceptions import (
    AlreadyInactiveError,
    GenderMismatchError,
    ResourceNotFoundError,
    RoomUnavailableError,
    StudentInactiveError,
    ValidationError,
)
from hostel_admin.core.utils import today
from hostel_admin.models.base.enums import Gender
from hostel_admin.models.hostel import Hostel
from hostel_admin.models.room import Allocation
from hostel_admin.models.student import Student
from hostel_admin.repositories.room import AllocationRepository, RoomRepository
from hostel_admin.repositories.student import StudentRepository
from hostel_admin.schemas.allocation import AllocationDetail
from hostel_admin.services.base import BaseService, ServiceResult
from hostel_admin.services.room.room_ledger import RoomLedger

UPDATABLE_FIELDS = ("expected_checkout", "notes")


class AllocationService(BaseService[Allocation, AllocationRepository]):
    """
    Room allocation lifecycle.

    Sole caller of the room ledger's mutators.
    """

    def __init__(
        self,
        repository: AllocationRepository,
        room_repository: RoomRepository,
        student_repository: StudentRepository,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository
        self.student_repository = student_repository
        self.ledger = RoomLedger(room_repository)

    @classmethod
    def from_session(cls, db: Session) -> "AllocationService":
        return cls(
            AllocationRepository(db),
            RoomRepository(db),
            StudentRepository(db),
            db,
        )

    # -------------------------------------------------------------------------
    # Assign / checkout
    # -------------------------------------------------------------------------

    def assign(
        self,
        student_id: int,
        room_id: int,
        expected_checkout: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> ServiceResult[Allocation]:
        """
        Allocate ``room_id`` to ``student_id``.

        A student who already holds a room is moved: the old allocation is
        checked out and its bed released before the new bed is reserved. If
        the new room turns out to be full the whole move is rolled back and
        the old allocation stays active.
        """
        try:
            if expected_checkout is not None and expected_checkout < today():
                raise ValidationError(
                    "Expected checkout date cannot be in the past",
                    field="expected_checkout",
                )

            with self.transaction():
                student = self.student_repository.find_for_update(student_id)
                if student is None:
                    raise ResourceNotFoundError("Student", student_id)
                if not student.is_active:
                    raise StudentInactiveError(student_id)

                room = self.room_repository.find_with_hostel(room_id)
                if room is None:
                    raise ResourceNotFoundError("Room", room_id)
                if not room.is_available:
                    raise RoomUnavailableError(room_id)
                self._check_gender_policy(room.hostel, student)

                previous = self.release_active_allocation(student_id)

                self.ledger.reserve_slot(room_id)

                allocation = Allocation(
                    student_id=student_id,
                    room_id=room_id,
                    allocation_date=today(),
                    expected_checkout=expected_checkout,
                    notes=notes,
                    is_active=True,
                )
                self.repository.create(allocation, commit=False)

            self._log_operation(
                "assign room",
                allocation.id,
                {
                    "student_id": student_id,
                    "room_id": room_id,
                    "previous_allocation_id": previous.id if previous else None,
                },
            )
            return ServiceResult.success(allocation, message="Room allocated successfully")

        except Exception as e:
            return self._handle_exception(e, "assign room", f"student={student_id} room={room_id}")

    def checkout(self, allocation_id: int) -> ServiceResult[Allocation]:
        """
        End an active allocation and release its bed.

        A second checkout of the same allocation fails with ALREADY_INACTIVE
        and does not touch the room again.
        """
        try:
            with self.transaction():
                allocation = self.repository.find_by_id(allocation_id)
                if allocation is None:
                    raise ResourceNotFoundError("Allocation", allocation_id)
                if not self.repository.deactivate_if_active(allocation_id):
                    raise AlreadyInactiveError(allocation_id)
                self.ledger.release_slot(allocation.room_id)

            self._log_operation("checkout", allocation_id, {"room_id": allocation.room_id})
            return ServiceResult.success(allocation, message="Checkout completed successfully")

        except Exception as e:
            return self._handle_exception(e, "checkout allocation", allocation_id)

    def deactivate_for_student(self, student_id: int) -> ServiceResult[Optional[Allocation]]:
        """Check out the student's active allocation, if there is one."""
        try:
            with self.transaction():
                released = self.release_active_allocation(student_id)

            if released is not None:
                self._log_operation(
                    "checkout student",
                    released.id,
                    {"student_id": student_id, "room_id": released.room_id},
                )
            return ServiceResult.success(released)

        except Exception as e:
            return self._handle_exception(e, "deactivate student allocation", student_id)

    def release_active_allocation(self, student_id: int) -> Optional[Allocation]:
        """
        Check out the student's active allocation inside the caller's transaction.

        Returns:
            The allocation that was ended, or None when there was none
        """
        current = self.repository.find_active_for_student(student_id)
        if current is None:
            return None
        if self.repository.deactivate_if_active(current.id):
            self.ledger.release_slot(current.room_id)
            return current
        return None

    @staticmethod
    def _check_gender_policy(hostel: Hostel, student: Student) -> None:
        allowed = hostel.gender_allowed
        if allowed != Gender.OTHER and allowed != student.gender:
            raise GenderMismatchError(allowed.value, student.gender.value)

    # -------------------------------------------------------------------------
    # Read / non-ledger updates
    # -------------------------------------------------------------------------

    def get(self, allocation_id: int) -> ServiceResult[AllocationDetail]:
        try:
            allocation = self.repository.find_detail(allocation_id)
            if allocation is None:
                return ServiceResult.not_found("Allocation", allocation_id)
            return ServiceResult.success(self.to_detail(allocation))
        except Exception as e:
            return self._handle_exception(e, "get allocation", allocation_id)

    def list(
        self,
        student_id: Optional[int] = None,
        room_id: Optional[int] = None,
        hostel_id: Optional[int] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> ServiceResult[List[AllocationDetail]]:
        try:
            limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)
            result = self.repository.search(
                student_id=student_id,
                room_id=room_id,
                hostel_id=hostel_id,
                is_active=is_active,
                page=page,
                limit=limit,
            )
            return ServiceResult.success(
                [self.to_detail(a) for a in result.items],
                metadata=self._page_meta(result.page_info),
            )
        except Exception as e:
            return self._handle_exception(e, "list allocations")

    def update_details(
        self,
        allocation_id: int,
        changes: Dict[str, Any],
    ) -> ServiceResult[Allocation]:
        """
        Update ``expected_checkout`` and/or ``notes``.

        Room, student and activity are never changed here.
        """
        try:
            data = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
            if not data:
                raise ValidationError("No fields to update")

            with self.transaction():
                allocation = self.repository.get_by_id(allocation_id)
                new_checkout = data.get("expected_checkout")
                if new_checkout is not None and new_checkout < allocation.allocation_date:
                    raise ValidationError(
                        "Expected checkout cannot be before the allocation date",
                        field="expected_checkout",
                    )
                self.repository.update(allocation, data, commit=False)

            self._log_operation("update allocation", allocation_id, {"fields": sorted(data)})
            return ServiceResult.success(allocation, message="Allocation updated successfully")

        except Exception as e:
            return self._handle_exception(e, "update allocation", allocation_id)

    @staticmethod
    def to_detail(allocation: Allocation) -> AllocationDetail:
        room = allocation.room
        return AllocationDetail(
            id=allocation.id,
            student_id=allocation.student_id,
            student_name=allocation.student.full_name,
            registration_number=allocation.student.registration_number,
            room_id=allocation.room_id,
            room_number=room.room_number,
            hostel_id=room.hostel_id,
            hostel_name=room.hostel.name,
            allocation_date=allocation.allocation_date,
            expected_checkout=allocation.expected_checkout,
            actual_checkout=allocation.actual_checkout,
            is_active=allocation.is_active,
            notes=allocation.notes,
        )
