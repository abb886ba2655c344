# hostel_admin/services/payment/payment_service.py
"""
Fee payment records and the outstanding dues report.
"""

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from hostel_admin.core.exceptions import (
    ConflictError,
    EntityAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from hostel_admin.core.utils import today
from hostel_admin.models.base.enums import PaymentStatus
from hostel_admin.models.payment import Payment
from hostel_admin.models.room import Allocation
from hostel_admin.repositories.payment import PaymentRepository
from hostel_admin.repositories.student import StudentRepository
from hostel_admin.schemas.payment import PaymentDue
from hostel_admin.services.base import BaseService, ServiceResult


def _positive_amount(amount: Any) -> Decimal:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError("Amount must be a number", field="amount")
    if not value.is_finite() or value <= 0:
        raise ValidationError("Amount must be greater than zero", field="amount")
    return value


class PaymentService(BaseService[Payment, PaymentRepository]):
    """Payment recording and settlement."""

    def __init__(
        self,
        repository: PaymentRepository,
        student_repository: StudentRepository,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.student_repository = student_repository

    @classmethod
    def from_session(cls, db: Session) -> "PaymentService":
        return cls(PaymentRepository(db), StudentRepository(db), db)

    def record(
        self,
        student_id: int,
        amount: Any,
        due_date: date,
        allocation_id: Optional[int] = None,
        payment_method: Optional[str] = None,
        semester: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ServiceResult[Payment]:
        """Record a pending payment owed by a student."""
        try:
            amount = _positive_amount(amount)
            if due_date is None:
                raise ValidationError("Due date is required", field="due_date")

            with self.transaction():
                self.student_repository.get_by_id(student_id)
                if allocation_id is not None:
                    allocation = self.db.get(Allocation, allocation_id)
                    if allocation is None:
                        raise ResourceNotFoundError("Allocation", allocation_id)
                    if allocation.student_id != student_id:
                        raise ValidationError(
                            "Allocation does not belong to this student",
                            field="allocation_id",
                        )

                payment = self.repository.create(
                    Payment(
                        student_id=student_id,
                        allocation_id=allocation_id,
                        amount=amount,
                        due_date=due_date,
                        payment_status=PaymentStatus.PENDING,
                        payment_method=payment_method,
                        semester=semester,
                        notes=notes,
                    ),
                    commit=False,
                )

            self._log_operation("record payment", payment.id, {"student_id": student_id})
            return ServiceResult.success(payment, message="Payment recorded successfully")
        except Exception as e:
            return self._handle_exception(e, "record payment", student_id)

    def mark_paid(
        self,
        payment_id: int,
        payment_date: Optional[date] = None,
        payment_method: Optional[str] = None,
        transaction_id: Optional[str] = None,
        receipt_number: Optional[str] = None,
    ) -> ServiceResult[Payment]:
        try:
            with self.transaction():
                payment = self.repository.get_by_id(payment_id)
                if payment.payment_status == PaymentStatus.PAID:
                    raise ConflictError(
                        "Payment is already paid", details={"payment_id": payment_id}
                    )
                if receipt_number and self.repository.exists({"receipt_number": receipt_number}):
                    raise EntityAlreadyExistsError(
                        "Receipt number already used", {"receipt_number": receipt_number}
                    )

                changes = {
                    "payment_status": PaymentStatus.PAID,
                    "payment_date": payment_date or today(),
                    "transaction_id": transaction_id,
                    "receipt_number": receipt_number,
                }
                if payment_method is not None:
                    changes["payment_method"] = payment_method
                self.repository.update(payment, changes, commit=False)

            self._log_operation("mark payment paid", payment_id)
            return ServiceResult.success(payment, message="Payment marked as paid")
        except Exception as e:
            return self._handle_exception(e, "mark payment paid", payment_id)

    def list_for_student(self, student_id: int) -> ServiceResult[List[Payment]]:
        try:
            if self.student_repository.find_by_id(student_id) is None:
                return ServiceResult.not_found("Student", student_id)
            return ServiceResult.success(self.repository.list_for_student(student_id))
        except Exception as e:
            return self._handle_exception(e, "list student payments", student_id)

    def dues_report(self) -> ServiceResult[List[PaymentDue]]:
        """Pending and overdue payments of active students, oldest due first."""
        try:
            current = today()
            rows = [
                PaymentDue(
                    payment_id=p.id,
                    student_id=p.student_id,
                    student_name=p.student.full_name,
                    registration_number=p.student.registration_number,
                    amount=p.amount,
                    due_date=p.due_date,
                    payment_status=p.payment_status,
                    days_overdue=max((current - p.due_date).days, 0),
                )
                for p in self.repository.find_dues()
            ]
            return ServiceResult.success(rows)
        except Exception as e:
            return self._handle_exception(e, "build dues report")
