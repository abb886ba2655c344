# hostel_admin/repositories/payment/payment_repository.py
"""
Payment repository.
"""

from decimal import Decimal
from typing import Dict, List

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from hostel_admin.models.base.enums import PaymentStatus
from hostel_admin.models.payment import Payment
from hostel_admin.models.student import Student
from hostel_admin.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for Payment entity."""

    resource_name = "Payment"

    def __init__(self, session: Session):
        super().__init__(Payment, session)

    def list_for_student(self, student_id: int) -> List[Payment]:
        return self.find_by_criteria(
            {"student_id": student_id},
            order_by=["-due_date", "-id"],
        )

    def totals_by_status(self, student_id: int) -> Dict[PaymentStatus, Decimal]:
        rows = (
            self.db.query(Payment.payment_status, func.coalesce(func.sum(Payment.amount), 0))
            .filter(Payment.student_id == student_id)
            .group_by(Payment.payment_status)
            .all()
        )
        return {status: Decimal(str(total)) for status, total in rows}

    def find_dues(self) -> List[Payment]:
        """Pending or overdue payments of active students, oldest due first."""
        return (
            self.db.query(Payment)
            .join(Student, Payment.student_id == Student.id)
            .options(joinedload(Payment.student))
            .filter(
                Payment.payment_status.in_([PaymentStatus.PENDING, PaymentStatus.OVERDUE]),
                Student.is_active == True,  # noqa: E712
            )
            .order_by(Payment.due_date.asc(), Payment.id.asc())
            .all()
        )
