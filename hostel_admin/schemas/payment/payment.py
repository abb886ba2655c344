"""
Payment schemas.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import Field

from hostel_admin.models.base.enums import PaymentStatus
from hostel_admin.schemas.common.base import BaseCreateSchema, BaseDBSchema, BaseSchema

__all__ = ["PaymentCreate", "PaymentMarkPaid", "PaymentResponse", "PaymentDue"]


class PaymentCreate(BaseCreateSchema):
    student_id: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    due_date: date
    allocation_id: Optional[int] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    semester: Optional[str] = Field(default=None, max_length=20)
    notes: Optional[str] = None


class PaymentMarkPaid(BaseSchema):
    payment_date: Optional[date] = None
    payment_method: Optional[str] = Field(default=None, max_length=50)
    transaction_id: Optional[str] = Field(default=None, max_length=100)
    receipt_number: Optional[str] = Field(default=None, max_length=50)


class PaymentResponse(BaseDBSchema):
    student_id: int
    allocation_id: Optional[int] = None
    amount: Decimal
    payment_date: Optional[date] = None
    due_date: date
    payment_status: PaymentStatus
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    receipt_number: Optional[str] = None
    semester: Optional[str] = None
    notes: Optional[str] = None


class PaymentDue(BaseSchema):
    """Row of the outstanding dues report."""

    payment_id: int
    student_id: int
    student_name: str
    registration_number: str
    amount: Decimal
    due_date: date
    payment_status: PaymentStatus
    days_overdue: int
