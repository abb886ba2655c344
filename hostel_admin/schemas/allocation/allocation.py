"""
Allocation schemas.
"""

from datetime import date
from typing import Optional

from pydantic import Field

from hostel_admin.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "AllocationCreate",
    "AllocationUpdate",
    "AllocationResponse",
    "AllocationDetail",
]


class AllocationCreate(BaseCreateSchema):
    student_id: int = Field(..., gt=0)
    room_id: int = Field(..., gt=0)
    expected_checkout: Optional[date] = None
    notes: Optional[str] = None


class AllocationUpdate(BaseUpdateSchema):
    expected_checkout: Optional[date] = None
    notes: Optional[str] = None


class AllocationResponse(BaseDBSchema):
    student_id: int
    room_id: int
    allocation_date: date
    expected_checkout: Optional[date] = None
    actual_checkout: Optional[date] = None
    is_active: bool
    notes: Optional[str] = None


class AllocationDetail(BaseSchema):
    """Allocation joined with student, room and hostel names."""

    id: int
    student_id: int
    student_name: str
    registration_number: str
    room_id: int
    room_number: str
    hostel_id: int
    hostel_name: str
    allocation_date: date
    expected_checkout: Optional[date] = None
    actual_checkout: Optional[date] = None
    is_active: bool
    notes: Optional[str] = None
