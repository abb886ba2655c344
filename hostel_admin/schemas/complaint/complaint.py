"""
Complaint and complaint history schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus
from hostel_admin.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "ComplaintCreate",
    "ComplaintUpdate",
    "ComplaintResponse",
    "ComplaintLogResponse",
    "ComplaintDetail",
]


class ComplaintCreate(BaseCreateSchema):
    student_id: int = Field(..., gt=0)
    room_id: int = Field(..., gt=0)
    category: ComplaintCategory
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    priority: int = Field(default=3, ge=1, le=5)
    changed_by: Optional[str] = Field(default=None, max_length=100)


class ComplaintUpdate(BaseUpdateSchema):
    """
    Partial complaint update.

    ``status`` is a plain string so unknown values surface as INVALID_STATUS
    rather than a generic validation error. ``assigned_staff_id: null``
    unassigns; omitting it leaves the assignment untouched.
    """

    status: Optional[str] = None
    assigned_staff_id: Optional[int] = None
    resolution_notes: Optional[str] = None
    priority: Optional[int] = Field(default=None, ge=1, le=5)
    changed_by: Optional[str] = Field(default=None, max_length=100)


class ComplaintResponse(BaseDBSchema):
    student_id: int
    room_id: int
    category: ComplaintCategory
    title: str
    description: str
    status: ComplaintStatus
    priority: int
    assigned_to: Optional[int] = None
    resolution_notes: Optional[str] = None
    assigned_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None


class ComplaintLogResponse(BaseSchema):
    id: int
    complaint_id: int
    old_status: Optional[ComplaintStatus] = None
    new_status: ComplaintStatus
    changed_by: str
    notes: Optional[str] = None
    changed_at: datetime


class ComplaintDetail(ComplaintResponse):
    """Complaint with names of related records and its status history."""

    student_name: str
    registration_number: str
    room_number: str
    hostel_id: int
    hostel_name: str
    assigned_staff_name: Optional[str] = None
    history: List[ComplaintLogResponse] = Field(default_factory=list)
