"""
Student schemas.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from hostel_admin.models.base.enums import Gender
from hostel_admin.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseSchema,
    BaseUpdateSchema,
)

__all__ = [
    "StudentCreate",
    "StudentUpdate",
    "StudentResponse",
    "CurrentRoom",
    "StudentDetail",
    "StudentDashboard",
]


class StudentCreate(BaseCreateSchema):
    registration_number: str = Field(..., min_length=1, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=15)
    gender: Gender
    date_of_birth: date
    address: str = Field(..., min_length=1)
    guardian_name: Optional[str] = Field(default=None, max_length=100)
    guardian_phone: Optional[str] = Field(default=None, max_length=15)
    department: Optional[str] = Field(default=None, max_length=100)
    year_of_study: Optional[int] = Field(default=None, ge=1, le=6)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class StudentUpdate(BaseUpdateSchema):
    """Profile fields only; activity and room are managed elsewhere."""

    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, min_length=5, max_length=15)
    address: Optional[str] = None
    guardian_name: Optional[str] = Field(default=None, max_length=100)
    guardian_phone: Optional[str] = Field(default=None, max_length=15)
    department: Optional[str] = Field(default=None, max_length=100)
    year_of_study: Optional[int] = Field(default=None, ge=1, le=6)


class StudentResponse(BaseDBSchema):
    registration_number: str
    first_name: str
    last_name: str
    email: str
    phone: str
    gender: Gender
    date_of_birth: date
    address: str
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    department: Optional[str] = None
    year_of_study: Optional[int] = None
    is_active: bool


class CurrentRoom(BaseSchema):
    allocation_id: int
    room_id: int
    room_number: str
    floor: int
    hostel_id: int
    hostel_name: str
    allocation_date: date
    expected_checkout: Optional[date] = None


class StudentDetail(StudentResponse):
    current_room: Optional[CurrentRoom] = None


class StudentDashboard(BaseSchema):
    student_id: int
    student_name: str
    registration_number: str
    email: str
    department: Optional[str] = None
    year_of_study: Optional[int] = None
    is_active: bool
    current_room: Optional[CurrentRoom] = None
    total_paid: Decimal
    pending_amount: Decimal
    total_complaints: int
    active_complaints: int
