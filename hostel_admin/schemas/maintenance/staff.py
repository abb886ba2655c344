"""
Maintenance staff schemas.
"""

from typing import Optional

from pydantic import EmailStr, Field

from hostel_admin.models.base.enums import ComplaintCategory
from hostel_admin.schemas.common.base import BaseCreateSchema, BaseDBSchema, BaseSchema

__all__ = ["StaffCreate", "StaffResponse", "StaffAvailabilityUpdate"]


class StaffCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: str = Field(..., min_length=5, max_length=15)
    specialization: ComplaintCategory
    is_available: bool = True
    hostel_id: Optional[int] = None


class StaffResponse(BaseDBSchema):
    name: str
    email: str
    phone: str
    specialization: ComplaintCategory
    is_available: bool
    hostel_id: Optional[int] = None


class StaffAvailabilityUpdate(BaseSchema):
    is_available: bool
