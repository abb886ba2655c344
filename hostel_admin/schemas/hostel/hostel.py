"""
Hostel schemas.
"""

from typing import Optional

from pydantic import Field

from hostel_admin.models.base.enums import Gender
from hostel_admin.schemas.common.base import BaseCreateSchema, BaseDBSchema

__all__ = ["HostelCreate", "HostelResponse"]


class HostelCreate(BaseCreateSchema):
    name: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1)
    gender_allowed: Gender
    warden_name: Optional[str] = Field(default=None, max_length=100)
    warden_contact: Optional[str] = Field(default=None, max_length=15)


class HostelResponse(BaseDBSchema):
    name: str
    address: str
    gender_allowed: Gender
    total_rooms: int
    warden_name: Optional[str] = None
    warden_contact: Optional[str] = None
