"""Base model classes and enums."""

from hostel_admin.models.base.base_model import Base, BaseModel, TimestampModel
from hostel_admin.models.base.enums import (
    ComplaintCategory,
    ComplaintStatus,
    Gender,
    PaymentStatus,
    RoomType,
    enum_values,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "ComplaintCategory",
    "ComplaintStatus",
    "Gender",
    "PaymentStatus",
    "RoomType",
    "enum_values",
]
