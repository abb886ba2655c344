"""
Database enums shared by models and schemas.
"""

import enum


class Gender(str, enum.Enum):
    """Gender enumeration (also used for hostel admission policy)."""
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class RoomType(str, enum.Enum):
    """Room type categorization."""
    SINGLE = "single"
    DOUBLE = "double"
    TRIPLE = "triple"
    DORMITORY = "dormitory"


class PaymentStatus(str, enum.Enum):
    """Fee payment status."""
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    PARTIAL = "partial"


class ComplaintStatus(str, enum.Enum):
    """Complaint lifecycle status."""
    OPEN = "open"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"

    @classmethod
    def active(cls):
        return (cls.OPEN, cls.ASSIGNED, cls.IN_PROGRESS)

    @classmethod
    def finished(cls):
        return (cls.RESOLVED, cls.CLOSED)


class ComplaintCategory(str, enum.Enum):
    """Complaint categorization."""
    ELECTRICAL = "electrical"
    PLUMBING = "plumbing"
    FURNITURE = "furniture"
    CLEANING = "cleaning"
    PEST_CONTROL = "pest_control"
    INTERNET = "internet"
    SECURITY = "security"
    OTHER = "other"


def enum_values(enum_cls):
    """Persist enum values (lowercase) rather than member names."""
    return [member.value for member in enum_cls]
