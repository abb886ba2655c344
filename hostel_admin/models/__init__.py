"""
SQLAlchemy models for the hostel administration backend.

Importing this package registers every table with ``Base.metadata``.
"""

from hostel_admin.models.base import Base, BaseModel, TimestampModel
from hostel_admin.models.complaint import Complaint, ComplaintLog
from hostel_admin.models.hostel import Hostel
from hostel_admin.models.maintenance import MaintenanceStaff
from hostel_admin.models.payment import Payment
from hostel_admin.models.room import Allocation, Room
from hostel_admin.models.student import Student

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "Allocation",
    "Complaint",
    "ComplaintLog",
    "Hostel",
    "MaintenanceStaff",
    "Payment",
    "Room",
    "Student",
]
