# hostel_admin/models/maintenance/maintenance_staff.py
"""
Maintenance staff directory.
"""

from typing import List, Optional

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_admin.models.base.base_model import TimestampModel
from hostel_admin.models.base.enums import ComplaintCategory, enum_values

__all__ = ["MaintenanceStaff"]


class MaintenanceStaff(TimestampModel):
    """A maintenance worker who can be assigned complaints."""

    __tablename__ = "maintenance_staff"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)
    specialization: Mapped[ComplaintCategory] = mapped_column(
        Enum(ComplaintCategory, name="complaint_category_enum", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    hostel_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("hostels.id", ondelete="SET NULL"),
        nullable=True,
    )

    complaints: Mapped[List["Complaint"]] = relationship(
        "Complaint",
        back_populates="assigned_staff",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<MaintenanceStaff(id={self.id}, name='{self.name}')>"
