# hostel_admin/models/complaint/complaint.py
"""
Maintenance complaint entity.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_admin.models.base.base_model import TimestampModel
from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus, enum_values

__all__ = ["Complaint"]


class Complaint(TimestampModel):
    """
    Maintenance ticket raised by a student for a room.

    ``assigned_at``, ``resolved_at`` and ``closed_at`` are set only the first
    time the corresponding status is reached.
    """

    __tablename__ = "complaints"

    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category: Mapped[ComplaintCategory] = mapped_column(
        Enum(ComplaintCategory, name="complaint_category_enum", values_callable=enum_values),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus, name="complaint_status_enum", values_callable=enum_values),
        nullable=False,
        default=ComplaintStatus.OPEN,
        index=True,
    )
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    assigned_to: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("maintenance_staff.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    resolution_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    assigned_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    resolved_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    closed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    student: Mapped["Student"] = relationship("Student")
    room: Mapped["Room"] = relationship("Room")
    assigned_staff: Mapped[Optional["MaintenanceStaff"]] = relationship(
        "MaintenanceStaff",
        back_populates="complaints",
    )
    logs: Mapped[List["ComplaintLog"]] = relationship(
        "ComplaintLog",
        back_populates="complaint",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ComplaintLog.changed_at.desc()",
    )

    __table_args__ = (
        CheckConstraint("priority >= 1 AND priority <= 5", name="ck_complaints_priority_range"),
        Index("ix_complaints_created_at", "created_at"),
    )

    @property
    def is_active(self) -> bool:
        return self.status in ComplaintStatus.active()

    def __repr__(self) -> str:
        return f"<Complaint(id={self.id}, status={self.status}, category={self.category})>"
