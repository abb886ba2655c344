# hostel_admin/models/room/allocation.py
"""
Room allocation records.
"""

from datetime import date
from typing import Optional

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    ForeignKey,
    Index,
    Integer,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_admin.core.utils import today
from hostel_admin.models.base.base_model import TimestampModel

__all__ = ["Allocation"]


class Allocation(TimestampModel):
    """
    Assignment of one student to one room for a period of time.

    Allocations are deactivated on checkout, never deleted. The partial
    unique index allows at most one active allocation per student.
    """

    __tablename__ = "allocations"

    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    allocation_date: Mapped[date] = mapped_column(Date, nullable=False, default=today)
    expected_checkout: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    actual_checkout: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    student: Mapped["Student"] = relationship("Student", back_populates="allocations")
    room: Mapped["Room"] = relationship("Room", back_populates="allocations")

    __table_args__ = (
        CheckConstraint(
            "expected_checkout IS NULL OR expected_checkout >= allocation_date",
            name="ck_allocations_expected_checkout",
        ),
        CheckConstraint(
            "actual_checkout IS NULL OR actual_checkout >= allocation_date",
            name="ck_allocations_actual_checkout",
        ),
        Index(
            "ix_allocations_one_active_per_student",
            "student_id",
            unique=True,
            postgresql_where=text("is_active = true"),
            sqlite_where=text("is_active = 1"),
        ),
        Index("ix_allocations_room_active", "room_id", "is_active"),
    )

    def __repr__(self) -> str:
        return (
            f"<Allocation(id={self.id}, student_id={self.student_id}, "
            f"room_id={self.room_id}, active={self.is_active})>"
        )
