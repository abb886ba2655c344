# hostel_admin/models/student/student.py
"""
Student entity.
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import Boolean, CheckConstraint, Date, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_admin.models.base.base_model import TimestampModel
from hostel_admin.models.base.enums import Gender, enum_values

__all__ = ["Student"]


class Student(TimestampModel):
    """
    A registered student.

    The student's current room is the room of their single active allocation.
    """

    __tablename__ = "students"

    registration_number: Mapped[str] = mapped_column(String(20), nullable=False, unique=True)
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(15), nullable=False)
    gender: Mapped[Gender] = mapped_column(
        Enum(Gender, name="gender_enum", values_callable=enum_values),
        nullable=False,
    )
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    guardian_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    guardian_phone: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)
    department: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    year_of_study: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    allocations: Mapped[List["Allocation"]] = relationship(
        "Allocation",
        back_populates="student",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint(
            "year_of_study IS NULL OR (year_of_study >= 1 AND year_of_study <= 6)",
            name="ck_students_year_of_study",
        ),
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self) -> str:
        return f"<Student(id={self.id}, registration_number='{self.registration_number}')>"
