# hostel_admin/models/hostel/hostel.py
"""
Hostel entity.
"""

from typing import List, Optional

from sqlalchemy import CheckConstraint, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_admin.models.base.base_model import TimestampModel
from hostel_admin.models.base.enums import Gender, enum_values

__all__ = ["Hostel"]


class Hostel(TimestampModel):
    """
    A hostel building.

    ``total_rooms`` is a denormalized counter owned by the hostel setup
    service; it is adjusted when rooms are added or removed, never recounted.
    """

    __tablename__ = "hostels"

    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    gender_allowed: Mapped[Gender] = mapped_column(
        Enum(Gender, name="gender_enum", values_callable=enum_values),
        nullable=False,
    )
    total_rooms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    warden_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    warden_contact: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="hostel",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        CheckConstraint("total_rooms >= 0", name="ck_hostels_total_rooms_non_negative"),
    )

    def __repr__(self) -> str:
        return f"<Hostel(id={self.id}, name='{self.name}')>"
