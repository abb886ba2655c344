# hostel_admin/models/room/room.py
"""
Room entity with its occupancy counter.
"""

from decimal import Decimal
from typing import List

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hostel_admin.models.base.base_model import TimestampModel
from hostel_admin.models.base.enums import RoomType, enum_values

__all__ = ["Room"]


class Room(TimestampModel):
    """
    A room within a hostel.

    ``current_occupancy`` is mutated only through the room ledger; the
    check constraints keep it within ``[0, capacity]`` at the storage level.
    """

    __tablename__ = "rooms"

    hostel_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("hostels.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    room_number: Mapped[str] = mapped_column(String(10), nullable=False)
    floor: Mapped[int] = mapped_column(Integer, nullable=False)
    room_type: Mapped[RoomType] = mapped_column(
        Enum(RoomType, name="room_type_enum", values_callable=enum_values),
        nullable=False,
    )
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    current_occupancy: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rent_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    has_ac: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_attached_bathroom: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True, index=True)

    hostel: Mapped["Hostel"] = relationship("Hostel", back_populates="rooms")
    allocations: Mapped[List["Allocation"]] = relationship(
        "Allocation",
        back_populates="room",
        passive_deletes=True,
    )

    __table_args__ = (
        UniqueConstraint("hostel_id", "room_number", name="uq_rooms_hostel_room_number"),
        CheckConstraint("floor >= 0", name="ck_rooms_floor_non_negative"),
        CheckConstraint("capacity > 0 AND capacity <= 10", name="ck_rooms_capacity_range"),
        CheckConstraint("current_occupancy >= 0", name="ck_rooms_occupancy_non_negative"),
        CheckConstraint("current_occupancy <= capacity", name="ck_rooms_occupancy_within_capacity"),
        CheckConstraint("rent_amount >= 0", name="ck_rooms_rent_non_negative"),
    )

    @property
    def free_beds(self) -> int:
        return max(self.capacity - self.current_occupancy, 0)

    @property
    def is_full(self) -> bool:
        return self.current_occupancy >= self.capacity

    def __repr__(self) -> str:
        return (
            f"<Room(id={self.id}, number='{self.room_number}', "
            f"occupancy={self.current_occupancy}/{self.capacity})>"
        )
