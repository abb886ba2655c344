# hostel_admin/services/hostel/hostel_service.py
"""
Hostel setup: hostels and their room inventory.

Owns the hostel's ``total_rooms`` counter, which moves together with room
creation and removal in the same transaction.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from hostel_admin.core.exceptions import (
    ConflictError,
    EntityAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from hostel_admin.models.base.enums import Gender, RoomType
from hostel_admin.models.hostel import Hostel
from hostel_admin.models.room import Room
from hostel_admin.repositories.hostel import HostelRepository
from hostel_admin.repositories.room import RoomRepository
from hostel_admin.services.base import BaseService, ServiceResult

HOSTEL_FIELDS = ("name", "address", "gender_allowed", "warden_name", "warden_contact")
ROOM_FIELDS = (
    "room_number",
    "floor",
    "room_type",
    "capacity",
    "rent_amount",
    "has_ac",
    "has_attached_bathroom",
    "is_available",
)


def _validate_room_data(data: Dict[str, Any]) -> Dict[str, Any]:
    for field in ("room_number", "floor", "room_type", "capacity", "rent_amount"):
        if data.get(field) is None:
            raise ValidationError(f"{field} is required", field=field)

    try:
        data["room_type"] = RoomType(data["room_type"])
    except ValueError:
        raise ValidationError(
            "Invalid room type. Must be one of: " + ", ".join(t.value for t in RoomType),
            field="room_type",
        )
    if not 1 <= int(data["capacity"]) <= 10:
        raise ValidationError("Capacity must be between 1 and 10", field="capacity")
    if int(data["floor"]) < 0:
        raise ValidationError("Floor cannot be negative", field="floor")
    if Decimal(str(data["rent_amount"])) < 0:
        raise ValidationError("Rent amount cannot be negative", field="rent_amount")
    return data


class HostelService(BaseService[Hostel, HostelRepository]):
    """Hostel and room inventory management."""

    def __init__(
        self,
        repository: HostelRepository,
        room_repository: RoomRepository,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository

    @classmethod
    def from_session(cls, db: Session) -> "HostelService":
        return cls(HostelRepository(db), RoomRepository(db), db)

    # -------------------------------------------------------------------------
    # Hostels
    # -------------------------------------------------------------------------

    def create_hostel(self, data: Dict[str, Any]) -> ServiceResult[Hostel]:
        try:
            data = {k: v for k, v in data.items() if k in HOSTEL_FIELDS}
            if not data.get("name") or not data.get("address"):
                raise ValidationError("Hostel name and address are required")
            try:
                data["gender_allowed"] = Gender(data.get("gender_allowed"))
            except ValueError:
                raise ValidationError(
                    "Invalid gender policy. Must be one of: " + ", ".join(g.value for g in Gender),
                    field="gender_allowed",
                )

            with self.transaction():
                if self.repository.find_by_name(data["name"]):
                    raise EntityAlreadyExistsError(
                        "A hostel with this name already exists", {"name": data["name"]}
                    )
                hostel = self.repository.create(Hostel(total_rooms=0, **data), commit=False)

            self._log_operation("create hostel", hostel.id, {"hostel_name": hostel.name})
            return ServiceResult.success(hostel, message="Hostel created successfully")
        except Exception as e:
            return self._handle_exception(e, "create hostel")

    def list_hostels(self) -> ServiceResult[List[Hostel]]:
        try:
            return ServiceResult.success(self.repository.list_hostels())
        except Exception as e:
            return self._handle_exception(e, "list hostels")

    def get_hostel(self, hostel_id: int) -> ServiceResult[Hostel]:
        try:
            hostel = self.repository.find_by_id(hostel_id)
            if hostel is None:
                return ServiceResult.not_found("Hostel", hostel_id)
            return ServiceResult.success(hostel)
        except Exception as e:
            return self._handle_exception(e, "get hostel", hostel_id)

    # -------------------------------------------------------------------------
    # Rooms
    # -------------------------------------------------------------------------

    def add_room(self, hostel_id: int, data: Dict[str, Any]) -> ServiceResult[Room]:
        """Create an empty room and bump the hostel's room counter."""
        try:
            data = _validate_room_data({k: v for k, v in data.items() if k in ROOM_FIELDS})

            with self.transaction():
                if self.repository.find_by_id(hostel_id) is None:
                    raise ResourceNotFoundError("Hostel", hostel_id)
                if self.room_repository.find_by_room_number(hostel_id, data["room_number"]):
                    raise EntityAlreadyExistsError(
                        "Room number already exists in this hostel",
                        {"hostel_id": hostel_id, "room_number": data["room_number"]},
                    )
                room = self.room_repository.create(
                    Room(hostel_id=hostel_id, current_occupancy=0, **data),
                    commit=False,
                )
                self.repository.increment_total_rooms(hostel_id)

            self._log_operation("add room", room.id, {"hostel_id": hostel_id})
            return ServiceResult.success(room, message="Room created successfully")
        except Exception as e:
            return self._handle_exception(e, "add room", hostel_id)

    def remove_room(self, room_id: int) -> ServiceResult[bool]:
        """
        Delete a room that no allocation has ever referenced.

        Rooms with allocation history must be blocked instead.
        """
        try:
            with self.transaction():
                room = self.room_repository.get_by_id(room_id)
                if self.room_repository.count_allocations(room_id) > 0:
                    raise ConflictError(
                        "Room has allocation records and cannot be removed",
                        details={"room_id": room_id},
                    )
                hostel_id = room.hostel_id
                self.room_repository.delete(room, commit=False)
                self.repository.decrement_total_rooms(hostel_id)

            self._log_operation("remove room", room_id, {"hostel_id": hostel_id})
            return ServiceResult.success(True, message="Room removed successfully")
        except Exception as e:
            return self._handle_exception(e, "remove room", room_id)

    def set_room_availability(self, room_id: int, is_available: bool) -> ServiceResult[Room]:
        """Block or unblock a room for new allocations. Current occupants stay."""
        try:
            with self.transaction():
                room = self.room_repository.get_by_id(room_id)
                self.room_repository.update(room, {"is_available": bool(is_available)}, commit=False)

            self._log_operation("set room availability", room_id, {"is_available": is_available})
            return ServiceResult.success(room)
        except Exception as e:
            return self._handle_exception(e, "set room availability", room_id)

    def list_rooms(
        self,
        hostel_id: Optional[int] = None,
        is_available: Optional[bool] = None,
    ) -> ServiceResult[List[Room]]:
        try:
            return ServiceResult.success(
                self.room_repository.list_rooms(hostel_id=hostel_id, is_available=is_available)
            )
        except Exception as e:
            return self._handle_exception(e, "list rooms")
