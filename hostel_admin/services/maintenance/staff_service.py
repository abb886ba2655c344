# hostel_admin/services/maintenance/staff_service.py
"""
Maintenance staff directory.
"""

from typing import Any, Dict, List, Optional, Union

from sqlalchemy.orm import Session

from hostel_admin.core.exceptions import (
    EntityAlreadyExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from hostel_admin.models.base.enums import ComplaintCategory
from hostel_admin.models.hostel import Hostel
from hostel_admin.models.maintenance import MaintenanceStaff
from hostel_admin.repositories.maintenance import MaintenanceStaffRepository
from hostel_admin.services.base import BaseService, ServiceResult
from hostel_admin.services.complaint.complaint_service import parse_category

STAFF_FIELDS = ("name", "email", "phone", "specialization", "is_available", "hostel_id")


class StaffService(BaseService[MaintenanceStaff, MaintenanceStaffRepository]):
    """Create, list and toggle maintenance staff."""

    @classmethod
    def from_session(cls, db: Session) -> "StaffService":
        return cls(MaintenanceStaffRepository(db), db)

    def create(self, data: Dict[str, Any]) -> ServiceResult[MaintenanceStaff]:
        try:
            data = {k: v for k, v in data.items() if k in STAFF_FIELDS}
            if not data.get("name") or not data.get("email") or not data.get("phone"):
                raise ValidationError("Name, email and phone are required")
            data["specialization"] = parse_category(data.get("specialization"))
            data["email"] = data["email"].lower()
            data.setdefault("is_available", True)

            with self.transaction():
                if data.get("hostel_id") is not None and self.db.get(Hostel, data["hostel_id"]) is None:
                    raise ResourceNotFoundError("Hostel", data["hostel_id"])
                if self.repository.find_by_email(data["email"]):
                    raise EntityAlreadyExistsError(
                        "Email already registered", {"email": data["email"]}
                    )
                staff = self.repository.create(MaintenanceStaff(**data), commit=False)

            self._log_operation("create staff", staff.id, {"specialization": staff.specialization.value})
            return ServiceResult.success(staff, message="Staff member created successfully")
        except Exception as e:
            return self._handle_exception(e, "create staff")

    def list(
        self,
        specialization: Optional[Union[str, ComplaintCategory]] = None,
        is_available: Optional[bool] = None,
    ) -> ServiceResult[List[MaintenanceStaff]]:
        try:
            if specialization is not None:
                specialization = parse_category(specialization)
            return ServiceResult.success(
                self.repository.list_staff(specialization=specialization, is_available=is_available)
            )
        except Exception as e:
            return self._handle_exception(e, "list staff")

    def set_availability(self, staff_id: int, is_available: bool) -> ServiceResult[MaintenanceStaff]:
        """Unavailable staff keep their current complaints but get no new ones."""
        try:
            with self.transaction():
                staff = self.repository.get_by_id(staff_id)
                self.repository.update(staff, {"is_available": bool(is_available)}, commit=False)

            self._log_operation("set staff availability", staff_id, {"is_available": is_available})
            return ServiceResult.success(staff)
        except Exception as e:
            return self._handle_exception(e, "set staff availability", staff_id)
