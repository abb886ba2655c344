# hostel_admin/repositories/maintenance/maintenance_staff_repository.py
"""
Maintenance staff repository.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from hostel_admin.models.base.enums import ComplaintCategory
from hostel_admin.models.maintenance import MaintenanceStaff
from hostel_admin.repositories.base.base_repository import BaseRepository


class MaintenanceStaffRepository(BaseRepository[MaintenanceStaff]):
    """Repository for MaintenanceStaff entity."""

    resource_name = "Staff"

    def __init__(self, session: Session):
        super().__init__(MaintenanceStaff, session)

    def find_available(self, staff_id: int) -> Optional[MaintenanceStaff]:
        """The staff member, only if they exist and are available."""
        return self.find_one_by_criteria({"id": staff_id, "is_available": True})

    def find_by_email(self, email: str) -> Optional[MaintenanceStaff]:
        return self.find_one_by_criteria({"email": email})

    def list_staff(
        self,
        specialization: Optional[ComplaintCategory] = None,
        is_available: Optional[bool] = None,
    ) -> List[MaintenanceStaff]:
        return self.find_by_criteria(
            {"specialization": specialization, "is_available": is_available},
            order_by=["name", "id"],
        )
