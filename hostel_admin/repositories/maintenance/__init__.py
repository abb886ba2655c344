from hostel_admin.repositories.maintenance.maintenance_staff_repository import (
    MaintenanceStaffRepository,
)

__all__ = ["MaintenanceStaffRepository"]
