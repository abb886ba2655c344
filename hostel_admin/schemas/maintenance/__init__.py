from hostel_admin.schemas.maintenance.staff import (
    StaffAvailabilityUpdate,
    StaffCreate,
    StaffResponse,
)

__all__ = ["StaffAvailabilityUpdate", "StaffCreate", "StaffResponse"]
