from hostel_admin.services.maintenance.staff_service import StaffService

__all__ = ["StaffService"]
