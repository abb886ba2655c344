from hostel_admin.models.maintenance.maintenance_staff import MaintenanceStaff

__all__ = ["MaintenanceStaff"]
