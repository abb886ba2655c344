from hostel_admin.services.hostel.hostel_service import HostelService

__all__ = ["HostelService"]
