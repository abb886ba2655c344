from hostel_admin.repositories.hostel.hostel_repository import HostelRepository

__all__ = ["HostelRepository"]
