from hostel_admin.schemas.hostel.hostel import HostelCreate, HostelResponse

__all__ = ["HostelCreate", "HostelResponse"]
