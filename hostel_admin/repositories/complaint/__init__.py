from hostel_admin.repositories.complaint.complaint_log_repository import ComplaintLogRepository
from hostel_admin.repositories.complaint.complaint_repository import ComplaintRepository

__all__ = ["ComplaintRepository", "ComplaintLogRepository"]
