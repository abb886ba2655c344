from hostel_admin.services.complaint.complaint_log_service import ComplaintLogService
from hostel_admin.services.complaint.complaint_service import UNSET, ComplaintService

__all__ = ["ComplaintService", "ComplaintLogService", "UNSET"]
