from hostel_admin.models.complaint.complaint import Complaint
from hostel_admin.models.complaint.complaint_log import ComplaintLog

__all__ = ["Complaint", "ComplaintLog"]
