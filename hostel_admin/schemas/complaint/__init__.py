from hostel_admin.schemas.complaint.complaint import (
    ComplaintCreate,
    ComplaintDetail,
    ComplaintLogResponse,
    ComplaintResponse,
    ComplaintUpdate,
)

__all__ = [
    "ComplaintCreate",
    "ComplaintDetail",
    "ComplaintLogResponse",
    "ComplaintResponse",
    "ComplaintUpdate",
]
