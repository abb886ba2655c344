# hostel_admin/api/deps.py
"""
Shared FastAPI dependencies.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from hostel_admin.api import deps

    router = APIRouter()

    @router.get("/rooms")
    def list_rooms(service: HostelService = Depends(deps.get_hostel_service)):
        ...
"""

from dataclasses import dataclass

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from hostel_admin.config.settings import settings
from hostel_admin.db.session import get_db
from hostel_admin.services.analytics import AnalyticsService
from hostel_admin.services.complaint import ComplaintService
from hostel_admin.services.hostel import HostelService
from hostel_admin.services.maintenance import StaffService
from hostel_admin.services.payment import PaymentService
from hostel_admin.services.room import AllocationService
from hostel_admin.services.student import StudentService


# --- Pagination ---------------------------------------------------------------

@dataclass
class PaginationParams:
    page: int
    limit: int


def get_pagination_params(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE,
        ge=1,
        le=settings.MAX_PAGE_SIZE,
        description="Items per page",
    ),
) -> PaginationParams:
    return PaginationParams(page=page, limit=limit)


# --- Service factories ----------------------------------------------------------
# One service per request, bound to the request's session.

def get_allocation_service(db: Session = Depends(get_db)) -> AllocationService:
    return AllocationService.from_session(db)


def get_complaint_service(db: Session = Depends(get_db)) -> ComplaintService:
    return ComplaintService.from_session(db)


def get_analytics_service(db: Session = Depends(get_db)) -> AnalyticsService:
    return AnalyticsService.from_session(db)


def get_hostel_service(db: Session = Depends(get_db)) -> HostelService:
    return HostelService.from_session(db)


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService.from_session(db)


def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    return StaffService.from_session(db)


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService.from_session(db)


__all__ = [
    "get_db",
    "PaginationParams",
    "get_pagination_params",
    "get_allocation_service",
    "get_complaint_service",
    "get_analytics_service",
    "get_hostel_service",
    "get_student_service",
    "get_staff_service",
    "get_payment_service",
]
