"""
API v1 Router - Main Entry Point
Aggregates all v1 API endpoints for the hostel administration backend
"""
from fastapi import APIRouter

from hostel_admin.api.v1 import (
    allocations,
    analytics,
    complaints,
    hostels,
    payments,
    rooms,
    staff,
    students,
)
from hostel_admin.core.logging import get_logger
from hostel_admin.schemas.common import ErrorResponse

logger = get_logger(__name__)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse, "description": "Bad Request"},
        404: {"model": ErrorResponse, "description": "Not Found"},
        409: {"model": ErrorResponse, "description": "Conflict"},
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    }
)

for module in (hostels, rooms, students, allocations, complaints, staff, payments, analytics):
    router.include_router(module.router)

logger.info("API v1 routers registered", extra={"route_count": len(router.routes)})
