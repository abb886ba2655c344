# hostel_admin/api/v1/staff.py
"""
Maintenance staff endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostel_admin.api import deps
from hostel_admin.api.responses import created, render
from hostel_admin.schemas.maintenance import (
    StaffAvailabilityUpdate,
    StaffCreate,
    StaffResponse,
)
from hostel_admin.services.maintenance import StaffService

router = APIRouter(prefix="/staff", tags=["Maintenance Management"])


@router.get("", summary="List maintenance staff")
def list_staff(
    specialization: Optional[str] = Query(None),
    is_available: Optional[bool] = Query(None),
    service: StaffService = Depends(deps.get_staff_service),
):
    return render(
        service.list(specialization=specialization, is_available=is_available),
        StaffResponse,
    )


@router.post("", summary="Add a staff member")
def create_staff(
    payload: StaffCreate,
    service: StaffService = Depends(deps.get_staff_service),
):
    return created(service.create(payload.model_dump()), StaffResponse)


@router.patch("/{staff_id}/availability", summary="Mark staff available or unavailable")
def set_staff_availability(
    staff_id: int,
    payload: StaffAvailabilityUpdate,
    service: StaffService = Depends(deps.get_staff_service),
):
    return render(service.set_availability(staff_id, payload.is_available), StaffResponse)
