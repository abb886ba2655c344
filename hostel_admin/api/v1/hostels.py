# hostel_admin/api/v1/hostels.py
"""
Hostel endpoints.
"""

from fastapi import APIRouter, Depends

from hostel_admin.api import deps
from hostel_admin.api.responses import created, render
from hostel_admin.schemas.hostel import HostelCreate, HostelResponse
from hostel_admin.schemas.room import RoomCreate, RoomResponse
from hostel_admin.services.hostel import HostelService

router = APIRouter(prefix="/hostels", tags=["Hostel Management"])


@router.get("", summary="List hostels")
def list_hostels(service: HostelService = Depends(deps.get_hostel_service)):
    return render(service.list_hostels(), HostelResponse)


@router.post("", summary="Create a hostel")
def create_hostel(
    payload: HostelCreate,
    service: HostelService = Depends(deps.get_hostel_service),
):
    return created(service.create_hostel(payload.model_dump()), HostelResponse)


@router.get("/{hostel_id}", summary="Get a hostel")
def get_hostel(
    hostel_id: int,
    service: HostelService = Depends(deps.get_hostel_service),
):
    return render(service.get_hostel(hostel_id), HostelResponse)


@router.post("/{hostel_id}/rooms", summary="Add a room to a hostel")
def add_room(
    hostel_id: int,
    payload: RoomCreate,
    service: HostelService = Depends(deps.get_hostel_service),
):
    return created(service.add_room(hostel_id, payload.model_dump()), RoomResponse)
