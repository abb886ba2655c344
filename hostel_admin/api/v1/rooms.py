# hostel_admin/api/v1/rooms.py
"""
Room inventory endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostel_admin.api import deps
from hostel_admin.api.responses import render
from hostel_admin.schemas.room import RoomAvailabilityUpdate, RoomResponse
from hostel_admin.services.analytics import AnalyticsService
from hostel_admin.services.hostel import HostelService

router = APIRouter(prefix="/rooms", tags=["Room Management"])


@router.get("", summary="List rooms")
def list_rooms(
    hostel_id: Optional[int] = Query(None),
    is_available: Optional[bool] = Query(None),
    service: HostelService = Depends(deps.get_hostel_service),
):
    return render(service.list_rooms(hostel_id=hostel_id, is_available=is_available), RoomResponse)


@router.get("/available", summary="Rooms with free beds")
def available_rooms(
    gender: Optional[str] = Query(None, description="Only hostels admitting this gender"),
    hostel_id: Optional[int] = Query(None),
    service: AnalyticsService = Depends(deps.get_analytics_service),
):
    return render(service.available_rooms(gender=gender, hostel_id=hostel_id))


@router.patch("/{room_id}/availability", summary="Open or block a room")
def set_room_availability(
    room_id: int,
    payload: RoomAvailabilityUpdate,
    service: HostelService = Depends(deps.get_hostel_service),
):
    return render(service.set_room_availability(room_id, payload.is_available), RoomResponse)


@router.delete("/{room_id}", summary="Remove a room without allocation history")
def remove_room(
    room_id: int,
    service: HostelService = Depends(deps.get_hostel_service),
):
    return render(service.remove_room(room_id))
