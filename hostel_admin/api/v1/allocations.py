# hostel_admin/api/v1/allocations.py
"""
Room allocation endpoints: assign, list, update and checkout.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostel_admin.api import deps
from hostel_admin.api.responses import created, render
from hostel_admin.schemas.allocation import (
    AllocationCreate,
    AllocationResponse,
    AllocationUpdate,
)
from hostel_admin.services.room import AllocationService

router = APIRouter(prefix="/allocations", tags=["Allocations"])


@router.post("", summary="Allocate a room to a student")
def create_allocation(
    payload: AllocationCreate,
    service: AllocationService = Depends(deps.get_allocation_service),
):
    """
    Assign a student to a room.

    A student who already holds a room is moved; the previous allocation is
    checked out in the same transaction.
    """
    result = service.assign(
        student_id=payload.student_id,
        room_id=payload.room_id,
        expected_checkout=payload.expected_checkout,
        notes=payload.notes,
    )
    return created(result, AllocationResponse)


@router.get("", summary="List allocations")
def list_allocations(
    student_id: Optional[int] = Query(None),
    room_id: Optional[int] = Query(None),
    hostel_id: Optional[int] = Query(None),
    is_active: Optional[bool] = Query(None),
    pagination: deps.PaginationParams = Depends(deps.get_pagination_params),
    service: AllocationService = Depends(deps.get_allocation_service),
):
    result = service.list(
        student_id=student_id,
        room_id=room_id,
        hostel_id=hostel_id,
        is_active=is_active,
        page=pagination.page,
        limit=pagination.limit,
    )
    return render(result)


@router.get("/{allocation_id}", summary="Get allocation details")
def get_allocation(
    allocation_id: int,
    service: AllocationService = Depends(deps.get_allocation_service),
):
    return render(service.get(allocation_id))


@router.put("/{allocation_id}", summary="Update expected checkout or notes")
def update_allocation(
    allocation_id: int,
    payload: AllocationUpdate,
    service: AllocationService = Depends(deps.get_allocation_service),
):
    return render(service.update_details(allocation_id, payload.provided()), AllocationResponse)


@router.delete("/{allocation_id}", summary="Check out an allocation")
def checkout_allocation(
    allocation_id: int,
    service: AllocationService = Depends(deps.get_allocation_service),
):
    return render(service.checkout(allocation_id), AllocationResponse)
