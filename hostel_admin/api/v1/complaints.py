# hostel_admin/api/v1/complaints.py
"""
Complaint endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostel_admin.api import deps
from hostel_admin.api.responses import created, render
from hostel_admin.schemas.complaint import ComplaintCreate, ComplaintResponse, ComplaintUpdate
from hostel_admin.services.complaint import ComplaintService

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", summary="Open a complaint")
def create_complaint(
    payload: ComplaintCreate,
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    result = service.create(
        student_id=payload.student_id,
        room_id=payload.room_id,
        category=payload.category,
        title=payload.title,
        description=payload.description,
        priority=payload.priority,
        actor=payload.changed_by or "system",
    )
    return created(result, ComplaintResponse)


@router.get("", summary="List complaints")
def list_complaints(
    status: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    student_id: Optional[int] = Query(None),
    room_id: Optional[int] = Query(None),
    hostel_id: Optional[int] = Query(None),
    priority: Optional[int] = Query(None),
    assigned: Optional[bool] = Query(None, description="Only assigned (true) or unassigned (false)"),
    pagination: deps.PaginationParams = Depends(deps.get_pagination_params),
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    result = service.list(
        status=status,
        category=category,
        student_id=student_id,
        room_id=room_id,
        hostel_id=hostel_id,
        priority=priority,
        assigned=assigned,
        page=pagination.page,
        limit=pagination.limit,
    )
    return render(result)


@router.get("/{complaint_id}", summary="Get a complaint with its history")
def get_complaint(
    complaint_id: int,
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    return render(service.get_detail(complaint_id))


@router.put("/{complaint_id}", summary="Update status, assignment, notes or priority")
def update_complaint(
    complaint_id: int,
    payload: ComplaintUpdate,
    service: ComplaintService = Depends(deps.get_complaint_service),
):
    changes = payload.provided()
    actor = changes.pop("changed_by", None) or "system"
    return render(service.transition(complaint_id, actor=actor, **changes), ComplaintResponse)
