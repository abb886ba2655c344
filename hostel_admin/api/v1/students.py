# hostel_admin/api/v1/students.py
"""
Student endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from hostel_admin.api import deps
from hostel_admin.api.responses import created, render
from hostel_admin.schemas.payment import PaymentResponse
from hostel_admin.schemas.student import StudentCreate, StudentResponse, StudentUpdate
from hostel_admin.services.payment import PaymentService
from hostel_admin.services.student import StudentService

router = APIRouter(prefix="/students", tags=["Student Management"])


@router.get("", summary="List students")
def list_students(
    search: Optional[str] = Query(None, description="Name, registration number or email"),
    is_active: Optional[bool] = Query(None),
    pagination: deps.PaginationParams = Depends(deps.get_pagination_params),
    service: StudentService = Depends(deps.get_student_service),
):
    result = service.list(
        search=search,
        is_active=is_active,
        page=pagination.page,
        limit=pagination.limit,
    )
    return render(result, StudentResponse)


@router.post("", summary="Register a student")
def create_student(
    payload: StudentCreate,
    service: StudentService = Depends(deps.get_student_service),
):
    return created(service.create(payload.model_dump()), StudentResponse)


@router.get("/{student_id}", summary="Get a student with their current room")
def get_student(
    student_id: int,
    service: StudentService = Depends(deps.get_student_service),
):
    return render(service.get(student_id))


@router.put("/{student_id}", summary="Update a student's profile")
def update_student(
    student_id: int,
    payload: StudentUpdate,
    service: StudentService = Depends(deps.get_student_service),
):
    return render(service.update(student_id, payload.provided()), StudentResponse)


@router.delete("/{student_id}", summary="Deactivate a student")
def deactivate_student(
    student_id: int,
    service: StudentService = Depends(deps.get_student_service),
):
    """Marks the student inactive and checks out their current room."""
    return render(service.deactivate(student_id), StudentResponse)


@router.get("/{student_id}/dashboard", summary="Room, fees and complaints summary")
def student_dashboard(
    student_id: int,
    service: StudentService = Depends(deps.get_student_service),
):
    return render(service.dashboard(student_id))


@router.get("/{student_id}/payments", summary="A student's payments")
def student_payments(
    student_id: int,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return render(service.list_for_student(student_id), PaymentResponse)
