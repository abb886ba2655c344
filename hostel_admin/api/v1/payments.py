# hostel_admin/api/v1/payments.py
"""
Fee payment endpoints.
"""

from fastapi import APIRouter, Depends

from hostel_admin.api import deps
from hostel_admin.api.responses import created, render
from hostel_admin.schemas.payment import PaymentCreate, PaymentMarkPaid, PaymentResponse
from hostel_admin.services.payment import PaymentService

router = APIRouter(prefix="/payments", tags=["Payment Processing"])


@router.post("", summary="Record a payment due")
def record_payment(
    payload: PaymentCreate,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return created(service.record(**payload.model_dump()), PaymentResponse)


@router.get("/dues", summary="Outstanding dues of active students")
def dues_report(service: PaymentService = Depends(deps.get_payment_service)):
    return render(service.dues_report())


@router.post("/{payment_id}/pay", summary="Mark a payment as paid")
def mark_paid(
    payment_id: int,
    payload: PaymentMarkPaid,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return render(service.mark_paid(payment_id, **payload.model_dump()), PaymentResponse)
