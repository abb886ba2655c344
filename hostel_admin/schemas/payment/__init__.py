from hostel_admin.schemas.payment.payment import (
    PaymentCreate,
    PaymentDue,
    PaymentMarkPaid,
    PaymentResponse,
)

__all__ = ["PaymentCreate", "PaymentDue", "PaymentMarkPaid", "PaymentResponse"]
