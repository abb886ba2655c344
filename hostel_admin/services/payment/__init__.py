from hostel_admin.services.payment.payment_service import PaymentService

__all__ = ["PaymentService"]
