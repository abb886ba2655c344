from hostel_admin.repositories.payment.payment_repository import PaymentRepository

__all__ = ["PaymentRepository"]
