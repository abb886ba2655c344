from hostel_admin.models.payment.payment import Payment

__all__ = ["Payment"]
