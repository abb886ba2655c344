from hostel_admin.models.hostel.hostel import Hostel

__all__ = ["Hostel"]
