from hostel_admin.models.student.student import Student

__all__ = ["Student"]
