from hostel_admin.services.student.student_service import StudentService

__all__ = ["StudentService"]
