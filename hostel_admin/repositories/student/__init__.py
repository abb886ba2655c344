from hostel_admin.repositories.student.student_repository import StudentRepository

__all__ = ["StudentRepository"]
