from hostel_admin.schemas.student.student import (
    CurrentRoom,
    StudentCreate,
    StudentDashboard,
    StudentDetail,
    StudentResponse,
    StudentUpdate,
)

__all__ = [
    "CurrentRoom",
    "StudentCreate",
    "StudentDashboard",
    "StudentDetail",
    "StudentResponse",
    "StudentUpdate",
]
