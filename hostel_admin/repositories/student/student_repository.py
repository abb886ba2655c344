# hostel_admin/repositories/student/student_repository.py
"""
Student repository.
"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from hostel_admin.models.student import Student
from hostel_admin.repositories.base.base_repository import BaseRepository
from hostel_admin.repositories.base.pagination import PaginatedResult


class StudentRepository(BaseRepository[Student]):
    """Repository for Student entity."""

    resource_name = "Student"

    def __init__(self, session: Session):
        super().__init__(Student, session)

    def find_for_update(self, student_id: int) -> Optional[Student]:
        """
        Load a student with a row lock held until the transaction ends.

        Serializes concurrent allocation changes for the same student.
        """
        return (
            self.db.query(Student)
            .filter(Student.id == student_id)
            .populate_existing()
            .with_for_update()
            .first()
        )

    def find_by_registration_number(self, registration_number: str) -> Optional[Student]:
        return self.find_one_by_criteria({"registration_number": registration_number})

    def find_by_email(self, email: str) -> Optional[Student]:
        return self.find_one_by_criteria({"email": email})

    def search(
        self,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
    ) -> PaginatedResult:
        query = self.db.query(Student)

        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(
                    Student.first_name.ilike(pattern),
                    Student.last_name.ilike(pattern),
                    Student.registration_number.ilike(pattern),
                    Student.email.ilike(pattern),
                )
            )
        if is_active is not None:
            query = query.filter(Student.is_active == is_active)

        query = query.order_by(Student.last_name, Student.first_name, Student.id)
        return self.paginate_query(query, page, limit)
