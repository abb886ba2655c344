# hostel_admin/repositories/hostel/hostel_repository.py
"""
Hostel repository, including the ``total_rooms`` counter updates.
"""

from typing import List, Optional

from sqlalchemy import case, update
from sqlalchemy.orm import Session

from hostel_admin.models.hostel import Hostel
from hostel_admin.repositories.base.base_repository import BaseRepository


class HostelRepository(BaseRepository[Hostel]):
    """Repository for Hostel entity."""

    resource_name = "Hostel"

    def __init__(self, session: Session):
        super().__init__(Hostel, session)

    def find_by_name(self, name: str) -> Optional[Hostel]:
        return self.find_one_by_criteria({"name": name})

    def list_hostels(self) -> List[Hostel]:
        return self.find_by_criteria({}, order_by=["name"])

    def increment_total_rooms(self, hostel_id: int) -> None:
        self.db.execute(
            update(Hostel)
            .where(Hostel.id == hostel_id)
            .values(total_rooms=Hostel.total_rooms + 1)
            .execution_options(synchronize_session=False)
        )

    def decrement_total_rooms(self, hostel_id: int) -> None:
        """Decrement ``total_rooms``, floored at zero."""
        self.db.execute(
            update(Hostel)
            .where(Hostel.id == hostel_id)
            .values(
                total_rooms=case(
                    (Hostel.total_rooms > 0, Hostel.total_rooms - 1),
                    else_=0,
                )
            )
            .execution_options(synchronize_session=False)
        )
