# hostel_admin/models/complaint/complaint_log.py
"""
Append-only complaint status history.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from hostel_admin.core.utils import utcnow
from hostel_admin.models.base.base_model import BaseModel
from hostel_admin.models.base.enums import ComplaintStatus, enum_values

__all__ = ["ComplaintLog"]


class ComplaintLog(BaseModel):
    """One status change of a complaint. Rows are never updated or deleted."""

    __tablename__ = "complaint_logs"

    complaint_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("complaints.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    old_status: Mapped[Optional[ComplaintStatus]] = mapped_column(
        Enum(ComplaintStatus, name="complaint_status_enum", values_callable=enum_values),
        nullable=True,
    )
    new_status: Mapped[ComplaintStatus] = mapped_column(
        Enum(ComplaintStatus, name="complaint_status_enum", values_callable=enum_values),
        nullable=False,
    )
    changed_by: Mapped[str] = mapped_column(String(100), nullable=False, default="system")
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
    )

    complaint: Mapped["Complaint"] = relationship("Complaint", back_populates="logs")

    def __repr__(self) -> str:
        return (
            f"<ComplaintLog(complaint_id={self.complaint_id}, "
            f"{self.old_status} -> {self.new_status})>"
        )
