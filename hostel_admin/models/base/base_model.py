# hostel_admin/models/base/base_model.py
"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and abstract base classes shared by
all database models.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, event
from sqlalchemy.orm import Mapped, declarative_base, mapped_column
from sqlalchemy.sql import func

from hostel_admin.core.utils import utcnow

# Create declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with an integer primary key.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"


class TimestampModel(BaseModel):
    """
    Base model with automatic timestamp tracking.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        comment="Record creation timestamp",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        comment="Record last update timestamp",
    )


@event.listens_for(TimestampModel, "before_update", propagate=True)
def receive_before_update(mapper, connection, target):
    """Refresh updated_at on every ORM update."""
    target.updated_at = utcnow()
