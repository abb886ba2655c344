# --- File: hostel_admin/schemas/common/base.py ---
"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    All application-facing schemas inherit from this to get consistent
    ORM loading and string handling.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
    )


class TimestampMixin(BaseModel):
    """Mixin for timestamp fields."""

    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")


class BaseDBSchema(BaseSchema, TimestampMixin):
    """Base schema for database entities with ID and timestamps."""

    id: int = Field(..., description="Unique identifier")


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""

    model_config = ConfigDict(extra="forbid")


class BaseUpdateSchema(BaseSchema):
    """
    Base schema for partial updates.

    Subclasses declare every field optional; ``model_fields_set`` tells an
    explicit ``null`` apart from an omitted field.
    """

    model_config = ConfigDict(extra="forbid")

    def provided(self) -> dict:
        """Only the fields the client actually sent."""
        return {name: getattr(self, name) for name in self.model_fields_set}
