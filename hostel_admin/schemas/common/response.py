# --- File: hostel_admin/schemas/common/response.py ---
"""
Standard API response envelope: ``{success, data?, message?, error?}``.
"""

from typing import Any, Dict, Generic, Optional, TypeVar

from pydantic import Field

from hostel_admin.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "SuccessResponse",
    "ErrorDetail",
    "ErrorResponse",
    "PaginationMeta",
]


class PaginationMeta(BaseSchema):
    page: int
    limit: int
    total: int
    pages: int


class SuccessResponse(BaseSchema, Generic[T]):
    """Standard success response."""

    success: bool = Field(default=True, description="Success flag")
    message: Optional[str] = Field(default=None, description="Response message")
    data: Optional[T] = Field(default=None, description="Response data")
    pagination: Optional[PaginationMeta] = Field(default=None, description="Page metadata for listings")


class ErrorDetail(BaseSchema):
    """Error detail information."""

    code: str = Field(..., description="Application error code")
    message: str = Field(..., description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Structured context")


class ErrorResponse(BaseSchema):
    """Standard error response."""

    success: bool = Field(default=False, description="Success flag")
    error: ErrorDetail

    @classmethod
    def create(cls, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        return cls(error=ErrorDetail(code=code, message=message, details=details or {}))
