"""
Outcome objects returned by every service method.

Services never raise to the API layer: a ``ServiceResult`` either carries the
data of a committed operation or a ``ServiceError`` whose ``ErrorCode``
decides the HTTP status the router answers with.
"""

import dataclasses
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Generic, Optional, TypeVar

from hostel_admin.core.exceptions import (
    BaseAppException,
    ErrorCode,
    ResourceNotFoundError,
    http_status_for,
)


class ErrorSeverity(str, Enum):
    """How loudly a failure is logged: caller mistakes vs. broken infrastructure."""

    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


@dataclass
class ServiceError:
    code: ErrorCode
    message: str
    severity: ErrorSeverity = ErrorSeverity.WARNING
    details: Dict[str, Any] = dataclasses.field(default_factory=dict)
    field: Optional[str] = None
    occurred_at: datetime = dataclasses.field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def status_code(self) -> int:
        return http_status_for(self.code)

    def to_dict(self) -> Dict[str, Any]:
        """``{code, message, details}`` body of the error envelope."""
        details = dict(self.details)
        if self.field and "field" not in details:
            details["field"] = self.field
        return {"code": self.code.value, "message": self.message, "details": details}


TData = TypeVar("TData")


@dataclass
class ServiceResult(Generic[TData]):
    """
    Success or failure of one service call.

    Attributes:
        is_success: True when the unit of work committed
        data: ORM entity, DTO or list produced by the call
        error: Failure description, set only when ``is_success`` is False
        message: Human-readable summary shown in the API envelope
        metadata: Extra envelope parts, e.g. ``{"pagination": {...}}``
    """

    is_success: bool
    data: Optional[TData] = None
    error: Optional[ServiceError] = None
    message: Optional[str] = None
    metadata: Dict[str, Any] = dataclasses.field(default_factory=dict)

    @classmethod
    def success(
        cls,
        data: Optional[TData] = None,
        message: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> "ServiceResult[TData]":
        return cls(is_success=True, data=data, message=message, metadata=metadata or {})

    @classmethod
    def failure(cls, error: ServiceError) -> "ServiceResult[TData]":
        return cls(is_success=False, error=error, message=error.message)

    @classmethod
    def from_app_exception(cls, exception: BaseAppException) -> "ServiceResult[TData]":
        """Failure carrying a domain exception's code, message and details."""
        details = dict(exception.details or {})
        return cls.failure(
            ServiceError(
                code=exception.error_code,
                message=exception.message,
                details=details,
                field=details.get("field"),
            )
        )

    @classmethod
    def not_found(cls, resource_type: str, resource_id: Optional[Any] = None) -> "ServiceResult[TData]":
        """Same code, message and details as raising ``ResourceNotFoundError``."""
        return cls.from_app_exception(ResourceNotFoundError(resource_type, resource_id))

    @property
    def error_code(self) -> Optional[ErrorCode]:
        return self.error.code if self.error else None

    def __repr__(self) -> str:
        if self.is_success:
            return f"ServiceResult(Success: {self.message or type(self.data).__name__})"
        return f"ServiceResult(Failure: {self.error.code.value} {self.message})"


__all__ = [
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
