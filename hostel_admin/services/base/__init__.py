"""Service layer foundations: result pattern and base service."""

from hostel_admin.services.base.base_service import BaseService
from hostel_admin.services.base.service_result import (
    ErrorCode,
    ErrorSeverity,
    ServiceError,
    ServiceResult,
)

__all__ = [
    "BaseService",
    "ErrorCode",
    "ErrorSeverity",
    "ServiceError",
    "ServiceResult",
]
