"""
Custom Exceptions for the Hostel Administration Application

This module defines custom exception classes used throughout the application
for better error handling and debugging. Domain exceptions raised inside a
service transaction roll that transaction back and are converted into
structured service results at the service boundary.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    DATABASE_ERROR = "DATABASE_ERROR"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_STATUS = "INVALID_STATUS"

    # Lookup errors
    NOT_FOUND = "NOT_FOUND"

    # State conflicts
    CONFLICT = "CONFLICT"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    ROOM_FULL = "ROOM_FULL"
    ROOM_UNAVAILABLE = "ROOM_UNAVAILABLE"
    GENDER_MISMATCH = "GENDER_MISMATCH"
    STUDENT_INACTIVE = "STUDENT_INACTIVE"
    ALREADY_INACTIVE = "ALREADY_INACTIVE"
    STAFF_UNAVAILABLE = "STAFF_UNAVAILABLE"
    MISSING_ASSIGNMENT = "MISSING_ASSIGNMENT"


VALIDATION_CODES = frozenset({ErrorCode.VALIDATION_ERROR, ErrorCode.INVALID_STATUS})

CONFLICT_CODES = frozenset({
    ErrorCode.CONFLICT,
    ErrorCode.ALREADY_EXISTS,
    ErrorCode.ROOM_FULL,
    ErrorCode.ROOM_UNAVAILABLE,
    ErrorCode.GENDER_MISMATCH,
    ErrorCode.STUDENT_INACTIVE,
    ErrorCode.ALREADY_INACTIVE,
    ErrorCode.STAFF_UNAVAILABLE,
    ErrorCode.MISSING_ASSIGNMENT,
})


def http_status_for(code: ErrorCode) -> int:
    """Map an error code to the HTTP status the API answers with."""
    if code in VALIDATION_CODES:
        return 400
    if code == ErrorCode.NOT_FOUND:
        return 404
    if code in CONFLICT_CODES:
        return 409
    return 500


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code or http_status_for(error_code)
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "success": False,
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "details": self.details,
            },
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# General Application Exceptions
# ========================================

class ValidationError(BaseAppException):
    """Exception raised when data validation fails"""

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        field_errors: Optional[Dict[str, List[str]]] = None,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
    ):
        details: Dict[str, Any] = {}
        if field:
            details["field"] = field
        if field_errors:
            details["field_errors"] = field_errors
        super().__init__(message, error_code, details)


class InvalidStatusError(ValidationError):
    """Exception raised when an unknown complaint status is requested"""

    def __init__(self, status: Any, allowed: List[str]):
        super().__init__(
            f"Invalid status. Must be one of: {', '.join(allowed)}",
            field="status",
            error_code=ErrorCode.INVALID_STATUS,
        )
        self.details["value"] = str(status)


class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[Any] = None,
        message: Optional[str] = None,
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id is not None:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id,
        }
        super().__init__(message, ErrorCode.NOT_FOUND, details)


class ConflictError(BaseAppException):
    """Exception raised when an operation conflicts with current state"""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, error_code, details)


# ========================================
# Allocation & Room Ledger Exceptions
# ========================================

class StudentInactiveError(ConflictError):
    def __init__(self, student_id: Any):
        super().__init__(
            "Student is not active",
            ErrorCode.STUDENT_INACTIVE,
            {"student_id": student_id},
        )


class RoomUnavailableError(ConflictError):
    def __init__(self, room_id: Any):
        super().__init__(
            "Room is not available for allocation",
            ErrorCode.ROOM_UNAVAILABLE,
            {"room_id": room_id},
        )


class RoomFullError(ConflictError):
    def __init__(self, room_id: Any, capacity: Optional[int] = None, occupancy: Optional[int] = None):
        message = "Room is at full capacity"
        if capacity is not None:
            message += f" ({occupancy} / {capacity})"
        super().__init__(
            message,
            ErrorCode.ROOM_FULL,
            {"room_id": room_id, "capacity": capacity, "current_occupancy": occupancy},
        )


class GenderMismatchError(ConflictError):
    def __init__(self, gender_allowed: str, student_gender: str):
        super().__init__(
            f"Room is for {gender_allowed} students only",
            ErrorCode.GENDER_MISMATCH,
            {"gender_allowed": gender_allowed, "student_gender": student_gender},
        )


class AlreadyInactiveError(ConflictError):
    def __init__(self, allocation_id: Any):
        super().__init__(
            "Allocation is already inactive",
            ErrorCode.ALREADY_INACTIVE,
            {"allocation_id": allocation_id},
        )


# ========================================
# Complaint Exceptions
# ========================================

class StaffUnavailableError(ConflictError):
    def __init__(self, staff_id: Any):
        super().__init__(
            "Staff not found or not available",
            ErrorCode.STAFF_UNAVAILABLE,
            {"staff_id": staff_id},
        )


class MissingAssignmentError(ConflictError):
    def __init__(self, complaint_id: Any):
        super().__init__(
            "Cannot set status to assigned without assigning staff",
            ErrorCode.MISSING_ASSIGNMENT,
            {"complaint_id": complaint_id},
        )


# ========================================
# Repository Exceptions
# ========================================

class RepositoryError(BaseAppException):
    """Exception raised when a data-access operation fails"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.DATABASE_ERROR, details)


class EntityAlreadyExistsError(ConflictError):
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.ALREADY_EXISTS, details)


__all__ = [
    "ErrorCode",
    "http_status_for",
    "BaseAppException",
    "ValidationError",
    "InvalidStatusError",
    "ResourceNotFoundError",
    "ConflictError",
    "StudentInactiveError",
    "RoomUnavailableError",
    "RoomFullError",
    "GenderMismatchError",
    "AlreadyInactiveError",
    "StaffUnavailableError",
    "MissingAssignmentError",
    "RepositoryError",
    "EntityAlreadyExistsError",
]
