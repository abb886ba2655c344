from hostel_admin.schemas.common.base import (
    BaseCreateSchema,
    BaseDBSchema,
    BaseSchema,
    BaseUpdateSchema,
    TimestampMixin,
)
from hostel_admin.schemas.common.response import (
    ErrorDetail,
    ErrorResponse,
    PaginationMeta,
    SuccessResponse,
)

__all__ = [
    "BaseCreateSchema",
    "BaseDBSchema",
    "BaseSchema",
    "BaseUpdateSchema",
    "TimestampMixin",
    "ErrorDetail",
    "ErrorResponse",
    "PaginationMeta",
    "SuccessResponse",
]
