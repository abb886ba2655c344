from hostel_admin.schemas.allocation.allocation import (
    AllocationCreate,
    AllocationDetail,
    AllocationResponse,
    AllocationUpdate,
)

__all__ = [
    "AllocationCreate",
    "AllocationDetail",
    "AllocationResponse",
    "AllocationUpdate",
]
