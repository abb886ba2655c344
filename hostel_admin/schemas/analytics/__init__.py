from hostel_admin.schemas.analytics.analytics import (
    CategoryStats,
    HostelSummary,
    MonthlyTrend,
    ResolutionBreakdown,
    ResolutionStats,
    RoomComplaintSummary,
    StaffWorkload,
)

__all__ = [
    "CategoryStats",
    "HostelSummary",
    "MonthlyTrend",
    "ResolutionBreakdown",
    "ResolutionStats",
    "RoomComplaintSummary",
    "StaffWorkload",
]
