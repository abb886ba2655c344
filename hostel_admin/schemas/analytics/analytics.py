"""
Analytics read-model schemas.

Hour statistics are ``None`` when there is nothing to measure; counts and
rates are always numbers (0 for empty inputs).
"""

from datetime import date
from typing import Dict, List, Optional

from pydantic import Field

from hostel_admin.models.base.enums import ComplaintCategory, Gender
from hostel_admin.schemas.common.base import BaseSchema

__all__ = [
    "CategoryStats",
    "RoomComplaintSummary",
    "HostelSummary",
    "ResolutionBreakdown",
    "ResolutionStats",
    "MonthlyTrend",
    "StaffWorkload",
]


class CategoryStats(BaseSchema):
    category: ComplaintCategory
    total_complaints: int = 0
    open_complaints: int = 0
    resolved_complaints: int = 0
    status_counts: Dict[str, int] = Field(default_factory=dict)
    percentage: float = 0.0
    avg_resolution_hours: Optional[float] = None


class RoomComplaintSummary(BaseSchema):
    room_id: int
    room_number: str
    hostel_id: int
    hostel_name: str
    capacity: int
    current_occupancy: int
    occupancy_rate: float = 0.0
    total_complaints: int = 0
    active_complaints: int = 0
    resolved_complaints: int = 0
    most_common_category: Optional[ComplaintCategory] = None
    last_complaint_date: Optional[date] = None


class HostelSummary(BaseSchema):
    hostel_id: int
    hostel_name: str
    gender_allowed: Gender
    total_rooms: int = 0
    total_capacity: int = 0
    current_occupancy: int = 0
    occupancy_rate: float = 0.0
    total_complaints: int = 0
    active_complaints: int = 0
    resolved_complaints: int = 0
    complaints_per_room: float = 0.0
    complaints_per_student: float = 0.0


class ResolutionBreakdown(BaseSchema):
    """Resolution figures for one category or one priority level."""

    key: str
    total: int = 0
    resolved: int = 0
    resolution_rate: float = 0.0
    avg_resolution_hours: Optional[float] = None


class ResolutionStats(BaseSchema):
    window_days: int
    hostel_id: Optional[int] = None
    total_complaints: int = 0
    resolved_complaints: int = 0
    resolution_rate: float = 0.0
    avg_resolution_hours: Optional[float] = None
    min_resolution_hours: Optional[float] = None
    max_resolution_hours: Optional[float] = None
    p50_resolution_hours: Optional[float] = None
    p90_resolution_hours: Optional[float] = None
    p95_resolution_hours: Optional[float] = None
    avg_assignment_hours: Optional[float] = None
    sla_hours: int = 48
    sla_breaches: int = 0
    sla_compliance_rate: float = 0.0
    by_category: List[ResolutionBreakdown] = Field(default_factory=list)
    by_priority: List[ResolutionBreakdown] = Field(default_factory=list)


class MonthlyTrend(BaseSchema):
    month: str
    total_complaints: int = 0
    category_counts: Dict[str, int] = Field(default_factory=dict)
    resolved_complaints: int = 0
    resolution_rate: float = 0.0


class StaffWorkload(BaseSchema):
    staff_id: int
    name: str
    specialization: ComplaintCategory
    is_available: bool
    active_complaints: int = 0
    resolved_complaints: int = 0
    avg_resolution_hours: Optional[float] = None
