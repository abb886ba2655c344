# hostel_admin/services/analytics/analytics_service.py
"""
Analytics read-model (category, room, hostel, resolution, trend and staff views).

All figures are recomputed per query from persisted state. Every ratio goes
through ``safe_divide``/``safe_percentage`` so empty data sets yield 0, and
hour statistics are ``None`` when nothing has been resolved.
"""

from collections import Counter, defaultdict
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from sqlalchemy.orm import Session

from hostel_admin.config.settings import settings
from hostel_admin.core.exceptions import ValidationError
from hostel_admin.core.utils import (
    hours_between,
    month_start,
    percentile,
    rounded_mean,
    safe_divide,
    safe_percentage,
    shift_months,
    to_naive_utc,
    utcnow,
)
from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus, Gender
from hostel_admin.repositories.analytics import AnalyticsRepository
from hostel_admin.repositories.room import RoomRepository
from hostel_admin.schemas.analytics import (
    CategoryStats,
    HostelSummary,
    MonthlyTrend,
    ResolutionBreakdown,
    ResolutionStats,
    RoomComplaintSummary,
    StaffWorkload,
)
from hostel_admin.schemas.room import AvailableRoomResponse
from hostel_admin.services.base import BaseService, ServiceResult

ACTIVE_STATUSES = frozenset(ComplaintStatus.active())
FINISHED_STATUSES = frozenset(ComplaintStatus.finished())
CATEGORY_ORDER = {category: index for index, category in enumerate(ComplaintCategory)}

MAX_WINDOW_DAYS = 3650
MAX_TREND_MONTHS = 120


def _resolution_hours(facts: Iterable) -> List[float]:
    hours = []
    for fact in facts:
        value = hours_between(fact.created_at, fact.resolved_at)
        if value is not None:
            hours.append(max(value, 0.0))
    return hours


def _rounded(value: Optional[float]) -> Optional[float]:
    return round(value, 2) if value is not None else None


class AnalyticsService(BaseService[None, AnalyticsRepository]):
    """
    Analytics over complaints, rooms, hostels and staff.

    Pure reads: nothing here writes to the database.
    """

    def __init__(
        self,
        repository: AnalyticsRepository,
        room_repository: RoomRepository,
        db_session: Session,
    ):
        super().__init__(repository, db_session)
        self.room_repository = room_repository

    @classmethod
    def from_session(cls, db: Session) -> "AnalyticsService":
        return cls(AnalyticsRepository(db), RoomRepository(db), db)

    # -------------------------------------------------------------------------
    # Category breakdown
    # -------------------------------------------------------------------------

    def category_breakdown(self) -> ServiceResult[List[CategoryStats]]:
        """Per-category totals, status counts, share of all complaints and resolution time."""
        try:
            counts: Dict[ComplaintCategory, Counter] = defaultdict(Counter)
            for category, status, count in self.repository.category_status_counts():
                counts[category][status] += count

            grand_total = sum(sum(c.values()) for c in counts.values())

            facts_by_category = defaultdict(list)
            for fact in self.repository.complaint_facts():
                facts_by_category[fact.category].append(fact)

            stats = []
            for category, status_counts in counts.items():
                total = sum(status_counts.values())
                stats.append(
                    CategoryStats(
                        category=category,
                        total_complaints=total,
                        open_complaints=sum(status_counts[s] for s in ACTIVE_STATUSES),
                        resolved_complaints=sum(status_counts[s] for s in FINISHED_STATUSES),
                        status_counts={s.value: status_counts[s] for s in ComplaintStatus},
                        percentage=safe_percentage(total, grand_total),
                        avg_resolution_hours=rounded_mean(
                            _resolution_hours(facts_by_category[category])
                        ),
                    )
                )

            stats.sort(key=lambda s: (-s.total_complaints, CATEGORY_ORDER[s.category]))
            return ServiceResult.success(stats, metadata={"total_complaints": grand_total})
        except Exception as e:
            return self._handle_exception(e, "compute category breakdown")

    # -------------------------------------------------------------------------
    # Room and hostel summaries
    # -------------------------------------------------------------------------

    def room_summary(self, hostel_id: Optional[int] = None) -> ServiceResult[List[RoomComplaintSummary]]:
        """Occupancy and complaint figures for every room."""
        try:
            facts_by_room = defaultdict(list)
            for fact in self.repository.complaint_facts(hostel_id=hostel_id):
                facts_by_room[fact.room_id].append(fact)

            summaries = []
            for room in self.repository.rooms(hostel_id=hostel_id):
                facts = facts_by_room.get(room.id, [])
                categories = Counter(f.category for f in facts)
                most_common = None
                if categories:
                    most_common = min(
                        categories,
                        key=lambda c: (-categories[c], CATEGORY_ORDER[c]),
                    )
                last_created = max((to_naive_utc(f.created_at) for f in facts), default=None)

                summaries.append(
                    RoomComplaintSummary(
                        room_id=room.id,
                        room_number=room.room_number,
                        hostel_id=room.hostel_id,
                        hostel_name=room.hostel.name,
                        capacity=room.capacity,
                        current_occupancy=room.current_occupancy,
                        occupancy_rate=safe_percentage(room.current_occupancy, room.capacity),
                        total_complaints=len(facts),
                        active_complaints=sum(1 for f in facts if f.status in ACTIVE_STATUSES),
                        resolved_complaints=sum(1 for f in facts if f.status in FINISHED_STATUSES),
                        most_common_category=most_common,
                        last_complaint_date=last_created.date() if last_created else None,
                    )
                )

            return ServiceResult.success(summaries)
        except Exception as e:
            return self._handle_exception(e, "compute room summary", hostel_id)

    def hostel_summary(self) -> ServiceResult[List[HostelSummary]]:
        """Capacity, occupancy and complaint density per hostel."""
        try:
            rooms_by_hostel = defaultdict(list)
            for room in self.repository.rooms():
                rooms_by_hostel[room.hostel_id].append(room)

            facts_by_hostel = defaultdict(list)
            for fact in self.repository.complaint_facts():
                facts_by_hostel[fact.hostel_id].append(fact)

            housed = self.repository.housed_students_by_hostel()

            summaries = []
            for hostel in self.repository.hostels():
                rooms = rooms_by_hostel.get(hostel.id, [])
                facts = facts_by_hostel.get(hostel.id, [])
                capacity = sum(r.capacity for r in rooms)
                occupancy = sum(r.current_occupancy for r in rooms)
                total = len(facts)

                summaries.append(
                    HostelSummary(
                        hostel_id=hostel.id,
                        hostel_name=hostel.name,
                        gender_allowed=hostel.gender_allowed,
                        total_rooms=hostel.total_rooms,
                        total_capacity=capacity,
                        current_occupancy=occupancy,
                        occupancy_rate=safe_percentage(occupancy, capacity),
                        total_complaints=total,
                        active_complaints=sum(1 for f in facts if f.status in ACTIVE_STATUSES),
                        resolved_complaints=sum(1 for f in facts if f.status in FINISHED_STATUSES),
                        complaints_per_room=safe_divide(total, hostel.total_rooms),
                        complaints_per_student=safe_divide(total, housed.get(hostel.id, 0)),
                    )
                )

            return ServiceResult.success(summaries)
        except Exception as e:
            return self._handle_exception(e, "compute hostel summary")

    # -------------------------------------------------------------------------
    # Resolution statistics
    # -------------------------------------------------------------------------

    def resolution_stats(
        self,
        hostel_id: Optional[int] = None,
        days: Optional[int] = None,
    ) -> ServiceResult[ResolutionStats]:
        """
        Resolution performance for complaints created in the last ``days`` days.

        SLA breach: creation-to-resolution time above ``SLA_HOURS``.
        """
        try:
            days = settings.DEFAULT_RESOLUTION_WINDOW_DAYS if days is None else days
            if not 1 <= days <= MAX_WINDOW_DAYS:
                raise ValidationError(
                    f"days must be between 1 and {MAX_WINDOW_DAYS}", field="days"
                )

            since = utcnow() - timedelta(days=days)
            facts = self.repository.complaint_facts(hostel_id=hostel_id, since=since)
            sla_hours = settings.SLA_HOURS

            # Counted by status; timings need a resolved_at stamp
            resolved = sum(1 for f in facts if f.status in FINISHED_STATUSES)
            hours = _resolution_hours(facts)
            assignment_hours = [
                max(h, 0.0)
                for h in (hours_between(f.created_at, f.assigned_at) for f in facts)
                if h is not None
            ]
            breaches = sum(1 for h in hours if h > sla_hours)

            stats = ResolutionStats(
                window_days=days,
                hostel_id=hostel_id,
                total_complaints=len(facts),
                resolved_complaints=resolved,
                resolution_rate=safe_percentage(resolved, len(facts)),
                avg_resolution_hours=rounded_mean(hours),
                min_resolution_hours=_rounded(min(hours)) if hours else None,
                max_resolution_hours=_rounded(max(hours)) if hours else None,
                p50_resolution_hours=percentile(hours, 50),
                p90_resolution_hours=percentile(hours, 90),
                p95_resolution_hours=percentile(hours, 95),
                avg_assignment_hours=rounded_mean(assignment_hours),
                sla_hours=sla_hours,
                sla_breaches=breaches,
                sla_compliance_rate=safe_percentage(len(hours) - breaches, len(hours)),
                by_category=self._breakdown(
                    facts, lambda f: f.category.value, [c.value for c in ComplaintCategory]
                ),
                by_priority=self._breakdown(
                    facts, lambda f: str(f.priority), [str(p) for p in range(1, 6)]
                ),
            )
            return ServiceResult.success(stats)
        except Exception as e:
            return self._handle_exception(e, "compute resolution statistics", hostel_id)

    @staticmethod
    def _breakdown(facts: Sequence, key_func, key_order: List[str]) -> List[ResolutionBreakdown]:
        grouped = defaultdict(list)
        for fact in facts:
            grouped[key_func(fact)].append(fact)

        rows = []
        for key in key_order:
            group = grouped.get(key)
            if not group:
                continue
            resolved = sum(1 for f in group if f.status in FINISHED_STATUSES)
            rows.append(
                ResolutionBreakdown(
                    key=key,
                    total=len(group),
                    resolved=resolved,
                    resolution_rate=safe_percentage(resolved, len(group)),
                    avg_resolution_hours=rounded_mean(_resolution_hours(group)),
                )
            )
        return rows

    # -------------------------------------------------------------------------
    # Trends
    # -------------------------------------------------------------------------

    def monthly_trends(self, months: Optional[int] = None) -> ServiceResult[List[MonthlyTrend]]:
        """
        Complaint counts per calendar month for the last ``months`` months
        (current month included), newest month first. Empty months are
        reported with zero counts.
        """
        try:
            months = settings.DEFAULT_TREND_MONTHS if months is None else months
            if not 1 <= months <= MAX_TREND_MONTHS:
                raise ValidationError(
                    f"months must be between 1 and {MAX_TREND_MONTHS}", field="months"
                )

            current = month_start(to_naive_utc(utcnow()))
            first = shift_months(current, -(months - 1))
            since = datetime(first.year, first.month, 1, tzinfo=timezone.utc)

            buckets = {shift_months(first, i): [] for i in range(months)}
            for fact in self.repository.complaint_facts(since=since):
                bucket = month_start(to_naive_utc(fact.created_at))
                if bucket in buckets:
                    buckets[bucket].append(fact)

            trends = []
            for bucket in sorted(buckets, reverse=True):
                facts = buckets[bucket]
                categories = Counter(f.category.value for f in facts)
                resolved = sum(1 for f in facts if f.status in FINISHED_STATUSES)
                trends.append(
                    MonthlyTrend(
                        month=bucket.isoformat(),
                        total_complaints=len(facts),
                        category_counts={c.value: categories[c.value] for c in ComplaintCategory},
                        resolved_complaints=resolved,
                        resolution_rate=safe_percentage(resolved, len(facts)),
                    )
                )

            return ServiceResult.success(trends)
        except Exception as e:
            return self._handle_exception(e, "compute monthly trends")

    # -------------------------------------------------------------------------
    # Rooms and staff
    # -------------------------------------------------------------------------

    def available_rooms(
        self,
        gender: Optional[str] = None,
        hostel_id: Optional[int] = None,
    ) -> ServiceResult[List[AvailableRoomResponse]]:
        """Rooms open for allocation that still have a free bed."""
        try:
            gender_filter = None
            if gender is not None:
                try:
                    gender_filter = Gender(gender)
                except ValueError:
                    raise ValidationError(
                        "Invalid gender. Must be one of: " + ", ".join(g.value for g in Gender),
                        field="gender",
                    )

            rooms = self.room_repository.search_available_rooms(
                gender=gender_filter, hostel_id=hostel_id
            )
            return ServiceResult.success(
                [
                    AvailableRoomResponse(
                        room_id=room.id,
                        hostel_id=room.hostel_id,
                        hostel_name=room.hostel.name,
                        gender_allowed=room.hostel.gender_allowed,
                        room_number=room.room_number,
                        floor=room.floor,
                        room_type=room.room_type,
                        capacity=room.capacity,
                        current_occupancy=room.current_occupancy,
                        available_beds=room.free_beds,
                        rent_amount=float(room.rent_amount),
                        has_ac=room.has_ac,
                        has_attached_bathroom=room.has_attached_bathroom,
                    )
                    for room in rooms
                ]
            )
        except Exception as e:
            return self._handle_exception(e, "list available rooms")

    def staff_workload(self) -> ServiceResult[List[StaffWorkload]]:
        """Open and finished assignments per staff member."""
        try:
            facts_by_staff = defaultdict(list)
            for fact in self.repository.complaint_facts():
                if fact.assigned_to is not None:
                    facts_by_staff[fact.assigned_to].append(fact)

            rows = []
            for staff in self.repository.staff_members():
                facts = facts_by_staff.get(staff.id, [])
                work_hours = [
                    max(h, 0.0)
                    for h in (hours_between(f.assigned_at, f.resolved_at) for f in facts)
                    if h is not None
                ]
                rows.append(
                    StaffWorkload(
                        staff_id=staff.id,
                        name=staff.name,
                        specialization=staff.specialization,
                        is_available=staff.is_available,
                        active_complaints=sum(1 for f in facts if f.status in ACTIVE_STATUSES),
                        resolved_complaints=sum(1 for f in facts if f.status in FINISHED_STATUSES),
                        avg_resolution_hours=rounded_mean(work_hours),
                    )
                )

            rows.sort(key=lambda r: (-r.active_complaints, r.name))
            return ServiceResult.success(rows)
        except Exception as e:
            return self._handle_exception(e, "compute staff workload")
