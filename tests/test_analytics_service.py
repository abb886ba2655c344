"""
Analytics read-model: aggregates, guarded ratios and empty data sets.
"""
from datetime import datetime, timedelta, timezone

import pytest

from hostel_admin.core.exceptions import ErrorCode
from hostel_admin.core.utils import month_start, shift_months, utcnow
from hostel_admin.models import Allocation, Complaint
from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus, Gender
from hostel_admin.services.analytics import AnalyticsService


@pytest.fixture
def service(db_session):
    return AnalyticsService.from_session(db_session)


@pytest.fixture
def make_complaint(db_session, make_student, make_room):
    def _make(
        room=None,
        category=ComplaintCategory.ELECTRICAL,
        status=ComplaintStatus.OPEN,
        priority=3,
        created_hours_ago=1.0,
        resolved_after_hours=None,
        assigned_after_hours=None,
        assigned_to=None,
        created_at=None,
    ):
        created = created_at or utcnow() - timedelta(hours=created_hours_ago)
        complaint = Complaint(
            student_id=make_student().id,
            room_id=(room or make_room()).id,
            category=category,
            title="Issue",
            description="Something is broken",
            status=status,
            priority=priority,
            assigned_to=assigned_to,
            created_at=created,
            assigned_at=created + timedelta(hours=assigned_after_hours)
            if assigned_after_hours is not None
            else None,
            resolved_at=created + timedelta(hours=resolved_after_hours)
            if resolved_after_hours is not None
            else None,
        )
        db_session.add(complaint)
        db_session.commit()
        return complaint

    return _make


class TestEmptyData:
    def test_category_breakdown_without_complaints(self, service):
        result = service.category_breakdown()

        assert result.is_success
        assert result.data == []
        assert result.metadata["total_complaints"] == 0

    def test_resolution_stats_without_complaints(self, service):
        stats = service.resolution_stats().data

        assert stats.total_complaints == 0
        assert stats.resolution_rate == 0.0
        assert stats.sla_compliance_rate == 0.0
        assert stats.avg_resolution_hours is None
        assert stats.p90_resolution_hours is None
        assert stats.by_category == []

    def test_hostel_without_rooms_or_students(self, service, make_hostel):
        hostel = make_hostel()

        summary = service.hostel_summary().data

        assert [s.hostel_id for s in summary] == [hostel.id]
        assert summary[0].occupancy_rate == 0.0
        assert summary[0].complaints_per_room == 0.0
        assert summary[0].complaints_per_student == 0.0

    def test_empty_room_summary(self, service, make_room):
        room = make_room(capacity=4)

        summary = service.room_summary().data

        assert summary[0].room_id == room.id
        assert summary[0].occupancy_rate == 0.0
        assert summary[0].most_common_category is None
        assert summary[0].last_complaint_date is None

    def test_monthly_trends_are_zero_filled(self, service):
        trends = service.monthly_trends(3).data

        current = month_start(utcnow())
        assert [t.month for t in trends] == [
            shift_months(current, offset).isoformat() for offset in (0, -1, -2)
        ]
        assert all(t.total_complaints == 0 and t.resolution_rate == 0.0 for t in trends)

    def test_staff_without_complaints(self, service, make_staff):
        make_staff()

        workload = service.staff_workload().data

        assert workload[0].active_complaints == 0
        assert workload[0].avg_resolution_hours is None


class TestAggregates:
    def test_category_breakdown(self, service, make_complaint):
        for _ in range(2):
            make_complaint(category=ComplaintCategory.ELECTRICAL)
        make_complaint(
            category=ComplaintCategory.ELECTRICAL,
            status=ComplaintStatus.RESOLVED,
            created_hours_ago=10,
            resolved_after_hours=4,
        )
        make_complaint(category=ComplaintCategory.PLUMBING, status=ComplaintStatus.CLOSED)

        stats = service.category_breakdown().data

        assert [s.category for s in stats] == [ComplaintCategory.ELECTRICAL, ComplaintCategory.PLUMBING]
        electrical, plumbing = stats
        assert electrical.total_complaints == 3
        assert electrical.open_complaints == 2
        assert electrical.resolved_complaints == 1
        assert electrical.percentage == 75.0
        assert electrical.avg_resolution_hours == 4.0
        assert electrical.status_counts["open"] == 2
        assert plumbing.percentage == 25.0
        assert plumbing.avg_resolution_hours is None

    def test_resolution_stats(self, service, make_complaint):
        make_complaint(
            status=ComplaintStatus.RESOLVED,
            priority=1,
            created_hours_ago=100,
            resolved_after_hours=10,
            assigned_after_hours=2,
        )
        make_complaint(
            status=ComplaintStatus.CLOSED,
            category=ComplaintCategory.PLUMBING,
            created_hours_ago=100,
            resolved_after_hours=60,
        )
        make_complaint()
        # Outside a 30 day window
        make_complaint(status=ComplaintStatus.RESOLVED, created_hours_ago=24 * 40, resolved_after_hours=1)

        stats = service.resolution_stats(days=30).data

        assert stats.total_complaints == 3
        assert stats.resolved_complaints == 2
        assert stats.resolution_rate == 66.67
        assert stats.avg_resolution_hours == 35.0
        assert stats.min_resolution_hours == 10.0
        assert stats.max_resolution_hours == 60.0
        assert stats.p50_resolution_hours == 35.0
        assert stats.p90_resolution_hours == 55.0
        assert stats.p95_resolution_hours == 57.5
        assert stats.avg_assignment_hours == 2.0
        assert stats.sla_breaches == 1
        assert stats.sla_compliance_rate == 50.0
        assert {row.key: row.total for row in stats.by_category} == {"electrical": 2, "plumbing": 1}
        assert [row.key for row in stats.by_priority] == ["1", "3"]


    def test_closed_without_resolution_counts_as_resolved(self, service, make_complaint):
        # Closed straight from open: finished, but no resolution timestamp
        make_complaint(status=ComplaintStatus.CLOSED)
        make_complaint()

        stats = service.resolution_stats().data
        electrical = next(row for row in stats.by_category if row.key == "electrical")
        breakdown = next(c for c in service.category_breakdown().data if c.category == ComplaintCategory.ELECTRICAL)

        assert stats.resolved_complaints == 1
        assert stats.resolution_rate == 50.0
        assert stats.avg_resolution_hours is None
        assert stats.sla_compliance_rate == 0.0
        assert electrical.resolved == 1
        assert electrical.avg_resolution_hours is None
        assert breakdown.resolved_complaints == stats.resolved_complaints
    def test_resolution_stats_hostel_filter(self, service, make_complaint, make_room, make_hostel):
        room = make_room(hostel=make_hostel())
        make_complaint(room=room)
        make_complaint()

        assert service.resolution_stats(hostel_id=room.hostel_id).data.total_complaints == 1

    def test_room_summary(self, service, db_session, make_room, make_student, make_complaint):
        room = make_room(capacity=4, current_occupancy=1)
        make_complaint(room=room, category=ComplaintCategory.PLUMBING)
        make_complaint(room=room, category=ComplaintCategory.PLUMBING, status=ComplaintStatus.RESOLVED)
        make_complaint(room=room, category=ComplaintCategory.INTERNET)

        summary = service.room_summary(hostel_id=room.hostel_id).data

        assert len(summary) == 1
        row = summary[0]
        assert row.occupancy_rate == 25.0
        assert row.total_complaints == 3
        assert row.active_complaints == 2
        assert row.resolved_complaints == 1
        assert row.most_common_category == ComplaintCategory.PLUMBING
        assert row.last_complaint_date is not None

    def test_hostel_summary(self, service, db_session, make_hostel, make_room, make_student, make_complaint):
        hostel = make_hostel(total_rooms=2)
        room = make_room(hostel=hostel, capacity=2, current_occupancy=1)
        make_room(hostel=hostel, capacity=2)
        student = make_student()
        db_session.add(Allocation(student_id=student.id, room_id=room.id, is_active=True))
        db_session.commit()
        for _ in range(3):
            make_complaint(room=room)

        row = next(s for s in service.hostel_summary().data if s.hostel_id == hostel.id)

        assert row.total_capacity == 4
        assert row.current_occupancy == 1
        assert row.occupancy_rate == 25.0
        assert row.total_complaints == 3
        assert row.complaints_per_room == 1.5
        assert row.complaints_per_student == 3.0

    def test_monthly_trends_bucket_by_month(self, service, make_complaint):
        two_months_ago = shift_months(month_start(utcnow()), -2)
        make_complaint(
            created_at=datetime(two_months_ago.year, two_months_ago.month, 15, 12, tzinfo=timezone.utc),
            category=ComplaintCategory.FURNITURE,
            status=ComplaintStatus.CLOSED,
        )
        make_complaint(created_hours_ago=0)

        trends = service.monthly_trends(6).data

        assert len(trends) == 6
        assert trends[0].total_complaints == 1
        assert trends[2].month == two_months_ago.isoformat()
        assert trends[2].category_counts["furniture"] == 1
        assert trends[2].resolution_rate == 100.0
        assert trends[1].total_complaints == 0

    def test_staff_workload(self, service, make_staff, make_complaint):
        busy = make_staff(name="Anil")
        idle = make_staff(name="Bala")
        make_complaint(assigned_to=busy.id, status=ComplaintStatus.ASSIGNED, assigned_after_hours=0)
        make_complaint(
            assigned_to=busy.id,
            status=ComplaintStatus.RESOLVED,
            created_hours_ago=20,
            assigned_after_hours=1,
            resolved_after_hours=6,
        )

        rows = service.staff_workload().data

        assert [r.staff_id for r in rows] == [busy.id, idle.id]
        assert rows[0].active_complaints == 1
        assert rows[0].resolved_complaints == 1
        assert rows[0].avg_resolution_hours == 5.0


class TestAvailableRooms:
    def test_gender_and_capacity_filters(self, service, make_hostel, make_room):
        male = make_room(hostel=make_hostel(gender_allowed=Gender.MALE), capacity=2)
        make_room(hostel=make_hostel(gender_allowed=Gender.FEMALE), capacity=2)
        mixed = make_room(hostel=make_hostel(gender_allowed=Gender.OTHER), capacity=3, current_occupancy=1)
        make_room(hostel=make_hostel(gender_allowed=Gender.MALE), capacity=1, current_occupancy=1)
        make_room(hostel=make_hostel(gender_allowed=Gender.MALE), is_available=False)

        rooms = service.available_rooms(gender="male").data

        assert {r.room_id for r in rooms} == {male.id, mixed.id}
        assert next(r for r in rooms if r.room_id == mixed.id).available_beds == 2

    def test_all_available_rooms(self, service, make_room):
        make_room()
        make_room(capacity=1, current_occupancy=1)

        assert len(service.available_rooms().data) == 1


@pytest.mark.parametrize(
    "call",
    [
        lambda s: s.resolution_stats(days=0),
        lambda s: s.resolution_stats(days=5000),
        lambda s: s.monthly_trends(0),
        lambda s: s.monthly_trends(121),
        lambda s: s.available_rooms(gender="robot"),
    ],
)
def test_invalid_parameters(service, call):
    assert call(service).error_code == ErrorCode.VALIDATION_ERROR
