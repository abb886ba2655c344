"""
Complaint state machine and its audit trail.
"""
import pytest

from hostel_admin.core.exceptions import ErrorCode
from hostel_admin.models import ComplaintLog
from hostel_admin.models.base.enums import ComplaintCategory, ComplaintStatus
from hostel_admin.services.complaint import ComplaintService


@pytest.fixture
def service(db_session):
    return ComplaintService.from_session(db_session)


@pytest.fixture
def student_room(make_room, make_student):
    return make_student(), make_room()


@pytest.fixture
def open_complaint(service, student_room):
    student, room = student_room
    return service.create(
        student.id,
        room.id,
        "electrical",
        "Fan not working",
        "Ceiling fan stopped working yesterday",
        priority=2,
    ).data


def history(db_session, complaint_id):
    return (
        db_session.query(ComplaintLog)
        .filter(ComplaintLog.complaint_id == complaint_id)
        .order_by(ComplaintLog.id)
        .all()
    )


class TestCreate:
    def test_create_opens_complaint_with_history_row(self, db_session, open_complaint):
        assert open_complaint.status == ComplaintStatus.OPEN
        assert open_complaint.category == ComplaintCategory.ELECTRICAL
        assert open_complaint.priority == 2
        assert open_complaint.assigned_at is None

        rows = history(db_session, open_complaint.id)
        assert len(rows) == 1
        assert rows[0].old_status is None
        assert rows[0].new_status == ComplaintStatus.OPEN
        assert rows[0].notes == "Complaint created"
        assert rows[0].changed_by == "system"

    def test_create_records_actor(self, db_session, service, student_room):
        student, room = student_room

        complaint = service.create(
            student.id, room.id, "plumbing", "Leak", "Tap leaking", actor="warden"
        ).data

        assert history(db_session, complaint.id)[0].changed_by == "warden"

    def test_invalid_category(self, service, student_room):
        student, room = student_room

        result = service.create(student.id, room.id, "noise", "Loud", "Neighbours")

        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.message.startswith("Invalid category. Must be one of:")

    @pytest.mark.parametrize("priority", [0, 6, "high"])
    def test_invalid_priority(self, service, student_room, priority):
        student, room = student_room

        result = service.create(student.id, room.id, "other", "T", "D", priority=priority)

        assert result.error_code == ErrorCode.VALIDATION_ERROR

    def test_inactive_student(self, service, make_student, make_room):
        student = make_student(is_active=False)

        result = service.create(student.id, make_room().id, "cleaning", "Dust", "Dusty room")

        assert result.error_code == ErrorCode.STUDENT_INACTIVE

    def test_unknown_room(self, service, make_student):
        result = service.create(make_student().id, 999999, "cleaning", "Dust", "Dusty room")

        assert result.error_code == ErrorCode.NOT_FOUND


class TestTransition:
    def test_assign_staff_sets_timestamp_and_logs(self, db_session, service, open_complaint, make_staff):
        staff = make_staff()

        result = service.transition(open_complaint.id, status="assigned", assigned_staff_id=staff.id)

        assert result.is_success
        complaint = result.data
        assert complaint.status == ComplaintStatus.ASSIGNED
        assert complaint.assigned_to == staff.id
        assert complaint.assigned_at is not None
        rows = history(db_session, complaint.id)
        assert len(rows) == 2
        assert rows[-1].old_status == ComplaintStatus.OPEN
        assert rows[-1].new_status == ComplaintStatus.ASSIGNED
        assert rows[-1].notes == f"Assigned to staff ID: {staff.id}"

    def test_repeating_same_status_adds_no_history(self, db_session, service, open_complaint, make_staff):
        staff = make_staff()
        service.transition(open_complaint.id, status="assigned", assigned_staff_id=staff.id)
        assigned_at = open_complaint.assigned_at

        result = service.transition(open_complaint.id, status="assigned")

        assert result.is_success
        assert len(history(db_session, open_complaint.id)) == 2
        db_session.refresh(open_complaint)
        assert open_complaint.assigned_at == assigned_at

    def test_assigned_without_staff_is_rejected(self, db_session, service, open_complaint):
        result = service.transition(open_complaint.id, status="assigned")

        assert result.error_code == ErrorCode.MISSING_ASSIGNMENT
        db_session.refresh(open_complaint)
        assert open_complaint.status == ComplaintStatus.OPEN
        assert len(history(db_session, open_complaint.id)) == 1

    def test_unavailable_or_unknown_staff(self, db_session, service, open_complaint, make_staff):
        busy = make_staff(is_available=False)

        assert (
            service.transition(open_complaint.id, assigned_staff_id=busy.id).error_code
            == ErrorCode.STAFF_UNAVAILABLE
        )
        assert (
            service.transition(open_complaint.id, assigned_staff_id=999999).error_code
            == ErrorCode.STAFF_UNAVAILABLE
        )
        db_session.refresh(open_complaint)
        assert open_complaint.assigned_to is None

    def test_staff_on_open_complaint_auto_advances(self, db_session, service, open_complaint, make_staff):
        staff = make_staff()

        complaint = service.transition(open_complaint.id, assigned_staff_id=staff.id).data

        assert complaint.status == ComplaintStatus.ASSIGNED
        assert complaint.assigned_at is not None
        assert len(history(db_session, complaint.id)) == 2

    def test_explicit_null_unassigns(self, db_session, service, open_complaint, make_staff):
        staff = make_staff()
        service.transition(open_complaint.id, status="in_progress", assigned_staff_id=staff.id)

        complaint = service.transition(open_complaint.id, assigned_staff_id=None).data

        assert complaint.assigned_to is None
        assert complaint.status == ComplaintStatus.IN_PROGRESS
        assert len(history(db_session, complaint.id)) == 2

    def test_resolution_note(self, db_session, service, open_complaint):
        complaint = service.transition(
            open_complaint.id, status="resolved", resolution_notes="Replaced capacitor"
        ).data

        assert complaint.resolved_at is not None
        assert complaint.resolution_notes == "Replaced capacitor"
        assert history(db_session, complaint.id)[-1].notes == "Resolution: Replaced capacitor"

    def test_resolution_without_notes(self, db_session, service, open_complaint):
        service.transition(open_complaint.id, status="resolved")

        assert history(db_session, open_complaint.id)[-1].notes == "Resolution: No notes"

    def test_reopen_keeps_first_resolved_timestamp(self, db_session, service, open_complaint):
        service.transition(open_complaint.id, status="resolved")
        db_session.refresh(open_complaint)
        first_resolved = open_complaint.resolved_at

        service.transition(open_complaint.id, status="open")
        complaint = service.transition(open_complaint.id, status="resolved").data

        assert complaint.resolved_at == first_resolved
        statuses = [row.new_status for row in history(db_session, complaint.id)]
        assert statuses == [
            ComplaintStatus.OPEN,
            ComplaintStatus.RESOLVED,
            ComplaintStatus.OPEN,
            ComplaintStatus.RESOLVED,
        ]

    def test_close_sets_closed_at(self, service, open_complaint):
        complaint = service.transition(open_complaint.id, status="closed").data

        assert complaint.closed_at is not None
        assert complaint.status == ComplaintStatus.CLOSED

    def test_field_only_update_adds_no_history(self, db_session, service, open_complaint):
        complaint = service.transition(open_complaint.id, priority=5, resolution_notes="Waiting").data

        assert complaint.priority == 5
        assert complaint.status == ComplaintStatus.OPEN
        assert len(history(db_session, complaint.id)) == 1

    def test_invalid_status(self, service, open_complaint):
        result = service.transition(open_complaint.id, status="done")

        assert result.error_code == ErrorCode.INVALID_STATUS
        assert result.error.status_code == 400

    def test_empty_update(self, service, open_complaint):
        result = service.transition(open_complaint.id)

        assert result.error_code == ErrorCode.VALIDATION_ERROR
        assert result.message == "No fields to update"

    def test_unknown_complaint(self, service):
        assert service.transition(999999, status="closed").error_code == ErrorCode.NOT_FOUND


class TestQueries:
    def test_detail_includes_history_newest_first(self, service, open_complaint, make_staff):
        staff = make_staff(name="Ravi")
        service.transition(open_complaint.id, assigned_staff_id=staff.id)

        detail = service.get_detail(open_complaint.id).data

        assert detail.assigned_staff_name == "Ravi"
        assert [h.new_status for h in detail.history] == [
            ComplaintStatus.ASSIGNED,
            ComplaintStatus.OPEN,
        ]

    def test_get_unknown(self, service):
        assert service.get_detail(999999).error_code == ErrorCode.NOT_FOUND

    def test_list_orders_by_status_then_priority(self, service, student_room, make_staff):
        student, room = student_room
        staff = make_staff()

        def create(title, priority):
            return service.create(student.id, room.id, "other", title, "details", priority=priority).data

        resolved = create("resolved", 1)
        service.transition(resolved.id, status="resolved")
        assigned = create("assigned", 1)
        service.transition(assigned.id, assigned_staff_id=staff.id)
        open_low = create("open low", 4)
        open_high = create("open high", 1)

        titles = [c.title for c in service.list().data]

        assert titles == ["open high", "open low", "assigned", "resolved"]

    def test_list_filters(self, service, student_room, make_staff):
        student, room = student_room
        staff = make_staff()
        first = service.create(student.id, room.id, "electrical", "A", "a").data
        service.create(student.id, room.id, "plumbing", "B", "b")
        service.transition(first.id, assigned_staff_id=staff.id)

        assert [c.title for c in service.list(category="plumbing").data] == ["B"]
        assert [c.title for c in service.list(status="assigned").data] == ["A"]
        assert [c.title for c in service.list(assigned=False).data] == ["B"]
        assert len(service.list(hostel_id=room.hostel_id).data) == 2
        assert service.list(status="bogus").error_code == ErrorCode.INVALID_STATUS
