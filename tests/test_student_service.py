"""
Student registry: records, deactivation and dashboard.
"""
from datetime import date, timedelta
from decimal import Decimal

import pytest

from hostel_admin.core.exceptions import ErrorCode
from hostel_admin.core.utils import today
from hostel_admin.models import Allocation
from hostel_admin.models.base.enums import PaymentStatus
from hostel_admin.services.complaint import ComplaintService
from hostel_admin.services.payment import PaymentService
from hostel_admin.services.room import AllocationService
from hostel_admin.services.student import StudentService


@pytest.fixture
def service(db_session):
    return StudentService.from_session(db_session)


def student_data(**overrides):
    data = {
        "registration_number": "CS2024001",
        "first_name": "Asha",
        "last_name": "Rao",
        "email": "Asha.Rao@Example.edu",
        "phone": "9876501234",
        "gender": "female",
        "date_of_birth": date(2004, 2, 29),
        "address": "12 Lake View",
        "department": "Computer Science",
        "year_of_study": 1,
    }
    data.update(overrides)
    return data


def test_create_student(service):
    result = service.create(student_data())

    assert result.is_success
    assert result.data.is_active is True
    assert result.data.email == "asha.rao@example.edu"


def test_duplicate_registration_number_and_email(service):
    service.create(student_data())

    by_number = service.create(student_data(email="other@example.edu"))
    by_email = service.create(student_data(registration_number="CS2024999"))

    assert by_number.error_code == ErrorCode.ALREADY_EXISTS
    assert by_email.error_code == ErrorCode.ALREADY_EXISTS


def test_get_includes_current_room(db_session, service, make_room, make_student):
    student = make_student()
    room = make_room()
    AllocationService.from_session(db_session).assign(student.id, room.id)

    detail = service.get(student.id).data

    assert detail.current_room.room_id == room.id
    assert detail.current_room.hostel_id == room.hostel_id


def test_get_without_room(service, make_student):
    assert service.get(make_student().id).data.current_room is None


def test_get_unknown(service):
    assert service.get(999999).error_code == ErrorCode.NOT_FOUND


def test_list_search_and_active_filter(service, make_student):
    make_student(first_name="Kiran", last_name="Kumar")
    make_student(first_name="Meera", last_name="Iyer", is_active=False)

    found = service.list(search="kir")
    inactive = service.list(is_active=False)

    assert [s.first_name for s in found.data] == ["Kiran"]
    assert found.metadata["pagination"]["total"] == 1
    assert [s.first_name for s in inactive.data] == ["Meera"]


def test_update_profile(service, make_student):
    student = make_student()

    result = service.update(student.id, {"phone": "9000000000", "department": "Physics"})

    assert result.data.phone == "9000000000"
    assert result.data.department == "Physics"


def test_update_ignores_non_profile_fields(service, make_student):
    student = make_student()

    result = service.update(student.id, {"is_active": False, "registration_number": "NEW"})

    assert result.error_code == ErrorCode.VALIDATION_ERROR
    assert result.message == "No fields to update"


def test_update_duplicate_email(service, make_student):
    first = make_student()
    second = make_student()

    result = service.update(second.id, {"email": first.email})

    assert result.error_code == ErrorCode.ALREADY_EXISTS


def test_deactivate_releases_room(db_session, service, make_room, make_student):
    student = make_student()
    room = make_room()
    AllocationService.from_session(db_session).assign(student.id, room.id)

    result = service.deactivate(student.id)

    assert result.is_success
    assert result.data.is_active is False
    active = (
        db_session.query(Allocation)
        .filter(Allocation.student_id == student.id, Allocation.is_active == True)  # noqa: E712
        .count()
    )
    assert active == 0
    db_session.refresh(room)
    assert room.current_occupancy == 0


def test_deactivate_twice_is_harmless(db_session, service, make_room, make_student):
    student = make_student()
    room = make_room(capacity=3, current_occupancy=1)
    AllocationService.from_session(db_session).assign(student.id, room.id)

    service.deactivate(student.id)
    second = service.deactivate(student.id)

    assert second.is_success
    db_session.refresh(room)
    assert room.current_occupancy == 1


def test_deactivate_unknown(service):
    assert service.deactivate(999999).error_code == ErrorCode.NOT_FOUND


def test_dashboard(db_session, service, make_room, make_student):
    student = make_student()
    room = make_room()
    AllocationService.from_session(db_session).assign(student.id, room.id)
    payments = PaymentService.from_session(db_session)
    paid = payments.record(student.id, Decimal("3000"), today()).data
    payments.mark_paid(paid.id)
    payments.record(student.id, Decimal("1500.50"), today() + timedelta(days=30))
    complaints = ComplaintService.from_session(db_session)
    first = complaints.create(student.id, room.id, "cleaning", "Dust", "Dusty")
    complaints.create(student.id, room.id, "pest_control", "Ants", "Ants everywhere")
    complaints.transition(first.data.id, status="closed")

    dashboard = service.dashboard(student.id).data

    assert dashboard.current_room.room_id == room.id
    assert dashboard.total_paid == Decimal("3000")
    assert dashboard.pending_amount == Decimal("1500.50")
    assert dashboard.total_complaints == 2
    assert dashboard.active_complaints == 1


def test_dashboard_without_activity(service, make_student):
    dashboard = service.dashboard(make_student().id).data

    assert dashboard.current_room is None
    assert dashboard.total_paid == Decimal("0")
    assert dashboard.pending_amount == Decimal("0")
    assert dashboard.total_complaints == 0


def test_unpaid_statuses_cover_partial_payments():
    from hostel_admin.services.student.student_service import UNPAID_STATUSES

    assert PaymentStatus.PARTIAL in UNPAID_STATUSES
    assert PaymentStatus.PAID not in UNPAID_STATUSES
