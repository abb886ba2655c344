"""
Maintenance staff directory.
"""
import pytest

from hostel_admin.core.exceptions import ErrorCode
from hostel_admin.models.base.enums import ComplaintCategory
from hostel_admin.services.complaint import ComplaintService
from hostel_admin.services.maintenance import StaffService


@pytest.fixture
def service(db_session):
    return StaffService.from_session(db_session)


def staff_data(**overrides):
    data = {
        "name": "Suresh",
        "email": "Suresh@Example.edu",
        "phone": "9988776655",
        "specialization": "plumbing",
    }
    data.update(overrides)
    return data


def test_create_staff(service):
    result = service.create(staff_data())

    assert result.is_success
    assert result.data.specialization == ComplaintCategory.PLUMBING
    assert result.data.is_available is True
    assert result.data.email == "suresh@example.edu"


def test_create_staff_duplicate_email(service):
    service.create(staff_data())

    assert service.create(staff_data(name="Other")).error_code == ErrorCode.ALREADY_EXISTS


def test_create_staff_invalid_specialization(service):
    assert service.create(staff_data(specialization="gardening")).error_code == ErrorCode.VALIDATION_ERROR


def test_create_staff_unknown_hostel(service):
    assert service.create(staff_data(hostel_id=999999)).error_code == ErrorCode.NOT_FOUND


def test_list_filters(service, make_staff):
    electrician = make_staff(specialization=ComplaintCategory.ELECTRICAL)
    make_staff(specialization=ComplaintCategory.PLUMBING, is_available=False)

    assert [s.id for s in service.list(specialization="electrical").data] == [electrician.id]
    assert len(service.list(is_available=False).data) == 1
    assert len(service.list().data) == 2


def test_unavailable_staff_cannot_be_assigned(db_session, service, make_staff, make_student, make_room):
    staff = make_staff()
    complaint = ComplaintService.from_session(db_session).create(
        make_student().id, make_room().id, "electrical", "Spark", "Socket sparks"
    ).data

    service.set_availability(staff.id, False)
    result = ComplaintService.from_session(db_session).transition(
        complaint.id, assigned_staff_id=staff.id
    )

    assert result.error_code == ErrorCode.STAFF_UNAVAILABLE


def test_set_availability_unknown(service):
    assert service.set_availability(999999, True).error_code == ErrorCode.NOT_FOUND
