"""
HTTP surface: routing, status codes and the response envelope.
"""
from datetime import timedelta

import pytest

from hostel_admin.core.utils import today
from hostel_admin.models.base.enums import Gender

API = "/api/v1"


@pytest.fixture
def hostel_id(client):
    response = client.post(
        f"{API}/hostels",
        json={"name": "Kaveri", "address": "South Campus", "gender_allowed": "male"},
    )
    assert response.status_code == 201
    return response.json()["data"]["id"]


@pytest.fixture
def room_id(client, hostel_id):
    response = client.post(
        f"{API}/hostels/{hostel_id}/rooms",
        json={"room_number": "G-01", "floor": 0, "room_type": "single", "capacity": 1, "rent_amount": "3500.00"},
    )
    assert response.status_code == 201
    return response.json()["data"]["id"]


def register_student(client, number, gender="male"):
    response = client.post(
        f"{API}/students",
        json={
            "registration_number": f"EE2024{number:03d}",
            "first_name": "Ravi",
            "last_name": f"Verma{number}",
            "email": f"ravi{number}@hostel.ac.in",
            "phone": "9812345670",
            "gender": gender,
            "date_of_birth": "2005-08-15",
            "address": "7 Station Road",
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "healthy"
    assert "X-Process-Time" in response.headers
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed_when_well_formed(client):
    echoed = client.get("/health", headers={"X-Request-ID": "trace-42.a"})
    replaced = client.get("/health", headers={"X-Request-ID": "bad id with spaces"})

    assert echoed.headers["X-Request-ID"] == "trace-42.a"
    assert replaced.headers["X-Request-ID"] != "bad id with spaces"
    assert len(replaced.headers["X-Request-ID"]) == 36


def test_hostel_and_room_setup(client, hostel_id, room_id):
    hostel = client.get(f"{API}/hostels/{hostel_id}").json()

    assert hostel["success"] is True
    assert hostel["data"]["total_rooms"] == 1
    rooms = client.get(f"{API}/rooms", params={"hostel_id": hostel_id}).json()["data"]
    assert [r["id"] for r in rooms] == [room_id]
    assert rooms[0]["current_occupancy"] == 0


def test_allocation_lifecycle(client, room_id):
    student_id = register_student(client, 1)

    created = client.post(f"{API}/allocations", json={"student_id": student_id, "room_id": room_id})
    assert created.status_code == 201
    allocation_id = created.json()["data"]["id"]
    assert created.json()["data"]["is_active"] is True

    student = client.get(f"{API}/students/{student_id}").json()["data"]
    assert student["current_room"]["room_id"] == room_id

    other = register_student(client, 2)
    full = client.post(f"{API}/allocations", json={"student_id": other, "room_id": room_id})
    assert full.status_code == 409
    assert full.json()["error"]["code"] == "ROOM_FULL"

    first = client.delete(f"{API}/allocations/{allocation_id}")
    second = client.delete(f"{API}/allocations/{allocation_id}")
    assert first.status_code == 200
    assert first.json()["data"]["is_active"] is False
    assert second.status_code == 409
    assert second.json() == {
        "success": False,
        "error": {
            "code": "ALREADY_INACTIVE",
            "message": second.json()["error"]["message"],
            "details": second.json()["error"]["details"],
        },
    }


def test_allocation_update_and_listing(client, room_id):
    student_id = register_student(client, 3)
    allocation_id = client.post(
        f"{API}/allocations", json={"student_id": student_id, "room_id": room_id}
    ).json()["data"]["id"]
    checkout = (today() + timedelta(days=120)).isoformat()

    updated = client.put(f"{API}/allocations/{allocation_id}", json={"expected_checkout": checkout})
    listing = client.get(f"{API}/allocations", params={"is_active": True, "limit": 10})

    assert updated.status_code == 200
    assert updated.json()["data"]["expected_checkout"] == checkout
    body = listing.json()
    assert body["pagination"]["total"] == 1
    assert body["data"][0]["student_id"] == student_id


def test_gender_mismatch(client, room_id):
    student_id = register_student(client, 4, gender="female")

    response = client.post(f"{API}/allocations", json={"student_id": student_id, "room_id": room_id})

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "GENDER_MISMATCH"


def test_complaint_workflow(client, room_id, make_staff):
    student_id = register_student(client, 5)
    staff = make_staff()

    created = client.post(
        f"{API}/complaints",
        json={
            "student_id": student_id,
            "room_id": room_id,
            "category": "electrical",
            "title": "Fan not working",
            "description": "Ceiling fan stopped",
            "priority": 2,
            "changed_by": "warden",
        },
    )
    assert created.status_code == 201
    complaint_id = created.json()["data"]["id"]
    assert created.json()["data"]["status"] == "open"

    assigned = client.put(
        f"{API}/complaints/{complaint_id}",
        json={"assigned_staff_id": staff.id, "changed_by": "warden"},
    )
    assert assigned.json()["data"]["status"] == "assigned"

    resolved = client.put(
        f"{API}/complaints/{complaint_id}",
        json={"status": "resolved", "resolution_notes": "Replaced capacitor"},
    )
    assert resolved.json()["data"]["resolved_at"] is not None

    detail = client.get(f"{API}/complaints/{complaint_id}").json()["data"]
    assert [h["new_status"] for h in detail["history"]] == ["resolved", "assigned", "open"]
    assert detail["history"][1]["changed_by"] == "warden"
    assert detail["history"][0]["notes"] == "Resolution: Replaced capacitor"


def test_complaint_bad_updates(client, room_id):
    student_id = register_student(client, 6)
    complaint_id = client.post(
        f"{API}/complaints",
        json={
            "student_id": student_id,
            "room_id": room_id,
            "category": "plumbing",
            "title": "Leak",
            "description": "Tap leaks",
        },
    ).json()["data"]["id"]

    bogus = client.put(f"{API}/complaints/{complaint_id}", json={"status": "bogus"})
    empty = client.put(f"{API}/complaints/{complaint_id}", json={})
    unassigned = client.put(f"{API}/complaints/{complaint_id}", json={"status": "assigned"})

    assert bogus.status_code == 400
    assert bogus.json()["error"]["code"] == "INVALID_STATUS"
    assert empty.status_code == 400
    assert empty.json()["error"]["code"] == "VALIDATION_ERROR"
    assert unassigned.status_code == 409
    assert unassigned.json()["error"]["code"] == "MISSING_ASSIGNMENT"


def test_complaint_create_rejections(client, room_id):
    student_id = register_student(client, 7)
    payload = {
        "student_id": student_id,
        "room_id": room_id,
        "category": "electrical",
        "title": "Socket sparks",
        "description": "Wall socket sparks when used",
    }

    unknown_room = client.post(f"{API}/complaints", json={**payload, "room_id": 9999})
    unknown_student = client.post(f"{API}/complaints", json={**payload, "student_id": 9999})
    client.delete(f"{API}/students/{student_id}")
    inactive = client.post(f"{API}/complaints", json=payload)

    assert unknown_room.status_code == 404
    assert unknown_room.json()["error"]["code"] == "NOT_FOUND"
    assert unknown_student.status_code == 404
    assert inactive.status_code == 409
    assert inactive.json()["error"]["code"] == "STUDENT_INACTIVE"
    assert client.get(f"{API}/complaints").json()["data"] == []


def test_request_validation_envelope(client):
    response = client.post(f"{API}/allocations", json={"student_id": "abc"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["error"]["details"]["errors"]}
    assert {"student_id", "room_id"} <= fields


def test_unknown_resource(client):
    response = client.get(f"{API}/students/999999")

    assert response.status_code == 404
    assert response.json()["success"] is False
    assert response.json()["error"]["code"] == "NOT_FOUND"


def test_student_pagination_and_deactivation(client, room_id):
    first = register_student(client, 7)
    register_student(client, 8)
    client.post(f"{API}/allocations", json={"student_id": first, "room_id": room_id})

    page = client.get(f"{API}/students", params={"limit": 1, "page": 2}).json()
    deactivated = client.delete(f"{API}/students/{first}")
    dashboard = client.get(f"{API}/students/{first}/dashboard").json()["data"]

    assert page["pagination"] == {"page": 2, "limit": 1, "total": 2, "pages": 2}
    assert len(page["data"]) == 1
    assert deactivated.json()["data"]["is_active"] is False
    assert dashboard["current_room"] is None
    assert client.get(f"{API}/rooms").json()["data"][0]["current_occupancy"] == 0


def test_page_size_limit(client):
    assert client.get(f"{API}/students", params={"limit": 0}).status_code == 400
    assert client.get(f"{API}/students", params={"page": 0}).status_code == 400


def test_available_rooms_by_gender(client, make_hostel, make_room):
    male_room = make_room(hostel=make_hostel(Gender.MALE))
    female_room = make_room(hostel=make_hostel(Gender.FEMALE))
    make_room(hostel=make_hostel(Gender.FEMALE), capacity=1, current_occupancy=1)

    female = client.get(f"{API}/rooms/available", params={"gender": "female"}).json()["data"]
    everything = client.get(f"{API}/rooms/available").json()["data"]
    bad = client.get(f"{API}/rooms/available", params={"gender": "robot"})

    assert [r["room_id"] for r in female] == [female_room.id]
    assert {r["room_id"] for r in everything} == {male_room.id, female_room.id}
    assert bad.status_code == 400


def test_room_availability_and_removal(client, hostel_id, room_id):
    blocked = client.patch(f"{API}/rooms/{room_id}/availability", json={"is_available": False})
    removed = client.delete(f"{API}/rooms/{room_id}")
    missing = client.delete(f"{API}/rooms/{room_id}")

    assert blocked.json()["data"]["is_available"] is False
    assert removed.status_code == 200
    assert missing.status_code == 404
    assert client.get(f"{API}/hostels/{hostel_id}").json()["data"]["total_rooms"] == 0


@pytest.mark.parametrize(
    "path",
    ["categories", "rooms", "hostels", "resolution", "trends", "staff"],
)
def test_analytics_endpoints(client, path):
    response = client.get(f"{API}/analytics/{path}")

    assert response.status_code == 200
    assert response.json()["success"] is True


def test_analytics_parameter_validation(client):
    assert client.get(f"{API}/analytics/trends", params={"months": 0}).status_code == 400
    assert client.get(f"{API}/analytics/resolution", params={"days": -1}).status_code == 400


def test_staff_endpoints(client):
    created = client.post(
        f"{API}/staff",
        json={"name": "Mohan", "email": "mohan@hostel.ac.in", "phone": "9000011111", "specialization": "internet"},
    )
    staff_id = created.json()["data"]["id"]
    toggled = client.patch(f"{API}/staff/{staff_id}/availability", json={"is_available": False})
    listed = client.get(f"{API}/staff", params={"is_available": False}).json()["data"]

    assert created.status_code == 201
    assert toggled.json()["data"]["is_available"] is False
    assert [s["id"] for s in listed] == [staff_id]


def test_payment_flow(client):
    student_id = register_student(client, 9)
    due = (today() - timedelta(days=5)).isoformat()

    created = client.post(
        f"{API}/payments",
        json={"student_id": student_id, "amount": "4200.00", "due_date": due, "semester": "2024-EVEN"},
    )
    payment_id = created.json()["data"]["id"]
    dues = client.get(f"{API}/payments/dues").json()["data"]
    paid = client.post(f"{API}/payments/{payment_id}/pay", json={"payment_method": "cash"})
    again = client.post(f"{API}/payments/{payment_id}/pay", json={})
    history = client.get(f"{API}/students/{student_id}/payments").json()["data"]

    assert created.status_code == 201
    assert created.json()["data"]["payment_status"] == "pending"
    assert [d["payment_id"] for d in dues] == [payment_id]
    assert dues[0]["days_overdue"] == 5
    assert paid.json()["data"]["payment_status"] == "paid"
    assert again.status_code == 409
    assert history[0]["payment_method"] == "cash"
    assert client.get(f"{API}/payments/dues").json()["data"] == []
