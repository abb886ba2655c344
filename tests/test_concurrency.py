"""
Concurrent assigns against one room must never overfill it.
"""
from concurrent.futures import ThreadPoolExecutor

from hostel_admin.core.exceptions import ErrorCode
from hostel_admin.models import Allocation, Room
from hostel_admin.services.room import AllocationService


def test_concurrent_assigns_fill_exactly_free_slots(
    db_session, session_factory, make_room, make_student
):
    room = make_room(capacity=3)
    room_id = room.id
    student_ids = [make_student().id for _ in range(8)]
    db_session.close()

    def assign(student_id):
        session = session_factory()
        try:
            return AllocationService.from_session(session).assign(student_id, room_id).error_code
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=len(student_ids)) as pool:
        outcomes = list(pool.map(assign, student_ids))

    assert outcomes.count(None) == 3
    assert outcomes.count(ErrorCode.ROOM_FULL) == 5

    check = session_factory()
    try:
        assert check.get(Room, room_id).current_occupancy == 3
        active = (
            check.query(Allocation)
            .filter(Allocation.room_id == room_id, Allocation.is_active == True)  # noqa: E712
            .count()
        )
        assert active == 3
    finally:
        check.close()


def test_concurrent_checkouts_release_once(db_session, session_factory, make_room, make_student):
    room = make_room(capacity=2)
    allocation = AllocationService.from_session(db_session).assign(make_student().id, room.id).data
    room_id, allocation_id = room.id, allocation.id
    db_session.close()

    def checkout(_):
        session = session_factory()
        try:
            return AllocationService.from_session(session).checkout(allocation_id).error_code
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=4) as pool:
        outcomes = list(pool.map(checkout, range(4)))

    assert outcomes.count(None) == 1
    assert outcomes.count(ErrorCode.ALREADY_INACTIVE) == 3

    check = session_factory()
    try:
        assert check.get(Room, room_id).current_occupancy == 0
    finally:
        check.close()
