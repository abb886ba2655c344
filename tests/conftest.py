"""
Hostel Administration - Test Configuration and Fixtures
"""
import itertools
import os
from datetime import date
from decimal import Decimal
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

# Set testing environment before the application reads its settings
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite:///./test_hostel_admin.db"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from hostel_admin.db.init_db import init_db  # noqa: E402
from hostel_admin.db.session import build_engine, get_db  # noqa: E402
from hostel_admin.main import app  # noqa: E402
from hostel_admin.models import Hostel, MaintenanceStaff, Room, Student  # noqa: E402
from hostel_admin.models.base.enums import ComplaintCategory, Gender, RoomType  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    """A fresh SQLite file database per test, with the full schema."""
    test_engine = build_engine(f"sqlite:///{tmp_path / 'hostel_admin.db'}")
    init_db(bind=test_engine)
    yield test_engine
    test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    """Create a database session for each test"""
    session = session_factory()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ==================== Factories ====================

_sequence = itertools.count(1)


@pytest.fixture
def make_hostel(db_session: Session):
    def _make(gender_allowed: Gender = Gender.MALE, name: str = None, **kwargs) -> Hostel:
        hostel = Hostel(
            name=name or f"Hostel {next(_sequence)}",
            address="1 Campus Road",
            gender_allowed=gender_allowed,
            total_rooms=kwargs.pop("total_rooms", 0),
            **kwargs,
        )
        db_session.add(hostel)
        db_session.commit()
        return hostel

    return _make


@pytest.fixture
def make_room(db_session: Session, make_hostel):
    def _make(
        hostel: Hostel = None,
        capacity: int = 2,
        current_occupancy: int = 0,
        is_available: bool = True,
        room_number: str = None,
        **kwargs,
    ) -> Room:
        room = Room(
            hostel_id=(hostel or make_hostel()).id,
            room_number=room_number or f"R{next(_sequence)}",
            floor=kwargs.pop("floor", 1),
            room_type=kwargs.pop("room_type", RoomType.DOUBLE),
            capacity=capacity,
            current_occupancy=current_occupancy,
            rent_amount=kwargs.pop("rent_amount", Decimal("5000.00")),
            is_available=is_available,
            **kwargs,
        )
        db_session.add(room)
        db_session.commit()
        return room

    return _make


@pytest.fixture
def make_student(db_session: Session):
    def _make(gender: Gender = Gender.MALE, is_active: bool = True, **kwargs) -> Student:
        n = next(_sequence)
        student = Student(
            registration_number=kwargs.pop("registration_number", f"REG{n:05d}"),
            first_name=kwargs.pop("first_name", "Student"),
            last_name=kwargs.pop("last_name", f"Number{n}"),
            email=kwargs.pop("email", f"student{n}@example.edu"),
            phone=kwargs.pop("phone", "9876543210"),
            gender=gender,
            date_of_birth=kwargs.pop("date_of_birth", date(2003, 5, 17)),
            address=kwargs.pop("address", "42 Hill Street"),
            is_active=is_active,
            **kwargs,
        )
        db_session.add(student)
        db_session.commit()
        return student

    return _make


@pytest.fixture
def make_staff(db_session: Session):
    def _make(
        specialization: ComplaintCategory = ComplaintCategory.ELECTRICAL,
        is_available: bool = True,
        **kwargs,
    ) -> MaintenanceStaff:
        n = next(_sequence)
        staff = MaintenanceStaff(
            name=kwargs.pop("name", f"Technician {n}"),
            email=kwargs.pop("email", f"staff{n}@example.edu"),
            phone=kwargs.pop("phone", "9123456780"),
            specialization=specialization,
            is_available=is_available,
            **kwargs,
        )
        db_session.add(staff)
        db_session.commit()
        return staff

    return _make
