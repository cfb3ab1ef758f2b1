# tests/conftest.py
import os

# Must be set before campus_ops builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LOG_FORMAT", "text")

from datetime import date, time

import pytest

from campus_ops.booking import services as booking_service
from campus_ops.booking.schemas import BookingCreate
from campus_ops.core.database import Base, SessionLocal, engine
from campus_ops.core.security import Caller, Role
from campus_ops.facility.models import Facility, FacilityStatus, FacilityType
from campus_ops.main import init_hub  # noqa: F401  (registers all models)
from campus_ops.stores import Stores
from campus_ops.user.models import User

DAY = date(2026, 11, 2)


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def stores(db):
    return Stores.from_session(db)


@pytest.fixture
def users(db):
    people = {
        "alice": User(name="Alice", email="alice@campus.edu", role=Role.USER),
        "bob": User(name="Bob", email="bob@campus.edu", role=Role.USER),
        "admin": User(name="Ada Admin", email="admin@campus.edu", role=Role.ADMIN),
        "tech": User(name="Tom Tech", email="tech@campus.edu", role=Role.TECHNICIAN,
                     profile_picture="https://img.campus.edu/tom.png"),
        "manager": User(name="Mia Manager", email="manager@campus.edu", role=Role.MANAGER),
    }
    db.add_all(people.values())
    db.commit()
    return people


@pytest.fixture
def callers(users):
    return {name: Caller(user_id=u.id, role=u.role) for name, u in users.items()}


@pytest.fixture
def facility(db):
    lab = Facility(name="Lab B204", type=FacilityType.LAB, location="Building B, Floor 2",
                   capacity=30, status=FacilityStatus.ACTIVE)
    db.add(lab)
    db.commit()
    return lab


@pytest.fixture
def broken_facility(db):
    hall = Facility(name="Hall A1", type=FacilityType.LECTURE_HALL, location="Building A",
                    capacity=200, status=FacilityStatus.OUT_OF_SERVICE)
    db.add(hall)
    db.commit()
    return hall


@pytest.fixture
def make_booking(stores, facility):
    def _make(caller, start: time, end: time, *, day: date = DAY, facility_id: int | None = None):
        payload = BookingCreate(
            facility_id=facility_id or facility.id,
            booking_date=day,
            start_time=start,
            end_time=end,
            purpose="Lab session",
        )
        return booking_service.create_booking(stores, caller, payload)
    return _make
