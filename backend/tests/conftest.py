from unittest.mock import MagicMock

import pytest

from clinic_booking import create_app
from clinic_booking.config import TestingConfig
from clinic_booking.models.booking import Booking
from clinic_booking.services.booking_store import BookingStore
from clinic_booking.services.doctor_directory import DoctorDirectoryClient

ALL_DAYS = ["sunday", "monday", "tuesday", "wednesday", "thursday", "friday", "saturday"]

SCHEDULE_FEED = [
    {
        "name": "Dr. Alice Chen",
        "timezone": "Australia/Sydney",
        "day_of_week": day,
        "available_at": "9:00AM",
        "available_until": "11:00AM",
    }
    for day in ALL_DAYS
] + [
    {
        "name": "Dr. Bob Ruiz",
        "timezone": "America/New_York",
        "day_of_week": "Monday",
        "available_at": " 1:00PM",
        "available_until": "2:00PM ",
    },
]


def make_booking(**overrides) -> Booking:
    fields = dict(
        id="booking-1",
        doctor_id="test-doctor",
        doctor_name="Test Doctor",
        doctor_timezone="Australia/Sydney",
        date="2025-01-06",
        day_of_week="monday",
        start_time="09:30",
        end_time="10:00",
        created_at="2025-01-01T00:00:00Z",
    )
    fields.update(overrides)
    return Booking(**fields)


def make_response(payload=None, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def directory_session():
    """requests.Session stand-in serving SCHEDULE_FEED"""
    session = MagicMock()
    session.get.return_value = make_response(SCHEDULE_FEED)
    return session


@pytest.fixture
def store(tmp_path):
    return BookingStore(str(tmp_path / "bookings.json"), TestingConfig.BOOKINGS_STORAGE_KEY)


@pytest.fixture
def app(store, directory_session):
    directory = DoctorDirectoryClient(TestingConfig.DOCTORS_API_URL, session=directory_session)
    app = create_app(TestingConfig, directory_client=directory, booking_store=store)
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
