"""Tests for the HTTP API."""

from datetime import timedelta

import pytest
import requests

from clinic_booking.utils.time_utils import format_date, get_day_of_week, get_today

from conftest import make_booking, make_response

ALICE = "dr--alice-chen"
BOB = "dr--bob-ruiz"


@pytest.fixture
def tomorrow():
    return format_date(get_today("UTC") + timedelta(days=1))


def book(client, doctor_id=ALICE, date=None, start_time="09:30"):
    return client.post(
        "/api/bookings",
        json={"doctorId": doctor_id, "date": date, "startTime": start_time},
    )


class TestHealthRoutes:
    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.get_json()["status"] == "healthy"

    def test_detailed_health(self, client):
        data = client.get("/api/health/detailed").get_json()
        assert data["schedule"]["days_ahead"] == 14
        assert data["schedule"]["slot_duration_minutes"] == 30
        assert data["bookings"] == 0

    def test_unknown_endpoint(self, client):
        response = client.get("/api/nope")
        assert response.status_code == 404
        assert response.get_json() == {"error": "Endpoint not found"}


class TestDoctorRoutes:
    def test_list_doctors(self, client):
        data = client.get("/api/doctors").get_json()

        assert data["count"] == 2
        alice, bob = data["doctors"]
        assert alice["id"] == ALICE
        assert alice["timezone"] == "Australia/Sydney"
        assert len(alice["schedules"]) == 7
        assert bob["schedules"] == [
            {"day_of_week": "Monday", "available_at": " 1:00PM", "available_until": "2:00PM "}
        ]

    def test_directory_unavailable(self, client, directory_session):
        directory_session.get.side_effect = requests.exceptions.ConnectionError("down")

        response = client.get("/api/doctors")

        assert response.status_code == 503
        assert response.get_json()["retryable"] is True

    def test_get_doctor(self, client):
        response = client.get(f"/api/doctors/{BOB}")
        assert response.status_code == 200
        assert response.get_json()["name"] == "Dr. Bob Ruiz"

    def test_get_unknown_doctor(self, client):
        assert client.get("/api/doctors/dr--nobody").status_code == 404

    def test_invalid_doctor_id(self, client):
        assert client.get("/api/doctors/Dr.Bob").status_code == 400

    def test_slots_default_horizon(self, client):
        data = client.get(f"/api/doctors/{ALICE}/slots").get_json()

        assert data["days_ahead"] == 14
        assert len(data["dates"]) == 14
        first = data["dates"][0]
        assert first["date"] == format_date(get_today("UTC"))
        assert [s["startTime"] for s in first["slots"]] == ["09:00", "09:30", "10:00", "10:30"]
        assert first["slots"][0]["startTimeDisplay"] == "9:00 AM"
        assert first["slots"][0]["id"] == f"{ALICE}-{first['date']}-09:00"

    def test_slots_only_on_scheduled_weekdays(self, client):
        data = client.get(f"/api/doctors/{BOB}/slots?days=14").get_json()

        assert len(data["dates"]) == 2
        for entry in data["dates"]:
            assert entry["slots"][0]["day_of_week"] == "monday"
            assert [s["startTime"] for s in entry["slots"]] == ["13:00", "13:30"]

    def test_slots_show_bookings(self, client, tomorrow):
        book(client, date=tomorrow, start_time="10:00")

        data = client.get(f"/api/doctors/{ALICE}/slots?days=2").get_json()

        day = next(entry for entry in data["dates"] if entry["date"] == tomorrow)
        assert [s["startTime"] for s in day["slots"] if s["isBooked"]] == ["10:00"]

    @pytest.mark.parametrize("days", [0, -1, 61, "abc", "1.5", ""])
    def test_slots_invalid_horizon(self, client, days):
        assert client.get(f"/api/doctors/{ALICE}/slots?days={days}").status_code == 400

    def test_slots_unknown_doctor(self, client):
        assert client.get("/api/doctors/dr--nobody/slots").status_code == 404

    def test_slots_malformed_schedule(self, client, directory_session):
        directory_session.get.return_value = make_response([{
            "name": "Dr. Broken",
            "timezone": "UTC",
            "day_of_week": day,
            "available_at": "9AM",
            "available_until": "5:00PM",
        } for day in ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")])

        response = client.get("/api/doctors/dr--broken/slots")

        assert response.status_code == 502
        assert "9AM" in response.get_json()["error"]


class TestBookingRoutes:
    def test_confirm_booking(self, client, store, tomorrow):
        response = book(client, date=tomorrow)

        assert response.status_code == 201
        data = response.get_json()
        assert data["success"] is True
        booking = data["booking"]
        assert booking["doctorId"] == ALICE
        assert booking["doctorName"] == "Dr. Alice Chen"
        assert booking["doctorTimezone"] == "Australia/Sydney"
        assert booking["startTime"] == "09:30"
        assert booking["endTime"] == "10:00"
        assert booking["isPast"] is False
        assert [b.id for b in store.read_all()] == [booking["id"]]

    def test_double_booking_rejected(self, client, store, tomorrow):
        assert book(client, date=tomorrow).status_code == 201

        response = book(client, date=tomorrow)

        assert response.status_code == 409
        assert response.get_json()["message"] == "This slot is already booked"
        assert len(store.read_all()) == 1

    def test_same_time_other_date_accepted(self, client, tomorrow):
        day_after = format_date(get_today("UTC") + timedelta(days=2))
        assert book(client, date=tomorrow).status_code == 201
        assert book(client, date=day_after).status_code == 201

    def test_slot_outside_schedule(self, client, tomorrow):
        response = book(client, date=tomorrow, start_time="12:00")
        assert response.status_code == 404

    def test_slot_beyond_horizon(self, client):
        far = format_date(get_today("UTC") + timedelta(days=60))
        assert book(client, date=far).status_code == 404

    def test_last_listed_slot_is_bookable(self, client):
        data = client.get(f"/api/doctors/{ALICE}/slots?days=60").get_json()
        last = data["dates"][-1]
        slot = last["slots"][-1]
        assert not slot["isBooked"]

        response = book(client, date=last["date"], start_time=slot["startTime"])

        assert response.status_code == 201
        assert response.get_json()["booking"]["id"].startswith("booking-")

    def test_past_slot(self, client):
        yesterday = format_date(get_today("UTC") - timedelta(days=1))
        response = book(client, date=yesterday)
        assert response.status_code == 400
        assert "past" in response.get_json()["error"]

    def test_unknown_doctor(self, client, tomorrow):
        assert book(client, doctor_id="dr--nobody", date=tomorrow).status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [
            {"doctorId": ALICE, "date": "2025/01/15", "startTime": "09:30"},
            {"doctorId": ALICE, "date": "2025-02-30", "startTime": "09:30"},
            {"doctorId": ALICE, "date": "2025-01-15", "startTime": "9:30AM"},
            {"doctorId": ALICE, "date": "2025-01-15", "startTime": "24:00"},
            {"date": "2025-01-15", "startTime": "09:30"},
            {"doctorId": ALICE, "date": "2025-01-15", "startTime": "10:00\n"},
            {"doctorId": ALICE, "date": "2025-01-15\n", "startTime": "10:00"},
            {"doctorId": ALICE + "\n", "date": "2025-01-15", "startTime": "10:00"},
        ],
    )
    def test_invalid_payload(self, client, payload):
        assert client.post("/api/bookings", json=payload).status_code == 400

    def test_missing_body(self, client):
        assert client.post("/api/bookings").status_code == 400

    def test_store_failure(self, client, store, tomorrow, monkeypatch):
        def fail(bookings):
            from clinic_booking.utils.exceptions import StoreReadWriteFailure
            raise StoreReadWriteFailure("disk full")

        monkeypatch.setattr(store, "write_all", fail)

        response = book(client, date=tomorrow)

        assert response.status_code == 503
        assert client.get("/api/bookings").get_json()["count"] == 0

    def test_directory_failure(self, client, directory_session, tomorrow):
        directory_session.get.side_effect = requests.exceptions.Timeout("slow")
        assert book(client, date=tomorrow).status_code == 503

    def test_list_bookings_sorted_with_past_flag(self, client, store, app):
        booking_service = app.extensions["booking_service"]
        store.write_all([
            make_booking(id="booking-future", doctor_id=ALICE, date="2099-01-02", start_time="09:00"),
            make_booking(id="booking-old", doctor_id=ALICE, date="2020-01-15", start_time="10:00"),
        ])
        booking_service.load()

        data = client.get("/api/bookings").get_json()

        assert data["count"] == 2
        assert [b["id"] for b in data["bookings"]] == ["booking-old", "booking-future"]
        assert [b["isPast"] for b in data["bookings"]] == [True, False]
        assert data["bookings"][0]["dateDisplay"] == "Wed, Jan 15"
        assert data["bookings"][0]["startTimeDisplay"] == "10:00 AM"

    def test_cancel_booking(self, client, store, tomorrow):
        booking_id = book(client, date=tomorrow).get_json()["booking"]["id"]

        response = client.delete(f"/api/bookings/{booking_id}")

        assert response.status_code == 200
        assert response.get_json()["booking"]["id"] == booking_id
        assert store.read_all() == []
        # the slot can be booked again
        assert book(client, date=tomorrow).status_code == 201

    def test_cancel_unknown(self, client):
        assert client.delete("/api/bookings/booking-missing").status_code == 404

    def test_cancel_id_with_trailing_newline(self, client):
        assert client.delete("/api/bookings/booking-1%0A").status_code == 400

    def test_bookings_survive_restart(self, client, store, directory_session, tomorrow):
        from clinic_booking import create_app
        from clinic_booking.config import TestingConfig
        from clinic_booking.services.doctor_directory import DoctorDirectoryClient

        booking_id = book(client, date=tomorrow).get_json()["booking"]["id"]

        directory = DoctorDirectoryClient(TestingConfig.DOCTORS_API_URL, session=directory_session)
        restarted = create_app(TestingConfig, directory_client=directory, booking_store=store)
        data = restarted.test_client().get("/api/bookings").get_json()

        assert [b["id"] for b in data["bookings"]] == [booking_id]
        assert get_day_of_week(get_today("UTC") + timedelta(days=1)) == data["bookings"][0]["day_of_week"]
