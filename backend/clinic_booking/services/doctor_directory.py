# clinic_booking/services/doctor_directory.py
"""
Doctor directory: fetches the flat schedule feed and groups it into doctors
"""
import re
import logging
from typing import Any, Dict, Iterable, List, Optional, Union
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry
from clinic_booking.models.doctor import Doctor, DoctorSchedule
from clinic_booking.utils.exceptions import DirectorySourceUnavailable, ValidationError

logger = logging.getLogger(__name__)

_DISALLOWED_ID_CHARS = re.compile(r'[^a-z0-9]')


def create_doctor_id(name: str) -> str:
    """
    Derive a doctor id from a display name.

    Lowercases and replaces every character outside [a-z0-9] with a hyphen,
    one hyphen per character: "Dr. John Smith" -> "dr--john-smith".
    """
    return _DISALLOWED_ID_CHARS.sub('-', name.lower())


def group_doctors(records: Iterable[Union[DoctorSchedule, Dict[str, Any]]]) -> List[Doctor]:
    """
    Collapse per-day schedule records into doctors keyed by derived id.

    The first record seen for an id sets the doctor's name and timezone;
    every record appends its window in input order. Different names that
    normalize to the same id end up on one doctor.
    """
    doctors: Dict[str, Doctor] = {}

    for record in records:
        if not isinstance(record, DoctorSchedule):
            record = DoctorSchedule.from_dict(record)

        doctor_id = create_doctor_id(record.name)
        doctor = doctors.get(doctor_id)
        if doctor is None:
            doctor = Doctor(id=doctor_id, name=record.name, timezone=record.timezone)
            doctors[doctor_id] = doctor
        elif doctor.name != record.name:
            logger.warning(f"Merging '{record.name}' into '{doctor.name}' (shared id {doctor_id})")

        doctor.schedules.append(record.to_weekly_schedule())

    return list(doctors.values())


def find_doctor(doctors: Iterable[Doctor], doctor_id: str) -> Optional[Doctor]:
    return next((doctor for doctor in doctors if doctor.id == doctor_id), None)


def create_http_session(max_retries: int = 2, backoff_factor: float = 0.5) -> requests.Session:
    """Session with connection pooling and retries for idempotent GETs"""
    session = requests.Session()

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=backoff_factor,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"],
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


class DoctorDirectoryClient:
    """Read-only client for the doctor schedule feed"""

    def __init__(self, url: str, timeout: float = 10, max_retries: int = 2,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or create_http_session(max_retries=max_retries)

    def fetch_schedules(self) -> List[DoctorSchedule]:
        """Fetch and validate the raw schedule records"""
        logger.info(f"Fetching doctor schedules from {self.url}")

        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            logger.error(f"Doctor directory request failed: {e}")
            raise DirectorySourceUnavailable(f"Could not fetch doctors: {e}") from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Doctor directory returned invalid JSON: {e}")
            raise DirectorySourceUnavailable("Doctor directory returned invalid JSON") from e

        if not isinstance(payload, list):
            raise DirectorySourceUnavailable("Doctor directory payload must be a list")

        try:
            schedules = [DoctorSchedule.from_dict(record) for record in payload]
        except ValidationError as e:
            logger.error(f"Doctor directory returned a malformed record: {e}")
            raise DirectorySourceUnavailable(str(e)) from e

        logger.info(f"Fetched {len(schedules)} schedule records")
        return schedules

    def fetch_doctors(self) -> List[Doctor]:
        return group_doctors(self.fetch_schedules())
