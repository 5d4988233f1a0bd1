# clinic_booking/services/booking_store.py
"""
Durable key-value storage for confirmed bookings

The store is a JSON object on disk; the booking list lives under a single
key and is always rewritten as a whole.
"""
import os
import json
import logging
import tempfile
from typing import Dict, List
from clinic_booking.models.booking import Booking
from clinic_booking.utils.exceptions import StoreReadWriteFailure, ValidationError

logger = logging.getLogger(__name__)


class BookingStore:
    """JSON file backed booking store"""

    def __init__(self, path: str, storage_key: str = '@doctor_booking_bookings'):
        self.path = path
        self.storage_key = storage_key

    def _read_file(self) -> Dict:
        if not os.path.exists(self.path):
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as fh:
                content = fh.read()
        except OSError as e:
            logger.error(f"Failed to read booking store {self.path}: {e}")
            raise StoreReadWriteFailure(f"Could not read booking store: {e}") from e

        if not content.strip():
            return {}

        try:
            data = json.loads(content)
        except ValueError as e:
            logger.error(f"Booking store {self.path} is not valid JSON: {e}")
            raise StoreReadWriteFailure("Booking store is corrupted") from e

        if not isinstance(data, dict):
            raise StoreReadWriteFailure("Booking store must contain a JSON object")
        return data

    def read_all(self) -> List[Booking]:
        """Return persisted bookings, or an empty list if nothing was saved yet"""
        stored = self._read_file().get(self.storage_key)
        if stored is None:
            return []

        # Values are kept as serialized text, like any key-value store entry
        if isinstance(stored, str):
            try:
                stored = json.loads(stored)
            except ValueError as e:
                raise StoreReadWriteFailure("Stored bookings are not valid JSON") from e

        if not isinstance(stored, list):
            raise StoreReadWriteFailure("Stored bookings must be a list")

        try:
            return [Booking.from_dict(item) for item in stored]
        except ValidationError as e:
            raise StoreReadWriteFailure(f"Stored booking is malformed: {e}") from e

    def write_all(self, bookings: List[Booking]) -> None:
        """Overwrite the stored list with `bookings`, leaving other keys intact"""
        data = self._read_file()
        data[self.storage_key] = json.dumps([booking.to_dict() for booking in bookings])

        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.bookings-', suffix='.tmp')
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(data, fh, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(f"Failed to write booking store {self.path}: {e}")
            raise StoreReadWriteFailure(f"Could not write booking store: {e}") from e

        logger.debug(f"Wrote {len(bookings)} bookings to {self.path}")
