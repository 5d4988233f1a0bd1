# clinic_booking/services/booking_service.py
"""
Booking confirmation and cancellation
"""
import uuid
import logging
import threading
from datetime import datetime, timezone
from typing import List, Optional
from clinic_booking.models.booking import Booking, TimeSlot
from clinic_booking.models.doctor import Doctor
from clinic_booking.services.booking_store import BookingStore
from clinic_booking.services.slot_generator import is_slot_taken
from clinic_booking.utils.exceptions import BookingNotFound, SlotAlreadyBooked
from clinic_booking.utils.time_utils import is_booking_past

logger = logging.getLogger(__name__)


def generate_booking_id(now: datetime) -> str:
    return f"booking-{int(now.timestamp() * 1000)}-{uuid.uuid4().hex[:8]}"


def create_booking(slot: TimeSlot, doctor: Doctor, now: Optional[datetime] = None) -> Booking:
    """Build a booking for `slot`, snapshotting the doctor's timezone"""
    if now is None:
        now = datetime.now(timezone.utc)

    return Booking(
        id=generate_booking_id(now),
        doctor_id=slot.doctor_id,
        doctor_name=slot.doctor_name,
        doctor_timezone=doctor.timezone,
        date=slot.date,
        day_of_week=slot.day_of_week,
        start_time=slot.start_time,
        end_time=slot.end_time,
        created_at=now.isoformat().replace('+00:00', 'Z')
    )


def sort_bookings(bookings: List[Booking]) -> List[Booking]:
    """Order by date, then start time"""
    return sorted(bookings, key=lambda booking: (booking.date, booking.start_time))


class BookingService:
    """Holds the latest known booking list and keeps the store in sync"""

    def __init__(self, store: BookingStore):
        self.store = store
        self._bookings: List[Booking] = []
        self._lock = threading.Lock()

    @property
    def bookings(self) -> List[Booking]:
        return list(self._bookings)

    def load(self) -> List[Booking]:
        """Read the persisted list; called once at startup"""
        with self._lock:
            self._bookings = self.store.read_all()
        logger.info(f"Loaded {len(self._bookings)} bookings from store")
        return self.bookings

    def is_slot_taken(self, doctor_id: str, date_str: str, start_time: str) -> bool:
        return is_slot_taken(self._bookings, doctor_id, date_str, start_time)

    def add_booking(self, slot: TimeSlot, doctor: Doctor) -> Booking:
        """
        Confirm a booking for `slot`.

        Raises SlotAlreadyBooked when the doctor/date/start time is already
        taken. The new list is written to the store before it replaces the
        in-memory list, so a StoreReadWriteFailure leaves nothing booked.
        """
        with self._lock:
            if is_slot_taken(self._bookings, slot.doctor_id, slot.date, slot.start_time):
                logger.warning(
                    f"Rejected double booking for {slot.doctor_id} on {slot.date} at {slot.start_time}"
                )
                raise SlotAlreadyBooked(slot.doctor_id, slot.date, slot.start_time)

            booking = create_booking(slot, doctor)
            new_bookings = self._bookings + [booking]
            self.store.write_all(new_bookings)
            self._bookings = new_bookings

        logger.info(f"Booked {booking.id}: {booking.doctor_name} on {booking.date} at {booking.start_time}")
        return booking

    def cancel_booking(self, booking_id: str) -> Booking:
        """Remove a booking by id and persist the remaining list"""
        with self._lock:
            cancelled = next((b for b in self._bookings if b.id == booking_id), None)
            if cancelled is None:
                raise BookingNotFound(f"Booking {booking_id} not found")

            new_bookings = [b for b in self._bookings if b.id != booking_id]
            self.store.write_all(new_bookings)
            self._bookings = new_bookings

        logger.info(f"Cancelled booking {booking_id}")
        return cancelled

    def sorted_bookings(self) -> List[Booking]:
        return sort_bookings(self._bookings)

    @staticmethod
    def is_past(booking: Booking, now: Optional[datetime] = None) -> bool:
        return is_booking_past(booking.date, booking.start_time, now)
