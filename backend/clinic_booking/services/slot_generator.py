# clinic_booking/services/slot_generator.py
"""
Slot generation and booking conflict checks

Turns a doctor's recurring weekly windows into concrete dated 30-minute
slots and flags each one against the current booking list. Everything here
is pure: inputs are never mutated and nothing is persisted.
"""
import logging
from datetime import date
from typing import Dict, Iterable, List, Optional
from clinic_booking.models.booking import Booking, TimeSlot
from clinic_booking.models.doctor import Doctor, WeeklySchedule
from clinic_booking.utils.time_utils import (
    format_date, format_time, get_day_of_week, get_next_days, time_to_minutes
)

logger = logging.getLogger(__name__)

SLOT_DURATION_MINUTES = 30


def make_slot_id(doctor_id: str, date_str: str, start_time: str) -> str:
    return f"{doctor_id}-{date_str}-{start_time}"


def is_slot_taken(bookings: Iterable[Booking], doctor_id: str, date_str: str, start_time: str) -> bool:
    """True if any booking matches doctor, date and start time exactly"""
    return any(
        booking.doctor_id == doctor_id
        and booking.date == date_str
        and booking.start_time == start_time
        for booking in bookings
    )


def generate_slots_for_schedule(
    doctor: Doctor,
    schedule: WeeklySchedule,
    day: date,
    bookings: List[Booking],
    slot_minutes: int = SLOT_DURATION_MINUTES
) -> List[TimeSlot]:
    """
    Generate the slots of one weekly window on one calendar date.

    Slots are only emitted when they end at or before the window end, so a
    window shorter than `slot_minutes` yields nothing. Unparseable window
    times raise InvalidTimeFormat.
    """
    date_str = format_date(day)
    window_start = time_to_minutes(schedule.available_at)
    window_end = time_to_minutes(schedule.available_until)

    slots = []
    cursor = window_start
    while cursor + slot_minutes <= window_end:
        end = cursor + slot_minutes
        start_time = format_time(*divmod(cursor, 60))
        end_time = format_time(*divmod(end, 60))

        slots.append(TimeSlot(
            id=make_slot_id(doctor.id, date_str, start_time),
            doctor_id=doctor.id,
            doctor_name=doctor.name,
            date=date_str,
            day_of_week=get_day_of_week(day),
            start_time=start_time,
            end_time=end_time,
            is_booked=is_slot_taken(bookings, doctor.id, date_str, start_time)
        ))
        cursor = end

    return slots


def generate_doctor_slots(
    doctor: Doctor,
    days_ahead: int,
    bookings: List[Booking],
    today: Optional[date] = None,
    slot_minutes: int = SLOT_DURATION_MINUTES
) -> Dict[str, List[TimeSlot]]:
    """
    Project a doctor's weekly windows over the next `days_ahead` dates.

    Returns a chronologically ordered mapping of date string to slots sorted
    by start time. Dates without any slot are left out. Every window that
    matches a date's weekday contributes; overlapping windows are not merged.
    A malformed window raises InvalidTimeFormat and aborts the projection.
    """
    slots_by_date = {}

    for day in get_next_days(days_ahead, today=today):
        day_schedules = doctor.schedules_for_day(get_day_of_week(day))
        if not day_schedules:
            continue

        day_slots = []
        for schedule in day_schedules:
            day_slots.extend(
                generate_slots_for_schedule(doctor, schedule, day, bookings, slot_minutes)
            )

        # zero-padded HH:MM sorts correctly as text
        day_slots.sort(key=lambda slot: slot.start_time)

        if day_slots:
            slots_by_date[format_date(day)] = day_slots

    logger.debug(f"Generated slots for {doctor.id} on {len(slots_by_date)} of {days_ahead} days")
    return slots_by_date


def find_slot(
    doctor: Doctor,
    date_str: str,
    start_time: str,
    days_ahead: int,
    bookings: List[Booking],
    today: Optional[date] = None,
    slot_minutes: int = SLOT_DURATION_MINUTES
) -> Optional[TimeSlot]:
    """Look up a generated slot by date and start time within the horizon"""
    slots_by_date = generate_doctor_slots(doctor, days_ahead, bookings, today, slot_minutes)
    for slot in slots_by_date.get(date_str, []):
        if slot.start_time == start_time:
            return slot
    return None
