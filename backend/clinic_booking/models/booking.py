# clinic_booking/models/booking.py
"""
Slot and booking data models
"""
from typing import Dict, Any
from dataclasses import dataclass
from clinic_booking.utils.exceptions import ValidationError
from clinic_booking.utils.validators import InputValidator
from clinic_booking.utils.time_utils import format_date_display, format_time_display

@dataclass(frozen=True)
class TimeSlot:
    """A concrete bookable unit; regenerated on every read, never stored"""
    id: str
    doctor_id: str
    doctor_name: str
    date: str          # YYYY-MM-DD
    day_of_week: str
    start_time: str    # HH:MM
    end_time: str
    is_booked: bool = False

    def to_dict(self) -> Dict:
        """Convert to dictionary format"""
        return {
            'id': self.id,
            'doctorId': self.doctor_id,
            'doctorName': self.doctor_name,
            'date': self.date,
            'day_of_week': self.day_of_week,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'isBooked': self.is_booked,
            'startTimeDisplay': format_time_display(self.start_time),
            'endTimeDisplay': format_time_display(self.end_time)
        }

@dataclass(frozen=True)
class Booking:
    """A confirmed appointment as persisted in the booking store"""
    id: str
    doctor_id: str
    doctor_name: str
    doctor_timezone: str
    date: str
    day_of_week: str
    start_time: str
    end_time: str
    created_at: str    # ISO-8601

    # attribute name -> persisted key
    KEYS = {
        'id': 'id',
        'doctor_id': 'doctorId',
        'doctor_name': 'doctorName',
        'doctor_timezone': 'doctorTimezone',
        'date': 'date',
        'day_of_week': 'day_of_week',
        'start_time': 'startTime',
        'end_time': 'endTime',
        'created_at': 'createdAt',
    }

    def to_dict(self) -> Dict:
        """Serialized form written to the booking store"""
        return {key: getattr(self, attr) for attr, key in self.KEYS.items()}

    def to_display_dict(self, is_past: bool) -> Dict:
        """Store form plus the labels the presentation layer shows"""
        data = self.to_dict()
        data.update({
            'isPast': is_past,
            'dateDisplay': format_date_display(self.date),
            'startTimeDisplay': format_time_display(self.start_time),
            'endTimeDisplay': format_time_display(self.end_time)
        })
        return data

    @classmethod
    def from_dict(cls, data: Any) -> 'Booking':
        if not isinstance(data, dict):
            raise ValidationError("Booking record must be an object")

        missing = [key for key in cls.KEYS.values() if not isinstance(data.get(key), str)]
        if missing:
            raise ValidationError(f"Booking record has missing or invalid fields: {missing}")

        InputValidator.validate_date_string(data['date'])
        InputValidator.validate_time_string(data['startTime'])
        InputValidator.validate_time_string(data['endTime'])

        return cls(**{attr: data[key] for attr, key in cls.KEYS.items()})
