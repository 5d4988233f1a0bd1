# clinic_booking/models/doctor.py
"""
Doctor and schedule data models
"""
from typing import Dict, List, Any
from dataclasses import dataclass, field
from clinic_booking.utils.exceptions import ValidationError

@dataclass(frozen=True)
class WeeklySchedule:
    """One recurring weekly availability window"""
    day_of_week: str
    available_at: str     # 12-hour text, e.g. "9:00AM"
    available_until: str

    def to_dict(self) -> Dict:
        return {
            'day_of_week': self.day_of_week,
            'available_at': self.available_at,
            'available_until': self.available_until
        }

@dataclass(frozen=True)
class DoctorSchedule:
    """A single flat record from the doctor directory feed"""
    name: str
    timezone: str
    day_of_week: str
    available_at: str
    available_until: str

    FIELDS = ('name', 'timezone', 'day_of_week', 'available_at', 'available_until')

    @classmethod
    def from_dict(cls, data: Any) -> 'DoctorSchedule':
        """Build a record from decoded JSON, rejecting missing or non-string fields"""
        if not isinstance(data, dict):
            raise ValidationError("Schedule record must be an object")

        missing = [name for name in cls.FIELDS if not isinstance(data.get(name), str)]
        if missing:
            raise ValidationError(f"Schedule record has missing or invalid fields: {missing}")

        return cls(**{name: data[name] for name in cls.FIELDS})

    def to_weekly_schedule(self) -> WeeklySchedule:
        return WeeklySchedule(
            day_of_week=self.day_of_week,
            available_at=self.available_at,
            available_until=self.available_until
        )

@dataclass
class Doctor:
    """A doctor assembled from one or more directory records"""
    id: str
    name: str
    timezone: str
    schedules: List[WeeklySchedule] = field(default_factory=list)

    def schedules_for_day(self, day_of_week: str) -> List[WeeklySchedule]:
        """All windows whose weekday matches, compared case-insensitively"""
        day_of_week = day_of_week.lower()
        return [s for s in self.schedules if s.day_of_week.lower() == day_of_week]

    def to_dict(self) -> Dict:
        return {
            'id': self.id,
            'name': self.name,
            'timezone': self.timezone,
            'schedules': [schedule.to_dict() for schedule in self.schedules]
        }
