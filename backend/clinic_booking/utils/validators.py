# clinic_booking/utils/validators.py
"""
Input validation utilities
"""
import re
from datetime import datetime
from typing import Optional, Union
from clinic_booking.utils.exceptions import ValidationError

class InputValidator:
    """Validates user inputs and API parameters"""

    @staticmethod
    def validate_doctor_id(doctor_id: str) -> str:
        """Validate a derived doctor id"""
        if not doctor_id or not isinstance(doctor_id, str):
            raise ValidationError("Doctor ID is required and must be a string")

        if len(doctor_id) > 200:
            raise ValidationError("Doctor ID is too long")

        # Ids are lowercase alphanumerics with hyphens
        if not re.fullmatch(r'[a-z0-9-]+', doctor_id):
            raise ValidationError("Doctor ID contains invalid characters")

        return doctor_id

    @staticmethod
    def validate_booking_id(booking_id: str) -> str:
        """Validate booking ID format"""
        if not booking_id or not isinstance(booking_id, str):
            raise ValidationError("Booking ID is required")

        if not re.fullmatch(r'[a-zA-Z0-9_-]+', booking_id) or len(booking_id) > 100:
            raise ValidationError("Invalid booking ID")

        return booking_id

    @staticmethod
    def validate_date_string(date_str: str) -> str:
        """Validate a canonical YYYY-MM-DD date string"""
        if not date_str or not isinstance(date_str, str):
            raise ValidationError("Date is required")

        if not re.fullmatch(r'[0-9]{4}-[0-9]{2}-[0-9]{2}', date_str):
            raise ValidationError("Invalid date format. Use YYYY-MM-DD")

        try:
            datetime.strptime(date_str, '%Y-%m-%d')
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD")

        return date_str

    @staticmethod
    def validate_time_string(time_str: str) -> str:
        """Validate a canonical zero-padded HH:MM start time"""
        if not time_str or not isinstance(time_str, str):
            raise ValidationError("Start time is required")

        match = re.fullmatch(r'([0-9]{2}):([0-9]{2})', time_str)
        if not match:
            raise ValidationError("Invalid time format. Use HH:MM")

        if not (0 <= int(match.group(1)) <= 23):
            raise ValidationError("Invalid hour (must be 0-23)")

        if not (0 <= int(match.group(2)) <= 59):
            raise ValidationError("Invalid minute (must be 0-59)")

        return time_str

    @staticmethod
    def validate_days_ahead(days: Optional[Union[int, str]], default: int, maximum: int) -> int:
        """Validate the slot horizon in days, given as an int or a raw query value"""
        if days is None:
            return default

        if isinstance(days, str):
            if not re.fullmatch(r'-?[0-9]+', days.strip()):
                raise ValidationError("Days ahead must be a whole number")
            days = int(days)

        if not isinstance(days, int) or isinstance(days, bool):
            raise ValidationError("Days ahead must be a whole number")

        if not (1 <= days <= maximum):
            raise ValidationError(f"Days ahead must be between 1 and {maximum}")

        return days
