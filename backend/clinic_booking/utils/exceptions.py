# clinic_booking/utils/exceptions.py
"""
Custom exceptions for the application
"""

class DoctorBookingError(Exception):
    """Base exception for the application"""
    pass

class ConfigurationError(DoctorBookingError):
    """Raised when configuration is invalid"""
    pass

class ValidationError(DoctorBookingError):
    """Raised when input validation fails"""
    pass

class InvalidTimeFormat(ValidationError):
    """Raised when a 12-hour time string cannot be parsed"""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Invalid time format: {text!r}")

class SlotAlreadyBooked(DoctorBookingError):
    """Raised when a confirmation targets a slot that is already booked"""

    def __init__(self, doctor_id: str, date: str, start_time: str):
        self.doctor_id = doctor_id
        self.date = date
        self.start_time = start_time
        super().__init__("This slot is already booked")

class SlotNotFound(DoctorBookingError):
    """Raised when a requested slot is not part of a doctor's schedule"""
    pass

class BookingNotFound(DoctorBookingError):
    """Raised when a booking id does not exist in the store"""
    pass

class DirectorySourceUnavailable(DoctorBookingError):
    """Raised when the doctor directory cannot be fetched or parsed"""
    pass

class StoreReadWriteFailure(DoctorBookingError):
    """Raised when the booking store cannot be read or written"""
    pass
