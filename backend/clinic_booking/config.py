# config.py

""" Configuration settings for the Doctor Slot Booking service """
import os
import pytz
from dotenv import load_dotenv
from clinic_booking.utils.exceptions import ConfigurationError

load_dotenv()

class Config:
    """Base configuration class"""

    # Flask Configuration
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-change-in-production'
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.environ.get('CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000').split(',')
        if origin.strip()
    ]

    # Doctor Directory Source
    DOCTORS_API_URL = os.environ.get(
        'DOCTORS_API_URL',
        'http://localhost:8000/available.json'
    )
    DIRECTORY_TIMEOUT_SECONDS = float(os.environ.get('DIRECTORY_TIMEOUT_SECONDS', 10))
    DIRECTORY_MAX_RETRIES = int(os.environ.get('DIRECTORY_MAX_RETRIES', 2))

    # Booking Store
    BOOKINGS_STORE_PATH = os.environ.get('BOOKINGS_STORE_PATH', 'data/bookings.json')
    BOOKINGS_STORAGE_KEY = os.environ.get('BOOKINGS_STORAGE_KEY', '@doctor_booking_bookings')

    # Schedule Configuration
    DAYS_AHEAD = int(os.environ.get('DAYS_AHEAD', 14))
    MAX_DAYS_AHEAD = int(os.environ.get('MAX_DAYS_AHEAD', 60))
    SLOT_DURATION_MINUTES = int(os.environ.get('SLOT_DURATION_MINUTES', 30))
    # Wall clock used for "today" and for past/upcoming classification.
    # Doctor timezones are display-only and never converted.
    TIMEZONE = os.environ.get('TIMEZONE', 'UTC')

    # System Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    @classmethod
    def validate_config(cls):
        """Validate required configuration"""
        if not cls.DOCTORS_API_URL:
            raise ConfigurationError("DOCTORS_API_URL must be set")

        if not cls.BOOKINGS_STORE_PATH:
            raise ConfigurationError("BOOKINGS_STORE_PATH must be set")

        if cls.SLOT_DURATION_MINUTES <= 0:
            raise ConfigurationError("SLOT_DURATION_MINUTES must be positive")

        if not (1 <= cls.DAYS_AHEAD <= cls.MAX_DAYS_AHEAD):
            raise ConfigurationError(
                f"DAYS_AHEAD must be between 1 and {cls.MAX_DAYS_AHEAD}"
            )

        try:
            pytz.timezone(cls.TIMEZONE)
        except pytz.UnknownTimeZoneError:
            raise ConfigurationError(f"Unknown TIMEZONE: {cls.TIMEZONE}")

class DevelopmentConfig(Config):
    """Development configuration"""
    DEBUG = True
    LOG_LEVEL = 'DEBUG'

class ProductionConfig(Config):
    """Production configuration"""
    DEBUG = False
    LOG_LEVEL = 'INFO'

    # Override with production values
    SECRET_KEY = os.environ.get('SECRET_KEY')  # Must be set in production

    @classmethod
    def validate_config(cls):
        """Additional validation for production"""
        super().validate_config()

        if not cls.SECRET_KEY or cls.SECRET_KEY == 'dev-key-change-in-production':
            raise ConfigurationError("SECRET_KEY must be set to a secure value in production")

class TestingConfig(Config):
    """Testing configuration"""
    TESTING = True
    LOG_LEVEL = 'DEBUG'

    # Use test-specific values
    DOCTORS_API_URL = 'http://directory.test/available.json'
    BOOKINGS_STORAGE_KEY = '@doctor_booking_bookings_test'
    DIRECTORY_MAX_RETRIES = 0
    TIMEZONE = 'UTC'

# Configuration factory
def get_config():
    """Get configuration based on environment"""
    env = os.environ.get('FLASK_ENV', 'development').lower()

    if env == 'production':
        return ProductionConfig
    elif env == 'testing':
        return TestingConfig
    else:
        return DevelopmentConfig
