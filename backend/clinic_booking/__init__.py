# clinic_booking/__init__.py
"""
Flask application factory for the Doctor Slot Booking service
"""
import logging
from flask import Flask
from flask_cors import CORS
from clinic_booking.config import Config
from clinic_booking.services.booking_service import BookingService
from clinic_booking.services.booking_store import BookingStore
from clinic_booking.services.doctor_directory import DoctorDirectoryClient

logger = logging.getLogger(__name__)

def create_app(config_class=Config, directory_client=None, booking_store=None):
    """Create and configure Flask application"""

    config_class.validate_config()

    app = Flask(__name__)
    app.config.from_object(config_class)

    # Configure CORS
    CORS(app,
         origins=app.config['CORS_ORIGINS'],
         allow_headers=['Content-Type'],
         methods=['GET', 'POST', 'DELETE', 'OPTIONS']
    )

    # External collaborators live on the app, not in module globals
    if directory_client is None:
        directory_client = DoctorDirectoryClient(
            url=app.config['DOCTORS_API_URL'],
            timeout=app.config['DIRECTORY_TIMEOUT_SECONDS'],
            max_retries=app.config['DIRECTORY_MAX_RETRIES']
        )
    if booking_store is None:
        booking_store = BookingStore(
            path=app.config['BOOKINGS_STORE_PATH'],
            storage_key=app.config['BOOKINGS_STORAGE_KEY']
        )

    booking_service = BookingService(booking_store)
    booking_service.load()

    app.extensions['doctor_directory'] = directory_client
    app.extensions['booking_service'] = booking_service

    # Register blueprints
    from clinic_booking.routes.health import health_bp
    from clinic_booking.routes.doctors import doctors_bp
    from clinic_booking.routes.bookings import bookings_bp

    app.register_blueprint(health_bp, url_prefix='/api')
    app.register_blueprint(doctors_bp, url_prefix='/api')
    app.register_blueprint(bookings_bp, url_prefix='/api')

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return {'error': 'Endpoint not found'}, 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return {'error': 'Method not allowed'}, 405

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Internal server error: {error}")
        return {'error': 'Internal server error'}, 500

    logger.info("Flask application created successfully")
    return app
