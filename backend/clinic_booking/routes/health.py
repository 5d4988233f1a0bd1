# clinic_booking/routes/health.py
"""
Health check endpoints
"""
import logging
from flask import Blueprint, current_app, jsonify
from datetime import datetime

logger = logging.getLogger(__name__)
health_bp = Blueprint('health', __name__)

SERVICE_NAME = 'Doctor Slot Booking'
SERVICE_VERSION = '1.0.0'

@health_bp.route('/health', methods=['GET'])
def health_check():
    """Basic health check endpoint"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'service': SERVICE_NAME,
        'version': SERVICE_VERSION
    })

@health_bp.route('/health/detailed', methods=['GET'])
def detailed_health_check():
    """Detailed health check with configuration summary"""
    booking_service = current_app.extensions['booking_service']

    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.now().isoformat(),
        'service': SERVICE_NAME,
        'version': SERVICE_VERSION,
        'dependencies': {
            'doctor_directory': current_app.config['DOCTORS_API_URL'],
            'booking_store': current_app.config['BOOKINGS_STORE_PATH']
        },
        'bookings': len(booking_service.bookings),
        'schedule': {
            'days_ahead': current_app.config['DAYS_AHEAD'],
            'slot_duration_minutes': current_app.config['SLOT_DURATION_MINUTES'],
            'timezone': current_app.config['TIMEZONE']
        }
    })
