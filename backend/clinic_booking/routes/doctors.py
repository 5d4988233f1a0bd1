# clinic_booking/routes/doctors.py
"""
Doctor listing and slot availability endpoints
"""
import logging
from flask import Blueprint, current_app, request, jsonify
from clinic_booking.services.doctor_directory import find_doctor
from clinic_booking.services.slot_generator import generate_doctor_slots
from clinic_booking.utils.validators import InputValidator
from clinic_booking.utils.exceptions import (
    DirectorySourceUnavailable, InvalidTimeFormat, ValidationError
)
from clinic_booking.utils.time_utils import format_date_display, get_today

logger = logging.getLogger(__name__)
doctors_bp = Blueprint('doctors', __name__)

DIRECTORY_UNAVAILABLE = {
    'error': 'Doctor directory temporarily unavailable',
    'retryable': True
}

@doctors_bp.route('/doctors', methods=['GET'])
def list_doctors():
    """List doctors grouped from the directory feed"""
    try:
        doctors = current_app.extensions['doctor_directory'].fetch_doctors()

        logger.info(f"Retrieved {len(doctors)} doctors")

        return jsonify({
            'doctors': [doctor.to_dict() for doctor in doctors],
            'count': len(doctors)
        })

    except DirectorySourceUnavailable as e:
        logger.error(f"Doctor directory error: {e}")
        return jsonify(DIRECTORY_UNAVAILABLE), 503

    except Exception as e:
        logger.error(f"Unexpected error listing doctors: {e}")
        return jsonify({'error': 'Internal server error'}), 500

@doctors_bp.route('/doctors/<doctor_id>', methods=['GET'])
def get_doctor(doctor_id):
    """Get a single doctor with its weekly schedule"""
    try:
        doctor_id = InputValidator.validate_doctor_id(doctor_id)
        doctors = current_app.extensions['doctor_directory'].fetch_doctors()

        doctor = find_doctor(doctors, doctor_id)
        if doctor is None:
            return jsonify({'error': 'Doctor not found'}), 404

        return jsonify(doctor.to_dict())

    except ValidationError as e:
        logger.warning(f"Validation error getting doctor: {e}")
        return jsonify({'error': str(e)}), 400

    except DirectorySourceUnavailable as e:
        logger.error(f"Doctor directory error: {e}")
        return jsonify(DIRECTORY_UNAVAILABLE), 503

    except Exception as e:
        logger.error(f"Unexpected error getting doctor: {e}")
        return jsonify({'error': 'Internal server error'}), 500

@doctors_bp.route('/doctors/<doctor_id>/slots', methods=['GET'])
def get_doctor_slots(doctor_id):
    """Get bookable slots for the next N days, keyed by date"""
    try:
        doctor_id = InputValidator.validate_doctor_id(doctor_id)
        days_ahead = InputValidator.validate_days_ahead(
            request.args.get('days'),
            default=current_app.config['DAYS_AHEAD'],
            maximum=current_app.config['MAX_DAYS_AHEAD']
        )

        doctors = current_app.extensions['doctor_directory'].fetch_doctors()
        doctor = find_doctor(doctors, doctor_id)
        if doctor is None:
            return jsonify({'error': 'Doctor not found'}), 404

        booking_service = current_app.extensions['booking_service']
        slots_by_date = generate_doctor_slots(
            doctor,
            days_ahead,
            booking_service.bookings,
            today=get_today(current_app.config['TIMEZONE']),
            slot_minutes=current_app.config['SLOT_DURATION_MINUTES']
        )

        logger.info(f"Generated slots for {doctor_id} on {len(slots_by_date)} dates")

        return jsonify({
            'doctor': doctor.to_dict(),
            'days_ahead': days_ahead,
            'dates': [
                {
                    'date': date_str,
                    'dateDisplay': format_date_display(date_str),
                    'slots': [slot.to_dict() for slot in slots]
                }
                for date_str, slots in slots_by_date.items()
            ]
        })

    except InvalidTimeFormat as e:
        logger.error(f"Malformed schedule for {doctor_id}: {e}")
        return jsonify({'error': f'Doctor schedule is malformed: {e}'}), 502

    except ValidationError as e:
        logger.warning(f"Validation error in slot lookup: {e}")
        return jsonify({'error': str(e)}), 400

    except DirectorySourceUnavailable as e:
        logger.error(f"Doctor directory error: {e}")
        return jsonify(DIRECTORY_UNAVAILABLE), 503

    except Exception as e:
        logger.error(f"Unexpected error generating slots: {e}")
        return jsonify({'error': 'Internal server error'}), 500
