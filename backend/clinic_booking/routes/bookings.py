# clinic_booking/routes/bookings.py
"""
Booking confirmation, listing and cancellation endpoints
"""
import logging
from flask import Blueprint, current_app, request, jsonify
from clinic_booking.services.doctor_directory import find_doctor
from clinic_booking.services.slot_generator import find_slot
from clinic_booking.utils.validators import InputValidator
from clinic_booking.utils.exceptions import (
    BookingNotFound, DirectorySourceUnavailable, InvalidTimeFormat,
    SlotAlreadyBooked, SlotNotFound, StoreReadWriteFailure, ValidationError
)
from clinic_booking.utils.time_utils import (
    format_date_display, format_time_display, is_booking_past, local_now
)

logger = logging.getLogger(__name__)
bookings_bp = Blueprint('bookings', __name__)

@bookings_bp.route('/bookings', methods=['GET'])
def list_bookings():
    """List bookings by date and start time, flagging past ones"""
    booking_service = current_app.extensions['booking_service']
    bookings = booking_service.sorted_bookings()
    now = local_now(current_app.config['TIMEZONE'])

    return jsonify({
        'bookings': [
            booking.to_display_dict(is_past=booking_service.is_past(booking, now))
            for booking in bookings
        ],
        'count': len(bookings)
    })

@bookings_bp.route('/bookings', methods=['POST'])
def confirm_booking():
    """Confirm a booking for one of a doctor's generated slots"""
    try:
        # Parse request data
        data = request.get_json(silent=True)
        if not data or not isinstance(data, dict):
            return jsonify({'error': 'Request body is required'}), 400

        doctor_id = InputValidator.validate_doctor_id(data.get('doctorId', ''))
        date_str = InputValidator.validate_date_string(data.get('date', ''))
        start_time = InputValidator.validate_time_string(data.get('startTime', ''))

        doctors = current_app.extensions['doctor_directory'].fetch_doctors()
        doctor = find_doctor(doctors, doctor_id)
        if doctor is None:
            return jsonify({'error': 'Doctor not found'}), 404

        now = local_now(current_app.config['TIMEZONE'])
        if is_booking_past(date_str, start_time, now):
            return jsonify({'error': 'Cannot book a slot in the past'}), 400

        booking_service = current_app.extensions['booking_service']
        slot = find_slot(
            doctor,
            date_str,
            start_time,
            days_ahead=current_app.config['MAX_DAYS_AHEAD'],
            bookings=booking_service.bookings,
            today=now.date(),
            slot_minutes=current_app.config['SLOT_DURATION_MINUTES']
        )
        if slot is None:
            raise SlotNotFound(f"No slot for {doctor_id} on {date_str} at {start_time}")

        booking = booking_service.add_booking(slot, doctor)

        return jsonify({
            'success': True,
            'message': (
                f"Appointment with {booking.doctor_name} on {format_date_display(booking.date)} "
                f"at {format_time_display(booking.start_time)} confirmed"
            ),
            'booking': booking.to_display_dict(is_past=False)
        }), 201

    except SlotAlreadyBooked as e:
        logger.warning(f"Slot conflict: {e.doctor_id} {e.date} {e.start_time}")
        return jsonify({
            'success': False,
            'message': str(e)
        }), 409

    except SlotNotFound as e:
        logger.warning(f"Booking rejected: {e}")
        return jsonify({'error': 'Slot not available for this doctor'}), 404

    except InvalidTimeFormat as e:
        logger.error(f"Malformed schedule while booking: {e}")
        return jsonify({'error': f'Doctor schedule is malformed: {e}'}), 502

    except ValidationError as e:
        logger.warning(f"Validation error in booking: {e}")
        return jsonify({'error': str(e)}), 400

    except DirectorySourceUnavailable as e:
        logger.error(f"Doctor directory error in booking: {e}")
        return jsonify({'error': 'Doctor directory temporarily unavailable', 'retryable': True}), 503

    except StoreReadWriteFailure as e:
        logger.error(f"Booking store error: {e}")
        return jsonify({'error': 'Booking could not be saved', 'retryable': True}), 503

    except Exception as e:
        logger.error(f"Unexpected error in booking: {e}")
        return jsonify({'error': 'Internal server error'}), 500

@bookings_bp.route('/bookings/<booking_id>', methods=['DELETE'])
def cancel_booking(booking_id):
    """Cancel a booking by id"""
    try:
        booking_id = InputValidator.validate_booking_id(booking_id)
        booking = current_app.extensions['booking_service'].cancel_booking(booking_id)

        return jsonify({
            'success': True,
            'message': f"Appointment with {booking.doctor_name} cancelled",
            'booking': booking.to_dict()
        })

    except ValidationError as e:
        logger.warning(f"Validation error in cancellation: {e}")
        return jsonify({'error': str(e)}), 400

    except BookingNotFound as e:
        logger.warning(f"Cancellation failed: {e}")
        return jsonify({'error': 'Booking not found'}), 404

    except StoreReadWriteFailure as e:
        logger.error(f"Booking store error in cancellation: {e}")
        return jsonify({'error': 'Cancellation could not be saved', 'retryable': True}), 503

    except Exception as e:
        logger.error(f"Unexpected error in cancellation: {e}")
        return jsonify({'error': 'Internal server error'}), 500
