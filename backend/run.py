# backend/run.py
import os
import logging
from clinic_booking import create_app
from clinic_booking.config import get_config
from clinic_booking.utils.time_utils import local_now

config_class = get_config()

# Configure logging
logging.basicConfig(
    level=getattr(logging, config_class.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = create_app(config_class)

if __name__ == "__main__":
    port = int(os.environ.get('PORT', 5000))

    print("🩺 Doctor Slot Booking API")
    print(f"🕐 Current Time: {local_now().strftime('%Y-%m-%d %H:%M')} ({config_class.TIMEZONE})")
    print(f"📋 Doctor directory: {config_class.DOCTORS_API_URL}")
    print(f"💾 Booking store: {config_class.BOOKINGS_STORE_PATH}")
    print(f"🌐 Server: http://localhost:{port}")

    print("\n🧪 Endpoints:")
    print(f"  Health: http://localhost:{port}/api/health")
    print(f"  Doctors: http://localhost:{port}/api/doctors")
    print(f"  Slots: http://localhost:{port}/api/doctors/<doctor_id>/slots?days={config_class.DAYS_AHEAD}")
    print(f"  Bookings: http://localhost:{port}/api/bookings")

    app.run(host='0.0.0.0', port=port, debug=getattr(config_class, 'DEBUG', False))
