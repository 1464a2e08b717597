import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "committee_db"),
}

# Bearer token lifetime for /api routes
TOKEN_MAX_AGE_SECONDS = int(os.getenv("TOKEN_MAX_AGE_SECONDS", "86400"))

# Venue geofence for member self check-in; disabled unless all three are set
ATTENDANCE_VENUE_LAT = os.getenv("ATTENDANCE_VENUE_LAT")
ATTENDANCE_VENUE_LNG = os.getenv("ATTENDANCE_VENUE_LNG")
ATTENDANCE_VENUE_RADIUS_METERS = os.getenv("ATTENDANCE_VENUE_RADIUS_METERS")

FIRST_SUPER_ADMIN_EMAIL = os.getenv("FIRST_SUPER_ADMIN_EMAIL")
BOOTSTRAP_SECRET = os.getenv("BOOTSTRAP_SECRET")

# Base URL used when issuing attendance links
APP_URL = os.getenv("APP_URL", "http://localhost:5000")

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
