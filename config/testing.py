import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "committee_test_db"),
}

TOKEN_MAX_AGE_SECONDS = 3600

ATTENDANCE_VENUE_LAT = None
ATTENDANCE_VENUE_LNG = None
ATTENDANCE_VENUE_RADIUS_METERS = None

FIRST_SUPER_ADMIN_EMAIL = None
BOOTSTRAP_SECRET = None

APP_URL = "http://testserver"

DEBUG = False
TESTING = True

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
