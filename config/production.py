import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "committee_db"),
}

TOKEN_MAX_AGE_SECONDS = int(os.getenv("TOKEN_MAX_AGE_SECONDS", "86400"))

ATTENDANCE_VENUE_LAT = os.getenv("ATTENDANCE_VENUE_LAT")
ATTENDANCE_VENUE_LNG = os.getenv("ATTENDANCE_VENUE_LNG")
ATTENDANCE_VENUE_RADIUS_METERS = os.getenv("ATTENDANCE_VENUE_RADIUS_METERS")

FIRST_SUPER_ADMIN_EMAIL = os.getenv("FIRST_SUPER_ADMIN_EMAIL")
BOOTSTRAP_SECRET = os.getenv("BOOTSTRAP_SECRET")

APP_URL = os.getenv("APP_URL", "")

DEBUG = False

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
