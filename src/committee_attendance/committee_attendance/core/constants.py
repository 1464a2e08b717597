"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ATTENDANCE_LIST_LIMIT = 500
LINK_TTL_DAYS = 7
LINK_SECRET_BYTES = 32
LINK_SUBMITTER = "link"
EARTH_RADIUS_METERS = 6_371_000
DEFAULT_TOKEN_MAX_AGE_SECONDS = 60 * 60 * 24
EVENT_LIST_DEFAULT_LIMIT = 50
EVENT_LIST_MAX_LIMIT = 100
