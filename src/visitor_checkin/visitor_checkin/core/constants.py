"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Mean Earth radius (spherical model, WGS-84 coordinates taken as-is).
EARTH_RADIUS_M = 6_371_000.0

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0

DEFAULT_STATUS_NAME = "pending"
MAX_LOOKUP_NAME_LENGTH = 100
MIN_PASSWORD_LENGTH = 6

MAX_RESUME_BYTES = 5 * 1024 * 1024
ALLOWED_RESUME_EXTENSIONS = {"pdf", "doc", "docx"}
RESUME_CONTENT_TYPES = {
    "pdf": "application/pdf",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}

DEFAULT_NOTIFICATION_PAGE_SIZE = 5
MAX_NOTIFICATION_PAGE_SIZE = 50
RECENT_SUBMISSIONS_LIMIT = 5

DEFAULT_SESSION_DAYS = 7
