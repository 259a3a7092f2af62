"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

ADMIN_USERNAME = "admin"
ADMIN_NAME = "System Admin"
ADMIN_PASSWORD = "EVRI01"

DEFAULT_INIT_TIMEOUT_SECONDS = 5.0
DEFAULT_MAX_PHOTO_BYTES = 5 * 1024 * 1024

CSV_FILENAME_PREFIX = "Payload"
CURRENCY_SYMBOL = "£"
