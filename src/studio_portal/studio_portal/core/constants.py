"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_PAGE_SIZE = 10
DEFAULT_TIMEOUT_SECONDS = 10
MIN_ADMIN_PASSWORD_LENGTH = 6
ADMIN_AUTHORITY = "ROLE_ADMIN"
ACCESS_DENIED_MESSAGE = "Access denied. Admin privileges required."
LOGIN_REQUIRED_MESSAGE = "Please login to access this page."
