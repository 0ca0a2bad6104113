"""Client constants.

Contains the email shape pattern and the user-facing messages shown by the
controllers.
"""

import re

# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
EMAIL_PATTERN: re.Pattern[str] = re.compile(
    r"[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}"
)

# Logged token prefix length; the rest of the token never reaches the logs.
TOKEN_LOG_PREFIX: int = 10

# ---------------------------------------------------------------------------
# User-facing messages
# ---------------------------------------------------------------------------
INVALID_LOGIN_MESSAGE: str = "Please enter a valid email and password."
REGISTRATION_INVALID_MESSAGE: str = "Fields incomplete or invalid."
REQUIRED_FIELDS_MESSAGE: str = "Please fill all required fields."
UNEXPECTED_ERROR_MESSAGE: str = "An unexpected error occurred."

INVALID_ENDPOINT_MESSAGE: str = "Invalid request address."
MISSING_TOKEN_MESSAGE: str = "Missing authentication token."
UNAUTHORIZED_MESSAGE: str = "Authentication failed. Please try again."
SERVER_ERROR_MESSAGE: str = "Server error."
DECODING_ERROR_MESSAGE: str = "The server returned an unreadable response."
UNKNOWN_ERROR_MESSAGE: str = "An unknown error occurred."
