"""Local input validation shared by the controllers."""

from vitesse.core.constants import EMAIL_PATTERN


def is_valid_email(email: str) -> bool:
    """Return True if *email* has the shape ``local@domain.tld``."""
    return EMAIL_PATTERN.fullmatch(email) is not None


def all_filled(*values: str) -> bool:
    """Return True if none of *values* is empty."""
    return all(values)
