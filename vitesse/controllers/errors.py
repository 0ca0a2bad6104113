"""Local validation errors and user-facing error messages.

``describe_error`` is total: any exception maps to a non-empty string, with
foreign exception types falling back to a generic message.
"""

from __future__ import annotations

from vitesse.core.constants import (
    INVALID_LOGIN_MESSAGE,
    REGISTRATION_INVALID_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
)
from vitesse.network.errors import GatewayError


class ValidationFailure(Exception):
    """Input rejected locally; never reaches the gateway."""

    message: str = UNEXPECTED_ERROR_MESSAGE

    def __init__(self) -> None:
        super().__init__(self.message)


class InvalidInputError(ValidationFailure):
    """Login email or password is missing or malformed."""
    message = INVALID_LOGIN_MESSAGE


class RegistrationInvalidError(ValidationFailure):
    """Sign-up form is incomplete, malformed or the passwords differ."""
    message = REGISTRATION_INVALID_MESSAGE


class RequiredFieldsError(ValidationFailure):
    """Candidate draft lacks a required field or has a malformed email."""
    message = REQUIRED_FIELDS_MESSAGE


def describe_error(error: BaseException) -> str:
    """Return the message to show the user for *error*."""
    if isinstance(error, (GatewayError, ValidationFailure)) and error.message:
        return error.message
    return UNEXPECTED_ERROR_MESSAGE
