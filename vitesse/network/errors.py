"""Closed error taxonomy raised by the network gateway.

Every error carries a non-empty, user-facing ``message``.  Errors are
terminal: the gateway never retries.
"""

from __future__ import annotations

from vitesse.core.constants import (
    DECODING_ERROR_MESSAGE,
    INVALID_ENDPOINT_MESSAGE,
    MISSING_TOKEN_MESSAGE,
    SERVER_ERROR_MESSAGE,
    UNAUTHORIZED_MESSAGE,
    UNKNOWN_ERROR_MESSAGE,
)


class GatewayError(Exception):
    """Base class for every error surfaced by a gateway."""

    default_message: str = UNKNOWN_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidEndpointError(GatewayError):
    """The endpoint could not be turned into a request URL."""
    default_message = INVALID_ENDPOINT_MESSAGE


class MissingTokenError(GatewayError):
    """The endpoint requires authentication and no token is stored."""
    default_message = MISSING_TOKEN_MESSAGE


class UnauthorizedError(GatewayError):
    """The backend rejected the credentials (HTTP 401)."""
    default_message = UNAUTHORIZED_MESSAGE


class ServerError(GatewayError):
    """The backend or the transport failed.

    ``status_code`` is ``None`` when no HTTP response was received.
    """

    default_message = SERVER_ERROR_MESSAGE

    def __init__(self, status_code: int | None, message: str | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ServerError):
            return NotImplemented
        return (self.status_code, self.message) == (other.status_code, other.message)

    __hash__ = Exception.__hash__


class DecodingError(GatewayError):
    """The response body did not match the expected schema."""
    default_message = DECODING_ERROR_MESSAGE


class UnknownError(GatewayError):
    """No response could be matched or interpreted."""
    default_message = UNKNOWN_ERROR_MESSAGE
