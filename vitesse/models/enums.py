"""Enum types shared by the network layer and the controllers."""

from enum import Enum


class HTTPMethod(str, Enum):
    """HTTP verbs used by the Vitesse endpoints."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class SessionPhase(str, Enum):
    """Lifecycle of an authenticated session."""
    unauthenticated = "unauthenticated"
    authenticating = "authenticating"
    authenticated = "authenticated"
