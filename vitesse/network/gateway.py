"""HTTP gateway to the Vitesse backend.

The gateway is the only component that performs network I/O.  It executes
one request per call (no retry), attaches the bearer token for
authenticated endpoints and translates every failure into the
``vitesse.network.errors`` taxonomy.

``get_gateway()`` returns a lazily-initialized, process-wide gateway built
from ``settings``; controllers receive a gateway through their constructor.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from vitesse.core.config import settings
from vitesse.network.endpoints import Endpoint
from vitesse.network.errors import (
    DecodingError,
    InvalidEndpointError,
    MissingTokenError,
    ServerError,
    UnauthorizedError,
    UnknownError,
)
from vitesse.storage.token_store import TokenStore, get_token_store

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Gateway(Protocol):
    """Typed request executor used by the controllers."""

    async def request(self, endpoint: Endpoint, response_type: Any) -> Any:
        """Send *endpoint* and decode the JSON response as *response_type*."""
        ...

    async def request_no_body(self, endpoint: Endpoint) -> None:
        """Send *endpoint* and ignore the response body."""
        ...


# ---------------------------------------------------------------------------
# Helpers shared by gateway implementations
# ---------------------------------------------------------------------------

def decode(payload: Any, response_type: type[T]) -> T:
    """Validate a parsed JSON *payload* against *response_type*.

    Raises ``DecodingError`` when the payload does not match the schema.
    """
    try:
        return TypeAdapter(response_type).validate_python(payload)
    except ValidationError as exc:
        logger.warning(
            "response_decoding_failed",
            extra={"response_type": str(response_type), "error_count": exc.error_count()},
        )
        raise DecodingError() from exc


def build_url(base_url: str, endpoint: Endpoint) -> str:
    """Join *endpoint* onto *base_url*.

    Raises ``InvalidEndpointError`` for a malformed base URL or path.
    """
    if not endpoint.is_valid:
        raise InvalidEndpointError()
    try:
        base = httpx.URL(base_url)
    except httpx.InvalidURL as exc:
        raise InvalidEndpointError() from exc
    if base.scheme not in ("http", "https") or not base.host:
        raise InvalidEndpointError()
    return str(base.copy_with(path=base.path.rstrip("/") + endpoint.path))


def _server_message(response: httpx.Response) -> str | None:
    """Extract a human-readable message from an error response."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.reason_phrase or None


# ---------------------------------------------------------------------------
# httpx implementation
# ---------------------------------------------------------------------------

class HttpGateway:
    """Gateway backed by ``httpx.AsyncClient``.

    A client is opened per request; timeouts are enforced by httpx.
    """

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url
        self.token_store = token_store
        self.timeout = timeout

    async def request(self, endpoint: Endpoint, response_type: type[T]) -> T:
        response = await self._send(endpoint)
        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodingError() from exc
        return decode(payload, response_type)

    async def request_no_body(self, endpoint: Endpoint) -> None:
        await self._send(endpoint)

    async def _send(self, endpoint: Endpoint) -> httpx.Response:
        url = build_url(self.base_url, endpoint)

        headers = {"Accept": "application/json"}
        if endpoint.requires_authentication:
            token = self.token_store.get()
            if token is None:
                raise MissingTokenError()
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    endpoint.method.value,
                    url,
                    headers=headers,
                    json=endpoint.json_body(),
                )
        except httpx.TransportError as exc:
            logger.warning(
                "request_transport_failed",
                extra={
                    "method": endpoint.method.value,
                    "path": endpoint.path,
                    "error_type": type(exc).__name__,
                },
            )
            raise ServerError(None, str(exc) or None) from exc
        except httpx.HTTPError as exc:
            raise UnknownError() from exc

        logger.debug(
            "request_complete",
            extra={
                "method": endpoint.method.value,
                "path": endpoint.path,
                "status_code": response.status_code,
            },
        )

        if response.status_code == 401:
            raise UnauthorizedError()
        if response.status_code >= 400:
            raise ServerError(response.status_code, _server_message(response))
        return response


_gateway: HttpGateway | None = None


def get_gateway() -> HttpGateway:
    """Return the singleton gateway, creating it on first call."""
    global _gateway
    if _gateway is None:
        _gateway = HttpGateway(
            base_url=settings.VITESSE_API_URL,
            token_store=get_token_store(),
            timeout=settings.REQUEST_TIMEOUT_SECONDS,
        )
    return _gateway
