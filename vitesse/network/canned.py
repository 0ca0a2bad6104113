"""Gateway serving canned responses, for tests and offline previews.

Responses are keyed by ``(method, path)``.  A canned value is either a
JSON-able payload (pydantic models are dumped by alias) or an exception
instance that is raised instead.
"""

from __future__ import annotations

import asyncio
from typing import Any, TypeVar

from pydantic import TypeAdapter

from vitesse.models.enums import HTTPMethod
from vitesse.network.endpoints import Endpoint
from vitesse.network.errors import InvalidEndpointError, MissingTokenError, UnknownError
from vitesse.network.gateway import decode

T = TypeVar("T")

_jsonable = TypeAdapter(Any)


class CannedGateway:
    """In-process gateway with the same error semantics as ``HttpGateway``.

    ``calls`` records every endpoint that passed the local checks, i.e. every
    request that would have reached the network.
    """

    def __init__(self, token: str | None = None, delay: float = 0.0) -> None:
        self.token = token
        self.delay = delay
        self.responses: dict[tuple[HTTPMethod, str], Any] = {}
        self.calls: list[Endpoint] = []

    def respond(self, endpoint: Endpoint, payload: Any = None) -> None:
        """Serve *payload* for *endpoint*."""
        self.responses[endpoint.key] = _jsonable.dump_python(
            payload, mode="json", by_alias=True
        )

    def fail(self, endpoint: Endpoint, error: BaseException) -> None:
        """Raise *error* when *endpoint* is requested."""
        self.responses[endpoint.key] = error

    async def request(self, endpoint: Endpoint, response_type: type[T]) -> T:
        payload = await self._resolve(endpoint)
        return decode(payload, response_type)

    async def request_no_body(self, endpoint: Endpoint) -> None:
        await self._resolve(endpoint)

    async def _resolve(self, endpoint: Endpoint) -> Any:
        if not endpoint.is_valid:
            raise InvalidEndpointError()
        if endpoint.requires_authentication and self.token is None:
            raise MissingTokenError()

        self.calls.append(endpoint)
        await asyncio.sleep(self.delay)

        if endpoint.key not in self.responses:
            raise UnknownError()
        result = self.responses[endpoint.key]
        if isinstance(result, BaseException):
            raise result
        return result
