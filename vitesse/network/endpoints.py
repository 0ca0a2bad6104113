"""Endpoint descriptors for the Vitesse backend.

An ``Endpoint`` is a plain value: path, HTTP method, optional JSON body and
whether a bearer token must be attached.  Use the factory functions rather
than building paths by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from vitesse.models.auth import LoginRequest, RegisterRequest
from vitesse.models.candidate import CandidateDraft
from vitesse.models.enums import HTTPMethod


@dataclass(frozen=True)
class Endpoint:
    """A single request against the backend."""

    path: str
    method: HTTPMethod = HTTPMethod.GET
    body: BaseModel | None = None
    requires_authentication: bool = True

    @property
    def is_valid(self) -> bool:
        """True if the path can be appended to a base URL as-is."""
        path = self.path
        return (
            path.startswith("/")
            and "//" not in path
            and not (len(path) > 1 and path.endswith("/"))
            and not any(ch.isspace() for ch in path)
        )

    @property
    def key(self) -> tuple[HTTPMethod, str]:
        """Identity of the endpoint, independent of its body."""
        return (self.method, self.path)

    def json_body(self) -> dict[str, Any] | None:
        """Serialize the body with camelCase keys, dropping absent fields."""
        if self.body is None:
            return None
        return self.body.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def login(email: str, password: str) -> Endpoint:
    return Endpoint(
        path="/user/auth",
        method=HTTPMethod.POST,
        body=LoginRequest(email=email, password=password),
        requires_authentication=False,
    )


def register(email: str, password: str, first_name: str, last_name: str) -> Endpoint:
    return Endpoint(
        path="/user/register",
        method=HTTPMethod.POST,
        body=RegisterRequest(
            email=email,
            password=password,
            first_name=first_name,
            last_name=last_name,
        ),
        requires_authentication=False,
    )


def candidates() -> Endpoint:
    return Endpoint(path="/candidate")


def create_candidate(draft: CandidateDraft) -> Endpoint:
    return Endpoint(path="/candidate", method=HTTPMethod.POST, body=draft)


def delete_candidate(candidate_id: str) -> Endpoint:
    return Endpoint(path=f"/candidate/{candidate_id}", method=HTTPMethod.DELETE)


def toggle_favorite(candidate_id: str) -> Endpoint:
    return Endpoint(path=f"/candidate/{candidate_id}/favorite", method=HTTPMethod.POST)
