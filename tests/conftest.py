"""Shared test fixtures.

Provides a canned gateway (authenticated and anonymous), in-memory token
stores, and the sample roster used across test modules.
"""

import pytest

from vitesse.models.candidate import Candidate
from vitesse.network.canned import CannedGateway
from vitesse.storage.token_store import MemoryTokenStore


@pytest.fixture()
def gateway() -> CannedGateway:
    """Canned gateway holding a token, so authenticated endpoints pass."""
    return CannedGateway(token="fake-token")


@pytest.fixture()
def anonymous_gateway() -> CannedGateway:
    """Canned gateway without a token."""
    return CannedGateway()


@pytest.fixture()
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture()
def failing_token_store() -> MemoryTokenStore:
    """Token store whose saves never read back."""
    return MemoryTokenStore(fail_on_save=True)


@pytest.fixture()
def sample_candidates() -> list[Candidate]:
    return [
        Candidate(
            id="1", first_name="John", last_name="Doe",
            email="john@example.com", phone="123456789", is_favorite=False,
        ),
        Candidate(
            id="2", first_name="Jane", last_name="Smith",
            email="jane@example.com", phone="987654321", is_favorite=True,
        ),
        Candidate(
            id="3", first_name="Alice", last_name="Johnson",
            email="alice@example.com", phone="456789123", is_favorite=False,
        ),
    ]
