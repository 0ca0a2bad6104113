"""Session controller: login, token persistence and logout.

State machine::

    unauthenticated -> authenticating -> authenticated     (success)
    unauthenticated -> authenticating -> unauthenticated   (failure)

A session only becomes authenticated once the token has been saved *and*
read back from the token store.
"""

from __future__ import annotations

import logging

from vitesse.controllers.base import Controller
from vitesse.controllers.errors import InvalidInputError
from vitesse.core.constants import TOKEN_LOG_PREFIX
from vitesse.core.validation import all_filled, is_valid_email
from vitesse.models.auth import AuthResponse
from vitesse.models.enums import SessionPhase
from vitesse.network import endpoints
from vitesse.network.errors import UnauthorizedError
from vitesse.network.gateway import Gateway
from vitesse.state.published import Published
from vitesse.storage.token_store import TokenStore

logger = logging.getLogger(__name__)


class SessionController(Controller):
    """Owns the authenticated session."""

    phase = Published(SessionPhase.unauthenticated)
    is_authenticated = Published(False)
    is_admin = Published(False)

    def __init__(self, gateway: Gateway, token_store: TokenStore) -> None:
        super().__init__()
        self.gateway = gateway
        self.token_store = token_store

    async def login(self, email: str, password: str) -> bool:
        """Exchange credentials for a token.

        Returns True once the session is authenticated.  Failures are surfaced
        through ``error_message`` and leave the session unauthenticated.
        """
        if not (all_filled(email, password) and is_valid_email(email)):
            self._handle_error(InvalidInputError())
            return False

        self.is_loading = True
        succeeded = False
        try:
            await self.authenticate(email, password)
            succeeded = True
        except Exception as exc:
            self._handle_error(exc)
        finally:
            self.is_loading = False

        return succeeded

    async def authenticate(self, email: str, password: str) -> None:
        """Run the token exchange without local validation or error surfacing.

        Raises the gateway error, or ``UnauthorizedError`` when the token
        could not be persisted.  Any failure leaves the session
        unauthenticated, including one that was authenticated before.
        """
        self.phase = SessionPhase.authenticating
        try:
            response: AuthResponse = await self.gateway.request(
                endpoints.login(email, password), AuthResponse
            )
            self._store_token(response.token, response.is_admin)
        except Exception:
            self._reset()
            raise

    def _store_token(self, token: str, is_admin: bool) -> None:
        """Persist *token* and authenticate if it round-trips.

        Raises ``UnauthorizedError`` when the store does not return this exact
        token; a stale token left from an earlier session is cleared.
        """
        self.token_store.save(token)
        if self.token_store.get() != token:
            logger.error("token_persist_failed")
            self.token_store.clear()
            raise UnauthorizedError()

        logger.info(
            "session_authenticated",
            extra={"token_prefix": token[:TOKEN_LOG_PREFIX], "is_admin": is_admin},
        )
        self.is_admin = is_admin
        self.is_authenticated = True
        self.phase = SessionPhase.authenticated

    def logout(self) -> None:
        """Forget the stored token and return to unauthenticated."""
        self.token_store.clear()
        self._reset()
        logger.info("session_cleared")

    def _reset(self) -> None:
        self.is_authenticated = False
        self.is_admin = False
        self.phase = SessionPhase.unauthenticated

    def has_stored_token(self) -> bool:
        return self.token_store.has_token()
