"""Registration controller: account creation followed by a login."""

from __future__ import annotations

import logging

from vitesse.controllers.base import Controller
from vitesse.controllers.errors import RegistrationInvalidError
from vitesse.controllers.session import SessionController
from vitesse.core.validation import all_filled, is_valid_email
from vitesse.network import endpoints
from vitesse.network.gateway import Gateway
from vitesse.state.published import Published
from vitesse.storage.token_store import TokenStore

logger = logging.getLogger(__name__)


class RegistrationController(Controller):
    """Owns the sign-up flow.

    Validation failures share one message so the form does not reveal which
    field was rejected.
    """

    is_registered = Published(False)

    def __init__(
        self,
        gateway: Gateway,
        token_store: TokenStore | None = None,
        session: SessionController | None = None,
    ) -> None:
        super().__init__()
        self.gateway = gateway
        if session is None:
            if token_store is None:
                raise ValueError("token_store or session is required")
            session = SessionController(gateway, token_store)
        self.session = session

    async def register(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> bool:
        """Create the account, then log in with the same credentials."""
        valid = (
            all_filled(first_name, last_name, email, password, confirm_password)
            and is_valid_email(email)
            and password == confirm_password
        )
        if not valid:
            self._handle_error(RegistrationInvalidError())
            return False

        self.is_loading = True
        self.is_registered = False
        try:
            await self.gateway.request_no_body(
                endpoints.register(email, password, first_name, last_name)
            )
            logger.info("account_registered")
            await self.session.authenticate(email, password)
            self.is_registered = True
        except Exception as exc:
            self._handle_error(exc)
        finally:
            self.is_loading = False

        return self.is_registered
