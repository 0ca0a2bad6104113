"""Application boundary: default wiring of the controllers.

Configures structured logging and builds controllers on top of the
process-wide gateway and token store.  UI code creates one ``VitesseClient``
and asks it for controllers; the controllers themselves never reach for the
singletons.
"""

from __future__ import annotations

import logging

from vitesse.controllers.candidate_form import CandidateFormController
from vitesse.controllers.registration import RegistrationController
from vitesse.controllers.roster import RosterController
from vitesse.controllers.session import SessionController
from vitesse.core.config import settings
from vitesse.core.logging import setup_logging
from vitesse.network.gateway import Gateway, HttpGateway, get_gateway
from vitesse.storage.token_store import TokenStore, get_token_store

logger = logging.getLogger(__name__)


class VitesseClient:
    """Holds the shared gateway and token store and hands out controllers."""

    def __init__(
        self,
        gateway: Gateway | None = None,
        token_store: TokenStore | None = None,
        configure_logging: bool = True,
    ) -> None:
        if configure_logging:
            setup_logging()
        if token_store is None:
            token_store = get_token_store()
            gateway = gateway if gateway is not None else get_gateway()
        elif gateway is None:
            gateway = HttpGateway(
                base_url=settings.VITESSE_API_URL,
                token_store=token_store,
                timeout=settings.REQUEST_TIMEOUT_SECONDS,
            )
        self.token_store = token_store
        self.gateway = gateway
        self.session = SessionController(self.gateway, self.token_store)
        logger.info("client_ready")

    def registration(self) -> RegistrationController:
        return RegistrationController(self.gateway, session=self.session)

    def candidate_form(self) -> CandidateFormController:
        return CandidateFormController(self.gateway)

    def roster(self, fetch_on_start: bool = False) -> RosterController:
        """Build a roster controller bound to the session's current admin flag."""
        return RosterController(
            self.gateway,
            is_admin=self.session.is_admin,
            fetch_on_start=fetch_on_start,
        )
