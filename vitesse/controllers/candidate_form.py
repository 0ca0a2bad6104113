"""Candidate form controller: validates a draft and creates the candidate."""

from __future__ import annotations

import logging

from vitesse.controllers.base import Controller
from vitesse.controllers.errors import RequiredFieldsError
from vitesse.core.validation import all_filled, is_valid_email
from vitesse.models.candidate import Candidate, CandidateDraft
from vitesse.network import endpoints
from vitesse.network.gateway import Gateway

logger = logging.getLogger(__name__)


class CandidateFormController(Controller):
    """Submits new candidates.  ``created`` holds the last one the server returned."""

    def __init__(self, gateway: Gateway) -> None:
        super().__init__()
        self.gateway = gateway
        self.created: Candidate | None = None

    async def save(
        self,
        first_name: str,
        last_name: str,
        email: str,
        phone: str = "",
        linkedin_url: str = "",
        note: str = "",
    ) -> bool:
        """Create a candidate from the form fields.

        Returns True iff the backend accepted the draft.  Blank optional
        fields are sent as absent.
        """
        if not (all_filled(first_name, last_name, email) and is_valid_email(email)):
            self._handle_error(RequiredFieldsError())
            return False

        draft = CandidateDraft(
            first_name=first_name,
            last_name=last_name,
            email=email,
            phone=phone or None,
            linkedin_url=linkedin_url or None,
            note=note or None,
        )

        self.is_loading = True
        try:
            self.created = await self.gateway.request(
                endpoints.create_candidate(draft), Candidate
            )
        except Exception as exc:
            self._handle_error(exc)
            return False
        finally:
            self.is_loading = False

        logger.info("candidate_created", extra={"candidate_id": self.created.id})
        return True
