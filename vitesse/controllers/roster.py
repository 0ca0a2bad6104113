"""Roster controller: the candidate list and its view state.

The roster is always replaced wholesale by the server's answer (fetch, and
the re-fetch after every delete); the only in-place edit is swapping one
candidate for the server's copy after a favorite toggle.

Calls are neither de-duplicated nor cancelled: rapid repeated actions can
have several requests in flight, and the last one to resolve wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from vitesse.controllers.base import Controller
from vitesse.models.candidate import Candidate
from vitesse.network import endpoints
from vitesse.network.gateway import Gateway
from vitesse.state.published import Published

logger = logging.getLogger(__name__)


class RosterController(Controller):
    """Owns the candidate roster.

    *is_admin* is fixed at construction; a change of the session's admin
    status needs a new controller.
    """

    candidates = Published((), coerce=tuple)
    search_text = Published("")
    show_only_favorites = Published(False)
    selected_ids = Published(frozenset(), coerce=frozenset)
    is_editing = Published(False)

    def __init__(
        self,
        gateway: Gateway,
        is_admin: bool,
        fetch_on_start: bool = False,
    ) -> None:
        super().__init__()
        self.gateway = gateway
        self._is_admin = is_admin
        self._tasks: set[asyncio.Task[None]] = set()

        if fetch_on_start:
            try:
                self._schedule(self.fetch())
            except RuntimeError:
                logger.debug("roster_initial_fetch_skipped", extra={"reason": "no running loop"})

    @property
    def is_admin(self) -> bool:
        return self._is_admin

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def filtered_candidates(self) -> tuple[Candidate, ...]:
        """Candidates matching the search text and the favorites filter.

        The search is a case-insensitive substring match on first name, last
        name, email and phone.  Both filters apply together and are always
        computed from the full roster.
        """
        term = self.search_text.strip().lower()

        def matches(candidate: Candidate) -> bool:
            if not term:
                return True
            fields = (
                candidate.first_name,
                candidate.last_name,
                candidate.email,
                candidate.phone or "",
            )
            return any(term in field.lower() for field in fields)

        filtered = [c for c in self.candidates if matches(c)]
        if self.show_only_favorites:
            filtered = [c for c in filtered if c.is_favorite]
        return tuple(filtered)

    # ------------------------------------------------------------------
    # Network-bound operations
    # ------------------------------------------------------------------

    async def fetch(self) -> None:
        """Replace the roster with the server's list, in server order."""
        self.is_loading = True
        try:
            self.candidates = await self.gateway.request(
                endpoints.candidates(), list[Candidate]
            )
            logger.info("roster_fetched", extra={"count": len(self.candidates)})
        except Exception as exc:
            self._handle_error(exc)
        finally:
            self.is_loading = False

    async def delete(self, candidate: Candidate) -> bool:
        """Delete *candidate* on the server, then re-fetch the roster.

        When the delete itself fails the error is surfaced and the roster is
        left as it was.
        """
        self.is_loading = True
        try:
            await self.gateway.request_no_body(endpoints.delete_candidate(candidate.id))
        except Exception as exc:
            self._handle_error(exc)
            return False

        logger.info("candidate_deleted", extra={"candidate_id": candidate.id})
        await self.fetch()
        return True

    async def delete_selected(self) -> None:
        """Delete every selected candidate still in the roster, one at a time.

        Selected ids are visited in roster order.  A failed delete does not
        stop the others; the selection and edit mode are reset afterwards
        whatever happened.
        """
        selected = self.selected_ids
        ordered_ids = [c.id for c in self.candidates if c.id in selected]
        failures = 0
        try:
            for candidate_id in ordered_ids:
                candidate = self._find(candidate_id)
                if candidate is None:
                    continue
                if not await self.delete(candidate):
                    failures += 1
        finally:
            self.selected_ids = frozenset()
            self.is_editing = False

        logger.info(
            "bulk_delete_complete",
            extra={"requested": len(ordered_ids), "failed": failures},
        )

    async def toggle_favorite(self, candidate: Candidate) -> None:
        """Flip the favorite flag of *candidate* (admins only).

        For non-admins this is a silent no-op.
        """
        if not self._is_admin:
            return

        self.is_loading = True
        try:
            updated = await self.gateway.request(
                endpoints.toggle_favorite(candidate.id), Candidate
            )
        except Exception as exc:
            self._handle_error(exc)
            return

        self.candidates = tuple(
            updated if c.id == candidate.id else c for c in self.candidates
        )
        self.is_loading = False

    # ------------------------------------------------------------------
    # Local operations
    # ------------------------------------------------------------------

    def toggle_selection(self, candidate: Candidate) -> None:
        """Add or remove *candidate* from the selection; toggling twice restores it."""
        if candidate.id in self.selected_ids:
            self.selected_ids = self.selected_ids - {candidate.id}
        else:
            self.selected_ids = self.selected_ids | {candidate.id}

    # ------------------------------------------------------------------
    # Fire-and-forget entry points for UI callbacks
    # ------------------------------------------------------------------

    def toggle_favorite_nowait(self, candidate: Candidate) -> asyncio.Task[None]:
        return self._schedule(self.toggle_favorite(candidate))

    def delete_selected_nowait(self) -> asyncio.Task[None]:
        return self._schedule(self.delete_selected())

    def _schedule(self, coro: Coroutine[Any, Any, None]) -> asyncio.Task[None]:
        """Run *coro* on the running loop, keeping a reference until done.

        Raises ``RuntimeError`` when no event loop is running.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _find(self, candidate_id: str) -> Candidate | None:
        return next((c for c in self.candidates if c.id == candidate_id), None)
