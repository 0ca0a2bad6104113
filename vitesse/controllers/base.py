"""Shared published state for controllers: loading flag and error surfacing."""

from __future__ import annotations

import logging

from vitesse.controllers.errors import describe_error
from vitesse.state.published import Observable, Published

logger = logging.getLogger(__name__)


class Controller(Observable):
    """Base controller.

    Errors are caught at the controller boundary and surfaced through
    ``error_message`` / ``show_error``; they are never re-raised.
    """

    is_loading = Published(False)
    error_message = Published("")
    show_error = Published(False)

    def dismiss_error(self) -> None:
        """Hide the surfaced error (the alert was acknowledged)."""
        self.show_error = False

    def _handle_error(self, error: BaseException) -> None:
        self.error_message = describe_error(error)
        self.show_error = True
        self.is_loading = False
        logger.warning(
            "controller_error",
            extra={
                "controller": type(self).__name__,
                "error_type": type(error).__name__,
                "error_message": self.error_message,
            },
        )
