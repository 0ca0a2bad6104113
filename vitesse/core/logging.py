"""Logging configuration for the Vitesse client.

Log calls across the package use an event name as the message and pass
their context through ``extra`` (``logger.info("candidates_fetched",
extra={"count": 3})``).  :class:`EventFormatter` renders that context as
``key=value`` pairs after the event so it is not lost on a plain stream.
"""

import logging
import sys

from vitesse.core.config import settings

PACKAGE_LOGGER = "vitesse"

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class EventFormatter(logging.Formatter):
    """Append the ``extra`` fields of a record as sorted ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and not key.startswith("_")
        }
        if not context:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(context.items()))
        return f"{line} | {pairs}"


def setup_logging() -> None:
    """Route client logs to *stdout* through :class:`EventFormatter`.

    The ``vitesse`` logger takes its level from ``settings.LOG_LEVEL``; the
    root logger only carries the handler.  Repeated calls replace the
    handler instead of stacking another one.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    formatter = EventFormatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S%z",
    )

    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)

    logging.getLogger(PACKAGE_LOGGER).setLevel(log_level)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
