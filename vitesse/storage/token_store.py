"""Bearer token persistence.

A token store keeps exactly one opaque token.  ``FileTokenStore`` is the
durable key-value backing (a small JSON document); ``MemoryTokenStore`` is the
in-memory variant used by tests, able to simulate a storage failure.

``get_token_store()`` returns the lazily-initialized, process-wide file store
configured from ``settings``.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from vitesse.core.config import settings

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Persists a single bearer token."""

    def save(self, token: str) -> None: ...

    def get(self) -> str | None: ...

    def clear(self) -> None: ...

    def has_token(self) -> bool: ...


class FileTokenStore:
    """Durable store keeping the token under *key* in a JSON file.

    Other keys in the file are left untouched.  The file is opened per call.
    """

    def __init__(self, path: str | Path, key: str = "authToken") -> None:
        self.path = Path(path).expanduser()
        self.key = key

    def _read(self) -> dict[str, Any]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as exc:
            logger.warning(
                "token_store_unreadable",
                extra={"path": str(self.path), "error_type": type(exc).__name__},
            )
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as exc:
            # get() reports the failed round trip to the caller
            logger.error(
                "token_store_write_failed",
                extra={"path": str(self.path), "error_message": str(exc)},
            )

    def save(self, token: str) -> None:
        data = self._read()
        data[self.key] = token
        self._write(data)

    def get(self) -> str | None:
        value = self._read().get(self.key)
        return value if isinstance(value, str) else None

    def clear(self) -> None:
        data = self._read()
        if self.key in data:
            del data[self.key]
            self._write(data)

    def has_token(self) -> bool:
        return self.get() is not None


class MemoryTokenStore:
    """In-memory store.

    With ``fail_on_save`` the token is accepted by ``save`` but never
    returned by ``get``, as if persistence had failed.
    """

    def __init__(self, token: str | None = None, fail_on_save: bool = False) -> None:
        self.token = token
        self.fail_on_save = fail_on_save

    def save(self, token: str) -> None:
        self.token = token

    def get(self) -> str | None:
        return None if self.fail_on_save else self.token

    def clear(self) -> None:
        self.token = None

    def has_token(self) -> bool:
        return self.get() is not None


_store: FileTokenStore | None = None


def get_token_store() -> FileTokenStore:
    """Return the singleton file token store, creating it on first call."""
    global _store
    if _store is None:
        _store = FileTokenStore(settings.TOKEN_STORE_PATH, key=settings.TOKEN_KEY)
    return _store
