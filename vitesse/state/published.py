"""Published controller state with change notification.

Controllers declare their observable fields as ``Published`` class
attributes.  Assigning a new value stores it on the instance and, when the
value actually changed, calls every subscriber with ``(name, value)``.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[str, Any], None]


class Published(Generic[T]):
    """Descriptor for an observable attribute.

    *coerce* normalizes assigned values (e.g. ``tuple`` for sequences) so that
    subscribers never receive a mutable container owned by the caller.
    """

    def __init__(self, default: T, coerce: Callable[[Any], T] | None = None) -> None:
        self.default = default
        self.coerce = coerce
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, obj: Any, objtype: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.__dict__.get(self.name, self.default)

    def __set__(self, obj: Observable, value: Any) -> None:
        if self.coerce is not None:
            value = self.coerce(value)
        previous = self.__get__(obj)
        obj.__dict__[self.name] = value
        if previous != value:
            obj._notify(self.name, value)


class Observable:
    """Base class holding the subscriber list."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback*; returns a function that unsubscribes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def snapshot(self) -> dict[str, Any]:
        """Return the current value of every published field."""
        fields: dict[str, Any] = {}
        for klass in reversed(type(self).__mro__):
            for name, attr in vars(klass).items():
                if isinstance(attr, Published):
                    fields[name] = getattr(self, name)
        return fields

    def _notify(self, name: str, value: Any) -> None:
        for callback in list(self._subscribers):
            try:
                callback(name, value)
            except Exception:
                logger.exception(
                    "subscriber_failed",
                    extra={"controller": type(self).__name__, "field": name},
                )
