"""Synchronous change notifications for the map index.

Listeners are registered per ``MapEvent`` kind and invoked in registration
order, on the caller's stack, before the index operation returns.

Classes
-------
- MapEvent       — the kinds of notification the index emits
- EventRegistry  — per-kind callback registry
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class MapEvent(str, Enum):
    """Notifications emitted by ``MapIndex``.

    ``RESTORED`` listeners receive ``(map_id, content, info)``;
    ``DELETED`` listeners receive ``(map_id,)``.
    """

    RESTORED = "restored"
    DELETED = "deleted"


class EventRegistry:
    """An explicit registry of callbacks keyed by ``MapEvent``."""

    def __init__(self) -> None:
        self._listeners: dict[MapEvent, list[Listener]] = {event: [] for event in MapEvent}

    def add_listener(self, event: MapEvent | str, listener: Listener) -> None:
        """Register ``listener`` for ``event``.

        The same callable may be registered more than once; it is then
        invoked once per registration.
        """
        self._listeners[MapEvent(event)].append(listener)

    def remove_listener(self, event: MapEvent | str, listener: Listener) -> None:
        """Unregister the earliest registration of ``listener`` for ``event``.

        Raises
        ------
        ValueError
            If ``listener`` is not registered for ``event``.
        """
        try:
            self._listeners[MapEvent(event)].remove(listener)
        except ValueError:
            raise ValueError(
                f"Listener {listener!r} is not registered for {MapEvent(event).value!r}."
            ) from None

    def listeners(self, event: MapEvent | str) -> list[Listener]:
        """Return a copy of the listeners registered for ``event``."""
        return list(self._listeners[MapEvent(event)])

    def dispatch(self, event: MapEvent, *args: Any) -> None:
        """Invoke every listener for ``event`` with ``args``.

        Exceptions raised by a listener propagate and stop delivery to the
        listeners registered after it.
        """
        listeners = self.listeners(event)
        logger.debug("EventRegistry: dispatching %s to %d listener(s)", event.value, len(listeners))
        for listener in listeners:
            listener(*args)

    def __repr__(self) -> str:
        counts = ", ".join(f"{e.value}={len(l)}" for e, l in self._listeners.items())
        return f"EventRegistry({counts})"


__all__ = ["EventRegistry", "Listener", "MapEvent"]
