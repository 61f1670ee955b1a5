"""Process-wide session signal.

The application context owns one ``SessionSignal``; anything that needs to
react to a sign-in or to the session disappearing subscribes to it instead of
polling global state.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from ..domain.repositories.auth import Identity
from ..logging_config import get_logger

logger = get_logger(__name__)

SessionListener = Callable[[Optional[Identity]], None]


class SessionSignal:
    """Broadcasts session transitions: an ``Identity`` when present, ``None`` when absent."""

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that unsubscribes it."""

        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, identity: Optional[Identity]) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(identity)
            except Exception:
                logger.exception("Session listener failed", extra={"listener": repr(listener)})

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
