"""SafeListener: exception-absorbing wrapper for runner listeners.

Wraps one listener so that a failing subscriber never reaches the
emitter or sibling subscribers. Errors are captured per listener at
dispatch time and logged; the run continues.

  Flow:
    Runner.emit(event)  →  SafeListener.dispatch(event)
                                   │
                              self._handler(event)
                                   │
                              if raises: CATCH HERE, record, log
                                   │
    Runner continues     ←  return (never re-raises)

KeyboardInterrupt and SystemExit are not Exception subclasses and
propagate normally.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from journeyscope.domain.exceptions import InvalidListenerError, ListenerError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class SafeListener:
    """Exception-absorbing wrapper for one event listener.

    Contract:
      - dispatch() NEVER re-raises Exception subclasses
      - every captured exception kept in errors, in dispatch order
      - Runner.check_listener_errors() raises the first one

    Thread Safety:
      - _lock protects _errors
    """

    __slots__ = ("_errors", "_handler", "_lock", "_name")

    def __init__(self, handler: Callable[[Any], object], name: str) -> None:
        """Initialize with listener and the event name it serves.

        Raises:
            InvalidListenerError: If handler is not callable.
        """
        if not callable(handler):
            raise InvalidListenerError(type(handler))

        self._handler = handler
        self._name = name
        self._lock = threading.Lock()
        self._errors: list[ListenerError] = []

    @property
    def handler(self) -> Callable[[Any], object]:
        """Wrapped listener."""
        return self._handler

    @property
    def errors(self) -> tuple[ListenerError, ...]:
        """Captured listener errors, oldest first."""
        with self._lock:
            return tuple(self._errors)

    def dispatch(self, event: object) -> None:
        """Invoke listener with event. NEVER re-raises."""
        try:
            self._handler(event)
        # BLE001: isolation boundary, any subscriber failure is recorded, not propagated.
        except Exception as exc:  # noqa: BLE001
            error = ListenerError(self._name, exc)
            with self._lock:
                self._errors.append(error)
            logger.error(
                "listener %r failed on %r",
                getattr(self._handler, "__qualname__", self._handler),
                self._name,
                exc_info=exc,
            )
