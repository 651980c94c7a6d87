"""Runner: process-wide journey lifecycle event hub.

Sole event source for reporters. Knows nothing about reporting or
collection. Emission is synchronous: every listener runs to completion
(or fails, isolated by SafeListener) before emit() returns. No queue,
no buffering, no retry.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any

from journeyscope.domain.events import EventKind, get_event_kind
from journeyscope.infrastructure.safe_listener import SafeListener

if TYPE_CHECKING:
    from collections.abc import Callable

    from journeyscope.domain.events import RunnerEvent
    from journeyscope.domain.exceptions import ListenerError

    from typing import TypeAlias

    Listener: TypeAlias = Callable[[Any], object]

logger = logging.getLogger(__name__)


class Runner:
    """Publish-subscribe hub over the closed set of EventKind.

    Lifecycle order per journey:
        journey:start → step:end* → journey:end
    followed by exactly one end for the whole run. Ordering is the
    emitter's responsibility; the runner dispatches what it receives.

    Example:
        runner = Runner()
        runner.on("step:end", lambda event: print(event.step.name))
        runner.emit(StepEndEvent(...))
    """

    def __init__(self) -> None:
        """Initialize with no listeners."""
        self._lock = threading.Lock()
        self._listeners: dict[EventKind, list[SafeListener]] = {kind: [] for kind in EventKind}

    def on(self, kind: EventKind | str, listener: Listener) -> None:
        """Subscribe listener to one event kind.

        Raises:
            UnknownEventError: kind is not a known event name.
            InvalidListenerError: listener is not callable.
        """
        event_kind = EventKind.parse(kind)
        wrapped = SafeListener(listener, event_kind.value)
        with self._lock:
            self._listeners[event_kind].append(wrapped)

    def off(self, kind: EventKind | str, listener: Listener) -> bool:
        """Unsubscribe listener. Returns False if it was not subscribed."""
        event_kind = EventKind.parse(kind)
        with self._lock:
            listeners = self._listeners[event_kind]
            for i, wrapped in enumerate(listeners):
                if wrapped.handler == listener:
                    del listeners[i]
                    return True
        return False

    def listener_count(self, kind: EventKind | str) -> int:
        """Number of listeners subscribed to kind."""
        with self._lock:
            return len(self._listeners[EventKind.parse(kind)])

    def emit(self, event: RunnerEvent) -> None:
        """Dispatch event to every listener of its kind, in subscription order.

        Never raises because of a listener. Failures are captured
        per listener and exposed via listener_errors.
        """
        kind = get_event_kind(event)
        with self._lock:
            # Snapshot: listeners may subscribe/unsubscribe during dispatch
            listeners = tuple(self._listeners[kind])

        logger.debug("emit %s to %d listener(s)", kind.value, len(listeners))
        for listener in listeners:
            listener.dispatch(event)

    @property
    def listener_errors(self) -> tuple[ListenerError, ...]:
        """All errors captured from listeners, grouped by event kind."""
        with self._lock:
            listeners = [w for kind in EventKind for w in self._listeners[kind]]
        return tuple(error for w in listeners for error in w.errors)

    def check_listener_errors(self) -> None:
        """Raise first captured listener error, if any.

        For hosts that want a broken reporter to fail the process
        after the run, instead of during it.

        Raises:
            ListenerError: A listener raised during emit.
        """
        errors = self.listener_errors
        if errors:
            raise errors[0]
