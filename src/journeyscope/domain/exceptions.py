"""Domain exceptions: all public errors of journeyscope.

All exceptions visible to users are defined here.
Application/Infrastructure layers raise these, not their own public exceptions.
"""

from __future__ import annotations


class JourneyScopeError(Exception):
    """Base for all journeyscope error exceptions.

    Allows: except JourneyScopeError to catch all library errors.
    """


class UnknownCollectorError(JourneyScopeError, ValueError):
    """Collector type is not one of network, trace, performance.

    Attributes:
        value: Rejected collector type value.
    """

    def __init__(self, value: object) -> None:
        """Initialize with rejected value."""
        self.value = value
        super().__init__(f"unknown collector type {value!r}")


class CollectorAttachError(JourneyScopeError):
    """Collector failed to attach to the debugging session.

    Wraps the original exception. Preserves traceback via __cause__.

    Attributes:
        collector: Collector type value (e.g. "network").
        original: Original exception from start().
    """

    def __init__(self, collector: str, original: BaseException) -> None:
        """Initialize with collector name and original exception."""
        self.collector = collector
        self.original = original
        super().__init__(
            f"{collector} collector failed to start: {type(original).__name__}: {original}"
        )
        self.__cause__ = original


class CollectorStopError(JourneyScopeError):
    """Collector failed to stop or decode its data.

    Raised from PluginManager.output(). No partial result is returned.

    Attributes:
        collector: Collector type value (e.g. "trace").
        original: Original exception from stop().
    """

    def __init__(self, collector: str, original: BaseException) -> None:
        """Initialize with collector name and original exception."""
        self.collector = collector
        self.original = original
        super().__init__(
            f"{collector} collector failed to stop: {type(original).__name__}: {original}"
        )
        self.__cause__ = original


class CollectorStateError(JourneyScopeError, RuntimeError):
    """Collector used outside its start → stop lifecycle.

    Collectors are one-shot: a stopped collector cannot be restarted.
    """

    def __init__(self, collector: str, reason: str) -> None:
        """Initialize with collector name and reason."""
        self.collector = collector
        self.reason = reason
        super().__init__(f"{collector} collector {reason}")


class InvalidFilmstripLimitError(JourneyScopeError, ValueError):
    """Filmstrip bound must keep both first and last frame (>= 2).

    Attributes:
        limit: Invalid limit value.
    """

    def __init__(self, limit: int) -> None:
        """Initialize with invalid limit."""
        self.limit = limit
        super().__init__(f"max_frames must be >= 2, got {limit}")


class InvalidTimingError(JourneyScopeError, ValueError):
    """Start timestamp after end timestamp.

    Attributes:
        start: Start timestamp.
        end: End timestamp.
    """

    def __init__(self, start: float, end: float) -> None:
        """Initialize with offending timestamps."""
        self.start = start
        self.end = end
        super().__init__(f"start must be <= end, got start={start}, end={end}")


class JourneyStateError(JourneyScopeError, RuntimeError):
    """Journey or step already completed.

    Result fields are set once, when the terminal event is emitted.
    """

    def __init__(self, name: str) -> None:
        """Initialize with journey or step name."""
        self.name = name
        super().__init__(f"{name!r} already completed")


class DuplicateStepError(JourneyScopeError, ValueError):
    """Step name already registered in the same journey.

    Attributes:
        journey: Journey name.
        step: Duplicated step name.
    """

    def __init__(self, journey: str, step: str) -> None:
        """Initialize with journey and step names."""
        self.journey = journey
        self.step = step
        super().__init__(f"step {step!r} already registered in journey {journey!r}")


class StepAttachedError(JourneyScopeError, ValueError):
    """Step already belongs to a journey.

    A Step carries its own result fields, so it cannot be shared.

    Attributes:
        journey: Journey the step was offered to.
        step: Step name.
    """

    def __init__(self, journey: str, step: str) -> None:
        """Initialize with journey and step names."""
        self.journey = journey
        self.step = step
        super().__init__(f"step {step!r} already attached, cannot add to journey {journey!r}")


class InvalidListenerError(JourneyScopeError, TypeError):
    """Listener must be callable.

    Attributes:
        got: Actual type received.
    """

    def __init__(self, got: type) -> None:
        """Initialize with actual type."""
        self.got = got
        super().__init__(f"listener must be callable, got {got.__name__}")


class UnknownEventError(JourneyScopeError, ValueError):
    """Event name is not one of the runner's event kinds."""

    def __init__(self, value: object) -> None:
        """Initialize with rejected value."""
        self.value = value
        super().__init__(f"unknown event {value!r}")


class ListenerError(JourneyScopeError):
    """Exception raised by a runner listener during emit.

    Captured at dispatch time, never propagated to the emitter.
    Raised later by Runner.check_listener_errors().

    Attributes:
        event: Event kind value being dispatched.
        original: Original exception from listener.
    """

    def __init__(self, event: str, original: BaseException) -> None:
        """Initialize with event name and original exception."""
        self.event = event
        self.original = original
        super().__init__(
            f"listener for {event!r} raised: {type(original).__name__}: {original}"
        )
        self.__cause__ = original


class UnknownReporterError(JourneyScopeError, ValueError):
    """Reporter name not registered.

    Attributes:
        name: Requested reporter name.
    """

    def __init__(self, name: str) -> None:
        """Initialize with requested name."""
        self.name = name
        super().__init__(f"unknown reporter {name!r}")
