"""Base reporter: runner subscription and sink ownership rules.

Concrete reporters inherit from this.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TextIO

from journeyscope.domain.events import EventKind

if TYPE_CHECKING:
    from journeyscope.application.runner import Runner
    from journeyscope.domain.events import (
        EndEvent,
        JourneyEndEvent,
        JourneyStartEvent,
        StepEndEvent,
    )


class BaseReporter(ABC):
    """Subscribes to every runner event and writes to one sequential sink.

    Sink lifecycle belongs to the caller: reporters never close or flush
    the sink, not even on end. Close reporter.stream when done.

    Example:
        class CountingReporter(BaseReporter):
            def on_journey_start(self, event): ...
            def on_step_end(self, event): self.stream.write(".")
            def on_journey_end(self, event): ...
            def on_end(self, event): self.stream.write("\\n")
    """

    def __init__(
        self,
        runner: Runner,
        stream: TextIO | None = None,
        *,
        fd: int | None = None,
    ) -> None:
        """Subscribe to runner events.

        Args:
            runner: Event source.
            stream: Output text stream (default: sys.stdout).
            fd: OS file descriptor to write to instead of stream.
                Wrapped in a line-buffered text file; closing
                reporter.stream closes the descriptor.

        Raises:
            ValueError: Both stream and fd given.
        """
        if stream is not None and fd is not None:
            raise ValueError("pass either stream or fd, not both")
        if fd is not None:
            stream = open(fd, "w", encoding="utf-8", buffering=1)  # noqa: SIM115
        self._stream: TextIO = stream if stream is not None else sys.stdout
        self._runner = runner

        runner.on(EventKind.JOURNEY_START, self.on_journey_start)
        runner.on(EventKind.STEP_END, self.on_step_end)
        runner.on(EventKind.JOURNEY_END, self.on_journey_end)
        runner.on(EventKind.END, self.on_end)

    @property
    def stream(self) -> TextIO:
        """Output sink. Owned by the caller."""
        return self._stream

    @abstractmethod
    def on_journey_start(self, event: JourneyStartEvent) -> None:
        """Handle journey:start."""

    @abstractmethod
    def on_step_end(self, event: StepEndEvent) -> None:
        """Handle step:end."""

    @abstractmethod
    def on_journey_end(self, event: JourneyEndEvent) -> None:
        """Handle journey:end."""

    @abstractmethod
    def on_end(self, event: EndEvent) -> None:
        """Handle end. Must not close the sink."""
