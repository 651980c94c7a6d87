"""Console reporter: runner events → rich formatted progress lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from rich.console import Console
from rich.markup import escape

from journeyscope.application.reporters._base import BaseReporter
from journeyscope.domain.journey import Status

if TYPE_CHECKING:
    from journeyscope.application.runner import Runner
    from journeyscope.domain.events import (
        EndEvent,
        JourneyEndEvent,
        JourneyStartEvent,
        StepEndEvent,
    )


_SYMBOLS: dict[Status, str] = {
    Status.SUCCEEDED: "[green]✓[/green]",
    Status.FAILED: "[red]✖[/red]",
    Status.SKIPPED: "[cyan]-[/cyan]",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        show_errors: Print error message under failed steps and journeys.
        colors: Emit ANSI colors. None = detect from the sink.
        width: Console width in columns.
    """

    show_errors: bool = True
    colors: bool | None = None
    width: int = 120


class ConsoleReporter(BaseReporter):
    """Human-readable reporter: one line per step, summary at end."""

    def __init__(
        self,
        runner: Runner,
        stream: TextIO | None = None,
        *,
        fd: int | None = None,
        config: ConsoleConfig | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            runner: Event source.
            stream: Output text stream (default: sys.stdout).
            fd: OS file descriptor to write to instead of stream.
            config: Reporter configuration. Uses defaults if None.
        """
        super().__init__(runner, stream, fd=fd)
        self._config = config or ConsoleConfig()
        self._console = Console(
            file=self.stream,
            force_terminal=self._config.colors,
            no_color=self._config.colors is False,
            width=self._config.width,
            highlight=False,
        )
        self._counts: dict[Status, int] = dict.fromkeys(Status, 0)

    @property
    def counts(self) -> dict[Status, int]:
        """Step counts by status so far."""
        return dict(self._counts)

    def on_journey_start(self, event: JourneyStartEvent) -> None:
        """Print journey header."""
        self._console.print()
        self._console.print(f"[bold]Journey: {escape(event.journey.name)}[/bold]")

    def on_step_end(self, event: StepEndEvent) -> None:
        """Print one step line with duration."""
        self._counts[event.status] += 1
        duration_ms = round((event.end - event.start) * 1000)
        self._console.print(
            f"   {_SYMBOLS[event.status]}  Step: '{escape(event.step.name)}' "
            f"{event.status.value} ({duration_ms} ms)"
        )
        if self._config.show_errors and event.error is not None:
            self._console.print(f"      [red]{escape(_describe(event.error))}[/red]")

    def on_journey_end(self, event: JourneyEndEvent) -> None:
        """Print journey error, if the journey failed outside a step."""
        if self._config.show_errors and event.error is not None:
            self._console.print(f"   [red]{escape(_describe(event.error))}[/red]")

    def on_end(self, event: EndEvent) -> None:
        """Print summary of step counts."""
        del event  # Unused
        self._console.print()
        self._console.rule("[bold]SUMMARY[/bold]")
        self._console.print(
            f" [green]{self._counts[Status.SUCCEEDED]} passed[/green]"
            f"  [red]{self._counts[Status.FAILED]} failed[/red]"
            f"  [cyan]{self._counts[Status.SKIPPED]} skipped[/cyan]"
        )
        self._console.print()


def _describe(error: BaseException) -> str:
    return f"{type(error).__name__}: {error}"
