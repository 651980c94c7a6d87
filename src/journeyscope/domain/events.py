"""Domain layer: immutable runner event payloads.

One payload type per event kind. The kind is derived from the payload
type, so an event can never be emitted under the wrong name.
Timing invariants validated in __post_init__.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, TypeAlias

from journeyscope.domain.exceptions import InvalidTimingError, UnknownEventError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from journeyscope.domain.journey import Journey, Status, Step
    from journeyscope.domain.telemetry import FilmStrip, NetworkInfo


class EventKind(Enum):
    """Runner event kinds, in lifecycle order."""

    JOURNEY_START = "journey:start"
    STEP_END = "step:end"
    JOURNEY_END = "journey:end"
    END = "end"

    @classmethod
    def parse(cls, value: EventKind | str) -> EventKind:
        """Accept an EventKind or its string name.

        Raises:
            UnknownEventError: Not a known event name.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownEventError(value) from None


@dataclass(frozen=True, slots=True)
class JourneyStartEvent:
    """journey:start: journey execution begins."""

    journey: Journey
    params: Mapping[str, object]
    timestamp: int


@dataclass(frozen=True, slots=True)
class StepEndEvent:
    """step:end: one step finished (succeeded, failed or skipped)."""

    journey: Journey
    step: Step
    status: Status
    start: float
    end: float
    timestamp: int
    screenshot: str | None = None
    url: str | None = None
    error: BaseException | None = None
    metrics: Mapping[str, float] | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.start > self.end:
            raise InvalidTimingError(self.start, self.end)


@dataclass(frozen=True, slots=True)
class JourneyEndEvent:
    """journey:end: journey finished, enriched with merged collector output."""

    journey: Journey
    params: Mapping[str, object]
    status: Status
    start: float
    end: float
    timestamp: int
    filmstrips: tuple[FilmStrip, ...] = field(default=())
    networkinfo: tuple[NetworkInfo, ...] = field(default=())
    error: BaseException | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.start > self.end:
            raise InvalidTimingError(self.start, self.end)


@dataclass(frozen=True, slots=True)
class EndEvent:
    """end: terminates the whole run. Emitted exactly once."""

    timestamp: int


RunnerEvent: TypeAlias = JourneyStartEvent | StepEndEvent | JourneyEndEvent | EndEvent


def get_event_kind(event: RunnerEvent) -> EventKind:
    """Get EventKind for event.

    Exhaustive match on RunnerEvent union.
    """
    match event:
        case JourneyStartEvent():
            return EventKind.JOURNEY_START
        case StepEndEvent():
            return EventKind.STEP_END
        case JourneyEndEvent():
            return EventKind.JOURNEY_END
        case EndEvent():
            return EventKind.END
        case _:
            raise UnknownEventError(type(event).__name__)
