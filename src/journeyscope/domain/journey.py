"""Domain layer: journeys and their steps.

A Journey owns an ordered sequence of Steps. Step names are unique
within one journey only. Result fields (status, timings, error) are set
exactly once, via complete(), when the terminal event is emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from journeyscope.domain.exceptions import (
    DuplicateStepError,
    InvalidTimingError,
    JourneyStateError,
    StepAttachedError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from typing import TypeAlias

    Callback: TypeAlias = Callable[[Any], Awaitable[None] | None]


class Status(Enum):
    """Lifecycle status of a journey or step."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


def _check_timing(start: float, end: float) -> None:
    if start > end:
        raise InvalidTimingError(start, end)


@dataclass(slots=True, eq=False)
class Step:
    """One discrete action within a Journey.

    Identity is (journey, name). index is 1-based, assigned on registration.
    """

    name: str
    callback: Callback
    index: int = 0
    status: Status | None = None
    start: float | None = None
    end: float | None = None
    screenshot: str | None = None
    url: str | None = None
    error: BaseException | None = None

    @property
    def completed(self) -> bool:
        """Check if result fields were already set."""
        return self.status is not None

    def complete(
        self,
        status: Status,
        start: float,
        end: float,
        *,
        screenshot: str | None = None,
        url: str | None = None,
        error: BaseException | None = None,
    ) -> None:
        """Set result fields. FAIL-FIRST on second call or start > end.

        Raises:
            JourneyStateError: Step already completed.
            InvalidTimingError: start > end.
        """
        if self.completed:
            raise JourneyStateError(self.name)
        _check_timing(start, end)
        self.status = status
        self.start = start
        self.end = end
        self.screenshot = screenshot
        self.url = url
        self.error = error


@dataclass(slots=True, eq=False)
class Journey:
    """One scripted end-to-end browser interaction.

    callback is opaque: invoked once before the steps with the run context,
    it may register further steps via add_step() or the step() decorator.
    """

    name: str
    callback: Callback | None = None
    params: Mapping[str, object] = field(default_factory=dict)
    steps: list[Step] = field(default_factory=list)
    status: Status | None = None
    start: float | None = None
    end: float | None = None
    error: BaseException | None = None

    def __post_init__(self) -> None:
        """Freeze params into a read-only view."""
        self.params = MappingProxyType(dict(self.params))

    @property
    def completed(self) -> bool:
        """Check if result fields were already set."""
        return self.status is not None

    def add_step(self, step: Step) -> Step:
        """Register step at the end of this journey.

        Raises:
            DuplicateStepError: Step name already registered.
            StepAttachedError: Step already added to a journey.
        """
        if step.index != 0:
            raise StepAttachedError(self.name, step.name)
        if any(existing.name == step.name for existing in self.steps):
            raise DuplicateStepError(self.name, step.name)
        step.index = len(self.steps) + 1
        self.steps.append(step)
        return step

    def step(self, name: str) -> Callable[[Callback], Callback]:
        """Decorator: register the decorated callable as a step.

        Example:
            j = Journey("checkout")

            @j.step("open cart")
            async def open_cart(ctx): ...
        """

        def _register(callback: Callback) -> Callback:
            self.add_step(Step(name=name, callback=callback))
            return callback

        return _register

    def complete(
        self,
        status: Status,
        start: float,
        end: float,
        *,
        error: BaseException | None = None,
    ) -> None:
        """Set result fields. FAIL-FIRST on second call or start > end.

        Raises:
            JourneyStateError: Journey already completed.
            InvalidTimingError: start > end.
        """
        if self.completed:
            raise JourneyStateError(self.name)
        _check_timing(start, end)
        self.status = status
        self.start = start
        self.end = end
        self.error = error


def journey(
    name: str,
    callback: Callback | None = None,
    params: Mapping[str, object] | None = None,
) -> Journey:
    """Create a Journey."""
    return Journey(name=name, callback=callback, params=params or {})


def step(name: str, callback: Callback) -> Step:
    """Create a Step not yet attached to a journey."""
    return Step(name=name, callback=callback)
