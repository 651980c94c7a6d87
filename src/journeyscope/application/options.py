"""Run configuration.

Immutable. Loading from files or command line is the host's concern.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from journeyscope.application.collectors.tracing import DEFAULT_STOP_TIMEOUT, MAX_FILMSTRIPS
from journeyscope.domain.exceptions import InvalidFilmstripLimitError
from journeyscope.domain.telemetry import CollectorType

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class RunOptions:
    """Options for JourneyExecutor.

    Attributes:
        screenshots: Capture a screenshot after every step.
        network: Capture network requests (journey/end networkinfo).
        filmstrips: Capture trace filmstrips (journey/end filmstrips).
        metrics: Sample performance counters after every step.
        params: Run-level params, merged under each journey's own params.
        max_filmstrips: Upper bound on filmstrips per journey.
        trace_timeout: Seconds to wait for the trace buffer on stop.
    """

    screenshots: bool = False
    network: bool = False
    filmstrips: bool = False
    metrics: bool = False
    params: Mapping[str, object] = field(default_factory=dict)
    max_filmstrips: int = MAX_FILMSTRIPS
    trace_timeout: float = DEFAULT_STOP_TIMEOUT

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_filmstrips < 2:
            raise InvalidFilmstripLimitError(self.max_filmstrips)
        if self.trace_timeout <= 0:
            raise ValueError(f"trace_timeout must be > 0, got {self.trace_timeout}")
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    @property
    def collectors(self) -> tuple[CollectorType, ...]:
        """Collector types these options require, in start order."""
        selected: list[CollectorType] = []
        if self.network:
            selected.append(CollectorType.NETWORK)
        if self.filmstrips:
            selected.append(CollectorType.TRACE)
        if self.metrics:
            selected.append(CollectorType.PERFORMANCE)
        return tuple(selected)
