"""Domain layer: telemetry value objects produced by collectors.

All objects frozen. CollectorOutput is the only shape PluginManager
guarantees to its caller.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class CollectorType(Enum):
    """Closed set of collector variants. Used as PluginManager registry key."""

    NETWORK = "network"
    TRACE = "trace"
    PERFORMANCE = "performance"


@dataclass(frozen=True, slots=True)
class NetworkInfo:
    """One captured request/response pair.

    request/response hold the raw protocol payloads (response is None
    when the request never got one before stop()).
    """

    request: Mapping[str, object]
    response: Mapping[str, object] | None = None
    is_navigation_request: bool = False
    url: str = ""
    method: str = "GET"
    resource_type: str | None = None
    request_sent_time: float | None = None
    loader_id: str | None = None

    def __post_init__(self) -> None:
        """Freeze payload mappings."""
        object.__setattr__(self, "request", MappingProxyType(dict(self.request)))
        if self.response is not None:
            object.__setattr__(self, "response", MappingProxyType(dict(self.response)))


@dataclass(frozen=True, slots=True)
class FilmStrip:
    """One visual snapshot from the trace.

    Attributes:
        snapshot: Base64-encoded image payload.
        name: Trace event name (e.g. "Screenshot").
        ts: Trace timestamp in microseconds.
    """

    snapshot: str
    name: str
    ts: float


@dataclass(frozen=True, slots=True)
class CollectorOutput:
    """Merged collector output.

    Absent collectors contribute an empty tuple, never None.
    """

    filmstrips: tuple[FilmStrip, ...] = field(default=())
    networkinfo: tuple[NetworkInfo, ...] = field(default=())

    @classmethod
    def empty(cls) -> CollectorOutput:
        """Create output with no telemetry."""
        return cls()
