"""journeyscope - journey instrumentation and structured reporting for synthetic monitoring."""

__version__ = "0.1.0"

from journeyscope.application.collectors import (
    NetworkCollector,
    PerformanceCollector,
    PluginManager,
    TracingCollector,
    filter_filmstrips,
)
from journeyscope.application.executor import JourneyContext, JourneyExecutor, RunResult
from journeyscope.application.options import RunOptions
from journeyscope.application.reporters import (
    ConsoleReporter,
    JSONReporter,
    build_reporter,
    read_records,
)
from journeyscope.application.runner import Runner
from journeyscope.domain.events import (
    EndEvent,
    EventKind,
    JourneyEndEvent,
    JourneyStartEvent,
    StepEndEvent,
)
from journeyscope.domain.journey import Journey, Status, Step, journey, step
from journeyscope.domain.telemetry import CollectorOutput, CollectorType, FilmStrip, NetworkInfo
from journeyscope.infrastructure.helpers import format_error

__all__ = [
    "CollectorOutput",
    "CollectorType",
    "ConsoleReporter",
    "EndEvent",
    "EventKind",
    "FilmStrip",
    "JSONReporter",
    "Journey",
    "JourneyContext",
    "JourneyEndEvent",
    "JourneyExecutor",
    "JourneyStartEvent",
    "NetworkCollector",
    "NetworkInfo",
    "PerformanceCollector",
    "PluginManager",
    "RunOptions",
    "RunResult",
    "Runner",
    "Status",
    "Step",
    "StepEndEvent",
    "TracingCollector",
    "__version__",
    "build_reporter",
    "filter_filmstrips",
    "format_error",
    "journey",
    "read_records",
    "step",
]
