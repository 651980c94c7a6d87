"""Telemetry collectors and the PluginManager that owns them.

Collectors attach to one shared debugging session:
- NetworkCollector: request/response pairs (Network domain)
- TracingCollector: screenshot filmstrips (Tracing domain)
- PerformanceCollector: on-demand counters (Performance domain)
"""

from journeyscope.application.collectors.manager import PluginManager, parse_collector_type
from journeyscope.application.collectors.network import NetworkCollector
from journeyscope.application.collectors.performance import PerformanceCollector
from journeyscope.application.collectors.tracing import (
    MAX_FILMSTRIPS,
    TracingCollector,
    decode_filmstrips,
    filter_filmstrips,
)

__all__ = [
    # Constants
    "MAX_FILMSTRIPS",
    # Manager
    "PluginManager",
    "parse_collector_type",
    # Collectors
    "NetworkCollector",
    "PerformanceCollector",
    "TracingCollector",
    # Filmstrips
    "decode_filmstrips",
    "filter_filmstrips",
]
