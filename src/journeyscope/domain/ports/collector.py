"""Collector protocol for per-run telemetry.

Collectors attach to one shared DebugSession, accumulate telemetry
asynchronously, and return their typed result on stop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from journeyscope.domain.telemetry import CollectorType


@runtime_checkable
class CollectorProtocol(Protocol):
    """Contract shared by all collector variants.

    Lifecycle:
    1. start(...) - attach (register listeners, enable domain)
    2. ... journey runs ...
    3. stop(...) - detach and return accumulated data

    start/stop signatures differ per variant (sync or async, with or
    without the session); PluginManager knows each variant explicitly.
    Collectors are one-shot: create a fresh instance per run.

    Example:
        network = NetworkCollector()
        await network.start(session)
        try:
            ...  # run journey
        finally:
            requests = network.stop()
    """

    @property
    def collector_type(self) -> CollectorType:
        """Variant of this collector."""
        ...

    @property
    def is_started(self) -> bool:
        """Check if collector is currently attached."""
        ...
