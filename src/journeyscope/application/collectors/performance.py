"""Performance collector: on-demand counters from the CDP Performance domain.

Not part of CollectorOutput. Callers query it through
PluginManager.get(CollectorType.PERFORMANCE) while the journey runs.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from journeyscope.domain.exceptions import CollectorStateError
from journeyscope.domain.telemetry import CollectorType

if TYPE_CHECKING:
    from collections.abc import Iterable

    from journeyscope.domain.ports.session import DebugSession

logger = logging.getLogger(__name__)


class PerformanceCollector:
    """Samples performance counters on request.

    start() is synchronous: it schedules Performance.enable on the
    running loop. The first get_metrics() awaits that enable, so an
    enable failure surfaces there.

    Lifecycle:
        perf = PerformanceCollector(session)
        perf.start()
        metrics = await perf.get_metrics()
        perf.stop()
    """

    def __init__(
        self,
        session: DebugSession,
        metric_names: Iterable[str] | None = None,
    ) -> None:
        """Initialize collector bound to session.

        Args:
            session: Shared debugging session.
            metric_names: Restrict get_metrics() to these counters. None = all.
        """
        self._session = session
        self._metric_names = frozenset(metric_names) if metric_names is not None else None
        self._enabled: asyncio.Task[object] | None = None
        self._stopped = False

    @property
    def collector_type(self) -> CollectorType:
        """Variant of this collector."""
        return CollectorType.PERFORMANCE

    @property
    def is_started(self) -> bool:
        """Check if collector is currently attached."""
        return self._enabled is not None and not self._stopped

    def start(self) -> None:
        """Enable the Performance domain. Must run inside an event loop.

        Raises:
            CollectorStateError: Already started.
            RuntimeError: No running event loop.
        """
        if self._enabled is not None:
            raise CollectorStateError(CollectorType.PERFORMANCE.value, "already started")
        self._enabled = asyncio.get_running_loop().create_task(
            self._session.send("Performance.enable")
        )
        self._enabled.add_done_callback(_log_enable_failure)
        logger.debug("performance collector attached")

    async def get_metrics(self) -> dict[str, float]:
        """Current counters as name → value.

        Raises:
            CollectorStateError: Not started or already stopped.
        """
        if self._enabled is None:
            raise CollectorStateError(CollectorType.PERFORMANCE.value, "not started")
        if self._stopped:
            raise CollectorStateError(CollectorType.PERFORMANCE.value, "already stopped")

        await self._enabled
        result = await self._session.send("Performance.getMetrics")
        metrics: dict[str, float] = {}
        for metric in result.get("metrics") or ():
            name = metric["name"]
            if self._metric_names is None or name in self._metric_names:
                metrics[name] = metric["value"]
        return metrics

    def stop(self) -> None:
        """Mark collector stopped. Leaves the session domain enabled."""
        self._stopped = True
        logger.debug("performance collector stopped")


def _log_enable_failure(task: asyncio.Task[object]) -> None:
    """Report enable failure even if get_metrics() is never called."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning("Performance.enable failed: %s", exc)
