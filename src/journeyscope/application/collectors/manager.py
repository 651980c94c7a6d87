"""PluginManager: active collectors for one debugging session.

Hides collector heterogeneity behind start(type) / get(type) / output().
Single session, single journey: starting the same type twice stops and
replaces the previous registration. The caller must not run two journeys
on one manager at once.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Literal, TypeAlias, overload

from journeyscope.application.collectors.network import NetworkCollector
from journeyscope.application.collectors.performance import PerformanceCollector
from journeyscope.application.collectors.tracing import (
    DEFAULT_STOP_TIMEOUT,
    MAX_FILMSTRIPS,
    TracingCollector,
    filter_filmstrips,
)
from journeyscope.domain.exceptions import (
    CollectorAttachError,
    CollectorStopError,
    UnknownCollectorError,
)
from journeyscope.domain.telemetry import CollectorOutput, CollectorType

if TYPE_CHECKING:
    from journeyscope.domain.ports.session import DebugSession
    from journeyscope.domain.telemetry import FilmStrip, NetworkInfo

logger = logging.getLogger(__name__)

Collector: TypeAlias = NetworkCollector | TracingCollector | PerformanceCollector


def parse_collector_type(value: CollectorType | str) -> CollectorType:
    """Accept a CollectorType or its string value.

    Raises:
        UnknownCollectorError: Not one of network, trace, performance.
    """
    if isinstance(value, CollectorType):
        return value
    try:
        return CollectorType(value)
    except ValueError:
        raise UnknownCollectorError(value) from None


class PluginManager:
    """Single source of truth for the collectors attached to one session.

    Example:
        manager = PluginManager(session)
        await manager.start_many("network", "trace")
        ...  # run journey
        output = await manager.output()
    """

    def __init__(
        self,
        session: DebugSession,
        *,
        max_filmstrips: int = MAX_FILMSTRIPS,
        trace_timeout: float = DEFAULT_STOP_TIMEOUT,
    ) -> None:
        """Initialize with no active collectors.

        Args:
            session: Debugging session shared by every collector.
            max_filmstrips: Upper bound on filmstrips in output().
            trace_timeout: Seconds to wait for the trace buffer on stop.
        """
        self._session = session
        self._max_filmstrips = max_filmstrips
        self._trace_timeout = trace_timeout
        self._collectors: dict[CollectorType, Collector] = {}

    @property
    def active(self) -> tuple[CollectorType, ...]:
        """Registered collector types, in start order."""
        return tuple(self._collectors)

    @overload
    async def start(self, type: Literal[CollectorType.NETWORK, "network"]) -> NetworkCollector: ...
    @overload
    async def start(self, type: Literal[CollectorType.TRACE, "trace"]) -> TracingCollector: ...
    @overload
    async def start(
        self, type: Literal[CollectorType.PERFORMANCE, "performance"]
    ) -> PerformanceCollector: ...
    @overload
    async def start(self, type: CollectorType | str) -> Collector: ...

    async def start(self, type: CollectorType | str) -> Collector:  # noqa: A002
        """Build, attach and register one collector.

        Returns:
            The attached collector.

        Raises:
            UnknownCollectorError: Unknown type.
            CollectorAttachError: Attach failed; nothing registered.
        """
        collector_type = parse_collector_type(type)
        previous = self._collectors.pop(collector_type, None)
        if previous is not None:
            logger.warning(
                "%s collector restarted, previous instance stopped", collector_type.value
            )
            await self._retire(previous)

        instance: Collector
        try:
            match collector_type:
                case CollectorType.NETWORK:
                    instance = NetworkCollector()
                    await instance.start(self._session)
                case CollectorType.TRACE:
                    instance = TracingCollector()
                    await instance.start(self._session)
                case CollectorType.PERFORMANCE:
                    instance = PerformanceCollector(self._session)
                    instance.start()
        except Exception as exc:
            raise CollectorAttachError(collector_type.value, exc) from exc

        self._collectors[collector_type] = instance
        return instance

    async def _retire(self, collector: Collector) -> None:
        """Stop a replaced collector, discarding its data."""
        try:
            match collector:
                case TracingCollector():
                    await collector.stop(self._session, self._trace_timeout)
                case NetworkCollector() | PerformanceCollector():
                    collector.stop()
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "replaced %s collector failed to stop: %s", collector.collector_type.value, exc
            )

    async def start_many(self, *types: CollectorType | str) -> tuple[Collector, ...]:
        """Start several collectors concurrently (independent protocol domains).

        All must attach before this returns. First attach failure is raised
        after every start call has settled.

        Raises:
            UnknownCollectorError: Unknown type (nothing started).
            CollectorAttachError: At least one attach failed.
        """
        parsed = [parse_collector_type(t) for t in types]
        results = await asyncio.gather(*(self.start(t) for t in parsed), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return tuple(results)  # type: ignore[arg-type]

    @overload
    def get(self, type: Literal[CollectorType.NETWORK]) -> NetworkCollector | None: ...
    @overload
    def get(self, type: Literal[CollectorType.TRACE]) -> TracingCollector | None: ...
    @overload
    def get(self, type: Literal[CollectorType.PERFORMANCE]) -> PerformanceCollector | None: ...
    @overload
    def get(self, type: CollectorType | str) -> Collector | None: ...

    def get(self, type: CollectorType | str) -> Collector | None:  # noqa: A002
        """Look up a started collector. None if never started."""
        return self._collectors.get(parse_collector_type(type))

    async def output(self) -> CollectorOutput:
        """Stop network and tracing collectors, merge their results.

        All-or-nothing: the first stop failure propagates, no partial
        output. Performance collectors contribute no field.

        Raises:
            CollectorStopError: A collector failed to stop or decode.
        """
        filmstrips: tuple[FilmStrip, ...] = ()
        networkinfo: tuple[NetworkInfo, ...] = ()

        for collector_type, collector in self._collectors.items():
            try:
                match collector:
                    case NetworkCollector():
                        networkinfo = collector.stop()
                    case TracingCollector():
                        frames = await collector.stop(self._session, self._trace_timeout)
                        filmstrips = filter_filmstrips(frames, self._max_filmstrips)
                    case PerformanceCollector():
                        continue
            except Exception as exc:
                raise CollectorStopError(collector_type.value, exc) from exc

        return CollectorOutput(filmstrips=filmstrips, networkinfo=networkinfo)
