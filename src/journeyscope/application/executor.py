"""JourneyExecutor: drives journeys and emits their lifecycle on a Runner.

Per journey:
    journey:start
    → start collectors (concurrently, all attached before the first step)
    → journey callback, then steps in order, one step:end each
    → await PluginManager.output()   (single suspension point)
    → journey:end enriched with filmstrips/networkinfo
After all journeys: exactly one end.

Step and journey failures become status=failed plus error on the event.
They are never raised through the runner.
"""

from __future__ import annotations

import base64
import inspect
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from journeyscope.application.collectors.manager import PluginManager
from journeyscope.application.options import RunOptions
from journeyscope.domain.events import EndEvent, JourneyEndEvent, JourneyStartEvent, StepEndEvent
from journeyscope.domain.exceptions import (
    CollectorAttachError,
    CollectorStopError,
    JourneyStateError,
)
from journeyscope.domain.journey import Status
from journeyscope.domain.telemetry import CollectorOutput, CollectorType
from journeyscope.infrastructure import helpers

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from journeyscope.application.runner import Runner
    from journeyscope.domain.journey import Callback, Journey, Step
    from journeyscope.domain.ports.session import DebugSession, Page

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JourneyContext:
    """Argument passed to journey and step callbacks.

    Attributes:
        params: Effective params (run params overridden by journey params).
        page: Browser page, if the host supplied one.
        session: Debugging session, if the host supplied one.
    """

    params: Mapping[str, object]
    page: Page | None = None
    session: DebugSession | None = None


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of Runner-driven execution: journey name → status."""

    journeys: Mapping[str, Status] = field(default_factory=dict)

    @property
    def passed(self) -> bool:
        """True when no journey failed."""
        return all(status is not Status.FAILED for status in self.journeys.values())


class JourneyExecutor:
    """Runs journeys against one page/session and emits runner events.

    Collectors are only started when a session is supplied. A fresh
    PluginManager is used per journey (collectors are one-shot).

    Example:
        runner = Runner()
        JSONReporter(runner, stream)
        executor = JourneyExecutor(runner, page=page, session=cdp,
                                   options=RunOptions(network=True))
        result = await executor.run([checkout])
    """

    def __init__(
        self,
        runner: Runner,
        *,
        page: Page | None = None,
        session: DebugSession | None = None,
        options: RunOptions | None = None,
    ) -> None:
        """Initialize executor.

        Args:
            runner: Event hub to emit on.
            page: Browser page for step url/screenshot.
            session: Debugging session for collectors.
            options: Run options. Uses defaults if None.
        """
        self._runner = runner
        self._page = page
        self._session = session
        self._options = options or RunOptions()

    async def run(self, journeys: Iterable[Journey]) -> RunResult:
        """Run journeys sequentially, then emit end once."""
        statuses: dict[str, Status] = {}
        try:
            for journey in journeys:
                statuses[journey.name] = await self.run_journey(journey)
        finally:
            self._runner.emit(EndEvent(timestamp=helpers.get_timestamp()))
        return RunResult(journeys=MappingProxyType(statuses))

    async def run_journey(self, journey: Journey) -> Status:
        """Run one journey. Returns its final status.

        Raises:
            JourneyStateError: Journey already ran.
        """
        if journey.completed:
            raise JourneyStateError(journey.name)

        params = MappingProxyType({**self._options.params, **journey.params})
        context = JourneyContext(params=params, page=self._page, session=self._session)

        journey_start = helpers.monotonic_now()
        self._runner.emit(
            JourneyStartEvent(journey=journey, params=params, timestamp=helpers.get_timestamp())
        )
        logger.debug("journey %r started", journey.name)

        manager = await self._start_collectors()

        error: BaseException | None = None
        failed = False
        try:
            if journey.callback is not None:
                error = await _invoke(journey.callback, context)

            failed = error is not None
            for step in journey.steps:
                if failed:
                    self._skip_step(journey, step)
                    continue
                if await self._run_step(journey, step, context, manager) is Status.FAILED:
                    failed = True
        except BaseException as exc:
            # Internal failure: journey still closed, then the error propagates
            logger.error("journey %r aborted: %s", journey.name, exc)
            error = exc
            failed = True
            raise
        finally:
            status = Status.FAILED if failed else Status.SUCCEEDED
            await self._finish_journey(journey, params, status, journey_start, manager, error)
        return status

    async def _finish_journey(
        self,
        journey: Journey,
        params: Mapping[str, object],
        status: Status,
        start: float,
        manager: PluginManager | None,
        error: BaseException | None,
    ) -> None:
        """Join collectors once, then emit journey:end."""
        output = await self._collect_output(manager)

        end = helpers.monotonic_now()
        journey.complete(status, start, end, error=error)
        self._runner.emit(
            JourneyEndEvent(
                journey=journey,
                params=params,
                status=status,
                start=start,
                end=end,
                timestamp=helpers.get_timestamp(),
                filmstrips=output.filmstrips,
                networkinfo=output.networkinfo,
                error=error,
            )
        )
        logger.debug("journey %r %s", journey.name, status.value)

    async def _start_collectors(self) -> PluginManager | None:
        """Attach collectors required by options. Attach failures skip that telemetry."""
        if self._session is None or not self._options.collectors:
            return None

        manager = PluginManager(
            self._session,
            max_filmstrips=self._options.max_filmstrips,
            trace_timeout=self._options.trace_timeout,
        )
        try:
            await manager.start_many(*self._options.collectors)
        except CollectorAttachError as exc:
            logger.warning("continuing without telemetry: %s", exc, exc_info=exc)
        return manager

    async def _collect_output(self, manager: PluginManager | None) -> CollectorOutput:
        """Join collectors. Stop failure → journey still reported, without telemetry."""
        if manager is None:
            return CollectorOutput.empty()
        try:
            return await manager.output()
        except CollectorStopError as exc:
            logger.warning("journey reported without telemetry: %s", exc, exc_info=exc)
            return CollectorOutput.empty()

    async def _run_step(
        self,
        journey: Journey,
        step: Step,
        context: JourneyContext,
        manager: PluginManager | None,
    ) -> Status:
        start = helpers.monotonic_now()
        error = await _invoke(step.callback, context)
        end = helpers.monotonic_now()
        status = Status.FAILED if error is not None else Status.SUCCEEDED

        url = self._page.url if self._page is not None else None
        screenshot = await self._screenshot() if self._options.screenshots else None
        metrics = await _sample_metrics(manager)

        step.complete(status, start, end, screenshot=screenshot, url=url, error=error)
        self._runner.emit(
            StepEndEvent(
                journey=journey,
                step=step,
                status=status,
                start=start,
                end=end,
                timestamp=helpers.get_timestamp(),
                screenshot=screenshot,
                url=url,
                error=error,
                metrics=metrics,
            )
        )
        return status

    def _skip_step(self, journey: Journey, step: Step) -> None:
        now = helpers.monotonic_now()
        step.complete(Status.SKIPPED, now, now)
        self._runner.emit(
            StepEndEvent(
                journey=journey,
                step=step,
                status=Status.SKIPPED,
                start=now,
                end=now,
                timestamp=helpers.get_timestamp(),
            )
        )

    async def _screenshot(self) -> str | None:
        """Base64 PNG of the page. A failed capture does not fail the step."""
        if self._page is None:
            return None
        try:
            data = await self._page.screenshot()
        except Exception as exc:  # noqa: BLE001
            logger.warning("screenshot failed: %s", exc)
            return None
        return base64.b64encode(data).decode("ascii")


async def _invoke(callback: Callback, context: Any) -> BaseException | None:
    """Call sync or async callback. Returns the exception instead of raising."""
    try:
        result = callback(context)
        if inspect.isawaitable(result):
            await result
    # BLE001: step failures are data (status=failed), not control flow.
    except Exception as exc:  # noqa: BLE001
        return exc
    return None


async def _sample_metrics(manager: PluginManager | None) -> dict[str, float] | None:
    """Current performance counters, or None when not collected."""
    if manager is None:
        return None
    performance = manager.get(CollectorType.PERFORMANCE)
    if performance is None:
        return None
    try:
        return await performance.get_metrics()
    except Exception as exc:  # noqa: BLE001
        logger.warning("performance metrics unavailable: %s", exc)
        return None
