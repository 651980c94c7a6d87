"""Tracing collector: protocol-level trace capture and filmstrip decoding.

Raw screenshot frame rate is far higher than reporting needs.
filter_filmstrips() bounds what reaches the output stream.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import TYPE_CHECKING, Any

from journeyscope.domain.exceptions import CollectorStateError, InvalidFilmstripLimitError
from journeyscope.domain.telemetry import CollectorType, FilmStrip

if TYPE_CHECKING:
    from collections.abc import Sequence

    from journeyscope.domain.ports.session import DebugSession

logger = logging.getLogger(__name__)

DATA_COLLECTED = "Tracing.dataCollected"
TRACING_COMPLETE = "Tracing.tracingComplete"

SCREENSHOT_CATEGORY = "disabled-by-default-devtools.screenshot"
SCREENSHOT_EVENT = "Screenshot"
TRACE_CATEGORIES = (
    "-*",
    "devtools.timeline",
    "disabled-by-default-devtools.timeline",
    "disabled-by-default-devtools.timeline.frame",
    SCREENSHOT_CATEGORY,
)

MAX_FILMSTRIPS = 50
DEFAULT_STOP_TIMEOUT = 30.0


class TracingCollector:
    """Captures trace events and decodes screenshot frames into filmstrips.

    Lifecycle:
        tracing = TracingCollector()
        await tracing.start(session)
        ...
        frames = await tracing.stop(session)
        filmstrips = filter_filmstrips(frames)
    """

    def __init__(self) -> None:
        """Initialize idle collector."""
        self._events: list[dict[str, Any]] = []
        self._complete: asyncio.Future[None] | None = None
        self._started = False
        self._stopped = False

    @property
    def collector_type(self) -> CollectorType:
        """Variant of this collector."""
        return CollectorType.TRACE

    @property
    def is_started(self) -> bool:
        """Check if collector is currently attached."""
        return self._started and not self._stopped

    async def start(self, session: DebugSession) -> None:
        """Register Tracing listeners and start capture.

        Raises:
            CollectorStateError: Already started.
        """
        if self._started:
            raise CollectorStateError(CollectorType.TRACE.value, "already started")
        self._started = True
        session.on(DATA_COLLECTED, self._on_data)
        session.on(TRACING_COMPLETE, self._on_complete)
        await session.send(
            "Tracing.start",
            {"categories": ",".join(TRACE_CATEGORIES), "transferMode": "ReportEvents"},
        )
        logger.debug("tracing collector attached")

    async def stop(
        self,
        session: DebugSession,
        timeout: float = DEFAULT_STOP_TIMEOUT,
    ) -> tuple[FilmStrip, ...]:
        """End capture, wait for the buffer to flush, decode frames.

        Returns:
            Every screenshot frame, sorted by ts (unfiltered).

        Raises:
            CollectorStateError: Not started or already stopped.
            TimeoutError: tracingComplete not received within timeout.
        """
        if not self._started:
            raise CollectorStateError(CollectorType.TRACE.value, "not started")
        if self._stopped:
            raise CollectorStateError(CollectorType.TRACE.value, "already stopped")

        self._complete = asyncio.get_running_loop().create_future()
        try:
            await session.send("Tracing.end")
            await asyncio.wait_for(self._complete, timeout)
        finally:
            # One-shot even when the flush never completes
            self._stopped = True

        frames = decode_filmstrips(self._events)
        self._events.clear()
        logger.debug("tracing collector stopped with %d frames", len(frames))
        return frames

    def _on_data(self, params: dict[str, Any]) -> None:
        if self._stopped:
            return
        self._events.extend(params.get("value") or ())

    def _on_complete(self, _params: dict[str, Any]) -> None:
        if self._complete is not None and not self._complete.done():
            self._complete.set_result(None)


def decode_filmstrips(events: Sequence[dict[str, Any]]) -> tuple[FilmStrip, ...]:
    """Extract screenshot frames from raw trace events, sorted by ts.

    Binary snapshot payloads are base64-encoded; text payloads are
    already base64 and kept as-is.
    """
    frames: list[FilmStrip] = []
    for event in events:
        if event.get("name") != SCREENSHOT_EVENT or event.get("cat") != SCREENSHOT_CATEGORY:
            continue
        snapshot = (event.get("args") or {}).get("snapshot")
        if snapshot is None:
            continue
        if isinstance(snapshot, (bytes, bytearray)):
            snapshot = base64.b64encode(snapshot).decode("ascii")
        frames.append(FilmStrip(snapshot=str(snapshot), name=SCREENSHOT_EVENT, ts=event["ts"]))

    frames.sort(key=lambda frame: frame.ts)
    return tuple(frames)


def filter_filmstrips(
    frames: Sequence[FilmStrip],
    max_frames: int = MAX_FILMSTRIPS,
) -> tuple[FilmStrip, ...]:
    """Reduce frames to an evenly spaced subset of at most max_frames.

    Frames are kept when at least (last.ts - first.ts) / (max_frames - 1)
    after the previously kept one. First and last frame always kept.
    Consecutive kept gaps >= delta bound the count to max_frames.

    Args:
        frames: Frames sorted by ts.
        max_frames: Upper bound on result length.

    Raises:
        InvalidFilmstripLimitError: max_frames < 2.
    """
    if max_frames < 2:
        raise InvalidFilmstripLimitError(max_frames)
    if len(frames) <= max_frames:
        return tuple(frames)

    first, last = frames[0], frames[-1]
    delta = (last.ts - first.ts) / (max_frames - 1)
    if delta <= 0:
        # All frames share one timestamp: fall back to even index spacing
        step = (len(frames) - 1) / (max_frames - 1)
        return tuple(frames[round(i * step)] for i in range(max_frames))

    kept = [first]
    for frame in frames[1:-1]:
        if frame.ts - kept[-1].ts >= delta:
            kept.append(frame)

    # Middle frame tying with last can fill the bound: make room for last
    del kept[max_frames - 1 :]
    kept.append(last)
    return tuple(kept)
