"""JSON reporter: runner events → newline-delimited JSON records.

One self-contained record per event, one write() per record, in the
order events arrive. No buffering of its own: ordering and backpressure
come from the sink's sequential writes.

Record schema (type → fields, flattened one level):
    journey/start: journey, params
    step/end:      journey, step, status, screenshot, url, start, end,
                   error, metrics
    journey/end:   journey, params, status, start, end, filmstrips,
                   networkinfo, error
    end:           (type and timestamp only)
Top-level fields whose value is None are omitted.
"""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping
from enum import Enum
from typing import TYPE_CHECKING

from journeyscope.application.reporters._base import BaseReporter
from journeyscope.infrastructure import helpers

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from journeyscope.domain.events import (
        EndEvent,
        JourneyEndEvent,
        JourneyStartEvent,
        StepEndEvent,
    )
    from journeyscope.domain.journey import Journey, Step
    from journeyscope.domain.telemetry import FilmStrip, NetworkInfo


class RecordType(Enum):
    """Record type tag, one per runner event kind."""

    JOURNEY_START = "journey/start"
    STEP_END = "step/end"
    JOURNEY_END = "journey/end"
    END = "end"


class JSONReporter(BaseReporter):
    """Structured-record writer: one JSON object per line.

    Errors are normalized with helpers.format_error() before writing,
    raw exceptions never reach the sink.
    """

    def on_journey_start(self, event: JourneyStartEvent) -> None:
        """Write journey/start record."""
        self._write(
            RecordType.JOURNEY_START,
            event.timestamp,
            journey=_journey_to_dict(event.journey),
            params=dict(event.params),
        )

    def on_step_end(self, event: StepEndEvent) -> None:
        """Write step/end record."""
        self._write(
            RecordType.STEP_END,
            event.timestamp,
            journey=_journey_to_dict(event.journey),
            step=_step_to_dict(event.step),
            status=event.status.value,
            screenshot=event.screenshot,
            url=event.url,
            start=event.start,
            end=event.end,
            error=helpers.format_error(event.error) if event.error is not None else None,
            metrics=dict(event.metrics) if event.metrics is not None else None,
        )

    def on_journey_end(self, event: JourneyEndEvent) -> None:
        """Write journey/end record, including merged collector output."""
        self._write(
            RecordType.JOURNEY_END,
            event.timestamp,
            journey=_journey_to_dict(event.journey),
            params=dict(event.params),
            status=event.status.value,
            start=event.start,
            end=event.end,
            filmstrips=[_filmstrip_to_dict(f) for f in event.filmstrips],
            networkinfo=[_network_info_to_dict(n) for n in event.networkinfo],
            error=helpers.format_error(event.error) if event.error is not None else None,
        )

    def on_end(self, event: EndEvent) -> None:
        """Write end record. Sink stays open."""
        self._write(RecordType.END, event.timestamp)

    def _write(self, record_type: RecordType, timestamp: int, **fields: object) -> None:
        """Serialize one record and write it as a single line."""
        record = build_record(record_type, timestamp, **fields)
        self.stream.write(json.dumps(record, separators=(",", ":"), default=_json_default) + "\n")


def build_record(record_type: RecordType, timestamp: int, **fields: object) -> dict[str, object]:
    """Assemble record dict: type, timestamp, then non-None fields."""
    record: dict[str, object] = {"type": record_type.value, "timestamp": timestamp}
    record.update((key, value) for key, value in fields.items() if value is not None)
    return record


def read_records(lines: Iterable[str]) -> Iterator[dict[str, object]]:
    """Parse a record stream line by line.

    Blank and malformed lines (e.g. a torn final write) are skipped.
    """
    for line in lines:
        if not line.strip():
            continue
        try:
            record = json.loads(line)
        except json.JSONDecodeError:
            continue
        if isinstance(record, dict):
            yield record


def _json_default(value: object) -> object:
    """Fallback encoder for payload values json cannot handle."""
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=str)
    return str(value)


def _journey_to_dict(journey: Journey) -> dict[str, object]:
    """Convert Journey identity to dict."""
    return {"name": journey.name}


def _step_to_dict(step: Step) -> dict[str, object]:
    """Convert Step identity to dict."""
    return {"name": step.name, "index": step.index}


def _filmstrip_to_dict(filmstrip: FilmStrip) -> dict[str, object]:
    """Convert FilmStrip to dict."""
    return {
        "snapshot": filmstrip.snapshot,
        "name": filmstrip.name,
        "ts": filmstrip.ts,
    }


def _network_info_to_dict(info: NetworkInfo) -> dict[str, object]:
    """Convert NetworkInfo to dict. Raw payloads kept as captured, None omitted."""
    fields = {
        "url": info.url,
        "method": info.method,
        "type": info.resource_type,
        "request": dict(info.request),
        "response": dict(info.response) if info.response is not None else None,
        "isNavigationRequest": info.is_navigation_request,
        "requestSentTime": info.request_sent_time,
        "loaderId": info.loader_id,
    }
    return {key: value for key, value in fields.items() if value is not None}
