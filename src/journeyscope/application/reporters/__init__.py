"""Reporters for runner events.

JSONReporter writes the structured record stream (NDJSON).
ConsoleReporter prints human-readable progress with rich.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from journeyscope.application.reporters._base import BaseReporter
from journeyscope.application.reporters.console import ConsoleConfig, ConsoleReporter
from journeyscope.application.reporters.json_reporter import (
    JSONReporter,
    RecordType,
    build_record,
    read_records,
)
from journeyscope.domain.exceptions import UnknownReporterError

if TYPE_CHECKING:
    from journeyscope.application.runner import Runner

REPORTERS: dict[str, type[BaseReporter]] = {
    "default": ConsoleReporter,
    "json": JSONReporter,
}


def build_reporter(name: str, runner: Runner, **kwargs: Any) -> BaseReporter:
    """Create registered reporter by name, subscribed to runner.

    Args:
        name: Registry key ("default" or "json").
        runner: Event source.
        **kwargs: Passed to the reporter (stream, fd, config).

    Raises:
        UnknownReporterError: name not registered.
    """
    try:
        reporter_cls = REPORTERS[name]
    except KeyError:
        raise UnknownReporterError(name) from None
    return reporter_cls(runner, **kwargs)


__all__ = [
    "REPORTERS",
    "BaseReporter",
    "ConsoleConfig",
    "ConsoleReporter",
    "JSONReporter",
    "RecordType",
    "build_reporter",
    "build_record",
    "read_records",
]
