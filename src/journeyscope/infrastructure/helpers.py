"""Clock and error helpers shared by executor and reporters.

Tests monkeypatch get_timestamp() / monotonic_now() through this module,
so callers must look them up as helpers.<name> at call time.
"""

from __future__ import annotations

import time
import traceback
from collections.abc import Mapping


def get_timestamp() -> int:
    """Wall-clock timestamp in microseconds since the epoch."""
    return time.time_ns() // 1_000


def monotonic_now() -> float:
    """Monotonic clock in seconds, microsecond resolution."""
    return round(time.monotonic(), 6)


def format_error(error: BaseException | Mapping[str, object]) -> dict[str, str]:
    """Normalize an error into a JSON-serializable {name, message, stack}.

    Raw exceptions are not serializable and must never reach the output
    stream. Mappings (already normalized, e.g. replayed from a previous
    record) are reduced to the same three keys.
    """
    if isinstance(error, Mapping):
        return {
            "name": str(error.get("name", "Error")),
            "message": str(error.get("message", "")),
            "stack": str(error.get("stack", "")),
        }
    return {
        "name": type(error).__name__,
        "message": str(error),
        "stack": "".join(traceback.format_exception(error)),
    }
