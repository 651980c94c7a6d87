"""Host-provided browser handles.

Structural types only. Shapes match Playwright's async CDPSession and Page,
so the real objects can be passed directly. Nothing here is reimplemented.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class DebugSession(Protocol):
    """One browser debugging (CDP) session, shared by all collectors.

    Collectors only append listeners and enable their own domain.
    They never close or detach the session.
    """

    async def send(self, method: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """Send a protocol command and return its result."""
        ...

    def on(self, event: str, f: Callable[[dict[str, Any]], Any]) -> Any:
        """Register listener for a protocol event."""
        ...


class Page(Protocol):
    """Browser page a journey drives."""

    @property
    def url(self) -> str:
        """Current page URL."""
        ...

    async def screenshot(self) -> bytes:
        """Capture PNG screenshot of the viewport."""
        ...
