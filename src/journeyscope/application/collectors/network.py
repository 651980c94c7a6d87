"""Network collector: request/response capture over the CDP Network domain."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from journeyscope.domain.exceptions import CollectorStateError
from journeyscope.domain.telemetry import CollectorType, NetworkInfo

if TYPE_CHECKING:
    from journeyscope.domain.ports.session import DebugSession

logger = logging.getLogger(__name__)

REQUEST_WILL_BE_SENT = "Network.requestWillBeSent"
RESPONSE_RECEIVED = "Network.responseReceived"


@dataclass(slots=True)
class _PendingRequest:
    """Mutable capture entry, frozen into NetworkInfo on stop()."""

    request_id: str
    loader_id: str | None
    resource_type: str | None
    request: dict[str, Any]
    request_sent_time: float | None
    response: dict[str, Any] | None = field(default=None)

    def freeze(self) -> NetworkInfo:
        return NetworkInfo(
            request=self.request,
            response=self.response,
            is_navigation_request=(
                self.request_id == self.loader_id and self.resource_type == "Document"
            ),
            url=str(self.request.get("url", "")),
            method=str(self.request.get("method", "GET")),
            resource_type=self.resource_type,
            request_sent_time=self.request_sent_time,
            loader_id=self.loader_id,
        )


class NetworkCollector:
    """Accumulates every request/response observed on the session.

    Order of the result = capture order (order of requestWillBeSent),
    not completion order. A redirect reuses the request id; each hop is
    kept as its own entry.

    One-shot: stop() returns the data and clears state, the instance
    cannot be started again.

    Lifecycle:
        network = NetworkCollector()
        await network.start(session)
        ...
        entries = network.stop()
    """

    def __init__(self) -> None:
        """Initialize idle collector."""
        self._entries: list[_PendingRequest] = []
        # request id → latest entry with that id (redirects replace)
        self._by_id: dict[str, _PendingRequest] = {}
        self._started = False
        self._stopped = False

    @property
    def collector_type(self) -> CollectorType:
        """Variant of this collector."""
        return CollectorType.NETWORK

    @property
    def is_started(self) -> bool:
        """Check if collector is currently attached."""
        return self._started and not self._stopped

    async def start(self, session: DebugSession) -> None:
        """Register Network listeners and enable the domain.

        Raises:
            CollectorStateError: Already started or already stopped.
        """
        if self._started:
            raise CollectorStateError(CollectorType.NETWORK.value, "already started")
        self._started = True
        session.on(REQUEST_WILL_BE_SENT, self._on_request)
        session.on(RESPONSE_RECEIVED, self._on_response)
        await session.send("Network.enable")
        logger.debug("network collector attached")

    def stop(self) -> tuple[NetworkInfo, ...]:
        """Detach and return captured entries in capture order.

        Raises:
            CollectorStateError: Not started or already stopped.
        """
        if not self._started:
            raise CollectorStateError(CollectorType.NETWORK.value, "not started")
        if self._stopped:
            raise CollectorStateError(CollectorType.NETWORK.value, "already stopped")
        self._stopped = True

        result = tuple(entry.freeze() for entry in self._entries)
        self._entries.clear()
        self._by_id.clear()
        logger.debug("network collector stopped with %d entries", len(result))
        return result

    def _on_request(self, params: dict[str, Any]) -> None:
        if not self.is_started:
            return
        request_id = str(params.get("requestId", ""))
        previous = self._by_id.get(request_id)
        redirect_response = params.get("redirectResponse")
        if previous is not None and redirect_response is not None:
            # Response of the previous hop arrives with the next request
            previous.response = dict(redirect_response)
        entry = _PendingRequest(
            request_id=request_id,
            loader_id=params.get("loaderId"),
            resource_type=params.get("type"),
            request=dict(params.get("request") or {}),
            request_sent_time=params.get("timestamp"),
        )
        self._entries.append(entry)
        self._by_id[entry.request_id] = entry

    def _on_response(self, params: dict[str, Any]) -> None:
        if not self.is_started:
            return
        entry = self._by_id.get(str(params.get("requestId", "")))
        if entry is None:
            # Response for a request issued before start()
            return
        entry.response = dict(params.get("response") or {})
