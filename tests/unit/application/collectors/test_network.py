"""Tests for NetworkCollector."""

from __future__ import annotations

import asyncio

import pytest

from journeyscope.application.collectors.network import NetworkCollector
from journeyscope.domain.exceptions import CollectorStateError
from journeyscope.domain.telemetry import CollectorType
from tests.factories import FakeSession, request_will_be_sent


def _started(session: FakeSession) -> NetworkCollector:
    collector = NetworkCollector()
    asyncio.run(collector.start(session))
    return collector


class TestNetworkLifecycle:
    """start/stop lifecycle."""

    def test_start_enables_domain(self) -> None:
        session = FakeSession()
        collector = _started(session)
        assert session.sent_methods == ["Network.enable"]
        assert collector.is_started
        assert collector.collector_type is CollectorType.NETWORK

    def test_stop_without_start_raises(self) -> None:
        with pytest.raises(CollectorStateError, match="not started"):
            NetworkCollector().stop()

    def test_stop_is_one_shot(self) -> None:
        collector = _started(FakeSession())
        collector.stop()
        with pytest.raises(CollectorStateError, match="already stopped"):
            collector.stop()

    def test_cannot_restart(self) -> None:
        session = FakeSession()
        collector = _started(session)
        collector.stop()
        with pytest.raises(CollectorStateError, match="already started"):
            asyncio.run(collector.start(session))

    def test_enable_failure_propagates(self) -> None:
        session = FakeSession(fail_on={"Network.enable": ConnectionError("gone")})
        with pytest.raises(ConnectionError):
            asyncio.run(NetworkCollector().start(session))


class TestNetworkCapture:
    """Captured entries."""

    def test_capture_order_not_response_order(self) -> None:
        session = FakeSession()
        collector = _started(session)

        session.fire(
            "Network.requestWillBeSent",
            request_will_be_sent("L1", "https://example.test/", loader_id="L1"),
        )
        session.fire(
            "Network.requestWillBeSent",
            request_will_be_sent("R2", "https://example.test/app.js", resource_type="Script"),
        )
        session.fire("Network.responseReceived", {"requestId": "R2", "response": {"status": 200}})
        session.fire("Network.responseReceived", {"requestId": "L1", "response": {"status": 301}})

        entries = collector.stop()

        assert [e.url for e in entries] == ["https://example.test/", "https://example.test/app.js"]
        assert entries[0].response == {"status": 301}
        assert entries[1].response == {"status": 200}

    def test_navigation_request_detection(self) -> None:
        session = FakeSession()
        collector = _started(session)

        session.fire("Network.requestWillBeSent", request_will_be_sent("L1", "https://a/"))
        session.fire(
            "Network.requestWillBeSent",
            request_will_be_sent("R2", "https://a/frame", resource_type="Document"),
        )

        entries = collector.stop()

        assert entries[0].is_navigation_request is True
        # Document but requestId != loaderId: not the navigation itself
        assert entries[1].is_navigation_request is False

    def test_missing_response_kept_as_none(self) -> None:
        session = FakeSession()
        collector = _started(session)
        session.fire("Network.requestWillBeSent", request_will_be_sent("L1", "https://a/"))

        (entry,) = collector.stop()

        assert entry.response is None
        assert entry.method == "GET"
        assert entry.request_sent_time == 1.0

    def test_response_for_unknown_request_ignored(self) -> None:
        session = FakeSession()
        collector = _started(session)
        session.fire("Network.responseReceived", {"requestId": "X", "response": {}})
        assert collector.stop() == ()

    def test_events_after_stop_ignored(self) -> None:
        session = FakeSession()
        collector = _started(session)
        collector.stop()
        session.fire("Network.requestWillBeSent", request_will_be_sent("L1", "https://a/"))
        assert not collector.is_started

    def test_redirect_hops_kept_separately(self) -> None:
        session = FakeSession()
        collector = _started(session)
        session.fire("Network.requestWillBeSent", request_will_be_sent("L1", "http://a/"))
        session.fire(
            "Network.requestWillBeSent",
            request_will_be_sent("L1", "https://a/", redirect_response={"status": 301}),
        )
        session.fire("Network.responseReceived", {"requestId": "L1", "response": {"status": 200}})

        first, second = collector.stop()

        assert first.url == "http://a/"
        assert first.response == {"status": 301}
        assert second.url == "https://a/"
        assert second.response == {"status": 200}
