"""Tests for PerformanceCollector."""

from __future__ import annotations

import asyncio
import logging

import pytest

from journeyscope.application.collectors.performance import PerformanceCollector
from journeyscope.domain.exceptions import CollectorStateError
from journeyscope.domain.telemetry import CollectorType
from tests.factories import FakeSession

METRICS_RESPONSE = {
    "metrics": [
        {"name": "Nodes", "value": 120},
        {"name": "JSHeapUsedSize", "value": 2048.0},
        {"name": "LayoutCount", "value": 3},
    ]
}


class TestPerformanceCollector:
    """Tests for PerformanceCollector."""

    def test_start_is_synchronous_and_enables(self) -> None:
        session = FakeSession(responses={"Performance.getMetrics": METRICS_RESPONSE})

        async def scenario() -> dict[str, float]:
            collector = PerformanceCollector(session)
            collector.start()
            assert collector.is_started
            return await collector.get_metrics()

        metrics = asyncio.run(scenario())

        assert session.sent_methods == ["Performance.enable", "Performance.getMetrics"]
        assert metrics == {"Nodes": 120, "JSHeapUsedSize": 2048.0, "LayoutCount": 3}

    def test_metric_names_filter(self) -> None:
        session = FakeSession(responses={"Performance.getMetrics": METRICS_RESPONSE})

        async def scenario() -> dict[str, float]:
            collector = PerformanceCollector(session, metric_names=["Nodes"])
            collector.start()
            return await collector.get_metrics()

        assert asyncio.run(scenario()) == {"Nodes": 120}

    def test_start_requires_running_loop(self) -> None:
        with pytest.raises(RuntimeError):
            PerformanceCollector(FakeSession()).start()

    def test_get_metrics_before_start_raises(self) -> None:
        collector = PerformanceCollector(FakeSession())
        with pytest.raises(CollectorStateError, match="not started"):
            asyncio.run(collector.get_metrics())

    def test_get_metrics_after_stop_raises(self) -> None:
        async def scenario() -> None:
            collector = PerformanceCollector(FakeSession())
            collector.start()
            collector.stop()
            await collector.get_metrics()

        with pytest.raises(CollectorStateError, match="already stopped"):
            asyncio.run(scenario())

    def test_enable_failure_surfaces_on_get_metrics(self, caplog: pytest.LogCaptureFixture) -> None:
        session = FakeSession(fail_on={"Performance.enable": ConnectionError("detached")})

        async def scenario() -> None:
            collector = PerformanceCollector(session)
            collector.start()
            await collector.get_metrics()

        with caplog.at_level(logging.WARNING), pytest.raises(ConnectionError):
            asyncio.run(scenario())
        assert any("Performance.enable failed" in r.getMessage() for r in caplog.records)

    def test_collector_type(self) -> None:
        assert PerformanceCollector(FakeSession()).collector_type is CollectorType.PERFORMANCE
