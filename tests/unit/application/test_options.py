"""Tests for application/options.py."""

import dataclasses

import pytest

from journeyscope.application.options import RunOptions
from journeyscope.domain.exceptions import InvalidFilmstripLimitError
from journeyscope.domain.telemetry import CollectorType


class TestRunOptions:
    """Tests for RunOptions."""

    def test_default_values(self) -> None:
        options = RunOptions()
        assert options.screenshots is False
        assert options.network is False
        assert options.filmstrips is False
        assert options.metrics is False
        assert dict(options.params) == {}
        assert options.max_filmstrips == 50
        assert options.collectors == ()

    def test_collectors_follow_flags(self) -> None:
        options = RunOptions(network=True, filmstrips=True, metrics=True)
        assert options.collectors == (
            CollectorType.NETWORK,
            CollectorType.TRACE,
            CollectorType.PERFORMANCE,
        )

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            RunOptions().network = True  # type: ignore[misc]

    def test_params_copied(self) -> None:
        params = {"env": "prod"}
        options = RunOptions(params=params)
        params["env"] = "dev"
        assert options.params["env"] == "prod"

    def test_invalid_filmstrip_limit(self) -> None:
        with pytest.raises(InvalidFilmstripLimitError):
            RunOptions(max_filmstrips=1)

    def test_invalid_trace_timeout(self) -> None:
        with pytest.raises(ValueError, match="trace_timeout"):
            RunOptions(trace_timeout=0)
