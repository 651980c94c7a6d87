"""Tests for domain/telemetry.py."""

import dataclasses

import pytest

from journeyscope.domain.telemetry import CollectorOutput, CollectorType, NetworkInfo


class TestCollectorType:
    """Tests for CollectorType."""

    def test_values(self) -> None:
        assert {t.value for t in CollectorType} == {"network", "trace", "performance"}


class TestCollectorOutput:
    """Tests for CollectorOutput."""

    def test_empty_has_empty_sequences(self) -> None:
        output = CollectorOutput.empty()
        assert output.filmstrips == ()
        assert output.networkinfo == ()

    def test_frozen(self) -> None:
        output = CollectorOutput.empty()
        with pytest.raises(dataclasses.FrozenInstanceError):
            output.filmstrips = ()  # type: ignore[misc]


class TestNetworkInfo:
    """Tests for NetworkInfo."""

    def test_payloads_copied_and_read_only(self) -> None:
        request = {"url": "https://x/"}
        info = NetworkInfo(request=request)
        request["url"] = "changed"
        assert info.request["url"] == "https://x/"
        with pytest.raises(TypeError):
            info.request["url"] = "y"  # type: ignore[index]

    def test_response_defaults_to_none(self) -> None:
        info = NetworkInfo(request={})
        assert info.response is None
        assert info.is_navigation_request is False

    def test_equality_by_value(self) -> None:
        a = NetworkInfo(request={"url": "u"}, response={"status": 200}, url="u")
        b = NetworkInfo(request={"url": "u"}, response={"status": 200}, url="u")
        assert a == b
