"""Tests for domain/journey.py."""

import pytest

from journeyscope.domain.exceptions import (
    DuplicateStepError,
    InvalidTimingError,
    JourneyStateError,
    StepAttachedError,
)
from journeyscope.domain.journey import Journey, Status, Step, journey, step


def _noop(_ctx: object) -> None:
    """No-op step body."""


class TestJourney:
    """Tests for Journey registration and completion."""

    def test_factory_defaults(self) -> None:
        j = journey("j1")
        assert j.name == "j1"
        assert j.callback is None
        assert dict(j.params) == {}
        assert j.steps == []
        assert j.status is None

    def test_params_are_read_only(self) -> None:
        j = journey("j1", params={"env": "prod"})
        with pytest.raises(TypeError):
            j.params["env"] = "dev"  # type: ignore[index]

    def test_add_step_assigns_index(self) -> None:
        j = journey("j1")
        first = j.add_step(step("a", _noop))
        second = j.add_step(step("b", _noop))
        assert (first.index, second.index) == (1, 2)
        assert [s.name for s in j.steps] == ["a", "b"]

    def test_duplicate_step_name_rejected(self) -> None:
        j = journey("j1")
        j.add_step(step("a", _noop))
        with pytest.raises(DuplicateStepError, match="'a'"):
            j.add_step(step("a", _noop))

    def test_same_step_name_in_other_journey_allowed(self) -> None:
        journey("j1").add_step(step("a", _noop))
        journey("j2").add_step(step("a", _noop))

    def test_step_shared_between_journeys_rejected(self) -> None:
        shared = journey("j1").add_step(step("a", _noop))
        other = journey("j2")
        with pytest.raises(StepAttachedError, match="'j2'"):
            other.add_step(shared)
        assert other.steps == []
        assert shared.index == 1

    def test_step_decorator_registers(self) -> None:
        j = Journey("j1")

        @j.step("open")
        def open_page(_ctx: object) -> None:
            """Step body."""

        assert len(j.steps) == 1
        assert j.steps[0].name == "open"
        assert j.steps[0].callback is open_page

    def test_complete_sets_result(self) -> None:
        j = journey("j1")
        err = ValueError("boom")
        j.complete(Status.FAILED, 1.0, 2.0, error=err)
        assert j.status is Status.FAILED
        assert (j.start, j.end) == (1.0, 2.0)
        assert j.error is err
        assert j.completed

    def test_complete_twice_raises(self) -> None:
        j = journey("j1")
        j.complete(Status.SUCCEEDED, 1.0, 2.0)
        with pytest.raises(JourneyStateError):
            j.complete(Status.FAILED, 1.0, 2.0)
        assert j.status is Status.SUCCEEDED

    def test_complete_start_after_end_raises(self) -> None:
        with pytest.raises(InvalidTimingError):
            journey("j1").complete(Status.SUCCEEDED, 3.0, 2.0)


class TestStep:
    """Tests for Step completion."""

    def test_complete_sets_result(self) -> None:
        s = Step(name="s1", callback=_noop)
        s.complete(Status.SUCCEEDED, 0.0, 0.5, screenshot="b64", url="https://x/")
        assert s.status is Status.SUCCEEDED
        assert s.screenshot == "b64"
        assert s.url == "https://x/"
        assert s.error is None

    def test_complete_twice_raises(self) -> None:
        s = Step(name="s1", callback=_noop)
        s.complete(Status.SKIPPED, 0.0, 0.0)
        with pytest.raises(JourneyStateError, match="'s1'"):
            s.complete(Status.SKIPPED, 0.0, 0.0)

    def test_equal_start_and_end_allowed(self) -> None:
        s = Step(name="s1", callback=_noop)
        s.complete(Status.SKIPPED, 5.0, 5.0)
        assert s.start == s.end


class TestStatus:
    """Tests for Status values."""

    def test_values(self) -> None:
        assert [s.value for s in Status] == ["succeeded", "failed", "skipped"]
