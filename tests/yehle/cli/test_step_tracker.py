from __future__ import annotations

import io

import pytest
from rich.console import Console

from yehle.cli.tasks import Step, run_steps
from yehle.cli.ui import DONE, ERROR, PENDING, StepTracker


def render_text(tracker: StepTracker) -> str:
    console = Console(file=io.StringIO(), force_terminal=False, width=200)
    console.print(tracker.render())
    return console.file.getvalue()


def test_tracker_updates_status_and_detail():
    tracker = StepTracker("Preparing package")
    tracker.add("create", "Create package directory")
    tracker.add("create", "Duplicate is ignored")
    tracker.complete("create", "done")

    assert tracker.status_of("create") == DONE
    assert len(tracker.steps) == 1
    text = render_text(tracker)
    assert "Preparing package" in text
    assert "Create package directory (done)" in text


def test_tracker_truncates_long_details():
    tracker = StepTracker("Phase")
    tracker.add("step", "Step")
    tracker.error("step", "x" * 200)

    assert tracker.status_of("step") == ERROR
    assert "x" * 77 + "..." in render_text(tracker)


def test_tracker_refresh_callback_fires():
    refreshed: list[int] = []
    tracker = StepTracker("Phase")
    tracker.attach_refresh(lambda: refreshed.append(1))

    tracker.add("a", "A")
    tracker.start("a")

    assert len(refreshed) == 2


def test_run_steps_returns_results_in_order(console: Console):
    results = run_steps("Phase", [Step("one", lambda: 1), Step("two", lambda: 2)], console=console)

    assert results == [1, 2]


def test_run_steps_skips_disabled_steps(console: Console):
    called: list[str] = []

    results = run_steps(
        "Phase",
        [Step("skipped", lambda: called.append("skipped"), enabled=False), Step("ran", lambda: called.append("ran"))],
        console=console,
    )

    assert called == ["ran"]
    assert results[0] is None


def test_run_steps_stops_at_first_failure(console: Console, monkeypatch: pytest.MonkeyPatch):
    trackers: list[StepTracker] = []
    original_init = StepTracker.__init__

    def capture_init(self, title):
        original_init(self, title)
        trackers.append(self)

    monkeypatch.setattr(StepTracker, "__init__", capture_init)
    called: list[str] = []

    def boom():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError, match="boom"):
        run_steps(
            "Phase",
            [Step("first", boom), Step("second", lambda: called.append("second")), Step("off", lambda: None, enabled=False)],
            console=console,
        )

    assert called == []
    tracker = trackers[0]
    assert tracker.status_of("first") == ERROR
    assert tracker.status_of("second") == PENDING
    assert tracker.status_of("off") == PENDING


def test_tracker_skip_and_unknown_keys():
    tracker = StepTracker("Phase")
    tracker.skip("later")

    assert tracker.status_of("later") == "skipped"
    assert tracker.status_of("missing") is None
