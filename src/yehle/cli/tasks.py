"""Sequential step runner rendered as a live step tree."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Sequence

from rich.console import Console
from rich.live import Live

from .ui import StepTracker


@dataclass
class Step:
    """A titled unit of work. ``enabled=False`` shows the step as skipped."""

    title: str
    action: Callable[[], Any]
    enabled: bool = True
    key: str | None = None

    @property
    def tracker_key(self) -> str:
        return self.key or self.title


def run_steps(title: str, steps: Sequence[Step], console: Console | None = None) -> list[Any]:
    """Run ``steps`` in order, returning each action's result.

    The first failure marks its step as errored, leaves the remaining steps
    pending and re-raises.
    """
    console = console or Console()
    tracker = StepTracker(title)
    for step in steps:
        tracker.add(step.tracker_key, step.title)

    results: list[Any] = []
    with Live(tracker.render(), console=console, refresh_per_second=8, transient=False) as live:
        tracker.attach_refresh(lambda: live.update(tracker.render()))
        for step in steps:
            if not step.enabled:
                tracker.skip(step.tracker_key)
                results.append(None)
                continue
            tracker.start(step.tracker_key)
            try:
                result = step.action()
            except Exception as exc:
                tracker.error(step.tracker_key, str(exc))
                raise
            tracker.complete(step.tracker_key)
            results.append(result)
    return results


__all__ = ["Step", "run_steps"]
