"""Terminal widgets: the step tree and arrow-key selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Mapping

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from yehle.core.utils import truncate

PENDING = "pending"
RUNNING = "running"
DONE = "done"
ERROR = "error"
SKIPPED = "skipped"

MAX_DETAIL_LENGTH = 80

_SYMBOLS = {
    DONE: "[green]●[/green]",
    PENDING: "[green dim]○[/green dim]",
    RUNNING: "[cyan]○[/cyan]",
    ERROR: "[red]●[/red]",
    SKIPPED: "[yellow]○[/yellow]",
}


@dataclass
class TrackedStep:
    key: str
    label: str
    status: str = PENDING
    detail: str = ""


class StepTracker:
    """Track the steps of one phase and render them as a Rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps: list[TrackedStep] = []
        self._refresh_cb: Callable[[], None] | None = None

    def attach_refresh(self, cb: Callable[[], None]) -> None:
        self._refresh_cb = cb

    def add(self, key: str, label: str) -> None:
        if self._find(key) is None:
            self.steps.append(TrackedStep(key, label))
            self._maybe_refresh()

    def start(self, key: str, detail: str = "") -> None:
        self._update(key, RUNNING, detail)

    def complete(self, key: str, detail: str = "") -> None:
        self._update(key, DONE, detail)

    def error(self, key: str, detail: str = "") -> None:
        self._update(key, ERROR, detail)

    def skip(self, key: str, detail: str = "") -> None:
        self._update(key, SKIPPED, detail)

    def status_of(self, key: str) -> str | None:
        step = self._find(key)
        return step.status if step else None

    def _find(self, key: str) -> TrackedStep | None:
        return next((step for step in self.steps if step.key == key), None)

    def _update(self, key: str, status: str, detail: str) -> None:
        step = self._find(key)
        if step is None:
            step = TrackedStep(key, key)
            self.steps.append(step)
        step.status = status
        if detail:
            step.detail = detail
        self._maybe_refresh()

    def _maybe_refresh(self) -> None:
        if self._refresh_cb:
            self._refresh_cb()

    def render(self) -> Tree:
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            symbol = _SYMBOLS.get(step.status, " ")
            detail = truncate(step.detail.strip(), MAX_DETAIL_LENGTH) if step.detail else ""
            if step.status == PENDING:
                suffix = f" ({detail})" if detail else ""
                line = f"{symbol} [bright_black]{step.label}{suffix}[/bright_black]"
            elif detail:
                line = f"{symbol} [white]{step.label}[/white] [bright_black]({detail})[/bright_black]"
            else:
                line = f"{symbol} [white]{step.label}[/white]"
            tree.add(line)
        return tree


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key in (readchar.key.UP, readchar.key.CTRL_P):
        return "up"
    if key in (readchar.key.DOWN, readchar.key.CTRL_N):
        return "down"
    if key == readchar.key.ENTER:
        return "enter"
    if key in (readchar.key.ESC, "\x1b"):
        return "escape"
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt
    return key


def select_with_arrows(
    options: Mapping[str, str],
    prompt_text: str = "Select an option",
    default_key: str | None = None,
    console: Console | None = None,
) -> str:
    """Pick one key of ``options`` with the arrow keys; Esc aborts the command."""
    console = console or Console()
    option_keys = list(options.keys())
    if not option_keys:
        raise ValueError("select_with_arrows needs at least one option")
    selected_index = option_keys.index(default_key) if default_key in option_keys else 0

    def build_panel() -> Panel:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")
        for index, key in enumerate(option_keys):
            pointer = "▶" if index == selected_index else " "
            table.add_row(pointer, f"[cyan]{key}[/cyan] [dim]({options[key]})[/dim]")
        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")
        return Panel(table, title=f"[bold]{prompt_text}[/bold]", border_style="cyan", padding=(1, 2))

    console.print()
    with Live(build_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)
            if key == "up":
                selected_index = (selected_index - 1) % len(option_keys)
            elif key == "down":
                selected_index = (selected_index + 1) % len(option_keys)
            elif key == "enter":
                return option_keys[selected_index]
            elif key == "escape":
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)
            live.update(build_panel(), refresh=True)


__all__ = [
    "DONE",
    "ERROR",
    "PENDING",
    "RUNNING",
    "SKIPPED",
    "StepTracker",
    "TrackedStep",
    "get_key",
    "select_with_arrows",
]
