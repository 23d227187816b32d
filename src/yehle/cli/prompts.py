"""Input prompts used to complete a generation configuration."""

from __future__ import annotations

from typing import Callable, Mapping

import typer
from rich.console import Console

from .ui import select_with_arrows


def text_input(
    message: str,
    default: str | None = None,
    validate: Callable[[str], None] | None = None,
) -> str:
    """Prompt until ``validate`` accepts the answer (it raises ValueError otherwise)."""
    while True:
        answer = typer.prompt(message, default=default) if default is not None else typer.prompt(message)
        answer = str(answer).strip()
        if validate is None:
            return answer
        try:
            validate(answer)
        except ValueError as exc:
            typer.secho(str(exc), fg=typer.colors.RED)
            continue
        return answer


def select_input(
    message: str,
    options: Mapping[str, str],
    default: str | None = None,
    console: Console | None = None,
) -> str:
    return select_with_arrows(options, message, default_key=default, console=console)


def confirm_input(message: str, default: bool = False) -> bool:
    return typer.confirm(message, default=default)


__all__ = ["confirm_input", "select_input", "text_input"]
