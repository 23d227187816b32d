"""
yehle - scaffold new packages from layered templates.

Usage:
    yehle package
    yehle package --lang typescript --name my-package --template basic --private
"""

from __future__ import annotations

import sys

import typer
from rich.align import Align
from rich.console import Console
from rich.text import Text
from typer.core import TyperGroup

from yehle.cli.commands import package
from yehle.core.log import configure_logging

__version__ = "0.4.0"

BANNER = r"""
 _   _  ___ | |__  | |  ___
| | | |/ _ \| '_ \ | | / _ \
| |_| |  __/| | | || ||  __/
 \__, |\___||_| |_||_| \___|
 |___/
"""

TAGLINE = "Scaffold packages from battle-tested templates"

console = Console()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="yehle",
    help="Scaffold new packages from layered templates",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip("\n").split("\n")
    colors = ["bright_magenta", "magenta", "bright_blue", "blue", "cyan"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        styled_banner.append(line + "\n", style=colors[i % len(colors)])

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"yehle {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the yehle version and exit",
    ),
):
    """Show banner when no subcommand is provided."""
    configure_logging(debug=debug)
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'yehle --help' for usage information[/dim]"))
        console.print()


app.command()(package)


def main():
    app()


if __name__ == "__main__":
    main()
