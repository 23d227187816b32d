"""Top-level ``yehle package`` command."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from yehle.core.config import Settings
from yehle.resources.package.command import generate_package
from yehle.resources.package.config import PackageFlags
from yehle.template.registry import TemplateRegistry

console = Console()


def package(
    lang: Optional[str] = typer.Option(None, "--lang", help="Language of the package (typescript)"),
    name: Optional[str] = typer.Option(None, "--name", help="Package name, as published to the registry"),
    template: Optional[str] = typer.Option(None, "--template", help="Starter template to use"),
    public: Optional[bool] = typer.Option(
        None,
        "--public/--private",
        help="Publish the package publicly (adds license and community files)",
        show_default=False,
    ),
) -> None:
    """Generate a new package from the yehle templates."""
    flags = PackageFlags(lang=lang, name=name, template=template, public=public)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    with TemplateRegistry(settings) as registry:
        try:
            generate_package(flags, registry=registry, console=console)
        except (RuntimeError, ValueError, OSError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
