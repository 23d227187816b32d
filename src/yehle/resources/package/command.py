"""``yehle package``: generate a new package from the template layers."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from rich.console import Console
from rich.panel import Panel

from yehle.cli.tasks import Step, run_steps
from yehle.core.config import HELP_URL
from yehle.core.git import INITIAL_BRANCH, init_git_repo, make_initial_commit
from yehle.core.pkg_manager import LANGUAGE_PACKAGE_MANAGER, ensure_package_manager, get_install_script
from yehle.core.utils import to_slug
from yehle.template.registry import TemplateRegistry

from .config import PackageFlags, get_generate_package_configuration
from .setup import (
    apply_template_modifications,
    create_package_directory,
    get_required_github_secrets,
    write_package_template_files,
)

logger = logging.getLogger(__name__)


class TargetDirectoryNotEmpty(RuntimeError):
    def __init__(self, path: Path):
        super().__init__(f"Target directory is not empty: {path}")
        self.path = path


def _ensure_empty_target(target_dir: Path) -> None:
    """Refuse to generate into a non-empty directory.

    A path that exists but cannot be listed (a regular file, no permission)
    raises the underlying ``OSError``.
    """
    if not target_dir.exists():
        return
    if os.listdir(target_dir):
        raise TargetDirectoryNotEmpty(target_dir)


def _next_steps(slug: str, secrets: list[str], install_script: str) -> list[str]:
    lines = [
        f"[cyan]cd {slug}[/cyan]",
        f"[cyan]git push -u origin {INITIAL_BRANCH}[/cyan]",
    ]
    if secrets:
        lines.append("Configure the following repository secrets:")
        lines.extend(f"    - [magenta]{name}[/magenta]" for name in secrets)
    lines.append(f"[cyan]{install_script}[/cyan]")
    return lines


def generate_package(
    flags: PackageFlags,
    *,
    registry: TemplateRegistry,
    console: Console | None = None,
    cwd: Path | None = None,
) -> Path:
    """Ask for whatever ``flags`` leave open, then write the package to ``cwd/<slug>``.

    Returns the generated package directory.
    """
    console = console or Console()
    cwd = Path(cwd) if cwd is not None else Path.cwd()
    console.print("[bold magenta]generating package...[/bold magenta]")

    config = get_generate_package_configuration(flags, registry, console=console)
    slug = to_slug(config.name)
    target_dir = (cwd / slug).resolve()
    _ensure_empty_target(target_dir)

    package_manager = LANGUAGE_PACKAGE_MANAGER[config.lang.value]
    [package_manager_version] = run_steps(
        "Preflight checks",
        [Step(f"Check {package_manager.value} is installed", lambda: ensure_package_manager(package_manager))],
        console=console,
    )

    run_steps(
        "Preparing package",
        [
            Step("Create package directory", lambda: create_package_directory(cwd, slug)),
            Step(
                f'Add "{config.template}" template',
                lambda: write_package_template_files(target_dir, config, registry),
            ),
            Step(
                "Modify template with user preferences",
                lambda: apply_template_modifications(target_dir, config, package_manager_version, registry),
            ),
        ],
        console=console,
    )

    *_, secrets = run_steps(
        "Finishing up",
        [
            Step("Initialize git", lambda: init_git_repo(target_dir)),
            Step("Make initial commit", lambda: make_initial_commit(target_dir)),
            Step("Fetch github secrets list", lambda: get_required_github_secrets(target_dir)),
        ],
        console=console,
    )

    steps_panel = Panel(
        "\n".join(_next_steps(slug, secrets, get_install_script(package_manager))),
        title="Package generated successfully! Next steps:",
        border_style="cyan",
        padding=(1, 2),
    )
    console.print()
    console.print(steps_panel)
    console.print("[bold green]Happy building![/bold green]")
    console.print(f"[dim]Stuck? Open an issue at {HELP_URL}[/dim]")
    logger.debug("Generated %s package at %s", config.template, target_dir)
    return target_dir


__all__ = ["TargetDirectoryNotEmpty", "generate_package"]
