"""Git helpers for bootstrapping a freshly generated package."""

from __future__ import annotations

import logging
from pathlib import Path

from .shell import ShellCommandError, run_command

logger = logging.getLogger(__name__)

INITIAL_BRANCH = "main"
INITIAL_COMMIT_MESSAGE = "chore: initial commit"


class GitError(RuntimeError):
    """Raised when a git bootstrap step fails."""


def _config_value(key: str) -> str | None:
    try:
        value = run_command(["git", "config", "--get", key])
    except ShellCommandError as exc:
        logger.debug("git config %s unavailable: %s", key, exc)
        return None
    return value.strip() or None


def get_git_username() -> str | None:
    """Return ``user.name`` from git config, or None when unset."""
    return _config_value("user.name")


def get_git_email() -> str | None:
    """Return ``user.email`` from git config, or None when unset."""
    return _config_value("user.email")


def is_git_repo(path: Path) -> bool:
    return (Path(path) / ".git").exists()


def init_git_repo(path: Path) -> None:
    """Run ``git init`` on ``path`` unless it already is a repository."""
    if is_git_repo(path):
        logger.debug("%s is already a git repository", path)
        return
    try:
        run_command(["git", "init", "-b", INITIAL_BRANCH], cwd=path)
    except ShellCommandError as exc:
        raise GitError(f"Failed to initialize git repository in {path}: {exc}") from exc


def make_initial_commit(path: Path) -> None:
    """Stage everything under ``path`` and record the initial commit."""
    init_git_repo(path)
    try:
        run_command(["git", "add", "-A"], cwd=path)
        run_command(["git", "commit", "-m", INITIAL_COMMIT_MESSAGE], cwd=path)
    except ShellCommandError as exc:
        raise GitError(f"Failed to create initial git commit in {path}: {exc}") from exc


__all__ = [
    "GitError",
    "INITIAL_BRANCH",
    "INITIAL_COMMIT_MESSAGE",
    "get_git_email",
    "get_git_username",
    "init_git_repo",
    "is_git_repo",
    "make_initial_commit",
]
