"""Subprocess wrapper shared by git and package-manager helpers."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Mapping, Sequence

logger = logging.getLogger(__name__)


class ShellCommandError(RuntimeError):
    """Raised when a command cannot be started or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def _as_argv(cmd: str | Sequence[str]) -> list[str]:
    if isinstance(cmd, str):
        return shlex.split(cmd)
    return list(cmd)


def run_command(
    cmd: str | Sequence[str],
    *,
    cwd: Path | str | None = None,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
    capture: bool = True,
) -> str:
    """Run ``cmd`` and return its stripped stdout.

    With ``capture=False`` output goes to the terminal and an empty string is
    returned.
    """
    argv = _as_argv(cmd)
    display = " ".join(argv)
    logger.debug("Running %s (cwd=%s)", display, cwd)
    try:
        result = subprocess.run(
            argv,
            cwd=str(cwd) if cwd is not None else None,
            env=dict(env) if env is not None else None,
            timeout=timeout,
            capture_output=capture,
            text=True,
            check=False,
        )
    except FileNotFoundError as exc:
        raise ShellCommandError(f"Command not found: {argv[0]}") from exc
    except subprocess.TimeoutExpired as exc:
        raise ShellCommandError(f"Command timed out after {timeout}s: {display}") from exc

    if result.returncode != 0:
        stderr = (result.stderr or "").strip() if capture else ""
        raise ShellCommandError(
            f"Command failed: {display} (exit {result.returncode})",
            returncode=result.returncode,
            stderr=stderr,
        )
    return (result.stdout or "").strip() if capture else ""


def command_exists(name: str) -> bool:
    """Check if a tool is installed."""
    return shutil.which(name) is not None


__all__ = ["ShellCommandError", "command_exists", "run_command"]
