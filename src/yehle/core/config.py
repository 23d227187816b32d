"""Process-wide settings resolved once at startup."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

DEFAULT_TEMPLATES_REPO = "agrawal-rohit/yehle"
DEFAULT_TEMPLATES_REF = "main"
DEFAULT_API_BASE_URL = "https://api.github.com"

LOCAL_TEMPLATES_ENV = "YEHLE_LOCAL_TEMPLATES"
TEMPLATES_REPO_ENV = "YEHLE_TEMPLATES_REPO"
TEMPLATES_REF_ENV = "YEHLE_TEMPLATES_REF"

HELP_URL = "https://github.com/agrawal-rohit/yehle/issues"


def _github_token(environ: Mapping[str, str]) -> str | None:
    """Return sanitized GitHub token or None."""
    return ((environ.get("GH_TOKEN") or environ.get("GITHUB_TOKEN") or "").strip()) or None


def parse_repo_slug(slug: str) -> tuple[str, str]:
    """Split an ``owner/name`` slug, rejecting anything else."""
    parts = slug.strip().split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Invalid repository slug '{slug}'. Expected owner/name.")
    return parts[0], parts[1]


@dataclass(frozen=True)
class Settings:
    """Immutable configuration handed to the template registry.

    ``local_mode`` selects the ``./templates`` tree over the GitHub-hosted one.
    ``local_root`` overrides the local tree location; when ``None`` it is
    ``templates`` under the working directory at resolution time.
    """

    local_mode: bool = False
    templates_repo: str = DEFAULT_TEMPLATES_REPO
    templates_ref: str = DEFAULT_TEMPLATES_REF
    github_token: str | None = None
    api_base_url: str = DEFAULT_API_BASE_URL
    local_root: Path | None = None

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if environ is None else environ
        repo = (env.get(TEMPLATES_REPO_ENV) or "").strip() or DEFAULT_TEMPLATES_REPO
        parse_repo_slug(repo)
        return cls(
            local_mode=(env.get(LOCAL_TEMPLATES_ENV) or "").strip().lower() == "true",
            templates_repo=repo,
            templates_ref=(env.get(TEMPLATES_REF_ENV) or "").strip() or DEFAULT_TEMPLATES_REF,
            github_token=_github_token(env),
        )

    def templates_root(self) -> Path:
        if self.local_root is not None:
            return self.local_root
        return Path.cwd() / "templates"


__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_TEMPLATES_REF",
    "DEFAULT_TEMPLATES_REPO",
    "HELP_URL",
    "LOCAL_TEMPLATES_ENV",
    "Settings",
    "TEMPLATES_REF_ENV",
    "TEMPLATES_REPO_ENV",
    "parse_repo_slug",
]
