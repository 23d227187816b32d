"""Errors raised while locating or listing templates."""

from __future__ import annotations

from pathlib import Path

NO_LOCAL_ROOT = "<no local templates root>"


def describe_scope(language: str | None, resource: str | None) -> str:
    """Human readable ``language "x" and resource "y"`` fragment."""
    parts: list[str] = []
    if language:
        parts.append(f'language "{language}"')
    if resource:
        parts.append(f'resource "{resource}"')
    return " and ".join(parts) or "the templates root"


class TemplateRegistryError(RuntimeError):
    """Base class for template resolution failures."""


class LocalTemplatesNotFound(TemplateRegistryError):
    def __init__(self, local_root: Path | None, language: str | None, resource: str | None = None):
        self.local_root = local_root
        self.language = language
        self.resource = resource
        root = str(local_root) if local_root is not None else NO_LOCAL_ROOT
        super().__init__(f"Local templates not found at {root} for {describe_scope(language, resource)}")


class RemoteTemplatesNotFound(TemplateRegistryError):
    """The GitHub contents API confirmed the subtree does not exist."""

    def __init__(self, subtree: str):
        self.subtree = subtree
        super().__init__(f"Remote templates path does not exist: {subtree}")


class RemoteDownloadFailed(TemplateRegistryError):
    def __init__(self, cause: object):
        self.cause = cause
        detail = str(cause) if isinstance(cause, BaseException) else f"{cause}"
        super().__init__(f"Failed to download templates: {detail}")


class RemoteTemplatesMissingAfterDownload(TemplateRegistryError):
    def __init__(self, expected: Path, language: str | None, resource: str | None = None):
        self.expected = expected
        self.language = language
        self.resource = resource
        super().__init__(f"No remote templates found for {describe_scope(language, resource)} (expected {expected})")


class RemoteApiError(TemplateRegistryError):
    """The GitHub API answered with an unexpected status or could not be reached."""

    def __init__(self, url: str, status_code: int | None = None, reason: str = ""):
        self.url = url
        self.status_code = status_code
        if status_code is None:
            message = f"Failed to fetch from GitHub API: {reason} ({url})"
        else:
            message = f"Failed to fetch from GitHub API: {status_code} {reason}".rstrip() + f" ({url})"
        super().__init__(message)


class InvalidRemoteResponse(TemplateRegistryError):
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid response from GitHub API: expected array of contents ({url})")


__all__ = [
    "InvalidRemoteResponse",
    "LocalTemplatesNotFound",
    "NO_LOCAL_ROOT",
    "RemoteApiError",
    "RemoteDownloadFailed",
    "RemoteTemplatesMissingAfterDownload",
    "RemoteTemplatesNotFound",
    "TemplateRegistryError",
    "describe_scope",
]
