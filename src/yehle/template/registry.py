"""Template location resolver and enumerator.

Templates live in a ``templates/`` tree laid out as
``templates/<language>/<resource>/<template>``. The tree is read either from
the working directory (local mode, for template authors) or from the GitHub
repository configured in :class:`~yehle.core.config.Settings` (remote mode,
the default). The mode is fixed when the registry is built.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

from yehle.core.config import Settings
from yehle.core.fs import is_directory

from .errors import (
    LocalTemplatesNotFound,
    RemoteDownloadFailed,
    RemoteTemplatesMissingAfterDownload,
    RemoteTemplatesNotFound,
)
from .remote import GitHubTemplateSource, ProbeResult

logger = logging.getLogger(__name__)

TEMPLATES_DIRNAME = "templates"
SHARED_DIRNAME = "shared"


class RemoteSource(Protocol):
    def probe(self, path: str) -> ProbeResult: ...

    def list_directory(self, path: str) -> list[dict[str, Any]]: ...

    def download(self) -> Path: ...

    def close(self) -> None: ...


def subtree_parts(language: str | None, resource: str | None = None) -> list[str]:
    """Path segments below ``templates/`` for a language/resource pair.

    ``resource`` may itself be nested (``package/basic``).
    """
    parts: list[str] = []
    if language:
        parts.append(str(language))
    if resource:
        parts.extend(segment for segment in str(resource).split("/") if segment)
    return parts


def _is_shared(name: str) -> bool:
    return name.casefold() == SHARED_DIRNAME


class TemplateRegistry:
    """Resolve template directories and list selectable templates."""

    def __init__(self, settings: Settings, source: RemoteSource | None = None) -> None:
        self.settings = settings
        self._source = source

    @property
    def is_local_mode(self) -> bool:
        return self.settings.local_mode

    @property
    def source(self) -> RemoteSource:
        if self._source is None:
            self._source = GitHubTemplateSource(self.settings)
        return self._source

    def close(self) -> None:
        if self._source is not None:
            self._source.close()

    def __enter__(self) -> "TemplateRegistry":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_templates_dir(self, language: str | None, resource: str | None = None) -> Path:
        """Return the directory holding ``templates/<language>[/<resource>]``.

        Raises a :class:`~yehle.template.errors.TemplateRegistryError` subclass
        rather than ever returning a missing directory.
        """
        if self.is_local_mode:
            return self._resolve_local(language, resource)
        return self._resolve_remote(language, resource)

    def _resolve_local(self, language: str | None, resource: str | None) -> Path:
        local_root = self.settings.templates_root()
        candidate = local_root.joinpath(*subtree_parts(language, resource))
        if is_directory(candidate):
            logger.debug("Resolved local templates %s", candidate)
            return candidate
        reported_root = local_root if is_directory(local_root) else None
        raise LocalTemplatesNotFound(reported_root, language, resource)

    def _resolve_remote(self, language: str | None, resource: str | None) -> Path:
        parts = subtree_parts(language, resource)
        subtree = "/".join([TEMPLATES_DIRNAME, *parts])

        if self.source.probe(subtree) is ProbeResult.MISSING:
            raise RemoteTemplatesNotFound(subtree)

        try:
            downloaded_root = self.source.download()
        except Exception as exc:
            raise RemoteDownloadFailed(exc) from exc

        expected = Path(downloaded_root).joinpath(TEMPLATES_DIRNAME, *parts)
        if not is_directory(expected):
            raise RemoteTemplatesMissingAfterDownload(expected, language, resource)
        logger.debug("Resolved remote templates %s", expected)
        return expected

    # ------------------------------------------------------------------
    # Enumeration
    # ------------------------------------------------------------------

    def list_available_templates(self, language: str, resource: str) -> list[str]:
        """Names of the template directories under ``<language>/<resource>``.

        The ``shared`` directory is a layer, not a template, and is never listed.
        """
        if self.is_local_mode:
            return self._list_local(language, resource)
        return self._list_remote(language, resource)

    def _list_local(self, language: str, resource: str) -> list[str]:
        resource_dir = self.settings.templates_root().joinpath(*subtree_parts(language, resource))
        if not is_directory(resource_dir):
            return []
        return sorted(
            child.name
            for child in resource_dir.iterdir()
            if is_directory(child) and not _is_shared(child.name)
        )

    def _list_remote(self, language: str, resource: str) -> list[str]:
        subtree = "/".join([TEMPLATES_DIRNAME, *subtree_parts(language, resource)])
        return [
            str(entry["name"])
            for entry in self.source.list_directory(subtree)
            if entry.get("type") == "dir" and isinstance(entry.get("name"), str) and not _is_shared(entry["name"])
        ]


__all__ = ["RemoteSource", "SHARED_DIRNAME", "TEMPLATES_DIRNAME", "TemplateRegistry", "subtree_parts"]
