from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from yehle.core.config import Settings
from yehle.template.errors import (
    RemoteDownloadFailed,
    RemoteTemplatesMissingAfterDownload,
    RemoteTemplatesNotFound,
)
from yehle.template.registry import TemplateRegistry
from yehle.template.remote import ProbeResult


@pytest.fixture()
def source(make_tree, tmp_path: Path) -> MagicMock:
    root = tmp_path / "download"
    make_tree(
        root / "templates",
        {
            "typescript/package/basic/index.ts": "x",
            "typescript/package/shared/package.json": "{}",
        },
    )
    fake = MagicMock()
    fake.probe.return_value = ProbeResult.EXISTS
    fake.download.return_value = root
    return fake


@pytest.fixture()
def registry(source: MagicMock) -> TemplateRegistry:
    return TemplateRegistry(Settings(local_mode=False), source=source)


def test_resolve_returns_downloaded_subtree(registry: TemplateRegistry, source: MagicMock, tmp_path: Path):
    resolved = registry.resolve_templates_dir("typescript", "package/basic")

    assert resolved == tmp_path / "download" / "templates" / "typescript" / "package" / "basic"
    source.probe.assert_called_once_with("templates/typescript/package/basic")


def test_confirmed_missing_subtree_skips_download(registry: TemplateRegistry, source: MagicMock):
    source.probe.return_value = ProbeResult.MISSING

    with pytest.raises(RemoteTemplatesNotFound, match="Remote templates path does not exist: templates/typescript/x"):
        registry.resolve_templates_dir("typescript", "x")

    source.download.assert_not_called()


def test_unknown_probe_still_downloads(registry: TemplateRegistry, source: MagicMock):
    source.probe.return_value = ProbeResult.UNKNOWN

    assert registry.resolve_templates_dir("typescript", "package/shared").is_dir()
    source.download.assert_called_once()


def test_download_failure_is_wrapped(registry: TemplateRegistry, source: MagicMock):
    source.download.side_effect = OSError("disk full")

    with pytest.raises(RemoteDownloadFailed, match="Failed to download templates: disk full") as excinfo:
        registry.resolve_templates_dir("typescript", "package/basic")

    assert isinstance(excinfo.value.__cause__, OSError)


def test_subtree_absent_from_archive(registry: TemplateRegistry):
    with pytest.raises(RemoteTemplatesMissingAfterDownload, match='No remote templates found for language "typescript"'):
        registry.resolve_templates_dir("typescript", "package/react")


def test_list_remote_templates_filters_entries(registry: TemplateRegistry, source: MagicMock):
    source.list_directory.return_value = [
        {"name": "basic", "type": "dir"},
        {"name": "shared", "type": "dir"},
        {"name": "Shared", "type": "dir"},
        {"name": "README.md", "type": "file"},
        {"name": "react", "type": "dir"},
    ]

    assert registry.list_available_templates("typescript", "package") == ["basic", "react"]
    source.list_directory.assert_called_once_with("templates/typescript/package")


def test_close_closes_the_source(registry: TemplateRegistry, source: MagicMock):
    with registry:
        pass

    source.close.assert_called_once()
