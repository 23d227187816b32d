from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest
from typer.testing import CliRunner

from yehle import __version__, app
from yehle.resources.package import command as command_module

runner = CliRunner()


@pytest.fixture()
def local_templates(monkeypatch: pytest.MonkeyPatch, templates_root: Path) -> Path:
    workdir = templates_root.parent
    monkeypatch.chdir(workdir)
    monkeypatch.setenv("YEHLE_LOCAL_TEMPLATES", "true")
    monkeypatch.setattr(command_module, "ensure_package_manager", lambda manager: "pnpm@9.0.0")
    monkeypatch.setattr(command_module, "init_git_repo", MagicMock())
    monkeypatch.setattr(command_module, "make_initial_commit", MagicMock())
    return workdir


def test_version_flag():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert f"yehle {__version__}" in result.output


def test_help_lists_package_command():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    assert "package" in result.output


def test_package_command_generates_from_local_templates(local_templates: Path):
    result = runner.invoke(
        app,
        ["package", "--lang", "typescript", "--name", "demo", "--template", "react", "--private"],
    )

    assert result.exit_code == 0, result.output
    target = local_templates / "demo"
    assert (target / "package.json").is_file()
    assert (target / "playground" / "main.tsx").is_file()
    assert not (target / "CONTRIBUTING.md").exists()
    assert "Next steps" in result.output


def test_package_command_reports_errors_and_exits_1(local_templates: Path):
    result = runner.invoke(app, ["package", "--lang", "cobol", "--name", "demo", "--template", "basic", "--private"])

    assert result.exit_code == 1
    assert "Unsupported language: cobol" in result.output


def test_package_command_missing_local_templates(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("YEHLE_LOCAL_TEMPLATES", "true")

    result = runner.invoke(app, ["package", "--lang", "typescript", "--name", "demo", "--private"])

    assert result.exit_code == 1
    assert "No templates found for language: typescript" in result.output


def test_debug_flag_is_accepted(local_templates: Path):
    result = runner.invoke(
        app,
        ["--debug", "package", "--lang", "typescript", "--name", "demo", "--template", "basic", "--private"],
    )

    assert result.exit_code == 0, result.output
