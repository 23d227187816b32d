from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from yehle.cli import prompts


def test_text_input_reprompts_until_valid(monkeypatch: pytest.MonkeyPatch):
    answers = iter(["Bad Name", "good-name"])
    monkeypatch.setattr(prompts.typer, "prompt", lambda message, **kwargs: next(answers))
    monkeypatch.setattr(prompts.typer, "secho", MagicMock())

    def validate(value: str) -> None:
        if value != value.lower():
            raise ValueError("Invalid package name: lowercase only")

    assert prompts.text_input("Name?", "my-package", validate=validate) == "good-name"
    prompts.typer.secho.assert_called_once()


def test_text_input_passes_default(monkeypatch: pytest.MonkeyPatch):
    seen: dict = {}

    def fake_prompt(message, **kwargs):
        seen.update(kwargs)
        return "  value  "

    monkeypatch.setattr(prompts.typer, "prompt", fake_prompt)

    assert prompts.text_input("Name?", "fallback") == "value"
    assert seen == {"default": "fallback"}


def test_text_input_without_default(monkeypatch: pytest.MonkeyPatch):
    seen: dict = {}

    def fake_prompt(message, **kwargs):
        seen.update(kwargs)
        return "x"

    monkeypatch.setattr(prompts.typer, "prompt", fake_prompt)

    prompts.text_input("Name?")
    assert seen == {}


def test_confirm_input_delegates(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(prompts.typer, "confirm", lambda message, default: not default)

    assert prompts.confirm_input("Public?", default=False) is True


def test_select_input_uses_arrow_selection(monkeypatch: pytest.MonkeyPatch):
    fake = MagicMock(return_value="react")
    monkeypatch.setattr(prompts, "select_with_arrows", fake)

    assert prompts.select_input("Template?", {"basic": "Basic", "react": "React"}, "basic") == "react"
    fake.assert_called_once_with({"basic": "Basic", "react": "React"}, "Template?", default_key="basic", console=None)
