"""Configuration for ``yehle package``: flags, prompts and the render context."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from rich.console import Console

from yehle.cli import prompts
from yehle.cli.tasks import Step, run_steps
from yehle.core.git import get_git_email, get_git_username
from yehle.core.pkg_manager import LANGUAGE_PACKAGE_REGISTRY, validate_package_name
from yehle.core.utils import capitalize_first_letter, to_slug
from yehle.template.registry import TemplateRegistry

RESOURCE = "package"
DEFAULT_PACKAGE_NAME = "my-package"


class Language(str, Enum):
    TYPESCRIPT = "typescript"


# Community and release files that only make sense for published packages.
# Matched by basename anywhere in the generated tree.
TEMPLATE_PUBLIC_PATHS: dict[str, list[str]] = {
    "shared": [
        "CODE_OF_CONDUCT.md",
        "CONTRIBUTING.md",
        "SECURITY.md",
        "FUNDING.yml",
        "ISSUE_TEMPLATE",
        "PULL_REQUEST_TEMPLATE.md",
    ],
    Language.TYPESCRIPT.value: [
        ".changeset",
        "release.yml",
    ],
}


@dataclass
class PackageFlags:
    """Values given on the command line; ``None`` means "ask"."""

    lang: str | None = None
    name: str | None = None
    template: str | None = None
    public: bool | None = None


@dataclass
class GeneratePackageConfiguration:
    lang: Language
    name: str
    template: str
    public: bool
    author_name: str | None = None
    author_git_email: str | None = None
    author_git_username: str | None = None

    def template_context(self) -> dict[str, Any]:
        """Keys as referenced from the template files."""
        return {
            "lang": self.lang.value,
            "name": self.name,
            "template": self.template,
            "public": self.public,
            "authorName": self.author_name,
            "authorGitEmail": self.author_git_email,
            "authorGitUsername": self.author_git_username,
        }


def public_paths_for(lang: Language | str) -> list[str]:
    key = lang.value if isinstance(lang, Language) else str(lang)
    return [*TEMPLATE_PUBLIC_PATHS["shared"], *TEMPLATE_PUBLIC_PATHS.get(key, [])]


def get_package_language(flags: PackageFlags, console: Console | None = None) -> Language:
    if flags.lang is not None:
        try:
            return Language(flags.lang)
        except ValueError:
            raise ValueError(f"Unsupported language: {flags.lang}") from None

    options = {lang.value: capitalize_first_letter(lang.value) for lang in Language}
    answer = prompts.select_input(
        "Which language would you prefer to use?",
        options,
        Language.TYPESCRIPT.value,
        console=console,
    )
    return Language(answer)


def get_package_name(lang: Language, flags: PackageFlags) -> str:
    if flags.name is not None:
        validate_package_name(flags.name, lang.value)
        return flags.name

    return prompts.text_input(
        "What should we call your package?",
        DEFAULT_PACKAGE_NAME,
        validate=lambda value: validate_package_name(value, lang.value),
    )


def get_package_template(
    lang: Language,
    flags: PackageFlags,
    registry: TemplateRegistry,
    console: Console | None = None,
) -> str:
    if registry.is_local_mode:
        templates = registry.list_available_templates(lang.value, RESOURCE)
    else:
        [templates] = run_steps(
            "Checking available package templates",
            [Step("Fetch template list", lambda: registry.list_available_templates(lang.value, RESOURCE))],
            console=console,
        )

    if not templates:
        raise ValueError(f"No templates found for language: {lang.value}")

    if flags.template is not None:
        if flags.template not in templates:
            raise ValueError(f"Unsupported template: {flags.template}")
        return flags.template

    if len(templates) == 1:
        return templates[0]

    options = {name: capitalize_first_letter(name) for name in templates}
    return prompts.select_input(
        "Which starter template would you like to use?",
        options,
        templates[0],
        console=console,
    )


def get_package_visibility(lang: Language, flags: PackageFlags) -> bool:
    if flags.public is not None:
        return flags.public

    registry_name = LANGUAGE_PACKAGE_REGISTRY.get(lang.value, "package")
    return prompts.confirm_input(
        f"Should this package be publicly available? (released to the {registry_name} registry)",
        default=True,
    )


def prompt_author_name() -> str:
    return prompts.text_input("What is the author's name?", get_git_username())


def prompt_author_git_email() -> str:
    return prompts.text_input("What is the author's email?", get_git_email())


def prompt_author_git_username() -> str:
    git_name = get_git_username()
    default = to_slug(git_name) if git_name else None
    answer = prompts.text_input(
        "Under which GitHub account would this repository be stored?",
        default or None,
    )
    return to_slug(answer)


def get_generate_package_configuration(
    flags: PackageFlags,
    registry: TemplateRegistry,
    console: Console | None = None,
) -> GeneratePackageConfiguration:
    """Fill in whatever ``flags`` leave open by prompting.

    Author details are only asked for public packages.
    """
    lang = get_package_language(flags, console=console)
    name = get_package_name(lang, flags)
    template = get_package_template(lang, flags, registry, console=console)
    public = get_package_visibility(lang, flags)

    config = GeneratePackageConfiguration(lang=lang, name=name, template=template, public=public)
    if public:
        config.author_name = prompt_author_name()
        config.author_git_email = prompt_author_git_email()
        config.author_git_username = prompt_author_git_username()
    return config


__all__ = [
    "DEFAULT_PACKAGE_NAME",
    "GeneratePackageConfiguration",
    "Language",
    "PackageFlags",
    "RESOURCE",
    "TEMPLATE_PUBLIC_PATHS",
    "get_generate_package_configuration",
    "get_package_language",
    "get_package_name",
    "get_package_template",
    "get_package_visibility",
    "prompt_author_git_email",
    "prompt_author_git_username",
    "prompt_author_name",
    "public_paths_for",
]
