"""Package manager lookup and preflight checks per language."""

from __future__ import annotations

from enum import Enum

from yehle.resources.package.typescript import validate_typescript_package_name

from .shell import command_exists, run_command


class PackageManager(str, Enum):
    PNPM = "pnpm"


class PackageManagerError(RuntimeError):
    """Raised when the package manager for a language is unusable."""


LANGUAGE_PACKAGE_MANAGER: dict[str, PackageManager] = {
    "typescript": PackageManager.PNPM,
}

LANGUAGE_PACKAGE_REGISTRY: dict[str, str] = {
    "typescript": "NPM",
}

_NAME_VALIDATORS = {
    "typescript": validate_typescript_package_name,
}

_INSTALL_SCRIPTS = {
    PackageManager.PNPM: "pnpm install",
}


def _value(item: object) -> str:
    return item.value if isinstance(item, Enum) else str(item)


def validate_package_name(name: str, language: str) -> None:
    """Raise ValueError when ``name`` is not valid for ``language``."""
    validator = _NAME_VALIDATORS.get(_value(language))
    if validator is None:
        raise ValueError(f"Unsupported language: {_value(language)}")
    result = validator(name)
    if result is True:
        return
    if isinstance(result, str):
        raise ValueError(result)
    raise ValueError("Invalid package name")


def ensure_package_manager(manager: PackageManager | str) -> str:
    """Check ``manager`` is installed and return ``<name>@<version>``."""
    if _value(manager) != PackageManager.PNPM.value:
        raise PackageManagerError(f"Unsupported package manager: {_value(manager)}")
    if not command_exists("pnpm"):
        raise PackageManagerError("pnpm is not installed. Please install PNPM and re-run.")
    version = run_command(["pnpm", "--version"])
    return f"pnpm@{version}"


def get_install_script(manager: PackageManager | str) -> str:
    try:
        return _INSTALL_SCRIPTS[PackageManager(_value(manager))]
    except ValueError:
        raise PackageManagerError(f"Unsupported package manager: {_value(manager)}") from None


__all__ = [
    "LANGUAGE_PACKAGE_MANAGER",
    "LANGUAGE_PACKAGE_REGISTRY",
    "PackageManager",
    "PackageManagerError",
    "ensure_package_manager",
    "get_install_script",
    "validate_package_name",
]
