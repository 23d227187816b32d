"""TypeScript (npm) specifics for generated packages."""

from __future__ import annotations

import re

MAX_NPM_NAME_LENGTH = 214

_NPM_NAME = re.compile(r"^(?:@[a-z0-9-*~][a-z0-9-*._~]*/)?[a-z0-9-~][a-z0-9-._~]*$")


def validate_typescript_package_name(name: str) -> bool | str:
    """Return True for a valid npm package name, else a human readable reason."""
    if not name:
        return "Invalid package name: name cannot be empty"
    if len(name) > MAX_NPM_NAME_LENGTH:
        return f"Invalid package name: name cannot be longer than {MAX_NPM_NAME_LENGTH} characters"
    if name != name.strip():
        return "Invalid package name: name cannot have leading or trailing whitespace"
    if name.startswith((".", "_")):
        return "Invalid package name: name cannot start with a period or underscore"
    if name.lower() != name:
        return "Invalid package name: name can no longer contain capital letters"
    if not _NPM_NAME.match(name):
        return "Invalid package name: name can only contain URL-friendly characters"
    return True


__all__ = ["MAX_NPM_NAME_LENGTH", "validate_typescript_package_name"]
