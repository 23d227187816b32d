"""Small string helpers."""

from __future__ import annotations

import re

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")
_SLUG_INVALID = re.compile(r"[^a-z0-9._]+")


def capitalize_first_letter(value: str) -> str:
    return value[:1].upper() + value[1:]


def to_slug(value: str) -> str:
    """Reduce a name, scoped package, path or repository URL to a directory-safe slug.

    >>> to_slug("@scope/My Package")
    'my-package'
    >>> to_slug("git@github.com:user/my-package.git")
    'my-package'
    """
    text = value.strip().replace("\\", "/")
    segments = [segment for segment in re.split(r"[/:]", text) if segment.strip()]
    last = segments[-1].strip() if segments else ""
    if last.endswith(".git"):
        last = last[: -len(".git")]
    slug = _SLUG_INVALID.sub("-", last.lower())
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


def visible_length(value: str) -> int:
    return len(_ANSI_ESCAPE.sub("", value))


def truncate(value: str, max_len: int) -> str:
    """Shorten ``value`` to ``max_len`` visible characters with a ``...`` suffix.

    ANSI colour codes are not counted and are dropped from truncated output.
    """
    if visible_length(value) <= max_len:
        return value
    plain = _ANSI_ESCAPE.sub("", value)
    keep = max(max_len - 3, 0)
    return plain[:keep] + "..."


__all__ = ["capitalize_first_letter", "to_slug", "truncate", "visible_length"]
