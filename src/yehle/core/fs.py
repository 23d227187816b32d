"""Filesystem helpers used while assembling a package tree.

Every helper treats an absent source as "nothing to do" through an explicit
existence check. Anything else that goes wrong (permissions, a full disk)
propagates to the caller.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

from .render import render_text, rendered_name

logger = logging.getLogger(__name__)


def is_directory(path: str | os.PathLike[str]) -> bool:
    """Return True only for an existing, accessible directory."""
    try:
        return Path(path).is_dir()
    except OSError:
        return False


def _is_regular_file(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def ensure_directory(path: str | os.PathLike[str]) -> Path:
    target = Path(path)
    target.mkdir(parents=True, exist_ok=True)
    return target


def write_file(path: str | os.PathLike[str], content: str) -> Path:
    """Write UTF-8 text, creating parent directories as needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def copy_file_safe(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> bool:
    """Copy a regular file. Returns False (and does nothing) otherwise."""
    source = Path(src)
    if not _is_regular_file(source):
        logger.debug("Skipping copy of %s: not a regular file", source)
        return False
    destination = Path(dest)
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(source, destination)
    return True


def copy_directory_safe(src: str | os.PathLike[str], dest: str | os.PathLike[str]) -> bool:
    """Merge the tree at ``src`` into ``dest``.

    Files already present in ``dest`` are overwritten path for path; files only
    present in ``dest`` are kept. Returns False without creating ``dest`` when
    ``src`` is not a directory.
    """
    source = Path(src)
    if not is_directory(source):
        logger.debug("Skipping copy of %s: not a directory", source)
        return False
    shutil.copytree(source, Path(dest), dirs_exist_ok=True)
    logger.debug("Copied %s -> %s", source, dest)
    return True


def remove_matching_recursively(
    root: str | os.PathLike[str],
    predicate: Callable[[str], bool],
) -> list[Path]:
    """Delete every entry under ``root`` whose basename matches ``predicate``.

    Matching directories are removed whole and not descended into. Returns the
    removed paths.
    """
    base = Path(root)
    if not is_directory(base):
        return []

    removed: list[Path] = []
    with os.scandir(base) as entries:
        children = sorted(entries, key=lambda entry: entry.name)
    for entry in children:
        path = Path(entry.path)
        is_dir = entry.is_dir(follow_symlinks=False)
        if predicate(entry.name):
            if is_dir:
                shutil.rmtree(path)
            else:
                path.unlink()
            removed.append(path)
        elif is_dir:
            removed.extend(remove_matching_recursively(path, predicate))
    return removed


def remove_by_basename(root: str | os.PathLike[str], names: Iterable[str]) -> list[Path]:
    wanted = frozenset(names)
    removed = remove_matching_recursively(root, lambda name: name in wanted)
    for path in removed:
        logger.debug("Removed %s", path)
    return removed


def render_placeholders(root: str | os.PathLike[str], context: Mapping[str, Any]) -> list[Path]:
    """Render every marker-named file under ``root`` in place.

    ``name.mustache.ext`` becomes ``name.ext`` holding the rendered text and the
    marker file is deleted. Returns the written paths.
    """
    base = Path(root)
    if not is_directory(base):
        return []

    written: list[Path] = []
    candidates = sorted(path for path in base.rglob("*") if _is_regular_file(path))
    for path in candidates:
        output_name = rendered_name(path.name)
        if output_name is None:
            continue
        text = path.read_text(encoding="utf-8")
        target = path.with_name(output_name)
        target.write_text(render_text(text, context, source=str(path)), encoding="utf-8")
        path.unlink()
        written.append(target)
        logger.debug("Rendered %s -> %s", path, target.name)
    return written


__all__ = [
    "copy_directory_safe",
    "copy_file_safe",
    "ensure_directory",
    "is_directory",
    "remove_by_basename",
    "remove_matching_recursively",
    "render_placeholders",
    "write_file",
]
