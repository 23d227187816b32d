"""Layered composition of template trees into one output directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

from yehle.core.fs import copy_directory_safe, remove_by_basename, render_placeholders

from .registry import SHARED_DIRNAME, TemplateRegistry

logger = logging.getLogger(__name__)

LAYER_ORDER = ("global-shared", "language-shared", "resource-shared", "chosen-template")


@dataclass(frozen=True)
class Layer:
    """One template tree copied into the output, in order of increasing precedence."""

    name: str
    language: str | None
    resource: str | None


def package_layers(language: str, template: str, resource: str = "package") -> list[Layer]:
    """The four layers for ``<language>/<resource>/<template>``.

    Order matters: later layers overwrite earlier ones file for file.
    """
    global_shared, language_shared, resource_shared, chosen = LAYER_ORDER
    return [
        Layer(global_shared, None, SHARED_DIRNAME),
        Layer(language_shared, language, SHARED_DIRNAME),
        Layer(resource_shared, language, f"{resource}/{SHARED_DIRNAME}"),
        Layer(chosen, language, f"{resource}/{template}"),
    ]


def compose_layers(registry: TemplateRegistry, layers: Iterable[Layer], target_dir: Path) -> list[Path]:
    """Resolve and copy each layer into ``target_dir``, strictly in sequence."""
    sources: list[Path] = []
    for layer in layers:
        source = registry.resolve_templates_dir(layer.language, layer.resource)
        copy_directory_safe(source, target_dir)
        logger.debug("Applied %s layer from %s", layer.name, source)
        sources.append(source)
    return sources


def finalize_tree(target_dir: Path, context: Mapping[str, Any], prune: Iterable[str] = ()) -> None:
    """Render placeholders across ``target_dir``, then drop pruned basenames.

    Pruning runs after rendering so that ``CONTRIBUTING.mustache.md`` is matched
    by its final name.
    """
    render_placeholders(target_dir, context)
    names = list(prune)
    if names:
        remove_by_basename(target_dir, names)


__all__ = ["LAYER_ORDER", "Layer", "compose_layers", "finalize_tree", "package_layers"]
