"""Assembly of a package directory from the template layers."""

from __future__ import annotations

import json
import logging
import re
from datetime import date
from pathlib import Path

from yehle.core.fs import ensure_directory, is_directory, write_file
from yehle.template.compose import compose_layers, finalize_tree, package_layers
from yehle.template.registry import TemplateRegistry

from .config import RESOURCE, GeneratePackageConfiguration, public_paths_for

logger = logging.getLogger(__name__)

PLAYGROUND_DIRNAME = "playground"
BIOME_CONFIG = "biome.json"
WORKFLOWS_DIR = Path(".github") / "workflows"

_SECRET_PATTERN = re.compile(r"secrets\.([A-Z0-9_]+)")
_IMPLICIT_SECRETS = frozenset({"GITHUB_TOKEN"})

MIT_LICENSE = """MIT License

Copyright (c) {year} {holder}

Permission is hereby granted, free of charge, to any person obtaining a copy
of this software and associated documentation files (the "Software"), to deal
in the Software without restriction, including without limitation the rights
to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
copies of the Software, and to permit persons to whom the Software is
furnished to do so, subject to the following conditions:

The above copyright notice and this permission notice shall be included in all
copies or substantial portions of the Software.

THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
SOFTWARE.
"""


def create_package_directory(cwd: Path, package_name: str) -> Path:
    """Create ``cwd/package_name`` and return its absolute path."""
    target = (Path(cwd) / package_name).resolve()
    ensure_directory(target)
    return target


def render_mit_license(holder: str, year: int | None = None) -> str:
    return MIT_LICENSE.format(year=year or date.today().year, holder=holder)


def write_package_template_files(
    target_dir: Path,
    config: GeneratePackageConfiguration,
    registry: TemplateRegistry,
) -> None:
    """Copy the template layers into ``target_dir`` and add a license if public."""
    layers = package_layers(config.lang.value, config.template, RESOURCE)
    compose_layers(registry, layers, target_dir)

    if config.public and config.author_name:
        write_file(Path(target_dir) / "LICENSE", render_mit_license(config.author_name))


def _strip_biome_root(target_dir: Path) -> None:
    biome_path = Path(target_dir) / BIOME_CONFIG
    if not biome_path.is_file():
        return
    try:
        data = json.loads(biome_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        logger.warning("Leaving %s untouched: %s", biome_path, exc)
        return
    if not isinstance(data, dict) or "root" not in data:
        return
    del data["root"]
    biome_path.write_text(json.dumps(data, indent="\t") + "\n", encoding="utf-8")


def apply_template_modifications(
    target_dir: Path,
    config: GeneratePackageConfiguration,
    package_manager_version: str,
    registry: TemplateRegistry,
) -> None:
    """Render placeholders, prune public-only files and tidy tool configs."""
    chosen_template_dir = registry.resolve_templates_dir(config.lang.value, f"{RESOURCE}/{config.template}")
    context = {
        "packageManagerVersion": package_manager_version,
        "templateHasPlayground": is_directory(chosen_template_dir / PLAYGROUND_DIRNAME),
        **config.template_context(),
    }

    prune = [] if config.public else public_paths_for(config.lang)
    finalize_tree(Path(target_dir), context, prune)
    _strip_biome_root(Path(target_dir))


def get_required_github_secrets(target_dir: Path) -> list[str]:
    """Secret names referenced by the generated GitHub workflows, sorted."""
    workflows_dir = Path(target_dir) / WORKFLOWS_DIR
    if not is_directory(workflows_dir):
        return []

    secrets: set[str] = set()
    for workflow in sorted(workflows_dir.iterdir()):
        if not workflow.is_file():
            continue
        content = workflow.read_text(encoding="utf-8")
        secrets.update(
            name for name in _SECRET_PATTERN.findall(content) if name.upper() not in _IMPLICIT_SECRETS
        )
    return sorted(secrets)


__all__ = [
    "MIT_LICENSE",
    "apply_template_modifications",
    "create_package_directory",
    "get_required_github_secrets",
    "render_mit_license",
    "write_package_template_files",
]
