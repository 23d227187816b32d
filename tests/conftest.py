from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Iterator

import pytest
from rich.console import Console

from yehle.core.config import Settings
from yehle.template.registry import TemplateRegistry

TEMPLATE_FILES: dict[str, str] = {
    "shared/README.mustache.md": "# {{ name }}\n",
    "shared/CONTRIBUTING.mustache.md": "Contribute to {{ name }}\n",
    "shared/CODE_OF_CONDUCT.md": "Be kind\n",
    "shared/.gitignore": "node_modules/\n",
    "typescript/shared/biome.json": '{\n\t"root": true,\n\t"linter": {\n\t\t"enabled": true\n\t}\n}\n',
    "typescript/shared/.github/workflows/ci.yml": (
        "env:\n"
        "  NPM_TOKEN: ${{ secrets.NPM_TOKEN }}\n"
        "  GITHUB_TOKEN: ${{ secrets.GITHUB_TOKEN }}\n"
    ),
    "typescript/package/shared/package.mustache.json": (
        '{"name": "{{name}}", "private": {{^public}}true{{/public}}{{#public}}false{{/public}}, '
        '"packageManager": "{{ packageManagerVersion }}", '
        '"playground": {{ templateHasPlayground }} }\n'
    ),
    "typescript/package/shared/src/index.ts": "export {};\n",
    "typescript/package/basic/src/index.ts": "export const basic = true;\n",
    "typescript/package/react/src/index.ts": "export const react = true;\n",
    "typescript/package/react/playground/main.tsx": "render();\n",
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def build_zip(files: dict[str, str], prefix: str = "agrawal-rohit-yehle-abc123/templates/") -> bytes:
    """Zip ``files`` the way GitHub archives a repository."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for relative, content in files.items():
            archive.writestr(prefix + relative, content)
    return buffer.getvalue()


@pytest.fixture()
def templates_root(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "templates", TEMPLATE_FILES)


@pytest.fixture()
def local_settings(templates_root: Path) -> Settings:
    return Settings(local_mode=True, local_root=templates_root)


@pytest.fixture()
def local_registry(local_settings: Settings) -> Iterator[TemplateRegistry]:
    with TemplateRegistry(local_settings) as registry:
        yield registry


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=120)


@pytest.fixture()
def make_tree():
    return write_tree


@pytest.fixture()
def make_zip():
    return build_zip
