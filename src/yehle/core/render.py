"""Placeholder rendering for ``*.mustache.*`` template files.

Template files opt into substitution by carrying a ``mustache`` segment in
their dotted filename (``config.mustache.json``). Their contents use mustache
tags: ``{{key}}`` variables, ``{{#key}}...{{/key}}`` sections,
``{{^key}}...{{/key}}`` inverted sections, ``{{{key}}}``/``{{&key}}`` and
``{{! comments }}``. Rendering is done by Jinja2 with its block and comment
delimiters moved onto mustache-shaped tags, so ``{%``, ``{#`` and ``#}`` in
ordinary file content are plain text.

GitHub Actions expressions such as ``${{ secrets.NPM_TOKEN }}`` share the brace
syntax, so any ``${{ ... }}`` whose expression is not a context key is fenced
in a ``raw`` block before rendering and comes out unchanged.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping

from jinja2 import ChainableUndefined, Environment, TemplateSyntaxError

MARKER = "mustache"

BLOCK_START = "{{%"
BLOCK_END = "%}}"
COMMENT_START = "{{!"
COMMENT_END = "}}"

_CI_EXPRESSION = re.compile(r"\$\{\{(.*?)\}\}", re.DOTALL)
_UNESCAPED_TAG = re.compile(r"(?<!\$)\{\{(?:\{\s*([\w.]+)\s*\}|&\s*([\w.]+)\s*)\}\}")
_SECTION_TAG = re.compile(
    r"(?P<standalone>^[ \t]*)?(?<!\$)\{\{(?P<kind>[#^/])\s*(?P<key>[\w.]+)\s*\}\}"
    r"(?(standalone)[ \t]*(?P<eol>\r?\n|\Z))",
    re.MULTILINE,
)


class TemplateRenderError(RuntimeError):
    """Raised when a template file cannot be parsed."""


def rendered_name(filename: str) -> str | None:
    """Return ``filename`` with the marker segment removed, or None.

    The first dotted segment is the stem and never counts as the marker, so
    ``mustache.txt`` is an ordinary file.
    """
    segments = filename.split(".")
    for index in range(1, len(segments)):
        if segments[index] == MARKER:
            return ".".join(segments[:index] + segments[index + 1:])
    return None


def is_template_file(filename: str) -> bool:
    return rendered_name(filename) is not None


def _finalize(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, bool):
        return json.dumps(value)
    return value


_environment = Environment(
    block_start_string=BLOCK_START,
    block_end_string=BLOCK_END,
    comment_start_string=COMMENT_START,
    comment_end_string=COMMENT_END,
    autoescape=False,
    keep_trailing_newline=True,
    undefined=ChainableUndefined,
    finalize=_finalize,
)


def _block(statement: str) -> str:
    return f"{BLOCK_START} {statement} {BLOCK_END}"


def protect_ci_expressions(text: str, context: Mapping[str, Any]) -> str:
    """Fence ``${{ expr }}`` sequences that are not placeholders for ``context``."""

    def _fence(match: re.Match[str]) -> str:
        if match.group(1).strip() in context:
            return match.group(0)
        return _block("raw") + match.group(0) + _block("endraw")

    return _CI_EXPRESSION.sub(_fence, text)


def translate_sections(text: str, *, source: str = "<string>") -> str:
    """Rewrite mustache sections and unescaped tags as Jinja2 statements.

    A section tag alone on its line takes the whole line with it. Its newline
    is kept inside a comment so Jinja2 line numbers still match the file.
    """
    open_sections: list[tuple[str, int]] = []

    def _line(position: int) -> int:
        return text.count("\n", 0, position) + 1

    def _replace(match: re.Match[str]) -> str:
        kind, key = match.group("kind"), match.group("key")
        if kind == "#":
            open_sections.append((key, _line(match.start("kind"))))
            statement = _block(f"if {key}")
        elif kind == "^":
            open_sections.append((key, _line(match.start("kind"))))
            statement = _block(f"if not {key}")
        else:
            if not open_sections or open_sections[-1][0] != key:
                raise TemplateRenderError(
                    f"Invalid template syntax in {source} (line {_line(match.start('kind'))}): "
                    f"unexpected closing tag for section '{key}'"
                )
            open_sections.pop()
            statement = _block("endif")
        eol = match.group("eol")
        if eol:
            statement += COMMENT_START + eol + COMMENT_END
        return statement

    translated = _SECTION_TAG.sub(_replace, text)
    if open_sections:
        key, line = open_sections[-1]
        raise TemplateRenderError(f"Invalid template syntax in {source} (line {line}): unclosed section '{key}'")
    return _UNESCAPED_TAG.sub(lambda m: "{{ " + (m.group(1) or m.group(2)) + " }}", translated)


def render_text(text: str, context: Mapping[str, Any], *, source: str = "<string>") -> str:
    """Render the mustache tags in ``text`` with ``context``."""
    prepared = translate_sections(protect_ci_expressions(text, context), source=source)
    try:
        template = _environment.from_string(prepared)
    except TemplateSyntaxError as exc:
        raise TemplateRenderError(f"Invalid template syntax in {source} (line {exc.lineno}): {exc.message}") from exc
    return template.render(**dict(context))


__all__ = [
    "MARKER",
    "TemplateRenderError",
    "is_template_file",
    "protect_ci_expressions",
    "render_text",
    "rendered_name",
    "translate_sections",
]
