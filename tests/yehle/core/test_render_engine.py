from __future__ import annotations

import pytest

from yehle.core.render import (
    TemplateRenderError,
    is_template_file,
    protect_ci_expressions,
    render_text,
    rendered_name,
)


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("package.mustache.json", "package.json"),
        ("README.mustache.md", "README.md"),
        ("config.mustache", "config"),
        ("a.b.mustache.yml", "a.b.yml"),
        ("mustache.txt", None),
        ("package.json", None),
        ("package.mustaches.json", None),
    ],
)
def test_rendered_name(filename: str, expected: str | None):
    assert rendered_name(filename) == expected
    assert is_template_file(filename) is (expected is not None)


def test_render_text_substitutes_known_keys():
    assert render_text("Hello {{ name }}!", {"name": "world"}) == "Hello world!"


def test_render_text_missing_keys_render_empty():
    assert render_text("[{{ missing }}]", {}) == "[]"
    assert render_text("[{{ missing.deeper }}]", {}) == "[]"


def test_render_text_booleans_and_none():
    rendered = render_text("{{ yes }} {{ no }} [{{ nothing }}]", {"yes": True, "no": False, "nothing": None})

    assert rendered == "true false []"


def test_render_text_keeps_trailing_newline():
    assert render_text("{{ a }}\n", {"a": "x"}) == "x\n"


def test_render_text_sections():
    template = "{{#public}}public{{/public}}{{^public}}private{{/public}}"

    assert render_text(template, {"public": True}) == "public"
    assert render_text(template, {"public": False}) == "private"
    assert render_text(template, {}) == "private"


def test_standalone_section_lines_are_dropped():
    template = "a\n  {{#public}}\n  b: {{name}}\n  {{/public}}\nc\n"

    assert render_text(template, {"public": True, "name": "x"}) == "a\n  b: x\nc\n"
    assert render_text(template, {"public": False}) == "a\nc\n"


def test_unescaped_tags_and_comments():
    template = "{{! not rendered }}<{{{html}}}|{{& html}}|{{html}}>"

    assert render_text(template, {"html": "<b>"}) == "<<b>|<b>|<b>>"


@pytest.mark.parametrize(
    "text",
    [
        "## Usage {#usage}\n",
        "class Counter { #count = 0; {#count} }\n",
        'printf("{%d}", n);\n',
        "<% erb %> {# jinja comment #}\n",
    ],
)
def test_foreign_brace_syntax_passes_through(text: str):
    assert render_text(text, {"name": "demo"}) == text


def test_foreign_syntax_next_to_placeholders():
    text = "# {{name}} {#top}\nfmt: '{%s}'\ntoken: ${{ secrets.NPM_TOKEN }}\n"

    rendered = render_text(text, {"name": "demo"})

    assert rendered == "# demo {#top}\nfmt: '{%s}'\ntoken: ${{ secrets.NPM_TOKEN }}\n"


def test_ci_expression_passes_through_byte_for_byte():
    text = "app: {{appName}}\nsecret: ${{ secrets.MY_SECRET }}\nif: ${{ github.event_name == 'push' }}\n"

    rendered = render_text(text, {"appName": "x"})

    assert rendered == "app: x\nsecret: ${{ secrets.MY_SECRET }}\nif: ${{ github.event_name == 'push' }}\n"


def test_ci_expression_matching_a_context_key_is_rendered():
    assert render_text("v${{ version }}", {"version": "1.2.3"}) == "v$1.2.3"


def test_protect_ci_expressions_only_fences_unknown_expressions():
    text = "${{ secrets.TOKEN }} ${{ name }}"

    protected = protect_ci_expressions(text, {"name": "x"})

    assert protected == "{{% raw %}}${{ secrets.TOKEN }}{{% endraw %}} ${{ name }}"


def test_ci_expressions_inside_sections():
    text = "{{#public}}\ntoken: ${{ secrets.NPM_TOKEN }}\n{{/public}}\n"

    assert render_text(text, {"public": True}) == "token: ${{ secrets.NPM_TOKEN }}\n"
    assert render_text(text, {"public": False}) == ""


def test_unclosed_section_reports_source_and_line():
    with pytest.raises(TemplateRenderError, match=r"broken.mustache.md \(line 2\): unclosed section 'public'"):
        render_text("ok\n{{#public}}\n", {}, source="broken.mustache.md")


def test_mismatched_closing_tag_is_rejected():
    with pytest.raises(TemplateRenderError, match="closing tag for section 'private'"):
        render_text("{{#public}}x{{/private}}", {}, source="broken.mustache.md")


def test_render_text_reports_syntax_errors_with_source():
    with pytest.raises(TemplateRenderError, match="broken.mustache.md"):
        render_text("{{ name ", {}, source="broken.mustache.md")
