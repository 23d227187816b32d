"""Core utilities: settings, filesystem, rendering, shell and git helpers."""

from .config import Settings
from .fs import (
    copy_directory_safe,
    copy_file_safe,
    ensure_directory,
    is_directory,
    remove_by_basename,
    remove_matching_recursively,
    render_placeholders,
    write_file,
)
from .render import TemplateRenderError, is_template_file, render_text, rendered_name

__all__ = [
    "Settings",
    "TemplateRenderError",
    "copy_directory_safe",
    "copy_file_safe",
    "ensure_directory",
    "is_directory",
    "is_template_file",
    "remove_by_basename",
    "remove_matching_recursively",
    "render_placeholders",
    "render_text",
    "rendered_name",
    "write_file",
]
