"""CLI command modules for yehle."""

from .package import package

__all__ = ["package"]
