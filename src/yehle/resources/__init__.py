"""Generatable resources (currently packages)."""
