"""Command line interface for ledmapper."""

from .main import cli

__all__ = ["cli"]
