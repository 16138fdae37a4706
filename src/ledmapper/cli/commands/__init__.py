"""CLI commands for ledmapper."""

from .config import config_group
from .device import export, highlight, info, move, show

__all__ = ["config_group", "export", "highlight", "info", "move", "show"]
