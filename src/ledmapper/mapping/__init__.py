"""Position mapping model and reordering algorithm."""

from .layout import DEFAULT_SPACING, group_rows, layout_nodes
from .model import MappingModel
from .nodes import (
    clamp_position,
    identity_nodes,
    move_node,
    nodes_from_ledmap,
    to_ledmap,
    validate_nodes,
)

__all__ = [
    "DEFAULT_SPACING",
    "MappingModel",
    "clamp_position",
    "group_rows",
    "identity_nodes",
    "layout_nodes",
    "move_node",
    "nodes_from_ledmap",
    "to_ledmap",
    "validate_nodes",
]
