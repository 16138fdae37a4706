"""Mapping model owning the node set of one editing session."""

import logging
from collections.abc import Iterable

from ledmapper.exceptions import UnknownPixelError
from ledmapper.models import LedMap, PixelNode, PlacedNode

from .layout import DEFAULT_SPACING, layout_nodes
from .nodes import identity_nodes, move_node, nodes_from_ledmap, to_ledmap, validate_nodes

logger = logging.getLogger(__name__)


class MappingModel:
    """
    Physical <-> logical pixel bijection.

    ``reorder`` is the only mutator. It computes the complete new node set
    first and swaps it in with a single assignment, so readers never see a
    partially shifted state.

    Usage:
        model = MappingModel.from_ledmap(device.ledmap, total=device.total_pixels)
        model.reorder(led_index=4, new_pos=0)
        model.to_ledmap().map  # [4, 0, 1, 2, 3]
    """

    def __init__(self, nodes: Iterable[PixelNode]):
        """
        Initialize from an existing node set.

        Raises:
            MappingInvariantError: If the nodes are not a dense permutation
        """
        nodes = sorted(nodes, key=lambda node: node.led_index)
        validate_nodes(nodes)
        self._nodes: tuple[PixelNode, ...] = tuple(nodes)

    @classmethod
    def identity(cls, total: int) -> "MappingModel":
        """Create an unmapped model of ``total`` pixels."""
        return cls(identity_nodes(total))

    @classmethod
    def from_ledmap(cls, ledmap: LedMap | None, total: int | None = None) -> "MappingModel":
        """Seed a model from a persisted map, padding with identity nodes."""
        return cls(nodes_from_ledmap(ledmap, total))

    @property
    def nodes(self) -> tuple[PixelNode, ...]:
        """Current node set ordered by led_index."""
        return self._nodes

    @property
    def total(self) -> int:
        """Number of pixels."""
        return len(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def position_of(self, led_index: int) -> int:
        """Get the logical position of a physical pixel."""
        if not 0 <= led_index < len(self._nodes):
            raise UnknownPixelError(led_index, len(self._nodes))
        return self._nodes[led_index].pos_index

    def node_at(self, pos_index: int) -> PixelNode | None:
        """Get the node shown at a logical position, or None if out of range."""
        return next((node for node in self._nodes if node.pos_index == pos_index), None)

    def reorder(self, led_index: int, new_pos: int) -> int:
        """
        Move a physical pixel to a new logical position.

        Args:
            led_index: Physical index to move
            new_pos: Target position, clamped to 0..total-1

        Returns:
            The position the pixel ended up at

        Raises:
            UnknownPixelError: If led_index is not part of the mapping
        """
        updated = move_node(self._nodes, led_index, new_pos)
        self._nodes = tuple(updated)
        final_pos = self._nodes[led_index].pos_index
        logger.debug(f"Moved pixel {led_index} to position {final_pos}")
        return final_pos

    def to_ledmap(self) -> LedMap:
        """Get the persisted form of the current order."""
        return to_ledmap(self._nodes)

    def layout(self, spacing: int = DEFAULT_SPACING, top_padding: int = 0) -> list[PlacedNode]:
        """Get preview coordinates for the current order."""
        return layout_nodes(self._nodes, spacing=spacing, top_padding=top_padding)
