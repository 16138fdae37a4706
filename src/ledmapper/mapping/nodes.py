"""Node set operations: seeding, reordering and conversion to ledmap form.

A node set of size ``total`` always holds every led_index and every
pos_index in ``0..total-1`` exactly once. All functions here return new
lists and never modify their input.
"""

import logging
from collections.abc import Iterable, Sequence

from ledmapper.exceptions import MappingInvariantError, UnknownPixelError
from ledmapper.models import LedMap, PixelNode

logger = logging.getLogger(__name__)


def identity_nodes(total: int) -> list[PixelNode]:
    """Create the unmapped node set (pos_index == led_index)."""
    return [PixelNode(led_index=i, pos_index=i) for i in range(total)]


def nodes_from_ledmap(ledmap: LedMap | None, total: int | None = None) -> list[PixelNode]:
    """
    Build a node set from a persisted map.

    The map is inverted into nodes and ordered by led_index. The first
    ``total`` nodes are taken from this list while it lasts; positions past
    its end get identity nodes, so pixels added to the controller since the
    map was saved keep their wiring order behind the mapped ones.

    A map longer than ``total`` (pixels removed since it was saved) loses
    the entries for pixels that no longer exist; the remaining pixels keep
    their relative order and close up the gaps.

    Args:
        ledmap: Persisted map, or None when the controller has none
        total: Size of the resulting node set (defaults to the map length)

    Returns:
        Node set ordered by led_index
    """
    entries = list(ledmap.map) if ledmap is not None else []

    if total is None:
        total = len(entries)
    elif len(entries) > total:
        logger.warning(
            f"Stored map has {len(entries)} entries but the controller reports "
            f"{total} pixels; entries for missing pixels are ignored"
        )
        entries = [led for led in entries if led < total]

    inverted = sorted(
        (PixelNode(led_index=led, pos_index=pos) for pos, led in enumerate(entries)),
        key=lambda node: node.led_index,
    )

    return [
        inverted[i] if i < len(inverted) else PixelNode(led_index=i, pos_index=i)
        for i in range(total)
    ]


def to_ledmap(nodes: Iterable[PixelNode]) -> LedMap:
    """Project a node set onto its persisted form (led_index by pos_index)."""
    ordered = sorted(nodes, key=lambda node: node.pos_index)
    return LedMap(map=[node.led_index for node in ordered])


def validate_nodes(nodes: Sequence[PixelNode]) -> None:
    """
    Check the dense-permutation invariant.

    Raises:
        MappingInvariantError: If led_index or pos_index values are not
            exactly 0..len(nodes)-1
    """
    expected = list(range(len(nodes)))
    if sorted(node.led_index for node in nodes) != expected:
        raise MappingInvariantError("led_index", f"are not a permutation of 0..{len(nodes) - 1}")
    if sorted(node.pos_index for node in nodes) != expected:
        raise MappingInvariantError("pos_index", f"are not a permutation of 0..{len(nodes) - 1}")


def clamp_position(pos_index: int, total: int) -> int:
    """Clamp a requested position into 0..total-1."""
    return min(max(pos_index, 0), total - 1)


def move_node(nodes: Sequence[PixelNode], led_index: int, new_pos: int) -> list[PixelNode]:
    """
    Move one pixel to a new logical position.

    Every node whose position lies between the old and the new position
    (inclusive) shifts one slot toward the vacated end; nodes outside that
    range keep their position. This is a remove-then-reinsert on the
    logical order, done as a contiguous shift.

    Args:
        nodes: Current node set
        led_index: Physical index of the pixel to move
        new_pos: Target logical position (clamped to 0..total-1)

    Returns:
        New node set in the same order as ``nodes``

    Raises:
        UnknownPixelError: If led_index is not in the node set

    Example:
        >>> nodes = identity_nodes(5)
        >>> to_ledmap(move_node(nodes, 4, 0)).map
        [4, 0, 1, 2, 3]
    """
    moving = next((node for node in nodes if node.led_index == led_index), None)
    if moving is None:
        raise UnknownPixelError(led_index, len(nodes))

    new_pos = clamp_position(new_pos, len(nodes))
    old_pos = moving.pos_index
    if new_pos == old_pos:
        return list(nodes)

    low, high = min(old_pos, new_pos), max(old_pos, new_pos)
    shift = -1 if old_pos < new_pos else 1

    moved = []
    for node in nodes:
        if node.led_index == led_index:
            moved.append(node.moved_to(new_pos))
        elif low <= node.pos_index <= high:
            moved.append(node.moved_to(node.pos_index + shift))
        else:
            moved.append(node)
    return moved
