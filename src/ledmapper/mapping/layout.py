"""Preview layout: place nodes on a grid of rows for display."""

from collections.abc import Iterable

from ledmapper.models import PixelNode, PlacedNode

DEFAULT_SPACING = 50


def layout_nodes(
    nodes: Iterable[PixelNode],
    spacing: int = DEFAULT_SPACING,
    top_padding: int = 0,
) -> list[PlacedNode]:
    """
    Assign preview coordinates to a node set.

    Nodes are walked in wiring order (ascending led_index). A row runs for
    as long as pos_index keeps moving in one direction; the first step
    against that direction starts a new row. Zero steps never break a row,
    and a fresh row needs one non-zero step before it has a direction.

    Coordinates are cosmetic: x follows pos_index, y follows the row.

    Args:
        nodes: Node set (any order)
        spacing: Distance between neighbouring slots and rows
        top_padding: Extra space above the first row

    Returns:
        Placed nodes ordered by led_index
    """
    half = spacing / 2
    row = 0
    direction = 0
    previous: int | None = None
    placed = []

    for node in sorted(nodes, key=lambda n: n.led_index):
        if previous is not None:
            step = node.pos_index - previous
            if step:
                sign = 1 if step > 0 else -1
                if direction and sign != direction:
                    row += 1
                    direction = 0
                else:
                    direction = sign
        previous = node.pos_index

        placed.append(
            PlacedNode(
                led_index=node.led_index,
                pos_index=node.pos_index,
                row=row,
                x=node.pos_index * spacing + half,
                y=row * spacing + top_padding + half,
            )
        )

    return placed


def group_rows(placed: Iterable[PlacedNode]) -> list[list[PlacedNode]]:
    """Split placed nodes into rows, each ordered by position."""
    rows: dict[int, list[PlacedNode]] = {}
    for node in placed:
        rows.setdefault(node.row, []).append(node)
    return [sorted(rows[r], key=lambda n: n.pos_index) for r in sorted(rows)]
