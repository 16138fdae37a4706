"""Unit tests for the mapping model and node set operations."""

import random

import pytest

from ledmapper.exceptions import MappingInvariantError, UnknownPixelError
from ledmapper.mapping import (
    MappingModel,
    identity_nodes,
    move_node,
    nodes_from_ledmap,
    to_ledmap,
    validate_nodes,
)
from ledmapper.models import LedMap, PixelNode


def positions(nodes):
    """pos_index values in led_index order."""
    return [n.pos_index for n in sorted(nodes, key=lambda n: n.led_index)]


class TestNodeSetSeeding:
    """Test building node sets."""

    @pytest.mark.unit
    def test_identity_nodes(self):
        """Test that identity nodes map every pixel to its own position."""
        nodes = identity_nodes(4)
        assert [(n.led_index, n.pos_index) for n in nodes] == [(0, 0), (1, 1), (2, 2), (3, 3)]

    @pytest.mark.unit
    def test_identity_nodes_empty(self):
        """Test zero pixels gives an empty node set."""
        assert identity_nodes(0) == []

    @pytest.mark.unit
    def test_from_ledmap_inverts_map(self):
        """Test that map[i] = led becomes node(led, pos=i)."""
        nodes = nodes_from_ledmap(LedMap(map=[2, 0, 1]))
        assert nodes == [
            PixelNode(led_index=0, pos_index=1),
            PixelNode(led_index=1, pos_index=2),
            PixelNode(led_index=2, pos_index=0),
        ]

    @pytest.mark.unit
    def test_from_ledmap_pads_with_identity(self):
        """Test that pixels beyond the stored map get identity nodes."""
        nodes = nodes_from_ledmap(LedMap(map=[1, 0]), total=4)
        assert [(n.led_index, n.pos_index) for n in nodes] == [(0, 1), (1, 0), (2, 2), (3, 3)]
        validate_nodes(nodes)

    @pytest.mark.unit
    def test_from_longer_ledmap_drops_missing_pixels(self):
        """Test that entries for pixels beyond total are dropped and the rest close up."""
        nodes = nodes_from_ledmap(LedMap(map=[5, 3, 0, 4, 1, 2]), total=3)
        validate_nodes(nodes)
        assert to_ledmap(nodes).map == [0, 1, 2]

        nodes = nodes_from_ledmap(LedMap(map=[2, 4, 0, 3, 1]), total=3)
        validate_nodes(nodes)
        assert to_ledmap(nodes).map == [2, 0, 1]
        assert MappingModel(nodes).total == 3

    @pytest.mark.unit
    def test_from_missing_ledmap_is_identity(self):
        """Test that no stored map yields the identity order."""
        assert nodes_from_ledmap(None, total=3) == identity_nodes(3)

    @pytest.mark.unit
    def test_from_ledmap_ordered_by_led_index(self):
        """Test that physical index 0 comes first."""
        nodes = nodes_from_ledmap(LedMap(map=[3, 1, 0, 2]))
        assert [n.led_index for n in nodes] == [0, 1, 2, 3]

    @pytest.mark.unit
    def test_round_trip(self):
        """Test that seeding from a map and converting back returns the same map."""
        ledmap = LedMap(map=[5, 3, 0, 4, 1, 2])
        assert to_ledmap(nodes_from_ledmap(ledmap, total=6)) == ledmap


class TestToLedmap:
    """Test conversion to the persisted form."""

    @pytest.mark.unit
    def test_sorted_by_position(self):
        """Test that the map lists led indices in position order."""
        nodes = [
            PixelNode(led_index=0, pos_index=2),
            PixelNode(led_index=1, pos_index=0),
            PixelNode(led_index=2, pos_index=1),
        ]
        assert to_ledmap(nodes).map == [1, 2, 0]

    @pytest.mark.unit
    def test_input_order_irrelevant(self):
        """Test that node order in the input does not matter."""
        nodes = nodes_from_ledmap(LedMap(map=[2, 0, 1]))
        assert to_ledmap(reversed(nodes)) == to_ledmap(nodes)


class TestMoveNode:
    """Test the reorder operation."""

    @pytest.mark.unit
    def test_move_last_to_front(self):
        """Test moving pixel 4 to position 0 of an identity map of 5."""
        moved = move_node(identity_nodes(5), led_index=4, new_pos=0)
        assert to_ledmap(moved).map == [4, 0, 1, 2, 3]

    @pytest.mark.unit
    def test_move_first_to_back(self):
        """Test moving forward shifts the nodes in between back by one."""
        moved = move_node(identity_nodes(5), led_index=0, new_pos=4)
        assert to_ledmap(moved).map == [1, 2, 3, 4, 0]

    @pytest.mark.unit
    def test_move_inside(self):
        """Test that nodes outside the affected range keep their position."""
        moved = move_node(identity_nodes(6), led_index=1, new_pos=3)
        assert positions(moved) == [0, 3, 1, 2, 4, 5]

    @pytest.mark.unit
    def test_move_to_same_position_changes_nothing(self):
        """Test that reordering to the current position is a no-op."""
        nodes = nodes_from_ledmap(LedMap(map=[2, 0, 1, 3]))
        assert move_node(nodes, led_index=0, new_pos=1) == nodes

    @pytest.mark.unit
    def test_clamps_high_position(self):
        """Test that positions past the end clamp to the last slot."""
        moved = move_node(identity_nodes(4), led_index=0, new_pos=99)
        assert to_ledmap(moved).map == [1, 2, 3, 0]

    @pytest.mark.unit
    def test_clamps_negative_position(self):
        """Test that negative positions clamp to 0."""
        moved = move_node(identity_nodes(4), led_index=3, new_pos=-5)
        assert to_ledmap(moved).map == [3, 0, 1, 2]

    @pytest.mark.unit
    def test_unknown_pixel(self):
        """Test that moving a pixel that does not exist raises."""
        with pytest.raises(UnknownPixelError) as exc_info:
            move_node(identity_nodes(3), led_index=7, new_pos=0)
        assert exc_info.value.led_index == 7

    @pytest.mark.unit
    def test_input_not_modified(self):
        """Test that move_node returns a new list and leaves its input alone."""
        nodes = identity_nodes(3)
        move_node(nodes, led_index=2, new_pos=0)
        assert nodes == identity_nodes(3)

    @pytest.mark.unit
    def test_led_indices_untouched(self):
        """Test that only pos_index values change."""
        moved = move_node(identity_nodes(5), led_index=1, new_pos=4)
        assert [n.led_index for n in moved] == [0, 1, 2, 3, 4]

    @pytest.mark.unit
    def test_random_moves_keep_permutation(self):
        """Test the dense permutation invariant after many random moves."""
        rng = random.Random(1234)
        total = 17
        nodes = identity_nodes(total)
        for _ in range(300):
            nodes = move_node(nodes, rng.randrange(total), rng.randrange(-3, total + 3))
            validate_nodes(nodes)
        assert sorted(n.pos_index for n in nodes) == list(range(total))
        assert sorted(n.led_index for n in nodes) == list(range(total))

    @pytest.mark.unit
    def test_matches_list_move(self):
        """Test reorder equals remove-then-insert on the logical order."""
        rng = random.Random(99)
        total = 9
        nodes = identity_nodes(total)
        order = list(range(total))
        for _ in range(100):
            led = rng.randrange(total)
            pos = rng.randrange(total)
            nodes = move_node(nodes, led, pos)
            order.remove(led)
            order.insert(pos, led)
            assert to_ledmap(nodes).map == order


class TestValidateNodes:
    """Test invariant checking."""

    @pytest.mark.unit
    def test_valid(self):
        """Test that a valid node set passes."""
        validate_nodes(nodes_from_ledmap(LedMap(map=[1, 2, 0])))

    @pytest.mark.unit
    def test_duplicate_position(self):
        """Test that two nodes at one position are rejected."""
        nodes = [PixelNode(led_index=0, pos_index=0), PixelNode(led_index=1, pos_index=0)]
        with pytest.raises(MappingInvariantError) as exc_info:
            validate_nodes(nodes)
        assert exc_info.value.field == "pos_index"

    @pytest.mark.unit
    def test_gap_in_led_indices(self):
        """Test that a missing physical index is rejected."""
        nodes = [PixelNode(led_index=0, pos_index=0), PixelNode(led_index=2, pos_index=1)]
        with pytest.raises(MappingInvariantError) as exc_info:
            validate_nodes(nodes)
        assert exc_info.value.field == "led_index"

    @pytest.mark.unit
    def test_nodes_are_frozen(self):
        """Test that nodes cannot be mutated in place."""
        node = PixelNode(led_index=0, pos_index=0)
        with pytest.raises(ValueError):
            node.pos_index = 3


class TestMappingModel:
    """Test the session-owned mapping model."""

    @pytest.mark.unit
    def test_identity(self):
        """Test creating an identity model."""
        model = MappingModel.identity(5)
        assert model.total == 5
        assert len(model) == 5
        assert model.to_ledmap() == LedMap.identity(5)

    @pytest.mark.unit
    def test_reorder_example(self):
        """Test the documented example: pixel 4 to the front."""
        model = MappingModel.identity(5)
        assert model.reorder(led_index=4, new_pos=0) == 0
        assert model.to_ledmap().map == [4, 0, 1, 2, 3]

    @pytest.mark.unit
    def test_reorder_returns_clamped_position(self):
        """Test that the final position is reported after clamping."""
        model = MappingModel.identity(3)
        assert model.reorder(led_index=0, new_pos=10) == 2

    @pytest.mark.unit
    def test_position_and_lookup(self):
        """Test position_of and node_at agree."""
        model = MappingModel.from_ledmap(LedMap(map=[2, 0, 1]))
        assert model.position_of(2) == 0
        assert model.node_at(0) == PixelNode(led_index=2, pos_index=0)
        assert model.node_at(3) is None

    @pytest.mark.unit
    def test_position_of_unknown(self):
        """Test position_of with an unknown pixel."""
        with pytest.raises(UnknownPixelError):
            MappingModel.identity(2).position_of(5)

    @pytest.mark.unit
    def test_rejects_invalid_nodes(self):
        """Test that the model refuses an invalid node set."""
        with pytest.raises(MappingInvariantError):
            MappingModel([PixelNode(led_index=1, pos_index=0)])

    @pytest.mark.unit
    def test_failed_reorder_leaves_state(self):
        """Test that a rejected reorder does not change the model."""
        model = MappingModel.from_ledmap(LedMap(map=[1, 0]))
        before = model.nodes
        with pytest.raises(UnknownPixelError):
            model.reorder(led_index=5, new_pos=0)
        assert model.nodes == before

    @pytest.mark.unit
    def test_nodes_snapshot_is_stable(self):
        """Test that a nodes snapshot taken before a reorder is not affected by it."""
        model = MappingModel.identity(4)
        snapshot = model.nodes
        model.reorder(led_index=3, new_pos=0)
        assert positions(snapshot) == [0, 1, 2, 3]
        assert positions(model.nodes) == [1, 2, 3, 0]
