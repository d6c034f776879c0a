"""Tests for the movement engine."""

import pytest

from ranknft.ranking.models import Collection
from ranknft.ranking.movement import (
    ABSENT_RANK,
    compute_movement,
    movement_color,
    rank_collections,
    resolve_color,
)


class TestComputeMovement:
    """Unit tests for compute_movement."""

    @pytest.mark.parametrize(
        ("current", "reference", "expected"),
        [(3, 5, "up"), (5, 3, "down"), (4, 4, "same"), (100, 101, "up"), (1, 1, "same")],
    )
    def test_examples(self, current, reference, expected):
        assert compute_movement(current, reference) == expected

    def test_matches_comparison_for_all_ranks(self):
        """Test up/down/same against the rank comparison over 1..101."""
        for current in range(1, 102):
            for reference in range(1, 102):
                expected = "up" if current < reference else "down" if current > reference else "same"
                assert compute_movement(current, reference) == expected

    def test_absent_reference_is_up(self):
        """Test that a collection missing from the reference always moved up."""
        assert all(compute_movement(rank, None) == "up" for rank in range(1, 101))

    def test_absent_rank_sentinel(self):
        """Test the sentinel sits just outside the top 100."""
        assert ABSENT_RANK == 101


class TestColors:
    """Unit tests for sticky and plain colors."""

    def test_up_is_green(self):
        assert resolve_color("up", "red") == "green"

    def test_down_is_red(self):
        assert resolve_color("down", "green") == "red"

    def test_same_keeps_previous(self):
        assert resolve_color("same", "green") == "green"

    def test_same_without_previous_is_red(self):
        assert resolve_color("same", None) == "red"

    def test_sticky_sequence(self):
        """Test the hysteresis over [up, same, same, down, same]."""
        color = None
        seen = []
        for movement in ["up", "same", "same", "down", "same"]:
            color = resolve_color(movement, color)
            seen.append(color)
        assert seen == ["green", "green", "green", "red", "red"]

    def test_plain_colors(self):
        """Test the non-sticky mapping with orange for 'same'."""
        assert movement_color("up") == "green"
        assert movement_color("down") == "red"
        assert movement_color("same") == "orange"


class TestRankCollections:
    """Unit tests for rank_collections."""

    def test_ranks_by_position(self, collections):
        """Test that ranks are dense and follow fetch order."""
        ranked = rank_collections(collections, {})
        assert [(r.rank, r.collection.id) for r in ranked] == [(1, "a"), (2, "b"), (3, "c")]

    def test_empty_reference_all_up(self, collections):
        """Test that with an empty reference every collection is new."""
        ranked = rank_collections(collections, {})
        assert [r.movement for r in ranked] == ["up", "up", "up"]
        assert all(r.previous_rank is None for r in ranked)

    def test_no_reference_all_same(self, collections):
        """Test that with no reference point at all every movement is 'same'."""
        ranked = rank_collections(collections, None)
        assert [r.movement for r in ranked] == ["same", "same", "same"]
        assert [r.color for r in ranked] == ["orange", "orange", "orange"]

    def test_movements_against_reference(self, collections):
        """Test mixed movements and recorded previous ranks."""
        ranked = rank_collections(collections, {"a": 2, "b": 1, "c": 3})
        assert [r.movement for r in ranked] == ["up", "down", "same"]
        assert [r.previous_rank for r in ranked] == [2, 1, 3]

    def test_sticky_colors(self, collections):
        """Test that previous_colors switches on sticky colors."""
        ranked = rank_collections(
            collections,
            {"a": 2, "b": 1, "c": 3},
            previous_colors={"c": "green"},
        )
        assert [r.color for r in ranked] == ["green", "red", "green"]

    def test_sticky_same_defaults_red(self, collections):
        """Test that an unseen 'same' collection in sticky mode is red."""
        ranked = rank_collections(collections[2:], {"c": 1}, previous_colors={})
        assert ranked[0].movement == "same"
        assert ranked[0].color == "red"

    def test_limit(self):
        """Test that at most `limit` collections are ranked."""
        many = [Collection(id=str(i)) for i in range(150)]
        ranked = rank_collections(many, {})
        assert len(ranked) == 100
        assert ranked[-1].rank == 100
