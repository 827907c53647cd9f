"""Tests for grouping segments into stacks and ordering change ids."""

from stakk.graph.stacks import group_segments_into_stacks, topological_sort
from stakk.graph.types import ChangeGraph
from tests.test_utils.builders import segment


def _segments(*names: str) -> dict:
    return {f"ch_{name}": segment([name]) for name in names}


class TestGroupSegmentsIntoStacks:
    def test_walks_each_leaf_to_its_root(self) -> None:
        """A three-deep chain comes back trunk first."""
        adjacency = {"ch_c": "ch_b", "ch_b": "ch_a"}

        stacks = group_segments_into_stacks({"ch_c"}, adjacency, _segments("a", "b", "c"))

        assert len(stacks) == 1
        assert [s.change_id for s in stacks[0].segments] == ["ch_a", "ch_b", "ch_c"]

    def test_leaves_are_sorted(self) -> None:
        """Stack order follows the sorted leaf change ids, not insertion order."""
        stacks = group_segments_into_stacks(
            ["ch_z", "ch_b", "ch_m"], {}, _segments("b", "m", "z")
        )

        assert [s.segments[0].change_id for s in stacks] == ["ch_b", "ch_m", "ch_z"]

    def test_shared_parent_appears_in_each_stack(self) -> None:
        adjacency = {"ch_b": "ch_a", "ch_c": "ch_a"}

        stacks = group_segments_into_stacks(
            {"ch_b", "ch_c"}, adjacency, _segments("a", "b", "c")
        )

        assert [[s.change_id for s in stack.segments] for stack in stacks] == [
            ["ch_a", "ch_b"],
            ["ch_a", "ch_c"],
        ]

    def test_no_leaves_no_stacks(self) -> None:
        assert group_segments_into_stacks(set(), {}, {}) == []


class TestTopologicalSort:
    def test_linear_chain_is_leaf_first(self) -> None:
        graph = ChangeGraph(
            adjacency={"ch_c": "ch_b", "ch_b": "ch_a"},
            leaves=frozenset({"ch_c"}),
        )

        assert topological_sort(graph) == ["ch_c", "ch_b", "ch_a"]

    def test_shared_parent_follows_its_last_child(self) -> None:
        """A parent is emitted only after every child referencing it."""
        graph = ChangeGraph(
            adjacency={"ch_b": "ch_a", "ch_c": "ch_a"},
            leaves=frozenset({"ch_b", "ch_c"}),
        )

        assert topological_sort(graph) == ["ch_b", "ch_c", "ch_a"]

    def test_independent_stacks_stay_contiguous(self) -> None:
        """Each stack is emitted in full before the next leaf is started."""
        graph = ChangeGraph(
            adjacency={"ch_b": "ch_a", "ch_y": "ch_x"},
            leaves=frozenset({"ch_y", "ch_b"}),
        )

        assert topological_sort(graph) == ["ch_b", "ch_a", "ch_y", "ch_x"]

    def test_single_root_without_edges(self) -> None:
        graph = ChangeGraph(leaves=frozenset({"ch_a"}))

        assert topological_sort(graph) == ["ch_a"]
