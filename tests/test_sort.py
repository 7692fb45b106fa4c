"""
Unit tests for the tree and DAG sort entry points.

Each case lists nodes as (val, parent, children) tuples; `val` gives the
position the node is expected to end up at.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import pytest

from treememsort import AttributeAccessor, KeyAccessor, sort, sort_dag


@dataclass
class Node:
    val: int
    parent: Optional[int]
    children: List[int] = field(default_factory=list)


@dataclass
class DagNode:
    val: int
    parents: List[int]
    children: List[int] = field(default_factory=list)


def _tree(*rows) -> List[Node]:
    return [Node(val, parent, list(children)) for val, parent, children in rows]


def _dag(*rows) -> List[DagNode]:
    return [DagNode(val, list(parents), list(children)) for val, parents, children in rows]


CHAIN_3 = _tree((0, None, [1]), (1, 0, [2]), (2, 1, []))
ROOT_TWO_LEAVES = _tree((0, None, [1, 2]), (1, 0, []), (2, 0, []))
CHAIN_4 = _tree((0, None, [1]), (1, 0, [2]), (2, 1, [3]), (3, 2, []))


class TestSortTree:
    """Test suite for sort on single-parent trees."""

    def test_empty(self) -> None:
        """Sorting no nodes leaves an empty list."""
        nodes: List[Node] = []
        sort(nodes)
        assert nodes == []

    def test_one(self) -> None:
        """A single node is left unchanged."""
        nodes = _tree((0, None, []))
        sort(nodes)
        assert nodes == _tree((0, None, []))

    def test_two_roots_unchanged(self) -> None:
        """Two unrelated roots keep their order."""
        nodes = _tree((0, None, []), (1, None, []))
        sort(nodes)
        assert nodes == _tree((0, None, []), (1, None, []))

    def test_two_child_before_parent(self) -> None:
        """A child stored before its parent is moved after it."""
        nodes = _tree((1, 1, []), (0, None, [0]))
        sort(nodes)
        assert nodes == _tree((0, None, [1]), (1, 0, []))

    @pytest.mark.parametrize(
        "nodes",
        [
            _tree((2, 1, []), (1, 2, [0]), (0, None, [1])),
            _tree((1, 2, [1]), (2, 0, []), (0, None, [0])),
        ],
    )
    def test_three_chain(self, nodes: List[Node]) -> None:
        """Three-node chains are sorted root first."""
        sort(nodes)
        assert nodes == CHAIN_3

    @pytest.mark.parametrize(
        "nodes",
        [
            _tree((2, 2, []), (1, 2, []), (0, None, [1, 0])),
            _tree((1, 2, []), (2, 2, []), (0, None, [0, 1])),
            _tree((1, 1, []), (0, None, [0, 2]), (2, 1, [])),
            _tree((2, 1, []), (0, None, [2, 0]), (1, 1, [])),
        ],
    )
    def test_three_siblings(self, nodes: List[Node]) -> None:
        """Siblings follow their parent in children order."""
        sort(nodes)
        assert nodes == ROOT_TWO_LEAVES

    @pytest.mark.parametrize(
        "nodes",
        [
            _tree((3, 1, []), (2, 2, [0]), (1, 3, [1]), (0, None, [2])),
            _tree((2, 2, [1]), (3, 0, []), (1, 3, [0]), (0, None, [2])),
            _tree((2, 3, [1]), (3, 0, []), (0, None, [3]), (1, 2, [0])),
        ],
    )
    def test_four_chain(self, nodes: List[Node]) -> None:
        """Four-node chains are sorted root first."""
        sort(nodes)
        assert nodes == CHAIN_4

    @pytest.mark.parametrize(
        "nodes, expected",
        [
            (
                _tree((2, 2, []), (3, 3, []), (1, 3, [0]), (0, None, [2, 1])),
                _tree((0, None, [1, 3]), (1, 0, [2]), (2, 1, []), (3, 0, [])),
            ),
            (
                _tree((3, 3, []), (1, None, []), (2, 3, []), (0, None, [2, 0])),
                _tree((0, None, [2, 3]), (1, None, []), (2, 0, []), (3, 0, [])),
            ),
            (
                _tree((3, 2, []), (2, 2, []), (1, 3, [1, 0]), (0, None, [2])),
                _tree((0, None, [1]), (1, 0, [2, 3]), (2, 1, []), (3, 1, [])),
            ),
            (
                _tree((0, None, [3, 2]), (2, 3, []), (3, 0, []), (1, 0, [1])),
                _tree((0, None, [1, 3]), (1, 0, [2]), (2, 1, []), (3, 0, [])),
            ),
        ],
    )
    def test_four_branching(self, nodes: List[Node], expected: List[Node]) -> None:
        """Branching four-node trees reach the expected layout."""
        sort(nodes)
        assert nodes == expected

    def test_prime_factors(self) -> None:
        """Sort the factor tree of 12 = 2 * 6, 6 = 3 * 2."""
        nodes = _tree(
            (2, 1, []),
            (6, 3, [4, 0]),
            (2, 3, []),
            (12, None, [2, 1]),
            (3, 1, []),
        )
        sort(nodes)
        assert [n.val for n in nodes] == [12, 2, 6, 3, 2]
        assert nodes == _tree(
            (12, None, [1, 2]),
            (2, 0, []),
            (6, 0, [3, 4]),
            (3, 2, []),
            (2, 2, []),
        )

    def test_swapping_root_children_is_enough(self) -> None:
        """Nodes stay close to where they were instead of being renumbered by traversal."""
        nodes = _tree(
            (0, None, [2, 1]),
            (4, 0, []),
            (1, 0, [3, 4]),
            (2, 2, []),
            (3, 2, []),
        )
        sort(nodes)
        assert nodes == _tree(
            (0, None, [1, 2]),
            (1, 0, [3, 4]),
            (4, 0, []),
            (2, 1, []),
            (3, 1, []),
        )

    def test_subtree_stored_early(self) -> None:
        """Children of a sub-root stored early stay ahead of its later sibling."""
        nodes = _tree(
            (0, None, [4, 3]),
            (2, 4, []),
            (3, 4, []),
            (4, 0, []),
            (1, 0, [1, 2]),
        )
        sort(nodes)
        assert nodes == _tree(
            (0, None, [1, 4]),
            (1, 0, [2, 3]),
            (2, 1, []),
            (3, 1, []),
            (4, 0, []),
        )

    def test_sorted_input_untouched(self) -> None:
        """Already sorted nodes keep their identity and contents."""
        nodes = _tree((0, None, [1, 3]), (1, 0, [2]), (2, 1, []), (3, 0, []))
        before = list(nodes)
        children_before = [n.children for n in nodes]
        sort(nodes)
        assert all(a is b for a, b in zip(nodes, before))
        assert all(n.children is c for n, c in zip(nodes, children_before))

    def test_children_lists_rewritten_in_place(self) -> None:
        """Children lists are updated without being replaced."""
        nodes = _tree((1, 1, []), (0, None, [0]))
        root_children = nodes[1].children
        sort(nodes)
        assert nodes[0].children is root_children
        assert root_children == [1]

    def test_tuple_children(self) -> None:
        """Immutable children fields are replaced with relabeled tuples."""
        nodes = _tree((2, 1, []), (1, 2, [0]), (0, None, [1]))
        for n in nodes:
            n.children = tuple(n.children)
        sort(nodes)
        assert [n.children for n in nodes] == [(1,), (2,), ()]
        assert [n.parent for n in nodes] == [None, 0, 1]

    def test_custom_attribute_names(self) -> None:
        """Sort objects whose links live under other attribute names."""

        class Item:
            def __init__(self, name, up, down):
                self.name = name
                self.up = up
                self.down = down

        nodes = [Item("leaf", 1, []), Item("root", None, [0])]
        sort(nodes, AttributeAccessor(parent="up", children="down"))
        assert [n.name for n in nodes] == ["root", "leaf"]
        assert nodes[1].up == 0
        assert nodes[0].down == [1]

    def test_dict_nodes(self) -> None:
        """Sort mapping nodes through a KeyAccessor."""
        nodes = [
            {"val": 2, "parent": 1, "children": []},
            {"val": 1, "parent": 2, "children": [0]},
            {"val": 0, "parent": None, "children": [1]},
        ]
        sort(nodes, KeyAccessor())
        assert nodes == [
            {"val": 0, "parent": None, "children": [1]},
            {"val": 1, "parent": 0, "children": [2]},
            {"val": 2, "parent": 1, "children": []},
        ]

    def test_indices_are_python_ints(self) -> None:
        """Rewritten indices are plain ints, not numpy scalars."""
        nodes = _tree((1, 1, []), (0, None, [0]))
        sort(nodes)
        assert type(nodes[1].parent) is int
        assert type(nodes[0].children[0]) is int


SHARED_CHILD_DAG = _dag(
    (0, [], [1, 2]),
    (1, [0], [3]),
    (2, [0], [3]),
    (3, [1, 2], []),
)


class TestSortDag:
    """Test suite for sort_dag on trees with shared nodes."""

    @pytest.mark.parametrize(
        "nodes",
        [
            _dag((0, [], [2, 3]), (3, [2, 3], []), (1, [0], [1]), (2, [0], [1])),
            _dag((0, [], [1, 3]), (1, [0], [2]), (3, [1, 3], []), (2, [0], [2])),
            _dag((0, [], [3, 1]), (2, [0], [2]), (3, [3, 1], []), (1, [0], [2])),
            _dag((0, [], [3, 2]), (3, [3, 2], []), (2, [0], [1]), (1, [0], [1])),
        ],
    )
    def test_shared_child(self, nodes: List[DagNode]) -> None:
        """A child shared by two siblings ends up after both."""
        sort_dag(nodes)
        assert nodes == SHARED_CHILD_DAG

    def test_sibling_as_child_before_shared_child(self) -> None:
        """A sibling listed as a child is placed before the shared child."""
        nodes = _dag(
            (0, [], [3, 2]),
            (3, [3, 2], []),
            (2, [0], [1]),
            (1, [0], [2, 1]),
        )
        sort_dag(nodes)
        assert nodes == _dag(
            (0, [], [1, 2]),
            (1, [0], [2, 3]),
            (2, [0], [3]),
            (3, [1, 2], []),
        )

    def test_empty_and_single(self) -> None:
        """Empty and single-node DAGs are left as they are."""
        nodes: List[DagNode] = []
        sort_dag(nodes)
        assert nodes == []

        nodes = _dag((0, [], []))
        sort_dag(nodes)
        assert nodes == _dag((0, [], []))

    def test_duplicate_parents_kept(self) -> None:
        """Duplicate parent entries are relabeled independently, not merged."""
        nodes = _dag((1, [1, 1], []), (0, [], [0]))
        sort_dag(nodes)
        assert nodes == _dag((0, [], [1]), (1, [0, 0], []))

    def test_dict_nodes(self) -> None:
        """Sort mapping DAG nodes through a KeyAccessor."""
        nodes = [
            {"val": 1, "parents": [1], "children": []},
            {"val": 0, "parents": [], "children": [0]},
        ]
        sort_dag(nodes, KeyAccessor(parent="parents"))
        assert nodes == [
            {"val": 0, "parents": [], "children": [1]},
            {"val": 1, "parents": [0], "children": []},
        ]


class TestSortChecks:
    """Test suite for the opt-in structural checks and pass cap."""

    def test_tree_check_rejects_shared_node(self) -> None:
        """Tree sort refuses nodes listed under two parents when checking."""
        nodes = _tree((0, None, [1, 2]), (1, 0, [3]), (2, 0, [3]), (3, 1, []))
        with pytest.raises(ValueError, match="sort_dag"):
            sort(nodes, check=True)

    def test_tree_check_rejects_out_of_range(self) -> None:
        """Tree sort refuses indices outside the array when checking."""
        nodes = _tree((0, None, [5]))
        with pytest.raises(ValueError, match="outside"):
            sort(nodes, check=True)

    def test_dag_check_rejects_contradiction(self) -> None:
        """An ordered-children contradiction is reported before solving."""
        # A: [B, C], B: [D, C], C: [D] puts D both before and after C.
        nodes = _dag(
            (0, [], [1, 2]),
            (1, [0], [3, 2]),
            (2, [0, 1], [3]),
            (3, [1, 2], []),
        )
        with pytest.raises(ValueError, match="not acyclic"):
            sort_dag(nodes, check=True)

    def test_max_passes_stops_cycle(self) -> None:
        """A cyclic input raises once the pass cap is hit."""
        nodes = _tree((0, 1, [1]), (1, 0, [0]))
        with pytest.raises(RuntimeError, match="fixed point"):
            sort(nodes, max_passes=10)

    def test_max_passes_stops_dag_contradiction(self) -> None:
        """The DAG variant honours the pass cap as well."""
        nodes = _dag(
            (0, [], [1, 2]),
            (1, [0], [3, 2]),
            (2, [0, 1], [3]),
            (3, [1, 2], []),
        )
        with pytest.raises(RuntimeError):
            sort_dag(nodes, max_passes=25)

    def test_check_passes_valid_input(self) -> None:
        """Valid input sorts normally with checks enabled."""
        nodes = _tree((2, 1, []), (1, 2, [0]), (0, None, [1]))
        sort(nodes, check=True, max_passes=100)
        assert nodes == CHAIN_3

    def test_invalid_max_passes(self) -> None:
        """max_passes must be positive."""
        with pytest.raises(ValueError):
            sort(_tree((0, None, [])), max_passes=0)
