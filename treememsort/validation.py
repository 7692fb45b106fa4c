"""
Structural checks and ordering diagnostics for index-linked node arrays.

Sorting assumes its input is well formed and loops forever otherwise. The
checks here are opt-in: they find out-of-range indices, nodes shared between
parents in a tree, and cycles in the relation the solver has to satisfy
(parent before child, earlier sibling before later sibling).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Sequence, Tuple

from treememsort.accessors import NodeAccessor

try:
    import networkx as nx
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "Structural checks require networkx. Install with: pip install networkx"
    ) from exc


@dataclass(frozen=True)
class OrderingViolation:
    """
    A pair of indices breaking the topological order.

    Attributes:
        kind: "parent" when a child is not stored after its parent,
            "sibling" when a sibling is not stored after the previous one.
        node: Index of the node whose children list contains the pair.
        first: Index that must be smaller.
        second: Index that must be greater.
    """

    kind: str
    node: int
    first: int
    second: int


def _parent_indices(parent: Any) -> Iterator[int]:
    if parent is None:
        return
    if hasattr(parent, "__index__"):
        yield int(parent)
        return
    for p in parent:
        yield int(p)


def ordering_graph(nodes: Sequence[Any], accessor: NodeAccessor) -> nx.DiGraph:
    """
    Build the relation the solving phase has to satisfy.

    Graph nodes are array indices. Edges are parent -> child for every child
    entry and sibling -> next sibling for consecutive entries of each
    children list. Sorting terminates exactly when this graph is acyclic.

    Args:
        nodes: Node array.
        accessor: Accessor for the children field.

    Returns:
        Directed graph over `range(len(nodes))`. Parent edges carry
        kind="parent", sibling edges kind="sibling".
    """
    graph = nx.DiGraph()
    graph.add_nodes_from(range(len(nodes)))
    for i, node in enumerate(nodes):
        children = [int(c) for c in accessor.get_children(node)]
        for c in children:
            graph.add_edge(i, c, kind="parent")
        for a, b in zip(children, children[1:]):
            # Repeated entries order nothing.
            if a != b and not graph.has_edge(a, b):
                graph.add_edge(a, b, kind="sibling")
    return graph


def check_indices(nodes: Sequence[Any], accessor: NodeAccessor) -> None:
    """
    Check that every parent and child index points into the array.

    Raises:
        ValueError: If an index is negative or not smaller than len(nodes).
    """
    n = len(nodes)
    for i, node in enumerate(nodes):
        for p in _parent_indices(accessor.get_parent(node)):
            if p < 0 or p >= n:
                raise ValueError(f"Node {i} has parent index {p} outside 0..{n - 1}")
        for c in accessor.get_children(node):
            if int(c) < 0 or int(c) >= n:
                raise ValueError(f"Node {i} has child index {int(c)} outside 0..{n - 1}")


def find_ordering_cycle(
    nodes: Sequence[Any], accessor: NodeAccessor
) -> Optional[List[Tuple[int, int]]]:
    """
    Find one cycle in the ordering relation, if any.

    Returns:
        List of (u, v) edges forming the cycle, or None when acyclic.
    """
    graph = ordering_graph(nodes, accessor)
    if nx.is_directed_acyclic_graph(graph):
        return None
    return [(int(u), int(v)) for u, v in nx.find_cycle(graph)]


def check_dag(nodes: Sequence[Any], accessor: NodeAccessor) -> None:
    """
    Check that `nodes` can be sorted with `sort_dag`.

    Raises:
        ValueError: If an index is out of range, or the ordering relation has
            a cycle (including contradictory sibling orders between parents).
    """
    check_indices(nodes, accessor)
    cycle = find_ordering_cycle(nodes, accessor)
    if cycle is not None:
        path = " -> ".join(str(u) for u, _ in cycle) + f" -> {cycle[0][0]}"
        raise ValueError(f"Children relation is not acyclic: {path}")


def check_tree(nodes: Sequence[Any], accessor: NodeAccessor) -> None:
    """
    Check that `nodes` can be sorted with `sort`.

    Besides the DAG requirements, every node may be listed as a child at
    most once in the whole array.

    Raises:
        ValueError: If an index is out of range, a node is shared, or the
            ordering relation has a cycle.
    """
    check_indices(nodes, accessor)
    counts: Counter = Counter()
    for node in nodes:
        counts.update(int(c) for c in accessor.get_children(node))
    shared = sorted(c for c, k in counts.items() if k > 1)
    if shared:
        raise ValueError(
            f"Nodes {shared} are listed as children more than once; use sort_dag for shared nodes"
        )
    check_dag(nodes, accessor)


def ordering_violations(
    nodes: Sequence[Any], accessor: NodeAccessor
) -> List[OrderingViolation]:
    """
    List every place where the array is not in topological order.

    Args:
        nodes: Node array, with indices referring to current positions.
        accessor: Accessor for the children field.

    Returns:
        Violations in scan order (node ascending, then children order).
    """
    violations: List[OrderingViolation] = []
    for i, node in enumerate(nodes):
        children = [int(c) for c in accessor.get_children(node)]
        for c in children:
            if not i < c:
                violations.append(OrderingViolation("parent", i, i, c))
        for a, b in zip(children, children[1:]):
            if not a < b:
                violations.append(OrderingViolation("sibling", i, a, b))
    return violations


def is_sorted(nodes: Sequence[Any], accessor: NodeAccessor) -> bool:
    """Whether every child follows its parent and every previous sibling."""
    return not ordering_violations(nodes, accessor)
