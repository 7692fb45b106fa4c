"""
Index rewriting between the solving and retrace phases.

The solved generator is used as a lookup table from old index to new index.
This must happen before retracing, since retracing consumes the generator.
"""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from treememsort.accessors import NodeAccessor, assign_indices


def _relabel_children(node: Any, accessor: NodeAccessor, generator: np.ndarray) -> None:
    children = accessor.get_children(node)
    updated = assign_indices(children, (generator[int(c)] for c in children))
    if updated is not children:
        accessor.set_children(node, updated)


def relabel_tree(nodes: Sequence[Any], accessor: NodeAccessor, generator: np.ndarray) -> None:
    """
    Rewrite single-parent and children indices of every node.

    A missing parent (None) stays None; any other parent `p` becomes
    `generator[p]`. Children keep their order.

    Args:
        nodes: Node array in its original (unsorted) order.
        accessor: Accessor for the parent and children fields.
        generator: Solved generator, old index -> new index.
    """
    for node in nodes:
        parent = accessor.get_parent(node)
        if parent is not None:
            accessor.set_parent(node, int(generator[int(parent)]))
        _relabel_children(node, accessor, generator)


def relabel_dag(nodes: Sequence[Any], accessor: NodeAccessor, generator: np.ndarray) -> None:
    """
    Rewrite parent-list and children indices of every node.

    Every parent entry is relabeled independently; order and duplicates are
    kept as they are.

    Args:
        nodes: Node array in its original (unsorted) order.
        accessor: Accessor for the parents and children fields.
        generator: Solved generator, old index -> new index.
    """
    for node in nodes:
        parents = accessor.get_parent(node)
        updated = assign_indices(parents, (generator[int(p)] for p in parents))
        if updated is not parents:
            accessor.set_parent(node, updated)
        _relabel_children(node, accessor, generator)
