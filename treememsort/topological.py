"""
In-place topological sort of trees and DAGs stored in flat arrays.

Nodes refer to each other through integer indices into the same array. After
sorting, every child is stored after its parent and after all of its
previous siblings, and every index field has been rewritten to point at the
moved nodes. Nothing is copied: the array is permuted by swapping slots.

Sorting runs in three phases that must not be reordered:
  1. solve: compute the generator (old index -> new index) by swapping
     generator entries until a fixed point (see `treememsort.generator`)
  2. relabel: rewrite parent and children indices using the generator
  3. retrace: swap node slots along the generator's cycles

A sorted tree stays sorted when a node is appended at the end with any
existing node as parent.
"""

from __future__ import annotations

import logging
from typing import Any, MutableSequence, Optional

from treememsort.accessors import AttributeAccessor, NodeAccessor
from treememsort.generator import solve_generator
from treememsort.relabel import relabel_dag, relabel_tree
from treememsort.retrace import retrace
from treememsort.validation import check_dag, check_tree

logger = logging.getLogger(__name__)


def sort(
    nodes: MutableSequence[Any],
    accessor: Optional[NodeAccessor] = None,
    *,
    max_passes: Optional[int] = None,
    check: bool = False,
) -> None:
    """
    Sort a tree (or forest) in place.

    Each node has at most one parent, stored as an index or None, and an
    ordered list of children indices.

    Args:
        nodes: Node array, permuted in place.
        accessor: Accessor for the parent and children fields. Defaults to
            attributes named "parent" and "children".
        max_passes: Optional cap on solving passes; see `solve_generator`.
        check: If True, validate the tree structure before sorting.

    Raises:
        ValueError: If check is True and the input is not a valid tree, or
            max_passes is smaller than 1.
        RuntimeError: If max_passes is given and exceeded.

    Note:
        A node shared by several parents is not a tree. Without `check` or
        `max_passes` such input may never terminate; use `sort_dag`.
    """
    if accessor is None:
        accessor = AttributeAccessor("parent", "children")
    if check:
        check_tree(nodes, accessor)

    result = solve_generator(nodes, accessor, max_passes=max_passes)
    if result.is_identity:
        logger.debug("Tree of %d nodes already sorted", len(nodes))
        return
    relabel_tree(nodes, accessor, result.generator)
    retrace(nodes, result.generator)


def sort_dag(
    nodes: MutableSequence[Any],
    accessor: Optional[NodeAccessor] = None,
    *,
    max_passes: Optional[int] = None,
    check: bool = False,
) -> None:
    """
    Sort a DAG, encoded as a tree with shared nodes, in place.

    Each node has a list of parent indices (possibly empty, duplicates kept)
    and an ordered list of children indices.

    Args:
        nodes: Node array, permuted in place.
        accessor: Accessor for the parents and children fields. Defaults to
            attributes named "parents" and "children".
        max_passes: Optional cap on solving passes; see `solve_generator`.
        check: If True, check that the children relation is acyclic before
            sorting.

    Raises:
        ValueError: If check is True and the input is not a valid DAG, or
            max_passes is smaller than 1.
        RuntimeError: If max_passes is given and exceeded.

    Note:
        Children order counts. If `A` has children `C, B` and `B` has child
        `C`, then `C` must come both before and after `B`, and sorting never
        terminates.
    """
    if accessor is None:
        accessor = AttributeAccessor("parents", "children")
    if check:
        check_dag(nodes, accessor)

    result = solve_generator(nodes, accessor, max_passes=max_passes)
    if result.is_identity:
        logger.debug("DAG of %d nodes already sorted", len(nodes))
        return
    relabel_dag(nodes, accessor, result.generator)
    retrace(nodes, result.generator)
