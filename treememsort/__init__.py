"""
In-memory topological sort for trees and DAGs stored in flat arrays.

Nodes link to each other by integer index into the array holding them. The
sort permutes that array in place so every child follows its parent and its
previous siblings, rewriting all index fields to match. The target order is
found with a group generator (a permutation updated only by swaps) before
any node is moved.
"""

from treememsort.accessors import AttributeAccessor, KeyAccessor, NodeAccessor
from treememsort.generator import SolveResult, identity_generator, solve_generator
from treememsort.relabel import relabel_dag, relabel_tree
from treememsort.retrace import cycle_decomposition, retrace
from treememsort.topological import sort, sort_dag
from treememsort.validation import (
    OrderingViolation,
    check_dag,
    check_indices,
    check_tree,
    find_ordering_cycle,
    is_sorted,
    ordering_graph,
    ordering_violations,
)

__version__ = "0.1.0"

__all__ = [
    "AttributeAccessor",
    "KeyAccessor",
    "NodeAccessor",
    "SolveResult",
    "identity_generator",
    "solve_generator",
    "relabel_tree",
    "relabel_dag",
    "cycle_decomposition",
    "retrace",
    "sort",
    "sort_dag",
    "OrderingViolation",
    "check_indices",
    "check_tree",
    "check_dag",
    "find_ordering_cycle",
    "ordering_graph",
    "ordering_violations",
    "is_sorted",
]
