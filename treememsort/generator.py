"""
Group generator solving phase.

A group generator is a permutation array `g` where `g[i]` is the position the
node currently stored at `i` will occupy once the array is sorted. Solving
only ever swaps two entries of `g`, so `g` stays a permutation at all times
and node data does not move until the retrace phase.

The solver repeats full passes over the array until a pass performs no swap.
For node `i` and each child `a` (in children order):
  - `g[i], g[a]` are swapped when `g[i] > g[a]` (child after parent)
  - for every later sibling `b`, `g[a], g[b]` are swapped when
    `g[a] > g[b]` (earlier sibling before later sibling)

The scan order (node ascending, child position ascending, later sibling
ascending) decides which of several valid orders is produced, so it must not
be changed. Passes only terminate when the parent/child and sibling relation
is acyclic; a cyclic input loops forever unless `max_passes` is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence

import numpy as np

from treememsort.accessors import NodeAccessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolveResult:
    """
    Outcome of the solving phase.

    Attributes:
        generator: Permutation mapping current positions to sorted positions.
        passes: Number of full passes, including the final pass without swaps.
        swaps: Total number of generator swaps performed.
    """

    generator: np.ndarray
    passes: int
    swaps: int

    @property
    def is_identity(self) -> bool:
        """Whether the input was already sorted."""
        return self.swaps == 0


def identity_generator(n: int) -> np.ndarray:
    """
    Create the identity generator for `n` nodes.

    Args:
        n: Number of nodes.

    Returns:
        Integer array `[0, 1, ..., n - 1]`.

    Raises:
        ValueError: If n is negative.
    """
    n = int(n)
    if n < 0:
        raise ValueError("n must be non-negative")
    return np.arange(n, dtype=np.intp)


def _solve_pass(generator: np.ndarray, children_lists: List[Sequence[int]]) -> int:
    g = generator
    swaps = 0
    for i, children in enumerate(children_lists):
        count = len(children)
        for j in range(count):
            a = int(children[j])
            # Store child after its parent.
            if g[i] > g[a]:
                g[i], g[a] = g[a], g[i]
                swaps += 1
            # Check all pairs of children.
            for k in range(j + 1, count):
                b = int(children[k])
                if g[a] > g[b]:
                    g[a], g[b] = g[b], g[a]
                    swaps += 1
    return swaps


def solve_generator(
    nodes: Sequence[Any],
    accessor: NodeAccessor,
    *,
    max_passes: Optional[int] = None,
) -> SolveResult:
    """
    Compute the generator that puts `nodes` in topological order.

    Nodes are not modified. Both trees and DAGs are solved the same way,
    since only children lists take part in solving.

    Args:
        nodes: Node array; children fields index into this array.
        accessor: Accessor for the children field of each node.
        max_passes: Optional cap on the number of passes. When None, the
            solver runs until a fixed point, which never happens for cyclic
            input.

    Returns:
        SolveResult with the generator and pass/swap counts.

    Raises:
        ValueError: If max_passes is smaller than 1.
        RuntimeError: If max_passes passes ran without reaching a fixed point.
    """
    if max_passes is not None and int(max_passes) < 1:
        raise ValueError("max_passes must be at least 1")

    generator = identity_generator(len(nodes))
    children_lists = [accessor.get_children(node) for node in nodes]

    passes = 0
    total_swaps = 0
    while True:
        swaps = _solve_pass(generator, children_lists)
        passes += 1
        total_swaps += swaps
        if swaps == 0:
            break
        if max_passes is not None and passes >= int(max_passes):
            raise RuntimeError(
                f"Generator did not reach a fixed point within {int(max_passes)} passes; "
                "the children relation is probably not acyclic"
            )

    logger.debug(
        "Solved generator for %d nodes: %d passes, %d swaps",
        len(nodes),
        passes,
        total_swaps,
    )
    return SolveResult(generator=generator, passes=passes, swaps=total_swaps)
