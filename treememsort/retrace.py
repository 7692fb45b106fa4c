"""
Retrace phase: move nodes to the positions given by a solved generator.

Retracing follows the cycles of the permutation. For each position `i`, the
node stored there is swapped to `g[i]` and the same swap is applied to the
generator, so "the node at slot x belongs at g[x]" stays true after every
step. Once `g[i] == i` no later step touches slot `i` again, because the
generator is a bijection.

The number of swaps is `n` minus the number of cycles of the generator.
"""

from __future__ import annotations

import logging
from typing import Any, List, MutableSequence

import numpy as np

logger = logging.getLogger(__name__)


def cycle_decomposition(generator: np.ndarray) -> List[List[int]]:
    """
    Split a permutation into its cycles.

    Args:
        generator: Permutation of `0..n-1`.

    Returns:
        Cycles in order of their smallest element, each starting there.
        Fixed points are returned as one-element cycles.

    Raises:
        ValueError: If generator is not a permutation.
    """
    g = np.asarray(generator)
    n = int(g.shape[0])
    if sorted(int(x) for x in g) != list(range(n)):
        raise ValueError("generator must be a permutation of 0..n-1")

    seen = np.zeros(n, dtype=bool)
    cycles: List[List[int]] = []
    for start in range(n):
        if seen[start]:
            continue
        cycle: List[int] = []
        i = start
        while not seen[i]:
            seen[i] = True
            cycle.append(i)
            i = int(g[i])
        cycles.append(cycle)
    return cycles


def retrace(nodes: MutableSequence[Any], generator: np.ndarray) -> int:
    """
    Permute `nodes` in place so the node at `i` ends up at `generator[i]`.

    The generator is consumed: it is the identity when this returns.

    Args:
        nodes: Node array supporting item assignment.
        generator: Permutation of `0..len(nodes)-1`, modified in place.

    Returns:
        Number of node swaps performed.

    Raises:
        ValueError: If the generator length does not match the node count.
    """
    g = generator
    if len(g) != len(nodes):
        raise ValueError("generator length must match number of nodes")

    swaps = 0
    for i in range(len(nodes)):
        while g[i] != i:
            j = int(g[i])
            nodes[i], nodes[j] = nodes[j], nodes[i]
            g[i], g[j] = g[j], g[i]
            swaps += 1

    logger.debug("Retraced %d nodes with %d swaps", len(nodes), swaps)
    return swaps
