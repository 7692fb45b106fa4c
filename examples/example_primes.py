#!/usr/bin/env python3
"""
Example: Sorting a Prime Factor Tree

The equations 12 = 2 * 6 and 6 = 3 * 2 form a tree when each number lists
its factors as children. After rewriting, such a tree is often stored in an
arbitrary order. The following is demonstrated:
- Sorting the tree in place so every factor follows the number it divides
- How indices are rewritten to follow the moved nodes
- How the group generator maps old positions to new ones
"""

import sys
import os
from dataclasses import dataclass, field
from typing import List, Optional

# The parent directory is added to the import path.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from treememsort import AttributeAccessor, cycle_decomposition, solve_generator, sort


@dataclass
class Number:
    value: int
    # Which number this was factored from.
    parent: Optional[int]
    # Factors.
    children: List[int] = field(default_factory=list)


def build_tree() -> List[Number]:
    return [
        Number(2, parent=1),
        Number(6, parent=3, children=[4, 0]),
        Number(2, parent=3),
        Number(12, parent=None, children=[2, 1]),
        Number(3, parent=1),
    ]


def show(nodes: List[Number]) -> None:
    for i, n in enumerate(nodes):
        print(f"  {i}: value={n.value:<3} parent={n.parent!s:<5} children={n.children}")


print("=" * 60)
print("Example: Prime Factor Tree")
print("=" * 60)

nodes = build_tree()
print("\nBefore sorting:")
show(nodes)
print(f"  values: {[n.value for n in nodes]}")

# The solving phase is run on its own to inspect the generator.
result = solve_generator(nodes, AttributeAccessor())
print(f"\nGenerator: {result.generator.tolist()}")
print(f"  passes={result.passes} swaps={result.swaps}")
print(f"  cycles: {cycle_decomposition(result.generator)}")

sort(nodes)
print("\nAfter sorting:")
show(nodes)
print(f"  values: {[n.value for n in nodes]}")

print("\nExample completed successfully.")
