#!/usr/bin/env python3
"""
Example: Sorting a DAG Encoded as a Tree with Shared Nodes

The following is demonstrated:
- Sorting nodes with several parents using sort_dag
- Checking the input for ordered-children contradictions
- Stopping a sort that cannot terminate with max_passes
"""

import sys
import os
from dataclasses import dataclass, field
from typing import List

# The parent directory is added to the import path.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from treememsort import check_dag, find_ordering_cycle, sort_dag, AttributeAccessor


@dataclass
class Node:
    val: int
    parents: List[int] = field(default_factory=list)
    children: List[int] = field(default_factory=list)


print("=" * 60)
print("Example 1: Shared child")
print("=" * 60)

# Node `3` is shared between `1` and `2`.
nodes = [
    Node(0, parents=[], children=[2, 3]),
    Node(3, parents=[2, 3], children=[]),
    Node(1, parents=[0], children=[1]),
    Node(2, parents=[0], children=[1]),
]
sort_dag(nodes, check=True)
for i, n in enumerate(nodes):
    print(f"  {i}: {n}")

print("\n" + "=" * 60)
print("Example 2: Ordered-children contradiction")
print("=" * 60)

# A: [B, C], B: [D, C], C: [D].
# B orders D before C, but D is a child of C and must come after it.
bad = [
    Node(0, parents=[], children=[1, 2]),
    Node(1, parents=[0], children=[3, 2]),
    Node(2, parents=[0, 1], children=[3]),
    Node(3, parents=[1, 2], children=[]),
]
accessor = AttributeAccessor("parents", "children")
print(f"  Cycle in ordering relation: {find_ordering_cycle(bad, accessor)}")
try:
    check_dag(bad, accessor)
except ValueError as exc:
    print(f"  check_dag: {exc}")

try:
    sort_dag(bad, max_passes=100)
except RuntimeError as exc:
    print(f"  sort_dag: {exc}")

print("\nExample completed successfully.")
