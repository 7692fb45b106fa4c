#!/usr/bin/env python3
"""
Example: Topological Sort versus Traversal Order

Indices built from a depth-first traversal renumber every node of a right
subtree after the whole left subtree. Sorting with a group generator only
moves what has to move, so nodes tend to stay near where they were.
"""

import sys
import os
from dataclasses import dataclass, field
from typing import List, Optional

# The parent directory is added to the import path.
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from treememsort import AttributeAccessor, is_sorted, sort


@dataclass
class Node:
    val: int
    parent: Optional[int]
    children: List[int] = field(default_factory=list)


def traversal_order(nodes: List[Node], root: int) -> List[int]:
    order: List[int] = []
    stack = [root]
    while stack:
        i = stack.pop()
        order.append(i)
        stack.extend(reversed(nodes[i].children))
    return order


print("=" * 60)
print("Example 1: Swapping two children of the root is enough")
print("=" * 60)

nodes = [
    Node(0, None, [2, 1]),
    Node(4, 0, []),
    Node(1, 0, [3, 4]),
    Node(2, 2, []),
    Node(3, 2, []),
]
print(f"  Traversal order would be: {[nodes[i].val for i in traversal_order(nodes, 0)]}")
sort(nodes)
print(f"  Sorted order:             {[n.val for n in nodes]}")
print(f"  Sorted: {is_sorted(nodes, AttributeAccessor())}")

print("\n" + "=" * 60)
print("Example 2: Children of a sub-root stored early")
print("=" * 60)

nodes = [
    Node(0, None, [4, 3]),
    Node(2, 4, []),
    Node(3, 4, []),
    Node(4, 0, []),
    Node(1, 0, [1, 2]),
]
print(f"  Traversal order would be: {[nodes[i].val for i in traversal_order(nodes, 0)]}")
sort(nodes)
print(f"  Sorted order:             {[n.val for n in nodes]}")

# Appending a leaf keeps the array sorted.
nodes.append(Node(5, 1, []))
nodes[1].children.append(5)
print(f"  Still sorted after append: {is_sorted(nodes, AttributeAccessor())}")

print("\nExample completed successfully.")
