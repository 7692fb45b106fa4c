"""
Node accessors for index-linked node arrays.

The sorting routines never inspect node contents directly. They read and
write the parent and children index fields of each node through a
NodeAccessor, so any node layout (objects, dataclasses, dicts) can be sorted
as long as an accessor for it exists.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable, List, Optional, Sequence, Union

# A parent field is either an optional single index (trees) or a sequence of
# indices (DAGs with shared nodes).
ParentField = Union[Optional[int], Sequence[int]]


def assign_indices(current: Any, values: Iterable[int]) -> Any:
    """
    Write index values into an index field, in place where possible.

    Args:
        current: The existing index container.
        values: New index values, same length and order as `current`.

    Returns:
        The container holding the new values. This is `current` itself when
        it supports slice assignment (lists, numpy arrays), otherwise a new
        tuple.
    """
    new_values: List[int] = [int(v) for v in values]
    if hasattr(current, "__setitem__") and not isinstance(current, (str, bytes)):
        current[:] = new_values
        return current
    return tuple(new_values)


class NodeAccessor(ABC):
    """
    Read/write access to the index fields of a node.

    Implementations must be side-effect free on read and must return the
    same underlying field for the same node on repeated calls.
    """

    @abstractmethod
    def get_parent(self, node: Any) -> ParentField:
        """Return the parent field: an index, None, or a sequence of indices."""
        pass

    @abstractmethod
    def set_parent(self, node: Any, parent: ParentField) -> None:
        """Replace the parent field of `node`."""
        pass

    @abstractmethod
    def get_children(self, node: Any) -> Sequence[int]:
        """Return the ordered children indices of `node`."""
        pass

    @abstractmethod
    def set_children(self, node: Any, children: Sequence[int]) -> None:
        """Replace the children field of `node`."""
        pass


class AttributeAccessor(NodeAccessor):
    """
    Accessor for nodes storing their links as attributes.

    Works with plain objects and (non-frozen) dataclasses. For DAG nodes the
    parent attribute usually holds a list, e.g.
    ``AttributeAccessor(parent="parents")``.
    """

    def __init__(self, parent: str = "parent", children: str = "children") -> None:
        if not parent or not children:
            raise ValueError("attribute names cannot be empty")
        self.parent = str(parent)
        self.children = str(children)

    def get_parent(self, node: Any) -> ParentField:
        return getattr(node, self.parent)

    def set_parent(self, node: Any, parent: ParentField) -> None:
        setattr(node, self.parent, parent)

    def get_children(self, node: Any) -> Sequence[int]:
        return getattr(node, self.children)

    def set_children(self, node: Any, children: Sequence[int]) -> None:
        setattr(node, self.children, children)

    def __repr__(self) -> str:
        return f"AttributeAccessor(parent={self.parent!r}, children={self.children!r})"


class KeyAccessor(NodeAccessor):
    """
    Accessor for mapping nodes, e.g. ``{"parent": 0, "children": [2, 3]}``.
    """

    def __init__(self, parent: str = "parent", children: str = "children") -> None:
        if not parent or not children:
            raise ValueError("key names cannot be empty")
        self.parent = parent
        self.children = children

    def get_parent(self, node: Any) -> ParentField:
        return node[self.parent]

    def set_parent(self, node: Any, parent: ParentField) -> None:
        node[self.parent] = parent

    def get_children(self, node: Any) -> Sequence[int]:
        return node[self.children]

    def set_children(self, node: Any, children: Sequence[int]) -> None:
        node[self.children] = children

    def __repr__(self) -> str:
        return f"KeyAccessor(parent={self.parent!r}, children={self.children!r})"
