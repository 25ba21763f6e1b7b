"""Elimination trees, stored as the parent of each node."""

from __future__ import annotations

from typing import Optional

Parent = Optional[int]


class Parents:
    """An elimination forest: each node has a parent or is a root."""

    __slots__ = ("_parents",)

    def __init__(self, nb_nodes: int) -> None:
        if nb_nodes < 0:
            raise ValueError("the number of nodes cannot be negative")
        self._parents: list[Parent] = [None] * nb_nodes

    def __repr__(self) -> str:
        return f"Parents({self._parents!r})"

    def _check(self, node: int, what: str) -> None:
        if not 0 <= node < len(self._parents):
            raise IndexError(f"{what} is out of bounds")

    def get_parent(self, node: int) -> Parent:
        """The parent of ``node``, or ``None`` if it is a root."""
        self._check(node, "node")
        return self._parents[node]

    def is_root(self, node: int) -> bool:
        """Whether ``node`` is a root."""
        return self.get_parent(node) is None

    def nb_nodes(self) -> int:
        """The number of nodes in the tree."""
        return len(self._parents)

    def set_parent(self, node: int, parent: int) -> None:
        """Make ``parent`` the parent of ``node``."""
        self._check(parent, "parent")
        self._check(node, "node")
        self._parents[node] = parent

    def set_root(self, node: int) -> None:
        """Make ``node`` a root."""
        self._check(node, "node")
        self._parents[node] = None

    def uproot(self, node: int, parent: int) -> None:
        """Give ``node`` a parent if it is a root; otherwise do nothing."""
        self._check(parent, "parent")
        if self.is_root(node):
            self.set_parent(node, parent)