"""In-memory folder tree built fresh for each import or push."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(eq=False)
class FolderNode:
    """A named folder and the ordered sub-folders it owns.

    Nodes hold no parent reference; traversal is strictly top-down.
    Duplicate sibling names are allowed here and resolved by the callers
    that care about them.

    Attributes:
        name: Folder name. Never empty.
        children: Sub-folders in discovery or parse order.
        synthetic: Set on the root built by decode(). It stands for the
            folder being pushed into and is never created itself.
    """

    name: str
    children: list[FolderNode] = field(default_factory=list)
    synthetic: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FolderNode name must not be empty")

    def add_child(self, child: FolderNode) -> FolderNode:
        """Append child after any existing children and return it."""
        self.children.append(child)
        return child

    def walk(self) -> Iterator[tuple[int, FolderNode]]:
        """Yield (depth, node) pairs in pre-order, starting with self at depth 0."""
        stack: list[tuple[int, FolderNode]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def same_shape(self, other: FolderNode) -> bool:
        """Compare names and child order of both subtrees, ignoring the root names."""
        if len(self.children) != len(other.children):
            return False
        return all(
            mine.name == theirs.name and mine.same_shape(theirs)
            for mine, theirs in zip(self.children, other.children)
        )


def create_node(name: str) -> FolderNode:
    """Create a childless node."""
    return FolderNode(name=name)


def add_child(parent: FolderNode, child: FolderNode) -> FolderNode:
    """Append child to parent's children, preserving insertion order."""
    return parent.add_child(child)
