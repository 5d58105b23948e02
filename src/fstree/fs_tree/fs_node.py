"""Node representation for file system elements in the tree."""

import weakref
from pathlib import Path
from typing import Any, Iterable, Iterator, List, Optional, Tuple

from anytree import LoopError, PreOrderIter

from fstree.exceptions import NodeAlreadyAttachedError
from fstree.types import NodeKind, PathType


class FsNode:
    """Node class representing a file or directory in an in-memory filesystem tree.

    A node owns its children and refers to its parent only weakly, so a child
    can navigate upwards without keeping its parent alive. Dropping the last
    reference to a node releases the whole subtree below it.

    Children keep the order in which they were added. For trees built from disk
    this is the order the platform listed the directory in, which is not sorted.

    Attributes:
        name (str): The name of the file or directory (just the final path component).
        path (Path): The full path; identifies the node among its siblings.
        kind (NodeKind): FILE or DIRECTORY. Fixed at creation.
        parent (Optional[FsNode]): The enclosing node, or None for a root or a
            node whose parent no longer exists.
        children (tuple[FsNode, ...]): The child nodes, in insertion order.

    Example:
        >>> root = FsNode("root", "root", NodeKind.DIRECTORY)
        >>> root.add_child(FsNode("a.txt", "root/a.txt", NodeKind.FILE))
        >>> root.find_node("root/a.txt").name
        'a.txt'
        >>> root.children[0].parent is root
        True
    """

    def __init__(
        self,
        name: str,
        path: PathType,
        kind: NodeKind,
        parent: Optional["FsNode"] = None,
        children: Iterable["FsNode"] = (),
        **kwargs: Any,
    ) -> None:
        """Initialize an FsNode.

        ``parent`` is not told about the new node; use the parent's ``add_child`` to
        attach it. Supplied children are attached with ``add_child``, so they point
        back to the new node and must not belong to another parent.

        Args:
            name: The name of the file or directory.
            path: The full path of the file or directory.
            kind: Whether the node is a file or a directory.
            parent: The enclosing node, held as a weak reference. Defaults to None.
            children: Nodes this node owns from the start. Defaults to none.
            **kwargs: Additional attributes to set on the node.

        Raises:
            TypeError: If a supplied child is not an FsNode.
            NodeAlreadyAttachedError: If a supplied child already belongs to a parent.
        """
        self.name = name
        self.path = Path(path)
        self._kind = NodeKind(kind)
        self._parent_ref: Optional["weakref.ReferenceType[FsNode]"] = None
        if parent is not None:
            self._parent_ref = weakref.ref(parent)
        self._children: List[FsNode] = []
        for child in children:
            self.add_child(child)

        # Store any additional attributes from kwargs
        for key, value in kwargs.items():
            setattr(self, key, value)

    @property
    def kind(self) -> NodeKind:
        return self._kind

    @property
    def is_dir(self) -> bool:
        return self._kind is NodeKind.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self._kind is NodeKind.FILE

    @property
    def parent(self) -> Optional["FsNode"]:
        """The enclosing node, or None if there is none or it has been freed."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> Tuple["FsNode", ...]:
        return tuple(self._children)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def iter_path_reverse(self) -> Iterator["FsNode"]:
        """Yield this node, then each ancestor up to the root."""
        node: Optional[FsNode] = self
        while node is not None:
            yield node
            node = node.parent

    @property
    def ancestors(self) -> Tuple["FsNode", ...]:
        """All ancestors, starting with the root."""
        return tuple(reversed(list(self.iter_path_reverse())[1:]))

    @property
    def root(self) -> "FsNode":
        node = self
        for node in self.iter_path_reverse():
            pass
        return node

    @property
    def depth(self) -> int:
        return len(self.ancestors)

    @property
    def descendants(self) -> Tuple["FsNode", ...]:
        """All nodes below this one, in pre-order."""
        return tuple(PreOrderIter(self))[1:]

    def add_child(self, child: "FsNode") -> None:
        """Attach an unattached node as the last child of this node.

        The child's parent becomes a weak reference to this node. A node counts as
        attached only while its parent's children contain it, so a node constructed
        with a ``parent`` back-reference but never added can be attached anywhere.

        Args:
            child: The node to attach.

        Raises:
            TypeError: If ``child`` is not an FsNode.
            LoopError: If ``child`` is this node or one of its ancestors.
            NodeAlreadyAttachedError: If ``child`` already belongs to a parent. Move a
                node by removing it from its parent first.
        """
        if not isinstance(child, FsNode):
            raise TypeError(f"Child node {child!r} is not of type 'FsNode'.")
        if any(node is child for node in self.iter_path_reverse()):
            raise LoopError(f"Cannot add node {child.path} as a child of itself or of its descendant {self.path}.")

        current = child.parent
        if current is not None and any(node is child for node in current._children):
            raise NodeAlreadyAttachedError(str(child.path), str(current.path))

        child._parent_ref = weakref.ref(self)
        self._children.append(child)

    def _position(self, path: PathType, kind: Optional[NodeKind]) -> Optional[int]:
        target = Path(path)
        for index, child in enumerate(self._children):
            if child.path == target and (kind is None or child.kind == kind):
                return index
        return None

    def find_node(self, path: PathType, kind: Optional[NodeKind] = None) -> Optional["FsNode"]:
        """Find a direct child by path and, optionally, by kind.

        Only the immediate children are searched; grandchildren are never matched.

        Args:
            path: Full path of the child to find.
            kind: If given, the child must also be of this kind.

        Returns:
            The first matching child, or None if there is none.

        Example:
            >>> root = FsNode("root", "root", NodeKind.DIRECTORY)
            >>> root.add_child(FsNode("sub", "root/sub", NodeKind.DIRECTORY))
            >>> root.find_node("root/sub", NodeKind.DIRECTORY).name
            'sub'
            >>> root.find_node("root/sub", NodeKind.FILE) is None
            True
        """
        index = self._position(path, kind)
        return None if index is None else self._children[index]

    def remove_node(self, path: PathType, kind: Optional[NodeKind] = None) -> Optional["FsNode"]:
        """Detach a direct child by path and, optionally, by kind.

        The remaining children keep their relative order. The removed node comes
        back with its own subtree intact. Its parent reference is cleared rather than
        left pointing at this node, so it becomes a root again and can be attached
        elsewhere with ``add_child``.

        Args:
            path: Full path of the child to remove.
            kind: If given, the child must also be of this kind.

        Returns:
            The removed child, or None if no direct child matched.
        """
        index = self._position(path, kind)
        if index is None:
            return None
        removed = self._children.pop(index)
        removed._parent_ref = None
        return removed

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, path={self.path.as_posix()!r}, kind={self._kind.value})"
