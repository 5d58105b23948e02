"""Lazily built filesystem tree with lookup, counting and text rendering.

This module provides the FsTree class, which owns the root FsNode built from a
directory and offers whole-tree conveniences on top of the per-node operations.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from anytree import ContStyle, PreOrderIter, RenderTree

from fstree.exclusion_rules.base_rules import BaseExclusionRules
from fstree.fs_tree.build_issue import BuildIssue
from fstree.fs_tree.builder import build_node, node_name
from fstree.fs_tree.fs_node import FsNode
from fstree.fs_tree.permission_action import PermissionAction
from fstree.types import NodeKind, PathType


class FsTree:
    """An in-memory tree mirroring a directory, built on first access.

    The tree is built from ``root_path`` the first time it is needed and kept
    until ``refresh`` is called. After that it is only changed through its nodes'
    own ``add_child``/``remove_node`` or through ``remove`` here; the filesystem is
    not consulted again.

    Permission Handling:
        Directories whose entries cannot be listed are handled in two ways:
        - IGNORE (default): Keep the directory with no children and record a BuildIssue
        - RAISE: Raise PermissionError and abandon the build

    Attributes:
        root_path (Path): The path the tree mirrors.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for leaving entries out.
        permission_action (PermissionAction): How to handle unreadable directories.
        issues (list[BuildIssue]): Problems suppressed during the most recent build.

    Example:
        >>> tree = FsTree("project")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        project/
        ├── a.txt
        └── sub/
            └── b.txt
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        permission_action: PermissionAction = PermissionAction.IGNORE,
    ) -> None:
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.permission_action = PermissionAction(permission_action)
        self.issues: List[BuildIssue] = []
        self._tree: Optional[FsNode] = None
        self._built = False

    def get_tree(self) -> Optional[FsNode]:
        """Get the root node, building the tree on first access.

        Returns:
            The root node, or None if the root path has no usable name.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            PermissionError: If a directory cannot be listed and permission_action is RAISE.
        """
        if not self._built:
            self._build_tree()
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")

        # "." and ".." have no name of their own; name them after the real directory
        build_path = self.root_path
        if node_name(build_path) is None:
            build_path = build_path.resolve()

        self.issues = []
        self._tree = build_node(
            build_path,
            exclusion_rules=self.exclusion_rules,
            permission_action=self.permission_action,
            issues=self.issues,
        )
        self._built = True

    def refresh(self) -> None:
        """Discard the tree and rebuild it from the current filesystem state."""
        self._tree = None
        self._built = False
        self._build_tree()

    def _nodes(self, kind: Optional[NodeKind] = None) -> Iterator[FsNode]:
        tree = self.get_tree()
        if tree is None:
            return
        yield from PreOrderIter(tree, filter_=lambda node: kind is None or node.kind == kind)

    def get_file_count(self) -> int:
        """Get the number of file nodes in the tree."""
        return sum(1 for _ in self._nodes(NodeKind.FILE))

    def get_directory_count(self) -> int:
        """Get the number of directory nodes in the tree, not counting the root."""
        tree = self.get_tree()
        return sum(1 for node in self._nodes(NodeKind.DIRECTORY) if node is not tree)

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over all file nodes in pre-order.

        Yields:
            Pairs of (absolute_path, relative_path) for each file, the relative path
            being relative to the root node and using forward slashes.

        Example:
            >>> tree = FsTree("src")  # doctest: +SKIP
            >>> for abs_path, rel_path in tree.iterate_files():  # doctest: +SKIP
            ...     print(rel_path)
            main.py
            utils/helpers.py
        """
        tree = self.get_tree()
        if tree is None:
            return
        for node in PreOrderIter(tree, filter_=lambda node: node.is_file):
            yield str(node.path.absolute()), node.path.relative_to(tree.path).as_posix()

    def find(self, path: PathType, kind: Optional[NodeKind] = None) -> Optional[FsNode]:
        """Find a node anywhere in the tree by its full path.

        The search descends one directory level at a time using ``find_node``, so
        it never scans unrelated branches.

        Args:
            path: Full path of the node, as it appears in the node's ``path``.
            kind: If given, the node must also be of this kind.

        Returns:
            The matching node, or None.
        """
        tree = self.get_tree()
        if tree is None:
            return None
        target = Path(path)
        if target == tree.path:
            return tree if kind is None or tree.kind == kind else None
        try:
            parts = target.relative_to(tree.path).parts
        except ValueError:
            return None

        node = tree
        current = tree.path
        for part in parts[:-1]:
            current = current / part
            directory = node.find_node(current, NodeKind.DIRECTORY)
            if directory is None:
                return None
            node = directory
        return node.find_node(target, kind)

    def remove(self, path: PathType, kind: Optional[NodeKind] = None) -> Optional[FsNode]:
        """Remove a node anywhere below the root and return it.

        The root itself cannot be removed this way.

        Returns:
            The detached node with its subtree, or None if nothing matched.
        """
        target = Path(path)
        parent = self.find(target.parent, NodeKind.DIRECTORY)
        if parent is None:
            return None
        return parent.remove_node(target, kind)

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation one line at a time.

        Output resembles the Unix ``tree`` command. Directories carry a trailing
        slash and children are listed in their stored order.

        Yields:
            Lines of the tree representation, including the connecting lines.

        Example:
            >>> tree = FsTree("src")  # doctest: +SKIP
            >>> for line in tree.stream_tree_representation():  # doctest: +SKIP
            ...     print(line)
            src/
            ├── main.py
            └── utils/
                └── helpers.py
        """
        tree = self.get_tree()
        if tree is None:
            return
        for prefix, _, node in RenderTree(tree, style=ContStyle()):
            suffix = "/" if node.is_dir else ""
            yield f"{prefix}{node.name}{suffix}"

    def get_tree_representation(self) -> str:
        """Get the complete tree representation as a single string."""
        return "\n".join(self.stream_tree_representation())
