"""Recursive construction of FsNode trees from the real filesystem.

The builder walks a directory depth-first and produces a node for every entry it
can name. Problems with individual entries never abort the build: unnamed entries
are skipped and unreadable directories are kept without children. Callers who
want to know what was left out can pass an ``issues`` list, which receives a
BuildIssue for every suppressed problem.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Set

from fstree.exclusion_rules.base_rules import BaseExclusionRules
from fstree.fs_tree.build_issue import BuildIssue, IssueKind
from fstree.fs_tree.file_identifier import FileIdentifier
from fstree.fs_tree.fs_node import FsNode
from fstree.fs_tree.permission_action import PermissionAction
from fstree.types import NodeKind, PathType

logger = logging.getLogger(__name__)


def node_name(path: Path) -> Optional[str]:
    """Return the final component of ``path`` if it can serve as a node name.

    Paths such as ``/``, ``.`` or ``a/..`` have no usable final component. Names
    that only survive decoding as lone surrogates are not text and are rejected too.

    Example:
        >>> node_name(Path("root/sub/b.txt"))
        'b.txt'
        >>> node_name(Path("/")) is None
        True
    """
    name = path.name
    if not name or name == "..":
        return None
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return name


def classify(path: Path) -> NodeKind:
    """Directory if ``path`` is (or links to) a directory, File otherwise."""
    try:
        return NodeKind.DIRECTORY if path.is_dir() else NodeKind.FILE
    except OSError:
        return NodeKind.FILE


class _TreeBuilder:
    """State shared by one recursive build: options, diagnostics, and the descent path."""

    def __init__(
        self,
        exclusion_rules: Optional[BaseExclusionRules],
        permission_action: PermissionAction,
        issues: Optional[List[BuildIssue]],
    ) -> None:
        self.exclusion_rules = exclusion_rules
        self.permission_action = PermissionAction(permission_action)
        self.issues = issues
        # Directories currently being built, from the root down to the current one
        self._active: Set[FileIdentifier] = set()

    def _record(self, kind: IssueKind, path: Path, message: str = "") -> None:
        logger.debug("Suppressed %s at %s: %s", kind.value, path, message)
        if self.issues is not None:
            self.issues.append(BuildIssue(kind, path, message))

    def _excluded(self, relative_path: str, kind: NodeKind) -> bool:
        if self.exclusion_rules is None or not relative_path:
            return False
        if self.exclusion_rules.exclude(relative_path):
            return True
        # Directory-only patterns such as "build/" need the trailing slash to match
        return kind is NodeKind.DIRECTORY and self.exclusion_rules.exclude(relative_path + "/")

    def _list_entries(self, path: Path) -> Optional[List[Path]]:
        try:
            with os.scandir(path) as it:
                return [path / entry.name for entry in it]
        except PermissionError as e:
            if self.permission_action == PermissionAction.RAISE:
                raise PermissionError(f"Access denied to {path}: {e}") from e
            self._record(IssueKind.UNREADABLE_DIRECTORY, path, str(e))
        except OSError as e:
            self._record(IssueKind.UNREADABLE_DIRECTORY, path, str(e))
        return None

    def build(self, path: Path, relative_path: str, parent: Optional[FsNode]) -> Optional[FsNode]:
        name = node_name(path)
        if name is None:
            self._record(IssueKind.UNNAMED_PATH, path)
            return None

        kind = classify(path)
        if self._excluded(relative_path, kind):
            return None

        node = FsNode(name, path, kind, parent=parent)
        if kind is not NodeKind.DIRECTORY:
            return node

        file_id = FileIdentifier.for_path(path)
        if file_id is not None and file_id in self._active:
            self._record(IssueKind.SYMLINK_LOOP, path, "directory is already being built")
            return node

        entries = self._list_entries(path)
        if entries is None:
            return node

        if file_id is not None:
            self._active.add(file_id)
        try:
            for entry in entries:
                child_relative_path = f"{relative_path}/{entry.name}" if relative_path else entry.name
                child = self.build(entry, child_relative_path, node)
                if child is not None:
                    node.add_child(child)
        finally:
            if file_id is not None:
                self._active.discard(file_id)

        return node


def build_node(
    path: PathType,
    parent: Optional[FsNode] = None,
    *,
    exclusion_rules: Optional[BaseExclusionRules] = None,
    permission_action: PermissionAction = PermissionAction.IGNORE,
    issues: Optional[List[BuildIssue]] = None,
) -> Optional[FsNode]:
    """Build a node mirroring ``path`` and, for a directory, everything below it.

    Children appear in the order the platform lists each directory, which is not
    sorted and may differ between platforms. A path that does not exist is
    modelled as a file.

    Args:
        path: The filesystem path to mirror.
        parent: Parent back-reference for the returned node. The node is not added
            to the parent's children; do that with ``parent.add_child``.
        exclusion_rules: Rules consulted with each entry's path relative to ``path``
            (forward slashes). Excluded entries and their subtrees are left out.
        permission_action: What to do when a directory cannot be listed because of
            missing permissions. Defaults to IGNORE, which keeps the directory
            with no children.
        issues: If given, receives a BuildIssue for every problem that was
            suppressed instead of raised.

    Returns:
        The root of the built subtree, or None if ``path`` itself has no usable name.

    Raises:
        PermissionError: If a directory cannot be listed and permission_action is RAISE.

    Example:
        >>> root = build_node("src")  # doctest: +SKIP
        >>> [child.name for child in root.children]  # doctest: +SKIP
        ['fstree']
    """
    builder = _TreeBuilder(exclusion_rules, permission_action, issues)
    return builder.build(Path(path), "", parent)
