"""Filesystem hierarchy nodes, the recursive builder, and the tree wrapper.

This package provides the FsNode type with its add/find/remove operations, the
build_node function that mirrors a real directory into FsNodes, and FsTree, which
builds lazily and adds whole-tree lookup, counting and rendering.
"""

from fstree.fs_tree.build_issue import BuildIssue, IssueKind
from fstree.fs_tree.builder import build_node
from fstree.fs_tree.fs_node import FsNode
from fstree.fs_tree.fs_tree import FsTree
from fstree.fs_tree.permission_action import PermissionAction

__all__ = ["BuildIssue", "FsNode", "FsTree", "IssueKind", "PermissionAction", "build_node"]
