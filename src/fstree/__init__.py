"""In-memory filesystem hierarchy trees.

This package builds trees of nodes that mirror a portion of a real directory
hierarchy and provides the operations to inspect, locate, add and remove nodes
without going back to the storage device.
"""

from importlib.metadata import PackageNotFoundError, version

from fstree.fs_tree import BuildIssue, FsNode, FsTree, IssueKind, PermissionAction, build_node
from fstree.types import NodeKind

# Expose the version for programmatic use
try:
    __version__ = version("fstree")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "BuildIssue",
    "FsNode",
    "FsTree",
    "IssueKind",
    "NodeKind",
    "PermissionAction",
    "build_node",
]
