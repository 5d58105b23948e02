from enum import Enum
from os import PathLike
from typing import Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]


class NodeKind(str, Enum):
    """Enumeration of the kinds of node held in the tree.

    A node's kind is fixed when the node is created. Directories may own children;
    files are leaves by convention.

    Attributes:
        FILE: Anything that is not a directory
        DIRECTORY: Directory (including symlinks that resolve to a directory)
    """

    FILE = "file"
    DIRECTORY = "directory"
