"""Records of problems the builder recovered from instead of raising."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class IssueKind(str, Enum):
    """Kinds of recoverable problems met while building a tree.

    Values:
        UNNAMED_PATH: The path has no final component usable as a node name; no node was built
        UNREADABLE_DIRECTORY: The directory's entries could not be listed; the node has no children
        SYMLINK_LOOP: The directory was already being built higher up; the node has no children
    """

    UNNAMED_PATH = "unnamed_path"
    UNREADABLE_DIRECTORY = "unreadable_directory"
    SYMLINK_LOOP = "symlink_loop"


@dataclass(frozen=True)
class BuildIssue:
    """A single suppressed build problem.

    Attributes:
        kind (IssueKind): What went wrong.
        path (Path): The path the problem was met at.
        message (str): Human readable detail, typically the underlying OS error.

    Example:
        >>> issue = BuildIssue(IssueKind.UNREADABLE_DIRECTORY, Path("root/private"), "Permission denied")
        >>> str(issue)
        'unreadable_directory: root/private (Permission denied)'
    """

    kind: IssueKind
    path: Path
    message: str = ""

    def __str__(self) -> str:
        detail = f" ({self.message})" if self.message else ""
        return f"{self.kind.value}: {self.path.as_posix()}{detail}"
