"""Permission action enum for handling unreadable directories during a build."""

from enum import Enum


class PermissionAction(str, Enum):
    """Action to take when a directory's entries cannot be listed during a build.

    Values:
        IGNORE: Keep the directory node with no children and carry on (default behavior)
        RAISE: Raise a PermissionError naming the directory
    """

    IGNORE = "ignore"
    RAISE = "raise"
