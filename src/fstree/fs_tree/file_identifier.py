"""Device/inode identity used to spot directories revisited through symlinks."""

import os
from pathlib import Path
from typing import Any, Optional


class FileIdentifier:
    """Identity of a filesystem object as the pair (device ID, inode number).

    Two paths that resolve to the same directory share a FileIdentifier, which is
    how the builder notices that a symlink leads back into a directory it is
    already inside of.

    Attributes:
        device_id (int): The ``st_dev`` value from stat information.
        inode_number (int): The ``st_ino`` value from stat information.
    """

    __slots__ = ("device_id", "inode_number")

    def __init__(self, device_id: int, inode_number: int):
        self.device_id = device_id
        self.inode_number = inode_number

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "FileIdentifier":
        return cls(stat_result.st_dev, stat_result.st_ino)

    @classmethod
    def for_path(cls, path: Path) -> Optional["FileIdentifier"]:
        """Stat ``path`` (following symlinks) and return its identifier.

        Returns:
            The identifier, or None if the path cannot be stat'ed.
        """
        try:
            return cls.from_stat(path.stat())
        except OSError:
            return None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, FileIdentifier):
            return False
        return (self.device_id, self.inode_number) == (other.device_id, other.inode_number)

    def __hash__(self) -> int:
        return hash((self.device_id, self.inode_number))

    def __repr__(self) -> str:
        return f"FileIdentifier(device_id={self.device_id}, inode_number={self.inode_number})"
