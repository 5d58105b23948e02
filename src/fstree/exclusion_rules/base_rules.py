from abc import ABC, abstractmethod
from typing import Sequence, Union

from fstree.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class for deciding which entries a build leaves out.

    The builder asks ``exclude`` about every entry below the build root, passing
    the entry's path relative to that root with forward slashes. Directories are
    asked about a second time with a trailing slash so that directory-only
    patterns can match. An excluded directory is skipped with its whole subtree.

    Loading rules from files and adding single rules are optional capabilities.

    Example:
        >>> class NoHiddenEntries(BaseExclusionRules):
        ...     def exclude(self, path: str) -> bool:
        ...         return path.rstrip("/").rsplit("/", 1)[-1].startswith(".")
        >>> rules = NoHiddenEntries()
        >>> rules.exclude("src/.cache/")
        True
        >>> rules.exclude("src/main.py")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine whether a path should be left out of the tree.

        Args:
            path (str): Path relative to the build root, using forward slashes.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load rules from one or more files.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single rule directly.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
