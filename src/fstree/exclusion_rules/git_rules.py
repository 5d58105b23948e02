"""Exclusion rules written in .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern  # type: ignore

from fstree.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Exclusion rules using .gitignore pattern syntax, matched by pathspec.

    Globs, directory-only patterns (trailing ``/``), negations (leading ``!``),
    ``**`` and comments all behave as they do in Git. Patterns are evaluated in
    the order they were added, so a later negation can re-include a path an
    earlier pattern excluded.

    Attributes:
        spec (PathSpec): Compiled pattern matcher.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.pyc")
        >>> rules.add_rule("build/")
        >>> rules.exclude("pkg/module.pyc")
        True
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("build")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Create the rules, optionally loading patterns from files.

        Args:
            rules_files: A path or sequence of paths to .gitignore-style files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._patterns: List[GitWildMatchPattern] = []
        self.spec = PathSpec(self._patterns)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return bool(self.spec.match_file(path))

    def _extend(self, lines: Sequence[str]) -> None:
        self._patterns.extend(PathSpec.from_lines(GitWildMatchPattern, lines).patterns)
        self.spec = PathSpec(self._patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns of one or more .gitignore-style files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            self._extend(path.read_text().splitlines())

    def add_rule(self, rule: str) -> None:
        """Append a single pattern, e.g. ``"*.log"``, ``"node_modules/"`` or ``"!keep.log"``."""
        self._extend([rule])
