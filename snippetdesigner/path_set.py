"""
Covering set of snippet scan directories.

Snippet directories are scanned recursively, so only the most general
directories are kept: adding an ancestor evicts its descendants, and a
descendant of a directory already in the set is not added at all.

Key features:
- Pure merge function (``merge_candidate``) returning a new tuple
- Candidates that are not existing directories are dropped silently
- Deterministic insertion order
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterator
from enum import Enum

from snippetdesigner.config import PATH_LIST_SEPARATOR

logger = logging.getLogger(__name__)

_SEPARATORS = ("/", "\\")


class AncestorMatch(Enum):
    """How to decide whether one directory covers another."""

    # Literal substring containment: "/data" covers "/database"
    SUBSTRING = "substring"
    # Path-segment boundaries: "/data" covers "/data/x" but not "/database"
    SEGMENT = "segment"

    @classmethod
    def parse(cls, value: str | None) -> AncestorMatch:
        """Parse a settings value, falling back to SUBSTRING."""
        if not value:
            return cls.SUBSTRING
        try:
            return cls(value.strip().lower())
        except ValueError:
            logger.warning(f"Unknown ancestor match mode {value!r}, using substring")
            return cls.SUBSTRING


def is_ancestor(
    ancestor: str, path: str, match: AncestorMatch = AncestorMatch.SUBSTRING
) -> bool:
    """Return True if *ancestor* covers *path* (a path covers itself)."""
    if match is AncestorMatch.SUBSTRING:
        return ancestor in path

    trimmed = ancestor.rstrip("/\\")
    if not trimmed:
        # Filesystem root covers every absolute path
        return bool(ancestor) and path.startswith(ancestor)
    if not path.startswith(trimmed):
        return False
    rest = path[len(trimmed) :]
    return not rest or rest[0] in _SEPARATORS


def split_path_list(raw: str) -> list[str]:
    """Split a ``;``-separated path list, dropping empty pieces."""
    return [piece for piece in raw.split(PATH_LIST_SEPARATOR) if piece]


def merge_candidate(
    current: tuple[str, ...],
    candidate: str,
    *,
    exists: Callable[[str], bool] = os.path.isdir,
    match: AncestorMatch = AncestorMatch.SUBSTRING,
) -> tuple[str, ...]:
    """Merge *candidate* into the covering set *current*.

    Rules, applied in order:
    1. A verbatim duplicate leaves the set unchanged.
    2. A candidate that is not an existing directory is dropped.
    3. Entries the candidate covers are removed, unless they equal the
       candidate ignoring case.
    4. If a remaining entry covers the candidate, it is not added.
    5. Otherwise the candidate is appended.

    Args:
        current: Current covering set.
        candidate: Directory path to merge.
        exists: Directory existence check.
        match: Ancestor comparison mode.

    Returns:
        The new covering set.
    """
    if candidate in current:
        return current

    if not exists(candidate):
        logger.debug(f"Skipping missing snippet directory: {candidate}")
        return current

    folded = candidate.casefold()
    to_remove = {
        existing
        for existing in current
        if is_ancestor(candidate, existing, match) and existing.casefold() != folded
    }
    remaining = tuple(existing for existing in current if existing not in to_remove)
    for removed in to_remove:
        logger.debug(f"{candidate} covers {removed}, dropping it")

    if any(is_ancestor(existing, candidate, match) for existing in remaining):
        logger.debug(f"{candidate} is already covered")
        return remaining

    return remaining + (candidate,)


class ScanDirectorySet:
    """Ordered accumulator of directories to scan recursively for snippets.

    Every pair of distinct entries satisfies the covering invariant: neither
    covers the other under the configured ``AncestorMatch``.
    """

    def __init__(
        self,
        *,
        exists: Callable[[str], bool] = os.path.isdir,
        match: AncestorMatch = AncestorMatch.SUBSTRING,
    ) -> None:
        self._paths: tuple[str, ...] = ()
        self._exists = exists
        self._match = match

    @property
    def match(self) -> AncestorMatch:
        return self._match

    def try_add(self, candidate: str) -> None:
        """Merge a single candidate directory into the set."""
        self._paths = merge_candidate(
            self._paths, candidate, exists=self._exists, match=self._match
        )

    def add_path_list(self, raw: str) -> None:
        """Merge every directory of a ``;``-separated list, in order."""
        for piece in split_path_list(raw):
            self.try_add(piece)

    def as_tuple(self) -> tuple[str, ...]:
        return self._paths

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __repr__(self) -> str:
        return f"ScanDirectorySet({list(self._paths)!r})"
