"""
Root Registry - Ordered search roots (CDPATH) and their strategies.

Strategies:
  origin  scan INSIDE the root, matching its children (sh style)
  target  the root itself is the candidate, matched by its own name
  hybrid  target first; if that misses, origin
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional, Union

from loguru import logger

from ncd.services.filesystem import FileSystem


class Strategy(str, Enum):
    ORIGIN = "origin"
    TARGET = "target"
    HYBRID = "hybrid"

    @classmethod
    def parse(cls, token: Any, default: "Strategy" = None) -> "Strategy":
        """Parse a strategy token, falling back to default on bad input."""
        if default is None:
            default = cls.ORIGIN
        if token is None or token == "":
            return default
        if not isinstance(token, str):
            logger.warning(f"Strategy must be a string, got {token!r}; using '{default.value}'")
            return default
        try:
            return cls(token.strip().lower())
        except ValueError:
            logger.warning(f"Unknown strategy '{token}', using '{default.value}'")
            return default


@dataclass(frozen=True)
class SearchRoot:
    path: str
    strategy: Strategy = Strategy.ORIGIN


def split_root_list(value: Optional[str]) -> list[str]:
    """
    Split a CDPATH-style list.

    Semicolons are the separator. When none is present and the platform
    separator differs (':' on POSIX), the platform separator is used.
    """
    if not value:
        return []
    separator = ";" if ";" in value or os.pathsep == ";" else os.pathsep
    return [p.strip() for p in value.split(separator) if p.strip()]


RootSpec = Union[str, dict, SearchRoot]


class RootRegistry:
    """Immutable ordered set of SearchRoot built from configuration."""

    def __init__(self, entries: Iterable[RootSpec], default: Strategy = Strategy.ORIGIN,
                 override: Optional[Strategy] = None):
        """
        Args:
            entries: Root paths, {"path", "strategy"} tables, or SearchRoots
            default: Strategy for entries that do not name one
            override: Strategy forced onto every root (e.g. --cd)
        """
        roots = []
        seen = set()
        for entry in entries:
            root = self._to_root(entry, default)
            if root is None:
                continue
            if override is not None:
                root = SearchRoot(root.path, override)
            key = os.path.normcase(os.path.normpath(root.path))
            if key in seen:
                logger.debug(f"Skipping duplicate root {root.path}")
                continue
            seen.add(key)
            roots.append(root)
        self._roots = tuple(roots)

    @staticmethod
    def _to_root(entry: RootSpec, default: Strategy) -> Optional[SearchRoot]:
        if isinstance(entry, SearchRoot):
            return entry
        if isinstance(entry, str):
            return SearchRoot(entry, default) if entry.strip() else None
        if isinstance(entry, dict) and entry.get("path"):
            strategy = Strategy.parse(entry.get("strategy"), default)
            return SearchRoot(str(entry["path"]), strategy)
        logger.warning(f"Skipping malformed root entry: {entry!r}")
        return None

    def roots(self) -> tuple[SearchRoot, ...]:
        return self._roots

    def __len__(self) -> int:
        return len(self._roots)


def search_root(root: SearchRoot, segments: list[str], fs: FileSystem,
                matcher, fuzzy: bool = False) -> list[str]:
    """
    Apply a root's strategy to a segmented query.

    Returns:
        Matching directories for this root (peers; more than one is ambiguous)
    """
    if not segments:
        return []

    def target() -> list[str]:
        if not matcher.matches_name(segments[0], fs.name(root.path), fuzzy):
            return []
        return matcher.walk(fs, root.path, segments[1:], fuzzy)

    def origin() -> list[str]:
        return matcher.walk(fs, root.path, segments, fuzzy)

    if root.strategy is Strategy.TARGET:
        return target()
    if root.strategy is Strategy.ORIGIN:
        return origin()
    # Hybrid: a Target hit wins over Origin for the same root
    return target() or origin()
