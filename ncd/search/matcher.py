"""
Wildcard Matcher - Matches a name or glob pattern against directory entries.

Glob tokens:
  *   any run of characters
  ?   exactly one character

Matching is anchored to the whole entry name and case-insensitive unless
the matcher is exact. In fuzzy mode a plain pattern also matches any entry
that contains it, but exact name matches always outrank those.
"""

import re
from functools import lru_cache
from typing import Iterable, Iterator

from loguru import logger

from ncd.search.intent import has_wildcard
from ncd.services.filesystem import FileSystem


@lru_cache(maxsize=64)
def _compile(pattern: str, exact: bool) -> re.Pattern:
    """Translate a glob into an anchored regex. Only * and ? are special."""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    flags = 0 if exact else re.IGNORECASE
    return re.compile("".join(parts), flags | re.DOTALL)


class WildcardMatcher:
    """Match patterns against a single directory listing (no recursion)."""

    def __init__(self, exact: bool = False):
        self.exact = exact

    def _fold(self, text: str) -> str:
        return text if self.exact else text.casefold()

    def match_entries(self, pattern: str, entries: Iterable[str],
                      fuzzy: bool = False) -> Iterator[str]:
        """
        Lazily yield the entry names matching pattern, in listing order.

        Args:
            pattern: Name or glob pattern (no separators)
            entries: Directory entry names
            fuzzy: Accept substring matches when no exact match exists

        Yields:
            Matching names. The caller decides how many to consume.
        """
        if has_wildcard(pattern):
            regex = _compile(pattern, self.exact)
            for name in entries:
                if regex.fullmatch(name):
                    yield name
            return

        wanted = self._fold(pattern)
        if not fuzzy:
            for name in entries:
                if self._fold(name) == wanted:
                    yield name
            return

        # Exact hits outrank substring hits, so they are not peers
        names = list(entries)
        exact_hits = [n for n in names if self._fold(n) == wanted]
        if exact_hits:
            yield from exact_hits
            return
        for name in names:
            if wanted in self._fold(name):
                yield name

    def matches_name(self, pattern: str, name: str, fuzzy: bool = False) -> bool:
        """True if a single name matches (used for Target roots)."""
        return next(self.match_entries(pattern, [name], fuzzy), None) is not None

    def walk(self, fs: FileSystem, base: str, segments: list[str],
             fuzzy: bool = False) -> list[str]:
        """
        Descend from base one segment at a time.

        '..' steps to the parent; any other segment is matched against the
        child directory names of every path reached so far.

        Returns:
            All reached directories, deduplicated, in discovery order.
        """
        current = [base]
        for segment in segments:
            reached = []
            seen = set()
            for path in current:
                if segment == "..":
                    parent = fs.parent(path)
                    nexts = [parent] if parent is not None else []
                else:
                    nexts = [
                        fs.join(path, name)
                        for name in self.match_entries(segment, fs.list_dirs(path), fuzzy)
                    ]
                for candidate in nexts:
                    key = fs.key(candidate)
                    if key not in seen:
                        seen.add(key)
                        reached.append(candidate)
            if not reached:
                logger.debug(f"No match for segment '{segment}' under {current}")
                return []
            current = reached
        return current
