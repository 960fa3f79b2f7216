"""
Ellipsis Resolver - Maps a run of dots to an ancestor directory.

Classic shell convention: the level is the number of dots minus one,
so `...` goes up two levels and `....` up three. An optional tail is
resolved underneath the ancestor.
"""

from typing import Optional

from loguru import logger

from ncd.errors import Ambiguous, BoundaryReached, NotFound
from ncd.search.intent import split_segments
from ncd.search.matcher import WildcardMatcher
from ncd.services.filesystem import FileSystem


class EllipsisResolver:
    """Walk up from the CWD and optionally back down a tail."""

    def __init__(self, fs: FileSystem, matcher: WildcardMatcher, fuzzy: bool = False):
        self.fs = fs
        self.matcher = matcher
        self.fuzzy = fuzzy

    def ancestor(self, level: int, cwd: str) -> str:
        current = self.fs.absolute(cwd)
        for _ in range(level):
            parent = self.fs.parent(current)
            if parent is None:
                raise BoundaryReached(level, cwd)
            current = parent
        return current

    def resolve(self, level: int, tail: Optional[str], cwd: str) -> str:
        """
        Resolve an ellipsis query.

        Args:
            level: Number of directories to go up
            tail: Optional path fragment below the ancestor
            cwd: Directory to start from

        Returns:
            Absolute path of the ancestor, or of the tail beneath it

        Raises:
            BoundaryReached: A filesystem root was hit before `level` steps
            NotFound: The tail does not exist under the ancestor
            Ambiguous: A tail pattern matched several directories
        """
        base = self.ancestor(level, cwd)
        logger.debug(f"Ellipsis level {level} from {cwd} -> {base}")
        if not tail:
            return base

        direct = self.fs.join(base, tail)
        # Exact matching must confirm casing, so it always walks
        if not self.matcher.exact and self.fs.is_dir(direct):
            return self.fs.absolute(direct)

        found = self.matcher.walk(self.fs, base, split_segments(tail), self.fuzzy)
        if not found:
            raise NotFound(direct)
        if len(found) > 1:
            raise Ambiguous(found, where=base)
        return self.fs.absolute(found[0])
