"""
Literal/Anchored Handler - Tier 1, paths that exist as typed.

A literal that exists relative to the CWD (or as given) wins immediately
with no searching. Anchored queries (C:\\x, /x, \\x) never leave their
anchor: if the exact path is missing, their segments are matched
case-insensitively below the anchor, and a miss is NotFound. With --exact
the casing of every segment is checked against the directory listing.
"""

from typing import Iterator

from loguru import logger

from ncd.errors import NotFound
from ncd.search.intent import (
    AnchorIntent, LiteralIntent, WildcardIntent,
    is_anchored, split_anchor, split_segments,
)
from ncd.search.router import Candidate, CandidateGroup, SearchContext, Tier, TierHandler


class LiteralHandler(TierHandler):
    """Existing literal paths and anchored paths or patterns."""

    name = "literal"
    tier = Tier.LITERAL

    def matches(self, intent) -> bool:
        if isinstance(intent, (LiteralIntent, AnchorIntent)):
            return True
        return isinstance(intent, WildcardIntent) and is_anchored(intent.pattern)

    def get_groups(self, intent, context: SearchContext) -> Iterator[CandidateGroup]:
        fs = context.fs
        cwd = context.env.cwd

        if isinstance(intent, LiteralIntent):
            path = fs.join(cwd, intent.fragment)
            if fs.is_dir(path) and self._cased(cwd, intent.fragment, context):
                yield cwd, [Candidate(fs.absolute(path), self.tier)]
            return

        text = intent.path if isinstance(intent, AnchorIntent) else intent.pattern
        if isinstance(intent, AnchorIntent) and fs.is_dir(text) and not context.env.exact:
            yield None, [Candidate(fs.absolute(text), self.tier)]
            return

        anchor, rest = split_anchor(text)
        if not anchor:
            # Root-relative: use the drive of the CWD
            anchor = fs.anchor(cwd)
        logger.debug(f"Walking '{rest}' below anchor {anchor}")
        found = context.matcher.walk(fs, anchor, split_segments(rest), context.env.fuzzy)
        if not found and isinstance(intent, AnchorIntent):
            raise NotFound(text)
        yield anchor, [Candidate(fs.absolute(p), self.tier) for p in found]

    @staticmethod
    def _cased(base: str, fragment: str, context: SearchContext) -> bool:
        """Under --exact, every segment must match the casing on disk."""
        if not context.env.exact:
            return True
        return bool(context.matcher.walk(context.fs, base, split_segments(fragment), False))
