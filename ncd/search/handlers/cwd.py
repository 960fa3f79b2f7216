"""
CWD Handler - Tier 3, children of the current directory.

Multi-segment queries (project/src, ..\\match*) are resolved one segment
at a time starting from the CWD.
"""

from typing import Iterator

from ncd.search.intent import LiteralIntent, WildcardIntent, is_anchored, split_segments
from ncd.search.router import Candidate, CandidateGroup, SearchContext, Tier, TierHandler


def query_text(intent) -> str:
    return intent.fragment if isinstance(intent, LiteralIntent) else intent.pattern


def is_relative_search(intent) -> bool:
    """Literal names and patterns that are not pinned to an anchor."""
    if isinstance(intent, LiteralIntent):
        return True
    return isinstance(intent, WildcardIntent) and not is_anchored(intent.pattern)


class CwdHandler(TierHandler):
    """Match the query against the CWD's child directories."""

    name = "cwd"
    tier = Tier.CWD

    def matches(self, intent) -> bool:
        return is_relative_search(intent)

    def get_groups(self, intent, context: SearchContext) -> Iterator[CandidateGroup]:
        segments = split_segments(query_text(intent))
        if not segments:
            return
        cwd = context.env.cwd
        found = context.matcher.walk(context.fs, cwd, segments, context.env.fuzzy)
        yield cwd, [Candidate(context.fs.absolute(p), self.tier) for p in found]
