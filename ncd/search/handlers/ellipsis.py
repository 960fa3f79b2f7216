"""
Ellipsis Handler - Tier 2, ancestor hopping (... = up two levels).

Selected by the query itself, so its result or error ends the search.
"""

from typing import Iterator

from ncd.search.ellipsis import EllipsisResolver
from ncd.search.intent import EllipsisIntent
from ncd.search.router import Candidate, CandidateGroup, SearchContext, Tier, TierHandler


class EllipsisHandler(TierHandler):
    """Delegate ellipsis intents to the EllipsisResolver."""

    name = "ellipsis"
    tier = Tier.ELLIPSIS

    def matches(self, intent) -> bool:
        return isinstance(intent, EllipsisIntent)

    def get_groups(self, intent, context: SearchContext) -> Iterator[CandidateGroup]:
        resolver = EllipsisResolver(context.fs, context.matcher, context.env.fuzzy)
        path = resolver.resolve(intent.level, intent.tail, context.env.cwd)
        yield None, [Candidate(path, self.tier)]
