"""
Search Pipeline - Resolves a query through the priority-ordered tiers.

  1. Literal/Anchored   existing path, no searching
  2. Ellipsis           ancestor hopping, terminal
  3. CWD                children of the current directory
  4. Root Search        CDPATH roots by strategy

The first non-empty candidate group wins. A group with more than one
candidate is ambiguous and fails; peers are never auto-picked and
different tiers never compete. Home (~) and toggle (-) bypass the tiers.
"""

from typing import Iterable, Iterator, Optional

from loguru import logger

from ncd.environment import Environment
from ncd.errors import Ambiguous, NoMatch, NotSet
from ncd.search.handlers import default_handlers
from ncd.search.intent import HomeIntent, LiteralIntent, OldPwdIntent, parse
from ncd.search.matcher import WildcardMatcher
from ncd.search.router import Candidate, CandidateGroup, SearchContext, Tier, TierHandler
from ncd.services.filesystem import FileSystem, RealFileSystem


class SearchPipeline:
    """Routes parsed queries to tier handlers in tier order."""

    def __init__(self, env: Environment, fs: Optional[FileSystem] = None,
                 handlers: Optional[Iterable[TierHandler]] = None):
        self.env = env
        self.fs = fs or RealFileSystem()
        self.context = SearchContext(env, self.fs, WildcardMatcher(exact=env.exact))
        self._handlers: list[TierHandler] = []
        for handler in (default_handlers() if handlers is None else handlers):
            self.register(handler)

    def register(self, handler: TierHandler) -> None:
        """Register a handler and re-sort by tier."""
        self._handlers.append(handler)
        self._handlers.sort(key=lambda h: h.tier)

    def _direct(self, intent) -> Optional[str]:
        """Resolve ~ and - straight from the snapshot."""
        if isinstance(intent, HomeIntent):
            if not self.env.home:
                raise NotSet("USERPROFILE/HOME")
            return self.env.home
        if isinstance(intent, OldPwdIntent):
            if not self.env.previous_dir:
                raise NotSet("OLDPWD")
            return self.env.previous_dir
        return None

    def _groups(self, intent) -> Iterator[CandidateGroup]:
        """Deduplicated candidate groups from every applicable tier, in order."""
        for handler in self._handlers:
            if not handler.matches(intent):
                continue
            logger.debug(f"Tier {handler.tier.value} ({handler.name}) handling {intent}")
            for where, candidates in handler.get_groups(intent, self.context):
                seen = set()
                unique = []
                for candidate in candidates:
                    key = self.fs.key(candidate.path)
                    if key not in seen:
                        seen.add(key)
                        unique.append(candidate)
                logger.debug(f"  {where or handler.name}: {len(unique)} candidate(s)")
                yield where, unique

    def resolve(self, query: str) -> str:
        """
        Resolve a query to exactly one absolute path.

        Args:
            query: Raw query string

        Returns:
            The resolved path

        Raises:
            NoMatch: No tier produced a candidate
            Ambiguous: The deciding tier or root produced several
            NotSet, NotFound, BoundaryReached: From a definitive tier
        """
        intent = parse(query)
        direct = self._direct(intent)
        if direct is not None:
            return direct
        if isinstance(intent, LiteralIntent) and not intent.fragment:
            raise NoMatch(query)

        for where, group in self._groups(intent):
            if not group:
                continue
            if len(group) > 1:
                raise Ambiguous([c.path for c in group], where)
            logger.debug(f"Resolved '{query}' via tier {group[0].tier.name}")
            return group[0].path

        raise NoMatch(query)

    def search(self, query: str) -> list[Candidate]:
        """
        Every candidate from every applicable tier, in priority order.

        Used by list mode: ambiguity is not an error here, but definitive
        tier errors (NotFound, BoundaryReached, NotSet) still propagate.
        """
        intent = parse(query)
        direct = self._direct(intent)
        if direct is not None:
            return [Candidate(direct, Tier.LITERAL)]
        if isinstance(intent, LiteralIntent) and not intent.fragment:
            raise NoMatch(query)

        results = []
        seen = set()
        for _where, group in self._groups(intent):
            for candidate in group:
                key = self.fs.key(candidate.path)
                if key not in seen:
                    seen.add(key)
                    results.append(candidate)
        if not results:
            raise NoMatch(query)
        return results
