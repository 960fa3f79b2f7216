"""
Root Search Handler - Tier 4, the configured search roots (CDPATH).

Roots are tried in configured order and each applies its own strategy.
The first root with any match decides: one match wins, several are
ambiguous. Optional parallel scanning keeps that first-by-index rule.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterator

from loguru import logger

from ncd.search.handlers.cwd import is_relative_search, query_text
from ncd.search.intent import split_segments
from ncd.search.router import Candidate, CandidateGroup, SearchContext, Tier, TierHandler
from ncd.services.roots import SearchRoot, search_root

MAX_WORKERS = 8


class RootSearchHandler(TierHandler):
    """Search every configured root with its strategy."""

    name = "root_search"
    tier = Tier.ROOT_SEARCH

    def matches(self, intent) -> bool:
        return is_relative_search(intent)

    def get_groups(self, intent, context: SearchContext) -> Iterator[CandidateGroup]:
        segments = split_segments(query_text(intent))
        if not segments or segments[0] == "..":
            # Parent-relative queries only make sense from the CWD
            return

        fs = context.fs
        fuzzy = context.env.fuzzy

        def scan(root: SearchRoot) -> list[Candidate]:
            if not fs.is_dir(root.path):
                logger.debug(f"Skipping missing root {root.path}")
                return []
            found = search_root(root, segments, fs, context.matcher, fuzzy)
            return [Candidate(fs.absolute(p), self.tier, root.path) for p in found]

        roots = context.env.roots
        if context.env.parallel_roots and len(roots) > 1:
            # map() yields in submission order, so precedence is by index
            with ThreadPoolExecutor(max_workers=min(MAX_WORKERS, len(roots))) as pool:
                for root, candidates in zip(roots, pool.map(scan, roots)):
                    yield root.path, candidates
            return

        for root in roots:
            yield root.path, scan(root)
