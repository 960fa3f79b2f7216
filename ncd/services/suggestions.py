"""
Suggestions - "Did you mean" names for a query that matched nothing.

Uses rapidfuzz weighted ratio against the directory names the pipeline
could have matched: CWD children, root names, and root children.
"""

from rapidfuzz import fuzz, process

from ncd.environment import Environment
from ncd.search.intent import split_segments
from ncd.services.filesystem import FileSystem
from ncd.services.roots import Strategy


class SuggestionService:
    """Rank nearby directory names for a failed query."""

    def __init__(self, fs: FileSystem, limit: int = 3, threshold: int = 60):
        self.fs = fs
        self.limit = limit
        self.threshold = threshold

    def _choices(self, env: Environment) -> dict[str, str]:
        """Map of full path -> name, CWD first, then roots in order."""
        choices = {}
        for name in self.fs.list_dirs(env.cwd):
            choices.setdefault(self.fs.join(env.cwd, name), name)
        for root in env.roots:
            if not self.fs.is_dir(root.path):
                continue
            if root.strategy is not Strategy.ORIGIN:
                choices.setdefault(root.path, self.fs.name(root.path))
            if root.strategy is not Strategy.TARGET:
                for name in self.fs.list_dirs(root.path):
                    choices.setdefault(self.fs.join(root.path, name), name)
        return choices

    def suggest(self, query: str, env: Environment) -> list[str]:
        """
        Suggest directories whose names resemble the query's first segment.

        Returns:
            Up to `limit` paths, best first
        """
        segments = split_segments(query)
        if not segments or segments[0] == "..":
            return []
        term = segments[0].replace("*", "").replace("?", "")
        if not term:
            return []

        matches = process.extract(
            term,
            self._choices(env),
            scorer=fuzz.WRatio,
            limit=self.limit,
            score_cutoff=self.threshold,
        )
        # matches: list of (matched_name, score, path)
        return [path for _name, _score, path in matches]
