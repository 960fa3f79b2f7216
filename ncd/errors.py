"""
Navigation errors - Terminal failures of a single resolution.

Every error carries the exit code the CLI maps it to. None of them are
retried: the filesystem is assumed not to change mid-resolution.
"""

from typing import Optional, Sequence


class NavigationError(Exception):
    """Base class for all resolution failures."""

    exit_code = 1


class NotFound(NavigationError):
    """An explicit literal, anchored, or tail path does not exist."""

    exit_code = 6

    def __init__(self, path: str):
        self.path = path
        super().__init__(f'Path does not exist: "{path}"')


class BoundaryReached(NavigationError):
    """Ellipsis asked for more ancestors than the start directory has."""

    exit_code = 5

    def __init__(self, level: int, start: str):
        self.level = level
        self.start = start
        super().__init__(f"Cannot go up {level} level(s) from {start}")


class NoMatch(NavigationError):
    """No tier produced a candidate."""

    exit_code = 1

    def __init__(self, query: str, suggestions: Sequence[str] = ()):
        self.query = query
        self.suggestions = tuple(suggestions)
        super().__init__(f'Could not resolve "{query}"')


class Ambiguous(NavigationError):
    """Several equally ranked candidates within one tier or root."""

    exit_code = 3

    def __init__(self, candidates: Sequence[str], where: Optional[str] = None):
        self.candidates = list(candidates)
        self.where = where
        location = f" in {where}" if where else ""
        super().__init__(f"Ambiguous match{location}")


class NotSet(NavigationError):
    """Home or previous directory requested but not present in the environment."""

    exit_code = 4

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"{variable} not set")
