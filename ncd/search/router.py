"""
Tier Router - Shared types for the priority-ordered search tiers.

Each tier handler declares a tier (lower = checked first) and a matches()
method. Matching handlers yield groups of peer candidates; the pipeline
stops at the first non-empty group.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, Optional

from ncd.environment import Environment
from ncd.search.matcher import WildcardMatcher
from ncd.services.filesystem import FileSystem


class Tier(IntEnum):
    LITERAL = 1
    ELLIPSIS = 2
    CWD = 3
    ROOT_SEARCH = 4


@dataclass(frozen=True)
class Candidate:
    """A resolved directory and where it came from."""
    path: str
    tier: Tier
    root: Optional[str] = None  # originating search root, tier 4 only


@dataclass(frozen=True)
class SearchContext:
    """What a handler may use: the snapshot, the disk, and the matcher."""
    env: Environment
    fs: FileSystem
    matcher: WildcardMatcher


# (where, peers): where names the directory searched, for ambiguity reports
CandidateGroup = tuple[Optional[str], list[Candidate]]


class TierHandler(ABC):
    """Base class for all tier handlers."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Handler identifier."""
        ...

    @property
    @abstractmethod
    def tier(self) -> Tier:
        """Lower tier = checked first."""
        ...

    @abstractmethod
    def matches(self, intent) -> bool:
        """Return True if this tier applies to the intent."""
        ...

    @abstractmethod
    def get_groups(self, intent, context: SearchContext) -> Iterator[CandidateGroup]:
        """Yield candidate groups in precedence order. May raise NavigationError."""
        ...
