"""
Tier handlers - One per stage of the search pipeline.

Each handler checks if it applies to an intent and yields candidate groups.
"""

from .cwd import CwdHandler
from .ellipsis import EllipsisHandler
from .literal import LiteralHandler
from .roots import RootSearchHandler

__all__ = [
    "LiteralHandler",
    "EllipsisHandler",
    "CwdHandler",
    "RootSearchHandler",
]


def default_handlers() -> list:
    """All four tiers, in no particular order (the pipeline sorts them)."""
    return [LiteralHandler(), EllipsisHandler(), CwdHandler(), RootSearchHandler()]
