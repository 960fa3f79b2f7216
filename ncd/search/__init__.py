"""
Search package - Query parsing, matching and the tiered pipeline.

Queries are parsed into intents and dispatched to tier handlers
(literal, ellipsis, CWD, root search) in priority order.
"""

from .intent import parse
from .pipeline import SearchPipeline
from .router import Candidate, Tier, TierHandler

__all__ = ["parse", "SearchPipeline", "Candidate", "Tier", "TierHandler"]
