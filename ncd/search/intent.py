"""
Query Parser - Classifies a raw query string into a typed intent.

Parsing is total: every string maps to exactly one intent, with
LiteralIntent as the fallback.

  -           OldPwdIntent
  ~           HomeIntent
  ...[/tail]  EllipsisIntent (three dots = up two levels)
  proj*       WildcardIntent
  C:\\x, /x    AnchorIntent
  anything    LiteralIntent
"""

import re
from dataclasses import dataclass
from typing import Optional, Union

SEPARATORS = "/\\"

_ELLIPSIS_RE = re.compile(r"^(\.{3,})(?:[\\/]+(.*))?$")
_DRIVE_RE = re.compile(r"^[A-Za-z]:(?:[\\/]|$)")
_BARE_DRIVE_RE = re.compile(r"^[A-Za-z]:$")


@dataclass(frozen=True)
class LiteralIntent:
    fragment: str


@dataclass(frozen=True)
class EllipsisIntent:
    level: int
    tail: Optional[str] = None


@dataclass(frozen=True)
class WildcardIntent:
    pattern: str


@dataclass(frozen=True)
class HomeIntent:
    pass


@dataclass(frozen=True)
class OldPwdIntent:
    pass


@dataclass(frozen=True)
class AnchorIntent:
    path: str


Intent = Union[
    LiteralIntent, EllipsisIntent, WildcardIntent,
    HomeIntent, OldPwdIntent, AnchorIntent,
]


def has_wildcard(text: str) -> bool:
    return "*" in text or "?" in text


def is_anchored(text: str) -> bool:
    """True for drive-anchored (C:\\x) or root-anchored (/x, \\x) text."""
    return bool(text) and (text[0] in SEPARATORS or bool(_DRIVE_RE.match(text)))


def split_anchor(text: str) -> tuple[str, str]:
    """
    Split an anchored path into (anchor, remainder).

    The anchor is "C:\\" for drive paths and "" for root-relative ones;
    callers resolve the empty anchor against the drive of the CWD.
    """
    if _DRIVE_RE.match(text):
        separator = text[2] if len(text) > 2 else "\\"
        return text[:2] + separator, text[2:].lstrip(SEPARATORS)
    return "", text.lstrip(SEPARATORS)


def split_segments(fragment: str) -> list[str]:
    """Split on either separator, dropping empty and '.' segments."""
    parts = re.split(r"[\\/]", fragment)
    return [p for p in parts if p.strip() and p != "."]


def _normalize(raw: str) -> str:
    text = raw.strip()
    trimmed = text.rstrip(SEPARATORS)
    # Keep "/" and "C:\" as anchors
    if not trimmed or _BARE_DRIVE_RE.match(trimmed):
        return text
    return trimmed


def parse(raw: str) -> Intent:
    """Classify a raw query. Never raises."""
    text = _normalize(raw)

    if text == "-":
        return OldPwdIntent()
    if text == "~":
        return HomeIntent()

    ellipsis = _ELLIPSIS_RE.match(text)
    if ellipsis:
        dots, tail = ellipsis.groups()
        return EllipsisIntent(level=len(dots) - 1, tail=tail or None)

    if has_wildcard(text):
        return WildcardIntent(pattern=text)

    if is_anchored(text):
        return AnchorIntent(path=text)

    return LiteralIntent(fragment=text)
