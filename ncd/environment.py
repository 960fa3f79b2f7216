"""
Environment - Read-only snapshot of everything one invocation needs.

Built once at process start from settings, environment variables and CLI
overrides, then passed explicitly to the pipeline. Nothing mutates it.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from ncd.services.roots import RootRegistry, SearchRoot, Strategy, split_root_list
from ncd.utils.helpers import parse_flag


@dataclass(frozen=True)
class Environment:
    cwd: str
    registry: RootRegistry = field(default_factory=lambda: RootRegistry([]))
    previous_dir: Optional[str] = None
    home: Optional[str] = None
    strategy: Strategy = Strategy.ORIGIN
    fuzzy: bool = False
    exact: bool = False
    parallel_roots: bool = False

    @property
    def roots(self) -> tuple[SearchRoot, ...]:
        return self.registry.roots()


def _first_set(environ: Mapping[str, str], *names: str) -> Optional[str]:
    for name in names:
        value = environ.get(name)
        if value:
            return value
    return None


def build_environment(
    settings: dict[str, Any],
    environ: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    strategy: Optional[Strategy] = None,
    fuzzy: Optional[bool] = None,
    exact: Optional[bool] = None,
    parallel_roots: Optional[bool] = None,
) -> Environment:
    """
    Build the snapshot. Precedence: arguments > environ > settings.

    Args:
        settings: Merged settings (see utils.helpers.load_settings)
        environ: Environment variables (defaults to os.environ)
        cwd: Working directory (defaults to os.getcwd())
        strategy: --cd override, applied to every root
        fuzzy, exact, parallel_roots: CLI flag overrides

    Returns:
        Immutable Environment
    """
    if environ is None:
        environ = os.environ
    if cwd is None:
        cwd = os.getcwd()

    search = settings.get("search", {})
    default_strategy = Strategy.parse(
        environ.get("NCD_MODE") or search.get("strategy"), Strategy.ORIGIN
    )

    entries = split_root_list(environ.get("CDPATH"))
    entries.extend(settings.get("roots", []))
    registry = RootRegistry(entries, default=default_strategy, override=strategy)

    if fuzzy is None:
        fuzzy = parse_flag(environ.get("NCD_FUZZY"))
    if fuzzy is None:
        fuzzy = bool(parse_flag(search.get("fuzzy")))

    return Environment(
        cwd=cwd,
        registry=registry,
        previous_dir=environ.get("OLDPWD") or None,
        home=_first_set(environ, "USERPROFILE", "HOME"),
        strategy=strategy or default_strategy,
        fuzzy=fuzzy,
        exact=bool(parse_flag(search.get("exact"))) if exact is None else exact,
        parallel_roots=(
            bool(parse_flag(search.get("parallel_roots")))
            if parallel_roots is None else parallel_roots
        ),
    )
