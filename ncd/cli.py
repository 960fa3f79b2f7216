"""
NCD command line - Entry point used by the shell wrapper.

Prints the resolved path on stdout and exits 0, or prints an error on
stderr and exits with the error's code. The wrapper does the actual cd.

Usage:
  ncd [OPTIONS] [QUERY]
"""

import argparse
import sys
from typing import Optional, Sequence

from loguru import logger

from ncd import __version__
from ncd.environment import build_environment
from ncd.errors import Ambiguous, NavigationError, NoMatch
from ncd.search.pipeline import SearchPipeline
from ncd.services.filesystem import FileSystem, RealFileSystem
from ncd.services.roots import Strategy
from ncd.services.suggestions import SuggestionService
from ncd.utils.helpers import (
    clean_output, default_settings_path, load_settings, parse_flag, setup_logging,
)

EPILOG = """\
queries:
  ...           up two levels (each extra dot goes one higher)
  .../build     up two levels, then down to build
  -             previous directory (OLDPWD)
  ~             home directory
  project       search CWD, then CDPATH roots
  project/src   find 'project', then 'src' inside it
  proj*         wildcard search (* any run, ? one character)

environment:
  CDPATH        semicolon-separated search roots
  NCD_MODE      default strategy (origin, target, hybrid)
  NCD_FUZZY     substring matching when set to 1/true/yes/on
  NCD_CONFIG    settings file (default ~/.config/ncd/settings.toml)
  OLDPWD        used for '-'
  USERPROFILE/HOME  used for '~'
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ncd",
        description="Resolve a short directory query to one absolute path.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("query", nargs="?", default="~", help="Directory query (default: ~)")
    parser.add_argument(
        "-l", "--list",
        action="store_true",
        help="List all matches instead of failing on ambiguity",
    )
    parser.add_argument(
        "-e", "--exact",
        action="store_true",
        default=None,
        help="Case-sensitive matching",
    )
    parser.add_argument(
        "-#", "--glob", "--fuzzy",
        dest="fuzzy",
        action="store_true",
        default=None,
        help="Match names containing the query, without wildcards",
    )
    parser.add_argument(
        "--cd",
        choices=[s.value for s in Strategy],
        help="Search strategy for every root (default: NCD_MODE or origin)",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        default=None,
        help="Scan search roots concurrently",
    )
    parser.add_argument("--config", help="Path to settings file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress error messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def report_error(error: NavigationError, quiet: bool = False) -> None:
    """Describe a failed resolution on stderr."""
    if quiet:
        return
    print(f"NCD Error: {error}", file=sys.stderr)
    if isinstance(error, Ambiguous):
        for candidate in error.candidates:
            print(f"  -> {candidate}", file=sys.stderr)
    elif isinstance(error, NoMatch) and error.suggestions:
        print("Did you mean:", file=sys.stderr)
        for suggestion in error.suggestions:
            print(f"  -> {suggestion}", file=sys.stderr)


def run(argv: Optional[Sequence[str]] = None, environ=None, cwd: Optional[str] = None,
        fs: Optional[FileSystem] = None) -> int:
    """
    Resolve one query and print the result.

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)

    # Replace loguru's DEBUG default sink before anything logs
    forced = "DEBUG" if args.verbose else ("CRITICAL" if args.quiet else None)
    setup_logging(forced or "WARNING")
    settings_path = args.config or default_settings_path(environ)
    settings = load_settings(settings_path)
    if forced is None:
        setup_logging(settings["logging"]["level"])

    env = build_environment(
        settings,
        environ=environ,
        cwd=cwd,
        strategy=Strategy(args.cd) if args.cd else None,
        fuzzy=args.fuzzy,
        exact=args.exact,
        parallel_roots=args.parallel,
    )
    fs = fs or RealFileSystem()
    pipeline = SearchPipeline(env, fs)
    logger.debug(
        f"Query '{args.query}' cwd={env.cwd} strategy={env.strategy.value} "
        f"roots={[r.path for r in env.roots]}"
    )

    try:
        if args.list:
            paths = [c.path for c in pipeline.search(args.query)]
        else:
            paths = [pipeline.resolve(args.query)]
    except NoMatch as e:
        error = e
        suggest = settings["suggest"]
        if parse_flag(suggest.get("enabled")) is not False and not args.quiet:
            service = SuggestionService(fs, suggest.get("limit", 3), suggest.get("threshold", 60))
            error = NoMatch(e.query, service.suggest(e.query, env))
        report_error(error, args.quiet)
        return error.exit_code
    except NavigationError as e:
        report_error(e, args.quiet)
        return e.exit_code

    for path in paths:
        print(clean_output(path))
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
