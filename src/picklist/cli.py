"""CLI entry point for picklist."""

import argparse
import os
import sys
from pathlib import Path
from typing import TextIO

from .config import Config, load_config
from .filtering import FilterError, FilterOptions, cap, filter_items, score_items
from .fuzzy import SCORERS, get_scorer
from .logger import get_logger, setup_logger
from .tui import run_picker

logger = get_logger("cli")

HELP_EPILOG = """\
examples:
  ls | picklist                  pick a file interactively
  picklist notes.txt -q todo     start with a query
  picklist --filter -q pe fruit.txt
                                 print the ranked matches and exit

exit status: 0 on selection, 1 on cancel or no match, 2 on error
"""


def read_items(stream: TextIO) -> list[str]:
    """Read one item per line, dropping blank lines."""
    return [line.rstrip("\r\n") for line in stream if line.strip()]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Fuzzy selection list",
        prog="picklist",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Read items from FILE instead of stdin",
    )
    parser.add_argument(
        "-q", "--query",
        default="",
        help="Initial query",
    )
    parser.add_argument(
        "-n", "--max-results",
        type=int,
        metavar="N",
        help="Show at most N matches (0 = unbounded)",
    )
    parser.add_argument(
        "--scorer",
        choices=sorted(SCORERS),
        help="Scoring algorithm",
    )
    parser.add_argument(
        "--empty-message",
        metavar="TEXT",
        help="Message shown when nothing matches",
    )
    parser.add_argument(
        "--filter",
        action="store_true",
        dest="filter_only",
        help="Print matches for --query and exit (no TUI)",
    )
    parser.add_argument(
        "--scores",
        action="store_true",
        help="With --filter, prefix each match with its score",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Let command-line flags win over the config file."""
    if args.max_results is not None:
        config.list.max_results = args.max_results
    if args.scorer:
        config.filter.scorer = args.scorer
    if args.empty_message is not None:
        config.list.empty_message = args.empty_message
    return config


def handle_filter(items: list[str], query: str, config: Config, show_scores: bool) -> int:
    """Print the filtered view. Returns 1 when nothing matched."""
    options = FilterOptions(
        max_results=config.list.result_cap,
        scorer=get_scorer(config.filter.scorer, config.filter.threshold),
    )

    if show_scores and query:
        ranked = cap(score_items(items, query, options), options.max_results)
        for scored in ranked:
            print(f"{scored.score:.2f}\t{scored.item}")
        return 0 if ranked else 1

    matches = filter_items(items, query, options)
    for item in matches:
        print(item)
    return 0 if matches else 1


def reattach_tty() -> bool:
    """Point stdin back at the terminal after items were piped in."""
    if sys.stdin.isatty():
        return True
    try:
        fd = os.open("/dev/tty", os.O_RDONLY)
    except OSError:
        return False
    os.dup2(fd, 0)
    os.close(fd)
    sys.stdin = open(0, closefd=False)
    return True


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(log_level="DEBUG" if args.verbose else "WARNING")

    try:
        if args.file:
            with open(args.file, encoding="utf-8") as f:
                items = read_items(f)
        else:
            items = read_items(sys.stdin)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    config = apply_overrides(load_config(Path.cwd()), args)
    logger.debug(f"Read {len(items)} items")

    try:
        get_scorer(config.filter.scorer)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    if args.filter_only:
        try:
            return handle_filter(items, args.query, config, args.scores)
        except FilterError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 2

    if not reattach_tty():
        print("Error: no terminal available for interactive mode", file=sys.stderr)
        return 2

    result = run_picker(items, config, args.query)

    if result is None:
        return 1
    print(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
