"""Command-line front door for lazydiff.

Parses CLI options, loads settings, and runs ``git diff``. Then either
prints the formatted diff or dispatches into the interactive viewer.
Options lazydiff does not know are passed through to ``git diff``.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import logging
from pathlib import Path
import sys

from .config import load_settings
from .git import NO_CHANGES_TEXT, GitCommandError, run_git_diff
from .logs import configure_logging
from .runtime import SessionOptions, print_diff, run_pager
from .state import LAYOUT_INLINE, LAYOUT_SIDE_BY_SIDE
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazydiff",
        description="View git diff output inline or side by side in the terminal.",
        epilog="Unrecognized options and arguments are passed to `git diff`.",
    )
    parser.add_argument("-w", "--watch", action="store_true", help="Rebuild the view when the diff changes.")
    parser.add_argument("--staged", action="store_true", help="Show staged changes (git diff --cached).")
    layout = parser.add_mutually_exclusive_group()
    layout.add_argument(
        "--side-by-side",
        dest="layout",
        action="store_const",
        const=LAYOUT_SIDE_BY_SIDE,
        help="Start in side-by-side layout.",
    )
    layout.add_argument(
        "--inline",
        dest="layout",
        action="store_const",
        const=LAYOUT_INLINE,
        help="Start in inline layout.",
    )
    parser.add_argument("--no-tree", action="store_true", help="Start with the file-tree panel hidden.")
    parser.add_argument("--no-mouse", action="store_true", help="Start with mouse reporting off.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--nopager", action="store_true", help="Print the formatted diff and exit.")
    parser.add_argument(
        "--width",
        type=_positive_int,
        default=None,
        help="Column width for --nopager output (default: terminal width).",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments, fetch the diff, and show it.

    Exits with the viewer's status; fatal start-up errors exit through
    ``SystemExit`` with a message.
    """
    parser = build_parser()
    args, diff_args = parser.parse_known_args(argv)
    configure_logging(args.log_file)

    settings = load_settings()
    overrides: dict[str, object] = {}
    if args.layout is not None:
        overrides["layout"] = args.layout
    if args.no_tree:
        overrides["tree_panel"] = False
    if args.no_mouse:
        overrides["mouse"] = False
    if overrides:
        settings = replace(settings, **overrides)
    theme = resolve_theme(args.theme or settings.theme, no_color=args.no_color)

    try:
        diff_text = run_git_diff(diff_args, staged=args.staged)
    except GitCommandError as exc:
        raise SystemExit(str(exc)) from exc

    interactive = sys.stdin.isatty() and sys.stdout.isatty()
    if args.nopager or not interactive:
        print_diff(diff_text, settings.layout, theme, args.width)
        return
    if diff_text == NO_CHANGES_TEXT and not args.watch:
        print(diff_text)
        return

    options = SessionOptions(diff_args=diff_args, staged=args.staged, watching=args.watch)
    logger.info("starting viewer (watch=%s, staged=%s, args=%s)", args.watch, args.staged, diff_args)
    try:
        status = run_pager(diff_text, options, settings, theme)
    except (KeyboardInterrupt, EOFError):
        status = 130
    raise SystemExit(status)


if __name__ == "__main__":
    main()
