"""Runtime package: the interactive loop and session orchestration."""

from .app import SessionOptions, print_diff, run_pager
from .loop import LoopResult, run_view_loop, unstaged_hint

__all__ = [
    "LoopResult",
    "SessionOptions",
    "print_diff",
    "run_pager",
    "run_view_loop",
    "unstaged_hint",
]
