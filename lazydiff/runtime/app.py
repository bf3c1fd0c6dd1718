"""Session orchestration: full-screen view, commit flow, and watch-mode resume."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import partial
import logging
from pathlib import Path
import shutil
import sys

from ..commit import CommitDraftError, run_commit_flow
from ..config import AppSettings
from ..diff import format_diff
from ..git import (
    GitCommandError,
    commit_with_message,
    count_unstaged_files,
    resolve_git_paths,
    run_git_diff,
    stage_all,
)
from ..state import CMD_QUIT, ViewState, diff_changed, notify
from ..terminal import TerminalController
from ..ui_theme import UITheme
from ..watch import DiffWatcher, build_worktree_signature
from .loop import run_view_loop

logger = logging.getLogger(__name__)


@dataclass
class SessionOptions:
    diff_args: list[str] = field(default_factory=list)
    staged: bool = False
    watching: bool = False
    cwd: Path | None = None


def print_diff(diff_text: str, layout: str, theme: UITheme, width: int | None = None) -> None:
    """Write the formatted diff to stdout without entering full-screen mode."""
    columns = width or shutil.get_terminal_size((130, 24)).columns
    for line in format_diff(diff_text, layout, columns, theme):
        sys.stdout.write(f"{line}\n")


def _build_watcher(options: SessionOptions, settings: AppSettings, diff_text: str) -> DiffWatcher | None:
    repo_root, git_dir = resolve_git_paths(options.cwd)
    if repo_root is None or git_dir is None:
        logger.warning("watch mode disabled: not inside a git repository")
        return None
    return DiffWatcher(
        signature=partial(build_worktree_signature, repo_root, git_dir),
        fetch_diff=partial(run_git_diff, options.diff_args, options.staged, options.cwd),
        current_diff=diff_text,
        poll_seconds=settings.poll_seconds,
        debounce_seconds=settings.debounce_seconds,
    )


def run_pager(
    diff_text: str,
    options: SessionOptions,
    settings: AppSettings,
    theme: UITheme,
) -> int:
    """Run the interactive viewer and the commit flow it may hand off to.

    Outside watch mode the program ends after a commit attempt. In watch mode
    the view resumes, showing the outcome as a notification. Returns the exit
    status.
    """
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    watcher = _build_watcher(options, settings, diff_text) if options.watching else None
    fetch_diff = partial(run_git_diff, options.diff_args, options.staged, options.cwd)
    state = ViewState(
        layout=settings.layout,
        mouse_enabled=settings.mouse,
        tree_visible=settings.tree_panel,
    )

    while True:
        result = run_view_loop(
            state=state,
            diff_text=diff_text,
            terminal=terminal,
            stdin_fd=stdin_fd,
            theme=theme,
            tree_max_rows=settings.tree_max_rows,
            staged=options.staged,
            watcher=watcher,
            fetch_diff=fetch_diff,
            stage_all=partial(stage_all, options.cwd),
            count_unstaged=partial(count_unstaged_files, options.cwd),
        )
        if result.command == CMD_QUIT:
            return 0

        exit_status = 0
        try:
            outcome = run_commit_flow(
                result.diff_text,
                settings,
                ask=input,
                say=print,
                commit=partial(commit_with_message, cwd=options.cwd),
            )
        except CommitDraftError as exc:
            logger.warning("commit draft failed: %s", exc)
            outcome = str(exc)
            exit_status = 1
            print(f"\n{outcome}", file=sys.stderr)
        else:
            print(outcome)

        if watcher is None:
            return exit_status

        state = notify(result.state, outcome)
        try:
            diff_text = fetch_diff()
        except GitCommandError as exc:
            state = notify(state, f"{outcome}; refresh failed: {exc}")
            diff_text = result.diff_text
        else:
            if diff_text != result.diff_text:
                state = diff_changed(state)
        watcher.diff_text = diff_text
