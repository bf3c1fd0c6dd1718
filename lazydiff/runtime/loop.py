"""Interactive render/input loop for one full-screen session.

Each iteration re-reads the terminal size, applies watch refreshes, redraws
when something changed, then waits for input. Commands the view cannot
handle itself (quit, commit) end the session and are returned to the caller.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import logging
import os
import shutil
import time

from ..diff import changed_file_paths, format_diff
from ..git import GitCommandError
from ..input import ESC_SEQUENCE_TIMEOUT_MS, InputDecoder, command_for_token, read_input
from ..render import FrameContext, render_frame
from ..state import (
    CMD_COMMIT,
    CMD_QUIT,
    CMD_STAGE_ALL,
    ViewState,
    apply_command,
    diff_changed,
    notify,
)
from ..terminal import TerminalController
from ..tree_model import build_file_tree
from ..ui_theme import UITheme
from ..watch import DiffWatcher

logger = logging.getLogger(__name__)

IDLE_TIMEOUT_MS = 250


@dataclass(frozen=True)
class LoopResult:
    command: str
    state: ViewState
    diff_text: str


def unstaged_hint(count: int) -> str | None:
    """Banner shown in staged mode while other files still have unstaged changes."""
    if count <= 0:
        return None
    noun = "file" if count == 1 else "files"
    return f"{count} unstaged {noun}: press [a] to stage all"


def run_view_loop(
    *,
    state: ViewState,
    diff_text: str,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    tree_max_rows: int,
    staged: bool = False,
    watcher: DiffWatcher | None = None,
    fetch_diff: Callable[[], str] | None = None,
    stage_all: Callable[[], None] | None = None,
    count_unstaged: Callable[[], int] | None = None,
    terminal_size: Callable[[], os.terminal_size] = lambda: shutil.get_terminal_size((130, 24)),
    clock: Callable[[], float] = time.monotonic,
) -> LoopResult:
    """Run until quit or commit is requested and return that command with the final state."""
    decoder = InputDecoder()
    hint = unstaged_hint(count_unstaged()) if staged and count_unstaged is not None else None
    last_size: tuple[int, int] | None = None
    dirty = True

    with terminal.raw_mode(mouse=state.mouse_enabled):
        while True:
            size = terminal_size()
            if (size.columns, size.lines) != last_size:
                last_size = (size.columns, size.lines)
                dirty = True

            if watcher is not None and watcher.poll(clock()):
                logger.info("diff changed on disk; rebuilding view")
                diff_text = watcher.diff_text
                state = diff_changed(state)
                if staged and count_unstaged is not None:
                    hint = unstaged_hint(count_unstaged())
                dirty = True

            if dirty:
                width, height = last_size
                context = FrameContext(
                    display_lines=format_diff(diff_text, state.layout, width, theme),
                    width=width,
                    height=height,
                    tree=build_file_tree(changed_file_paths(diff_text)),
                    tree_max_rows=tree_max_rows,
                    watching=watcher is not None,
                    staged=staged,
                    hint=hint,
                )
                frame = render_frame(state, context, theme)
                terminal.write(frame.text)
                state = frame.state
                dirty = False

            if decoder.awaiting_escape_timeout:
                timeout_ms = ESC_SEQUENCE_TIMEOUT_MS
            elif watcher is not None:
                timeout_ms = min(IDLE_TIMEOUT_MS, int(watcher.next_timeout(clock()) * 1000))
            else:
                timeout_ms = IDLE_TIMEOUT_MS

            data = read_input(stdin_fd, timeout_ms)
            if data is None:
                return LoopResult(CMD_QUIT, state, diff_text)
            tokens = decoder.feed(data) if data else decoder.flush()

            for token in tokens:
                command = command_for_token(token)
                if command is None:
                    continue
                if command.name in (CMD_QUIT, CMD_COMMIT):
                    return LoopResult(command.name, state, diff_text)
                if command.name == CMD_STAGE_ALL:
                    if not staged or stage_all is None or fetch_diff is None:
                        state = notify(state, "stage all is only available with --staged")
                    else:
                        try:
                            stage_all()
                            diff_text = fetch_diff()
                        except GitCommandError as exc:
                            state = notify(state, f"stage all failed: {exc}")
                        else:
                            state = notify(diff_changed(state), "staged all changes")
                            if watcher is not None:
                                watcher.diff_text = diff_text
                            if count_unstaged is not None:
                                hint = unstaged_hint(count_unstaged())
                    dirty = True
                    continue

                new_state = apply_command(state, command)
                if new_state.mouse_enabled != state.mouse_enabled:
                    terminal.set_mouse_reporting(new_state.mouse_enabled)
                if new_state != state:
                    dirty = True
                state = new_state
