"""Frame composition for the diff view.

Clips the visible window out of the formatted display lines, stacks the
file-tree panel, banners, and the status line, and returns the frame text
together with the post-render view state. Nothing here writes to the
terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..ansi import clip_ansi_line, display_width
from ..state import LAYOUT_SIDE_BY_SIDE, ViewState, with_viewport
from ..tree_model import TreeNode, render_file_tree
from ..ui_theme import DEFAULT_THEME, UITheme, styled

DEFAULT_TREE_MAX_ROWS = 12
TREE_PANEL_DIVIDER = "┄"


@dataclass(frozen=True)
class FrameContext:
    display_lines: list[str]
    width: int
    height: int
    tree: TreeNode | None = None
    tree_max_rows: int = DEFAULT_TREE_MAX_ROWS
    watching: bool = False
    staged: bool = False
    hint: str | None = None


@dataclass(frozen=True)
class Frame:
    text: str
    state: ViewState
    content_rows: int


def _on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"


def status_text(state: ViewState, watching: bool = False, staged: bool = False) -> str:
    """Return the fixed-format keybinding and toggle summary."""
    layout = "side" if state.layout == LAYOUT_SIDE_BY_SIDE else "inline"
    parts = [
        f"[s] side [i] inline ({layout})",
        f"[m] mouse: {_on_off(state.mouse_enabled)}",
        f"[t] tree: {_on_off(state.tree_visible)}",
    ]
    if watching:
        parts.append("[watching]")
    if staged:
        parts.append("[staged] [a] stage all")
    parts.append("[c] generate message [q] quit")
    return " ".join(parts)


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Lay out ``left_text`` and ``right_text`` on one row of ``width - 1`` cells."""
    usable = max(1, width - 1)
    if not right_text:
        return clip_ansi_line(left_text, usable)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = clip_ansi_line(left_text, left_limit)
    gap = " " * (usable - display_width(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def _position_text(state: ViewState, total_lines: int) -> str:
    if total_lines <= 0:
        return "0/0"
    first = state.scroll_offset + 1
    last = min(total_lines, state.scroll_offset + state.visible_rows)
    return f"{first}-{last}/{total_lines}"


def tree_panel_rows(height: int, tree_max_rows: int) -> int:
    """Cap the tree panel to a third of the screen so the diff keeps most rows."""
    return max(0, min(tree_max_rows, (height - 2) // 3))


def render_frame(state: ViewState, context: FrameContext, theme: UITheme | None = None) -> Frame:
    """Compose one full-screen frame.

    The returned state has ``max_scroll`` recomputed for this window, the
    offset re-clamped, and any pending notification consumed.
    """
    active_theme = theme or DEFAULT_THEME
    width = max(1, context.width)
    height = max(2, context.height)

    panel: list[str] = []
    if state.tree_visible and context.tree is not None:
        panel = render_file_tree(context.tree, tree_panel_rows(height, context.tree_max_rows), active_theme)
        if panel:
            panel.append(styled(TREE_PANEL_DIVIDER * width, active_theme.tree_guide, active_theme))

    banners: list[str] = []
    if context.hint:
        banners.append(styled(context.hint, active_theme.hint, active_theme))
    if state.notification:
        banners.append(styled(state.notification, active_theme.notification, active_theme))
    # At least one diff row survives; the hint is dropped before the notification.
    room = max(0, height - 2 - len(panel))
    if len(banners) > room:
        banners = banners[len(banners) - room:]

    content_rows = max(1, height - 1 - len(panel) - len(banners))
    state = with_viewport(state, len(context.display_lines), content_rows)

    out: list[str] = ["\033[H\033[J"]

    def emit(line: str) -> None:
        clipped = clip_ansi_line(line, width)
        out.append(clipped)
        if "\033" in clipped:
            out.append("\033[0m")
        out.append("\r\n")

    for line in panel:
        emit(line)
    visible = context.display_lines[state.scroll_offset:state.scroll_offset + content_rows]
    for line in visible:
        emit(line)
    for _ in range(content_rows - len(visible)):
        out.append("\r\n")
    for line in banners:
        emit(line)

    status = build_status_line(
        status_text(state, watching=context.watching, staged=context.staged),
        width,
        _position_text(state, len(context.display_lines)),
    )
    out.append(f"\r{styled(status, active_theme.status, active_theme)}")
    return Frame(text="".join(out), state=replace(state, notification=None), content_rows=content_rows)


__all__ = [
    "DEFAULT_TREE_MAX_ROWS",
    "Frame",
    "FrameContext",
    "build_status_line",
    "render_frame",
    "status_text",
    "tree_panel_rows",
]
