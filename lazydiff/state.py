"""View/scroll state and its transition function.

``ViewState`` is immutable; every command produces a new state through
``apply_command``. The scroll offset always satisfies
``0 <= scroll_offset <= max_scroll``; out-of-range requests are clamped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

LAYOUT_INLINE = "inline"
LAYOUT_SIDE_BY_SIDE = "side-by-side"
LAYOUTS = (LAYOUT_INLINE, LAYOUT_SIDE_BY_SIDE)

WHEEL_SCROLL_LINES = 3

CMD_LAYOUT = "layout"
CMD_SCROLL = "scroll"
CMD_PAGE = "page"
CMD_WHEEL = "wheel"
CMD_TOP = "top"
CMD_BOTTOM = "bottom"
CMD_TOGGLE_MOUSE = "toggle_mouse"
CMD_TOGGLE_TREE = "toggle_tree"
CMD_STAGE_ALL = "stage_all"
CMD_COMMIT = "commit"
CMD_QUIT = "quit"

# Commands the runtime loop acts on itself; they leave ViewState untouched.
EXTERNAL_COMMANDS = frozenset({CMD_STAGE_ALL, CMD_COMMIT, CMD_QUIT})


@dataclass(frozen=True)
class Command:
    """One UI command; ``amount`` is a signed count and ``value`` a layout name."""

    name: str
    amount: int = 0
    value: str = ""


@dataclass(frozen=True)
class ViewState:
    layout: str = LAYOUT_INLINE
    scroll_offset: int = 0
    max_scroll: int = 0
    visible_rows: int = 1
    mouse_enabled: bool = True
    tree_visible: bool = True
    notification: str | None = None

    @property
    def page_size(self) -> int:
        return max(1, self.visible_rows - 1)


def clamp_scroll(offset: int, max_scroll: int) -> int:
    """Clamp ``offset`` into ``[0, max_scroll]``; a negative bound counts as 0."""
    return max(0, min(offset, max(0, max_scroll)))


def normalize_layout(name: str | None) -> str:
    """Map user-facing layout names (``side``, ``sbs``, ...) onto layout constants."""
    candidate = (name or "").strip().lower()
    if candidate in {"side", "sbs", "split", LAYOUT_SIDE_BY_SIDE}:
        return LAYOUT_SIDE_BY_SIDE
    return LAYOUT_INLINE


def scroll_to(state: ViewState, offset: int) -> ViewState:
    return replace(state, scroll_offset=clamp_scroll(offset, state.max_scroll))


def with_viewport(state: ViewState, total_lines: int, visible_rows: int) -> ViewState:
    """Recompute ``max_scroll`` for the current output and window, then re-clamp."""
    rows = max(1, visible_rows)
    max_scroll = max(0, total_lines - rows)
    return replace(
        state,
        visible_rows=rows,
        max_scroll=max_scroll,
        scroll_offset=clamp_scroll(state.scroll_offset, max_scroll),
    )


def notify(state: ViewState, message: str | None) -> ViewState:
    return replace(state, notification=message or None)


def diff_changed(state: ViewState) -> ViewState:
    """Start from the top after the underlying diff text was replaced."""
    return replace(state, scroll_offset=0)


def apply_command(state: ViewState, command: Command) -> ViewState:
    """Return the state after ``command``; unknown and external commands are no-ops."""
    name = command.name
    if name == CMD_LAYOUT:
        return replace(state, layout=normalize_layout(command.value))
    if name == CMD_SCROLL:
        return scroll_to(state, state.scroll_offset + command.amount)
    if name == CMD_PAGE:
        return scroll_to(state, state.scroll_offset + command.amount * state.page_size)
    if name == CMD_WHEEL:
        if not state.mouse_enabled:
            return state
        return scroll_to(state, state.scroll_offset + command.amount * WHEEL_SCROLL_LINES)
    if name == CMD_TOP:
        return scroll_to(state, 0)
    if name == CMD_BOTTOM:
        return scroll_to(state, state.max_scroll)
    if name == CMD_TOGGLE_MOUSE:
        return replace(state, mouse_enabled=not state.mouse_enabled)
    if name == CMD_TOGGLE_TREE:
        return replace(state, tree_visible=not state.tree_visible, scroll_offset=0)
    return state
