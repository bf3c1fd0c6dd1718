"""Key token to command bindings for the diff view."""

from __future__ import annotations

from ..state import (
    CMD_BOTTOM,
    CMD_COMMIT,
    CMD_LAYOUT,
    CMD_PAGE,
    CMD_QUIT,
    CMD_SCROLL,
    CMD_STAGE_ALL,
    CMD_TOGGLE_MOUSE,
    CMD_TOGGLE_TREE,
    CMD_TOP,
    CMD_WHEEL,
    LAYOUT_INLINE,
    LAYOUT_SIDE_BY_SIDE,
    Command,
)

KEY_BINDINGS: dict[str, Command] = {
    "s": Command(CMD_LAYOUT, value=LAYOUT_SIDE_BY_SIDE),
    "i": Command(CMD_LAYOUT, value=LAYOUT_INLINE),
    "m": Command(CMD_TOGGLE_MOUSE),
    "t": Command(CMD_TOGGLE_TREE),
    "a": Command(CMD_STAGE_ALL),
    "c": Command(CMD_COMMIT),
    "q": Command(CMD_QUIT),
    "CTRL_C": Command(CMD_QUIT),
    "UP": Command(CMD_SCROLL, amount=-1),
    "k": Command(CMD_SCROLL, amount=-1),
    "DOWN": Command(CMD_SCROLL, amount=1),
    "j": Command(CMD_SCROLL, amount=1),
    "PAGE_UP": Command(CMD_PAGE, amount=-1),
    "b": Command(CMD_PAGE, amount=-1),
    "CTRL_B": Command(CMD_PAGE, amount=-1),
    "PAGE_DOWN": Command(CMD_PAGE, amount=1),
    "f": Command(CMD_PAGE, amount=1),
    "CTRL_F": Command(CMD_PAGE, amount=1),
    " ": Command(CMD_PAGE, amount=1),
    "g": Command(CMD_TOP),
    "HOME": Command(CMD_TOP),
    "G": Command(CMD_BOTTOM),
    "END": Command(CMD_BOTTOM),
    "WHEEL_UP": Command(CMD_WHEEL, amount=-1),
    "WHEEL_DOWN": Command(CMD_WHEEL, amount=1),
}


def command_for_token(token: str) -> Command | None:
    """Return the command bound to ``token``, or ``None`` for unbound keys (including ``ESC``)."""
    return KEY_BINDINGS.get(token)
