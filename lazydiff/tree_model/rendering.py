"""Connector-glyph rendering for the changed-file tree panel."""

from __future__ import annotations

from ..ansi import sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme, styled
from .types import TreeNode

BRANCH = "├── "
LAST_BRANCH = "└── "
GUIDE = "│   "
BLANK = "    "


def render_file_tree(root: TreeNode, max_rows: int, theme: UITheme | None = None) -> list[str]:
    """Render ``root``'s descendants depth-first, at most ``max_rows`` rows.

    Rows past the cap are dropped without a marker.
    """
    active_theme = theme or DEFAULT_THEME
    rows: list[str] = []
    if max_rows <= 0:
        return rows

    # Each entry carries the last-sibling flags of all ancestors.
    stack: list[tuple[TreeNode, tuple[bool, ...]]] = []
    top_level = root.sorted_children()
    for idx in range(len(top_level) - 1, -1, -1):
        stack.append((top_level[idx], (idx == len(top_level) - 1,)))

    while stack and len(rows) < max_rows:
        node, chain = stack.pop()
        indent = "".join(BLANK if is_last else GUIDE for is_last in chain[:-1])
        connector = LAST_BRANCH if chain[-1] else BRANCH
        name = sanitize_terminal_text(node.name)
        if node.is_file:
            label = styled(name, active_theme.tree_file, active_theme)
        else:
            label = styled(f"{name}/", active_theme.tree_dir, active_theme)
        rows.append(f"{styled(indent + connector, active_theme.tree_guide, active_theme)}{label}")

        children = node.sorted_children()
        for idx in range(len(children) - 1, -1, -1):
            stack.append((children[idx], chain + (idx == len(children) - 1,)))
    return rows
