"""Side-by-side diff layout with independent old/new line-number gutters.

Column widths are fixed for a whole render. Each row is
``<old no> <left> │ <new no> <right>`` and is exactly ``width`` cells wide
once the width leaves room for one content cell per side.

Removed/added runs are paired by position only: the n-th removed line of a
run sits next to the n-th added line of the run that follows it.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import fit_to_width, sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme, styled
from .headers import file_heading_lines, hunk_heading_line, preamble_lines
from .parser import LINE_ADDED, LINE_REMOVED, FileSection, Hunk

SEPARATOR = " │ "
GUTTER_SPACING = 2


@dataclass(frozen=True)
class ColumnLayout:
    old_digits: int
    new_digits: int
    left_width: int
    right_width: int

    @property
    def fixed_width(self) -> int:
        """Columns used by both gutters, their spacing, and the separator."""
        return self.old_digits + self.new_digits + GUTTER_SPACING + len(SEPARATOR)

    @property
    def total_width(self) -> int:
        return self.fixed_width + self.left_width + self.right_width

    @property
    def min_width(self) -> int:
        """Smallest terminal width for which rows fill the terminal exactly."""
        return self.fixed_width + 2


def compute_column_layout(sections: list[FileSection], width: int) -> ColumnLayout:
    """Derive gutter and content widths from the largest line numbers any hunk reaches."""
    max_old = 0
    max_new = 0
    for section in sections:
        for hunk in section.hunks:
            max_old = max(max_old, hunk.old_end)
            max_new = max(max_new, hunk.new_end)

    old_digits = len(str(max_old or 1))
    new_digits = len(str(max_new or 1))
    content = width - old_digits - new_digits - GUTTER_SPACING - len(SEPARATOR)
    left = max(1, content // 2)
    right = max(1, content - left)
    return ColumnLayout(old_digits, new_digits, left, right)


def _row(
    layout: ColumnLayout,
    theme: UITheme,
    old_no: int | None,
    left: str | None,
    new_no: int | None,
    right: str | None,
    left_style: str = "",
    right_style: str = "",
) -> str:
    old_gutter = str(old_no).rjust(layout.old_digits) if old_no is not None else " " * layout.old_digits
    new_gutter = str(new_no).rjust(layout.new_digits) if new_no is not None else " " * layout.new_digits
    left_cell = fit_to_width(sanitize_terminal_text(left or ""), layout.left_width)
    right_cell = fit_to_width(sanitize_terminal_text(right or ""), layout.right_width)
    if left is not None:
        left_cell = styled(left_cell, left_style, theme)
    if right is not None:
        right_cell = styled(right_cell, right_style, theme)
    return f"{old_gutter} {left_cell}{SEPARATOR}{new_gutter} {right_cell}"


def _hunk_rows(hunk: Hunk, layout: ColumnLayout, theme: UITheme) -> list[str]:
    rows: list[str] = []
    old_no = hunk.old_start
    new_no = hunk.new_start
    removed: list[str] = []
    added: list[str] = []

    def flush_block() -> None:
        nonlocal old_no, new_no
        for idx in range(max(len(removed), len(added))):
            left = removed[idx] if idx < len(removed) else None
            right = added[idx] if idx < len(added) else None
            left_no = None
            right_no = None
            if left is not None:
                left_no = old_no
                old_no += 1
            if right is not None:
                right_no = new_no
                new_no += 1
            rows.append(_row(layout, theme, left_no, left, right_no, right, theme.removed, theme.added))
        removed.clear()
        added.clear()

    for line in hunk.lines:
        if line.verbatim:
            flush_block()
            rows.append(_row(layout, theme, None, line.text, None, None, theme.hint))
        elif line.kind == LINE_REMOVED:
            if added:
                flush_block()
            removed.append(line.text)
        elif line.kind == LINE_ADDED:
            added.append(line.text)
        else:
            flush_block()
            rows.append(_row(layout, theme, old_no, line.text, new_no, line.text))
            old_no += 1
            new_no += 1
    flush_block()
    return rows


def format_side_by_side(sections: list[FileSection], width: int, theme: UITheme | None = None) -> list[str]:
    """Render parsed sections as aligned two-column display lines."""
    active_theme = theme or DEFAULT_THEME
    layout = compute_column_layout(sections, width)
    out: list[str] = []
    for section in sections:
        out.extend(file_heading_lines(section, width, active_theme, first=not out))
        out.extend(preamble_lines(section))
        for hunk in section.hunks:
            heading = hunk_heading_line(hunk, active_theme)
            if heading is not None:
                out.append(heading)
            out.extend(_hunk_rows(hunk, layout, active_theme))
    return out
