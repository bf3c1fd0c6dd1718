"""Heading rows shared by the inline and side-by-side formatters."""

from __future__ import annotations

from ..ansi import sanitize_terminal_text
from ..ui_theme import UITheme, styled
from .parser import FileSection, Hunk

DIVIDER_CHAR = "─"


def file_heading_lines(section: FileSection, width: int, theme: UITheme, first: bool) -> list[str]:
    """Return the blank/divider/name rows that introduce a file section."""
    if section.path is None:
        return []
    rows = [] if first else [""]
    rows.append(styled(DIVIDER_CHAR * max(1, width), theme.heading, theme))
    rows.append(styled(sanitize_terminal_text(section.path), theme.heading, theme))
    return rows


def hunk_heading_line(hunk: Hunk, theme: UITheme) -> str | None:
    """Return the hunk marker reduced to its trailing context text, or ``None`` if empty."""
    text = sanitize_terminal_text(hunk.header_text)
    if not text:
        return None
    return styled(text, theme.heading, theme)


def preamble_lines(section: FileSection) -> list[str]:
    """Return extended-header lines (mode changes, renames, binary notes) to show verbatim."""
    return [sanitize_terminal_text(line) for line in section.preamble if line]
