"""Diff parsing and the two display layouts built on it."""

from __future__ import annotations

from ..state import LAYOUT_SIDE_BY_SIDE
from ..ui_theme import UITheme
from .inline import format_inline
from .parser import (
    LINE_ADDED,
    LINE_CONTEXT,
    LINE_REMOVED,
    DiffLine,
    FileSection,
    Hunk,
    changed_file_paths,
    parse_diff,
)
from .side_by_side import ColumnLayout, compute_column_layout, format_side_by_side


def format_diff(raw: str, layout: str, width: int, theme: UITheme | None = None) -> list[str]:
    """Parse ``raw`` and format it with the formatter selected by ``layout``."""
    sections = parse_diff(raw)
    if layout == LAYOUT_SIDE_BY_SIDE:
        return format_side_by_side(sections, width, theme)
    return format_inline(sections, width, theme)


__all__ = [
    "LINE_ADDED",
    "LINE_CONTEXT",
    "LINE_REMOVED",
    "ColumnLayout",
    "DiffLine",
    "FileSection",
    "Hunk",
    "changed_file_paths",
    "compute_column_layout",
    "format_diff",
    "format_inline",
    "format_side_by_side",
    "parse_diff",
]
