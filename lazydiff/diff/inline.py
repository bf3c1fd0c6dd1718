"""Inline (unified) diff layout: one display row per diff line, no line numbers."""

from __future__ import annotations

from ..ansi import sanitize_terminal_text
from ..ui_theme import DEFAULT_THEME, UITheme, styled
from .headers import file_heading_lines, hunk_heading_line, preamble_lines
from .parser import LINE_ADDED, LINE_REMOVED, DiffLine, FileSection


def _format_body_line(line: DiffLine, theme: UITheme) -> str:
    text = sanitize_terminal_text(line.text)
    if line.verbatim:
        return text
    if line.kind == LINE_REMOVED:
        return styled(f"-{text}", theme.removed, theme)
    if line.kind == LINE_ADDED:
        return styled(f"+{text}", theme.added, theme)
    return f" {text}"


def format_inline(sections: list[FileSection], width: int, theme: UITheme | None = None) -> list[str]:
    """Render parsed sections as styled inline display lines."""
    active_theme = theme or DEFAULT_THEME
    out: list[str] = []
    for section in sections:
        out.extend(file_heading_lines(section, width, active_theme, first=not out))
        out.extend(preamble_lines(section))
        for hunk in section.hunks:
            heading = hunk_heading_line(hunk, active_theme)
            if heading is not None:
                out.append(heading)
            for line in hunk.lines:
                rendered = _format_body_line(line, active_theme)
                if rendered:
                    out.append(rendered)
    return out
