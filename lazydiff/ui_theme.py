"""UI theme definitions and selection helpers.

Themes are ANSI palettes for diff headings, deletions/insertions, the file
tree panel, and the status chrome. There is no per-language highlighting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by formatters and the frame renderer."""

    name: str
    reset: str
    heading: str
    removed: str
    added: str
    status: str
    notification: str
    hint: str
    tree_dir: str
    tree_file: str
    tree_guide: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    heading="\033[36m",
    removed="\033[31m",
    added="\033[32m",
    status="\033[7m",
    notification="\033[1;38;5;229m",
    hint="\033[2;38;5;250m",
    tree_dir="\033[1;34m",
    tree_file="\033[38;5;252m",
    tree_guide="\033[2m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    heading="\033[1;38;5;45m",
    removed="\033[38;5;210m",
    added="\033[38;5;84m",
    status="\033[7;38;5;39m",
    notification="\033[1;38;5;153m",
    hint="\033[2;38;5;110m",
    tree_dir="\033[1;38;5;45m",
    tree_file="\033[38;5;252m",
    tree_guide="\033[2;38;5;31m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    heading="",
    removed="",
    added="",
    status="",
    notification="",
    hint="",
    tree_dir="",
    tree_file="",
    tree_guide="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


def styled(text: str, style: str, theme: UITheme) -> str:
    """Wrap ``text`` in ``style`` and the theme reset, or return it bare when unstyled."""
    if not style or not text:
        return text
    return f"{style}{text}{theme.reset}"


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
    "styled",
]
