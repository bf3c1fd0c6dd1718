"""Parse unified ``git diff`` text into file sections, hunks, and typed lines.

Parsing never fails: anything that does not fit the unified-diff structure
is kept as verbatim text so the viewer can still show it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import re

LINE_CONTEXT = "context"
LINE_REMOVED = "removed"
LINE_ADDED = "added"

FILE_HEADER_PREFIX = "diff --git "
HUNK_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@ ?(.*)$")
_FILE_HEADER_RE = re.compile(r'^diff --git ("?)[^/\s"]/(.*?)\1 ("?)[^/\s"]/(.*)\3$')
_METADATA_PREFIXES = ("index ", "--- ", "+++ ")


@dataclass(frozen=True)
class DiffLine:
    """One body line of a hunk.

    ``verbatim`` lines are unrecognized input kept with their leading
    character; they are shown as-is and consume no line numbers.
    """

    kind: str
    text: str
    verbatim: bool = False


@dataclass
class Hunk:
    old_start: int
    old_count: int
    new_start: int
    new_count: int
    header_text: str = ""
    lines: list[DiffLine] = field(default_factory=list)

    @property
    def old_end(self) -> int:
        """Highest old line number reachable from this hunk header."""
        return self.old_start + self.old_count

    @property
    def new_end(self) -> int:
        """Highest new line number reachable from this hunk header."""
        return self.new_start + self.new_count


@dataclass
class FileSection:
    """One changed file; ``path`` is ``None`` for text before the first file header."""

    path: str | None
    preamble: list[str] = field(default_factory=list)
    hunks: list[Hunk] = field(default_factory=list)


def _unquote_path(path: str) -> str:
    if len(path) >= 2 and path.startswith('"') and path.endswith('"'):
        path = path[1:-1]
    return path


def extract_file_name(header_line: str) -> str:
    """Return the post-image (``b/``) path named by a ``diff --git`` header."""
    match = _FILE_HEADER_RE.match(header_line)
    if match:
        return match.group(4)
    remainder = header_line[len(FILE_HEADER_PREFIX):].strip()
    # --no-prefix output repeats the same path twice.
    half = len(remainder) // 2
    if len(remainder) % 2 == 1 and remainder[half] == " " and remainder[:half] == remainder[half + 1:]:
        remainder = remainder[:half]
    return _unquote_path(remainder) or header_line


def parse_hunk_header(line: str) -> Hunk | None:
    """Parse an ``@@ -a,b +c,d @@ text`` marker; counts default to 1 when omitted."""
    match = HUNK_RE.match(line)
    if match is None:
        return None
    return Hunk(
        old_start=int(match.group(1)),
        old_count=int(match.group(2) or "1"),
        new_start=int(match.group(3)),
        new_count=int(match.group(4) or "1"),
        header_text=match.group(5).strip(),
    )


def _classify_body_line(line: str) -> DiffLine:
    if not line:
        return DiffLine(LINE_CONTEXT, "")
    lead = line[0]
    if lead == " ":
        return DiffLine(LINE_CONTEXT, line[1:])
    if lead == "-":
        return DiffLine(LINE_REMOVED, line[1:])
    if lead == "+":
        return DiffLine(LINE_ADDED, line[1:])
    return DiffLine(LINE_CONTEXT, line, verbatim=True)


def split_diff_lines(raw: str) -> list[str]:
    """Split on ``\\n`` only; form feeds and Unicode line separators are line content.

    A trailing newline does not produce an extra empty line and a ``\\r``
    left over from CRLF output is removed.
    """
    if not raw:
        return []
    lines = raw.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def parse_diff(raw: str) -> list[FileSection]:
    """Split raw diff text into ordered file sections.

    Lines before any ``diff --git`` header land in a leading section whose
    ``path`` is ``None``. ``index``/``---``/``+++`` metadata is dropped unless
    the current hunk still expects body lines, in which case such lines are
    ordinary removals/additions.
    """
    sections: list[FileSection] = []
    section: FileSection | None = None
    hunk: Hunk | None = None
    old_left = 0
    new_left = 0

    for line in split_diff_lines(raw):
        if line.startswith(FILE_HEADER_PREFIX):
            section = FileSection(path=extract_file_name(line))
            sections.append(section)
            hunk = None
            continue

        if line.startswith("@@"):
            parsed = parse_hunk_header(line)
            if parsed is not None:
                if section is None:
                    section = FileSection(path=None)
                    sections.append(section)
                hunk = parsed
                section.hunks.append(hunk)
                old_left = hunk.old_count
                new_left = hunk.new_count
                continue

        in_body = hunk is not None and (old_left > 0 or new_left > 0)
        if not in_body and line.startswith(_METADATA_PREFIXES):
            continue

        if hunk is None:
            if section is None:
                section = FileSection(path=None)
                sections.append(section)
            section.preamble.append(line)
            continue

        diff_line = _classify_body_line(line)
        hunk.lines.append(diff_line)
        if diff_line.verbatim:
            continue
        if diff_line.kind != LINE_ADDED:
            old_left -= 1
        if diff_line.kind != LINE_REMOVED:
            new_left -= 1

    return sections


def changed_file_paths(raw: str) -> list[str]:
    """Return post-image paths of every file header, first-seen order, no duplicates."""
    seen: set[str] = set()
    paths: list[str] = []
    for line in split_diff_lines(raw):
        if not line.startswith(FILE_HEADER_PREFIX):
            continue
        path = extract_file_name(line)
        if path in seen:
            continue
        seen.add(path)
        paths.append(path)
    return paths
