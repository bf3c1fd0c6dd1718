"""Tests for the inline and side-by-side diff layouts.

Covers heading rows, hunk-marker stripping, styling, positional pairing,
gutter numbering, and exact column arithmetic.
"""

from __future__ import annotations

import unittest

from lazydiff.ansi import display_width
from lazydiff.diff import compute_column_layout, format_diff, format_inline, format_side_by_side, parse_diff
from lazydiff.diff.side_by_side import SEPARATOR
from lazydiff.state import LAYOUT_INLINE, LAYOUT_SIDE_BY_SIDE
from lazydiff.ui_theme import DEFAULT_THEME, PLAIN_THEME

CANONICAL_DIFF = "diff --git a/f.txt b/f.txt\nindex 1..2 100644\n--- a/f.txt\n+++ b/f.txt\n@@ -1,2 +1,2 @@\n ctx\n-old\n+new\n"

MULTI_HUNK_DIFF = """diff --git a/lib/core.py b/lib/core.py
--- a/lib/core.py
+++ b/lib/core.py
@@ -8,6 +8,7 @@ class Core:
 a
-b
-c
-d
+B
 e
+f
+g
 h
@@ -98,4 +99,3 @@ def tail():
 x
-y
-z
+Z
 w
diff --git a/README b/README
@@ -1 +1,2 @@
 title
+subtitle
"""


def _gutters(rows: list[str], old_digits: int, new_digits: int) -> list[tuple[str, str]]:
    out: list[tuple[str, str]] = []
    for row in rows:
        if SEPARATOR not in row:
            continue
        right = row.split(SEPARATOR, 1)[1]
        out.append((row[:old_digits].strip(), right[:new_digits].strip()))
    return out


class InlineFormatterTests(unittest.TestCase):
    def test_canonical_fixture_yields_context_removed_added_in_order(self) -> None:
        lines = format_inline(parse_diff(CANONICAL_DIFF), 20, PLAIN_THEME)

        self.assertEqual(lines, ["─" * 20, "f.txt", " ctx", "-old", "+new"])

    def test_removed_and_added_lines_are_styled(self) -> None:
        lines = format_inline(parse_diff(CANONICAL_DIFF), 20, DEFAULT_THEME)

        self.assertEqual(lines[2], " ctx")
        self.assertEqual(lines[3], f"{DEFAULT_THEME.removed}-old{DEFAULT_THEME.reset}")
        self.assertEqual(lines[4], f"{DEFAULT_THEME.added}+new{DEFAULT_THEME.reset}")
        self.assertEqual(lines[1], f"{DEFAULT_THEME.heading}f.txt{DEFAULT_THEME.reset}")

    def test_hunk_marker_keeps_only_trailing_context_text(self) -> None:
        lines = format_inline(parse_diff(MULTI_HUNK_DIFF), 10, PLAIN_THEME)

        self.assertIn("class Core:", lines)
        self.assertIn("def tail():", lines)
        self.assertFalse(any(line.startswith("@@") for line in lines))

    def test_later_files_get_blank_divider_and_name(self) -> None:
        lines = format_inline(parse_diff(MULTI_HUNK_DIFF), 10, PLAIN_THEME)

        idx = lines.index("README")
        self.assertEqual(lines[idx - 2:idx], ["", "─" * 10])
        self.assertNotEqual(lines[0], "")

    def test_plain_text_is_shown_verbatim(self) -> None:
        self.assertEqual(format_inline(parse_diff("no changes"), 30, PLAIN_THEME), ["no changes"])

    def test_control_characters_are_escaped(self) -> None:
        raw = "diff --git a/f b/f\n@@ -1 +1 @@\n-a\x07\n+b\n"

        self.assertIn("-a\\x07", format_inline(parse_diff(raw), 10, PLAIN_THEME))


class SideBySideFormatterTests(unittest.TestCase):
    def test_canonical_fixture_pairs_removed_and_added_on_one_row(self) -> None:
        rows = format_side_by_side(parse_diff(CANONICAL_DIFF), 40, PLAIN_THEME)
        body = rows[2:]

        self.assertEqual(len(body), 2)
        self.assertEqual(body[0], "1 " + "ctx".ljust(16) + SEPARATOR + "1 " + "ctx".ljust(17))
        self.assertEqual(body[1], "2 " + "old".ljust(16) + SEPARATOR + "2 " + "new".ljust(17))

    def test_unmatched_runs_leave_blank_content_and_gutter(self) -> None:
        sections = parse_diff(MULTI_HUNK_DIFF)
        layout = compute_column_layout(sections, 60)
        rows = format_side_by_side(sections, 60, PLAIN_THEME)
        pairs = _gutters(rows, layout.old_digits, layout.new_digits)

        # -b -c -d / +B : one paired row then two removed-only rows.
        self.assertEqual(pairs[1:4], [("9", "9"), ("10", ""), ("11", "")])
        # +f +g after context: added-only rows.
        self.assertEqual(pairs[5:7], [("", "11"), ("", "12")])

    def test_line_numbers_start_at_header_and_strictly_increase(self) -> None:
        sections = parse_diff(MULTI_HUNK_DIFF)
        layout = compute_column_layout(sections, 80)
        rows = format_side_by_side(sections, 80, PLAIN_THEME)
        hunk_rows = {
            "class Core:": [],
            "def tail():": [],
        }
        current = None
        for row in rows:
            if row in hunk_rows:
                current = row
                continue
            if row == "README":
                current = None
            if current is not None and SEPARATOR in row:
                hunk_rows[current].append(row)

        starts = {"class Core:": (8, 8), "def tail():": (98, 99)}
        for marker, hunk in hunk_rows.items():
            with self.subTest(hunk=marker):
                pairs = _gutters(hunk, layout.old_digits, layout.new_digits)
                old_numbers = [int(old) for old, _ in pairs if old]
                new_numbers = [int(new) for _, new in pairs if new]
                self.assertEqual((old_numbers[0], new_numbers[0]), starts[marker])
                self.assertEqual(old_numbers, sorted(set(old_numbers)))
                self.assertEqual(new_numbers, sorted(set(new_numbers)))

    def test_gutter_widths_follow_largest_reachable_line_numbers(self) -> None:
        layout = compute_column_layout(parse_diff(MULTI_HUNK_DIFF), 80)

        self.assertEqual((layout.old_digits, layout.new_digits), (3, 3))

    def test_columns_fill_width_exactly_for_every_usable_width(self) -> None:
        sections = parse_diff(MULTI_HUNK_DIFF)
        minimum = compute_column_layout(sections, 1).min_width
        for width in range(minimum, 200):
            with self.subTest(width=width):
                layout = compute_column_layout(sections, width)
                self.assertEqual(layout.left_width + layout.right_width + layout.fixed_width, width)
                self.assertGreaterEqual(layout.right_width, layout.left_width)
                for row in format_side_by_side(sections, width, DEFAULT_THEME):
                    if SEPARATOR in row:
                        self.assertEqual(display_width(row), width)

    def test_long_content_is_truncated_and_wide_characters_keep_alignment(self) -> None:
        raw = "diff --git a/f b/f\n@@ -1 +1 @@\n-" + "x" * 100 + "\n+漢字漢字漢字漢字漢字漢字\n"
        rows = format_side_by_side(parse_diff(raw), 30, PLAIN_THEME)

        self.assertEqual(display_width(rows[-1]), 30)
        self.assertEqual(rows[-1].index(SEPARATOR), 2 + compute_column_layout(parse_diff(raw), 30).left_width)

    def test_no_content_line_is_dropped(self) -> None:
        sections = parse_diff(MULTI_HUNK_DIFF)
        inline_body = [
            line[1:]
            for line in format_inline(sections, 80, PLAIN_THEME)
            if line[:1] in {" ", "-", "+"}
        ]
        side_text = "\n".join(format_side_by_side(sections, 120, PLAIN_THEME))

        for text in inline_body:
            self.assertIn(text, side_text)
        side_rows = [row for row in format_side_by_side(sections, 120, PLAIN_THEME) if SEPARATOR in row]
        self.assertLessEqual(len(side_rows), len(inline_body))

    def test_verbatim_lines_do_not_consume_line_numbers(self) -> None:
        raw = "diff --git a/f b/f\n@@ -1,2 +1,2 @@\n-a\n\\ No newline at end of file\n+b\n ctx\n"
        rows = format_side_by_side(parse_diff(raw), 50, PLAIN_THEME)
        pairs = _gutters(rows, 1, 1)

        self.assertEqual(pairs, [("1", ""), ("", ""), ("", "1"), ("2", "2")])


class FormatDiffTests(unittest.TestCase):
    def test_layout_selects_formatter(self) -> None:
        inline = format_diff(CANONICAL_DIFF, LAYOUT_INLINE, 40, PLAIN_THEME)
        side = format_diff(CANONICAL_DIFF, LAYOUT_SIDE_BY_SIDE, 40, PLAIN_THEME)

        self.assertEqual(len(inline), 5)
        self.assertEqual(len(side), 4)


if __name__ == "__main__":
    unittest.main()
