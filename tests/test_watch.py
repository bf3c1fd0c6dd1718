"""Tests for watch-mode change detection and debouncing."""

from __future__ import annotations

import tempfile
from pathlib import Path
import unittest

from lazydiff.git import GitCommandError
from lazydiff.watch import Debouncer, DiffWatcher, build_worktree_signature


class WorktreeSignatureTests(unittest.TestCase):
    def _repo(self, tmp: str) -> tuple[Path, Path]:
        root = Path(tmp)
        git_dir = root / ".git"
        (git_dir / "refs" / "heads").mkdir(parents=True)
        (git_dir / "HEAD").write_text("ref: refs/heads/main\n", encoding="utf-8")
        (git_dir / "refs" / "heads" / "main").write_text("0" * 40 + "\n", encoding="utf-8")
        (root / "a.txt").write_text("one\n", encoding="utf-8")
        return root, git_dir

    def test_signature_is_stable_without_changes(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root, git_dir = self._repo(tmp)
            first = build_worktree_signature(root, git_dir, list_paths=lambda _root: ["a.txt"])
            second = build_worktree_signature(root, git_dir, list_paths=lambda _root: ["a.txt"])

        self.assertEqual(first, second)

    def test_signature_tracks_changed_file_contents(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root, git_dir = self._repo(tmp)
            before = build_worktree_signature(root, git_dir, list_paths=lambda _root: ["a.txt"])
            (root / "a.txt").write_text("one\ntwo\n", encoding="utf-8")
            after = build_worktree_signature(root, git_dir, list_paths=lambda _root: ["a.txt"])

        self.assertNotEqual(before, after)

    def test_signature_tracks_changed_path_set_and_deletions(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root, git_dir = self._repo(tmp)
            none_listed = build_worktree_signature(root, git_dir, list_paths=lambda _root: [])
            listed = build_worktree_signature(root, git_dir, list_paths=lambda _root: ["a.txt"])
            (root / "a.txt").unlink()
            deleted = build_worktree_signature(root, git_dir, list_paths=lambda _root: ["a.txt"])

        self.assertEqual(len({none_listed, listed, deleted}), 3)

    def test_signature_tracks_index_updates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root, git_dir = self._repo(tmp)
            before = build_worktree_signature(root, git_dir, list_paths=lambda _root: [])
            (git_dir / "index").write_bytes(b"DIRC")
            after = build_worktree_signature(root, git_dir, list_paths=lambda _root: [])

        self.assertNotEqual(before, after)


class DebouncerTests(unittest.TestCase):
    def test_first_observation_only_records_baseline(self) -> None:
        debouncer = Debouncer(0.15)

        self.assertFalse(debouncer.observe("a", 0.0))
        self.assertFalse(debouncer.observe("a", 5.0))
        self.assertFalse(debouncer.pending)

    def test_burst_of_changes_signals_once_after_quiet_period(self) -> None:
        debouncer = Debouncer(0.15)
        debouncer.observe("a", 0.0)

        self.assertFalse(debouncer.observe("b", 1.0))
        self.assertTrue(debouncer.pending)
        self.assertFalse(debouncer.observe("c", 1.1))
        self.assertFalse(debouncer.observe("c", 1.2))
        self.assertTrue(debouncer.observe("c", 1.3))
        self.assertFalse(debouncer.pending)
        self.assertFalse(debouncer.observe("c", 2.0))


class DiffWatcherTests(unittest.TestCase):
    def setUp(self) -> None:
        self.signature = "s1"
        self.diff = "old"
        self.watcher = DiffWatcher(
            signature=lambda: self.signature,
            fetch_diff=lambda: self.diff,
            current_diff="old",
            poll_seconds=0.5,
            debounce_seconds=0.15,
        )
        self.assertFalse(self.watcher.poll(0.0))

    def test_samples_are_rate_limited(self) -> None:
        calls: list[int] = []
        self.watcher._signature = lambda: calls.append(1) or "s1"

        self.assertFalse(self.watcher.poll(0.2))
        self.assertEqual(calls, [])
        self.assertAlmostEqual(self.watcher.next_timeout(0.2), 0.3)

    def test_settled_change_with_new_text_is_reported(self) -> None:
        self.signature = "s2"
        self.diff = "new"

        self.assertFalse(self.watcher.poll(0.5))
        self.assertAlmostEqual(self.watcher.next_timeout(0.5), 0.15)
        self.assertFalse(self.watcher.poll(0.6))
        self.assertTrue(self.watcher.poll(0.8))
        self.assertEqual(self.watcher.diff_text, "new")

    def test_change_with_identical_text_is_not_reported(self) -> None:
        self.signature = "s2"

        self.watcher.poll(0.5)
        self.assertFalse(self.watcher.poll(0.8))
        self.assertEqual(self.watcher.diff_text, "old")

    def test_refresh_errors_are_ignored(self) -> None:
        def failing_fetch() -> str:
            raise GitCommandError("git diff: boom")

        self.watcher._fetch_diff = failing_fetch
        self.signature = "s2"

        self.watcher.poll(0.5)
        self.assertFalse(self.watcher.poll(0.8))
        self.assertEqual(self.watcher.diff_text, "old")


if __name__ == "__main__":
    unittest.main()
