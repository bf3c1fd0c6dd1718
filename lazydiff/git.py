"""Thin wrappers around the git commands the viewer needs.

Read-only queries are tolerant and return empty/``None`` results on failure.
Commands whose result the user asked for (diff, stage, commit) raise
``GitCommandError`` instead.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import subprocess
import tempfile
import time

logger = logging.getLogger(__name__)

NO_CHANGES_TEXT = "no changes"
GIT_TIMEOUT_SECONDS = 30.0


class GitCommandError(RuntimeError):
    """Raised when a required git command cannot run or exits non-zero."""


def _run_git(
    args: list[str],
    cwd: Path | None = None,
    timeout_seconds: float = GIT_TIMEOUT_SECONDS,
) -> subprocess.CompletedProcess[str] | None:
    """Execute a git subcommand with timeout and tolerant failure handling."""
    try:
        return subprocess.run(
            ["git", *args],
            cwd=str(cwd) if cwd is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            timeout=timeout_seconds,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.warning("git %s failed to run: %s", " ".join(args), exc)
        return None


def _require(proc: subprocess.CompletedProcess[str] | None, args: list[str]) -> str:
    if proc is None:
        raise GitCommandError(f"could not run git {' '.join(args)}")
    if proc.returncode != 0:
        detail = proc.stderr.strip() or f"exit status {proc.returncode}"
        raise GitCommandError(f"git {' '.join(args)}: {detail}")
    return proc.stdout


def diff_command(extra_args: list[str], staged: bool = False) -> list[str]:
    args = ["diff", "--no-color"]
    if staged:
        args.append("--cached")
    return [*args, *extra_args]


def run_git_diff(extra_args: list[str], staged: bool = False, cwd: Path | None = None) -> str:
    """Return ``git diff`` output without trailing newlines, or ``NO_CHANGES_TEXT`` when blank.

    Only newlines are trimmed: a final ``" "`` row is a blank context line.
    """
    args = diff_command(extra_args, staged)
    text = _require(_run_git(args, cwd), args)
    if not text.strip():
        return NO_CHANGES_TEXT
    return text.rstrip("\n")


def resolve_git_paths(cwd: Path | None = None, timeout_seconds: float = 0.5) -> tuple[Path | None, Path | None]:
    """Resolve repository root and git-dir, or ``(None, None)`` outside a repo."""
    proc = _run_git(["rev-parse", "--show-toplevel", "--git-dir"], cwd, timeout_seconds)
    if proc is None or proc.returncode != 0:
        return None, None

    lines = [line.strip() for line in proc.stdout.splitlines() if line.strip()]
    if len(lines) < 2:
        return None, None

    repo_root = Path(lines[0]).resolve()
    git_dir_raw = Path(lines[1])
    if not git_dir_raw.is_absolute():
        git_dir_raw = (cwd or Path.cwd()) / git_dir_raw
    return repo_root, git_dir_raw.resolve()


def status_paths(repo_root: Path, timeout_seconds: float = 2.0) -> list[str]:
    """Return paths reported by ``git status --porcelain``, or ``[]`` on failure."""
    proc = _run_git(["status", "--porcelain=v1", "--untracked-files=normal"], repo_root, timeout_seconds)
    if proc is None or proc.returncode != 0:
        return []
    paths: list[str] = []
    for line in proc.stdout.splitlines():
        if len(line) < 4:
            continue
        entry = line[3:]
        if " -> " in entry:
            entry = entry.split(" -> ", 1)[1]
        paths.append(entry.strip('"'))
    return paths


def count_unstaged_files(cwd: Path | None = None) -> int:
    """Return how many tracked files have unstaged changes (0 on failure)."""
    proc = _run_git(["diff", "--name-only"], cwd)
    if proc is None or proc.returncode != 0:
        return 0
    return sum(1 for line in proc.stdout.splitlines() if line.strip())


def stage_all(cwd: Path | None = None) -> None:
    args = ["add", "-A"]
    _require(_run_git(args, cwd), args)


def commit_with_message(message: str, cwd: Path | None = None) -> None:
    """Commit with ``message`` via a temporary message file.

    git inherits the terminal so hooks and signing prompts stay interactive.
    The message file is removed on every exit path.
    """
    fd, raw_path = tempfile.mkstemp(prefix=f"msg-{int(time.time() * 1000)}-", suffix=".txt")
    path = Path(raw_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(message)
        try:
            proc = subprocess.run(
                ["git", "commit", "-F", str(path)],
                cwd=str(cwd) if cwd is not None else None,
                check=False,
            )
        except OSError as exc:
            raise GitCommandError(f"could not run git commit: {exc}") from exc
        if proc.returncode != 0:
            raise GitCommandError(f"git commit: exit status {proc.returncode}")
    finally:
        path.unlink(missing_ok=True)
