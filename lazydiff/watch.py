"""Poll-based change detection for watch mode.

A cheap signature over git metadata and the stat of every changed path is
sampled periodically; bursts of signature changes are debounced into one
refresh, and only a refresh that actually changes the diff text is reported.
"""

from __future__ import annotations

from collections.abc import Callable
import hashlib
import logging
from pathlib import Path

from .git import GitCommandError, status_paths

logger = logging.getLogger(__name__)

DEFAULT_POLL_SECONDS = 0.5
DEFAULT_DEBOUNCE_SECONDS = 0.15


def _update_digest(digest, token: str) -> None:
    """Append a token plus separator byte to a hash digest."""
    digest.update(token.encode("utf-8", errors="surrogateescape"))
    digest.update(b"\0")


def _path_stat_signature(path: Path) -> tuple[str, int, int, int]:
    """Return a stable stat tuple describing ``path`` existence and metadata."""
    try:
        st = path.stat()
    except FileNotFoundError:
        return ("missing", 0, 0, 0)
    except OSError:
        return ("error", 0, 0, 0)
    return ("ok", st.st_mtime_ns, st.st_size, st.st_mode)


def _head_ref_path(git_dir: Path) -> Path | None:
    try:
        head = (git_dir / "HEAD").read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        return None
    if not head.startswith("ref:"):
        return None
    return git_dir / head[4:].strip()


def build_worktree_signature(
    repo_root: Path,
    git_dir: Path,
    list_paths: Callable[[Path], list[str]] = status_paths,
) -> str:
    """Digest of index/HEAD state plus the stat of each path git reports as changed."""
    digest = hashlib.blake2b(digest_size=20)
    for name in ("index", "HEAD"):
        _update_digest(digest, f"{name}:{_path_stat_signature(git_dir / name)}")
    ref_path = _head_ref_path(git_dir)
    if ref_path is not None:
        _update_digest(digest, f"ref:{ref_path}:{_path_stat_signature(ref_path)}")

    for rel_path in sorted(list_paths(repo_root)):
        _update_digest(digest, f"path:{rel_path}:{_path_stat_signature(repo_root / rel_path)}")
    return digest.hexdigest()


class Debouncer:
    """Coalesce a burst of signature changes into one signal per quiet period."""

    def __init__(self, quiet_seconds: float = DEFAULT_DEBOUNCE_SECONDS) -> None:
        self.quiet_seconds = quiet_seconds
        self._last_signature: str | None = None
        self._changed_at: float | None = None

    def observe(self, signature: str, now: float) -> bool:
        """Record ``signature`` at time ``now``; True once the burst has settled."""
        if self._last_signature is None:
            self._last_signature = signature
            return False
        if signature != self._last_signature:
            self._last_signature = signature
            self._changed_at = now
            return False
        if self._changed_at is not None and now - self._changed_at >= self.quiet_seconds:
            self._changed_at = None
            return True
        return False

    @property
    def pending(self) -> bool:
        return self._changed_at is not None


class DiffWatcher:
    """Report when the diff text changed, sampling the worktree at most every ``poll_seconds``."""

    def __init__(
        self,
        signature: Callable[[], str],
        fetch_diff: Callable[[], str],
        current_diff: str,
        poll_seconds: float = DEFAULT_POLL_SECONDS,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._signature = signature
        self._fetch_diff = fetch_diff
        self.diff_text = current_diff
        self.poll_seconds = poll_seconds
        self._debouncer = Debouncer(debounce_seconds)
        self._next_poll = 0.0

    def next_timeout(self, now: float) -> float:
        """Seconds until the next sample is due (shorter while a burst is settling)."""
        if self._debouncer.pending:
            return max(0.0, min(self._debouncer.quiet_seconds, self._next_poll - now))
        return max(0.0, self._next_poll - now)

    def poll(self, now: float) -> bool:
        """Sample if due; return True when a settled change produced new diff text."""
        if now < self._next_poll and not self._debouncer.pending:
            return False
        interval = self._debouncer.quiet_seconds if self._debouncer.pending else self.poll_seconds
        self._next_poll = now + interval
        if not self._debouncer.observe(self._signature(), now):
            return False
        try:
            new_text = self._fetch_diff()
        except GitCommandError as exc:
            logger.warning("diff refresh failed: %s", exc)
            return False
        if new_text == self.diff_text:
            return False
        self.diff_text = new_text
        return True
