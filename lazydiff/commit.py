"""Draft a Conventional Commits message for the current diff and commit it.

The draft comes from an OpenAI-compatible chat-completions endpoint. Every
failure is reported as ``CommitDraftError`` carrying the text to show the
user; none of them touch the view state.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
from urllib.parse import urlparse

import requests

from .config import AppSettings, read_api_key
from .git import GitCommandError

logger = logging.getLogger(__name__)

MAX_DIFF_CHARS = 15000
SYSTEM_PROMPT = (
    "You are a helpful assistant that generates git commit messages in the Conventional Commits "
    "format (type(scope): description). Use feat, fix, docs, style, refactor, test, or chore. "
    "Keep it concise."
)


class CommitDraftError(RuntimeError):
    """A commit message could not be drafted; ``str(exc)`` is user-facing."""


def build_payload(diff_text: str, model: str) -> dict[str, object]:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": f"Generate a conventional commit for this diff:\n{diff_text[:MAX_DIFF_CHARS]}",
            },
        ],
    }


def _extract_message(data: object) -> str:
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return ""
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content.strip() if isinstance(content, str) else ""


def draft_commit_message(
    diff_text: str,
    settings: AppSettings,
    api_key: str | None = None,
    session: requests.Session | None = None,
) -> str:
    """Return a drafted commit message or raise ``CommitDraftError``."""
    key = api_key if api_key is not None else read_api_key(settings)
    if not key:
        raise CommitDraftError(f"Error: {settings.api_key_env} is not set.")

    host = urlparse(settings.commit_endpoint).netloc or settings.commit_endpoint
    http = session or requests
    try:
        response = http.post(
            settings.commit_endpoint,
            headers={"Authorization": f"Bearer {key}", "Content-Type": "application/json"},
            json=build_payload(diff_text, settings.commit_model),
            timeout=settings.commit_timeout_seconds,
        )
        data = response.json()
    except requests.RequestException as exc:
        logger.warning("commit draft request failed: %s", exc)
        raise CommitDraftError(f"Failed to reach {host}: {exc}") from exc
    except ValueError as exc:
        raise CommitDraftError(f"Unreadable response from {host} (HTTP {response.status_code}).") from exc

    if isinstance(data, dict) and data.get("error"):
        error = data["error"]
        detail = error.get("message") if isinstance(error, dict) else None
        raise CommitDraftError(f"API Error: {detail or error}")

    message = _extract_message(data)
    if not message:
        raise CommitDraftError("Could not generate a message. Check your API usage/quota.")
    return message


def run_commit_flow(
    diff_text: str,
    settings: AppSettings,
    ask: Callable[[str], str],
    say: Callable[[str], None],
    commit: Callable[[str], None],
    draft: Callable[[str, AppSettings], str] = draft_commit_message,
) -> str:
    """Draft, confirm, optionally edit, and commit. Returns the outcome message.

    Raises ``CommitDraftError`` when no draft could be produced.
    """
    say("\nGenerating conventional commit message...")
    message = draft(diff_text, settings)
    say(f"\nSuggested message:\n{message}")

    action = ask("\ncommit? (y/n/edit): ").strip().lower()
    if action == "edit":
        message = ask("New message: ").strip()
    elif action not in {"y", "yes"}:
        return "commit cancelled"
    if not message:
        return "commit cancelled: empty message"

    try:
        commit(message)
    except GitCommandError as exc:
        return f"commit failed: {exc}"
    return f"committed: {message.splitlines()[0]}"
