"""User settings from a JSON config file and environment overrides.

Settings are read-only at runtime; view state is never written back. All
access is defensive: a missing or malformed file, or a wrongly-typed value,
falls back to the default for that key.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
import json
import logging
import os
from pathlib import Path

from platformdirs import user_config_dir

from .state import normalize_layout

logger = logging.getLogger(__name__)

APP_NAME = "lazydiff"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_COMMIT_ENDPOINT = "https://api.x.ai/v1/chat/completions"
DEFAULT_COMMIT_MODEL = "grok-4-1-fast-reasoning"
DEFAULT_API_KEY_ENV = "XAI_API_KEY"


@dataclass(frozen=True)
class AppSettings:
    theme: str = "default"
    layout: str = "inline"
    mouse: bool = True
    tree_panel: bool = True
    tree_max_rows: int = 12
    poll_seconds: float = 0.5
    debounce_seconds: float = 0.15
    commit_endpoint: str = DEFAULT_COMMIT_ENDPOINT
    commit_model: str = DEFAULT_COMMIT_MODEL
    commit_timeout_seconds: float = 60.0
    api_key_env: str = DEFAULT_API_KEY_ENV


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = path or CONFIG_PATH
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except Exception:
        logger.warning("ignoring unreadable config file %s", config_path, exc_info=True)
        return {}
    return data if isinstance(data, dict) else {}


def _string(value: object, default: str) -> str:
    if not isinstance(value, str):
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _boolean(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _positive_int(value: object, default: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return default
    return value


def _positive_float(value: object, default: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        return default
    return float(value)


def settings_from_mapping(data: dict[str, object], base: AppSettings | None = None) -> AppSettings:
    """Overlay recognized keys from ``data`` onto ``base`` (defaults when omitted)."""
    settings = base or AppSettings()
    return replace(
        settings,
        theme=_string(data.get("theme"), settings.theme),
        layout=normalize_layout(_string(data.get("layout"), settings.layout)),
        mouse=_boolean(data.get("mouse"), settings.mouse),
        tree_panel=_boolean(data.get("tree_panel"), settings.tree_panel),
        tree_max_rows=_positive_int(data.get("tree_max_rows"), settings.tree_max_rows),
        poll_seconds=_positive_float(data.get("poll_seconds"), settings.poll_seconds),
        debounce_seconds=_positive_float(data.get("debounce_seconds"), settings.debounce_seconds),
        commit_endpoint=_string(data.get("commit_endpoint"), settings.commit_endpoint),
        commit_model=_string(data.get("commit_model"), settings.commit_model),
        commit_timeout_seconds=_positive_float(
            data.get("commit_timeout_seconds"),
            settings.commit_timeout_seconds,
        ),
        api_key_env=_string(data.get("api_key_env"), settings.api_key_env),
    )


def _env_overrides(environ: dict[str, str]) -> dict[str, object]:
    overrides: dict[str, object] = {}
    for key, env_name in (
        ("theme", "LAZYDIFF_THEME"),
        ("layout", "LAZYDIFF_LAYOUT"),
        ("commit_endpoint", "LAZYDIFF_COMMIT_ENDPOINT"),
        ("commit_model", "LAZYDIFF_COMMIT_MODEL"),
    ):
        value = environ.get(env_name)
        if value:
            overrides[key] = value
    return overrides


def load_settings(path: Path | None = None, environ: dict[str, str] | None = None) -> AppSettings:
    """Return defaults overlaid with the config file, then environment overrides."""
    env = dict(os.environ) if environ is None else environ
    settings = settings_from_mapping(load_config(path))
    return settings_from_mapping(_env_overrides(env), settings)


def read_api_key(settings: AppSettings, environ: dict[str, str] | None = None) -> str | None:
    """Return the commit-draft API key from the configured environment variable."""
    env = os.environ if environ is None else environ
    value = env.get(settings.api_key_env, "").strip()
    return value or None
