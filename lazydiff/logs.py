"""Logging setup.

The TUI owns the terminal, so log records only ever go to a file. Without
``--log-file`` or ``LAZYDIFF_DEBUG=1`` nothing is recorded.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
DEFAULT_LOG_PATH = Path(user_log_dir(APP_NAME, appauthor=False)) / f"{APP_NAME}.log"


def configure_logging(log_file: Path | None = None, environ: dict[str, str] | None = None) -> Path | None:
    """Attach a file handler to the package logger and return its path.

    Returns ``None`` when logging stays disabled.
    """
    env = os.environ if environ is None else environ
    debug = env.get("LAZYDIFF_DEBUG") == "1"
    package_logger = logging.getLogger("lazydiff")
    if log_file is None and not debug:
        package_logger.addHandler(logging.NullHandler())
        return None

    path = log_file or DEFAULT_LOG_PATH
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
    package_logger.propagate = False
    return path
