"""Low-level stdin reads for the runtime loop."""

from __future__ import annotations

import os
import select

READ_CHUNK_BYTES = 4096


def read_input(fd: int, timeout_ms: int | None = None) -> bytes | None:
    """Return the next available chunk from ``fd``.

    Returns ``b""`` when nothing arrives within ``timeout_ms`` and ``None`` at
    EOF. A ``timeout_ms`` of ``None`` blocks until input is ready.
    """
    if timeout_ms is not None:
        ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return b""
    try:
        chunk = os.read(fd, READ_CHUNK_BYTES)
    except InterruptedError:
        return b""
    return chunk or None
