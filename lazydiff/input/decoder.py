"""Incremental terminal input decoding.

Turns raw stdin chunks into normalized key tokens. Escape sequences may be
split across reads: any strict prefix of a sequence is carried over as the
pending buffer and re-matched once the next chunk arrives, so a sequence
split at any byte decodes exactly like one received whole.

Tokens are single printable characters or names: ``UP``, ``DOWN``,
``PAGE_UP``, ``PAGE_DOWN``, ``HOME``, ``END``, ``CTRL_B``, ``CTRL_F``,
``CTRL_C``, ``WHEEL_UP``, ``WHEEL_DOWN`` and ``ESC``.
"""

from __future__ import annotations

ESC = 0x1B
ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_LENGTH = 64

_ST_IDLE = "idle"
_ST_ESCAPE = "escape"
_ST_SS3 = "escape_o"
_ST_CSI = "escape_bracket"
_ST_MOUSE = "mouse_prefix"
_ST_DISCARD = "discard"

# Byte that moves the machine out of a state before any parameter bytes.
_TRANSITIONS: dict[tuple[str, int], str] = {
    (_ST_ESCAPE, ord("[")): _ST_CSI,
    (_ST_ESCAPE, ord("O")): _ST_SS3,
    (_ST_CSI, ord("<")): _ST_MOUSE,
}

_CONTROL_KEYS: dict[int, str] = {
    0x02: "CTRL_B",
    0x03: "CTRL_C",
    0x06: "CTRL_F",
}

_CSI_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"H": "HOME",
    b"F": "END",
    b"1~": "HOME",
    b"4~": "END",
    b"5~": "PAGE_UP",
    b"6~": "PAGE_DOWN",
}

_SS3_KEYS: dict[int, str] = {
    ord("A"): "UP",
    ord("B"): "DOWN",
    ord("H"): "HOME",
    ord("F"): "END",
}

_MOUSE_WHEEL_BUTTONS: dict[int, str] = {
    64: "WHEEL_UP",
    65: "WHEEL_DOWN",
}


def _is_csi_final(byte: int) -> bool:
    return 0x40 <= byte <= 0x7E


def _is_csi_parameter(byte: int) -> bool:
    return 0x20 <= byte <= 0x3F


def _mouse_token(body: bytes, final: int) -> str | None:
    """Translate an SGR mouse report body (``btn;col;row``) into a wheel token."""
    if final not in (ord("M"), ord("m")):
        return None
    fields = body.split(b";")
    if len(fields) != 3:
        return None
    try:
        button = int(fields[0])
    except ValueError:
        return None
    return _MOUSE_WHEEL_BUTTONS.get(button)


def decode_input(pending: bytes, data: bytes) -> tuple[list[str], bytes]:
    """Decode ``pending + data`` into tokens and the new pending prefix.

    Pure function: the pending buffer is the only state carried between calls.
    Unknown complete escape sequences and non-printable bytes are consumed
    without producing a token.
    """
    buf = pending + data
    tokens: list[str] = []
    state = _ST_IDLE
    start = 0
    i = 0
    n = len(buf)

    while i < n:
        byte = buf[i]

        if state == _ST_IDLE:
            start = i
            if byte == ESC:
                state = _ST_ESCAPE
            elif byte in _CONTROL_KEYS:
                tokens.append(_CONTROL_KEYS[byte])
            elif 0x20 <= byte < 0x7F:
                tokens.append(chr(byte))
            i += 1
            continue

        next_state = _TRANSITIONS.get((state, byte))
        if next_state is not None and (state != _ST_CSI or i == start + 2):
            state = next_state
            i += 1
            continue

        if state == _ST_ESCAPE:
            # Not a sequence introducer: report the lone escape, decode the byte afresh.
            tokens.append("ESC")
            state = _ST_IDLE
            continue

        if state == _ST_SS3:
            key = _SS3_KEYS.get(byte)
            if key is not None:
                tokens.append(key)
            state = _ST_IDLE
            i += 1
            continue

        # CSI or SGR mouse body; an overlong one is skipped through its final byte.
        if _is_csi_final(byte):
            token = None
            if state == _ST_MOUSE:
                token = _mouse_token(buf[start + 3:i], byte)
            elif state == _ST_CSI:
                token = _CSI_KEYS.get(buf[start + 2:i + 1])
            if token is not None:
                tokens.append(token)
            state = _ST_IDLE
            i += 1
            continue
        if _is_csi_parameter(byte):
            if i - start >= MAX_CSI_LENGTH:
                state = _ST_DISCARD
            i += 1
            continue
        # Broken sequence: drop what was collected and decode the byte afresh.
        state = _ST_IDLE

    if state == _ST_IDLE:
        return tokens, b""
    if state == _ST_DISCARD:
        # Re-decoding this bounded prefix lands back in the discard state.
        return tokens, buf[start:start + MAX_CSI_LENGTH + 1]
    return tokens, buf[start:]


def flush_pending(pending: bytes) -> tuple[list[str], bytes]:
    """Resolve a pending prefix after the escape timeout.

    Returns the tokens and the prefix still pending. A lone escape becomes an
    ``ESC`` token. A longer partial sequence is kept so its remaining bytes are
    consumed as part of it rather than decoded as keys.
    """
    if pending == bytes([ESC]):
        return ["ESC"], b""
    return [], pending


class InputDecoder:
    """Stateful wrapper owning the pending partial-sequence buffer."""

    def __init__(self) -> None:
        self._pending = b""

    @property
    def pending(self) -> bytes:
        return self._pending

    def feed(self, data: bytes) -> list[str]:
        tokens, self._pending = decode_input(self._pending, data)
        return tokens

    @property
    def awaiting_escape_timeout(self) -> bool:
        """True while only a lone escape is pending, which the timeout resolves."""
        return self._pending == bytes([ESC])

    def flush(self) -> list[str]:
        tokens, self._pending = flush_pending(self._pending)
        return tokens

    def reset(self) -> None:
        self._pending = b""
