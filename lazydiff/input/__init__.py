"""Input layer: byte-stream decoding, stdin reads, and key bindings."""

from .decoder import ESC_SEQUENCE_TIMEOUT_MS, InputDecoder, decode_input, flush_pending
from .keymap import KEY_BINDINGS, command_for_token
from .reader import read_input

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputDecoder",
    "KEY_BINDINGS",
    "command_for_token",
    "decode_input",
    "flush_pending",
    "read_input",
]
