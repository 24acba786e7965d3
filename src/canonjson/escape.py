"""String emission driven by a byte -> escape lookup table.

Only ``"`` and ``\\`` are escaped. Control characters and all other bytes are
copied through unchanged; this profile deliberately differs from encoders
that turn C0 controls into ``\\n`` / ``\\u00XX`` sequences.
"""

from __future__ import annotations

from collections.abc import Callable

from .exceptions import InvalidString

QU = ord('"')
BS = ord("\\")


def _build_table() -> bytes:
    table = bytearray(256)
    table[QU] = QU
    table[BS] = BS
    return bytes(table)


# ESCAPE[b] is the byte written after "\" when b must be escaped, 0 otherwise.
ESCAPE: bytes = _build_table()


def write_str(write: Callable[[bytes], None], text: str) -> None:
    """Write ``text`` as a quoted canonical JSON string."""
    try:
        data = text.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidString(f"string is not valid unicode: {e.reason}") from e

    write(b'"')
    start = 0
    for i, byte in enumerate(data):
        escape = ESCAPE[byte]
        if not escape:
            continue
        if start < i:
            write(data[start:i])
        write(bytes((BS, escape)))
        start = i + 1
    if start != len(data):
        write(data[start:])
    write(b'"')
