"""UTF-8 byte-offset helpers.

Cursor columns are byte offsets into the UTF-8 encoding of a line. Every
helper here returns offsets that sit on a character boundary, so callers
never split a multi-byte character.
"""

from __future__ import annotations

from typing import Optional, Tuple

BLANKS = (0x20, 0x09)  # space, tab


def encode(line: str) -> bytes:
    return line.encode("utf-8")


def byte_len(line: str) -> int:
    return len(encode(line))


def is_char_boundary(data: bytes, pos: int) -> bool:
    if pos <= 0 or pos >= len(data):
        return pos == 0 or pos == len(data)
    return (data[pos] & 0xC0) != 0x80


def clamp_to_char_boundary(line: str, pos: int) -> int:
    """Clamp ``pos`` into the line and walk back to the nearest boundary."""

    data = encode(line)
    pos = max(0, min(pos, len(data)))
    while pos > 0 and not is_char_boundary(data, pos):
        pos -= 1
    return pos


def advance_chars(line: str, col: int, count: int) -> int:
    """Move ``count`` characters forward from ``col``, stopping at the line end."""

    data = encode(line)
    pos = col
    for _ in range(count):
        if pos >= len(data):
            break
        pos += 1
        while pos < len(data) and not is_char_boundary(data, pos):
            pos += 1
    return min(pos, len(data))


def retreat_chars(line: str, col: int, count: int) -> int:
    """Move ``count`` characters backward from ``col``, stopping at 0."""

    data = encode(line)
    pos = min(col, len(data))
    for _ in range(count):
        if pos == 0:
            break
        pos -= 1
        while pos > 0 and not is_char_boundary(data, pos):
            pos -= 1
    return pos


def last_char_index(line: str) -> int:
    """Byte offset of the last character (0 for an empty line)."""

    data = encode(line)
    if not data:
        return 0
    return clamp_to_char_boundary(line, len(data) - 1)


def first_non_whitespace(line: str) -> int:
    """Offset of the first byte that is not a space or tab; 0 if blank."""

    for index, byte in enumerate(encode(line)):
        if byte not in BLANKS:
            return index
    return 0


def slice_bytes(line: str, start: int, end: Optional[int] = None) -> str:
    """Return the text between two byte offsets (both clamped to boundaries)."""

    data = encode(line)
    stop = len(data) if end is None else end
    start = clamp_to_char_boundary(line, start)
    stop = clamp_to_char_boundary(line, stop)
    if start >= stop:
        return ""
    return data[start:stop].decode("utf-8")


def char_offsets(line: str) -> list[Tuple[int, str]]:
    """``(byte_offset, char)`` pairs for every character in ``line``."""

    offsets: list[Tuple[int, str]] = []
    position = 0
    for char in line:
        offsets.append((position, char))
        position += len(char.encode("utf-8"))
    return offsets


def find_char_forward(line: str, col: int, target: str, count: int) -> Optional[int]:
    """Offset of the ``count``-th ``target`` strictly after ``col``."""

    found = 0
    for offset, char in char_offsets(line):
        if offset <= col:
            continue
        if char == target:
            found += 1
            if found == count:
                return offset
    return None


def find_char_backward(line: str, col: int, target: str, count: int) -> Optional[int]:
    """Offset of the ``count``-th ``target`` strictly before ``col``."""

    found = 0
    for offset, char in reversed(char_offsets(line)):
        if offset >= col:
            continue
        if char == target:
            found += 1
            if found == count:
                return offset
    return None


__all__ = [
    "advance_chars",
    "byte_len",
    "char_offsets",
    "clamp_to_char_boundary",
    "encode",
    "find_char_backward",
    "find_char_forward",
    "first_non_whitespace",
    "is_char_boundary",
    "last_char_index",
    "retreat_chars",
    "slice_bytes",
]
