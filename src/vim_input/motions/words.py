"""Word motions (``w``, ``b``, ``e``) over byte offsets.

Word classes are ASCII only: ``[A-Za-z0-9_]`` is a word character, space and
tab are blanks, every other byte (including all bytes of multi-byte
characters) is punctuation.
"""

from __future__ import annotations

from typing import Sequence

from vim_input.buffer.state import Cursor
from vim_input.buffer.text import (
    BLANKS,
    advance_chars,
    clamp_to_char_boundary,
    encode,
    first_non_whitespace,
)


def is_word_byte(byte: int) -> bool:
    return byte == 0x5F or (byte < 0x80 and chr(byte).isalnum())


def is_blank_byte(byte: int) -> bool:
    return byte in BLANKS


def is_punct_byte(byte: int) -> bool:
    return not is_word_byte(byte) and not is_blank_byte(byte)


def _line(lines: Sequence[str], row: int) -> str:
    if 0 <= row < len(lines):
        return lines[row]
    return ""


def word_forward(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    """Start of the ``count``-th following word, crossing onto later lines."""

    for _ in range(count):
        data = encode(_line(lines, row))
        if col >= len(data):
            if row + 1 < len(lines):
                row += 1
                col = first_non_whitespace(lines[row])
            continue

        pos = col
        if is_blank_byte(data[pos]):
            while pos < len(data) and is_blank_byte(data[pos]):
                pos += 1
        else:
            same_class = is_word_byte if is_word_byte(data[pos]) else is_punct_byte
            while pos < len(data) and same_class(data[pos]):
                pos += 1
            while pos < len(data) and is_blank_byte(data[pos]):
                pos += 1

        if pos >= len(data) and row + 1 < len(lines):
            row += 1
            col = first_non_whitespace(lines[row])
        else:
            col = min(pos, len(data))
    return row, col


def word_backward(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    """Start of the ``count``-th preceding word, continuing onto earlier lines."""

    for _ in range(count):
        if col == 0:
            if row == 0:
                break
            row -= 1
            col = len(encode(_line(lines, row)))

        data = encode(_line(lines, row))
        pos = min(col, len(data))
        while pos > 0 and is_blank_byte(data[pos - 1]):
            pos -= 1
        if pos == 0:
            col = 0
            continue

        same_class = is_word_byte if is_word_byte(data[pos - 1]) else is_punct_byte
        while pos > 0 and same_class(data[pos - 1]):
            pos -= 1
        col = pos
    return row, col


def word_end(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    """Last character of the ``count``-th following word."""

    for _ in range(count):
        line = _line(lines, row)
        pos = col
        if pos < len(encode(line)):
            pos = advance_chars(line, pos, 1)

        # skip blanks, moving past exhausted lines
        while True:
            data = encode(_line(lines, row))
            while pos < len(data) and is_blank_byte(data[pos]):
                pos += 1
            if pos < len(data) or row + 1 >= len(lines):
                break
            row += 1
            pos = 0

        line = _line(lines, row)
        data = encode(line)
        if pos >= len(data):
            col = clamp_to_char_boundary(line, max(len(data) - 1, 0))
            continue

        same_class = is_word_byte if is_word_byte(data[pos]) else is_punct_byte
        while pos + 1 < len(data) and same_class(data[pos + 1]):
            pos += 1
        col = clamp_to_char_boundary(line, pos)
    return row, col


__all__ = [
    "is_blank_byte",
    "is_punct_byte",
    "is_word_byte",
    "word_backward",
    "word_end",
    "word_forward",
]
