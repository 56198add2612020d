"""Pure motion resolution shared by Normal, Visual and operator-pending keys."""

from __future__ import annotations

from typing import Callable, Dict, Optional, Sequence

from vim_input.buffer.state import Cursor
from vim_input.buffer.text import (
    advance_chars,
    byte_len,
    clamp_to_char_boundary,
    find_char_backward,
    find_char_forward,
    first_non_whitespace,
    last_char_index,
    retreat_chars,
)

from .words import word_backward, word_end, word_forward

MotionFunc = Callable[[Sequence[str], int, int, int], Optional[Cursor]]


def _line(lines: Sequence[str], row: int) -> str:
    if 0 <= row < len(lines):
        return lines[row]
    return ""


def _vertical(lines: Sequence[str], row: int, col: int) -> Cursor:
    line = _line(lines, row)
    limit = max(byte_len(line) - 1, 0)
    return row, clamp_to_char_boundary(line, min(col, limit))


def motion_left(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    return row, retreat_chars(_line(lines, row), col, count)


def motion_right(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    return row, advance_chars(_line(lines, row), col, count)


def motion_line_start(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    return row, 0


def motion_first_non_blank(
    lines: Sequence[str], row: int, col: int, count: int
) -> Cursor:
    return row, first_non_whitespace(_line(lines, row))


def motion_line_end(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    return row, last_char_index(_line(lines, row))


def motion_down(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    target = min(row + count, max(len(lines) - 1, 0))
    return _vertical(lines, target, col)


def motion_up(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    return _vertical(lines, max(row - count, 0), col)


def motion_first_line(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    return 0, 0


def motion_last_line(lines: Sequence[str], row: int, col: int, count: int) -> Cursor:
    last = max(len(lines) - 1, 0)
    return last, last_char_index(_line(lines, last))


MOTIONS: Dict[str, MotionFunc] = {
    "h": motion_left,
    "l": motion_right,
    "0": motion_line_start,
    "^": motion_first_non_blank,
    "$": motion_line_end,
    "w": word_forward,
    "b": word_backward,
    "e": word_end,
    "j": motion_down,
    "k": motion_up,
    "gg": motion_first_line,
    "G": motion_last_line,
}


def resolve_motion(
    key: str, count: int, lines: Sequence[str], row: int, col: int
) -> Optional[Cursor]:
    """Target of motion ``key`` repeated ``count`` times, or ``None`` if unknown.

    ``h``/``l`` stay within ``[0, len]``; callers outside Insert mode clamp
    ``l`` with :func:`clamp_to_last_char`.
    """

    motion = MOTIONS.get(key)
    if motion is None:
        return None
    return motion(lines, row, col, max(count, 1))


def resolve_find(
    command: str, target: str, count: int, lines: Sequence[str], row: int, col: int
) -> Optional[Cursor]:
    """``f``/``F`` search for ``target`` on the current line."""

    line = _line(lines, row)
    if command == "f":
        found = find_char_forward(line, col, target, max(count, 1))
    elif command == "F":
        found = find_char_backward(line, col, target, max(count, 1))
    else:
        return None
    if found is None:
        return None
    return row, found


def clamp_to_last_char(lines: Sequence[str], position: Cursor) -> Cursor:
    row, col = position
    line = _line(lines, row)
    return row, min(col, last_char_index(line))


__all__ = [
    "MOTIONS",
    "MotionFunc",
    "clamp_to_last_char",
    "resolve_find",
    "resolve_motion",
]
