"""Read-only snapshot of the host buffer handed to modes on every key."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .text import byte_len, clamp_to_char_boundary, slice_bytes

Cursor = Tuple[int, int]  # (row, byte column)
Range = Tuple[Cursor, Cursor]


@dataclass(frozen=True, slots=True)
class BufferView:
    """Lines plus cursor as the host reported them for the current key."""

    lines: tuple[str, ...] = ("",)
    row: int = 0
    col: int = 0

    @classmethod
    def build(cls, lines: Sequence[str], row: int, col: int) -> "BufferView":
        """Snapshot ``lines`` and clamp the cursor onto a valid boundary."""

        snapshot = tuple(lines) or ("",)
        row = max(0, min(row, len(snapshot) - 1))
        col = clamp_to_char_boundary(snapshot[row], col)
        return cls(lines=snapshot, row=row, col=col)

    @property
    def cursor(self) -> Cursor:
        return (self.row, self.col)

    @property
    def line(self) -> str:
        return self.lines[self.row]

    def line_at(self, row: int) -> str:
        if 0 <= row < len(self.lines):
            return self.lines[row]
        return ""

    def line_len(self, row: int | None = None) -> int:
        return byte_len(self.line_at(self.row if row is None else row))

    def extract(self, start: Cursor, end: Cursor) -> str:
        return extract_range(self.lines, start, end)


def normalize_range(first: Cursor, second: Cursor) -> Range:
    """Order two positions so the result reads ``(start, end)``."""

    if first <= second:
        return first, second
    return second, first


def extract_range(lines: Sequence[str], start: Cursor, end: Cursor) -> str:
    """Text covered by the half-open range ``[start, end)``.

    Multi-line ranges keep the tail of the first line, every middle line and
    the head of the last line, joined with ``\\n``.
    """

    start_row, start_col = start
    end_row, end_col = end
    if start_row == end_row:
        if not 0 <= start_row < len(lines):
            return ""
        return slice_bytes(lines[start_row], start_col, end_col)

    parts: list[str] = []
    for row in range(start_row, end_row + 1):
        if not 0 <= row < len(lines):
            continue
        line = lines[row]
        if row == start_row:
            parts.append(slice_bytes(line, start_col))
        elif row == end_row:
            parts.append(slice_bytes(line, 0, end_col))
        else:
            parts.append(line)
    return "\n".join(parts)


__all__ = ["BufferView", "Cursor", "Range", "extract_range", "normalize_range"]
