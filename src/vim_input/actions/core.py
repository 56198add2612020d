"""Buffer-mutation instructions returned to the host editor.

Every ``ModeManager.handle_key`` call returns exactly one of these values.
The host applies them in order; a ``Batch`` is applied front to back and
every action is self-contained.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union


class VimState(str, Enum):
    """Available editing modes."""

    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    COMMAND = "command"

    @property
    def label(self) -> str:
        """Mode indicator text for status lines."""

        return _LABELS[self]

    def __str__(self) -> str:
        return self.label


_LABELS = {
    VimState.NORMAL: "-- NORMAL --",
    VimState.INSERT: "-- INSERT --",
    VimState.VISUAL: "-- VISUAL --",
    VimState.COMMAND: ":",
}


@dataclass(frozen=True, slots=True)
class NoOp:
    """Key consumed, nothing to apply."""


@dataclass(frozen=True, slots=True)
class InsertChar:
    ch: str


@dataclass(frozen=True, slots=True)
class InsertNewline:
    """Split the line at the cursor."""


@dataclass(frozen=True, slots=True)
class Backspace:
    """Delete the character before the cursor (joining lines at column 0)."""


@dataclass(frozen=True, slots=True)
class DeleteRange:
    """Delete ``[start, end)``; columns are UTF-8 byte offsets."""

    start_row: int
    start_col: int
    end_row: int
    end_col: int


@dataclass(frozen=True, slots=True)
class DeleteLine:
    row: int


@dataclass(frozen=True, slots=True)
class MoveCursor:
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class ChangeMode:
    mode: VimState


@dataclass(frozen=True, slots=True)
class ReplaceChar:
    row: int
    col: int
    ch: str


@dataclass(frozen=True, slots=True)
class PasteAfter:
    """Paste after the cursor; ``linewise`` pastes below the current line."""

    text: str
    linewise: bool = False


@dataclass(frozen=True, slots=True)
class PasteBefore:
    """Paste before the cursor; ``linewise`` pastes above the current line."""

    text: str
    linewise: bool = False


@dataclass(frozen=True, slots=True)
class Submit:
    pass


@dataclass(frozen=True, slots=True)
class ClearInput:
    pass


@dataclass(frozen=True, slots=True)
class Undo:
    pass


@dataclass(frozen=True, slots=True)
class Redo:
    pass


@dataclass(frozen=True, slots=True)
class CommandOutput:
    message: str


@dataclass(frozen=True, slots=True)
class Batch:
    """Several actions applied in order."""

    actions: tuple["Action", ...]

    def __init__(self, actions: Iterable["Action"]) -> None:
        object.__setattr__(self, "actions", tuple(actions))

    def __iter__(self) -> Iterator["Action"]:
        return iter(self.actions)

    def __len__(self) -> int:
        return len(self.actions)

    def __getitem__(self, index: int) -> "Action":
        return self.actions[index]


Action = Union[
    NoOp,
    InsertChar,
    InsertNewline,
    Backspace,
    DeleteRange,
    DeleteLine,
    MoveCursor,
    ChangeMode,
    ReplaceChar,
    PasteAfter,
    PasteBefore,
    Submit,
    ClearInput,
    Undo,
    Redo,
    CommandOutput,
    Batch,
]

NO_OP = NoOp()


def batch_or_single(actions: Iterable[Action]) -> Action:
    """Collapse ``actions`` into one value: ``NoOp``, the lone action, or a ``Batch``.

    ``NoOp`` entries are dropped.
    """

    items = tuple(action for action in actions if not isinstance(action, NoOp))
    if not items:
        return NO_OP
    if len(items) == 1:
        return items[0]
    return Batch(items)


__all__ = [
    "Action",
    "Backspace",
    "Batch",
    "ChangeMode",
    "ClearInput",
    "CommandOutput",
    "DeleteLine",
    "DeleteRange",
    "InsertChar",
    "InsertNewline",
    "MoveCursor",
    "NO_OP",
    "NoOp",
    "PasteAfter",
    "PasteBefore",
    "Redo",
    "ReplaceChar",
    "Submit",
    "Undo",
    "VimState",
    "batch_or_single",
]
