"""Embeddable Vi-style modal input engine.

Hosts feed one key at a time together with a snapshot of their buffer and
apply the :class:`~vim_input.actions.Action` they get back.
"""

from .modes import ModeContext, ModeManager
from .actions import (
    NO_OP,
    Action,
    Backspace,
    Batch,
    ChangeMode,
    ClearInput,
    CommandOutput,
    DeleteLine,
    DeleteRange,
    InsertChar,
    InsertNewline,
    MoveCursor,
    NoOp,
    PasteAfter,
    PasteBefore,
    Redo,
    ReplaceChar,
    Submit,
    Undo,
    VimState,
)
from .buffer import InputBuffer

__all__ = [
    "Action",
    "Backspace",
    "Batch",
    "ChangeMode",
    "ClearInput",
    "CommandOutput",
    "DeleteLine",
    "DeleteRange",
    "InputBuffer",
    "InsertChar",
    "InsertNewline",
    "ModeContext",
    "ModeManager",
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
]

__version__ = "0.1.0"
