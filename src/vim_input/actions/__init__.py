"""Action values returned to hosts, plus the keymap handlers that build them.

Only the value types are imported here; the handler modules depend on
``vim_input.modes`` and are loaded by the default keymaps.
"""

from .core import (
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
    batch_or_single,
)

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
