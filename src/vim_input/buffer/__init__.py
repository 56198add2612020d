"""Buffer snapshots, the yank register and the reference host buffer."""

from .buffer import BufferValidationError, InputBuffer, ensure_cursor
from .registers import Register, RegisterValue
from .state import BufferView, Cursor, Range, extract_range, normalize_range

__all__ = [
    "BufferValidationError",
    "BufferView",
    "Cursor",
    "InputBuffer",
    "Range",
    "Register",
    "RegisterValue",
    "ensure_cursor",
    "extract_range",
    "normalize_range",
]
