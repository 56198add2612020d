"""Base classes and shared state for editor modes."""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional

from vim_input.actions.core import NO_OP, Action
from vim_input.buffer.registers import Register
from vim_input.buffer.state import BufferView, Cursor

ESCAPE = "\x1b"

_NAMED_KEYS = {
    ESCAPE: "escape",
    "\r": "enter",
    "\n": "enter",
    "\x08": "backspace",
    "\x7f": "backspace",
}


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is the raw character; ``token`` is the name bindings are keyed
    on (``"escape"``, ``"enter"``, ``"backspace"``, ``"ctrl+r"`` ...).
    """

    key: str
    ctrl: bool = False

    @classmethod
    def from_raw(cls, key: str, ctrl: bool = False) -> "KeyInput":
        """Fold terminal control characters into their Ctrl chord letter."""

        if ctrl and len(key) == 1:
            if "\x01" <= key <= "\x1a":
                key = chr(ord(key) + 96)
            elif key == ESCAPE:
                key = "["
        return cls(key=key, ctrl=ctrl)

    @property
    def token(self) -> str:
        if self.ctrl:
            return f"ctrl+{self.key}"
        return _NAMED_KEYS.get(self.key, self.key)

    @property
    def is_text(self) -> bool:
        """True for a single non-control character typed without Ctrl."""

        return (
            not self.ctrl
            and len(self.key) == 1
            and unicodedata.category(self.key) != "Cc"
        )


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    action: Action = NO_OP
    consumed: bool = True
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class Operator(str, Enum):
    """Pending operators, valued by the key that starts them."""

    DELETE = "d"
    CHANGE = "c"
    YANK = "y"

    @property
    def key(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PendingOperator:
    operator: Operator
    count: int = 1


@dataclass(frozen=True, slots=True)
class RecordedCommand:
    """Last completed editing command, replayed by ``.``.

    ``keys`` holds what followed the operator (``("w",)``, ``("g", "g")``,
    ``("d",)`` for ``dd``) or the command key itself (``("x",)``,
    ``("r",)``, ``("i",)``). ``argument`` is the character given to
    ``f``/``F``/``r``; ``inserted`` the keystrokes typed in Insert mode.
    """

    keys: tuple[str, ...]
    count: int = 1
    operator: Optional[Operator] = None
    argument: Optional[str] = None
    inserted: Optional[str] = None

    @property
    def motion(self) -> str:
        return "".join(self.keys)


@dataclass(slots=True)
class InsertSession:
    """Keystrokes typed since Insert mode was entered.

    ``typed`` stores characters as-is, ``\\b`` for Backspace and ``\\n`` for
    Enter. A session opened by ``c`` keeps the change command so the whole
    edit repeats as one.
    """

    keys: tuple[str, ...] = ("i",)
    change: Optional[RecordedCommand] = None
    typed: List[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(self.typed)


class ModeBus:
    """Minimal event bus letting observers follow engine activity."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """State shared by every mode across key events."""

    registers: Register = field(default_factory=Register)
    bus: ModeBus = field(default_factory=ModeBus)
    view: BufferView = field(default_factory=BufferView)
    count: Optional[int] = None
    pending_operator: Optional[PendingOperator] = None
    awaiting_char: Optional[str] = None
    pending_keys: List[str] = field(default_factory=list)
    last_command: Optional[RecordedCommand] = None
    visual_anchor: Optional[Cursor] = None
    command_line: List[str] = field(default_factory=list)
    insert_session: Optional[InsertSession] = None
    paste_mode: bool = False
    extras: Dict[str, object] = field(default_factory=dict)

    def feed_digit(self, key: KeyInput) -> bool:
        """Accumulate a count digit; a leading ``0`` is left to the motion."""

        if key.ctrl or len(key.key) != 1 or key.key not in "0123456789":
            return False
        if key.key == "0" and self.count is None:
            return False
        self.count = (self.count or 0) * 10 + int(key.key)
        return True

    def take_count(self) -> int:
        count = self.count or 1
        self.count = None
        return count

    def clear_pending(self) -> None:
        self.count = None
        self.pending_operator = None
        self.awaiting_char = None
        self.pending_keys.clear()

    @property
    def command_text(self) -> str:
        return "".join(self.command_line)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        raise NotImplementedError


__all__ = [
    "ESCAPE",
    "InsertSession",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "Operator",
    "PendingOperator",
    "RecordedCommand",
]
