"""The unnamed yank register."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RegisterValue:
    text: str = ""
    linewise: bool = False


class Register:
    """Single-slot clipboard shared by yank, delete, change and paste.

    Every write replaces the previous payload; nothing is ever appended.
    """

    def __init__(self) -> None:
        self._value = RegisterValue()

    @property
    def value(self) -> RegisterValue:
        return self._value

    @property
    def text(self) -> str:
        return self._value.text

    @property
    def linewise(self) -> bool:
        return self._value.linewise

    def is_empty(self) -> bool:
        return not self._value.text

    def yank(self, text: str, *, linewise: bool = False) -> RegisterValue:
        self._value = RegisterValue(text=text, linewise=linewise)
        return self._value

    def clear(self) -> None:
        self._value = RegisterValue()


__all__ = ["Register", "RegisterValue"]
