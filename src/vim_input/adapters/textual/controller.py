"""Textual adapter that feeds ModeManager and applies its actions to a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from vim_input.actions.core import NO_OP, Action, CommandOutput, Submit
from vim_input.buffer import InputBuffer
from vim_input.modes.mode_manager import ModeManager


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


_NAMED_KEYS = {
    "escape": "\x1b",
    "enter": "\r",
    "return": "\r",
    "backspace": "\x7f",
    "ctrl+h": "\x7f",
}

_BUS_EVENTS = (
    "mode.switch",
    "visual.start",
    "visual.selection",
    "visual.yank",
    "command.start",
    "command.end",
    "command.submit",
    "command.error",
    "register.update",
    "dot.replay",
)


def translate_key(key: str, character: Optional[str] = None) -> Optional[Tuple[str, bool]]:
    """Map a Textual key name onto the ``(key, ctrl)`` pair the engine expects.

    Returns ``None`` for keys the engine has no use for (arrows, function
    keys and the like).
    """

    if key in _NAMED_KEYS:
        return _NAMED_KEYS[key], False
    if key.startswith("ctrl+"):
        chord = key[len("ctrl+") :]
        if chord == "left_square_bracket":
            chord = "["
        if len(chord) == 1:
            return chord, True
        return None
    if character and len(character) == 1 and character.isprintable():
        return character, False
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[InputBuffer], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    handle_signal: Callable[[Action], None] = _noop
    log: Callable[[str], None] = _noop


class TextualVimAdapter:
    """Bridges ModeManager and its bus events to a Textual-friendly surface."""

    def __init__(
        self,
        manager: ModeManager,
        hooks: TextualUIHooks,
        buffer: InputBuffer | None = None,
    ) -> None:
        self.manager = manager
        self.hooks = hooks
        self.buffer = buffer or InputBuffer()
        self.messages: List[str] = []
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_status()
        self._refresh_command_line()

    def handle_textual_key(self, key: str, *, character: Optional[str] = None) -> Action:
        """Translate a Textual key event, dispatch it and apply the result."""

        translated = translate_key(key, character)
        if translated is None:
            self._log_state("ignored ->", key=key)
            return NO_OP
        raw, ctrl = translated
        self._log_state("key ->", key=key, raw=raw, ctrl=ctrl)
        action = self.manager.handle_key(
            raw,
            ctrl,
            self.buffer.lines,
            self.buffer.row,
            self.buffer.col,
        )
        self.buffer.apply(action)
        self._after_action(action)
        self._log_state("action <-", action=action)
        return action

    def _after_action(self, action: Action) -> None:
        del action
        for signal in self.buffer.drain_signals():
            if isinstance(signal, CommandOutput):
                self.messages.append(signal.message)
                self.hooks.update_status(signal.message)
            elif isinstance(signal, Submit):
                self.hooks.update_status(f"submitted {len(self.buffer.text)} chars")
            self.hooks.handle_signal(signal)
        self._refresh_buffer()
        self._refresh_command_line()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in _BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name == "mode.switch":
            self._refresh_status()
        elif name.startswith("command"):
            self._refresh_command_line()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer)

    def _refresh_status(self) -> None:
        self.hooks.update_status(self.manager.state().label)

    def _refresh_command_line(self) -> None:
        self.hooks.show_command(self.manager.command_buffer)

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name if active_mode else "?",
            "cursor": self.buffer.cursor,
            "command": self.manager.command_buffer,
            "buffer": self.buffer.name,
        }


__all__ = ["TextualUIHooks", "TextualVimAdapter", "translate_key"]
