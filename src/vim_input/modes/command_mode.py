"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class CommandMode(Mode):
    name = "command"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.command_line.clear()
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.bus.emit("command.end", self.context.command_text)
        self.context.command_line.clear()

    @property
    def current_command(self) -> str:
        return self.context.command_text

    def handle_key(self, key: KeyInput) -> ModeResult:
        result = self._resolver.resolve(self.name, (key.token,))
        if result.status == "match" and result.match:
            return execute_match(self.context, result.match)

        if key.is_text:
            self.context.command_line.append(key.key)
            return ModeResult(status="editing", message=self.current_command)

        return ModeResult(status="miss", message="unhandled")


__all__ = ["CommandMode"]
