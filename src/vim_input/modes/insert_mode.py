"""Insert mode: typed text plus the session recorded for dot-repeat."""

from __future__ import annotations

from dataclasses import replace
from typing import List

from vim_input.actions.core import InsertChar, batch_or_single

from .base_mode import (
    InsertSession,
    KeyInput,
    Mode,
    ModeContext,
    ModeResult,
    RecordedCommand,
)
from .keymap_helpers import execute_match, require_keymap_resolver


class InsertMode(Mode):
    name = "insert"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)
        self._pending: List[KeyInput] = []

    @property
    def session(self) -> InsertSession:
        if self.context.insert_session is None:
            self.context.insert_session = InsertSession()
        return self.context.insert_session

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()
        if self.context.insert_session is None:
            self.context.insert_session = InsertSession()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()
        session = self.context.insert_session
        self.context.insert_session = None
        if session is None:
            return
        if session.change is not None:
            self.context.last_command = replace(session.change, inserted=session.text)
        elif session.typed:
            self.context.last_command = RecordedCommand(
                keys=session.keys, inserted=session.text
            )

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key)
        result = self._resolver.resolve(
            self.name, [pending.token for pending in self._pending]
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return execute_match(self.context, result.match)

        if result.status == "pending":
            return ModeResult(status="pending", message="awaiting_sequence")

        if len(self._pending) > 1:
            # an unfinished sequence is plain text; retry the last key alone
            flushed = self._pending[:-1]
            self._pending.clear()
            typed = self._type(flushed)
            follow = self.handle_key(key)
            return ModeResult(
                action=batch_or_single([typed.action, follow.action]),
                switch_to=follow.switch_to,
                status=follow.status,
            )

        self._pending.clear()
        return self._type([key])

    def _type(self, keys: List[KeyInput]) -> ModeResult:
        text = [key.key for key in keys if key.is_text]
        self.session.typed.extend(text)
        return ModeResult(
            action=batch_or_single(InsertChar(char) for char in text),
            status="insert" if text else "miss",
        )


__all__ = ["InsertMode"]
