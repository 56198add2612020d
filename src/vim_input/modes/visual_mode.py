"""Visual mode: a fixed anchor plus the live cursor form the selection."""

from __future__ import annotations

from vim_input.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver


class VisualMode(Mode):
    name = "visual"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.clear_pending()
        self.context.visual_anchor = self.context.view.cursor
        self.context.bus.emit("visual.start", self.context.visual_anchor)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.clear_pending()
        self.context.visual_anchor = None

    def handle_key(self, key: KeyInput) -> ModeResult:
        context = self.context
        if not context.pending_keys and context.feed_digit(key):
            return ModeResult(status="count", message=str(context.count))

        context.pending_keys.append(key.token)
        result = self._resolver.resolve(self.name, context.pending_keys)
        if result.status == "pending":
            return ModeResult(status="pending", message="awaiting_sequence")

        context.pending_keys.clear()
        if result.status == "match" and result.match:
            return execute_match(context, result.match)

        context.clear_pending()
        telemetry.record_event(
            "visual.unmapped",
            level="debug",
            data={"key": key.token},
            logger_name="vim_input.modes.visual",
        )
        return ModeResult(status="miss", message=key.token)


__all__ = ["VisualMode"]
