"""Normal mode: counts, operator-pending keys and character arguments."""

from __future__ import annotations

from vim_input.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import (
    allowed_while_operator_pending,
    execute_match,
    require_keymap_resolver,
)
from .operator_pipeline import OperatorPipeline


class NormalMode(Mode):
    """Routes keys through the keymap after count and argument handling.

    While an operator is pending only actions flagged ``operator_pending``
    (motions, operators, ``f``/``F``) may run; any other key abandons it.
    """

    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._logger_name = "vim_input.modes.normal"
        self._resolver = require_keymap_resolver(context)
        self._pipeline = OperatorPipeline.for_context(context)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self.context.clear_pending()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self.context.clear_pending()

    def handle_key(self, key: KeyInput) -> ModeResult:
        context = self.context
        if context.awaiting_char is not None:
            return self._char_argument(key)

        if not context.pending_keys and context.feed_digit(key):
            return ModeResult(status="count", message=str(context.count))

        context.pending_keys.append(key.token)
        result = self._resolver.resolve(self.name, context.pending_keys)
        if result.status == "pending":
            return ModeResult(status="pending", message="awaiting_sequence")

        context.pending_keys.clear()
        if result.status == "match" and result.match:
            if context.pending_operator and not allowed_while_operator_pending(
                result.match
            ):
                return self._pipeline.abandon()
            return execute_match(context, result.match)

        context.clear_pending()
        telemetry.record_event(
            "normal.unmapped",
            level="debug",
            data={"key": key.token},
            logger_name=self._logger_name,
        )
        return ModeResult(status="miss", message=key.token)

    def _char_argument(self, key: KeyInput) -> ModeResult:
        command = self.context.awaiting_char or ""
        if not key.is_text:
            self.context.clear_pending()
            return ModeResult(status="cancelled", message=command)
        return self._pipeline.resolve_char_argument(command, key.key)


__all__ = ["NormalMode"]
