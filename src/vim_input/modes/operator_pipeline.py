"""Operator execution, single-key edits and dot-repeat replay."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional

from vim_input.actions.core import (
    Action,
    Backspace,
    Batch,
    ChangeMode,
    DeleteLine,
    DeleteRange,
    InsertChar,
    InsertNewline,
    MoveCursor,
    PasteAfter,
    PasteBefore,
    ReplaceChar,
    VimState,
    batch_or_single,
)
from vim_input.buffer.state import BufferView, Cursor, normalize_range
from vim_input.buffer.text import advance_chars
from vim_input.motions import resolve_find, resolve_motion
from vim_input.runtime import telemetry

from .base_mode import (
    InsertSession,
    ModeContext,
    ModeResult,
    Operator,
    PendingOperator,
    RecordedCommand,
)

FIND_COMMANDS = ("f", "F")


def typed_actions(typed: str) -> List[Action]:
    """Primitive actions reproducing keystrokes captured in Insert mode."""

    actions: List[Action] = []
    for char in typed:
        if char == "\b":
            actions.append(Backspace())
        elif char == "\n":
            actions.append(InsertNewline())
        else:
            actions.append(InsertChar(char))
    return actions


class OperatorPipeline:
    """Combines pending operators with motions and builds the resulting actions.

    Every completed edit writes the register and is recorded on the context
    so ``.`` can replay it against whatever cursor is current at that time.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @classmethod
    def for_context(cls, context: ModeContext) -> "OperatorPipeline":
        pipeline = context.extras.get("operator_pipeline")
        if not isinstance(pipeline, cls):
            pipeline = cls(context)
            context.extras["operator_pipeline"] = pipeline
        return pipeline

    @property
    def view(self) -> BufferView:
        return self.context.view

    # operator-pending state

    def begin(self, operator: Operator) -> ModeResult:
        """Handle an operator key: arm it, complete ``dd``/``cc``/``yy``, or abandon."""

        pending = self.context.pending_operator
        if pending is None:
            self.context.pending_operator = PendingOperator(
                operator, self.context.take_count()
            )
            return ModeResult(status="operator_pending", message=operator.key)
        if pending.operator is not operator:
            return self.abandon()
        count = self._take_count(pending)
        self.context.clear_pending()
        return self.linewise(operator, count)

    def abandon(self) -> ModeResult:
        self.context.clear_pending()
        return ModeResult(status="abandoned")

    def with_motion(self, motion: str) -> ModeResult:
        pending = self.context.pending_operator
        if pending is None:
            return self.abandon()
        count = self._take_count(pending)
        self.context.clear_pending()
        return self.apply_motion(pending.operator, motion, count)

    def resolve_char_argument(self, command: str, target: str) -> ModeResult:
        """Complete ``f``/``F``/``r`` with the character that followed them."""

        pending = self.context.pending_operator
        count = self._take_count(pending)
        self.context.clear_pending()
        if command == "r":
            return self.replace_char(target)
        if pending is not None:
            return self.apply_find(pending.operator, command, target, count)

        view = self.view
        found = resolve_find(command, target, count, view.lines, view.row, view.col)
        if found is None:
            return ModeResult(status="miss", message=f"{command}{target}")
        return ModeResult(action=MoveCursor(*found), status="motion")

    # operator execution

    def linewise(
        self, operator: Operator, count: int, *, enter_insert: bool = True
    ) -> ModeResult:
        view = self.view
        row = view.row
        end_row = min(row + count, len(view.lines))
        self._yank("\n".join(view.lines[row:end_row]), linewise=True)
        command = RecordedCommand(keys=(operator.key,), count=count, operator=operator)
        self._record(command)

        if operator is Operator.DELETE:
            deletes = [DeleteLine(row)] * (end_row - row)
            return ModeResult(action=batch_or_single(deletes), status="operator")
        if operator is Operator.CHANGE:
            last_row = end_row - 1
            delete = DeleteRange(row, 0, last_row, view.line_len(last_row))
            return self._finish_change(operator, delete, command, enter_insert)
        return ModeResult(status="operator", message="yank")

    def apply_motion(
        self,
        operator: Operator,
        motion: str,
        count: int,
        *,
        enter_insert: bool = True,
    ) -> ModeResult:
        view = self.view
        if motion == "$":
            start, end = view.cursor, (view.row, view.line_len())
        elif motion == "0":
            start, end = (view.row, 0), view.cursor
        else:
            target = resolve_motion(motion, count, view.lines, view.row, view.col)
            if target is None:
                return self.abandon()
            start, end = normalize_range(view.cursor, target)
        command = RecordedCommand(keys=tuple(motion), count=count, operator=operator)
        return self.apply_range(operator, start, end, command, enter_insert=enter_insert)

    def apply_find(
        self,
        operator: Operator,
        command: str,
        target: str,
        count: int,
        *,
        enter_insert: bool = True,
    ) -> ModeResult:
        view = self.view
        found = resolve_find(command, target, count, view.lines, view.row, view.col)
        if found is None:
            return ModeResult(status="miss", message=f"{command}{target}")
        if command == "f":
            start = view.cursor
            end = (view.row, advance_chars(view.line, found[1], 1))
        else:
            start, end = found, view.cursor
        recorded = RecordedCommand(
            keys=(command,), count=count, operator=operator, argument=target
        )
        return self.apply_range(operator, start, end, recorded, enter_insert=enter_insert)

    def apply_range(
        self,
        operator: Operator,
        start: Cursor,
        end: Cursor,
        command: RecordedCommand,
        *,
        enter_insert: bool = True,
    ) -> ModeResult:
        """Run ``operator`` over the character-wise range ``[start, end)``."""

        self._yank(self.view.extract(start, end), linewise=False)
        self._record(command)
        telemetry.record_event(
            "operator.apply",
            level="debug",
            data={
                "operator": operator.key,
                "keys": command.motion,
                "start": start,
                "end": end,
            },
        )

        if operator is Operator.YANK:
            return ModeResult(action=MoveCursor(*start), status="operator")
        delete = DeleteRange(start[0], start[1], end[0], end[1])
        if operator is Operator.DELETE:
            return ModeResult(action=delete, status="operator")
        return self._finish_change(operator, delete, command, enter_insert)

    def _finish_change(
        self,
        operator: Operator,
        delete: DeleteRange,
        command: RecordedCommand,
        enter_insert: bool,
    ) -> ModeResult:
        if not enter_insert:
            return ModeResult(action=delete, status="operator")
        self.context.insert_session = InsertSession(
            keys=(operator.key, *command.keys), change=command
        )
        return ModeResult(
            action=Batch((delete, ChangeMode(VimState.INSERT))),
            switch_to=VimState.INSERT.value,
            status="operator",
        )

    # single-key edits

    def delete_chars(self, count: int) -> ModeResult:
        view = self.view
        if view.col >= view.line_len():
            return ModeResult(status="miss", message="x")
        end = advance_chars(view.line, view.col, count)
        self._yank(view.extract(view.cursor, (view.row, end)), linewise=False)
        self._record(RecordedCommand(keys=("x",), count=count))
        return ModeResult(action=DeleteRange(view.row, view.col, view.row, end))

    def replace_char(self, target: str) -> ModeResult:
        view = self.view
        self._record(RecordedCommand(keys=("r",), argument=target))
        return ModeResult(action=ReplaceChar(view.row, view.col, target))

    def paste(self, *, after: bool) -> ModeResult:
        register = self.context.registers
        if register.is_empty():
            return ModeResult(status="miss", message="empty_register")
        action_type = PasteAfter if after else PasteBefore
        return ModeResult(action=action_type(register.text, register.linewise))

    # dot-repeat

    def replay(self, count: Optional[int] = None) -> ModeResult:
        """Re-run the last recorded command at the current cursor.

        A count given to ``.`` replaces the recorded one.
        """

        command = self.context.last_command
        if command is None:
            return ModeResult(status="miss", message="nothing_to_repeat")
        if count is not None:
            command = replace(command, count=count)

        with telemetry.span(
            "operator::replay",
            component=True,
            metadata={
                "keys": command.motion,
                "operator": command.operator.key if command.operator else "",
            },
        ):
            if command.operator is not None:
                result = self._replay_operator(command.operator, command)
            elif command.keys == ("x",):
                result = self.delete_chars(command.count)
            elif command.keys == ("r",) and command.argument:
                result = self.replace_char(command.argument)
            else:
                actions = typed_actions(command.inserted or "") * command.count
                result = ModeResult(action=batch_or_single(actions))

        self.context.last_command = command
        self.context.bus.emit("dot.replay", command)
        return result

    def _replay_operator(
        self, operator: Operator, command: RecordedCommand
    ) -> ModeResult:
        if command.motion == operator.key:
            result = self.linewise(operator, command.count, enter_insert=False)
        elif command.motion in FIND_COMMANDS and command.argument:
            result = self.apply_find(
                operator,
                command.motion,
                command.argument,
                command.count,
                enter_insert=False,
            )
        else:
            result = self.apply_motion(
                operator, command.motion, command.count, enter_insert=False
            )

        if operator is not Operator.CHANGE or result.status != "operator":
            return result
        typed = typed_actions(command.inserted or "")
        return ModeResult(action=batch_or_single([result.action, *typed]), status="operator")

    # helpers

    def _take_count(self, pending: Optional[PendingOperator]) -> int:
        count = self.context.take_count()
        if pending is None:
            return count
        return count * pending.count

    def _yank(self, text: str, *, linewise: bool) -> None:
        value = self.context.registers.yank(text, linewise=linewise)
        self.context.bus.emit("register.update", value)

    def _record(self, command: RecordedCommand) -> None:
        self.context.last_command = command


__all__ = ["FIND_COMMANDS", "OperatorPipeline", "typed_actions"]
