"""Normal-mode keymap handlers.

Every handler is called as ``handler(context, match)``; per-key parameters
(the motion to resolve, the operator key, the Insert entry) come from the
matched action's metadata.
"""

from __future__ import annotations

from typing import List

from vim_input.buffer.text import advance_chars, first_non_whitespace
from vim_input.modes.base_mode import InsertSession, ModeContext, ModeResult, Operator
from vim_input.modes.operator_pipeline import OperatorPipeline
from vim_input.motions import clamp_to_last_char, resolve_motion

from .core import (
    Action,
    ChangeMode,
    InsertNewline,
    MoveCursor,
    Redo,
    Undo,
    VimState,
    batch_or_single,
)


def _metadata(match, key: str) -> str:
    return str(match.action.metadata[key])


def _insert_entry_actions(context: ModeContext, entry: str) -> List[Action]:
    view = context.view
    row = view.row
    if entry == "a":
        return [MoveCursor(row, advance_chars(view.line, view.col, 1))]
    if entry == "A":
        return [MoveCursor(row, view.line_len())]
    if entry == "I":
        return [MoveCursor(row, first_non_whitespace(view.line))]
    if entry == "o":
        return [MoveCursor(row, view.line_len()), InsertNewline()]
    if entry == "O":
        return [MoveCursor(row, 0), InsertNewline(), MoveCursor(row, 0)]
    return []


def enter_insert(context: ModeContext, match) -> ModeResult:
    entry = _metadata(match, "entry")
    context.clear_pending()
    context.insert_session = InsertSession(keys=(entry,))
    actions = _insert_entry_actions(context, entry)
    actions.append(ChangeMode(VimState.INSERT))
    return ModeResult(
        action=batch_or_single(actions),
        switch_to=VimState.INSERT.value,
        status="insert",
        message=entry,
    )


def enter_visual(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return ModeResult(
        action=ChangeMode(VimState.VISUAL), switch_to=VimState.VISUAL.value
    )


def enter_command(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return ModeResult(
        action=ChangeMode(VimState.COMMAND), switch_to=VimState.COMMAND.value
    )


def move(context: ModeContext, match) -> ModeResult:
    """Resolve a motion, or hand it to the pending operator."""

    motion = _metadata(match, "motion")
    if context.pending_operator is not None:
        return OperatorPipeline.for_context(context).with_motion(motion)

    count = context.take_count()
    view = context.view
    target = resolve_motion(motion, count, view.lines, view.row, view.col)
    if target is None:
        return ModeResult(status="miss", message=motion)
    if motion == "l":
        target = clamp_to_last_char(view.lines, target)
    return ModeResult(action=MoveCursor(*target), status="motion", message=motion)


def operator(context: ModeContext, match) -> ModeResult:
    pipeline = OperatorPipeline.for_context(context)
    return pipeline.begin(Operator(_metadata(match, "operator")))


def await_char(context: ModeContext, match) -> ModeResult:
    """``f``/``F``/``r``: remember the command until its character arrives."""

    command = _metadata(match, "command")
    context.awaiting_char = command
    return ModeResult(status="awaiting_char", message=command)


def delete_char(context: ModeContext, match) -> ModeResult:
    del match
    return OperatorPipeline.for_context(context).delete_chars(context.take_count())


def paste_after(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return OperatorPipeline.for_context(context).paste(after=True)


def paste_before(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return OperatorPipeline.for_context(context).paste(after=False)


def undo(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return ModeResult(action=Undo())


def redo(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return ModeResult(action=Redo())


def repeat_last(context: ModeContext, match) -> ModeResult:
    del match
    count = context.count
    context.clear_pending()
    return OperatorPipeline.for_context(context).replay(count)


def cancel(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return ModeResult(status="cancelled")


__all__ = [
    "await_char",
    "cancel",
    "delete_char",
    "enter_command",
    "enter_insert",
    "enter_visual",
    "move",
    "operator",
    "paste_after",
    "paste_before",
    "redo",
    "repeat_last",
    "undo",
]
