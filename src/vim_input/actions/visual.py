"""Actions dedicated to Visual mode selection management."""

from __future__ import annotations

from vim_input.buffer.state import Range, normalize_range
from vim_input.modes.base_mode import InsertSession, ModeContext, ModeResult
from vim_input.motions import clamp_to_last_char, resolve_motion

from .core import Batch, ChangeMode, DeleteRange, MoveCursor, VimState


def _selection_range(context: ModeContext) -> Range:
    cursor = context.view.cursor
    anchor = context.visual_anchor or cursor
    return normalize_range(anchor, cursor)


def _yank_selection(context: ModeContext) -> Range:
    start, end = _selection_range(context)
    value = context.registers.yank(context.view.extract(start, end), linewise=False)
    context.bus.emit("register.update", value)
    context.bus.emit("visual.yank", {"text": value.text, "range": (start, end)})
    return start, end


def extend_selection(context: ModeContext, match) -> ModeResult:
    """Move the live end of the selection; the anchor stays put."""

    motion = str(match.action.metadata["motion"])
    count = context.take_count()
    view = context.view
    target = resolve_motion(motion, count, view.lines, view.row, view.col)
    if target is None:
        return ModeResult(status="miss", message=motion)
    if motion == "l":
        target = clamp_to_last_char(view.lines, target)
    context.bus.emit(
        "visual.selection", {"anchor": context.visual_anchor, "cursor": target}
    )
    return ModeResult(action=MoveCursor(*target), status="visual_select")


def delete_selection(context: ModeContext, match) -> ModeResult:
    del match
    start, end = _yank_selection(context)
    return ModeResult(
        action=Batch((DeleteRange(*start, *end), ChangeMode(VimState.NORMAL))),
        switch_to=VimState.NORMAL.value,
        status="visual_delete",
    )


def yank_selection(context: ModeContext, match) -> ModeResult:
    del match
    start, _ = _yank_selection(context)
    return ModeResult(
        action=Batch((MoveCursor(*start), ChangeMode(VimState.NORMAL))),
        switch_to=VimState.NORMAL.value,
        status="visual_yank",
    )


def change_selection(context: ModeContext, match) -> ModeResult:
    del match
    start, end = _yank_selection(context)
    context.insert_session = InsertSession(keys=("c",))
    return ModeResult(
        action=Batch((DeleteRange(*start, *end), ChangeMode(VimState.INSERT))),
        switch_to=VimState.INSERT.value,
        status="visual_change",
    )


def exit_visual(context: ModeContext, match) -> ModeResult:
    del match
    context.clear_pending()
    return ModeResult(
        action=ChangeMode(VimState.NORMAL),
        switch_to=VimState.NORMAL.value,
        status="exit_visual",
    )


__all__ = [
    "change_selection",
    "delete_selection",
    "exit_visual",
    "extend_selection",
    "yank_selection",
]
