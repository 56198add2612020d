"""Insert-mode keymap handlers for the non-text keys."""

from __future__ import annotations

from vim_input.modes.base_mode import InsertSession, ModeContext, ModeResult

from .core import Backspace, ChangeMode, InsertNewline, VimState


def _session(context: ModeContext) -> InsertSession:
    if context.insert_session is None:
        context.insert_session = InsertSession()
    return context.insert_session


def exit_insert(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        action=ChangeMode(VimState.NORMAL),
        switch_to=VimState.NORMAL.value,
        status="exit_insert",
    )


def backspace(context: ModeContext, match) -> ModeResult:
    del match
    _session(context).typed.append("\b")
    return ModeResult(action=Backspace(), status="insert")


def newline(context: ModeContext, match) -> ModeResult:
    del match
    _session(context).typed.append("\n")
    return ModeResult(action=InsertNewline(), status="insert")


__all__ = ["backspace", "exit_insert", "newline"]
