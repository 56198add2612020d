"""Actions that edit and evaluate Ex-style command lines."""

from __future__ import annotations

from functools import partial
from typing import Callable, Dict

from vim_input.modes.base_mode import ModeContext, ModeResult

from .core import (
    Action,
    ChangeMode,
    ClearInput,
    CommandOutput,
    Submit,
    VimState,
)

CommandHandler = Callable[[ModeContext], ModeResult]

_NORMAL = VimState.NORMAL.value


def submit_command_line(context: ModeContext, match) -> ModeResult:
    """Run the typed line against the command table and return to Normal."""

    del match
    text = context.command_text.strip()
    context.command_line.clear()
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(
            action=ChangeMode(VimState.NORMAL),
            switch_to=_NORMAL,
            status="command_empty",
        )
    handler = _COMMAND_HANDLERS.get(text)
    if handler is None:
        return _unknown_command(context, text)
    return handler(context)


def backspace(context: ModeContext, match) -> ModeResult:
    del match
    if context.command_line:
        context.command_line.pop()
        return ModeResult(status="editing", message=context.command_text)
    return cancel(context, None)


def cancel(context: ModeContext, match) -> ModeResult:
    del match
    context.command_line.clear()
    return ModeResult(
        action=ChangeMode(VimState.NORMAL),
        switch_to=_NORMAL,
        status="command_cancel",
    )


def _unknown_command(context: ModeContext, command: str) -> ModeResult:
    context.bus.emit("command.error", command)
    return ModeResult(
        action=CommandOutput(f"Unknown command: {command}"),
        switch_to=_NORMAL,
        status="command_error",
        message=command,
    )


def _emit(context: ModeContext, action: Action) -> ModeResult:
    del context
    return ModeResult(action=action, switch_to=_NORMAL, status="command_submit")


def _set_paste(context: ModeContext, enabled: bool) -> ModeResult:
    context.paste_mode = enabled
    message = "Paste mode ON" if enabled else "Paste mode OFF"
    return ModeResult(
        action=CommandOutput(message),
        switch_to=_NORMAL,
        status="command_submit",
        message=message,
    )


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "w": partial(_emit, action=Submit()),
    "q": partial(_emit, action=ClearInput()),
    "wq": partial(_emit, action=Submit()),
    "set paste": partial(_set_paste, enabled=True),
    "set nopaste": partial(_set_paste, enabled=False),
}


__all__ = ["backspace", "cancel", "submit_command_line"]
