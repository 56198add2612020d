"""Executable Textual app that hosts the input engine over a small text area."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, replace
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use vim_input.adapters.textual.app"
    ) from exc

from vim_input.actions.core import Action, Redo, Undo
from vim_input.buffer import InputBuffer
from vim_input.buffer.text import slice_bytes
from vim_input.modes.mode_manager import ModeManager
from vim_input.runtime import telemetry

from .controller import TextualUIHooks, TextualVimAdapter

DEMO_TEXT_ENV = "VIM_INPUT_DEMO_TEXT"
DEFAULT_TEXT = "hello world\nfoo bar\nbaz"


@dataclass
class UIState:
    buffer_text: str = ""
    status_text: str = ""
    command_text: str = ""


def _escape(text: str) -> str:
    return text.replace("[", r"\[")


def render_buffer(buffer: InputBuffer) -> str:
    """Buffer text with the cursor cell wrapped in reverse video markup."""

    rendered = []
    for row, line in enumerate(buffer.lines):
        if row != buffer.row:
            rendered.append(_escape(line))
            continue
        head = slice_bytes(line, 0, buffer.col)
        tail = slice_bytes(line, buffer.col)
        cell, rest = tail[:1] or " ", tail[1:]
        rendered.append(
            f"{_escape(head)}[reverse]{_escape(cell)}[/reverse]{_escape(rest)}"
        )
    return "\n".join(rendered)


class VimInputApp(App[None]):
    """Minimal Textual UI embedding the input engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, *, text: str = DEFAULT_TEXT) -> None:
        super().__init__()
        self._state = UIState()
        self._initial_text = text
        self.manager: ModeManager | None = None
        self.adapter: TextualVimAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.manager = ModeManager()
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_command=self._show_command,
            handle_event=self._handle_event,
            handle_signal=self._handle_signal,
        )
        buffer = InputBuffer(self._initial_text, name="demo")
        self.adapter = TextualVimAdapter(self.manager, hooks, buffer)

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()

    def _update_buffer(self, buffer: InputBuffer) -> None:
        self._state.buffer_text = buffer.text
        if self._buffer_widget:
            self._buffer_widget.update(render_buffer(buffer))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        if not self._command_widget:
            return
        in_command = self.manager is not None and self.manager.state().value == "command"
        self._command_widget.update(f":{command}" if in_command else "")

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "command.error" and isinstance(payload, str):
            self.bell()

    def _handle_signal(self, signal: Action) -> None:
        if isinstance(signal, (Undo, Redo)):
            self._update_status(f"{type(signal).__name__.lower()} is not supported here")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the vim input Textual demo.")
    parser.add_argument(
        "--text",
        default=os.environ.get(DEMO_TEXT_ENV, DEFAULT_TEXT),
        help=f"Initial buffer text (default: ${DEMO_TEXT_ENV} or a short sample)",
    )
    parser.add_argument(
        "--log-preset",
        choices=("development", "production", "performance"),
        default=None,
        help="telelog preset; console logging is off otherwise",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    else:
        settings = replace(telemetry.TelemetrySettings.from_env(), console=False)
        telemetry.configure(settings=settings)
    text = args.text.replace("\\n", "\n")
    app = VimInputApp(text=text)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
