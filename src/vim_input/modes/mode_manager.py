"""Mode manager coordinating the Normal/Insert/Visual/Command modes."""

from __future__ import annotations

from typing import Dict, Optional, Sequence, Type

from vim_input.actions.core import NO_OP, Action, VimState
from vim_input.buffer.registers import Register
from vim_input.buffer.state import BufferView, Cursor
from vim_input.keymaps import KeymapRegistry, KeymapResolver
from vim_input.keymaps.defaults import load_default_keymaps
from vim_input.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, RecordedCommand
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .visual_mode import VisualMode

DEFAULT_MODES: tuple[Type[Mode], ...] = (NormalMode, InsertMode, VisualMode, CommandMode)


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    ``handle_key`` is the whole contract with a host: it receives one key
    together with a snapshot of the buffer and returns the single
    :class:`Action` the host should apply. The engine never mutates text
    itself.
    """

    def __init__(
        self,
        context: ModeContext | None = None,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        register_defaults: bool = True,
    ) -> None:
        self.context = context or ModeContext()
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.logger = telemetry.get_logger("vim_input.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vim_input.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vim_input.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)
        if register_defaults:
            for mode_cls in DEFAULT_MODES:
                self.register_mode(mode_cls)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": name})
        self.context.bus.emit("mode.switch", name)

    def handle_key(
        self,
        key: str,
        ctrl: bool = False,
        lines: Sequence[str] = ("",),
        cursor_row: int = 0,
        cursor_col: int = 0,
    ) -> Action:
        """Process one key against the given buffer snapshot.

        Out-of-range cursors are clamped; an empty ``key`` is ignored.
        """

        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        if not key:
            return NO_OP

        key_input = KeyInput.from_raw(key, ctrl)
        self.context.view = BufferView.build(lines, cursor_row, cursor_col)
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key_input.token, "mode": mode.name},
        ):
            result = mode.handle_key(key_input)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> Action:
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result.action

    # accessors

    def state(self) -> VimState:
        return VimState(self._active or VimState.NORMAL.value)

    @property
    def command_buffer(self) -> str:
        return self.context.command_text

    @property
    def register(self) -> str:
        return self.context.registers.text

    @property
    def register_linewise(self) -> bool:
        return self.context.registers.linewise

    @property
    def registers(self) -> Register:
        return self.context.registers

    @property
    def visual_anchor(self) -> Optional[Cursor]:
        return self.context.visual_anchor

    @property
    def paste_mode(self) -> bool:
        return self.context.paste_mode

    @property
    def last_command(self) -> Optional[RecordedCommand]:
        return self.context.last_command


__all__ = ["DEFAULT_MODES", "ModeManager"]
