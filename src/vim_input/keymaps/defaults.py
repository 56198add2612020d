"""Built-in keymaps that seed each mode with the standard Vi keys."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from vim_input.actions import command as command_actions
from vim_input.actions import editing as editing_actions
from vim_input.actions import insert as insert_actions
from vim_input.actions import visual as visual_actions

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

# (action suffix, keys, description)
MOTION_KEYS: tuple[tuple[str, tuple[str, ...], str], ...] = (
    ("left", ("h",), "Move left"),
    ("right", ("l",), "Move right"),
    ("line_start", ("0",), "Move to column 0"),
    ("first_non_blank", ("^",), "Move to the first non-blank character"),
    ("line_end", ("$",), "Move to the last character"),
    ("word_forward", ("w",), "Move to the next word"),
    ("word_backward", ("b",), "Move to the previous word"),
    ("word_end", ("e",), "Move to the end of the word"),
    ("down", ("j",), "Move down"),
    ("up", ("k",), "Move up"),
    ("first_line", ("g", "g"), "Move to the first line"),
    ("last_line", ("G",), "Move to the last line"),
)

INSERT_ENTRIES: tuple[tuple[str, str, str], ...] = (
    ("insert_before", "i", "Insert before the cursor"),
    ("append", "a", "Append after the cursor"),
    ("append_line", "A", "Append at the end of the line"),
    ("insert_line_start", "I", "Insert at the first non-blank character"),
    ("open_below", "o", "Open a line below"),
    ("open_above", "O", "Open a line above"),
)

OPERATORS: tuple[tuple[str, str, str], ...] = (
    ("delete", "d", "Delete operator"),
    ("change", "c", "Change operator"),
    ("yank", "y", "Yank operator"),
)


def _motion_actions(mode: str, handler) -> tuple[ActionRef, ...]:
    return tuple(
        ActionRef(
            id=f"{mode}.motion.{suffix}",
            handler=handler,
            description=description,
            metadata={"motion": "".join(keys), "operator_pending": True},
        )
        for suffix, keys, description in MOTION_KEYS
    )


def _motion_bindings(mode: str) -> tuple[Binding, ...]:
    return tuple(
        Binding(
            id=f"{mode}.motion.{suffix}",
            mode=mode,
            sequence=KeySequence.from_strings(*keys),
            action_id=f"{mode}.motion.{suffix}",
            description=description,
            tags=("motion",),
        )
        for suffix, keys, description in MOTION_KEYS
    )


def _bind(
    binding_id: str, mode: str, keys: Sequence[str], action_id: str, description: str
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys),
        action_id=action_id,
        description=description,
    )


DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    *(
        ActionRef(
            id=f"normal.{suffix}",
            handler=editing_actions.enter_insert,
            description=description,
            metadata={"entry": key},
        )
        for suffix, key, description in INSERT_ENTRIES
    ),
    ActionRef(
        id="normal.enter_visual",
        handler=editing_actions.enter_visual,
        description="Enter visual mode",
    ),
    ActionRef(
        id="normal.enter_command",
        handler=editing_actions.enter_command,
        description="Enter command-line mode",
    ),
    *_motion_actions("normal", editing_actions.move),
    *(
        ActionRef(
            id=f"normal.operator.{suffix}",
            handler=editing_actions.operator,
            description=description,
            metadata={"operator": key, "operator_pending": True},
        )
        for suffix, key, description in OPERATORS
    ),
    ActionRef(
        id="normal.find_forward",
        handler=editing_actions.await_char,
        description="Find a character forward on the line",
        metadata={"command": "f", "operator_pending": True},
    ),
    ActionRef(
        id="normal.find_backward",
        handler=editing_actions.await_char,
        description="Find a character backward on the line",
        metadata={"command": "F", "operator_pending": True},
    ),
    ActionRef(
        id="normal.replace_char",
        handler=editing_actions.await_char,
        description="Replace the character under the cursor",
        metadata={"command": "r"},
    ),
    ActionRef(
        id="normal.delete_char",
        handler=editing_actions.delete_char,
        description="Delete characters under the cursor",
    ),
    ActionRef(
        id="normal.paste_after",
        handler=editing_actions.paste_after,
        description="Paste after the cursor",
    ),
    ActionRef(
        id="normal.paste_before",
        handler=editing_actions.paste_before,
        description="Paste before the cursor",
    ),
    ActionRef(
        id="normal.undo",
        handler=editing_actions.undo,
        description="Signal undo",
    ),
    ActionRef(
        id="normal.redo",
        handler=editing_actions.redo,
        description="Signal redo",
        metadata={"operator_pending": True},
    ),
    ActionRef(
        id="normal.repeat",
        handler=editing_actions.repeat_last,
        description="Repeat the last change",
    ),
    ActionRef(
        id="normal.cancel",
        handler=editing_actions.cancel,
        description="Clear pending counts and operators",
    ),
    ActionRef(
        id="insert.exit",
        handler=insert_actions.exit_insert,
        description="Return to normal mode",
    ),
    ActionRef(
        id="insert.backspace",
        handler=insert_actions.backspace,
        description="Delete the character before the cursor",
    ),
    ActionRef(
        id="insert.newline",
        handler=insert_actions.newline,
        description="Split the line at the cursor",
    ),
    *_motion_actions("visual", visual_actions.extend_selection),
    ActionRef(
        id="visual.delete_selection",
        handler=visual_actions.delete_selection,
        description="Delete current selection",
    ),
    ActionRef(
        id="visual.yank_selection",
        handler=visual_actions.yank_selection,
        description="Yank current visual selection",
    ),
    ActionRef(
        id="visual.change_selection",
        handler=visual_actions.change_selection,
        description="Change current selection",
    ),
    ActionRef(
        id="visual.exit",
        handler=visual_actions.exit_visual,
        description="Return to normal mode",
    ),
    ActionRef(
        id="command.submit_line",
        handler=command_actions.submit_command_line,
        description="Evaluate the active command line",
    ),
    ActionRef(
        id="command.backspace",
        handler=command_actions.backspace,
        description="Delete the last command-line character",
    ),
    ActionRef(
        id="command.cancel",
        handler=command_actions.cancel,
        description="Cancel the command line",
    ),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    *(
        _bind(f"normal.{suffix}", "normal", (key,), f"normal.{suffix}", description)
        for suffix, key, description in INSERT_ENTRIES
    ),
    _bind("normal.enter_visual", "normal", ("v",), "normal.enter_visual", "Enter visual mode"),
    _bind(
        "normal.enter_command",
        "normal",
        (":",),
        "normal.enter_command",
        "Enter command-line mode",
    ),
    *_motion_bindings("normal"),
    *(
        _bind(
            f"normal.operator.{suffix}",
            "normal",
            (key,),
            f"normal.operator.{suffix}",
            description,
        )
        for suffix, key, description in OPERATORS
    ),
    _bind("normal.find_forward", "normal", ("f",), "normal.find_forward", "Find forward"),
    _bind("normal.find_backward", "normal", ("F",), "normal.find_backward", "Find backward"),
    _bind("normal.replace_char", "normal", ("r",), "normal.replace_char", "Replace char"),
    _bind("normal.delete_char", "normal", ("x",), "normal.delete_char", "Delete char"),
    _bind("normal.paste_after", "normal", ("p",), "normal.paste_after", "Paste after"),
    _bind("normal.paste_before", "normal", ("P",), "normal.paste_before", "Paste before"),
    _bind("normal.undo", "normal", ("u",), "normal.undo", "Undo"),
    _bind("normal.redo", "normal", ("ctrl+r",), "normal.redo", "Redo"),
    _bind("normal.redo_shift", "normal", ("ctrl+R",), "normal.redo", "Redo"),
    _bind("normal.repeat", "normal", (".",), "normal.repeat", "Repeat last change"),
    _bind("normal.cancel_escape", "normal", ("escape",), "normal.cancel", "Cancel"),
    _bind("normal.cancel_ctrl_bracket", "normal", ("ctrl+[",), "normal.cancel", "Cancel"),
    _bind("insert.exit_escape", "insert", ("escape",), "insert.exit", "Leave insert mode"),
    _bind(
        "insert.exit_ctrl_bracket", "insert", ("ctrl+[",), "insert.exit", "Leave insert mode"
    ),
    _bind("insert.exit_ctrl_c", "insert", ("ctrl+c",), "insert.exit", "Leave insert mode"),
    _bind("insert.backspace", "insert", ("backspace",), "insert.backspace", "Backspace"),
    _bind("insert.newline", "insert", ("enter",), "insert.newline", "New line"),
    *_motion_bindings("visual"),
    _bind(
        "visual.delete_selection",
        "visual",
        ("d",),
        "visual.delete_selection",
        "Delete the current selection",
    ),
    _bind(
        "visual.delete_selection_x",
        "visual",
        ("x",),
        "visual.delete_selection",
        "Delete the current selection",
    ),
    _bind(
        "visual.yank_selection",
        "visual",
        ("y",),
        "visual.yank_selection",
        "Yank the current selection",
    ),
    _bind(
        "visual.change_selection",
        "visual",
        ("c",),
        "visual.change_selection",
        "Change the current selection",
    ),
    _bind("visual.exit_escape", "visual", ("escape",), "visual.exit", "Leave visual mode"),
    _bind(
        "visual.exit_ctrl_bracket", "visual", ("ctrl+[",), "visual.exit", "Leave visual mode"
    ),
    _bind("visual.exit_v", "visual", ("v",), "visual.exit", "Leave visual mode"),
    _bind(
        "command.submit_enter",
        "command",
        ("enter",),
        "command.submit_line",
        "Submit the command line",
    ),
    _bind(
        "command.backspace",
        "command",
        ("backspace",),
        "command.backspace",
        "Delete the last character",
    ),
    _bind("command.exit_escape", "command", ("escape",), "command.cancel", "Cancel"),
    _bind("command.exit_ctrl_bracket", "command", ("ctrl+[",), "command.cancel", "Cancel"),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_actions: Sequence[str] | None = None,
    exclude_actions: Sequence[str] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    per_mode_overrides: Mapping[str, Iterable[Binding]] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode.

    Bindings whose action was filtered out are skipped as well.
    """

    allowed_actions = _build_filters(include_actions, exclude_actions)
    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for action in DEFAULT_ACTIONS:
        if not _selected(action.id, allowed_actions):
            continue
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        if not registry.has_action(binding.action_id):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)

    if per_mode_overrides:
        for mode, bindings in per_mode_overrides.items():
            for binding in bindings:
                if binding.mode != mode:
                    raise ValueError(
                        f"Override binding '{binding.id}' must target mode '{mode}'"
                    )
                registry.register_binding(binding, replace=True)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "INSERT_ENTRIES",
    "MOTION_KEYS",
    "OPERATORS",
    "load_default_keymaps",
]
