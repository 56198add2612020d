"""Modes, the operator pipeline and the manager that dispatches between them."""

from .base_mode import (
    InsertSession,
    KeyInput,
    Mode,
    ModeBus,
    ModeContext,
    ModeResult,
    Operator,
    PendingOperator,
    RecordedCommand,
)
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .command_mode import CommandMode
from .operator_pipeline import OperatorPipeline
from .mode_manager import ModeManager

__all__ = [
    "InsertSession",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "Operator",
    "PendingOperator",
    "RecordedCommand",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "CommandMode",
    "OperatorPipeline",
    "ModeManager",
]
