"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from vim_input.keymaps import KeymapResolver, ResolutionMatch
from vim_input.runtime import telemetry

from .base_mode import ModeContext, ModeResult


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def allowed_while_operator_pending(match: ResolutionMatch) -> bool:
    return bool(match.action.metadata.get("operator_pending", False))


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)

    if isinstance(outcome, ModeResult):
        return outcome
    return ModeResult()


__all__ = [
    "allowed_while_operator_pending",
    "execute_match",
    "require_keymap_resolver",
]
