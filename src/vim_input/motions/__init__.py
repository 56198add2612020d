"""Cursor motions over UTF-8 byte offsets."""

from .resolver import (
    MOTIONS,
    clamp_to_last_char,
    resolve_find,
    resolve_motion,
)
from .words import word_backward, word_end, word_forward

__all__ = [
    "MOTIONS",
    "clamp_to_last_char",
    "resolve_find",
    "resolve_motion",
    "word_backward",
    "word_end",
    "word_forward",
]
