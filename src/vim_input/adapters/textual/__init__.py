"""Textual host integration."""

from .controller import TextualUIHooks, TextualVimAdapter, translate_key

__all__ = ["TextualUIHooks", "TextualVimAdapter", "translate_key"]
