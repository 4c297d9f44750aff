"""Terminal access: interactivity, raw reads, and styling."""

from parley.terminal.adapter import NO_COLOR_ENV, NONINTERACTIVE_ENV, TerminalAdapter
from parley.terminal.styles import Style, paint

__all__ = [
    "NONINTERACTIVE_ENV",
    "NO_COLOR_ENV",
    "Style",
    "TerminalAdapter",
    "paint",
]
