"""Style palette and the pure text-painting function.

Every style kind maps to a fixed (open, close) pair of SGR escape codes.
``paint`` always wraps; whether styling is appropriate for the current
terminal is decided by ``TerminalAdapter.style``.
"""

from __future__ import annotations

from enum import StrEnum


class Style(StrEnum):
    """Fixed palette of foreground/background colors plus weights."""

    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    GRAY = "gray"
    BG_BLACK = "bg_black"
    BG_RED = "bg_red"
    BG_GREEN = "bg_green"
    BG_YELLOW = "bg_yellow"
    BG_BLUE = "bg_blue"
    BG_MAGENTA = "bg_magenta"
    BG_CYAN = "bg_cyan"
    BG_GRAY = "bg_gray"
    BOLD = "bold"
    FAINT = "faint"


_FG_RESET = 39
_BG_RESET = 49
_WEIGHT_RESET = 22

# kind → (SGR open code, SGR close code)
_SGR_CODES: dict[Style, tuple[int, int]] = {
    Style.BLACK: (30, _FG_RESET),
    Style.RED: (31, _FG_RESET),
    Style.GREEN: (32, _FG_RESET),
    Style.YELLOW: (33, _FG_RESET),
    Style.BLUE: (34, _FG_RESET),
    Style.MAGENTA: (35, _FG_RESET),
    Style.CYAN: (36, _FG_RESET),
    Style.GRAY: (37, _FG_RESET),
    Style.BG_BLACK: (40, _BG_RESET),
    Style.BG_RED: (41, _BG_RESET),
    Style.BG_GREEN: (42, _BG_RESET),
    Style.BG_YELLOW: (43, _BG_RESET),
    Style.BG_BLUE: (44, _BG_RESET),
    Style.BG_MAGENTA: (45, _BG_RESET),
    Style.BG_CYAN: (46, _BG_RESET),
    Style.BG_GRAY: (47, _BG_RESET),
    Style.BOLD: (1, _WEIGHT_RESET),
    Style.FAINT: (2, _WEIGHT_RESET),
}


def paint(text: str, kind: Style | str) -> str:
    """Return ``text`` wrapped in the escape codes for ``kind``.

    Raises ValueError for an unknown style name.
    """
    opening, closing = _SGR_CODES[Style(kind)]
    return f"\x1b[{opening}m{text}\x1b[{closing}m"
