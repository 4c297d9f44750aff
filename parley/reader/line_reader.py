"""LineReader: one line of input, read character by character.

Per character:
  - CR / LF end the line.
  - Ctrl-C writes a newline and exits the process.
  - Backspace / DEL drop the last buffered character and erase one column.
  - ESC starts an escape sequence (arrow/function keys) that is drained
    and discarded; nothing reaches the buffer or the display.
  - Non-printable characters are ignored.
  - Printable characters are buffered up to ``length_limit`` and echoed
    (as ``SECURE_GLYPH`` when ``secure``). With ``auto_submit`` the line
    ends as soon as the limit is reached.

End of input ends the line as well and marks the reader exhausted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from parley.terminal.adapter import TerminalAdapter
from parley.terminal.styles import Style

logger = logging.getLogger(__name__)

CARRIAGE_RETURN = "\r"
LINE_FEED = "\n"
INTERRUPT = "\x03"  # ETX, Ctrl-C
BACKSPACE = "\b"
DELETE = "\x7f"
ESCAPE = "\x1b"

SECURE_GLYPH = "*"
ERASE_ONE_COLUMN = "\b \b"
INTERRUPT_EXIT_CODE = 130


@dataclass(frozen=True)
class ReaderConfig:
    """How a single line should be read and echoed."""

    length_limit: int | None = None
    auto_submit: bool = False
    secure: bool = False
    placeholder: str = ""  # Shown faint when the line is submitted empty.


class LineReader:
    """Reads lines through a TerminalAdapter."""

    def __init__(self, adapter: TerminalAdapter) -> None:
        self._adapter = adapter
        self.exhausted = False

    def read(self, config: ReaderConfig | None = None) -> str:
        """Read one line and return the buffered characters."""
        config = config or ReaderConfig()
        buffer: list[str] = []

        while True:
            char = self._adapter.read_char()

            if char == "":
                self.exhausted = True
                break
            if char in (CARRIAGE_RETURN, LINE_FEED):
                break
            if char == INTERRUPT:
                self._adapter.write("\n")
                raise SystemExit(INTERRUPT_EXIT_CODE)
            if char in (BACKSPACE, DELETE):
                if buffer:
                    buffer.pop()
                    self._adapter.write(ERASE_ONE_COLUMN)
                continue
            if char == ESCAPE:
                self._discard_escape_sequence()
                continue
            if not char.isprintable():
                continue

            limit = config.length_limit
            if limit is None or len(buffer) < limit:
                buffer.append(char)
                self._adapter.write(SECURE_GLYPH if config.secure else char)
                if config.auto_submit and len(buffer) == limit:
                    break

        if not buffer and config.placeholder:
            self._adapter.write(self._adapter.style(config.placeholder, Style.FAINT))
        self._adapter.write("\n")
        return "".join(buffer)

    def _discard_escape_sequence(self) -> None:
        if self._adapter.is_interactive():
            # Arrow and function keys arrive as ESC plus two more characters.
            self._adapter.read_char()
            self._adapter.read_char()
            return
        # Piped input: take whatever follows without waiting for more.
        drained = self._adapter.read_nonblocking(3) or self._adapter.read_nonblocking(2)
        logger.debug("Discarded escape sequence (%d trailing chars)", len(drained))
