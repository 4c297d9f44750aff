"""TerminalAdapter: the only place that touches the terminal device.

Responsibilities:
  - Interactivity detection (real TTY on both ends, no override set).
  - Single-character reads: raw mode when interactive, a plain read
    otherwise so piped transcripts replay deterministically.
  - Non-blocking reads used to drain escape sequences.
  - Style gating on top of the pure ``paint`` function.
  - A bounded single-key wait.

Raw mode is held only for the duration of one read and is always restored
on the way out, so nothing that runs after a read (validation, output)
can leave the terminal raw.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import sys
import termios
import tty
from collections.abc import Iterator, Mapping
from contextlib import contextmanager, nullcontext
from typing import TextIO

from parley.terminal.styles import Style, paint

logger = logging.getLogger(__name__)

# Forces non-interactive reads and disables styling.
NONINTERACTIVE_ENV = "PARLEY_NONINTERACTIVE"
# Disables styling only (https://no-color.org).
NO_COLOR_ENV = "NO_COLOR"


class TerminalAdapter:
    """Wraps an input/output stream pair with terminal-aware behavior."""

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout
        self._environ = environ if environ is not None else os.environ

    # ── Detection ───────────────────────────────────────────────────

    def is_interactive(self) -> bool:
        """True when input and output are both a TTY and no override is set."""
        if NONINTERACTIVE_ENV in self._environ:
            return False
        return _isatty(self._stdin) and _isatty(self._stdout)

    def styling_enabled(self) -> bool:
        return self.is_interactive() and NO_COLOR_ENV not in self._environ

    # ── Output ──────────────────────────────────────────────────────

    def style(self, text: str, kind: Style | str) -> str:
        """Return ``text`` styled as ``kind``, or unchanged when styling is off."""
        if not self.styling_enabled():
            return text
        return paint(text, kind)

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    # ── Input ───────────────────────────────────────────────────────

    def read_char(self) -> str:
        """Block until one character is available and return it.

        Returns "" at end of input.
        """
        fd = self._fileno()
        if fd is None:
            return self._stdin.read(1)
        if self.is_interactive():
            with self.raw_mode(fd):
                return _read_fd_char(fd)
        return _read_fd_char(fd)

    def read_nonblocking(self, n: int) -> str:
        """Read up to ``n`` characters if they are already available.

        Never blocks and never raises: no data, end of input and streams
        that cannot be polled all yield "".
        """
        fd = self._fileno()
        if fd is None:
            # In-memory streams cannot block.
            try:
                return self._stdin.read(n)
            except (OSError, ValueError):
                return ""
        chars: list[str] = []
        try:
            # Whole characters only: a multibyte character is never split.
            while len(chars) < n:
                ready, _, _ = select.select([fd], [], [], 0)
                if not ready:
                    break
                char = _read_fd_char(fd)
                if not char:
                    break
                chars.append(char)
        except (OSError, ValueError):
            pass
        return "".join(chars)

    def wait_for_key(self, timeout: float) -> str | None:
        """Wait up to ``timeout`` seconds for a single key press.

        Returns the key, or None if the time elapsed first or the input
        cannot be waited on. Callers replaying piped input should not
        wait at all, since the "key" would be the first byte of an answer.
        """
        fd = self._fileno()
        if fd is None:
            return None
        try:
            with self.raw_mode(fd) if self.is_interactive() else nullcontext():
                ready, _, _ = select.select([fd], [], [], timeout)
                if not ready:
                    return None
                key = _read_fd_char(fd)
        except (OSError, ValueError) as exc:
            logger.debug("Key wait unavailable: %s", exc)
            return None
        return key or None

    @contextmanager
    def raw_mode(self, fd: int) -> Iterator[None]:
        """Put ``fd`` into raw mode for the duration of the block."""
        saved = termios.tcgetattr(fd)
        # TCSANOW: switching with TCSAFLUSH would drop typed-ahead input.
        tty.setraw(fd, termios.TCSANOW)
        try:
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSANOW, saved)

    def _fileno(self) -> int | None:
        try:
            return self._stdin.fileno()
        except (AttributeError, OSError, ValueError):
            return None


def _isatty(stream: TextIO) -> bool:
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


def _read_fd_char(fd: int) -> str:
    """Read bytes from ``fd`` one at a time until they decode to a character."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    while True:
        data = os.read(fd, 1)
        if not data:
            return decoder.decode(b"", final=True)
        char = decoder.decode(data)
        if char:
            return char
