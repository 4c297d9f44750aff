"""PromptEngine: runs one PromptSpec until it yields a value.

Flow per attempt:
1. Run the spec's pre_run hook (it may recompute ``default``).
2. Render the prompt text (bold, with an optional default hint).
3. Read a line through the LineReader.
4. Empty answer: take the default verbatim, or warn and ask again.
5. Strip (if enabled); an all-whitespace answer warns and asks again.
6. Validate; a rejection prints the validator's message and asks again.
7. Optionally announce that the answer was corrected.

Rejected attempts leave the spec untouched. Retries loop rather than
recurse, so repeated bad input never grows the stack.
"""

from __future__ import annotations

import logging
from typing import Any

from parley.prompts.results import Invalid
from parley.prompts.spec import PromptSpec
from parley.reader.line_reader import LineReader, ReaderConfig
from parley.terminal.adapter import TerminalAdapter
from parley.terminal.styles import Style

logger = logging.getLogger(__name__)

BLANK_WARNING = "Please enter a value."
WHITESPACE_WARNING = "Please enter a value, or leave it blank to use the default."
CORRECTION_NOTICE = "fixed that for ya: {value}"


class InputExhaustedError(EOFError):
    """Input ended while a prompt still needed an answer."""


def render_prompt(spec: PromptSpec) -> str:
    """Return the unstyled prompt line for ``spec``, ending in one space."""
    text = spec.text.rstrip()
    terminator = ":"
    if text.endswith(("?", ":")):
        terminator = "?" if text.endswith("?") else ":"
        text = text[:-1]
    if spec.has_default and spec.show_default_hint:
        text = f"{text} {spec.default_hint()}"
    return f"{text}{terminator} "


class PromptEngine:
    """Asks questions described by PromptSpecs."""

    def __init__(
        self,
        adapter: TerminalAdapter,
        reader: LineReader | None = None,
    ) -> None:
        self._adapter = adapter
        self._reader = reader or LineReader(adapter)

    def run(self, spec: PromptSpec) -> Any:
        """Ask ``spec`` until it resolves, store the result on it, and return it."""
        while True:
            if spec.pre_run is not None:
                spec.pre_run()

            self._adapter.write(self._adapter.style(render_prompt(spec), Style.BOLD))
            raw = self._reader.read(
                ReaderConfig(
                    length_limit=spec.length_limit,
                    auto_submit=spec.auto_submit,
                    secure=spec.secure,
                    placeholder=spec.placeholder(),
                )
            )

            if not raw:
                if spec.has_default:
                    self._resolve(spec, spec.default, raw)
                    return spec.value
                self._retry(spec, BLANK_WARNING, Style.YELLOW, "blank")
                continue

            answer = raw.strip() if spec.strip else raw
            if not answer:
                self._retry(spec, WHITESPACE_WARNING, Style.YELLOW, "whitespace")
                continue

            result = spec.validate(answer)
            if isinstance(result, Invalid):
                self._retry(spec, result.message, Style.RED, "rejected")
                continue

            self._resolve(spec, result.value, raw)
            # Secure answers are never echoed back.
            if spec.show_correction and not spec.secure and (
                str(spec.value) != answer or answer != raw
            ):
                notice = CORRECTION_NOTICE.format(value=spec.value)
                self._adapter.write(self._adapter.style(notice, Style.FAINT) + "\n")
            return spec.value

    def _resolve(self, spec: PromptSpec, value: Any, raw: str) -> None:
        spec.value = value
        spec.raw_input = raw
        spec.resolved = True
        if spec.secure:
            logger.info("Resolved %s (secure)", spec.key or spec.text)
        else:
            logger.info("Resolved %s = %r", spec.key or spec.text, value)

    def _retry(self, spec: PromptSpec, message: str, kind: Style, reason: str) -> None:
        """Report a failed attempt; raise if no further input can arrive."""
        logger.debug("Attempt at %s failed: %s", spec.key or spec.text, reason)
        self._adapter.write(self._adapter.style(message, kind) + "\n")
        if self._reader.exhausted:
            raise InputExhaustedError(
                f"Input ended before '{spec.text.strip()}' was answered"
            )
