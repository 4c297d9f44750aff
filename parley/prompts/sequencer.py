"""PromptSequencer: asks an ordered list of specs and collects the answers.

Answers are stored under each spec's ``key`` (specs without a key are
asked but not stored). A yes/no spec answered "yes" that owns children
has its entry replaced by the mapping collected from those children; a
keyless parent merges its children's answers into the current level.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from parley.prompts.engine import PromptEngine
from parley.prompts.spec import PromptSpec
from parley.terminal.adapter import TerminalAdapter

logger = logging.getLogger(__name__)


class PromptSequencer:
    """Runs PromptSpec trees through a PromptEngine."""

    def __init__(self, engine: PromptEngine) -> None:
        self._engine = engine

    def run(self, specs: Sequence[PromptSpec]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for spec in specs:
            self._engine.run(spec)
            if spec.key is not None:
                result[spec.key] = spec.value

            if spec.run_children:
                logger.info(
                    "Asking %d follow-up question(s) for %s",
                    len(spec.children),
                    spec.key or spec.text,
                )
                nested = self.run(spec.children)
                if spec.key is not None:
                    result[spec.key] = nested
                else:
                    result.update(nested)
        return result


def run_sequence(
    specs: Sequence[PromptSpec],
    adapter: TerminalAdapter | None = None,
) -> dict[str, Any]:
    """Ask ``specs`` on ``adapter`` (the process terminal by default)."""
    engine = PromptEngine(adapter or TerminalAdapter())
    return PromptSequencer(engine).run(specs)
