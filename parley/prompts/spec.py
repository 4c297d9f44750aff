"""Prompt specifications: the declarative description of one question.

Two variants share the same engine:
  - PromptSpec: a free-text question with any validator.
  - YesNoSpec: a single-keystroke y/n question that may own an ordered
    list of child specifications, asked only after a "yes".

Specifications are built once, handed to the sequencer by reference and
filled in place: ``value`` and ``raw_input`` are set by a successful run
and untouched by rejected attempts.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from parley.prompts import validators
from parley.prompts.results import Validator


class PromptKind(StrEnum):
    TEXT = "text"
    YES_NO = "yes_no"


@dataclass(eq=False)
class PromptSpec:
    """One question and how its answer is read and validated."""

    text: str
    key: str | None = None
    default: Any = None
    strip: bool = True
    length_limit: int | None = None
    auto_submit: bool = False
    secure: bool = False
    show_correction: bool = True
    show_default_hint: bool = True
    pre_run: Callable[[], None] | None = None
    validate: Validator = validators.accept

    value: Any = field(default=None, init=False)
    raw_input: str | None = field(default=None, init=False)
    resolved: bool = field(default=False, init=False)

    kind = PromptKind.TEXT

    def __post_init__(self) -> None:
        if self.length_limit is not None and self.length_limit <= 0:
            raise ValueError(f"length_limit must be positive, got {self.length_limit}")
        if self.auto_submit and self.length_limit is None:
            raise ValueError("auto_submit requires a length_limit")

    @property
    def has_default(self) -> bool:
        return self.default is not None

    def default_hint(self) -> str:
        """Parenthetical appended to the prompt text when a default exists."""
        return f"(blank for {self.default})"

    def placeholder(self) -> str:
        """Shown faint in place of an empty answer."""
        return "" if self.default is None else str(self.default)

    @property
    def run_children(self) -> bool:
        return False


@dataclass(eq=False)
class YesNoSpec(PromptSpec):
    """A y/n question answered with one keystroke."""

    length_limit: int | None = field(default=1, init=False)
    auto_submit: bool = field(default=True, init=False)
    show_correction: bool = field(default=False, init=False)
    validate: Validator = field(default_factory=lambda: validators.yes_no, init=False)
    children: list[PromptSpec] = field(default_factory=list)

    kind = PromptKind.YES_NO

    def default_hint(self) -> str:
        return "(Y/n)" if self.default else "(y/N)"

    def placeholder(self) -> str:
        if self.default is None:
            return ""
        return "y" if self.default else "n"

    @property
    def run_children(self) -> bool:
        return self.value is True and bool(self.children)
