"""Validation outcomes.

A validator is any callable taking the (stripped) input string and
returning ``Valid`` with the final value or ``Invalid`` with a message
for the user. Validators do not raise for bad input.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Valid:
    """Accepted input, carrying the value to store."""

    value: Any


@dataclass(frozen=True)
class Invalid:
    """Rejected input, carrying the message shown before re-prompting."""

    message: str


ValidationResult = Valid | Invalid
Validator = Callable[[str], ValidationResult]
