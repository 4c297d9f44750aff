"""Built-in validators.

Plain validators (``accept``, ``yes_no``, ``project_name``, ``email``) are
used directly; the others are factories returning a configured validator.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from parley.prompts.results import Invalid, Valid, ValidationResult, Validator

_WHITESPACE_RUN_RE = re.compile(r"\s+")
_PROJECT_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s.]+(\.[^@\s.]+)+")


def accept(text: str) -> ValidationResult:
    return Valid(text)


def yes_no(text: str) -> ValidationResult:
    """Map y/Y to True and n/N to False."""
    if text in ("y", "Y"):
        return Valid(True)
    if text in ("n", "N"):
        return Valid(False)
    return Invalid("Please answer y or n.")


def project_name(text: str) -> ValidationResult:
    """Join words with dashes; allow only letters, digits, '-' and '_'."""
    name = _WHITESPACE_RUN_RE.sub("-", text)
    if not _PROJECT_NAME_RE.fullmatch(name):
        return Invalid(
            "Names may only contain letters, digits, dashes and underscores."
        )
    return Valid(name)


def email(text: str) -> ValidationResult:
    if not _EMAIL_RE.fullmatch(text):
        return Invalid(f"'{text}' doesn't look like an email address.")
    return Valid(text)


def integer(minimum: int | None = None, maximum: int | None = None) -> Validator:
    """Parse a base-10 integer within optional inclusive bounds."""

    def validate(text: str) -> ValidationResult:
        try:
            number = int(text, 10)
        except ValueError:
            return Invalid(f"'{text}' is not a whole number.")
        if minimum is not None and number < minimum:
            return Invalid(f"Must be at least {minimum}.")
        if maximum is not None and number > maximum:
            return Invalid(f"Must be at most {maximum}.")
        return Valid(number)

    return validate


def choice(options: Sequence[str]) -> Validator:
    """Case-insensitive membership, returning the option as spelled in ``options``."""
    canonical = {option.lower(): option for option in options}

    def validate(text: str) -> ValidationResult:
        match = canonical.get(text.lower())
        if match is None:
            return Invalid(f"Choose one of: {', '.join(options)}.")
        return Valid(match)

    return validate


def pattern(regex: str, message: str | None = None) -> Validator:
    compiled = re.compile(regex)

    def validate(text: str) -> ValidationResult:
        if not compiled.fullmatch(text):
            return Invalid(message or f"'{text}' does not match {regex}.")
        return Valid(text)

    return validate


def min_length(length: int) -> Validator:
    def validate(text: str) -> ValidationResult:
        if len(text) < length:
            return Invalid(f"Must be at least {length} characters long.")
        return Valid(text)

    return validate
