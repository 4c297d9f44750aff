"""Enums and constants for the questionnaire file schema."""

from enum import StrEnum

# Schema version — bump on breaking changes to the questionnaire format.
SCHEMA_VERSION = "0.1.0"
SUPPORTED_SCHEMA_VERSIONS = {"0.1.0"}


class QuestionType(StrEnum):
    """Which prompt variant a question becomes."""

    TEXT = "text"
    YES_NO = "yes_no"


class ValidatorName(StrEnum):
    """Built-in validators a question can name."""

    ACCEPT = "accept"
    PROJECT_NAME = "project_name"
    EMAIL = "email"
    INTEGER = "integer"
    CHOICE = "choice"
    PATTERN = "pattern"
    MIN_LENGTH = "min_length"


class DefaultTransform(StrEnum):
    """How a value copied via default_from is reshaped."""

    NONE = "none"
    LOWER = "lower"
    UPPER = "upper"
    SNAKE = "snake"
