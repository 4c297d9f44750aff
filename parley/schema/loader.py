"""Read questionnaire YAML files and explain what is wrong with them.

Validation problems are reported against the question they belong to,
named by its ``key`` (or its text when it has none), rather than by raw
list positions::

    Validation errors in setup.yaml:
      question 'error_reporting' → question 'token' → validator: ...
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from parley.schema.config import QuestionnaireConfig

logger = logging.getLogger(__name__)

QUESTIONNAIRE_SUFFIXES = (".yaml", ".yml")
# Keys whose list items are questions.
_QUESTION_LISTS = ("questions", "children")


class ConfigError(Exception):
    """Raised when a questionnaire file cannot be loaded or validated."""


def load_questionnaire(path: str | Path) -> QuestionnaireConfig:
    """Read a YAML questionnaire and return a validated QuestionnaireConfig.

    Raises ConfigError with a human-readable message on failure.
    """
    path = Path(path)
    data = _read_document(path)
    try:
        config = QuestionnaireConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(_explain(path, data, exc)) from exc
    logger.info(
        "Loaded questionnaire %s (%d questions)",
        path,
        sum(1 for _ in config.walk()),
    )
    return config


def _read_document(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ConfigError(f"Questionnaire file not found: {path}")
    if path.suffix not in QUESTIONNAIRE_SUFFIXES:
        raise ConfigError(f"Expected .yaml or .yml file, got: {path.suffix}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(
            f"Expected a mapping of questionnaire fields in {path.name}, "
            f"got {type(data).__name__}"
        )
    return data


def _explain(path: Path, data: dict[str, Any], exc: ValidationError) -> str:
    lines = [f"Validation errors in {path.name}:"]
    for err in exc.errors():
        where = describe_location(data, err["loc"])
        lines.append(f"  {where}: {err['msg']}" if where else f"  {err['msg']}")
    return "\n".join(lines)


def describe_location(data: Any, loc: Sequence[str | int]) -> str:
    """Render a pydantic error location in terms of the questions it crosses.

    ``("questions", 2, "children", 0, "validator")`` becomes
    ``question 'error_reporting' → question 'email' → validator``.
    """
    parts: list[str] = []
    node = data
    index = 0
    while index < len(loc):
        part = loc[index]
        item = _child(node, part)
        following = loc[index + 1] if index + 1 < len(loc) else None
        if part in _QUESTION_LISTS and isinstance(following, int):
            question = _child(item, following)
            parts.append(_question_label(question, following))
            node = question
            index += 2
            continue
        parts.append(str(part))
        node = item
        index += 1
    return " → ".join(parts)


def _child(node: Any, part: str | int) -> Any:
    if isinstance(node, dict):
        return node.get(part)
    if isinstance(node, list) and isinstance(part, int) and 0 <= part < len(node):
        return node[part]
    return None


def _question_label(question: Any, position: int) -> str:
    if isinstance(question, dict):
        for field in ("key", "text"):
            label = question.get(field)
            if isinstance(label, str) and label.strip():
                return f"question '{label.strip()}'"
    return f"question #{position + 1}"
