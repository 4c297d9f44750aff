"""Turn a validated QuestionnaireConfig into a PromptSpec tree.

``default_from`` becomes a pre_run hook: right before the question is
rendered, the referenced question's answer (reshaped by
``default_transform``) is copied into ``default``. A referenced question
that was never asked (e.g. it sits under a "no" answer) leaves the
default unset.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from parley.prompts import validators
from parley.prompts.results import Validator
from parley.prompts.spec import PromptSpec, YesNoSpec
from parley.schema.config import QuestionnaireConfig, QuestionSpec, ValidatorSpec
from parley.schema.defaults import DefaultTransform, QuestionType, ValidatorName

_SEPARATOR_RE = re.compile(r"[\s-]+")


def build_prompts(config: QuestionnaireConfig) -> list[PromptSpec]:
    registry: dict[str, PromptSpec] = {}
    return [_build(question, registry) for question in config.questions]


def make_validator(spec: ValidatorSpec | None) -> Validator:
    """Return the built-in validator described by ``spec``."""
    if spec is None or spec.name == ValidatorName.ACCEPT:
        return validators.accept
    if spec.name == ValidatorName.PROJECT_NAME:
        return validators.project_name
    if spec.name == ValidatorName.EMAIL:
        return validators.email
    if spec.name == ValidatorName.INTEGER:
        return validators.integer(spec.minimum, spec.maximum)
    if spec.name == ValidatorName.CHOICE:
        return validators.choice(spec.choices)
    if spec.name == ValidatorName.PATTERN:
        return validators.pattern(spec.pattern or "", spec.message)
    if spec.name == ValidatorName.MIN_LENGTH:
        return validators.min_length(spec.length or 1)
    raise ValueError(f"Unknown validator '{spec.name}'")


def transform_default(value: Any, transform: DefaultTransform) -> Any:
    if transform == DefaultTransform.LOWER:
        return str(value).lower()
    if transform == DefaultTransform.UPPER:
        return str(value).upper()
    if transform == DefaultTransform.SNAKE:
        return _SEPARATOR_RE.sub("_", str(value)).lower()
    return value


def _build(question: QuestionSpec, registry: dict[str, PromptSpec]) -> PromptSpec:
    common: dict[str, Any] = {
        "text": question.text,
        "key": question.key,
        "default": question.default,
        "strip": question.strip,
        "secure": question.secure,
        "show_default_hint": question.show_default_hint,
    }
    spec: PromptSpec
    if question.type == QuestionType.YES_NO:
        spec = YesNoSpec(
            **common,
            children=[_build(child, registry) for child in question.children],
        )
    else:
        spec = PromptSpec(
            **common,
            length_limit=question.length_limit,
            auto_submit=question.auto_submit,
            show_correction=question.show_correction,
            validate=make_validator(question.validator),
        )

    if question.default_from is not None:
        spec.pre_run = _copy_default(
            spec, question.default_from, question.default_transform, registry
        )
    if question.key is not None:
        registry[question.key] = spec
    return spec


def _copy_default(
    spec: PromptSpec,
    source_key: str,
    transform: DefaultTransform,
    registry: dict[str, PromptSpec],
) -> Callable[[], None]:
    def hook() -> None:
        source = registry[source_key]
        if source.resolved:
            spec.default = transform_default(source.value, transform)

    return hook
