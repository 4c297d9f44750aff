"""Pydantic v2 models for the questionnaire YAML schema."""

from __future__ import annotations

import re
from collections.abc import Iterator

from pydantic import BaseModel, Field, field_validator, model_validator

from parley.schema.defaults import (
    SUPPORTED_SCHEMA_VERSIONS,
    DefaultTransform,
    QuestionType,
    ValidatorName,
)


# ── Validators ───────────────────────────────────────────────────────


class ValidatorSpec(BaseModel):
    """A built-in validator and its parameters."""

    name: ValidatorName
    minimum: int | None = None
    maximum: int | None = None
    choices: list[str] = Field(default_factory=list)
    pattern: str | None = None
    message: str | None = Field(
        default=None,
        description="Pattern validator: message shown on mismatch.",
    )
    length: int | None = Field(default=None, gt=0)

    @model_validator(mode="after")
    def check_parameters(self) -> ValidatorSpec:
        if self.name == ValidatorName.CHOICE and not self.choices:
            raise ValueError("choice validator requires choices")
        if self.name == ValidatorName.PATTERN:
            if self.pattern is None:
                raise ValueError("pattern validator requires pattern")
            try:
                re.compile(self.pattern)
            except re.error as exc:
                raise ValueError(f"invalid pattern {self.pattern!r}: {exc}") from exc
        if self.name == ValidatorName.MIN_LENGTH and self.length is None:
            raise ValueError("min_length validator requires length")
        if (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        ):
            raise ValueError(
                f"minimum ({self.minimum}) must not exceed maximum ({self.maximum})"
            )
        return self


# ── Questions ────────────────────────────────────────────────────────


class QuestionSpec(BaseModel):
    """One question in a questionnaire."""

    text: str = Field(min_length=1)
    key: str | None = None
    type: QuestionType = QuestionType.TEXT
    default: bool | int | str | None = None
    default_from: str | None = Field(
        default=None,
        description="Key of an earlier question whose answer becomes the default.",
    )
    default_transform: DefaultTransform = DefaultTransform.NONE
    strip: bool = True
    length_limit: int | None = Field(default=None, gt=0)
    auto_submit: bool = False
    secure: bool = False
    show_correction: bool = True
    show_default_hint: bool = True
    validator: ValidatorSpec | None = None
    children: list[QuestionSpec] = Field(default_factory=list)

    @field_validator("validator", mode="before")
    @classmethod
    def expand_validator_name(cls, value: object) -> object:
        # Allow the shorthand `validator: email`.
        if isinstance(value, str):
            return {"name": value}
        return value

    @model_validator(mode="after")
    def check_question(self) -> QuestionSpec:
        if self.type == QuestionType.YES_NO:
            self._check_yes_no()
        else:
            if isinstance(self.default, bool):
                raise ValueError("text questions need a string or number default")
            if self.children:
                raise ValueError("only yes_no questions can have children")
            if self.auto_submit and self.length_limit is None:
                raise ValueError("auto_submit requires length_limit")
        if self.default_from is not None and self.default is not None:
            raise ValueError("use either default or default_from, not both")
        return self

    def _check_yes_no(self) -> None:
        if self.default is not None and not isinstance(self.default, bool):
            raise ValueError("yes_no questions need a true/false default")
        fixed = {"validator", "length_limit", "auto_submit", "show_correction"}
        overridden = sorted(fixed & self.model_fields_set)
        if overridden:
            raise ValueError(
                f"yes_no questions cannot set {', '.join(overridden)}"
            )

    def walk(self) -> Iterator[QuestionSpec]:
        """Yield this question and its descendants in asking order."""
        yield self
        for child in self.children:
            yield from child.walk()


# ── Top-Level Config ─────────────────────────────────────────────────


class QuestionnaireConfig(BaseModel):
    """Root model — validated from a YAML file."""

    schema_version: str
    title: str | None = None
    questions: list[QuestionSpec] = Field(min_length=1)

    @model_validator(mode="after")
    def check_config(self) -> QuestionnaireConfig:
        if self.schema_version not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"Unsupported schema_version '{self.schema_version}'. "
                f"Supported: {sorted(SUPPORTED_SCHEMA_VERSIONS)}"
            )
        self._check_keys()
        return self

    def walk(self) -> Iterator[QuestionSpec]:
        for question in self.questions:
            yield from question.walk()

    def _check_keys(self) -> None:
        """Keys are unique; default_from must name a question asked earlier."""
        seen: set[str] = set()
        for question in self.walk():
            if question.default_from is not None and question.default_from not in seen:
                raise ValueError(
                    f"Question '{question.text}' takes its default from "
                    f"'{question.default_from}', which is not asked before it"
                )
            if question.key is None:
                continue
            if question.key in seen:
                raise ValueError(f"Duplicate question key '{question.key}'")
            seen.add(question.key)
