"""Questionnaire files: schema, loading, and prompt building."""

from parley.schema.builder import build_prompts
from parley.schema.config import QuestionnaireConfig
from parley.schema.loader import ConfigError, load_questionnaire

__all__ = ["ConfigError", "QuestionnaireConfig", "build_prompts", "load_questionnaire"]
