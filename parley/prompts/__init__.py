"""Prompt specifications, the prompt engine, and the sequencer."""

from parley.prompts.engine import InputExhaustedError, PromptEngine, render_prompt
from parley.prompts.results import Invalid, Valid, ValidationResult, Validator
from parley.prompts.sequencer import PromptSequencer, run_sequence
from parley.prompts.spec import PromptKind, PromptSpec, YesNoSpec

__all__ = [
    "InputExhaustedError",
    "Invalid",
    "PromptEngine",
    "PromptKind",
    "PromptSequencer",
    "PromptSpec",
    "Valid",
    "ValidationResult",
    "Validator",
    "YesNoSpec",
    "render_prompt",
    "run_sequence",
]
