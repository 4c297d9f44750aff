"""Unit tests for PromptSpec rendering and the prompt engine loop."""

from __future__ import annotations

import pytest

from parley.prompts import validators
from parley.prompts.engine import (
    BLANK_WARNING,
    WHITESPACE_WARNING,
    InputExhaustedError,
    PromptEngine,
    render_prompt,
)
from parley.prompts.results import Invalid, Valid
from parley.prompts.spec import PromptKind, PromptSpec, YesNoSpec
from parley.terminal.styles import Style, paint


class CountingValidator:
    """Wraps a validator and counts calls."""

    def __init__(self, inner=validators.accept) -> None:
        self.inner = inner
        self.calls: list[str] = []

    def __call__(self, text: str):
        self.calls.append(text)
        return self.inner(text)


def _run(make_adapter, spec: PromptSpec, text: str):
    adapter = make_adapter(text)
    value = PromptEngine(adapter).run(spec)
    return value, adapter


# ── Specification ────────────────────────────────────────────────────


class TestPromptSpec:
    """Construction rules and variant fields."""

    def test_defaults(self) -> None:
        spec = PromptSpec("Name")
        assert spec.kind == PromptKind.TEXT
        assert spec.strip is True
        assert spec.show_correction is True
        assert spec.show_default_hint is True
        assert spec.value is None
        assert spec.raw_input is None
        assert spec.run_children is False

    def test_length_limit_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            PromptSpec("Name", length_limit=0)

    def test_auto_submit_requires_limit(self) -> None:
        with pytest.raises(ValueError, match="length_limit"):
            PromptSpec("Name", auto_submit=True)

    def test_yes_no_fixed_fields(self) -> None:
        spec = YesNoSpec("Continue?")
        assert spec.kind == PromptKind.YES_NO
        assert spec.length_limit == 1
        assert spec.auto_submit is True
        assert spec.show_correction is False
        assert spec.validate("Y") == Valid(True)
        assert spec.validate("n") == Valid(False)
        assert isinstance(spec.validate("x"), Invalid)
        assert spec.children == []

    def test_yes_no_run_children_predicate(self) -> None:
        spec = YesNoSpec("Continue?", children=[PromptSpec("Email")])
        assert spec.run_children is False
        spec.value = False
        assert spec.run_children is False
        spec.value = True
        assert spec.run_children is True

    def test_yes_no_without_children_never_runs_children(self) -> None:
        spec = YesNoSpec("Continue?")
        spec.value = True
        assert spec.run_children is False


class TestRenderPrompt:
    """Prompt text normalization and default hints."""

    def test_appends_colon(self) -> None:
        assert render_prompt(PromptSpec("Name")) == "Name: "

    def test_keeps_single_colon(self) -> None:
        assert render_prompt(PromptSpec("Name:  ")) == "Name: "

    def test_keeps_question_mark(self) -> None:
        assert render_prompt(PromptSpec("Ready? ")) == "Ready? "

    def test_default_hint_before_punctuation(self) -> None:
        spec = PromptSpec("Port?", default=8000)
        assert render_prompt(spec) == "Port (blank for 8000)? "

    def test_default_hint_hidden(self) -> None:
        spec = PromptSpec("Port", default=8000, show_default_hint=False)
        assert render_prompt(spec) == "Port: "

    def test_yes_no_hints(self) -> None:
        assert render_prompt(YesNoSpec("Continue?", default=True)) == "Continue (Y/n)? "
        assert render_prompt(YesNoSpec("Continue?", default=False)) == "Continue (y/N)? "
        assert render_prompt(YesNoSpec("Continue?")) == "Continue? "


# ── Engine ───────────────────────────────────────────────────────────


class TestDefaults:
    """Empty input resolves to the default without validation."""

    def test_empty_input_uses_default(self, make_adapter) -> None:
        validate = CountingValidator()
        spec = PromptSpec("Port", default=8000, validate=validate)
        value, adapter = _run(make_adapter, spec, "\n")
        assert value == 8000
        assert spec.value == 8000
        assert spec.raw_input == ""
        assert validate.calls == []
        assert adapter.output == "Port (blank for 8000): 8000\n"

    def test_default_used_at_end_of_input(self, make_adapter) -> None:
        value, _ = _run(make_adapter, PromptSpec("Name", default="x"), "")
        assert value == "x"

    def test_blank_without_default_reprompts(self, make_adapter) -> None:
        value, adapter = _run(make_adapter, PromptSpec("Name"), "\nAda\n")
        assert value == "Ada"
        assert BLANK_WARNING in adapter.output
        assert adapter.output.count("Name: ") == 2

    def test_whitespace_is_not_treated_as_blank(self, make_adapter) -> None:
        validate = CountingValidator()
        spec = PromptSpec("Name", default="fallback", validate=validate)
        value, adapter = _run(make_adapter, spec, "   \nAda\n")
        assert value == "Ada"
        assert WHITESPACE_WARNING in adapter.output
        assert validate.calls == ["Ada"]

    def test_whitespace_kept_without_strip(self, make_adapter) -> None:
        value, _ = _run(make_adapter, PromptSpec("Name", strip=False), "  a \n")
        assert value == "  a "


class TestValidation:
    """Validator failures re-prompt with the validator's message."""

    def test_rejection_then_success(self, make_adapter) -> None:
        spec = PromptSpec("Port", validate=validators.integer(1, 65535))
        value, adapter = _run(make_adapter, spec, "abc\n0\n8080\n")
        assert value == 8080
        assert "'abc' is not a whole number." in adapter.output
        assert "Must be at least 1." in adapter.output
        assert adapter.output.count("Port: ") == 3

    def test_validator_receives_stripped_input(self, make_adapter) -> None:
        validate = CountingValidator()
        _run(make_adapter, PromptSpec("Name", validate=validate), "  Ada  \n")
        assert validate.calls == ["Ada"]

    def test_failed_attempts_leave_spec_untouched(self, make_adapter) -> None:
        spec = PromptSpec("Port", validate=validators.integer())
        with pytest.raises(InputExhaustedError):
            _run(make_adapter, spec, "abc\nxyz")
        assert spec.value is None
        assert spec.raw_input is None
        assert spec.resolved is False

    def test_exhausted_without_default(self, make_adapter) -> None:
        with pytest.raises(InputExhaustedError, match="Name"):
            _run(make_adapter, PromptSpec("Name"), "")

    def test_many_rejections_do_not_recurse(self, make_adapter) -> None:
        spec = PromptSpec("Port", validate=validators.integer())
        value, _ = _run(make_adapter, spec, "x\n" * 3000 + "7\n")
        assert value == 7

    def test_rejection_styled_red_when_interactive(self, make_adapter) -> None:
        adapter = make_adapter("x\n7\n", interactive=True)
        PromptEngine(adapter).run(PromptSpec("Port", validate=validators.integer()))
        assert paint("'x' is not a whole number.", Style.RED) in adapter.output
        assert paint("Port: ", Style.BOLD) in adapter.output


class TestCorrectionNotice:
    """The engine announces when the stored value differs from what was typed."""

    def test_project_name_correction(self, make_adapter) -> None:
        spec = PromptSpec("Project name", validate=validators.project_name)
        value, adapter = _run(make_adapter, spec, " My App \n")
        assert value == "My-App"
        assert spec.raw_input == " My App "
        assert "fixed that for ya: My-App" in adapter.output

    def test_no_notice_when_unchanged(self, make_adapter) -> None:
        spec = PromptSpec("Project name", validate=validators.project_name)
        _, adapter = _run(make_adapter, spec, "MyApp\n")
        assert "fixed that for ya" not in adapter.output

    def test_notice_when_only_stripped(self, make_adapter) -> None:
        _, adapter = _run(make_adapter, PromptSpec("Name"), " Ada\n")
        assert "fixed that for ya: Ada" in adapter.output

    def test_typed_values_compare_as_strings(self, make_adapter) -> None:
        spec = PromptSpec("Port", validate=validators.integer())
        _, adapter = _run(make_adapter, spec, "8080\n")
        assert "fixed that for ya" not in adapter.output
        _, adapter = _run(make_adapter, spec, "08080\n")
        assert "fixed that for ya: 8080" in adapter.output

    def test_notice_disabled(self, make_adapter) -> None:
        spec = PromptSpec(
            "Project name", validate=validators.project_name, show_correction=False
        )
        _, adapter = _run(make_adapter, spec, "My App\n")
        assert "fixed that for ya" not in adapter.output


class TestPreRunHook:
    """pre_run runs before every render."""

    def test_hook_sets_default(self, make_adapter) -> None:
        spec = PromptSpec("Directory")

        def hook() -> None:
            spec.default = "my_app"

        spec.pre_run = hook
        value, adapter = _run(make_adapter, spec, "\n")
        assert value == "my_app"
        assert "Directory (blank for my_app): " in adapter.output

    def test_hook_runs_on_every_attempt(self, make_adapter) -> None:
        calls: list[int] = []
        spec = PromptSpec("Name", pre_run=lambda: calls.append(1))
        _run(make_adapter, spec, "\n   \nAda\n")
        assert len(calls) == 3


class TestSecureAndLimits:
    """Spec flags flow through to the reader."""

    def test_secure_input_not_echoed(self, make_adapter) -> None:
        spec = PromptSpec("Password", secure=True)
        value, adapter = _run(make_adapter, spec, "s3cret\n")
        assert value == "s3cret"
        assert "s3cret" not in adapter.output
        assert "******" in adapter.output

    def test_secure_input_never_in_correction_notice(self, make_adapter) -> None:
        spec = PromptSpec("Password", secure=True)
        value, adapter = _run(make_adapter, spec, " s3cret \n")
        assert value == "s3cret"
        assert "s3cret" not in adapter.output

    def test_secure_corrected_value_not_announced(self, make_adapter) -> None:
        spec = PromptSpec("Token", secure=True, validate=validators.project_name)
        value, adapter = _run(make_adapter, spec, "my token\n")
        assert value == "my-token"
        assert "fixed that for ya" not in adapter.output
        assert "my-token" not in adapter.output

    def test_auto_submit_at_limit(self, make_adapter) -> None:
        spec = PromptSpec("Code", length_limit=3, auto_submit=True)
        value, adapter = _run(make_adapter, spec, "abcdef")
        assert value == "abc"
        assert adapter.remaining() == "def"


class TestYesNo:
    """Yes/No prompts accept exactly y, Y, n, N after one keystroke."""

    @pytest.mark.parametrize(
        ("key", "expected"),
        [("y", True), ("Y", True), ("n", False), ("N", False)],
    )
    def test_accepted_keys(self, make_adapter, key: str, expected: bool) -> None:
        value, _ = _run(make_adapter, YesNoSpec("Continue?"), key)
        assert value is expected

    def test_other_key_reprompts(self, make_adapter) -> None:
        value, adapter = _run(make_adapter, YesNoSpec("Continue?"), "qy")
        assert value is True
        assert "Please answer y or n." in adapter.output
        assert adapter.output.count("Continue? ") == 2

    def test_single_keystroke_submits(self, make_adapter) -> None:
        value, adapter = _run(make_adapter, YesNoSpec("Continue?"), "yes\n")
        assert value is True
        assert adapter.remaining() == "es\n"

    def test_blank_uses_default(self, make_adapter) -> None:
        spec = YesNoSpec("Continue?", default=False)
        value, adapter = _run(make_adapter, spec, "\n")
        assert value is False
        assert adapter.output == "Continue (y/N)? n\n"

    def test_blank_placeholder_is_the_selecting_key(self, make_adapter) -> None:
        spec = YesNoSpec("Continue?", default=True)
        _, adapter = _run(make_adapter, spec, "\n")
        assert adapter.output == "Continue (Y/n)? y\n"
        assert "True" not in adapter.output

    def test_no_correction_notice(self, make_adapter) -> None:
        _, adapter = _run(make_adapter, YesNoSpec("Continue?"), "Y")
        assert "fixed that for ya" not in adapter.output
