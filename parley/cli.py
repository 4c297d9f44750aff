"""Click-based CLI entry point for Parley."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from dotenv import load_dotenv

from parley.prompts.engine import InputExhaustedError, render_prompt
from parley.prompts.spec import PromptSpec, YesNoSpec
from parley.schema.builder import build_prompts
from parley.schema.config import QuestionnaireConfig
from parley.schema.loader import ConfigError, load_questionnaire
from parley.terminal.adapter import TerminalAdapter
from parley.terminal.styles import Style

# Load .env so PARLEY_NONINTERACTIVE / NO_COLOR can be set per project.
load_dotenv()

logger = logging.getLogger(__name__)


def _load(path: str) -> QuestionnaireConfig:
    try:
        return load_questionnaire(path)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="parley")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log to stderr.")
def cli(verbose: bool) -> None:
    """Parley — interactive terminal questionnaires."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("questionnaire_path", type=click.Path(exists=True))
def validate(questionnaire_path: str) -> None:
    """Validate a YAML questionnaire file."""
    cfg = _load(questionnaire_path)

    n_questions = sum(1 for _ in cfg.walk())
    n_nested = n_questions - len(cfg.questions)
    click.echo(
        f"Questionnaire valid: {cfg.title or Path(questionnaire_path).stem} "
        f"({n_questions} questions, {n_nested} nested)"
    )


@cli.command(name="dry-run")
@click.argument("questionnaire_path", type=click.Path(exists=True))
def dry_run(questionnaire_path: str) -> None:
    """Show every rendered prompt without reading input."""
    cfg = _load(questionnaire_path)

    def show(specs: list[PromptSpec], depth: int) -> None:
        for spec in specs:
            line = render_prompt(spec).rstrip()
            flags = [f"key={spec.key}"] if spec.key else []
            if spec.secure:
                flags.append("secure")
            if spec.pre_run is not None:
                flags.append("computed default")
            suffix = f"  [{', '.join(flags)}]" if flags else ""
            click.echo(f"{'  ' * depth}{line}{suffix}")
            if isinstance(spec, YesNoSpec):
                show(spec.children, depth + 1)

    show(build_prompts(cfg), 0)


@cli.command()
@click.argument("questionnaire_path", type=click.Path(exists=True))
@click.option(
    "--output", default=None, type=click.Path(),
    help="Write answers as JSON to this file instead of stdout.",
)
@click.option(
    "--countdown", default=0.0, type=click.FloatRange(min=0.0),
    help="Seconds to wait before starting; any key press cancels.",
)
def run(questionnaire_path: str, output: str | None, countdown: float) -> None:
    """Ask a questionnaire and print the answers as JSON.

    Without --output, stdout carries only the JSON and the prompts are
    shown on stderr.
    """
    from parley.prompts.sequencer import run_sequence

    cfg = _load(questionnaire_path)
    adapter = TerminalAdapter(stdout=sys.stdout if output else sys.stderr)

    if countdown > 0:
        if adapter.is_interactive():
            adapter.write(
                adapter.style(
                    f"Starting in {countdown:g}s, press any key to cancel...",
                    Style.FAINT,
                )
                + "\n"
            )
            if adapter.wait_for_key(countdown) is not None:
                raise click.ClickException("Cancelled.")
        else:
            logger.info("Skipping countdown: input is not a terminal")

    if cfg.title:
        adapter.write(adapter.style(cfg.title, Style.CYAN) + "\n")

    try:
        answers = run_sequence(build_prompts(cfg), adapter)
    except InputExhaustedError as exc:
        raise click.ClickException(str(exc)) from exc

    rendered = json.dumps(answers, indent=2, ensure_ascii=False)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(rendered + "\n", encoding="utf-8")
        click.echo(f"Saved: {out_path}")
    else:
        click.echo(rendered)
