"""Shared test fixtures for Parley tests."""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest

from parley.terminal.adapter import TerminalAdapter

CONFIGS_DIR = Path(__file__).resolve().parent.parent / "configs" / "examples"


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--no-tty",
        action="store_true",
        default=False,
        help="Skip tests that need a pseudo-terminal (marked @pytest.mark.tty).",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    if hasattr(os, "openpty") and not config.getoption("--no-tty"):
        return
    skip_tty = pytest.mark.skip(reason="pseudo-terminal unavailable or --no-tty given")
    for item in items:
        if "tty" in item.keywords:
            item.add_marker(skip_tty)


class MemoryAdapter(TerminalAdapter):
    """Adapter reading from and writing to in-memory streams."""

    def __init__(self, text: str = "", environ: dict[str, str] | None = None) -> None:
        super().__init__(
            stdin=io.StringIO(text),
            stdout=io.StringIO(),
            environ=environ if environ is not None else {},
        )

    @property
    def output(self) -> str:
        return self._stdout.getvalue()

    def remaining(self) -> str:
        """Input not yet consumed."""
        return self._stdin.read()


class InteractiveMemoryAdapter(MemoryAdapter):
    """MemoryAdapter that reports itself as an interactive terminal."""

    def is_interactive(self) -> bool:
        return True


@pytest.fixture
def make_adapter():
    """Factory: make_adapter(text, interactive=False, environ=None)."""

    def factory(
        text: str = "",
        interactive: bool = False,
        environ: dict[str, str] | None = None,
    ) -> MemoryAdapter:
        cls = InteractiveMemoryAdapter if interactive else MemoryAdapter
        return cls(text, environ=environ)

    return factory


@pytest.fixture
def configs_dir() -> Path:
    return CONFIGS_DIR


@pytest.fixture
def new_project_path() -> Path:
    return CONFIGS_DIR / "new_project.yaml"


@pytest.fixture
def account_setup_path() -> Path:
    return CONFIGS_DIR / "account_setup.yaml"


@pytest.fixture
def minimal_questionnaire_dict() -> dict:
    """Smallest valid questionnaire as a Python dict (for Pydantic model_validate)."""
    return {
        "schema_version": "0.1.0",
        "title": "Minimal",
        "questions": [
            {"text": "Name?", "key": "name"},
            {
                "text": "Subscribe?",
                "key": "subscribe",
                "type": "yes_no",
                "default": False,
                "children": [
                    {"text": "Email", "key": "email", "validator": "email"},
                ],
            },
        ],
    }


@pytest.fixture
def pipe():
    """(reader stream, write fd) over an OS pipe."""
    read_fd, write_fd = os.pipe()
    stream = os.fdopen(read_fd, "r", encoding="utf-8")
    yield stream, write_fd
    stream.close()
    os.close(write_fd)
