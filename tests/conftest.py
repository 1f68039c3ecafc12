"""Pytest configuration and shared fixtures."""

import sys
from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sigil_todo.config import Config  # noqa: E402


@pytest.fixture(autouse=True)
def reset_config():
    """Drop the cached configuration between tests."""
    Config._instance = None
    yield
    Config._instance = None


@pytest.fixture
def console():
    """A plain-text console writing to a buffer (read it with ``console.file.getvalue()``)."""
    return Console(file=StringIO(), width=120, force_terminal=False,
                   no_color=False, highlight=False)


@pytest.fixture
def todo_paths(tmp_path):
    """Paths for a primary todo file and its archive."""
    return tmp_path / "todo", tmp_path / "todo.old"


class ScriptedInput:
    """Feeds prepared lines to the shell and records the prompts it was given."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt=""):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def scripted_input():
    return ScriptedInput
