"""Exception hierarchy for sigil-todo."""

from pathlib import Path
from typing import Optional, Union


class TodoError(Exception):
    """Base exception for sigil-todo."""
    pass


class StoreError(TodoError):
    """Reading or writing one of the todo files failed."""

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path is not None else None
        super().__init__(message)


class CommandError(TodoError):
    """A shell command failed validation.

    ``topic`` names the help entry to show instead of running the command.
    """

    def __init__(self, message: str, topic: Optional[str] = None):
        self.topic = topic
        super().__init__(message)
