"""sigil-todo - a terminal todo list kept in a plain text file."""

__version__ = "0.1.0"

from .todo import TodoItem, TodoState, TodoLineFormat
from .storage import TodoStore
from .exceptions import TodoError, StoreError, CommandError

__all__ = [
    "TodoItem",
    "TodoState",
    "TodoLineFormat",
    "TodoStore",
    "TodoError",
    "StoreError",
    "CommandError",
    "__version__",
]
