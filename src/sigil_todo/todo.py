"""Todo item model and its one-line text format."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TodoState(Enum):
    """Item states."""
    NORMAL = "normal"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"
    CLOSED = "closed"
    UNMARKED = "unmarked"  # stored line without a known sigil
    DELETED = "deleted"  # soft-deleted in this session, never persisted

    @property
    def sigil(self) -> str:
        """Leading character used for this state in the todo file."""
        return _STATE_SIGILS.get(self, "")

    @property
    def persisted(self) -> bool:
        return self is not TodoState.DELETED

    @classmethod
    def from_sigil(cls, char: str) -> Optional["TodoState"]:
        """Return the state for a leading character, or None if it is not a sigil."""
        return _SIGIL_STATES.get(char)

    @classmethod
    def from_code(cls, code: str) -> "TodoState":
        """Map an ``edit -s`` code (1-4) to a state.

        Raises:
            ValueError: for anything other than ``1``, ``2``, ``3`` or ``4``.
        """
        try:
            return _CODE_STATES[code.strip()]
        except KeyError:
            raise ValueError(f"Unknown state code: {code!r}") from None


_STATE_SIGILS = {
    TodoState.IN_PROGRESS: "?",
    TodoState.FINISHED: "!",
    TodoState.CLOSED: "-",
    TodoState.NORMAL: ".",
}

_SIGIL_STATES = {sigil: state for state, sigil in _STATE_SIGILS.items()}

_CODE_STATES = {
    "1": TodoState.NORMAL,
    "2": TodoState.IN_PROGRESS,
    "3": TodoState.FINISHED,
    "4": TodoState.CLOSED,
}


@dataclass
class TodoItem:
    """A single todo entry."""

    text: str
    state: TodoState = TodoState.NORMAL

    @property
    def is_deleted(self) -> bool:
        return self.state is TodoState.DELETED

    def delete(self) -> None:
        """Soft-delete the item; it is dropped on the next save."""
        self.state = TodoState.DELETED


class TodoLineFormat:
    """Handles conversion between TodoItem objects and lines of the todo file."""

    @staticmethod
    def parse(line: str) -> TodoItem:
        """Parse one stored line into a TodoItem.

        The first character selects the state and is removed from the text.
        A line that does not start with a sigil becomes an UNMARKED item and
        keeps its full text.

        Raises:
            ValueError: if the line is empty.
        """
        line = line.rstrip("\r\n")
        if not line:
            raise ValueError("Cannot parse an empty line")

        state = TodoState.from_sigil(line[0])
        if state is None:
            return TodoItem(text=line, state=TodoState.UNMARKED)
        return TodoItem(text=line[1:], state=state)

    @staticmethod
    def format(item: TodoItem) -> str:
        """Serialize an item to a line (without the newline)."""
        return f"{item.state.sigil}{item.text}"
