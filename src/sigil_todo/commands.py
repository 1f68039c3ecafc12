"""Line commands for the interactive shell: parsing, validation and handlers.

Handlers take the argument tokens and the item list, mutate the list in
place and keep no reference to it. Invalid input raises CommandError with
the help topic to show; :func:`dispatch` turns that into a help result.
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .exceptions import CommandError
from .todo import TodoItem, TodoState

logger = logging.getLogger(__name__)

INDEX_RE = re.compile(r"^\+?[0-9]+$")

TEXT_FLAG = "-t"
STATE_FLAG = "-s"

HELP_TOPICS: Tuple[Tuple[str, str], ...] = (
    (
        "help",
        "help <topic>\n"
        "\thelp : prints this output\n"
        "\thelp add : prints help for the `add` command\n"
        "\thelp edit : prints help for the `edit` command\n"
        "\thelp delete : prints help for the `delete` command",
    ),
    (
        "add",
        "add <text>\n"
        "\tadd : prints the help page for this command\n"
        "\t<text> : the description for the todo",
    ),
    (
        "edit",
        "edit <index> <flags>\n"
        "\tedit : prints the help page for this command\n"
        "\t<index> : the todo index\n"
        "\t<flags>\n"
        "\t\t-t <text> : the todo text\n"
        "\t\t-s <code> : the todo state\n"
        "\t\t(1||NORMAL)\n"
        "\t\t(2||INPROG)\n"
        "\t\t(3||FINISHED)\n"
        "\t\t(4||CLOSED)",
    ),
    (
        "delete",
        "delete <index>\n"
        "\tdelete : prints the help page for this command\n"
        "\t<index> : the todo index",
    ),
    (
        "quit",
        "quit\n"
        "\tquit : saves the list and exits",
    ),
)

# Topics that ``help <topic>`` shows on their own.
SINGLE_TOPICS = ("add", "edit", "delete")


@dataclass
class CommandResult:
    """What the shell should do after a command."""

    quit: bool = False
    show_help: bool = False
    help_topic: Optional[str] = None


def help_text(topic: Optional[str] = None) -> str:
    """Return help for one topic, or for every topic in order."""
    topics = dict(HELP_TOPICS)
    if topic in SINGLE_TOPICS:
        return topics[topic]
    return "\n".join(text for _, text in HELP_TOPICS)


def tokenize(line: str) -> List[str]:
    """Split an input line on single spaces, dropping the line terminator."""
    return line.rstrip("\r\n").split(" ")


def parse_index(token: str, items: List[TodoItem], topic: str) -> int:
    """Parse a zero-based index that must point into ``items``."""
    token = token.strip()
    if not INDEX_RE.match(token):
        raise CommandError(f"Invalid index: {token!r}", topic)

    index = int(token)
    if index >= len(items):
        raise CommandError(f"Index {index} out of range (0-{len(items) - 1})", topic)
    return index


def cmd_help(args: List[str], items: List[TodoItem]) -> CommandResult:
    topic = args[0].strip() if args else None
    return CommandResult(show_help=True, help_topic=topic if topic in SINGLE_TOPICS else None)


def cmd_add(args: List[str], items: List[TodoItem]) -> CommandResult:
    """Append a NORMAL item built from the remaining tokens."""
    if not args:
        raise CommandError("add needs a description", "add")

    text = " ".join(args).strip()
    if not text:
        raise CommandError("add needs a description", "add")
    items.append(TodoItem(text=text, state=TodoState.NORMAL))
    logger.debug(f"Added todo {len(items) - 1}: {text}")
    return CommandResult()


def _parse_edit_flags(args: List[str]) -> Tuple[str, Optional[TodoState]]:
    """Collect ``-t`` text and ``-s`` state from edit arguments."""
    text = ""
    state = None
    for i, token in enumerate(args):
        flag = token.strip()
        if flag == TEXT_FLAG:
            if i == len(args) - 1:
                raise CommandError("-t needs text", "edit")
            words = []
            for word in args[i + 1:]:
                if word.strip() == STATE_FLAG:
                    break
                words.append(word.strip())
            text = " ".join(words).strip()
        elif flag == STATE_FLAG:
            if i == len(args) - 1:
                raise CommandError("-s needs a state code", "edit")
            try:
                state = TodoState.from_code(args[i + 1])
            except ValueError as e:
                raise CommandError(str(e), "edit") from e
    return text, state


def cmd_edit(args: List[str], items: List[TodoItem]) -> CommandResult:
    """Change the text and/or state of one item.

    Usage: ``edit <index> [-t <text...>] [-s <code>]``. Nothing is changed
    unless the whole command validates.
    """
    flags = [a.strip() for a in args[1:]]
    if not args or (TEXT_FLAG not in flags and STATE_FLAG not in flags):
        raise CommandError("edit needs an index and -t or -s", "edit")

    index = parse_index(args[0], items, "edit")
    text, state = _parse_edit_flags(args[1:])

    item = items[index]
    if text:
        item.text = text
        # bare text would reload with its first character taken as a sigil
        if item.state is TodoState.UNMARKED:
            item.state = TodoState.NORMAL
    if state is not None:
        item.state = state
    logger.debug(f"Edited todo {index}: state={item.state.value} text={item.text}")
    return CommandResult()


def cmd_delete(args: List[str], items: List[TodoItem]) -> CommandResult:
    """Soft-delete one item; it stays in the list until the save."""
    if not args:
        raise CommandError("delete needs an index", "delete")

    index = parse_index(args[0], items, "delete")
    items[index].delete()
    logger.debug(f"Deleted todo {index}")
    return CommandResult()


def cmd_quit(args: List[str], items: List[TodoItem]) -> CommandResult:
    return CommandResult(quit=True)


COMMANDS: Dict[str, Callable[[List[str], List[TodoItem]], CommandResult]] = {
    "help": cmd_help,
    "add": cmd_add,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "quit": cmd_quit,
}


def dispatch(line: str, items: List[TodoItem]) -> CommandResult:
    """Run one input line against the list.

    Unknown or empty commands show the full help. Validation failures show
    the failing command's help and leave the list unchanged.
    """
    tokens = tokenize(line)
    name = tokens[0].strip()
    handler = COMMANDS.get(name)
    if handler is None:
        logger.debug(f"Unknown command {name!r}, showing help")
        return CommandResult(show_help=True)

    try:
        return handler(tokens[1:], items)
    except CommandError as e:
        logger.info(f"{name}: {e}")
        return CommandResult(show_help=True, help_topic=e.topic)
