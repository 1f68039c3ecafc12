"""Interactive read-dispatch-render loop."""

import logging
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from .commands import CommandResult, dispatch, help_text
from .config import ConfigModel
from .render import clear_screen, render_items
from .todo import TodoItem

logger = logging.getLogger(__name__)


class TodoShell:
    """Owns the item list for the length of an interactive session.

    ``read_line`` is called with the prompt and must return one line of
    input. By default it is ``console.input`` with the prompt escaped, so
    brackets in a configured prompt are printed as typed. It may raise
    EOFError, which ends the session like ``quit``. Saving is left to the
    caller.
    """

    def __init__(
        self,
        console: Console,
        items: List[TodoItem],
        config: Optional[ConfigModel] = None,
        read_line: Optional[Callable[[str], str]] = None,
    ):
        self.console = console
        self.items = items
        self.config = config or ConfigModel()
        self.read_line = read_line or self._console_input

    def _console_input(self, prompt: str) -> str:
        # prompts are plain text, not rich markup
        return self.console.input(escape(prompt))

    def render(self) -> None:
        render_items(
            self.console,
            self.items,
            self.config.style,
            show_closed=self.config.show_closed,
        )

    def show_help(self, topic: Optional[str]) -> None:
        """Print help, then wait for a line of input before returning."""
        self.console.print(Text(help_text(topic)))
        self.read_line("")

    def step(self, line: str) -> CommandResult:
        """Run one command line and handle any help it asks for."""
        clear_screen(self.console, self.config.style)
        result = dispatch(line, self.items)
        if result.show_help:
            self.show_help(result.help_topic)
        return result

    def run(self) -> List[TodoItem]:
        """Loop until ``quit`` or end of input; return the final list."""
        logger.debug(f"Starting shell with {len(self.items)} todos")
        try:
            while True:
                self.render()
                line = self.read_line(f"\n\n{self.config.prompt}")
                if self.step(line).quit:
                    break
        except EOFError:
            logger.info("End of input, leaving shell")
        return self.items
