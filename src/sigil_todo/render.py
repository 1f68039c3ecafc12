"""Terminal rendering of the todo list."""

from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.text import Text

from .config import RenderStyle
from .todo import TodoItem, TodoState

MARKERS: Dict[TodoState, str] = {
    TodoState.IN_PROGRESS: "[?]",
    TodoState.FINISHED: "[!]",
    TodoState.CLOSED: "[#]",
    TodoState.NORMAL: "[-]",
    TodoState.UNMARKED: "[ ]",
    TodoState.DELETED: "[DELETED]",
}

EMPTY_HINT = "No todos yet. Type `add <text>` to create one, or `help`."


def make_console(style: RenderStyle, **kwargs) -> Console:
    """Create a console honoring the no_color setting."""
    return Console(no_color=style.no_color, highlight=False, **kwargs)


def _item_styles(state: TodoState, style: RenderStyle) -> Tuple[str, str]:
    """Return (marker_style, text_style) for a state."""
    strike = "strike" if style.strike else ""
    color = {
        TodoState.IN_PROGRESS: style.in_progress,
        TodoState.FINISHED: style.finished,
        TodoState.CLOSED: style.closed,
    }.get(state, "")

    if state in (TodoState.FINISHED, TodoState.CLOSED):
        return color, f"{color} {strike}".strip()
    if state is TodoState.DELETED:
        return "", strike
    return color, color


def format_item(index: int, item: TodoItem, style: Optional[RenderStyle] = None) -> Text:
    """Build the ``"<index>) <marker> <text>"`` line for one item."""
    style = style or RenderStyle()
    marker_style, text_style = _item_styles(item.state, style)

    line = Text(f"{index}) ")
    line.append(f"{MARKERS[item.state]} ", style=marker_style)
    line.append(item.text, style=text_style)
    return line


def clear_screen(console: Console, style: RenderStyle) -> None:
    """Clear the terminal and home the cursor (no-op off a terminal)."""
    if style.clear_screen:
        console.clear()


def render_items(
    console: Console,
    items: List[TodoItem],
    style: Optional[RenderStyle] = None,
    show_closed: bool = True,
    clear: bool = True,
) -> None:
    """Print the whole list.

    Closed items are skipped entirely when ``show_closed`` is False; the
    remaining items keep their list index.
    """
    style = style or RenderStyle()
    if clear:
        clear_screen(console, style)

    if not items:
        console.print(Text(EMPTY_HINT, style="dim"))
        return

    for index, item in enumerate(items):
        if item.state is TodoState.CLOSED and not show_closed:
            continue
        console.print(format_item(index, item, style))
