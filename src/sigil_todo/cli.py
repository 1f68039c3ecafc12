"""Command-line interface for sigil-todo."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from .config import Config, ConfigModel, get_config_path
from .exceptions import StoreError
from .logging_setup import setup_logging
from .render import make_console, render_items
from .shell import TodoShell
from .storage import TodoStore, read_items

logger = logging.getLogger(__name__)


def _apply_overrides(config: ConfigModel, todo_file: Optional[str],
                     archive_file: Optional[str], show_closed: Optional[bool],
                     no_color: bool) -> ConfigModel:
    """Apply command-line options on top of the loaded configuration."""
    if todo_file:
        config.todo_file = str(Path(todo_file).expanduser())
    if archive_file:
        config.archive_file = str(Path(archive_file).expanduser())
    if show_closed is not None:
        config.show_closed = show_closed
    if no_color:
        config.style.no_color = True
    return config


def _fail(console: Console, error: StoreError) -> None:
    logger.error(str(error))
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    sys.exit(1)


@click.group(invoke_without_command=True)
@click.option("--config", "config_path", type=click.Path(dir_okay=False),
              help="Path to config file")
@click.option("--file", "-f", "todo_file", type=click.Path(dir_okay=False),
              help="Path to the todo file")
@click.option("--archive", "-a", "archive_file", type=click.Path(dir_okay=False),
              help="Path to the archive file for closed todos")
@click.option("--show-closed/--hide-closed", default=None,
              help="Show or hide closed todos in the list")
@click.option("--no-color", is_flag=True, help="Disable colors")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def main(ctx, config_path, todo_file, archive_file, show_closed, no_color, verbose):
    """sigil-todo - a terminal todo list kept in a plain text file.

    Without a command, starts the interactive shell. Type `help` inside it
    for the list of commands.
    """
    config = Config.reload(Path(config_path).expanduser() if config_path else None)
    config = _apply_overrides(config, todo_file, archive_file, show_closed, no_color)
    setup_logging("DEBUG" if verbose else config.log_level, config.log_file)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["config_path"] = Path(config_path).expanduser() if config_path else get_config_path()

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
@click.pass_context
def shell(ctx):
    """Start the interactive shell (the default)."""
    config: ConfigModel = ctx.obj["config"]
    console = make_console(config.style)

    try:
        with TodoStore.open(config.todo_file, config.archive_file,
                            config.create_missing) as store:
            items = store.load()
            TodoShell(console, items, config).run()
            store.save(items)
    except StoreError as e:
        _fail(console, e)


@main.command("list")
@click.pass_context
def list_todos(ctx):
    """Print the list once. No file is created or written."""
    config: ConfigModel = ctx.obj["config"]
    console = make_console(config.style)

    try:
        items = read_items(config.todo_file, must_exist=not config.create_missing)
    except StoreError as e:
        _fail(console, e)

    render_items(console, items, config.style,
                 show_closed=config.show_closed, clear=False)


@main.command()
@click.pass_context
def paths(ctx):
    """Show the todo, archive and config file paths."""
    config: ConfigModel = ctx.obj["config"]
    click.echo(f"Todo file: {Path(config.todo_file).resolve()}")
    click.echo(f"Archive: {Path(config.archive_file).resolve()}")
    click.echo(f"Configuration: {ctx.obj['config_path']}")


if __name__ == "__main__":
    main()
