"""Storage layer for sigil-todo: a primary todo file plus an append-only archive."""

import logging
from pathlib import Path
from typing import IO, Iterable, List, Tuple, Union

from .exceptions import StoreError
from .todo import TodoItem, TodoLineFormat, TodoState

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def partition_items(items: List[TodoItem]) -> Tuple[List[TodoItem], List[TodoItem]]:
    """Split items into (primary, archive) destinations, keeping list order.

    CLOSED items go to the archive, DELETED items are dropped and everything
    else stays in the primary file.
    """
    active: List[TodoItem] = []
    archived: List[TodoItem] = []
    for item in items:
        if item.state is TodoState.CLOSED:
            archived.append(item)
        elif item.state.persisted:
            active.append(item)
    return active, archived


class TodoStore:
    """Holds the primary and archive files open for the length of a session.

    Use :meth:`open` as a context manager::

        with TodoStore.open(primary, archive) as store:
            items = store.load()
            ...
            store.save(items)
    """

    def __init__(self, primary_path: Path, archive_path: Path,
                 primary: IO[str], archive: IO[str]):
        self.primary_path = primary_path
        self.archive_path = archive_path
        self._primary = primary
        self._archive = archive

    @classmethod
    def open(cls, primary_path: PathLike, archive_path: PathLike,
             create_missing: bool = True) -> "TodoStore":
        """Open both files.

        The primary file is opened read+write and the archive for appending.

        Raises:
            StoreError: if either file cannot be opened.
        """
        primary_path = Path(primary_path)
        archive_path = Path(archive_path)

        if create_missing:
            for path in (primary_path, archive_path):
                _ensure_file_exists(path)
        else:
            for path in (primary_path, archive_path):
                if not path.exists():
                    raise StoreError(f"Cannot open {path}: file does not exist", path)

        primary = _open(primary_path, "r+")
        try:
            archive = _open(archive_path, "a")
        except StoreError:
            primary.close()
            raise

        logger.debug(f"Opened todo file {primary_path} and archive {archive_path}")
        return cls(primary_path, archive_path, primary, archive)

    def __enter__(self) -> "TodoStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Close both file handles."""
        for handle in (self._primary, self._archive):
            if not handle.closed:
                handle.close()

    def load(self) -> List[TodoItem]:
        """Read every non-blank line of the primary file into items."""
        try:
            self._primary.seek(0)
            items = _parse_lines(self._primary)
        except (OSError, UnicodeDecodeError) as e:
            raise StoreError(f"Error reading {self.primary_path}: {e}", self.primary_path) from e

        logger.info(f"Loaded {len(items)} todos from {self.primary_path}")
        return items

    def save(self, items: List[TodoItem]) -> None:
        """Rewrite the primary file and append closed items to the archive.

        There is no rollback: lines flushed before a failure stay written.

        Raises:
            StoreError: on any write failure.
        """
        active, archived = partition_items(items)

        try:
            self._primary.seek(0)
            self._primary.truncate(0)
            for item in active:
                self._primary.write(TodoLineFormat.format(item) + "\n")
            self._primary.flush()
        except OSError as e:
            raise StoreError(f"Error writing {self.primary_path}: {e}", self.primary_path) from e

        try:
            for item in archived:
                self._archive.write(TodoLineFormat.format(item) + "\n")
            self._archive.flush()
        except OSError as e:
            raise StoreError(f"Error writing {self.archive_path}: {e}", self.archive_path) from e

        dropped = len(items) - len(active) - len(archived)
        logger.info(
            f"Saved {len(active)} todos to {self.primary_path}, "
            f"archived {len(archived)}, dropped {dropped}"
        )


def _open(path: Path, mode: str) -> IO[str]:
    try:
        return open(path, mode, encoding="utf-8")
    except OSError as e:
        raise StoreError(f"Cannot open {path}: {e}", path) from e


def _ensure_file_exists(path: Path) -> None:
    """Create the file and its parent directories if missing."""
    if path.exists():
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    except OSError as e:
        raise StoreError(f"Cannot create {path}: {e}", path) from e
    logger.info(f"Created {path}")


def _parse_lines(lines: Iterable[str]) -> List[TodoItem]:
    return [TodoLineFormat.parse(line) for line in lines if line.strip()]


def read_items(primary_path: PathLike, must_exist: bool = False) -> List[TodoItem]:
    """Read the todo file without opening it for writing.

    A missing file reads as an empty list and is not created.

    Raises:
        StoreError: if the file cannot be read, or is missing and
            ``must_exist`` is set.
    """
    primary_path = Path(primary_path)
    if not primary_path.exists():
        if must_exist:
            raise StoreError(f"Cannot open {primary_path}: file does not exist", primary_path)
        logger.debug(f"{primary_path} does not exist, nothing to read")
        return []

    try:
        with open(primary_path, "r", encoding="utf-8") as f:
            items = _parse_lines(f)
    except (OSError, UnicodeDecodeError) as e:
        raise StoreError(f"Error reading {primary_path}: {e}", primary_path) from e

    logger.info(f"Loaded {len(items)} todos from {primary_path}")
    return items
