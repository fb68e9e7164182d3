"""Flat-file storage for Gale tasks.

Each task is one line in the record format produced by
:meth:`gale.task.Task.to_record`::

    T | 0 | read book
    D | 1 | return book | 2024-03-15 18:30
    E | 0 | project meeting | 2024-03-15 14:00 | 2024-03-15 16:00
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from .exceptions import CorruptRecordError, StorageError
from .task import Task

logger = logging.getLogger(__name__)


class Storage:
    """Loads and saves the task file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).expanduser()

    def load(self) -> List[Task]:
        """Load all tasks from the file.

        A missing file yields an empty list. Corrupt lines are logged and
        skipped.

        Raises:
            StorageError: If the file exists but cannot be read.
        """
        if not self.path.exists():
            logger.debug("No task file at %s, starting empty", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except OSError as e:
            raise StorageError(f"Could not read tasks from {self.path}: {e}") from e

        tasks = []
        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                tasks.append(Task.from_record(line))
            except CorruptRecordError as e:
                logger.warning("Skipping line %d of %s: %s", line_no, self.path, e)

        logger.debug("Loaded %d task(s) from %s", len(tasks), self.path)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        """Write all tasks to the file, replacing its contents.

        Raises:
            StorageError: If the file cannot be written.
        """
        records = [task.to_record() for task in tasks]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                for record in records:
                    f.write(record + "\n")
        except OSError as e:
            raise StorageError(f"Could not save tasks to {self.path}: {e}") from e

        logger.debug("Saved %d task(s) to %s", len(records), self.path)
