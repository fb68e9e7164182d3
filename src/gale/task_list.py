"""Ordered, mutable collection of tasks."""

from typing import Iterable, Iterator, List, Optional

from .exceptions import IndexOutOfRangeError
from .task import Task


class TaskList:
    """The tasks of one session, in insertion order.

    Indices are 0-based and dense; deleting a task shifts later tasks left.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks) if tasks is not None else []

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    @property
    def tasks(self) -> List[Task]:
        """A copy of the tasks, in order."""
        return list(self._tasks)

    def size(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def add(self, task: Task) -> None:
        self._tasks.append(task)

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def delete(self, index: int) -> Task:
        """Remove and return the task at ``index``."""
        self._check_index(index)
        return self._tasks.pop(index)

    def mark(self, index: int, done: bool) -> Task:
        """Set the done flag of the task at ``index`` and return the task.

        Whether the task is already in the requested state is the caller's
        concern; the flag is always written.
        """
        task = self.get(index)
        if done:
            task.mark_done()
        else:
            task.mark_not_done()
        return task

    def find(self, keyword: str) -> List[Task]:
        """Return tasks whose description contains ``keyword``, ignoring case."""
        needle = keyword.lower()
        return [task for task in self._tasks if needle in task.description.lower()]

    def _check_index(self, index: int) -> None:
        if index < 0 or index >= len(self._tasks):
            raise IndexOutOfRangeError(
                f"Oops! Task {index + 1} is lost in the wind. "
                f"Please pick a task number from 1 to {len(self._tasks)}."
                if self._tasks else
                "Oops! That task number is lost in the wind. Your task list is empty."
            )
