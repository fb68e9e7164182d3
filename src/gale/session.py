"""Interactive session: applies parsed commands to the task list."""

import logging
from typing import Iterable, Optional

from .config import ConfigModel
from .exceptions import AlreadyInStateError, GaleError, IndexOutOfRangeError, StorageError
from .parser import Command, CommandParser, CommandType
from .storage import Storage
from .task import Task
from .task_list import TaskList
from .ui import Ui

logger = logging.getLogger(__name__)


class Session:
    """Owns the task list for one run of Gale."""

    def __init__(self, task_list: TaskList, storage: Storage, ui: Ui,
                 parser: Optional[CommandParser] = None):
        self.task_list = task_list
        self.storage = storage
        self.ui = ui
        self.parser = parser or CommandParser()

    @classmethod
    def from_config(cls, config: ConfigModel, ui: Ui) -> "Session":
        """Build a session whose tasks are loaded from the configured file.

        If the file cannot be read the error is shown and the session starts
        with an empty list.
        """
        storage = Storage(config.get_data_path())
        try:
            task_list = TaskList(storage.load())
        except StorageError as e:
            logger.error("Loading tasks failed: %s", e)
            ui.show_loading_error(e.message)
            task_list = TaskList()
        parser = CommandParser(suggest_commands=config.suggest_commands,
                               suggestion_cutoff=config.suggestion_cutoff)
        return cls(task_list, storage, ui, parser)

    def run(self, lines: Iterable[str]) -> None:
        """Greet, then execute lines until ``bye`` or end of input."""
        self.ui.greet()
        for line in lines:
            try:
                if not self.execute(line):
                    break
            except GaleError as e:
                logger.debug("Command %r failed: %s", line.strip(), e)
                self.ui.show_error(e.message, e.suggestions)
        self.ui.farewell()

    def execute(self, line: str) -> bool:
        """Execute one line. Returns False when the session should end.

        Raises:
            GaleError: If the line is invalid or the command cannot be applied.
        """
        if not line.strip():
            return True

        command = self.parser.parse(line)
        if command.type is CommandType.BYE:
            return False
        if command.type is CommandType.LIST:
            self.ui.show_task_list(self.task_list)
        elif command.type is CommandType.FIND:
            self.ui.show_found(self.task_list.find(command.keyword), command.keyword)
        elif command.type is CommandType.ADD:
            self.task_list.add(command.task)
            self.ui.show_added(command.task, self.task_list.size())
            self.save()
        elif command.type is CommandType.DELETE:
            task = self._delete(command)
            self.ui.show_deleted(task, self.task_list.size())
            self.save()
        elif command.type in (CommandType.MARK, CommandType.UNMARK):
            self._mark(command)
        else:
            raise ValueError(f"Unhandled command type: {command.type!r}")
        return True

    def _delete(self, command: Command) -> Task:
        try:
            return self.task_list.delete(command.index)
        except IndexOutOfRangeError as e:
            raise IndexOutOfRangeError(f"{e.message} {_index_usage(command.type)}") from e

    def _mark(self, command: Command) -> None:
        done = command.type is CommandType.MARK
        try:
            task = self.task_list.get(command.index)
        except IndexOutOfRangeError as e:
            raise IndexOutOfRangeError(f"{e.message} {_index_usage(command.type)}") from e
        if task.done == done:
            other = CommandType.UNMARK if done else CommandType.MARK
            raise AlreadyInStateError(
                "Oops! This task is already marked as " + ("done. " if done else "not done. ")
                + f"Use '{other.value} [task number]' to change it.")
        self.task_list.mark(command.index, done)
        self.ui.show_marked(task, done)
        self.save()

    def save(self) -> None:
        """Persist the task list; a failure is shown but not undone."""
        try:
            self.storage.save(self.task_list)
        except StorageError as e:
            logger.error("Saving tasks failed: %s", e)
            self.ui.show_error(
                "Oops! The wind interfered with saving your tasks. Please try again.")


def _index_usage(command_type: CommandType) -> str:
    return f"Please use '{command_type.value} [task number]'."
