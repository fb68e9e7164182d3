"""Gale - a breezy command-line task tracker."""

__version__ = "0.1.0"
__author__ = "Gale Team"

from .task import Task, TaskType, Priority
from .task_list import TaskList
from .parser import Command, CommandParser, CommandType, parse_command, parse_date_time

__all__ = [
    "Task",
    "TaskType",
    "Priority",
    "TaskList",
    "Command",
    "CommandParser",
    "CommandType",
    "parse_command",
    "parse_date_time",
    "__version__",
]
