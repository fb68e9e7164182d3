"""Command parser for Gale.

Turns one line of user input into a :class:`Command`. Task-creating commands
also extract an optional priority prefix and parse their dates.
"""

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from fuzzywuzzy import fuzz, process

from .exceptions import (
    IndexOutOfRangeError,
    MalformedDateSeparatorError,
    MalformedIndexError,
    MissingFieldError,
    UnparseableDateError,
    UnrecognizedCommandError,
)
from .task import Priority, Task

logger = logging.getLogger(__name__)


class DateFormat(NamedTuple):
    """An accepted date format.

    ``pattern`` is the strptime pattern and ``label`` is how users see it.
    strptime accepts one-digit fields and runs of whitespace, so ``shape``
    optionally pins the exact layout the text must have first.
    """
    pattern: str
    label: str
    shape: Optional[str] = None


DEFAULT_DATE_FORMATS: Tuple[DateFormat, ...] = (
    DateFormat("%Y-%m-%d %H:%M", "yyyy-MM-dd HH:mm",
               r"[0-9]{4}-[0-9]{2}-[0-9]{2} [0-9]{2}:[0-9]{2}"),
    DateFormat("%d/%m/%Y %H:%M", "d/M/yyyy HH:mm",
               r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{4} [0-9]{2}:[0-9]{2}"),
)

# Checked in order; the first keyword matching the leading word wins.
PRIORITY_PREFIXES: Tuple[Tuple[str, Priority], ...] = (
    ("high", Priority.HIGH),
    ("medium", Priority.MEDIUM),
    ("low", Priority.LOW),
)

COMMAND_WORDS = ("bye", "list", "mark", "unmark", "delete", "find", "todo", "deadline", "event")

INDEX_RE = re.compile(r"[+-]?[0-9]+")
EVENT_MARKERS_RE = re.compile(r"/from|/to")

TODO_USAGE = "todo [priority] [description]"
DEADLINE_USAGE = "deadline [priority] [description] /by [date]"
EVENT_USAGE = "event [priority] [description] /from [start] /to [end]"
FIND_USAGE = "find [keyword]"


class CommandType(Enum):
    """Kinds of command a line can hold."""
    BYE = "bye"
    LIST = "list"
    MARK = "mark"
    UNMARK = "unmark"
    DELETE = "delete"
    FIND = "find"
    ADD = "add"


@dataclass
class Command:
    """A classified, validated user instruction.

    ``index`` is 0-based and only set for mark/unmark/delete. ``keyword`` is
    only set for find, ``task`` only for add.
    """
    type: CommandType
    task: Optional[Task] = None
    index: Optional[int] = None
    keyword: Optional[str] = None


class DateTimeParser:
    """Parses date strings against an ordered set of accepted formats."""

    def __init__(self, formats: Sequence[DateFormat] = DEFAULT_DATE_FORMATS):
        if not formats:
            raise ValueError("At least one date format is required")
        self.formats: Tuple[DateFormat, ...] = tuple(formats)

    def parse(self, text: str) -> datetime:
        """Parse ``text`` with the first format that accepts it.

        Raises:
            UnparseableDateError: If no format accepts the text.
        """
        value = text.strip()
        for date_format in self.formats:
            if date_format.shape and not re.fullmatch(date_format.shape, value):
                continue
            try:
                return datetime.strptime(value, date_format.pattern)
            except ValueError:
                continue
        logger.debug("No date format matched %r", value)
        raise UnparseableDateError(
            f"Oops! The wind blew away your date. Please use {self.describe_formats()}.",
            value,
        )

    def describe_formats(self) -> str:
        labels = [f"'{f.label}'" for f in self.formats]
        if len(labels) == 1:
            return labels[0]
        return ", ".join(labels[:-1]) + " or " + labels[-1]


def split_priority(description: str) -> Tuple[Priority, str]:
    """Split a leading priority keyword off a description.

    Returns the priority (NONE when there is no prefix) and the remaining text.
    """
    text = description.strip()
    words = text.split(None, 1)
    if words:
        for keyword, priority in PRIORITY_PREFIXES:
            if words[0] == keyword:
                remainder = words[1] if len(words) > 1 else ""
                return priority, remainder.strip()
    return Priority.NONE, text


class CommandParser:
    """Classifies lines of input into commands."""

    def __init__(self, date_parser: Optional[DateTimeParser] = None,
                 suggest_commands: bool = True, suggestion_cutoff: int = 70):
        self.date_parser = date_parser or DateTimeParser()
        self.suggest_commands = suggest_commands
        self.suggestion_cutoff = suggestion_cutoff

    def parse(self, line: str) -> Command:
        """Parse one line of input.

        Raises:
            GaleError: A subclass naming what is wrong and the expected syntax.
        """
        text = line.strip()
        lowered = text.lower()
        if lowered == "bye":
            return Command(CommandType.BYE)
        if lowered == "list":
            return Command(CommandType.LIST)

        words = text.split(None, 1)
        word = words[0] if words else ""
        rest = words[1].strip() if len(words) > 1 else ""

        if word in ("mark", "unmark", "delete"):
            return Command(CommandType(word), index=self.parse_index(text, word))
        if word == "find":
            return Command(CommandType.FIND, keyword=self.parse_keyword(text))
        if word == "todo":
            return Command(CommandType.ADD, task=self.parse_todo(rest))
        if word == "deadline":
            return Command(CommandType.ADD, task=self.parse_deadline(rest))
        if word == "event":
            return Command(CommandType.ADD, task=self.parse_event(rest))

        raise UnrecognizedCommandError(
            "Whoosh! The wind blew away your command. Please use 'todo', 'deadline', "
            "'event', 'list', 'mark', 'unmark', 'delete', 'find' or 'bye'.",
            suggestions=self.suggest(word),
        )

    def parse_date_time(self, text: str) -> datetime:
        return self.date_parser.parse(text)

    def parse_todo(self, rest: str) -> Task:
        """Build a to-do from the text after the ``todo`` keyword."""
        missing = ("Oops! The wind blew away your to-do description. "
                   f"Please use: '{TODO_USAGE}'.")
        priority, description = split_priority(rest)
        if not description:
            raise MissingFieldError(missing)
        return Task.todo(description, priority)

    def parse_deadline(self, rest: str) -> Task:
        """Build a deadline from the text after the ``deadline`` keyword."""
        missing = ("Oops! The wind blew away your deadline description. "
                   f"Please use '{DEADLINE_USAGE}'.")
        if not rest:
            raise MissingFieldError(missing)

        parts = [part.strip() for part in rest.split("/by")]
        if len(parts) != 2 or not parts[1]:
            raise MalformedDateSeparatorError(
                f"Your deadline got tossed by the wind! Please use '{DEADLINE_USAGE}'.")

        priority, description = split_priority(parts[0])
        if not description:
            raise MissingFieldError(missing)
        return Task.deadline(description, self.parse_date_time(parts[1]), priority)

    def parse_event(self, rest: str) -> Task:
        """Build an event from the text after the ``event`` keyword.

        The start may be later than the end.
        """
        missing = ("Oops! The wind blew away your event description. "
                   f"Please use '{EVENT_USAGE}'.")
        if not rest:
            raise MissingFieldError(missing)

        parts = [part.strip() for part in EVENT_MARKERS_RE.split(rest)]
        if len(parts) != 3 or not parts[1] or not parts[2]:
            raise MalformedDateSeparatorError(
                f"Your event is lost in the wind! Please use '{EVENT_USAGE}'.")

        priority, description = split_priority(parts[0])
        if not description:
            raise MissingFieldError(missing)
        start_at = self.parse_date_time(parts[1])
        end_at = self.parse_date_time(parts[2])
        return Task.event(description, start_at, end_at, priority)

    def parse_index(self, text: str, command: str) -> int:
        """Return the 0-based task index from ``<command> <n>``.

        Only the syntax is checked here; the task list checks the upper bound.
        """
        usage = f"{command} [task number]"
        parts = text.split()
        if len(parts) != 2:
            raise MalformedIndexError(
                f"Your task number got lost in the wind. Please use '{usage}'.")
        if not INDEX_RE.fullmatch(parts[1]):
            raise MalformedIndexError(
                f"Swoosh! The wind thinks that's not a number! Please use '{usage}'.")
        number = int(parts[1])
        if number < 1:
            raise IndexOutOfRangeError(
                "Oops! That task number is lost in the wind. "
                f"Task numbers start at 1: '{usage}'.")
        return number - 1

    def parse_keyword(self, text: str) -> str:
        parts = text.split(None, 1)
        keyword = parts[1].strip() if len(parts) == 2 else ""
        if not keyword:
            raise MissingFieldError(
                f"The wind blew away your keyword. Please use '{FIND_USAGE}'.")
        return keyword

    def suggest(self, word: str) -> List[str]:
        """Suggest known commands that look like ``word``."""
        if not self.suggest_commands or not any(c.isalnum() for c in word):
            return []
        matches = process.extractBests(word.lower(), COMMAND_WORDS, scorer=fuzz.ratio,
                                       score_cutoff=self.suggestion_cutoff, limit=2)
        return [f"Did you mean '{match[0]}'?" for match in matches]


def parse_command(line: str, parser: Optional[CommandParser] = None) -> Command:
    """Parse one line with a default (or the given) parser."""
    return (parser or CommandParser()).parse(line)


def parse_date_time(text: str) -> datetime:
    """Parse a date with the default accepted formats."""
    return DateTimeParser().parse(text)
