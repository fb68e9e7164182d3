"""Task data model for Gale."""

from dataclasses import FrozenInstanceError, dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from .exceptions import CorruptRecordError


# Dates inside persisted records always use the first accepted input format
RECORD_DATE_FORMAT = "%Y-%m-%d %H:%M"
RECORD_SEPARATOR = " | "


class Priority(Enum):
    """Task priority levels."""
    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskType(Enum):
    """Task variants, valued by their one-letter tag."""
    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def format_display_date(value: datetime) -> str:
    """Format a date for display, e.g. ``Mar 15 2024 18:30``."""
    return f"{value:%b} {value.day} {value:%Y %H:%M}"


@dataclass
class Task:
    """A tracked task.

    The ``kind`` tag decides which date fields are present:

    * TODO: none
    * DEADLINE: ``due_at``
    * EVENT: ``start_at`` and ``end_at`` (their order is not checked)

    Only ``done`` changes after creation; assigning any other field raises
    ``FrozenInstanceError``.
    """

    kind: TaskType
    description: str
    priority: Priority = Priority.NONE
    done: bool = False
    due_at: Optional[datetime] = None
    start_at: Optional[datetime] = None
    end_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.description or not self.description.strip():
            raise ValueError("Task description must not be empty")

        has_due = self.due_at is not None
        has_span = (self.start_at is not None, self.end_at is not None)
        if self.kind is TaskType.TODO:
            valid = not has_due and has_span == (False, False)
        elif self.kind is TaskType.DEADLINE:
            valid = has_due and has_span == (False, False)
        elif self.kind is TaskType.EVENT:
            valid = not has_due and has_span == (True, True)
        else:
            raise ValueError(f"Unknown task type: {self.kind!r}")
        if not valid:
            raise ValueError(f"Invalid date fields for {self.kind.name} task")

    def __setattr__(self, name, value):
        # Fields are assigned once by __init__; afterwards only done may change
        if name != "done" and name in self.__dict__:
            raise FrozenInstanceError(f"cannot assign to field {name!r}")
        super().__setattr__(name, value)

    @classmethod
    def todo(cls, description: str, priority: Priority = Priority.NONE) -> "Task":
        return cls(TaskType.TODO, description, priority)

    @classmethod
    def deadline(cls, description: str, due_at: datetime,
                 priority: Priority = Priority.NONE) -> "Task":
        return cls(TaskType.DEADLINE, description, priority, due_at=due_at)

    @classmethod
    def event(cls, description: str, start_at: datetime, end_at: datetime,
              priority: Priority = Priority.NONE) -> "Task":
        return cls(TaskType.EVENT, description, priority,
                   start_at=start_at, end_at=end_at)

    def mark_done(self):
        """Mark the task as done."""
        self.done = True

    def mark_not_done(self):
        """Mark the task as not done."""
        self.done = False

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def render(self) -> str:
        """Return the human-readable line for this task."""
        line = f"[{self.kind.value}][{self.status_icon}] {self.description}"
        if self.kind is TaskType.TODO:
            return line
        if self.kind is TaskType.DEADLINE:
            return f"{line} (by: {format_display_date(self.due_at)})"
        if self.kind is TaskType.EVENT:
            return (f"{line} (from: {format_display_date(self.start_at)}"
                    f" to: {format_display_date(self.end_at)})")
        raise ValueError(f"Unknown task type: {self.kind!r}")

    def __str__(self) -> str:
        return self.render()

    def to_record(self) -> str:
        """Return the one-line persisted form of this task.

        Priority is not part of the record.
        """
        fields = [self.kind.value, "1" if self.done else "0", self.description]
        if self.kind is TaskType.DEADLINE:
            fields.append(self.due_at.strftime(RECORD_DATE_FORMAT))
        elif self.kind is TaskType.EVENT:
            fields.append(self.start_at.strftime(RECORD_DATE_FORMAT))
            fields.append(self.end_at.strftime(RECORD_DATE_FORMAT))
        elif self.kind is not TaskType.TODO:
            raise ValueError(f"Unknown task type: {self.kind!r}")
        return RECORD_SEPARATOR.join(fields)

    @classmethod
    def from_record(cls, line: str) -> "Task":
        """Parse a persisted record back into a task.

        The description may itself contain the separator, so dates are taken
        from the right-hand end of the line.

        Raises:
            CorruptRecordError: If the line is not a valid record.
        """
        record = line.rstrip("\r\n")
        parts = record.split(RECORD_SEPARATOR, 2)
        if len(parts) != 3:
            raise CorruptRecordError(f"Expected at least 3 fields: {record!r}", line)

        tag, done_flag, rest = parts
        try:
            kind = TaskType(tag.strip())
        except ValueError:
            raise CorruptRecordError(f"Unknown task type {tag!r}", line) from None
        if done_flag.strip() not in ("0", "1"):
            raise CorruptRecordError(f"Done flag must be 0 or 1, got {done_flag!r}", line)
        done = done_flag.strip() == "1"

        date_count = {TaskType.TODO: 0, TaskType.DEADLINE: 1, TaskType.EVENT: 2}[kind]
        if date_count:
            fields = rest.rsplit(RECORD_SEPARATOR, date_count)
            if len(fields) != date_count + 1:
                raise CorruptRecordError(
                    f"{kind.name} record needs {date_count} date field(s): {record!r}", line)
            description, dates = fields[0], fields[1:]
        else:
            description, dates = rest, []

        try:
            parsed = [datetime.strptime(d.strip(), RECORD_DATE_FORMAT) for d in dates]
        except ValueError as e:
            raise CorruptRecordError(f"Bad date in record {record!r}: {e}", line) from e

        try:
            if kind is TaskType.TODO:
                task = cls.todo(description)
            elif kind is TaskType.DEADLINE:
                task = cls.deadline(description, parsed[0])
            else:
                task = cls.event(description, parsed[0], parsed[1])
        except ValueError as e:
            raise CorruptRecordError(str(e), line) from e

        if done:
            task.mark_done()
        return task
