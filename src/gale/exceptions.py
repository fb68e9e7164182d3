"""User-facing error types for Gale.

Every error here is recoverable: the session reports the message and keeps
reading commands.
"""

from typing import List, Optional


class GaleError(Exception):
    """Base class for errors reported back to the user."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None):
        self.message = message
        self.suggestions = suggestions or []
        super().__init__(message)


class UnrecognizedCommandError(GaleError):
    """The first word of the input is not a known command."""


class MissingFieldError(GaleError):
    """A description or keyword is missing or empty."""


class MalformedIndexError(GaleError):
    """A task number is missing, has extra tokens, or is not a number."""


class IndexOutOfRangeError(GaleError):
    """A task number does not refer to any task in the list."""


class MalformedDateSeparatorError(GaleError):
    """The /by or /from and /to markers do not split the input as expected."""


class UnparseableDateError(GaleError, ValueError):
    """A date matches none of the accepted formats."""

    def __init__(self, message: str, value: str, suggestions: Optional[List[str]] = None):
        self.value = value
        super().__init__(message, suggestions)


class AlreadyInStateError(GaleError):
    """A mark/unmark request would not change the task."""


class StorageError(GaleError):
    """The task file could not be read or written."""


class CorruptRecordError(GaleError, ValueError):
    """A line in the task file is not a valid task record."""

    def __init__(self, message: str, line: str):
        self.line = line
        super().__init__(message)
