"""Tests for the command parser."""

from datetime import datetime

import pytest

from gale.exceptions import (
    IndexOutOfRangeError,
    MalformedDateSeparatorError,
    MalformedIndexError,
    MissingFieldError,
    UnparseableDateError,
    UnrecognizedCommandError,
)
from gale.parser import (
    PRIORITY_PREFIXES,
    CommandParser,
    CommandType,
    DateFormat,
    DateTimeParser,
    parse_command,
    parse_date_time,
    split_priority,
)
from gale.task import Priority, TaskType


class TestDateTimeParser:
    """Test parsing dates against the accepted formats."""

    def setup_method(self):
        self.parser = DateTimeParser()

    def test_parse_iso_format(self):
        assert self.parser.parse("2024-03-15 18:30") == datetime(2024, 3, 15, 18, 30)

    def test_parse_day_month_year_format(self):
        assert self.parser.parse("15/3/2024 18:30") == datetime(2024, 3, 15, 18, 30)

    def test_parse_strips_whitespace(self):
        assert self.parser.parse("  2024-03-15 18:30 ") == datetime(2024, 3, 15, 18, 30)

    def test_invalid_month_rejected(self):
        with pytest.raises(UnparseableDateError) as excinfo:
            self.parser.parse("2024-13-01 00:00")

        assert excinfo.value.value == "2024-13-01 00:00"
        assert "'yyyy-MM-dd HH:mm' or 'd/M/yyyy HH:mm'" in excinfo.value.message

    @pytest.mark.parametrize("text", [
        "2024-3-5 8:30",
        "2024-03-15   18:30",
        "2024-03-15 8:5",
        "2024-03-15 8:30",
        "15/3/24 18:30",
        "15/3/2024 18:5",
        "15/3/2024\t18:30",
    ])
    def test_loose_layouts_rejected(self, text):
        """Test fixed-width fields and the single space are enforced."""
        with pytest.raises(UnparseableDateError):
            self.parser.parse(text)

    def test_one_digit_day_and_month_in_second_format(self):
        assert self.parser.parse("5/3/2024 08:05") == datetime(2024, 3, 5, 8, 5)

    def test_deadline_with_loose_date_rejected(self):
        with pytest.raises(UnparseableDateError):
            CommandParser().parse("deadline x /by 2024-3-5 8:30")

    def test_date_without_time_rejected(self):
        with pytest.raises(UnparseableDateError):
            self.parser.parse("2023-12/31")

    def test_first_matching_format_wins(self):
        """Test formats are tried in the order given."""
        parser = DateTimeParser([
            DateFormat("%d/%m/%Y %H:%M", "d/M/yyyy HH:mm"),
            DateFormat("%m/%d/%Y %H:%M", "M/d/yyyy HH:mm"),
        ])

        assert parser.parse("4/3/2024 10:00") == datetime(2024, 3, 4, 10, 0)

    def test_formats_are_immutable(self):
        assert isinstance(self.parser.formats, tuple)

    def test_module_level_helper(self):
        assert parse_date_time("1/1/2025 00:00") == datetime(2025, 1, 1, 0, 0)


class TestPriorityPrefix:
    """Test priority extraction from descriptions."""

    def test_precedence_order(self):
        assert [keyword for keyword, _ in PRIORITY_PREFIXES] == ["high", "medium", "low"]

    @pytest.mark.parametrize("keyword,priority", [
        ("high", Priority.HIGH),
        ("medium", Priority.MEDIUM),
        ("low", Priority.LOW),
    ])
    def test_prefix_stripped(self, keyword, priority):
        assert split_priority(f"{keyword} water plants") == (priority, "water plants")

    def test_no_prefix(self):
        assert split_priority("water plants") == (Priority.NONE, "water plants")

    def test_prefix_must_be_whole_word(self):
        assert split_priority("highway trip") == (Priority.NONE, "highway trip")

    def test_only_leading_word_counts(self):
        assert split_priority("low high") == (Priority.LOW, "high")

    def test_prefix_is_case_sensitive(self):
        assert split_priority("HIGH tide") == (Priority.NONE, "HIGH tide")


class TestCommandParser:
    """Test classification of whole input lines."""

    def setup_method(self):
        self.parser = CommandParser()

    @pytest.mark.parametrize("line", ["bye", "BYE", "  Bye  "])
    def test_bye(self, line):
        assert self.parser.parse(line).type is CommandType.BYE

    @pytest.mark.parametrize("line", ["list", "LIST", "List"])
    def test_list(self, line):
        assert self.parser.parse(line).type is CommandType.LIST

    def test_list_with_arguments_not_recognized(self):
        with pytest.raises(UnrecognizedCommandError):
            self.parser.parse("list all")

    def test_unrecognized_command(self):
        with pytest.raises(UnrecognizedCommandError) as excinfo:
            self.parser.parse("hello")

        assert "Please use 'todo', 'deadline', 'event'" in excinfo.value.message

    def test_keywords_are_case_sensitive(self):
        with pytest.raises(UnrecognizedCommandError):
            self.parser.parse("TODO read book")

    def test_keyword_must_be_whole_token(self):
        with pytest.raises(UnrecognizedCommandError):
            self.parser.parse("todoread book")

    def test_suggestions_for_typos(self):
        with pytest.raises(UnrecognizedCommandError) as excinfo:
            self.parser.parse("dedline return book /by 2024-03-15 18:30")

        assert excinfo.value.suggestions[0] == "Did you mean 'deadline'?"

    def test_suggestions_can_be_disabled(self):
        parser = CommandParser(suggest_commands=False)

        with pytest.raises(UnrecognizedCommandError) as excinfo:
            parser.parse("dedline x")

        assert excinfo.value.suggestions == []

    def test_empty_line_not_recognized(self):
        with pytest.raises(UnrecognizedCommandError) as excinfo:
            self.parser.parse("   ")

        assert excinfo.value.suggestions == []


class TestTaskCommands:
    """Test todo, deadline and event parsing."""

    def setup_method(self):
        self.parser = CommandParser()

    def test_todo(self):
        command = self.parser.parse("todo  read book  ")

        assert command.type is CommandType.ADD
        assert command.task.kind is TaskType.TODO
        assert command.task.description == "read book"
        assert command.task.priority == Priority.NONE
        assert command.task.done is False

    @pytest.mark.parametrize("keyword,priority", [
        ("high", Priority.HIGH),
        ("medium", Priority.MEDIUM),
        ("low", Priority.LOW),
    ])
    def test_todo_with_priority(self, keyword, priority):
        task = self.parser.parse(f"todo {keyword} read book").task

        assert task.description == "read book"
        assert task.priority == priority

    @pytest.mark.parametrize("line", ["todo", "todo   ", "todo high"])
    def test_todo_missing_description(self, line):
        with pytest.raises(MissingFieldError) as excinfo:
            self.parser.parse(line)

        assert "'todo [priority] [description]'" in excinfo.value.message

    def test_deadline(self):
        task = self.parser.parse("deadline buy milk /by 2024-03-15 18:30").task

        assert task.kind is TaskType.DEADLINE
        assert task.description == "buy milk"
        assert task.due_at == datetime(2024, 3, 15, 18, 30)

    def test_deadline_second_date_format_and_priority(self):
        task = self.parser.parse("deadline medium buy milk /by 15/3/2024 18:30").task

        assert task.priority == Priority.MEDIUM
        assert task.description == "buy milk"
        assert task.due_at == datetime(2024, 3, 15, 18, 30)

    def test_deadline_missing_by(self):
        with pytest.raises(MalformedDateSeparatorError) as excinfo:
            self.parser.parse("deadline buy milk")

        assert "/by [date]" in excinfo.value.message

    @pytest.mark.parametrize("line", [
        "deadline buy milk /by",
        "deadline buy milk /by 2024-03-15 18:30 /by 2024-03-16 18:30",
    ])
    def test_deadline_bad_split(self, line):
        with pytest.raises(MalformedDateSeparatorError):
            self.parser.parse(line)

    @pytest.mark.parametrize("line", ["deadline", "deadline /by 2024-03-15 18:30"])
    def test_deadline_missing_description(self, line):
        with pytest.raises(MissingFieldError):
            self.parser.parse(line)

    def test_deadline_bad_date(self):
        with pytest.raises(UnparseableDateError):
            self.parser.parse("deadline buy milk /by tomorrow")

    def test_event(self):
        task = self.parser.parse("event meet /from 2024-03-15 18:30 /to 2024-03-15 19:30").task

        assert task.kind is TaskType.EVENT
        assert task.description == "meet"
        assert task.start_at == datetime(2024, 3, 15, 18, 30)
        assert task.end_at == datetime(2024, 3, 15, 19, 30)
        assert task.start_at < task.end_at

    def test_event_end_before_start_accepted(self):
        task = self.parser.parse("event meet /from 2024-03-15 19:30 /to 2024-03-15 18:30").task

        assert task.start_at > task.end_at

    def test_event_with_priority_and_mixed_formats(self):
        task = self.parser.parse("event low picnic /from 1/6/2024 12:00 /to 2024-06-01 15:00").task

        assert task.priority == Priority.LOW
        assert task.description == "picnic"
        assert task.end_at == datetime(2024, 6, 1, 15, 0)

    @pytest.mark.parametrize("line", [
        "event meet",
        "event meet /from 2024-03-15 18:30",
        "event meet /from 2024-03-15 18:30 /to",
        "event meet /from /to 2024-03-15 19:30",
        "event meet /from 2024-03-15 18:30 /to 2024-03-15 19:30 /to 2024-03-15 20:30",
    ])
    def test_event_bad_split(self, line):
        with pytest.raises(MalformedDateSeparatorError) as excinfo:
            self.parser.parse(line)

        assert "/from [start] /to [end]" in excinfo.value.message

    def test_event_missing_description(self):
        with pytest.raises(MissingFieldError):
            self.parser.parse("event")

    def test_event_bad_date(self):
        with pytest.raises(UnparseableDateError):
            self.parser.parse("event meet /from noon /to 2024-03-15 19:30")


class TestIndexAndFindCommands:
    """Test mark, unmark, delete and find parsing."""

    def setup_method(self):
        self.parser = CommandParser()

    @pytest.mark.parametrize("word,command_type", [
        ("mark", CommandType.MARK),
        ("unmark", CommandType.UNMARK),
        ("delete", CommandType.DELETE),
    ])
    def test_index_is_zero_based(self, word, command_type):
        command = self.parser.parse(f"{word} 3")

        assert command.type is command_type
        assert command.index == 2

    def test_index_out_of_list_range_is_not_parser_concern(self):
        assert self.parser.parse("mark 500").index == 499

    def test_not_a_number(self):
        with pytest.raises(MalformedIndexError) as excinfo:
            self.parser.parse("mark abc")

        assert "'mark [task number]'" in excinfo.value.message

    @pytest.mark.parametrize("line", ["delete", "unmark 1 2"])
    def test_wrong_token_count(self, line):
        with pytest.raises(MalformedIndexError):
            self.parser.parse(line)

    @pytest.mark.parametrize("line", ["mark 0", "mark -2"])
    def test_non_positive_number(self, line):
        with pytest.raises(IndexOutOfRangeError):
            self.parser.parse(line)

    def test_find(self):
        command = self.parser.parse("find   milk tea  ")

        assert command.type is CommandType.FIND
        assert command.keyword == "milk tea"

    @pytest.mark.parametrize("line", ["find", "find    "])
    def test_find_missing_keyword(self, line):
        with pytest.raises(MissingFieldError) as excinfo:
            self.parser.parse(line)

        assert "'find [keyword]'" in excinfo.value.message

    def test_parse_command_helper(self):
        assert parse_command("find book").keyword == "book"
