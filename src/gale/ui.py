"""Console presentation for Gale."""

from typing import IO, Iterable, List, Optional

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from .task import Priority, Task

GALE_THEME = Theme({
    "banner": "bold cyan",
    "muted": "dim",
    "success": "green",
    "error": "bold red",
    "hint": "yellow",
    "task_done": "dim",
    "priority_high": "bold red",
    "priority_medium": "yellow",
    "priority_low": "cyan",
    "priority_none": "default",
})

LOGO = r"""
  ____       _
 / ___| __ _| | ___
| |  _ / _` | |/ _ \
| |_| | (_| | |  __/
 \____|\__,_|_|\___|
"""


def make_console(file: Optional[IO[str]] = None, no_color: bool = False) -> Console:
    """Create a console with the Gale theme.

    Long task lines are never wrapped so each task stays on one line.
    """
    return Console(file=file, theme=GALE_THEME, no_color=no_color,
                   highlight=False, soft_wrap=True)


def get_priority_style(priority: Priority) -> str:
    return f"priority_{priority.value}"


class Ui:
    """Prints everything the user sees."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or make_console()

    def greet(self) -> None:
        self.console.print(Text(LOGO, style="banner"))
        self.console.print("Hello! I'm Gale, your trusty task breeze.")
        self.console.print("What can I blow your way today?", style="muted")

    def farewell(self) -> None:
        self.console.print("Bye! May the wind be at your back. See you soon!")

    def show_task_list(self, tasks: Iterable[Task]) -> None:
        tasks = list(tasks)
        if not tasks:
            self.console.print("Your task list is as calm as a still breeze. No tasks yet!")
            return
        self.console.print("Here are the tasks swirling in your list:")
        self._print_numbered(tasks)

    def show_added(self, task: Task, count: int) -> None:
        self.console.print("Got it. I've added this task to the breeze:", style="success")
        self._print_task(task, indent="  ")
        self.console.print(f"Now you have {count} {_plural(count)} in the list.")

    def show_deleted(self, task: Task, count: int) -> None:
        self.console.print("Poof! I've blown this task away:", style="success")
        self._print_task(task, indent="  ")
        self.console.print(f"Now you have {count} {_plural(count)} in the list.")

    def show_marked(self, task: Task, done: bool) -> None:
        if done:
            self.console.print("Nice! I've marked this task as done:", style="success")
        else:
            self.console.print("OK, I've marked this task as not done yet:", style="success")
        self._print_task(task, indent="  ")

    def show_found(self, tasks: List[Task], keyword: str) -> None:
        if not tasks:
            self.console.print(Text(f"The wind found no tasks matching '{keyword}'."))
            return
        self.console.print(Text(f"Here are the tasks matching '{keyword}':"))
        self._print_numbered(tasks)

    def show_error(self, message: str, suggestions: Optional[List[str]] = None) -> None:
        self.console.print(Text(message, style="error"))
        for suggestion in suggestions or []:
            self.console.print(Text(suggestion, style="hint"))

    def show_loading_error(self, message: str) -> None:
        self.show_error(message)
        self.console.print("Starting with an empty task list.", style="muted")

    def _print_numbered(self, tasks: List[Task]) -> None:
        for number, task in enumerate(tasks, start=1):
            self._print_task(task, indent=f"{number}.")

    def _print_task(self, task: Task, indent: str = "") -> None:
        style = "task_done" if task.done else get_priority_style(task.priority)
        line = Text(indent)
        if indent and not indent.endswith(" "):
            line.append(" ")
        line.append(task.render(), style=style)
        self.console.print(line)


def _plural(count: int) -> str:
    return "task" if count == 1 else "tasks"
