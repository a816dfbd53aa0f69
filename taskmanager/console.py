"""Interactive menu loop for the task manager.

One line is read at a time; the first token selects the command. Bad input
is reported and the loop keeps going. Only ``exit`` (after saving), ``quit``
or end of input terminate it.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from pydantic import ValidationError
from rich.console import Console

from taskmanager.config import AppConfig
from taskmanager.enums import Priority, SortOrder, TaskStatus
from taskmanager.models.task import TaskModel
from taskmanager.storage import StorageError, load_tasks, save_tasks
from taskmanager.store import TaskPredicate, TaskStore
from taskmanager.utils.formatters import _format_task_detail, _format_task_line
from taskmanager.utils.parsers import (
    _parse_due_date,
    _parse_priority,
    _parse_sort,
    _parse_status,
    _parse_task_id,
)

logger = logging.getLogger(__name__)

HELP_TEXT = """Commands:
  add [title...]            Add a task (prompts for anything not given)
  list [filter] [sort]      List tasks; filter: all, pending or a status name;
                            sort: by-priority, by-due, by-created
  show <id>                 Show every field of a task
  toggle <id>               Flip a task between completed and pending
  done <id>                 Mark a task completed
  status <id> <status>      Set status: Pending, InProgress, Completed, Cancelled, OnHold
  priority <id> <priority>  Set priority: Low, Medium, High, Urgent
  edit <id>                 Change title, description or due date
  remove <id>               Delete a task (aliases: rm, delete)
  search <keyword...>       Find tasks by title or description
  save                      Write tasks to disk now
  help                      Show this help
  exit                      Save and exit
  quit                      Exit without saving"""


def _validation_message(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"]) or "value"
    return f"Invalid {field}: {first['msg']}"


class ConsoleUI:
    """Read-dispatch-print loop over a ``TaskStore``."""

    def __init__(
        self,
        store: TaskStore,
        config: AppConfig,
        console: Console | None = None,
        read_line: Callable[[str], str] | None = None,
    ):
        self.store = store
        self.config = config
        self.console = console or Console()
        self._read = read_line or self._console_input
        self.running = False
        # Set when the data file exists but could not be loaded; blocks the implicit save.
        self._protect_data_file = False
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "add": self._cmd_add,
            "list": self._cmd_list,
            "show": self._cmd_show,
            "toggle": self._cmd_toggle,
            "done": self._cmd_done,
            "complete": self._cmd_done,
            "status": self._cmd_status,
            "priority": self._cmd_priority,
            "edit": self._cmd_edit,
            "remove": self._cmd_remove,
            "rm": self._cmd_remove,
            "delete": self._cmd_remove,
            "search": self._cmd_search,
            "save": self._cmd_save,
            "help": self._cmd_help,
            "exit": self._cmd_exit,
            "quit": self._cmd_quit,
        }

    # -------------------- output --------------------
    def _say(self, message: str, style: str | None = None) -> None:
        self.console.print(message, style=style, markup=False, highlight=False)

    def _error(self, message: str) -> None:
        self._say(message, style="red")

    def _console_input(self, prompt: str) -> str:
        # Prompts can embed task titles; show them verbatim.
        return self.console.input(prompt, markup=False, emoji=False)

    # -------------------- lifecycle --------------------
    def load(self) -> bool:
        """
        Fill the store from the data file.

        On failure the store starts empty, the error is shown, and the implicit
        save on exit is disabled so the unreadable file is not overwritten.

        Returns:
            True if the file was loaded (or did not exist yet)
        """
        try:
            tasks = load_tasks(self.config.data_file)
        except StorageError as e:
            self.store.replace_all([])
            self._protect_data_file = True
            self._error(str(e))
            self._say(
                "Starting with an empty task list. The data file will not be overwritten "
                "on exit unless you run 'save'.",
                style="yellow",
            )
            return False
        self.store.replace_all(tasks)
        return True

    def run(self) -> int:
        """Run until the user exits. Returns the process exit code."""
        self.running = True
        self._say("Task Manager. Type 'help' for commands.", style="bold")
        while self.running:
            try:
                self.handle_line(self._read("> "))
            except (EOFError, KeyboardInterrupt):
                # Input is gone, also mid-prompt; save what we have and stop.
                self._say("")
                self._shutdown(interrupted=True)
                break
        self._say("Goodbye.")
        return 0

    def handle_line(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        handler = self._commands.get(tokens[0].lower())
        if handler is None:
            self._error(f"Unknown command '{tokens[0]}'. Type 'help' for instructions.")
            return
        handler(tokens)

    def _save(self) -> bool:
        try:
            save_tasks(self.store.snapshot(), self.config.data_file)
        except StorageError as e:
            self._error(str(e))
            return False
        return True

    def _shutdown(self, interrupted: bool = False) -> None:
        if self.config.save_on_exit:
            if self._protect_data_file:
                self._say(
                    f"Not saving: {self.config.data_file} could not be loaded at startup and was left untouched.",
                    style="yellow",
                )
            elif not self._save() and not interrupted:
                self._say("Tasks were not saved. Fix the problem and 'exit' again, or 'quit' to discard.")
                return
        self.running = False

    # -------------------- argument helpers --------------------
    def _task_id_arg(self, tokens: list[str], usage: str, extra: int = 0) -> int | None:
        if len(tokens) != 2 + extra:
            self._error(f"Usage: {usage}")
            return None
        try:
            return _parse_task_id(tokens[1])
        except ValueError as e:
            self._error(str(e))
            return None

    def _not_found(self, task_id: int) -> None:
        self._error(f"Task {task_id} not found.")

    def _prompt(self, label: str) -> str:
        return self._read(label).strip()

    # -------------------- commands --------------------
    def _cmd_add(self, tokens: list[str]) -> None:
        title = " ".join(tokens[1:]).strip() or self._prompt("Enter task title: ")
        if not title:
            self._error("Title required.")
            return
        description = self._prompt("Enter task description: ")
        try:
            raw_priority = self._prompt("Enter priority (Low/Medium/High/Urgent) [Medium]: ")
            priority = _parse_priority(raw_priority) if raw_priority else Priority.MEDIUM
            raw_due = self._prompt("Enter due date (YYYY-MM-DD) or leave empty: ")
            due_date = _parse_due_date(raw_due) if raw_due else None
        except ValueError as e:
            self._error(f"{e}. Task not added.")
            return
        try:
            task = self.store.add(title, description, priority, due_date)
        except ValidationError as e:
            self._error(_validation_message(e))
            return
        self._say(f"Task '{task.title}' added with id {task.id}.", style="green")

    def _cmd_list(self, tokens: list[str]) -> None:
        predicate: TaskPredicate | None = None
        sort = SortOrder.INSERTION
        for arg in tokens[1:]:
            lowered = arg.lower()
            try:
                if lowered.startswith("by-"):
                    sort = _parse_sort(lowered)
                elif lowered == "all":
                    predicate = None
                elif lowered == "pending":
                    predicate = _is_open
                else:
                    predicate = _has_status(_parse_status(arg))
            except ValueError as e:
                self._error(str(e))
                return
        tasks = list(self.store.list(predicate, sort))
        if not tasks:
            self._say("No tasks found.")
            return
        for task in tasks:
            self._say(_format_task_line(task), style=_STATUS_STYLES.get(task.status))
            if task.description:
                self._say(f"    {task.description}", style="dim")

    def _cmd_show(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, "show <id>")
        if task_id is None:
            return
        task = self.store.find(task_id)
        if task is None:
            self._not_found(task_id)
            return
        self._say(_format_task_detail(task))

    def _cmd_toggle(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, "toggle <id>")
        if task_id is None:
            return
        task = self.store.toggle_completion(task_id)
        if task is None:
            self._not_found(task_id)
            return
        state = "completed" if task.completed else "not completed"
        self._say(f"Task '{task.title}' marked as {state}.", style="green")

    def _cmd_done(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, "done <id>")
        if task_id is None:
            return
        task = self.store.complete(task_id)
        if task is None:
            self._not_found(task_id)
            return
        self._say(f"Task '{task.title}' marked as completed!", style="green")

    def _cmd_status(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, "status <id> <status>", extra=1)
        if task_id is None:
            return
        try:
            status = _parse_status(tokens[2])
        except ValueError as e:
            self._error(str(e))
            return
        task = self.store.set_status(task_id, status)
        if task is None:
            self._not_found(task_id)
            return
        self._say(f"Task '{task.title}' is now {status.value}.", style="green")

    def _cmd_priority(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, "priority <id> <priority>", extra=1)
        if task_id is None:
            return
        try:
            priority = _parse_priority(tokens[2])
        except ValueError as e:
            self._error(str(e))
            return
        task = self.store.update(task_id, priority=priority)
        if task is None:
            self._not_found(task_id)
            return
        self._say(f"Task '{task.title}' priority set to {priority.value}.", style="green")

    def _cmd_edit(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, "edit <id>")
        if task_id is None:
            return
        task = self.store.find(task_id)
        if task is None:
            self._not_found(task_id)
            return
        title = self._prompt(f"Title [{task.title}]: ")
        description = self._prompt("Description (blank keeps current): ")
        raw_due = self._prompt("Due date YYYY-MM-DD (blank keeps, '-' clears): ")
        due_date: datetime | None = None
        try:
            if raw_due and raw_due != "-":
                due_date = _parse_due_date(raw_due)
        except ValueError as e:
            self._error(f"{e}. Task not changed.")
            return
        try:
            self.store.update(
                task_id,
                title=title or None,
                description=description or None,
                due_date=due_date,
                clear_due=raw_due == "-",
            )
        except ValidationError as e:
            self._error(_validation_message(e))
            return
        self._say(f"Task {task_id} updated.", style="green")

    def _cmd_remove(self, tokens: list[str]) -> None:
        task_id = self._task_id_arg(tokens, f"{tokens[0].lower()} <id>")
        if task_id is None:
            return
        if not self.store.remove(task_id):
            self._not_found(task_id)
            return
        self._say(f"Task {task_id} deleted.", style="green")

    def _cmd_search(self, tokens: list[str]) -> None:
        keyword = " ".join(tokens[1:]).strip()
        if not keyword:
            self._error("Usage: search <keyword>")
            return
        results = self.store.search(keyword)
        if not results:
            self._say("No tasks found matching the search criteria.")
            return
        self._say(f"Search results for '{keyword}':", style="bold")
        for task in results:
            self._say(_format_task_line(task))

    def _cmd_save(self, tokens: list[str]) -> None:
        if self._save():
            self._protect_data_file = False
            self._say(f"Saved {len(self.store)} task(s) to {self.config.data_file}.", style="green")

    def _cmd_help(self, tokens: list[str]) -> None:
        self._say(HELP_TEXT)

    def _cmd_exit(self, tokens: list[str]) -> None:
        self._shutdown()

    def _cmd_quit(self, tokens: list[str]) -> None:
        logger.info("Quitting without saving")
        self.running = False


_STATUS_STYLES = {
    TaskStatus.COMPLETED: "green",
    TaskStatus.IN_PROGRESS: "yellow",
    TaskStatus.CANCELLED: "dim",
    TaskStatus.ON_HOLD: "magenta",
}


def _is_open(task: TaskModel) -> bool:
    return task.status.is_open


def _has_status(status: TaskStatus) -> TaskPredicate:
    return lambda task: task.status == status
