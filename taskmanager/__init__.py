"""
Task manager.

Keeps an ordered task list in memory, persists it as a single JSON document,
and drives it from an interactive prompt or as MCP tools over stdio.
"""

# Re-export enums
from taskmanager.enums import Priority, ResponseFormat, SortOrder, TaskStatus

# Re-export models
from taskmanager.models import (
    AddTaskInput,
    CompleteTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    ModifyTaskInput,
    SearchTasksInput,
    SetStatusInput,
    TaskModel,
    ToggleTaskInput,
)

# Re-export the store, persistence and console loop
from taskmanager.config import AppConfig
from taskmanager.console import ConsoleUI
from taskmanager.storage import StorageError, load_tasks, save_tasks
from taskmanager.store import TaskStore

# Re-export MCP server instance
from taskmanager.server import configure, mcp

# Re-export tools
from taskmanager.tools import (
    task_add,
    task_complete,
    task_delete,
    task_get,
    task_list,
    task_modify,
    task_search,
    task_set_status,
    task_toggle,
)

# Re-export utilities (including private functions used by tests)
from taskmanager.utils import (
    _format_task_concise,
    _format_task_detail,
    _format_task_line,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_json,
    _format_tasks_markdown,
    _parse_due_date,
    _parse_priority,
    _parse_sort,
    _parse_status,
    _parse_task_id,
)

__all__ = [
    # Enums
    "Priority",
    "ResponseFormat",
    "SortOrder",
    "TaskStatus",
    # Task model
    "TaskModel",
    # Tool input models
    "ListTasksInput",
    "AddTaskInput",
    "GetTaskInput",
    "CompleteTaskInput",
    "ToggleTaskInput",
    "SetStatusInput",
    "ModifyTaskInput",
    "DeleteTaskInput",
    "SearchTasksInput",
    # Core
    "AppConfig",
    "ConsoleUI",
    "StorageError",
    "TaskStore",
    "load_tasks",
    "save_tasks",
    # MCP server
    "configure",
    "mcp",
    # Tools
    "task_list",
    "task_add",
    "task_get",
    "task_complete",
    "task_toggle",
    "task_set_status",
    "task_modify",
    "task_delete",
    "task_search",
    # Utilities
    "_parse_task_id",
    "_parse_priority",
    "_parse_status",
    "_parse_sort",
    "_parse_due_date",
    "_format_task_line",
    "_format_task_detail",
    "_format_task_concise",
    "_format_tasks_concise",
    "_format_task_markdown",
    "_format_tasks_markdown",
    "_format_tasks_json",
]
