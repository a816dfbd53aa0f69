"""Utility functions for the task manager."""

from taskmanager.utils.formatters import (
    _format_task_concise,
    _format_task_detail,
    _format_task_line,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_json,
    _format_tasks_markdown,
)
from taskmanager.utils.parsers import (
    _parse_due_date,
    _parse_priority,
    _parse_sort,
    _parse_status,
    _parse_task_id,
)

__all__ = [
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
