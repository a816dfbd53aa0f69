"""Formatting utilities for task output."""

import json

from taskmanager.enums import TaskStatus
from taskmanager.models.task import TaskModel

STATUS_MARKERS = {
    TaskStatus.PENDING: "[ ]",
    TaskStatus.IN_PROGRESS: "[~]",
    TaskStatus.COMPLETED: "[✓]",
    TaskStatus.CANCELLED: "[x]",
    TaskStatus.ON_HOLD: "[-]",
}


def _format_date(value) -> str:
    return value.date().isoformat() if value else ""


def _format_task_line(task: TaskModel) -> str:
    """
    Format a task as one line for the console list view.

    Output: "[✓] 1. Buy milk - Priority: High (Due: 2026-10-20)"
    """
    marker = STATUS_MARKERS[task.status]
    line = f"{marker} {task.id}. {task.title} - Priority: {task.priority.value}"
    if task.status not in (TaskStatus.PENDING, TaskStatus.COMPLETED):
        line += f" [{task.status.value}]"
    if task.due_date:
        line += f" (Due: {_format_date(task.due_date)})"
    return line


def _format_task_detail(task: TaskModel) -> str:
    """Format every field of a task for the console 'show' view."""
    lines = [
        _format_task_line(task),
        f"    Status:   {task.status.value}",
        f"    Created:  {task.created_date.isoformat(sep=' ', timespec='seconds')}",
        f"    Due:      {_format_date(task.due_date) or '-'}",
    ]
    if task.description:
        lines.append(f"    {task.description}")
    return "\n".join(lines)


def _format_task_concise(task: TaskModel) -> str:
    """
    Format a single task in concise format.

    Output: "#5: Title (High, due:2024-12-31, Completed)"
    """
    title = task.title[:50]

    meta = [task.priority.value]
    if task.due_date:
        meta.append(f"due:{_format_date(task.due_date)}")
    if task.status != TaskStatus.PENDING:
        meta.append(task.status.value)

    return f"#{task.id}: {title} ({', '.join(meta)})"


def _format_tasks_concise(tasks: list[TaskModel], title: str | None = None) -> str:
    """
    Format a list of tasks in concise format.

    Output:
    2 task(s) | search 'milk'
    #1: Buy milk (Medium)
    #4: Oat milk (Low, Completed)
    """
    if not tasks:
        return "0 tasks"

    header = f"{len(tasks)} task(s)"
    if title:
        header = f"{len(tasks)} task(s) | {title}"

    return "\n".join([header] + [_format_task_concise(task) for task in tasks])


def _format_task_markdown(task: TaskModel) -> str:
    """Format a single task as markdown."""
    lines = [f"### {STATUS_MARKERS[task.status]} [{task.id}] {task.title}"]

    details = [
        f"**Status**: {task.status.value}",
        f"**Priority**: {task.priority.value}",
        f"**Created**: {_format_date(task.created_date)}",
    ]
    if task.due_date:
        details.append(f"**Due**: {_format_date(task.due_date)}")
    lines.append(" | ".join(details))

    if task.description:
        lines.append(task.description)

    return "\n".join(lines)


def _format_tasks_markdown(tasks: list[TaskModel], title: str = "Tasks") -> str:
    """Format a list of tasks as markdown."""
    if not tasks:
        return f"# {title}\n\nNo tasks found."

    lines = [f"# {title}", f"*{len(tasks)} task(s)*", ""]

    for task in tasks:
        lines.append(_format_task_markdown(task))
        lines.append("")

    return "\n".join(lines)


def _format_tasks_json(tasks: list[TaskModel], total: int | None = None) -> str:
    """Format tasks as a JSON object with counts, using the on-disk field names."""
    return json.dumps(
        {
            "total": len(tasks) if total is None else total,
            "count": len(tasks),
            "tasks": [task.to_document() for task in tasks],
        },
        indent=2,
    )
