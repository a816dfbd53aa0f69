"""Enums for the task manager."""

from enum import Enum


class ResponseFormat(str, Enum):
    """Output format for tool responses."""

    CONCISE = "concise"  # One line per task
    MARKDOWN = "markdown"  # Human-readable (default)
    JSON = "json"  # Machine-readable with all fields


class TaskStatus(str, Enum):
    """Lifecycle state of a task."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    ON_HOLD = "OnHold"

    @property
    def is_open(self) -> bool:
        return self not in (TaskStatus.COMPLETED, TaskStatus.CANCELLED)


class Priority(str, Enum):
    """Task priority levels, declared from least to most severe."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    URGENT = "Urgent"

    @property
    def severity(self) -> int:
        return _PRIORITY_SEVERITY[self]


_PRIORITY_SEVERITY = {priority: rank for rank, priority in enumerate(Priority)}


class SortOrder(str, Enum):
    """Orderings supported when listing tasks."""

    INSERTION = "insertion"
    PRIORITY = "priority"  # Most severe first, then earliest due date
    DUE = "due"
    CREATED = "created"
