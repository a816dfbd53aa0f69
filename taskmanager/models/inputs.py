"""Input models for the task manager MCP tools."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskmanager.enums import Priority, ResponseFormat, SortOrder, TaskStatus


class ListTasksInput(BaseModel):
    """Input model for listing tasks."""

    model_config = ConfigDict(str_strip_whitespace=True)

    status: TaskStatus | None = Field(
        default=None,
        description="Only return tasks in this status (Pending, InProgress, Completed, Cancelled, OnHold)",
    )
    pending_only: bool = Field(default=False, description="Only return tasks that are not completed or cancelled")
    sort: SortOrder = Field(
        default=SortOrder.INSERTION,
        description="Ordering: insertion, priority (most severe first), due, or created",
    )
    limit: int | None = Field(default=50, description="Maximum number of tasks to return", ge=1, le=500)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class AddTaskInput(BaseModel):
    """Input model for adding a new task."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., description="Task title (required)", min_length=1)
    description: str = Field(default="", description="Longer free-form description")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority: Low, Medium, High or Urgent")
    due_date: datetime | None = Field(default=None, description="Due date as an ISO-8601 date or timestamp")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class GetTaskInput(BaseModel):
    """Input model for getting a single task."""

    task_id: int = Field(..., description="Numeric task ID", ge=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )


class CompleteTaskInput(BaseModel):
    """Input model for completing a task."""

    task_id: int = Field(..., description="Numeric task ID to complete", ge=1)


class ToggleTaskInput(BaseModel):
    """Input model for flipping a task's completion state."""

    task_id: int = Field(..., description="Numeric task ID to toggle", ge=1)


class SetStatusInput(BaseModel):
    """Input model for setting an explicit task status."""

    task_id: int = Field(..., description="Numeric task ID", ge=1)
    status: TaskStatus = Field(..., description="New status")


class ModifyTaskInput(BaseModel):
    """Input model for modifying a task.

    Fields left as None are not changed.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    task_id: int = Field(..., description="Numeric task ID to modify", ge=1)
    title: str | None = Field(default=None, description="New title", min_length=1)
    description: str | None = Field(default=None, description="New description (empty string clears it)")
    priority: Priority | None = Field(default=None, description="New priority")
    due_date: datetime | None = Field(default=None, description="New due date")
    clear_due_date: bool = Field(default=False, description="Remove the due date")


class DeleteTaskInput(BaseModel):
    """Input model for deleting a task."""

    task_id: int = Field(..., description="Numeric task ID to delete", ge=1)


class SearchTasksInput(BaseModel):
    """Input model for keyword search."""

    model_config = ConfigDict(str_strip_whitespace=True)

    keyword: str = Field(..., description="Case-insensitive text to look for in titles and descriptions", min_length=1)
    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description="Output format: 'concise', 'markdown' or 'json'",
    )
