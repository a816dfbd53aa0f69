"""Pydantic models for the task manager."""

from taskmanager.models.inputs import (
    AddTaskInput,
    CompleteTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    ModifyTaskInput,
    SearchTasksInput,
    SetStatusInput,
    ToggleTaskInput,
)
from taskmanager.models.task import TaskModel

__all__ = [
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
]
