"""Core task model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from taskmanager.enums import Priority, TaskStatus


class TaskModel(BaseModel):
    """A single task record.

    Serialized with camelCase keys (``createdDate``, ``dueDate``) so the JSON
    document matches the on-disk schema. Assignments are validated, so an edit
    can never leave a record with an empty title or an unknown status.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    description: str = ""
    status: TaskStatus = TaskStatus.PENDING
    priority: Priority = Priority.MEDIUM
    created_date: datetime = Field(default_factory=datetime.now, frozen=True)
    due_date: datetime | None = None

    @model_validator(mode="before")
    @classmethod
    def _migrate_completed_flag(cls, data: Any) -> Any:
        # Documents written by the boolean-only variant carry "completed" and no "status".
        if isinstance(data, dict) and "status" not in data and "completed" in data:
            data = dict(data)
            completed = data.pop("completed")
            if not isinstance(completed, bool):
                raise ValueError("'completed' must be a boolean")
            data["status"] = TaskStatus.COMPLETED if completed else TaskStatus.PENDING
        return data

    @property
    def completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready dict written to the data file."""
        return self.model_dump(mode="json", by_alias=True)
