"""MCP tool definitions for the task manager."""

import json

from mcp.types import ToolAnnotations
from pydantic import ValidationError

from taskmanager.enums import ResponseFormat
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
from taskmanager.server import get_state, mcp
from taskmanager.utils.formatters import (
    _format_task_concise,
    _format_task_markdown,
    _format_tasks_concise,
    _format_tasks_json,
    _format_tasks_markdown,
)


def _not_found(task_id: int) -> str:
    return f"Error: Task {task_id} not found.\nTip: Use task_list to find valid task IDs."


def _persisted(message: str) -> str:
    """Save the store and append any failure to ``message``."""
    error = get_state().save()
    if error:
        return f"{message}\nWarning: change is in memory only. {error}"
    return message


def _render_task(task: TaskModel, response_format: ResponseFormat) -> str:
    if response_format == ResponseFormat.JSON:
        return json.dumps(task.to_document(), indent=2)
    if response_format == ResponseFormat.CONCISE:
        return _format_task_concise(task)
    return _format_task_markdown(task)


@mcp.tool(
    name="task_list",
    annotations=ToolAnnotations(
        title="List Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_list(params: ListTasksInput) -> str:
    """
    List tasks, optionally filtered by status and sorted.

    USE THIS WHEN:
    - Getting an overview of the task list
    - Finding tasks in a given status (e.g. everything InProgress)
    - Ranking open work by priority or due date

    DO NOT USE WHEN:
    - You have a specific task ID → use task_get instead
    - You are looking for words in a title → use task_search instead

    Args:
        params: ListTasksInput containing status, pending_only, sort, limit and response_format

    Returns:
        Formatted list of tasks (concise, markdown or JSON)

    Examples:
        - Open tasks, most urgent first: params with pending_only=True, sort="priority"
        - Completed tasks: params with status="Completed"
    """
    store = get_state().store

    def accept(task: TaskModel) -> bool:
        if params.status is not None and task.status != params.status:
            return False
        return not params.pending_only or task.status.is_open

    tasks = list(store.list(accept, params.sort))
    total_count = len(tasks)

    if params.limit and len(tasks) > params.limit:
        tasks = tasks[: params.limit]

    if params.response_format == ResponseFormat.JSON:
        return _format_tasks_json(tasks, total_count)

    title = "Tasks"
    if params.status is not None:
        title = f"Tasks ({params.status.value})"
    elif params.pending_only:
        title = "Open tasks"

    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(tasks, title)

    return _format_tasks_markdown(tasks, title)


@mcp.tool(
    name="task_add",
    annotations=ToolAnnotations(
        title="Add Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def task_add(params: AddTaskInput) -> str:
    """
    Create a new task.

    Args:
        params: AddTaskInput containing the title and optional description, priority and due date

    Returns:
        Confirmation message with the created task ID

    Examples:
        - Simple task: params with title="Buy milk"
        - Urgent task with a deadline: params with title="File taxes", priority="Urgent", due_date="2026-04-15"
    """
    try:
        task = get_state().store.add(
            params.title,
            params.description,
            priority=params.priority,
            due_date=params.due_date,
        )
    except ValidationError as e:
        return f"Error: {e.errors()[0]['msg']}"
    return _persisted(f"Task created successfully.\nCreated task {task.id}.")


@mcp.tool(
    name="task_get",
    annotations=ToolAnnotations(
        title="Get Task Details",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_get(params: GetTaskInput) -> str:
    """
    Retrieve full details for a single task by ID.

    Args:
        params: GetTaskInput containing task_id and response_format

    Returns:
        Detailed task information (concise, markdown or JSON)
    """
    task = get_state().store.find(params.task_id)
    if task is None:
        return _not_found(params.task_id)
    return _render_task(task, params.response_format)


@mcp.tool(
    name="task_complete",
    annotations=ToolAnnotations(
        title="Complete Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_complete(params: CompleteTaskInput) -> str:
    """
    Mark a task as completed.

    Args:
        params: CompleteTaskInput containing the task_id to complete

    Returns:
        Confirmation message
    """
    task = get_state().store.complete(params.task_id)
    if task is None:
        return _not_found(params.task_id)
    return _persisted(f"Task {task.id} marked as complete.")


@mcp.tool(
    name="task_toggle",
    annotations=ToolAnnotations(
        title="Toggle Task Completion",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=False,
        openWorldHint=False,
    ),
)
async def task_toggle(params: ToggleTaskInput) -> str:
    """
    Flip a task between completed and pending.

    Args:
        params: ToggleTaskInput containing the task_id

    Returns:
        Confirmation message with the new state
    """
    task = get_state().store.toggle_completion(params.task_id)
    if task is None:
        return _not_found(params.task_id)
    state = "completed" if task.completed else "pending"
    return _persisted(f"Task {task.id} is now {state}.")


@mcp.tool(
    name="task_set_status",
    annotations=ToolAnnotations(
        title="Set Task Status",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_set_status(params: SetStatusInput) -> str:
    """
    Move a task to an explicit status (Pending, InProgress, Completed, Cancelled, OnHold).

    Args:
        params: SetStatusInput containing task_id and status

    Returns:
        Confirmation message
    """
    task = get_state().store.set_status(params.task_id, params.status)
    if task is None:
        return _not_found(params.task_id)
    return _persisted(f"Task {task.id} status set to {task.status.value}.")


@mcp.tool(
    name="task_modify",
    annotations=ToolAnnotations(
        title="Modify Task",
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_modify(params: ModifyTaskInput) -> str:
    """
    Update an existing task's title, description, priority or due date.

    CLEARING VALUES: description="" empties the description; clear_due_date=True removes the due date.

    Args:
        params: ModifyTaskInput containing task_id and the attributes to change

    Returns:
        Confirmation message
    """
    try:
        task = get_state().store.update(
            params.task_id,
            title=params.title,
            description=params.description,
            priority=params.priority,
            due_date=params.due_date,
            clear_due=params.clear_due_date,
        )
    except ValidationError as e:
        return f"Error: {e.errors()[0]['msg']}"
    if task is None:
        return _not_found(params.task_id)
    return _persisted(f"Task {task.id} modified successfully.")


@mcp.tool(
    name="task_delete",
    annotations=ToolAnnotations(
        title="Delete Task",
        readOnlyHint=False,
        destructiveHint=True,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_delete(params: DeleteTaskInput) -> str:
    """
    Delete a task. Its ID is not reused.

    Args:
        params: DeleteTaskInput containing the task_id to delete

    Returns:
        Confirmation message
    """
    if not get_state().store.remove(params.task_id):
        return _not_found(params.task_id)
    return _persisted(f"Task {params.task_id} deleted.")


@mcp.tool(
    name="task_search",
    annotations=ToolAnnotations(
        title="Search Tasks",
        readOnlyHint=True,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    ),
)
async def task_search(params: SearchTasksInput) -> str:
    """
    Find tasks whose title or description contains a keyword (case-insensitive).

    Args:
        params: SearchTasksInput containing keyword and response_format

    Returns:
        Matching tasks (concise, markdown or JSON)
    """
    tasks = get_state().store.search(params.keyword)

    if params.response_format == ResponseFormat.JSON:
        return _format_tasks_json(tasks)

    title = f"search '{params.keyword}'"
    if params.response_format == ResponseFormat.CONCISE:
        return _format_tasks_concise(tasks, title)

    return _format_tasks_markdown(tasks, f"Tasks matching '{params.keyword}'")
