"""MCP tool definitions for the task manager."""

# Import all tools to register them with the MCP server
from taskmanager.tools.core import (
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

__all__ = [
    "task_list",
    "task_add",
    "task_get",
    "task_complete",
    "task_toggle",
    "task_set_status",
    "task_modify",
    "task_delete",
    "task_search",
]
