"""Tests for the MCP tools."""

import json
from unittest.mock import patch

import pytest

from taskmanager import (
    AddTaskInput,
    CompleteTaskInput,
    DeleteTaskInput,
    GetTaskInput,
    ListTasksInput,
    ModifyTaskInput,
    Priority,
    ResponseFormat,
    SearchTasksInput,
    SetStatusInput,
    SortOrder,
    StorageError,
    TaskStatus,
    ToggleTaskInput,
    load_tasks,
    save_tasks,
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
from taskmanager import server


@pytest.fixture
def seeded_state(mcp_state, sample_task_models):
    """MCP state holding the sample tasks."""
    mcp_state.store.replace_all(sample_task_models)
    return mcp_state


class TestServerState:
    """Tests for configure() and persistence from tools."""

    def test_configure_loads_existing_file(self, data_file, sample_task_models):
        save_tasks(sample_task_models, data_file)
        previous = server.state
        try:
            state = server.configure(data_file)
            assert server.get_state() is state
            assert len(state.store) == 3
            assert state.load_error is None
        finally:
            server.state = previous

    def test_configure_with_malformed_file(self, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("nope", encoding="utf-8")
        previous = server.state
        try:
            state = server.configure(data_file)
            assert isinstance(state.load_error, StorageError)
            assert len(state.store) == 0
        finally:
            server.state = previous

    def test_configure_with_invalid_utf8_file(self, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_bytes(b"[\xff\xfe]")
        previous = server.state
        try:
            state = server.configure(data_file)
            assert "not valid UTF-8" in str(state.load_error)
            assert len(state.store) == 0
        finally:
            server.state = previous

    @pytest.mark.asyncio
    async def test_mutation_refused_to_overwrite_unloadable_file(self, data_file):
        data_file.parent.mkdir(parents=True)
        data_file.write_text("nope", encoding="utf-8")
        previous = server.state
        try:
            server.configure(data_file)
            result = await task_add(AddTaskInput(title="X"))
            assert "Warning: change is in memory only" in result
            assert data_file.read_text(encoding="utf-8") == "nope"
        finally:
            server.state = previous


class TestTaskList:
    """Tests for the task_list tool."""

    @pytest.mark.asyncio
    async def test_list_markdown(self, seeded_state):
        result = await task_list(ListTasksInput())
        assert "# Tasks" in result
        assert "*3 task(s)*" in result
        assert "Buy milk" in result
        assert "**Priority**: Urgent" in result

    @pytest.mark.asyncio
    async def test_list_json(self, seeded_state):
        result = await task_list(ListTasksInput(response_format=ResponseFormat.JSON))
        data = json.loads(result)
        assert data["total"] == 3
        assert data["count"] == 3
        assert data["tasks"][0]["createdDate"] == "2026-10-01T09:00:00"

    @pytest.mark.asyncio
    async def test_list_concise(self, seeded_state):
        result = await task_list(ListTasksInput(response_format=ResponseFormat.CONCISE))
        assert result.startswith("3 task(s) | Tasks")
        assert "#2: File taxes (Urgent, due:2026-10-31, InProgress)" in result
        markdown = await task_list(ListTasksInput())
        assert len(result) < len(markdown)

    @pytest.mark.asyncio
    async def test_list_with_limit(self, seeded_state):
        result = await task_list(ListTasksInput(limit=2, response_format=ResponseFormat.JSON))
        data = json.loads(result)
        assert data["total"] == 3
        assert data["count"] == 2

    @pytest.mark.asyncio
    async def test_list_by_status(self, seeded_state):
        result = await task_list(ListTasksInput(status=TaskStatus.COMPLETED, response_format=ResponseFormat.JSON))
        assert [t["id"] for t in json.loads(result)["tasks"]] == [3]

    @pytest.mark.asyncio
    async def test_list_pending_sorted_by_priority(self, seeded_state):
        result = await task_list(
            ListTasksInput(pending_only=True, sort=SortOrder.PRIORITY, response_format=ResponseFormat.JSON)
        )
        assert [t["id"] for t in json.loads(result)["tasks"]] == [2, 1]

    @pytest.mark.asyncio
    async def test_list_empty(self, mcp_state):
        result = await task_list(ListTasksInput())
        assert "No tasks found." in result


class TestTaskAdd:
    """Tests for the task_add tool."""

    @pytest.mark.asyncio
    async def test_add_persists(self, mcp_state, data_file):
        result = await task_add(AddTaskInput(title="Buy milk", priority=Priority.HIGH, due_date="2026-11-01"))
        assert "Task created successfully" in result
        assert "Created task 1" in result
        saved = load_tasks(data_file)
        assert saved[0].title == "Buy milk"
        assert saved[0].priority == Priority.HIGH

    @pytest.mark.asyncio
    async def test_add_continues_ids(self, seeded_state):
        result = await task_add(AddTaskInput(title="Fourth"))
        assert "Created task 4" in result

    @pytest.mark.asyncio
    async def test_add_reports_save_failure(self, mcp_state, data_file):
        with patch("taskmanager.server.save_tasks", side_effect=StorageError("Error saving tasks: read-only", data_file)):
            result = await task_add(AddTaskInput(title="X"))
        assert "Task created successfully" in result
        assert "Warning: change is in memory only. Error saving tasks: read-only" in result


class TestTaskGet:
    """Tests for the task_get tool."""

    @pytest.mark.asyncio
    async def test_get_markdown(self, seeded_state):
        result = await task_get(GetTaskInput(task_id=1))
        assert "[1] Buy milk" in result
        assert "Two litres" in result

    @pytest.mark.asyncio
    async def test_get_json(self, seeded_state):
        result = await task_get(GetTaskInput(task_id=2, response_format=ResponseFormat.JSON))
        data = json.loads(result)
        assert data["status"] == "InProgress"
        assert data["dueDate"] == "2026-10-31T00:00:00"

    @pytest.mark.asyncio
    async def test_get_concise(self, seeded_state):
        result = await task_get(GetTaskInput(task_id=1, response_format=ResponseFormat.CONCISE))
        assert result == "#1: Buy milk (Low)"

    @pytest.mark.asyncio
    async def test_get_not_found(self, seeded_state):
        result = await task_get(GetTaskInput(task_id=42))
        assert result.startswith("Error: Task 42 not found.")


class TestTaskMutations:
    """Tests for complete, toggle, set_status, modify and delete."""

    @pytest.mark.asyncio
    async def test_complete(self, seeded_state, data_file):
        result = await task_complete(CompleteTaskInput(task_id=1))
        assert "Task 1 marked as complete." in result
        assert load_tasks(data_file)[0].completed is True

    @pytest.mark.asyncio
    async def test_complete_not_found(self, seeded_state):
        result = await task_complete(CompleteTaskInput(task_id=42))
        assert "Error" in result

    @pytest.mark.asyncio
    async def test_toggle_twice(self, seeded_state):
        first = await task_toggle(ToggleTaskInput(task_id=1))
        second = await task_toggle(ToggleTaskInput(task_id=1))
        assert "now completed" in first
        assert "now pending" in second
        assert seeded_state.store.find(1).completed is False

    @pytest.mark.asyncio
    async def test_set_status(self, seeded_state):
        result = await task_set_status(SetStatusInput(task_id=1, status=TaskStatus.CANCELLED))
        assert "Cancelled" in result
        assert seeded_state.store.find(1).status == TaskStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_modify(self, seeded_state):
        result = await task_modify(ModifyTaskInput(task_id=2, title="File taxes today", clear_due_date=True))
        assert "Task 2 modified successfully." in result
        task = seeded_state.store.find(2)
        assert task.title == "File taxes today"
        assert task.due_date is None

    @pytest.mark.asyncio
    async def test_modify_clears_description(self, seeded_state):
        await task_modify(ModifyTaskInput(task_id=1, description=""))
        assert seeded_state.store.find(1).description == ""

    @pytest.mark.asyncio
    async def test_modify_not_found(self, seeded_state):
        result = await task_modify(ModifyTaskInput(task_id=42, title="X"))
        assert result.startswith("Error: Task 42 not found.")

    @pytest.mark.asyncio
    async def test_delete(self, seeded_state, data_file):
        result = await task_delete(DeleteTaskInput(task_id=1))
        assert "Task 1 deleted." in result
        assert [t.id for t in load_tasks(data_file)] == [2, 3]

    @pytest.mark.asyncio
    async def test_delete_not_found_is_noop(self, seeded_state):
        result = await task_delete(DeleteTaskInput(task_id=42))
        assert "not found" in result
        assert len(seeded_state.store) == 3


class TestTaskSearch:
    """Tests for the task_search tool."""

    @pytest.mark.asyncio
    async def test_search_markdown(self, seeded_state):
        result = await task_search(SearchTasksInput(keyword="milk"))
        assert "Tasks matching 'milk'" in result
        assert "Buy milk" in result

    @pytest.mark.asyncio
    async def test_search_concise(self, seeded_state):
        result = await task_search(SearchTasksInput(keyword="TAX", response_format=ResponseFormat.CONCISE))
        assert result.startswith("1 task(s) | search 'TAX'")

    @pytest.mark.asyncio
    async def test_search_json_no_match(self, seeded_state):
        result = await task_search(SearchTasksInput(keyword="holiday", response_format=ResponseFormat.JSON))
        assert json.loads(result) == {"total": 0, "count": 0, "tasks": []}
