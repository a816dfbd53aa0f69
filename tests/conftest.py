"""Pytest configuration and fixtures for taskmanager tests."""

from datetime import datetime
from io import StringIO

import pytest
from rich.console import Console

from taskmanager import server
from taskmanager.config import AppConfig
from taskmanager.console import ConsoleUI
from taskmanager.enums import Priority, TaskStatus
from taskmanager.models.task import TaskModel
from taskmanager.store import TaskStore


@pytest.fixture
def sample_task_models():
    """Three tasks covering every optional field."""
    return [
        TaskModel(
            id=1,
            title="Buy milk",
            description="Two litres, semi-skimmed",
            priority=Priority.LOW,
            created_date=datetime(2026, 10, 1, 9, 0, 0),
        ),
        TaskModel(
            id=2,
            title="File taxes",
            priority=Priority.URGENT,
            status=TaskStatus.IN_PROGRESS,
            created_date=datetime(2026, 10, 2, 9, 0, 0),
            due_date=datetime(2026, 10, 31),
        ),
        TaskModel(
            id=3,
            title="Book dentist",
            description="Check-up",
            priority=Priority.HIGH,
            status=TaskStatus.COMPLETED,
            created_date=datetime(2026, 10, 3, 9, 0, 0),
            due_date=datetime(2026, 10, 20),
        ),
    ]


@pytest.fixture
def store(sample_task_models):
    """A store pre-populated with the sample tasks."""
    return TaskStore(sample_task_models)


@pytest.fixture
def data_file(tmp_path):
    """Path to a not-yet-existing data file."""
    return tmp_path / "data" / "tasks.json"


@pytest.fixture
def make_ui(data_file):
    """Build a ConsoleUI fed by scripted lines; returns (ui, output buffer)."""

    def _make(lines, store=None, **config_overrides):
        buffer = StringIO()
        console = Console(file=buffer, width=200, color_system=None)
        script = iter(lines)

        def read_line(prompt: str) -> str:
            try:
                return next(script)
            except StopIteration:
                raise EOFError from None

        config = AppConfig(data_file=data_file, **config_overrides)
        ui = ConsoleUI(store if store is not None else TaskStore(), config, console=console, read_line=read_line)
        return ui, buffer

    return _make


@pytest.fixture
def mcp_state(data_file):
    """Point the MCP tools at a fresh data file for the duration of a test."""
    previous = server.state
    state = server.configure(data_file)
    yield state
    server.state = previous
