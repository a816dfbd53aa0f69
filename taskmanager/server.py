"""FastMCP server initialization for the task manager."""

import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from taskmanager.storage import DEFAULT_DATA_FILE, StorageError, load_tasks, save_tasks
from taskmanager.store import TaskStore

logger = logging.getLogger(__name__)

# Initialize the MCP server
mcp = FastMCP("taskmanager_mcp")


class ServerState:
    """The store served by the MCP tools and the file it persists to."""

    def __init__(self, data_file: Path = DEFAULT_DATA_FILE):
        self.data_file = Path(data_file)
        self.store = TaskStore()
        self.load_error: StorageError | None = None

    def load(self) -> None:
        try:
            self.store.replace_all(load_tasks(self.data_file))
            self.load_error = None
        except StorageError as e:
            self.store.replace_all([])
            self.load_error = e

    def save(self) -> str | None:
        """Persist the store. Returns an error message, or None on success."""
        if self.load_error is not None:
            return f"{self.load_error}\nTip: the data file was not overwritten; fix or move it and restart."
        try:
            save_tasks(self.store.snapshot(), self.data_file)
        except StorageError as e:
            return str(e)
        return None


state = ServerState()


def configure(data_file: Path) -> ServerState:
    """Point the tools at ``data_file`` and load it."""
    global state
    state = ServerState(data_file)
    state.load()
    if state.load_error is not None:
        logger.error("Could not load %s: %s", data_file, state.load_error)
    return state


def get_state() -> ServerState:
    return state


def run() -> None:
    """Run the MCP server."""
    mcp.run()
