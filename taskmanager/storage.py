"""Persistence helpers: the task collection as one JSON document on disk."""

import json
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from taskmanager.models.task import TaskModel

logger = logging.getLogger(__name__)

DEFAULT_DATA_FILE = Path("tasks.json")

_TASK_LIST = TypeAdapter(list[TaskModel])


class StorageError(Exception):
    """Raised when the data file cannot be read, decoded or written."""

    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


def _dumps(tasks: Iterable[TaskModel]) -> str:
    return json.dumps([task.to_document() for task in tasks], indent=2, ensure_ascii=False) + "\n"


def save_tasks(tasks: Iterable[TaskModel], path: Path) -> None:
    """
    Write the full collection to ``path``, replacing any previous document.

    The document is written to a temporary sibling first and moved into place,
    so an interrupted write leaves the old file intact.

    Raises:
        StorageError: If the file or its directory cannot be written
    """
    path = Path(path)
    payload = _dumps(tasks)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        logger.error("Failed to save tasks to %s: %s", path, e)
        raise StorageError(f"Error saving tasks to {path}: {e.strerror or e}", path) from e
    logger.info("Saved tasks to %s", path)


def load_tasks(path: Path) -> list[TaskModel]:
    """
    Read the collection stored at ``path``.

    A missing file is the normal first-run case and yields an empty list.

    Raises:
        StorageError: If the file is unreadable, is not valid JSON, or holds
            records that fail validation (unknown status or priority, empty
            title, duplicate ids). No partial collection is ever returned.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No data file at %s; starting empty", path)
        return []

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Failed to read %s: %s", path, e)
        raise StorageError(f"Error reading {path}: {e.strerror or e}", path) from e
    except UnicodeDecodeError as e:
        logger.error("Data file %s is not valid UTF-8: %s", path, e)
        raise StorageError(f"Error: {path} is not valid UTF-8 - {e.reason} at byte {e.start}", path) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.error("Malformed JSON in %s: %s", path, e)
        raise StorageError(f"Error: Failed to parse {path} - {e}", path) from e

    if not isinstance(data, list):
        raise StorageError(f"Error: {path} must contain a JSON array of tasks", path)

    try:
        tasks = _TASK_LIST.validate_python(data)
    except ValidationError as e:
        logger.error("Invalid task data in %s: %s", path, e)
        raise StorageError(f"Error: Invalid task data in {path} - {e.error_count()} problem(s)", path) from e

    ids = [t.id for t in tasks]
    if len(ids) != len(set(ids)):
        raise StorageError(f"Error: Duplicate task ids in {path}", path)

    logger.info("Loaded %d task(s) from %s", len(tasks), path)
    return tasks
