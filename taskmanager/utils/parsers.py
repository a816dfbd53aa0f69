"""Parser helpers for user-typed values.

Every parser raises ``ValueError`` with a message fit to show the user;
nothing is silently coerced to a default.
"""

from datetime import datetime

from taskmanager.enums import Priority, SortOrder, TaskStatus

_PRIORITY_ALIASES = {
    "l": Priority.LOW,
    "m": Priority.MEDIUM,
    "h": Priority.HIGH,
    "u": Priority.URGENT,
}

_SORT_ALIASES = {
    "by-priority": SortOrder.PRIORITY,
    "by-due": SortOrder.DUE,
    "by-created": SortOrder.CREATED,
}


def _normalize(text: str) -> str:
    """Lowercase and drop separators so 'In-Progress' and 'in_progress' compare equal."""
    return "".join(ch for ch in text.lower() if ch not in " -_")


def _parse_task_id(text: str) -> int:
    """
    Parse a task identifier typed by the user.

    Accepts an optional trailing period ("3.") as printed by the list view.

    Raises:
        ValueError: If the text is not a positive integer
    """
    raw = text.strip().rstrip(".")
    if not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
        raise ValueError(f"Invalid task id: '{text}'")
    return int(raw)


def _parse_priority(text: str) -> Priority:
    """
    Parse a priority name (case-insensitive) or its first letter.

    Raises:
        ValueError: If the text names no priority
    """
    key = _normalize(text)
    for priority in Priority:
        if key == priority.value.lower():
            return priority
    if key in _PRIORITY_ALIASES:
        return _PRIORITY_ALIASES[key]
    choices = ", ".join(p.value for p in Priority)
    raise ValueError(f"Invalid priority: '{text}'. Choose one of: {choices}")


def _parse_status(text: str) -> TaskStatus:
    """
    Parse a status name, ignoring case, spaces, hyphens and underscores.

    Raises:
        ValueError: If the text names no status
    """
    key = _normalize(text)
    for status in TaskStatus:
        if key == status.value.lower():
            return status
    choices = ", ".join(s.value for s in TaskStatus)
    raise ValueError(f"Invalid status: '{text}'. Choose one of: {choices}")


def _parse_sort(text: str) -> SortOrder:
    """Parse a list sort keyword such as 'by-priority'."""
    key = text.strip().lower()
    if key in _SORT_ALIASES:
        return _SORT_ALIASES[key]
    raise ValueError(f"Invalid sort: '{text}'. Choose one of: {', '.join(_SORT_ALIASES)}")


def _parse_due_date(text: str) -> datetime:
    """
    Parse a due date in ISO-8601 form (YYYY-MM-DD, optionally with a time).

    Raises:
        ValueError: If the text is not a valid date
    """
    try:
        return datetime.fromisoformat(text.strip())
    except ValueError:
        raise ValueError(f"Invalid date: '{text}'. Use YYYY-MM-DD") from None
