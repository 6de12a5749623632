"""Task CRUD, validation and queries for MoodPlan.

The TasksFile is the in-memory task repository: callers load it, hand it
to the engines, and save it back once they are done mutating it.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Iterable

from moodplan.dates import as_day, parse_day
from moodplan.fileio import read_json, write_json_atomic
from moodplan.models import Mood, Task, TasksFile
from moodplan.workspace import get_user_timezone, tasks_path as _tasks_path

logger = logging.getLogger(__name__)


# ── Validation ────────────────────────────────────────────────


VALID_MOODS = {m.value for m in Mood}

# snake_case update keys -> the camelCase keys of Task.to_dict()
_FIELD_ALIASES = {
    "mood_hint": "moodHint",
    "due_date": "dueDate",
    "done": "isDone",
    "color_id": "colorID",
    "icon_name": "iconName",
    "created_at": "createdAt",
}


def validate_task(task: dict[str, Any]) -> list[str]:
    """Validate task fields and return list of errors (empty if valid)."""
    errors = []
    if "title" not in task:
        errors.append("Missing required field: title")
    elif not str(task["title"] or "").strip():
        errors.append("title must not be blank")

    mood = task.get("moodHint", task.get("mood_hint"))
    if mood is not None and not isinstance(mood, Mood) and str(mood).lower() not in VALID_MOODS:
        errors.append(f"Invalid mood hint: {mood}")

    due = task.get("dueDate", task.get("due_date"))
    if due is not None and not isinstance(due, (date, datetime)):
        try:
            parse_day(due)
        except ValueError:
            errors.append(f"Invalid due date: {due}")

    done = task.get("isDone", task.get("done"))
    if done is not None and not isinstance(done, bool):
        errors.append("isDone must be a boolean")

    return errors


# ── Persistence ───────────────────────────────────────────────


def load_tasks(root: Path | None = None) -> TasksFile:
    """Load tasks.json into a TasksFile model."""
    return TasksFile.from_list(read_json(_tasks_path(root), default=[]), get_user_timezone(root))


def save_tasks(tasks_file: TasksFile, root: Path | None = None) -> None:
    """Save the whole task collection back to tasks.json atomically."""
    write_json_atomic(_tasks_path(root), tasks_file.to_list())
    logger.debug("Saved %d task(s)", len(tasks_file.tasks))


# ── CRUD ──────────────────────────────────────────────────────


def _index_of(tasks_file: TasksFile, task_id: str) -> int | None:
    return next((i for i, t in enumerate(tasks_file.tasks) if t.id == task_id), None)


def find_task(tasks_file: TasksFile, task_id: str) -> Task | None:
    i = _index_of(tasks_file, task_id)
    return tasks_file.tasks[i] if i is not None else None


def create_task(tasks_file: TasksFile, task_data: dict[str, Any]) -> tuple[Task, list[str]]:
    """Validate *task_data* and append the resulting task. Returns (task, errors).

    Without an "id" a fresh one is generated; an id that is already taken
    is an error.
    """
    errors = validate_task(task_data)
    requested_id = task_data.get("id")
    if not errors and requested_id and _index_of(tasks_file, str(requested_id)) is not None:
        errors = [f"Task ID already exists: {requested_id}"]
    if errors:
        return Task(), errors

    task = Task.from_dict(task_data)
    task.title = task.title.strip()
    tasks_file.tasks.append(task)
    logger.info("Created task %s", task.id)
    return task, []


def update_task(tasks_file: TasksFile, task_id: str, updates: dict[str, Any]) -> tuple[Task | None, list[str]]:
    """Merge *updates* (snake_case or stored camelCase keys) into a task.

    Returns (task, errors). The stored task is only swapped out when the
    merged record validates; the id itself cannot change.
    """
    i = _index_of(tasks_file, task_id)
    if i is None:
        return None, [f"Task not found: {task_id}"]

    merged = tasks_file.tasks[i].to_dict()
    for key, value in updates.items():
        merged[_FIELD_ALIASES.get(key, key)] = value
    merged["id"] = task_id

    errors = validate_task(merged)
    if errors:
        return None, errors
    updated = Task.from_dict(merged)
    updated.title = updated.title.strip()
    tasks_file.tasks[i] = updated
    return updated, []


def replace_task(tasks_file: TasksFile, updated: Task) -> bool:
    """Swap in an edited record with the same id. False if the id is unknown."""
    i = _index_of(tasks_file, updated.id)
    if i is None:
        return False
    tasks_file.tasks[i] = updated
    return True


def delete_task(tasks_file: TasksFile, task_id: str) -> bool:
    i = _index_of(tasks_file, task_id)
    if i is None:
        return False
    del tasks_file.tasks[i]
    logger.info("Deleted task %s", task_id)
    return True


def toggle_task(tasks_file: TasksFile, task_id: str) -> Task | None:
    """Flip the completion flag. Returns the task, or None for an unknown id."""
    task = find_task(tasks_file, task_id)
    if task is not None:
        task.done = not task.done
    return task


def add_many(tasks_file: TasksFile, tasks: Iterable[Task]) -> int:
    items = list(tasks)
    tasks_file.tasks.extend(items)
    return len(items)


# ── Queries ───────────────────────────────────────────────────


def query_tasks(
    tasks_file: TasksFile,
    mood: Mood | None = None,
    done: bool | None = None,
    due_from: date | datetime | None = None,
    due_to: date | datetime | None = None,
) -> list[Task]:
    """Filter by mood hint, completion and an inclusive due-day range.

    Asking for a due range excludes undated tasks.
    """
    start = as_day(due_from) if due_from is not None else None
    end = as_day(due_to) if due_to is not None else None

    result = []
    for t in tasks_file.tasks:
        if mood is not None and t.mood_hint != mood:
            continue
        if done is not None and t.done != done:
            continue
        if start is not None or end is not None:
            if t.due_date is None:
                continue
            if start is not None and t.due_date < start:
                continue
            if end is not None and t.due_date > end:
                continue
        result.append(t)
    return result


def overdue_tasks(tasks_file: TasksFile, reference: date | datetime) -> list[Task]:
    """Open tasks due strictly before the reference day."""
    today = as_day(reference)
    return [t for t in tasks_file.tasks if not t.done and t.due_date is not None and t.due_date < today]


def search_tasks(tasks_file: TasksFile, text: str) -> list[Task]:
    """Case-insensitive substring search over title and note. Blank query returns all."""
    q = (text or "").strip().lower()
    if not q:
        return list(tasks_file.tasks)
    return [
        t for t in tasks_file.tasks
        if q in t.title.lower() or (t.note is not None and q in t.note.lower())
    ]


def grouped_by_mood(tasks_file: TasksFile) -> list[tuple[Mood | None, list[Task]]]:
    """Tasks grouped by mood hint, untagged first, then by mood value."""
    groups: dict[Mood | None, list[Task]] = {}
    for t in tasks_file.tasks:
        groups.setdefault(t.mood_hint, []).append(t)
    keys = sorted(groups, key=lambda m: m.value if m is not None else "")
    return [(k, groups[k]) for k in keys]
