"""Task maintenance: carry-over, rescheduling, title cleanup and day grouping.

These run on session start or from UI actions. Mutating operations change
the given TasksFile in place and return how much they changed; saving is
left to the caller.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta
from typing import Iterable

from moodplan.dates import DEFAULT_WEEKEND, as_day, is_weekend, next_weekday
from moodplan.models import Settings, Task, TasksFile
from moodplan.tasks import find_task

logger = logging.getLogger(__name__)

MAX_TITLE_LENGTH = 120

_MULTI_SPACE = re.compile(r"\s{2,}")


# ── Carry-over ────────────────────────────────────────────────


def carry_over_overdue(tasks_file: TasksFile, reference: date | datetime) -> int:
    """Move every open task due before the reference day onto that day.

    Returns the number of tasks moved. A second run with the same reference
    moves nothing.
    """
    today = as_day(reference)
    moved = 0
    for task in tasks_file.tasks:
        if task.done or task.due_date is None:
            continue
        if task.due_date < today:
            task.due_date = today
            moved += 1
    if moved:
        logger.info("Carried %d overdue task(s) to %s", moved, today.isoformat())
    return moved


def apply_auto_carry(settings: Settings, tasks_file: TasksFile, reference: date | datetime) -> int:
    """Carry overdue tasks only when the user enabled auto-carry."""
    if not settings.auto_carry_tasks:
        return 0
    return carry_over_overdue(tasks_file, reference)


# ── Day lookup & rescheduling ─────────────────────────────────


def tasks_for_day(tasks: Iterable[Task], day: date | datetime) -> list[Task]:
    """Tasks due on *day*, i.e. within [start of day, start of next day)."""
    start = as_day(day)
    end = start + timedelta(days=1)
    return [t for t in tasks if t.due_date is not None and start <= t.due_date < end]


def move_task(tasks_file: TasksFile, task_id: str, day: date | datetime) -> bool:
    """Reschedule a task to *day*. Returns False if the id is unknown."""
    task = find_task(tasks_file, task_id)
    if task is None:
        logger.debug("move_task: no task %s", task_id)
        return False
    task.due_date = as_day(day)
    return True


def clear_due_date(tasks_file: TasksFile, task_id: str) -> bool:
    """Make a task undated. Returns False if the id is unknown."""
    task = find_task(tasks_file, task_id)
    if task is None:
        logger.debug("clear_due_date: no task %s", task_id)
        return False
    task.due_date = None
    return True


def bulk_set_done(tasks_file: TasksFile, ids: Iterable[str], done: bool) -> int:
    """Set the completion flag on the given ids, skipping tasks already in that state."""
    wanted = set(ids)
    if not wanted:
        return 0
    changed = 0
    for task in tasks_file.tasks:
        if task.id in wanted and task.done != done:
            task.done = done
            changed += 1
    return changed


def skip_past_weekends(
    tasks_file: TasksFile,
    reference: date | datetime,
    weekend_days: tuple[str, ...] | list[str] = DEFAULT_WEEKEND,
) -> int:
    """Move open tasks stranded on a past weekend day to the following weekday.

    Returns the number of tasks adjusted. Tasks are left alone when every
    day of the week is configured as weekend.
    """
    today = as_day(reference)
    changed = 0
    for task in tasks_file.tasks:
        if task.done or task.due_date is None:
            continue
        if task.due_date >= today or not is_weekend(task.due_date, weekend_days):
            continue
        target = next_weekday(task.due_date, weekend_days)
        if target is None:
            continue
        task.due_date = target
        changed += 1
    if changed:
        logger.info("Moved %d task(s) off past weekends", changed)
    return changed


# ── Titles ────────────────────────────────────────────────────


def normalize_title(title: str, max_length: int = MAX_TITLE_LENGTH) -> str:
    """Trim, collapse whitespace runs to one space, and cap the length."""
    cleaned = _MULTI_SPACE.sub(" ", title.strip())
    return cleaned[:max_length]


def normalize_titles(tasks_file: TasksFile, max_length: int = MAX_TITLE_LENGTH) -> int:
    """Normalize every title in place. Returns how many titles changed."""
    updates = 0
    for task in tasks_file.tasks:
        cleaned = normalize_title(task.title, max_length)
        if cleaned != task.title:
            task.title = cleaned
            updates += 1
    if updates:
        logger.info("Normalized %d task title(s)", updates)
    return updates


# ── Grouping ──────────────────────────────────────────────────


def group_by_day(tasks: Iterable[Task]) -> dict[date | None, list[Task]]:
    """Bucket tasks by due day; undated tasks go under the None key.

    Within a bucket: open tasks first, then by due date, then by creation time.
    """
    buckets: dict[date | None, list[Task]] = {}
    for t in tasks:
        key = as_day(t.due_date) if t.due_date is not None else None
        buckets.setdefault(key, []).append(t)

    def sort_key(t: Task) -> tuple:
        has_no_due = t.due_date is None
        return (t.done, has_no_due, date.min if has_no_due else t.due_date, t.created_at)

    return {k: sorted(v, key=sort_key) for k, v in buckets.items()}
