"""Mood-aware task recommendation engine for MoodPlan.

Scores tasks against the user's current mood and a reference day, orders
them, and derives the top recommendations and a short list of quick wins.
Pure functions: nothing here reads files or mutates its inputs.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from moodplan import icons
from moodplan.dates import as_day
from moodplan.models import Mood, Task


# ── Constants ─────────────────────────────────────────────────

DONE_SCORE = -(10**9)

MOOD_MATCH_POINTS = 50
OVERDUE_POINTS = 40
DUE_TODAY_POINTS = 30
FUTURE_DUE_MAX_POINTS = 20
UNDATED_POINTS = 5
ICON_AFFINITY_POINTS = 8
SHORT_TITLE_POINTS = 4
FRESH_POINTS = 3

SHORT_TITLE_MAX = 24
QUICK_WIN_TITLE_MAX = 20
FRESH_DAYS = 2

ICON_AFFINITY: dict[Mood, frozenset[str]] = {
    Mood.CALM: frozenset({icons.RELAX, icons.HOME, icons.HEALTH}),
    Mood.FOCUSED: frozenset({icons.WORK, icons.STUDY, icons.FINANCE}),
    Mood.TIRED: frozenset({icons.HOME, icons.RELAX, icons.HEALTH}),
    Mood.INSPIRED: frozenset({icons.IDEA, icons.STUDY, icons.TRAVEL}),
    Mood.ANXIOUS: frozenset({icons.HEALTH, icons.RELAX, icons.SPORT}),
}


# ── Scoring ───────────────────────────────────────────────────


def _due_points(task: Task, today: date) -> int:
    if task.due_date is None:
        return UNDATED_POINTS
    due = as_day(task.due_date)
    if due < today:
        return OVERDUE_POINTS
    if due == today:
        return DUE_TODAY_POINTS
    return max(0, FUTURE_DUE_MAX_POINTS - (due - today).days)


def score(task: Task, mood: Mood, reference: date | datetime) -> int:
    """Priority of *task* for a user in *mood* on the *reference* day.

    Components:
    - completed tasks: DONE_SCORE, below anything an open task can reach
    - mood hint matches: +50
    - due date: overdue +40, today +30, future 20 - days (floored at 0),
      undated +5
    - icon in the mood's affinity set: +8
    - trimmed title of at most 24 chars: +4
    - created within 2 days of the reference day: +3
    """
    if task.done:
        return DONE_SCORE

    today = as_day(reference)
    s = 0
    if task.mood_hint is not None and task.mood_hint == mood:
        s += MOOD_MATCH_POINTS
    s += _due_points(task, today)
    if task.icon_name in ICON_AFFINITY.get(mood, frozenset()):
        s += ICON_AFFINITY_POINTS
    if len(task.title.strip()) <= SHORT_TITLE_MAX:
        s += SHORT_TITLE_POINTS
    if abs((today - as_day(task.created_at)).days) <= FRESH_DAYS:
        s += FRESH_POINTS
    return s


# ── Ordering ──────────────────────────────────────────────────


def ordered(tasks: Iterable[Task], mood: Mood, reference: date | datetime) -> list[Task]:
    """Tasks by descending score.

    Ties go to the earlier due date (dated before undated), then to the
    earlier creation time. Full ties keep their input order.
    """
    def sort_key(t: Task) -> tuple:
        has_no_due = t.due_date is None
        return (
            -score(t, mood, reference),
            has_no_due,
            date.min if has_no_due else t.due_date,
            t.created_at,
        )

    return sorted(tasks, key=sort_key)


def top(
    tasks: Iterable[Task],
    mood: Mood,
    reference: date | datetime,
    limit: int = 7,
) -> list[Task]:
    """First *limit* tasks of the mood ordering. A non-positive limit gives []."""
    if limit <= 0:
        return []
    return ordered(tasks, mood, reference)[:limit]


def recommend(
    tasks: Iterable[Task],
    mood: Mood,
    reference: date | datetime,
    limit: int = 7,
) -> list[Task]:
    """Top recommendations among the incomplete tasks of a collection."""
    return top([t for t in tasks if not t.done], mood, reference, limit)


# ── Quick wins ────────────────────────────────────────────────


def is_quick_win(task: Task, mood: Mood, reference: date | datetime) -> bool:
    """Short, open, not overdue, and either untagged or tagged with *mood*."""
    if task.done:
        return False
    if len(task.title.strip()) > QUICK_WIN_TITLE_MAX:
        return False
    if task.due_date is not None and as_day(task.due_date) < as_day(reference):
        return False
    return task.mood_hint is None or task.mood_hint == mood


def quick_wins(
    tasks: Iterable[Task],
    mood: Mood,
    reference: date | datetime,
    limit: int = 3,
) -> list[Task]:
    """Filter *tasks* down to quick wins, then rank and truncate them."""
    candidates = [t for t in tasks if is_quick_win(t, mood, reference)]
    return top(candidates, mood, reference, limit)
