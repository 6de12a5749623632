"""Windowed mood and task statistics for MoodPlan.

Every function aggregates a snapshot of tasks and/or day plans over an
inclusive day range [start, end]. Both bounds are truncated to calendar
days. Inputs are never mutated and nothing is persisted; an inverted or
empty range produces zero values instead of an error.

A task's reference day is its due date when it has one, otherwise the day
it was created.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable

from moodplan.dates import as_day, day_range, days_between, weekday_number
from moodplan.models import DayPlan, DaySummary, Mood, MoodShare, StatsSummary, Task


def reference_day(task: Task) -> date:
    if task.due_date is not None:
        return as_day(task.due_date)
    return as_day(task.created_at)


def _day_count(start: date, end: date) -> int:
    return max(1, days_between(start, end) + 1)


# ── Mood ──────────────────────────────────────────────────────


def mood_histogram(
    plans: Iterable[DayPlan],
    start: date | datetime,
    end: date | datetime,
) -> dict[Mood, int]:
    """Number of days per mood in range. Days without a mood are not counted."""
    s, e = as_day(start), as_day(end)
    counts = {m: 0 for m in Mood}
    for p in plans:
        if p.selected_mood is None:
            continue
        if s <= as_day(p.date) <= e:
            counts[p.selected_mood] += 1
    return counts


def mood_share(
    plans: Iterable[DayPlan],
    start: date | datetime,
    end: date | datetime,
) -> list[MoodShare]:
    """Share of mood-tagged days per mood, one entry per mood in enum order."""
    hist = mood_histogram(plans, start, end)
    total = sum(hist.values())
    return [
        MoodShare(mood=m, count=hist[m], share=(hist[m] / total) if total else 0.0)
        for m in Mood
    ]


# ── Completion ────────────────────────────────────────────────


def completion_rate(
    tasks: Iterable[Task],
    start: date | datetime,
    end: date | datetime,
    include_undated: bool = False,
) -> float:
    """Done fraction of the tasks due in range.

    With include_undated, undated tasks created in range also count.
    Returns 0.0 when no task is relevant.
    """
    s, e = as_day(start), as_day(end)
    relevant = 0
    done = 0
    for t in tasks:
        if t.due_date is not None:
            day = as_day(t.due_date)
        elif include_undated:
            day = as_day(t.created_at)
        else:
            continue
        if s <= day <= e:
            relevant += 1
            if t.done:
                done += 1
    if relevant == 0:
        return 0.0
    return done / relevant


def daily_summary(
    tasks: Iterable[Task],
    plans: Iterable[DayPlan],
    start: date | datetime,
    end: date | datetime,
) -> list[DaySummary]:
    """One DaySummary per day of the range, including days with no data."""
    s, e = as_day(start), as_day(end)

    totals: dict[date, int] = {}
    dones: dict[date, int] = {}
    for t in tasks:
        day = reference_day(t)
        if day < s or day > e:
            continue
        totals[day] = totals.get(day, 0) + 1
        if t.done:
            dones[day] = dones.get(day, 0) + 1

    # a later plan for the same day overrides an earlier one
    mood_by_day: dict[date, Mood | None] = {}
    for p in plans:
        day = as_day(p.date)
        if s <= day <= e:
            mood_by_day[day] = p.selected_mood

    return [
        DaySummary(
            date=day,
            mood=mood_by_day.get(day),
            total=totals.get(day, 0),
            done=dones.get(day, 0),
        )
        for day in day_range(s, e)
    ]


def longest_productive_streak(
    tasks: Iterable[Task],
    start: date | datetime,
    end: date | datetime,
) -> int:
    """Longest run of consecutive days in range with at least one completed task."""
    s, e = as_day(start), as_day(end)
    productive = {reference_day(t) for t in tasks if t.done}

    best = 0
    streak = 0
    for day in day_range(s, e):
        if day in productive:
            streak += 1
            best = max(best, streak)
        else:
            streak = 0
    return best


def weekday_completion(
    tasks: Iterable[Task],
    start: date | datetime,
    end: date | datetime,
    week_start: str = "mon",
) -> dict[int, int]:
    """Completed tasks in range per weekday.

    Keys are 1..7 with 1 = *week_start* (Monday=1 ... Sunday=7 by default);
    all seven keys are always present.
    """
    s, e = as_day(start), as_day(end)
    counts = {i: 0 for i in range(1, 8)}
    for t in tasks:
        if not t.done:
            continue
        day = reference_day(t)
        if s <= day <= e:
            counts[weekday_number(day, week_start)] += 1
    return counts


# ── Averages ──────────────────────────────────────────────────


def average_created_per_day(
    tasks: Iterable[Task],
    start: date | datetime,
    end: date | datetime,
) -> float:
    s, e = as_day(start), as_day(end)
    created = sum(1 for t in tasks if s <= as_day(t.created_at) <= e)
    return created / _day_count(s, e)


def average_done_per_day(
    tasks: Iterable[Task],
    start: date | datetime,
    end: date | datetime,
) -> float:
    s, e = as_day(start), as_day(end)
    done = sum(1 for t in tasks if t.done and s <= reference_day(t) <= e)
    return done / _day_count(s, e)


# ── Summary ───────────────────────────────────────────────────


def compute_stats(
    tasks: Iterable[Task],
    plans: Iterable[DayPlan],
    start: date | datetime,
    end: date | datetime,
    week_start: str = "mon",
    include_undated: bool = False,
) -> StatsSummary:
    """Run every statistic over one range."""
    tasks = list(tasks)
    plans = list(plans)
    s, e = as_day(start), as_day(end)
    return StatsSummary(
        start=s,
        end=e,
        mood_histogram=mood_histogram(plans, s, e),
        mood_shares=mood_share(plans, s, e),
        completion_rate=completion_rate(tasks, s, e, include_undated),
        daily=daily_summary(tasks, plans, s, e),
        longest_streak=longest_productive_streak(tasks, s, e),
        weekday_completion=weekday_completion(tasks, s, e, week_start),
        avg_created_per_day=average_created_per_day(tasks, s, e),
        avg_done_per_day=average_done_per_day(tasks, s, e),
    )
