"""Day plan storage: the selected mood and embedded tasks for each day."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from pathlib import Path

from moodplan.dates import as_day
from moodplan.fileio import read_json, write_json_atomic
from moodplan.models import DayPlan, Mood, PlansFile, Task
from moodplan.workspace import get_user_timezone, plans_path

logger = logging.getLogger(__name__)


def load_plans(root: Path | None = None) -> PlansFile:
    return PlansFile.from_list(read_json(plans_path(root), default=[]), get_user_timezone(root))


def save_plans(plans_file: PlansFile, root: Path | None = None) -> None:
    write_json_atomic(plans_path(root), plans_file.to_list())


def find_plan(plans_file: PlansFile, day: date | datetime) -> DayPlan | None:
    target = as_day(day)
    for p in plans_file.plans:
        if p.date == target:
            return p
    return None


def plan_for(plans_file: PlansFile, day: date | datetime) -> DayPlan:
    """Return the plan for *day*, creating an empty one if there is none."""
    plan = find_plan(plans_file, day)
    if plan is None:
        plan = DayPlan(date=as_day(day))
        plans_file.plans.append(plan)
    return plan


def set_mood(plans_file: PlansFile, mood: Mood | None, day: date | datetime) -> DayPlan:
    plan = plan_for(plans_file, day)
    plan.selected_mood = mood
    return plan


def mood_for(plans_file: PlansFile, day: date | datetime) -> Mood | None:
    plan = find_plan(plans_file, day)
    return plan.selected_mood if plan else None


def add_task_to_plan(plans_file: PlansFile, task: Task, day: date | datetime) -> DayPlan:
    plan = plan_for(plans_file, day)
    plan.add_task(task)
    return plan


def update_task_in_plan(plans_file: PlansFile, task: Task, day: date | datetime) -> bool:
    """Replace a task embedded in the day's plan. False if the plan or task is missing."""
    plan = find_plan(plans_file, day)
    if plan is None or not any(t.id == task.id for t in plan.tasks):
        return False
    plan.update_task(task)
    return True


def toggle_task_in_plan(plans_file: PlansFile, task_id: str, day: date | datetime) -> bool:
    plan = find_plan(plans_file, day)
    if plan is None or not any(t.id == task_id for t in plan.tasks):
        return False
    plan.toggle_task(task_id)
    return True


def delete_task_from_plan(plans_file: PlansFile, task_id: str, day: date | datetime) -> bool:
    plan = find_plan(plans_file, day)
    if plan is None or not any(t.id == task_id for t in plan.tasks):
        return False
    plan.remove_task(task_id)
    return True


def moods_between(plans_file: PlansFile, start: date | datetime, end: date | datetime) -> list[Mood]:
    """Moods recorded in [start, end], in storage order."""
    s, e = as_day(start), as_day(end)
    return [
        p.selected_mood for p in plans_file.plans
        if p.selected_mood is not None and s <= p.date <= e
    ]


def prune_plans(plans_file: PlansFile, older_than_days: int, reference: date | datetime) -> int:
    """Drop plans dated more than *older_than_days* before the reference day."""
    threshold = as_day(reference) - timedelta(days=older_than_days)
    before = len(plans_file.plans)
    plans_file.plans = [p for p in plans_file.plans if p.date >= threshold]
    removed = before - len(plans_file.plans)
    if removed:
        logger.info("Pruned %d plan(s) older than %s", removed, threshold.isoformat())
    return removed
