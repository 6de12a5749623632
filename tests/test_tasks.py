"""Tests for moodplan/tasks.py: CRUD, validation, queries."""

import json
from datetime import date, datetime

from moodplan.models import Mood, Task, TasksFile
from moodplan.settings import update_settings
from moodplan.stats import completion_rate
from moodplan.tasks import (
    add_many,
    create_task,
    delete_task,
    find_task,
    grouped_by_mood,
    load_tasks,
    overdue_tasks,
    query_tasks,
    replace_task,
    save_tasks,
    search_tasks,
    toggle_task,
    update_task,
    validate_task,
)


def test_validate_task_valid():
    assert validate_task({"title": "Task"}) == []
    assert validate_task({"title": "Task", "moodHint": "Calm", "dueDate": "2026-02-11", "isDone": False}) == []


def test_validate_task_missing_or_blank_title():
    assert any("title" in e for e in validate_task({}))
    assert validate_task({"title": "   "}) == ["title must not be blank"]


def test_validate_task_invalid_fields():
    errors = validate_task({"title": "X", "moodHint": "grumpy", "dueDate": "soon", "isDone": "yes"})
    assert "Invalid mood hint: grumpy" in errors
    assert "Invalid due date: soon" in errors
    assert "isDone must be a boolean" in errors


def test_validate_task_accepts_snake_case_and_objects():
    assert validate_task({"title": "X", "mood_hint": Mood.TIRED, "due_date": date(2026, 2, 11)}) == []


def test_find_task():
    tf = TasksFile(tasks=[Task(id="a", title="A"), Task(id="b", title="B")])
    assert find_task(tf, "a").title == "A"
    assert find_task(tf, "c") is None


def test_create_task():
    tf = TasksFile()
    task, errors = create_task(tf, {"id": "new", "title": "  New Task ", "moodHint": "inspired"})
    assert errors == []
    assert task.id == "new"
    assert task.title == "New Task"
    assert task.mood_hint == Mood.INSPIRED
    assert len(tf.tasks) == 1


def test_create_task_generates_id():
    tf = TasksFile()
    task, errors = create_task(tf, {"title": "No id"})
    assert errors == []
    assert task.id


def test_create_task_duplicate():
    tf = TasksFile(tasks=[Task(id="existing", title="X")])
    _, errors = create_task(tf, {"id": "existing", "title": "Y"})
    assert any("already exists" in e for e in errors)
    assert len(tf.tasks) == 1


def test_create_task_invalid():
    tf = TasksFile()
    _, errors = create_task(tf, {"title": ""})
    assert errors
    assert tf.tasks == []


def test_update_task():
    tf = TasksFile(tasks=[Task(id="t1", title="Old")])
    task, errors = update_task(tf, "t1", {"title": "New", "due_date": date(2026, 3, 1), "done": True})
    assert errors == []
    assert task.title == "New"
    assert task.due_date == date(2026, 3, 1)
    assert task.done is True
    assert find_task(tf, "t1") is task


def test_update_task_strips_title():
    tf = TasksFile(tasks=[Task(id="t1", title="Old")])
    task, errors = update_task(tf, "t1", {"title": "  Report  "})
    assert errors == []
    assert task.title == "Report"
    assert find_task(tf, "t1").title == "Report"


def test_update_task_camel_case_keys():
    tf = TasksFile(tasks=[Task(id="t1", title="Old", mood_hint=Mood.CALM)])
    task, errors = update_task(tf, "t1", {"moodHint": "anxious"})
    assert errors == []
    assert task.mood_hint == Mood.ANXIOUS


def test_update_task_not_found():
    _, errors = update_task(TasksFile(), "missing", {"title": "X"})
    assert errors == ["Task not found: missing"]


def test_update_task_invalid_keeps_stored_task():
    kept = Task(id="t1", title="Keep me")
    tf = TasksFile(tasks=[kept])
    task, errors = update_task(tf, "t1", {"title": "  "})
    assert task is None
    assert errors
    assert tf.tasks[0] is kept


def test_replace_task():
    tf = TasksFile(tasks=[Task(id="t1", title="Old")])
    assert replace_task(tf, Task(id="t1", title="Swapped"))
    assert tf.tasks[0].title == "Swapped"
    assert not replace_task(tf, Task(id="t2", title="Nope"))


def test_delete_task():
    tf = TasksFile(tasks=[Task(id="t1", title="A"), Task(id="t2", title="B")])
    assert delete_task(tf, "t1")
    assert [t.id for t in tf.tasks] == ["t2"]
    assert not delete_task(tf, "t1")


def test_toggle_task():
    tf = TasksFile(tasks=[Task(id="t1", title="A")])
    assert toggle_task(tf, "t1").done is True
    assert toggle_task(tf, "t1").done is False
    assert toggle_task(tf, "missing") is None


def test_add_many():
    tf = TasksFile()
    assert add_many(tf, (Task(title=f"T{i}") for i in range(3))) == 3
    assert len(tf.tasks) == 3


def test_load_tasks(workspace):
    tf = load_tasks(workspace)
    assert [t.id for t in tf.tasks] == ["report", "walk", "tax"]
    report = tf.tasks[0]
    assert report.mood_hint == Mood.FOCUSED
    assert report.due_date == date(2026, 2, 10)
    assert tf.tasks[2].done is True
    assert tf.tasks[2].due_date is None


def test_load_tasks_reads_instants_in_user_timezone(workspace):
    update_settings(workspace, timezone="Europe/Berlin")
    stored = [{
        "id": "late",
        "title": "Late call",
        "dueDate": "2025-10-14T22:00:00Z",
        "createdAt": "2025-10-14T22:00:00Z",
        "isDone": True,
    }]
    (workspace / "tasks.json").write_text(json.dumps(stored), encoding="utf-8")

    late = load_tasks(workspace).tasks[0]
    assert late.due_date == date(2025, 10, 15)
    assert late.created_at == datetime(2025, 10, 15, 0, 0)
    assert completion_rate([late], date(2025, 10, 15), date(2025, 10, 15)) == 1.0


def test_load_tasks_uses_env_root(workspace):
    assert len(load_tasks().tasks) == 3


def test_load_tasks_missing_file(tmp_path):
    assert load_tasks(tmp_path).tasks == []


def test_save_tasks_round_trip(workspace):
    tf = load_tasks(workspace)
    toggle_task(tf, "walk")
    save_tasks(tf, workspace)

    raw = json.loads((workspace / "tasks.json").read_text())
    assert isinstance(raw, list)
    walk = next(t for t in raw if t["id"] == "walk")
    assert walk["isDone"] is True
    assert walk["dueDate"] == "2026-02-11"
    assert "moodHint" not in next(t for t in raw if t["id"] == "tax")

    reloaded = load_tasks(workspace)
    assert find_task(reloaded, "walk").done is True


# ── Queries ───────────────────────────────────────────────────


def test_query_tasks(workspace):
    tf = load_tasks(workspace)
    assert [t.id for t in query_tasks(tf, mood=Mood.FOCUSED)] == ["report"]
    assert [t.id for t in query_tasks(tf, done=True)] == ["tax"]
    assert [t.id for t in query_tasks(tf, due_from=date(2026, 2, 11))] == ["walk"]
    assert [t.id for t in query_tasks(tf, due_to=date(2026, 2, 10))] == ["report"]
    assert len(query_tasks(tf)) == 3


def test_overdue_tasks(workspace):
    tf = load_tasks(workspace)
    assert [t.id for t in overdue_tasks(tf, date(2026, 2, 11))] == ["report"]
    assert overdue_tasks(tf, date(2026, 2, 10)) == []


def test_search_tasks(workspace):
    tf = load_tasks(workspace)
    assert [t.id for t in search_tasks(tf, "SHOEBOX")] == ["tax"]
    assert [t.id for t in search_tasks(tf, "walk")] == ["walk"]
    assert len(search_tasks(tf, "  ")) == 3


def test_grouped_by_mood(workspace):
    tf = load_tasks(workspace)
    groups = grouped_by_mood(tf)
    assert [m for m, _ in groups] == [None, Mood.CALM, Mood.FOCUSED]
    assert [t.id for t in groups[0][1]] == ["tax"]
