"""Tests for moodplan/focus.py: focus session lifecycle."""

import json
from datetime import datetime, timedelta

import pytest

from moodplan.focus import (
    check_session,
    format_time,
    get_active_session,
    get_focus_state,
    get_focus_stats,
    record_interruption,
    start_session,
    stop_session,
)
from moodplan.models import Mood


T0 = datetime(2026, 2, 11, 10, 0)


def test_start_session(workspace):
    session = start_session("  Write report ", Mood.FOCUSED, planned_minutes=25, root=workspace, now=T0)
    assert session.task_title == "Write report"
    assert session.mood == Mood.FOCUSED
    assert session.duration_seconds == 1500.0
    assert session.active is True
    assert get_active_session(workspace).id == session.id

    raw = json.loads((workspace / "focus_sessions.json").read_text())
    assert raw["activeSession"]["taskTitle"] == "Write report"
    assert raw["history"] == []


def test_start_session_invalid_minutes(workspace):
    with pytest.raises(ValueError, match="positive"):
        start_session("Task", planned_minutes=0, root=workspace, now=T0)


def test_start_session_closes_running_one(workspace):
    first = start_session("First", root=workspace, now=T0)
    second = start_session("Second", root=workspace, now=T0 + timedelta(minutes=10))

    state = get_focus_state(workspace)
    assert state.active_session.id == second.id
    assert len(state.history) == 1
    closed = state.history[0]
    assert closed.id == first.id
    assert closed.active is False
    assert closed.completed is False
    assert closed.duration_seconds == 600.0


def test_stop_session(workspace):
    start_session("Task", root=workspace, now=T0)
    session = stop_session(completed=True, root=workspace, now=T0 + timedelta(minutes=12))
    assert session.completed is True
    assert session.active is False
    assert session.duration_seconds == 720.0
    assert get_active_session(workspace) is None


def test_stop_session_no_active(workspace):
    with pytest.raises(ValueError, match="No active"):
        stop_session(root=workspace, now=T0)


def test_check_session(workspace):
    assert check_session(workspace, now=T0) is None

    start_session("Task", planned_minutes=25, root=workspace, now=T0)
    assert check_session(workspace, now=T0 + timedelta(minutes=20)) is None
    assert get_active_session(workspace) is not None

    finished = check_session(workspace, now=T0 + timedelta(minutes=26))
    assert finished.completed is True
    assert finished.duration_seconds == 1500.0
    assert get_active_session(workspace) is None


def test_record_interruption(workspace):
    start_session("Task", root=workspace, now=T0)
    session = record_interruption(root=workspace)
    assert session.interruptions == 1
    session = record_interruption(root=workspace)
    assert session.interruptions == 2


def test_record_interruption_no_active(workspace):
    assert record_interruption(root=workspace) is None


def test_get_focus_stats(workspace):
    start_session("One", Mood.FOCUSED, root=workspace, now=T0)
    record_interruption(root=workspace)
    stop_session(completed=False, root=workspace, now=T0 + timedelta(minutes=10))
    start_session("Two", root=workspace, now=T0 + timedelta(hours=1))
    stop_session(completed=True, root=workspace, now=T0 + timedelta(hours=1, minutes=10))

    stats = get_focus_stats(days=7, root=workspace, now=T0 + timedelta(hours=2))
    assert stats["total_sessions"] == 2
    assert stats["total_minutes"] == 20.0
    assert stats["avg_session_minutes"] == 10.0
    assert stats["total_interruptions"] == 1
    assert stats["completion_rate"] == 0.5
    assert stats["minutes_by_mood"] == {"focused": 10.0}

    later = get_focus_stats(days=7, root=workspace, now=T0 + timedelta(days=30))
    assert later["total_sessions"] == 0
    assert later["minutes_by_mood"] == {}


def test_format_time():
    assert format_time(0) == "00:00"
    assert format_time(65) == "01:05"
    assert format_time(1500) == "25:00"
    assert format_time(59.9) == "00:59"
