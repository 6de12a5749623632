"""Focus session management for MoodPlan.

Pomodoro-style countdowns tied to a task title and, optionally, the mood
the user was in when they sat down. focus_sessions.json holds the running
session (if any) and the history of closed ones.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

from moodplan.fileio import read_json, write_json_atomic
from moodplan.models import FocusSession, FocusState, Mood
from moodplan.workspace import focus_path, get_user_timezone, now_local

logger = logging.getLogger(__name__)

DEFAULT_MINUTES = 25


def get_focus_state(root: Path | None = None) -> FocusState:
    """Running session plus history, as stored on disk."""
    return FocusState.from_dict(read_json(focus_path(root), default={}), get_user_timezone(root))


def get_active_session(root: Path | None = None) -> FocusSession | None:
    return get_focus_state(root).active_session


def _persist(state: FocusState, root: Path | None) -> None:
    write_json_atomic(focus_path(root), state.to_dict())


def _close(session: FocusSession, now: datetime, completed: bool) -> FocusSession:
    """Deactivate *session*; its duration shrinks to the time actually spent."""
    if session.started_at is not None:
        spent = max(0.0, (now - session.started_at).total_seconds())
        session.duration_seconds = round(min(session.duration_seconds, spent), 1)
    session.active = False
    session.completed = completed
    return session


# ── Lifecycle ─────────────────────────────────────────────────


def start_session(
    task_title: str,
    mood: Mood | None = None,
    planned_minutes: int = DEFAULT_MINUTES,
    root: Path | None = None,
    now: datetime | None = None,
) -> FocusSession:
    """Begin a countdown of *planned_minutes* for *task_title*.

    Whatever session is still running gets closed as not completed.
    """
    if planned_minutes <= 0:
        raise ValueError("planned_minutes must be positive")
    now = now or now_local(root)

    state = get_focus_state(root)
    running = state.active_session
    if running is not None:
        state.history.append(_close(running, now, completed=False))
        logger.info("Abandoned focus session %s for a new one", running.id)

    state.active_session = FocusSession(
        mood=mood,
        task_title=task_title.strip(),
        started_at=now,
        duration_seconds=float(planned_minutes * 60),
        active=True,
    )
    _persist(state, root)
    return state.active_session


def stop_session(
    completed: bool = False,
    root: Path | None = None,
    now: datetime | None = None,
) -> FocusSession:
    """Close the running session into history. ValueError if nothing runs."""
    state = get_focus_state(root)
    running = state.active_session
    if running is None:
        raise ValueError("No active focus session to stop.")

    closed = _close(running, now or now_local(root), completed)
    state.active_session = None
    state.history.append(closed)
    _persist(state, root)
    logger.info("Focus session %s closed (completed=%s)", closed.id, completed)
    return closed


def check_session(root: Path | None = None, now: datetime | None = None) -> FocusSession | None:
    """Complete the running session if its countdown reached zero.

    Returns the finished session, None while time remains or nothing runs.
    """
    running = get_active_session(root)
    if running is None:
        return None
    now = now or now_local(root)
    if running.remaining(now) > 0:
        return None
    return stop_session(completed=True, root=root, now=now)


def record_interruption(root: Path | None = None) -> FocusSession | None:
    state = get_focus_state(root)
    running = state.active_session
    if running is None:
        return None
    running.interruptions += 1
    _persist(state, root)
    return running


# ── Reporting ─────────────────────────────────────────────────


def get_focus_stats(days: int = 7, root: Path | None = None, now: datetime | None = None) -> dict[str, Any]:
    """Totals over closed sessions started within the last *days* days.

    Minutes are also broken down by the mood each session was tagged with.
    """
    since = (now or now_local(root)) - timedelta(days=days)
    window = [
        s for s in get_focus_state(root).history
        if s.started_at is not None and s.started_at >= since
    ]

    by_mood: dict[str, float] = {}
    for s in window:
        if s.mood is not None:
            by_mood[s.mood.value] = round(by_mood.get(s.mood.value, 0.0) + s.duration_seconds / 60, 1)

    count = len(window)
    minutes = sum(s.duration_seconds for s in window) / 60
    return {
        "total_sessions": count,
        "total_minutes": round(minutes, 1),
        "avg_session_minutes": round(minutes / count, 1) if count else 0.0,
        "total_interruptions": sum(s.interruptions for s in window),
        "completion_rate": round(sum(1 for s in window if s.completed) / count, 3) if count else 0.0,
        "minutes_by_mood": by_mood,
    }


def format_time(seconds: float) -> str:
    """Countdown text, e.g. 1500 -> '25:00'."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"
