"""Typed dataclasses for the MoodPlan data model.

All persisted models use from_dict/to_dict for JSON/YAML serialization.
camelCase in JSON is mapped to snake_case in Python.
Unknown keys are ignored; missing keys use defaults.
from_dict takes an optional zone: stored instants (e.g. "...T22:00:00Z")
land on the wall-clock day of that zone.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from enum import Enum
from typing import Any

from moodplan.dates import parse_day, parse_timestamp


def new_id() -> str:
    return str(uuid.uuid4())


def _now() -> datetime:
    return datetime.now().replace(microsecond=0)


# ── Mood ──────────────────────────────────────────────────────


class Mood(str, Enum):
    """The five mood tags a user can assign to a day, task or journal entry."""

    CALM = "calm"
    FOCUSED = "focused"
    TIRED = "tired"
    INSPIRED = "inspired"
    ANXIOUS = "anxious"

    @classmethod
    def parse(cls, value: Any) -> Mood | None:
        """Lenient lookup: None, blanks and unknown values give None."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        return self.value.title()


def _mood_value(m: Mood | None) -> str | None:
    return m.value if m is not None else None


def _iso(ts: datetime | None) -> str | None:
    return ts.isoformat(timespec="seconds") if ts is not None else None


# ── Tasks ─────────────────────────────────────────────────────


@dataclass
class Task:
    id: str = field(default_factory=new_id)
    title: str = ""
    note: str | None = None
    mood_hint: Mood | None = None
    due_date: date | None = None  # calendar day, never a time of day
    done: bool = False
    color_id: str = "brandBlue"
    icon_name: str = "circle"
    created_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if isinstance(self.due_date, datetime):
            self.due_date = self.due_date.date()

    @classmethod
    def from_dict(cls, d: dict[str, Any], tz: tzinfo | None = None) -> Task:
        note = d.get("note")
        return cls(
            id=str(d.get("id") or new_id()),
            title=str(d.get("title", "")),
            note=str(note) if note is not None else None,
            mood_hint=Mood.parse(d.get("moodHint", d.get("mood_hint"))),
            due_date=parse_day(d.get("dueDate", d.get("due_date")), tz),
            done=bool(d.get("isDone", d.get("done", False))),
            color_id=str(d.get("colorID", d.get("color_id", "brandBlue"))),
            icon_name=str(d.get("iconName", d.get("icon_name", "circle"))),
            created_at=parse_timestamp(d.get("createdAt", d.get("created_at")), tz) or _now(),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "isDone": self.done,
            "colorID": self.color_id,
            "iconName": self.icon_name,
            "createdAt": _iso(self.created_at),
        }
        if self.note is not None:
            d["note"] = self.note
        if self.mood_hint is not None:
            d["moodHint"] = self.mood_hint.value
        if self.due_date is not None:
            d["dueDate"] = self.due_date.isoformat()
        return d


@dataclass
class TasksFile:
    """The flat task collection persisted in tasks.json."""

    tasks: list[Task] = field(default_factory=list)

    @classmethod
    def from_list(cls, items: Any, tz: tzinfo | None = None) -> TasksFile:
        if not items or not isinstance(items, list):
            return cls()
        return cls(tasks=[Task.from_dict(t, tz) for t in items if isinstance(t, dict)])

    def to_list(self) -> list[dict[str, Any]]:
        return [t.to_dict() for t in self.tasks]


# ── Day plans ─────────────────────────────────────────────────


@dataclass
class DayPlan:
    """One calendar day's selected mood and its tasks."""

    id: str = field(default_factory=new_id)
    date: date = field(default_factory=date.today)
    selected_mood: Mood | None = None
    tasks: list[Task] = field(default_factory=list)

    def __post_init__(self) -> None:
        if isinstance(self.date, datetime):
            self.date = self.date.date()

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.done)

    @property
    def is_all_done(self) -> bool:
        return bool(self.tasks) and all(t.done for t in self.tasks)

    @property
    def progress(self) -> float:
        if not self.tasks:
            return 0.0
        return self.completed_count / len(self.tasks)

    def add_task(self, task: Task) -> None:
        self.tasks.append(task)

    def remove_task(self, task_id: str) -> None:
        self.tasks = [t for t in self.tasks if t.id != task_id]

    def update_task(self, updated: Task) -> None:
        for i, t in enumerate(self.tasks):
            if t.id == updated.id:
                self.tasks[i] = updated
                return

    def toggle_task(self, task_id: str) -> None:
        for t in self.tasks:
            if t.id == task_id:
                t.done = not t.done
                return

    @classmethod
    def from_dict(cls, d: dict[str, Any], tz: tzinfo | None = None) -> DayPlan:
        return cls(
            id=str(d.get("id") or new_id()),
            date=parse_day(d.get("date"), tz) or date.today(),
            selected_mood=Mood.parse(d.get("selectedMood", d.get("selected_mood"))),
            tasks=[Task.from_dict(t, tz) for t in (d.get("tasks") or []) if isinstance(t, dict)],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "selectedMood": _mood_value(self.selected_mood),
            "tasks": [t.to_dict() for t in self.tasks],
        }


@dataclass
class PlansFile:
    """All day plans persisted in moodplans.json."""

    plans: list[DayPlan] = field(default_factory=list)

    @classmethod
    def from_list(cls, items: Any, tz: tzinfo | None = None) -> PlansFile:
        if not items or not isinstance(items, list):
            return cls()
        return cls(plans=[DayPlan.from_dict(p, tz) for p in items if isinstance(p, dict)])

    def to_list(self) -> list[dict[str, Any]]:
        return [p.to_dict() for p in self.plans]


# ── Journal ───────────────────────────────────────────────────


@dataclass
class JournalEntry:
    id: str = field(default_factory=new_id)
    date: date = field(default_factory=date.today)
    mood: Mood | None = None
    note: str = ""
    color_id: str = "brandBlue"
    icon_name: str = "lightbulb.fill"
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    def __post_init__(self) -> None:
        if isinstance(self.date, datetime):
            self.date = self.date.date()
        self.note = self.note.strip()

    @classmethod
    def from_dict(cls, d: dict[str, Any], tz: tzinfo | None = None) -> JournalEntry:
        return cls(
            id=str(d.get("id") or new_id()),
            date=parse_day(d.get("date"), tz) or date.today(),
            mood=Mood.parse(d.get("mood")),
            note=str(d.get("note", "")),
            color_id=str(d.get("colorID", d.get("color_id", "brandBlue"))),
            icon_name=str(d.get("iconName", d.get("icon_name", "lightbulb.fill"))),
            created_at=parse_timestamp(d.get("createdAt", d.get("created_at")), tz) or _now(),
            updated_at=parse_timestamp(d.get("updatedAt", d.get("updated_at")), tz) or _now(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "mood": _mood_value(self.mood),
            "note": self.note,
            "colorID": self.color_id,
            "iconName": self.icon_name,
            "createdAt": _iso(self.created_at),
            "updatedAt": _iso(self.updated_at),
        }


# ── Focus Session ─────────────────────────────────────────────


@dataclass
class FocusSession:
    id: str = field(default_factory=new_id)
    mood: Mood | None = None
    task_title: str = ""
    started_at: datetime | None = None
    duration_seconds: float = 1500.0
    active: bool = False
    completed: bool = False
    interruptions: int = 0

    @property
    def ended_at(self) -> datetime | None:
        if self.started_at is None:
            return None
        return self.started_at + timedelta(seconds=self.duration_seconds)

    def remaining(self, at: datetime) -> float:
        """Seconds left at *at*; the full duration if never started."""
        if self.started_at is None:
            return self.duration_seconds
        elapsed = (at - self.started_at).total_seconds()
        return max(0.0, self.duration_seconds - elapsed)

    def progress(self, at: datetime) -> float:
        if self.duration_seconds <= 0:
            return 0.0
        return 1 - self.remaining(at) / self.duration_seconds

    @classmethod
    def from_dict(cls, d: dict[str, Any], tz: tzinfo | None = None) -> FocusSession:
        if not d or not isinstance(d, dict):
            return cls()
        return cls(
            id=str(d.get("id") or new_id()),
            mood=Mood.parse(d.get("mood")),
            task_title=str(d.get("taskTitle", d.get("task_title", ""))),
            started_at=parse_timestamp(d.get("startTime", d.get("started_at")), tz),
            duration_seconds=float(d.get("duration", d.get("duration_seconds", 1500.0))),
            active=bool(d.get("isActive", d.get("active", False))),
            completed=bool(d.get("completed", False)),
            interruptions=int(d.get("interruptions", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mood": _mood_value(self.mood),
            "taskTitle": self.task_title,
            "startTime": _iso(self.started_at),
            "duration": self.duration_seconds,
            "isActive": self.active,
            "completed": self.completed,
            "interruptions": self.interruptions,
        }


@dataclass
class FocusState:
    active_session: FocusSession | None = None
    history: list[FocusSession] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict[str, Any], tz: tzinfo | None = None) -> FocusState:
        if not d or not isinstance(d, dict):
            return cls()
        active = d.get("activeSession", d.get("active_session"))
        return cls(
            active_session=FocusSession.from_dict(active, tz) if active else None,
            history=[FocusSession.from_dict(s, tz) for s in (d.get("history") or [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "activeSession": self.active_session.to_dict() if self.active_session else None,
            "history": [s.to_dict() for s in self.history],
        }


# ── Settings ──────────────────────────────────────────────────


@dataclass
class Settings:
    auto_carry_tasks: bool = True
    timezone: str = "UTC"
    week_start: str = "mon"
    weekend_days: list[str] = field(default_factory=lambda: ["sat", "sun"])
    # presentation only
    dark_mode: bool = False
    accent_color_id: str = "brandBlue"
    haptics: bool = True
    language: str = "en"

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        weekend = d.get("weekend_days")
        if not isinstance(weekend, list):
            weekend = ["sat", "sun"]
        return cls(
            auto_carry_tasks=bool(d.get("auto_carry_tasks", True)),
            timezone=str(d.get("timezone", "UTC")),
            week_start=str(d.get("week_start", "mon")).lower(),
            weekend_days=[str(w).lower() for w in weekend],
            dark_mode=bool(d.get("dark_mode", False)),
            accent_color_id=str(d.get("accent_color_id", "brandBlue")),
            haptics=bool(d.get("haptics", True)),
            language=str(d.get("language", "en")).lower(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "auto_carry_tasks": self.auto_carry_tasks,
            "timezone": self.timezone,
            "week_start": self.week_start,
            "weekend_days": list(self.weekend_days),
            "dark_mode": self.dark_mode,
            "accent_color_id": self.accent_color_id,
            "haptics": self.haptics,
            "language": self.language,
        }


# ── Statistics ────────────────────────────────────────────────


@dataclass(frozen=True)
class DaySummary:
    date: date
    mood: Mood | None
    total: int
    done: int

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 0.0
        return self.done / self.total

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "mood": _mood_value(self.mood),
            "total": self.total,
            "done": self.done,
            "progress": round(self.progress, 3),
        }


@dataclass(frozen=True)
class MoodShare:
    mood: Mood
    count: int
    share: float

    def to_dict(self) -> dict[str, Any]:
        return {"mood": self.mood.value, "count": self.count, "share": round(self.share, 3)}


@dataclass
class StatsSummary:
    start: date | None = None
    end: date | None = None
    mood_histogram: dict[Mood, int] = field(default_factory=dict)
    mood_shares: list[MoodShare] = field(default_factory=list)
    completion_rate: float = 0.0
    daily: list[DaySummary] = field(default_factory=list)
    longest_streak: int = 0
    weekday_completion: dict[int, int] = field(default_factory=dict)
    avg_created_per_day: float = 0.0
    avg_done_per_day: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "moodHistogram": {m.value: c for m, c in self.mood_histogram.items()},
            "moodShares": [s.to_dict() for s in self.mood_shares],
            "completionRate": round(self.completion_rate, 3),
            "daily": [d.to_dict() for d in self.daily],
            "longestStreak": self.longest_streak,
            "weekdayCompletion": {str(k): v for k, v in self.weekday_completion.items()},
            "avgCreatedPerDay": round(self.avg_created_per_day, 3),
            "avgDonePerDay": round(self.avg_done_per_day, 3),
        }
