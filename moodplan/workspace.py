"""Where MoodPlan keeps its files, and what "today" means for the user."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from moodplan.fileio import read_yaml

TASKS_FILE = "tasks.json"
PLANS_FILE = "moodplans.json"
JOURNAL_FILE = "journal.json"
FOCUS_FILE = "focus_sessions.json"
SETTINGS_FILE = "settings.yaml"
LOG_FILE = "moodplan.log"


def workspace_root() -> Path:
    """Directory holding all MoodPlan data files ($MOODPLAN_ROOT or ~/moodplan)."""
    configured = os.environ.get("MOODPLAN_ROOT") or str(Path.home() / "moodplan")
    return Path(configured).expanduser().resolve()


def _in_root(name: str, root: Path | None) -> Path:
    return (root if root is not None else workspace_root()) / name


def tasks_path(root: Path | None = None) -> Path:
    return _in_root(TASKS_FILE, root)


def plans_path(root: Path | None = None) -> Path:
    return _in_root(PLANS_FILE, root)


def journal_path(root: Path | None = None) -> Path:
    return _in_root(JOURNAL_FILE, root)


def focus_path(root: Path | None = None) -> Path:
    return _in_root(FOCUS_FILE, root)


def settings_path(root: Path | None = None) -> Path:
    return _in_root(SETTINGS_FILE, root)


def log_path(root: Path | None = None) -> Path:
    return _in_root(LOG_FILE, root)


# ── Clock ─────────────────────────────────────────────────────


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """The IANA zone named in settings.yaml; UTC when unset or unknown."""
    name = read_yaml(settings_path(root)).get("timezone")
    if name:
        try:
            return ZoneInfo(str(name))
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo("UTC")


def now_local(root: Path | None = None) -> datetime:
    """Wall-clock time in the user's zone, naive and to the second."""
    return datetime.now(get_user_timezone(root)).replace(tzinfo=None, microsecond=0)


def today(root: Path | None = None) -> date:
    return now_local(root).date()
