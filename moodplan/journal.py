"""Journal entries: composing, storing and slicing daily notes."""

from __future__ import annotations

import re
from datetime import date, datetime
from pathlib import Path

from moodplan import icons
from moodplan.dates import as_day
from moodplan.fileio import read_json, write_json_atomic
from moodplan.models import JournalEntry, Mood
from moodplan.workspace import get_user_timezone, journal_path, now_local, today


EMPTY_NOTE = "No note"

SUGGESTED_COLORS = {
    Mood.CALM: "brandGreen",
    Mood.FOCUSED: "brandBlue",
    Mood.TIRED: "brandPurple",
    Mood.INSPIRED: "brandYellow",
    Mood.ANXIOUS: "brandCoral",
}

SUGGESTED_ICONS = {
    Mood.CALM: icons.RELAX,
    Mood.FOCUSED: icons.WORK,
    Mood.TIRED: icons.HOME,
    Mood.INSPIRED: icons.STUDY,
    Mood.ANXIOUS: icons.HEALTH,
}


def _sort_key(e: JournalEntry) -> tuple:
    return (e.date, e.updated_at, e.created_at)


def sort_entries(entries: list[JournalEntry]) -> list[JournalEntry]:
    """Newest day first, then most recently updated, then most recently created."""
    return sorted(entries, key=_sort_key, reverse=True)


# ── Composition ───────────────────────────────────────────────


def suggested_color_id(mood: Mood | None) -> str:
    if mood is None:
        return "brandBlue"
    return SUGGESTED_COLORS[mood]


def suggested_icon(mood: Mood | None) -> str:
    if mood is None:
        return icons.IDEA
    return SUGGESTED_ICONS[mood]


def make_entry(
    note: str,
    mood: Mood | None = None,
    day: date | datetime | None = None,
    color_id: str | None = None,
    icon_name: str | None = None,
    root: Path | None = None,
) -> JournalEntry:
    """Build a cleaned-up entry. Blank notes become "No note".

    Without *day* the entry goes on today in the user's timezone.
    """
    cleaned = re.sub(r"\s{2,}", " ", (note or "").strip())
    return JournalEntry(
        date=as_day(day) if day is not None else today(root),
        mood=mood,
        note=cleaned or EMPTY_NOTE,
        color_id=color_id or suggested_color_id(mood),
        icon_name=icon_name or suggested_icon(mood),
    )


# ── Persistence & CRUD ────────────────────────────────────────


def load_journal(root: Path | None = None) -> list[JournalEntry]:
    raw = read_json(journal_path(root), default=[])
    if not isinstance(raw, list):
        return []
    return sort_entries([JournalEntry.from_dict(e, get_user_timezone(root)) for e in raw if isinstance(e, dict)])


def save_journal(entries: list[JournalEntry], root: Path | None = None) -> None:
    write_json_atomic(journal_path(root), [e.to_dict() for e in entries])


def add_entry(
    entries: list[JournalEntry],
    entry: JournalEntry,
    now: datetime | None = None,
    root: Path | None = None,
) -> list[JournalEntry]:
    """Return a new sorted list with *entry* added and its updated_at bumped."""
    entry.updated_at = now or now_local(root)
    return sort_entries(entries + [entry])


def update_entry(
    entries: list[JournalEntry],
    entry: JournalEntry,
    now: datetime | None = None,
    root: Path | None = None,
) -> tuple[list[JournalEntry], bool]:
    """Replace the entry with the same id. Returns (entries, found)."""
    for i, e in enumerate(entries):
        if e.id == entry.id:
            entry.updated_at = now or now_local(root)
            result = list(entries)
            result[i] = entry
            return sort_entries(result), True
    return entries, False


def delete_entry(entries: list[JournalEntry], entry_id: str) -> tuple[list[JournalEntry], bool]:
    remaining = [e for e in entries if e.id != entry_id]
    return remaining, len(remaining) != len(entries)


# ── Queries ───────────────────────────────────────────────────


def entries_on(entries: list[JournalEntry], day: date | datetime) -> list[JournalEntry]:
    target = as_day(day)
    return sort_entries([e for e in entries if e.date == target])


def entries_between(
    entries: list[JournalEntry],
    start: date | datetime,
    end: date | datetime,
) -> list[JournalEntry]:
    s, e_ = as_day(start), as_day(end)
    return sort_entries([e for e in entries if s <= e.date <= e_])


def search_entries(entries: list[JournalEntry], text: str) -> list[JournalEntry]:
    """Match the note text or the mood's display name, case-insensitively."""
    q = (text or "").strip().lower()
    if not q:
        return list(entries)
    return [
        e for e in entries
        if q in e.note.lower() or (e.mood is not None and q in e.mood.display_name.lower())
    ]


def filter_by_mood(entries: list[JournalEntry], mood: Mood | None) -> list[JournalEntry]:
    if mood is None:
        return list(entries)
    return [e for e in entries if e.mood == mood]


def latest(entries: list[JournalEntry], limit: int = 20) -> list[JournalEntry]:
    return sort_entries(entries)[: max(0, limit)]


def grouped_by_month(entries: list[JournalEntry]) -> list[tuple[date, list[JournalEntry]]]:
    """(first day of month, entries newest first), newest month first."""
    groups: dict[date, list[JournalEntry]] = {}
    for e in entries:
        groups.setdefault(e.date.replace(day=1), []).append(e)
    return [
        (month, sorted(groups[month], key=lambda x: x.date, reverse=True))
        for month in sorted(groups, reverse=True)
    ]


def journal_mood_histogram(entries: list[JournalEntry]) -> dict[Mood, int]:
    counts: dict[Mood, int] = {}
    for e in entries:
        if e.mood is not None:
            counts[e.mood] = counts.get(e.mood, 0) + 1
    return counts
