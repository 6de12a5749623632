#!/usr/bin/env python3
"""MoodPlan TUI: pick today's mood, work through recommendations, watch the week."""

from __future__ import annotations

import logging
import sys

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import DataTable, Footer, Header, Static

from moodplan import (
    Mood,
    Task,
    apply_auto_carry,
    carry_over_overdue,
    compute_stats,
    load_plans,
    load_settings,
    load_tasks,
    mood_for,
    normalize_titles,
    quick_wins,
    recommend,
    save_plans,
    save_tasks,
    score,
    set_mood,
    skip_past_weekends,
    today,
    toggle_task,
    week_bounds,
    workspace_root,
)
from moodplan.workspace import log_path


# ── Presentation ──────────────────────────────────────────────

# label, glyph, Rich color
MOOD_STYLE: dict[Mood, tuple[str, str, str]] = {
    Mood.CALM: ("Calm", "☁", "dodger_blue2"),
    Mood.FOCUSED: ("Focused", "◎", "gold1"),
    Mood.TIRED: ("Tired", "z", "grey62"),
    Mood.INSPIRED: ("Inspired", "✦", "medium_purple"),
    Mood.ANXIOUS: ("Anxious", "~", "dark_orange"),
}

MOOD_KEYS = {str(i): m for i, m in enumerate(Mood, 1)}


def mood_badge(mood: Mood | None) -> str:
    if mood is None:
        return "[dim]none[/dim]"
    label, glyph, color = MOOD_STYLE[mood]
    return f"[{color}]{glyph} {label}[/{color}]"


def due_label(task: Task, ref) -> str:
    if task.due_date is None:
        return "-"
    diff = (task.due_date - ref).days
    if diff == 0:
        return "Today"
    if diff == -1:
        return "Yesterday"
    if diff == 1:
        return "Tomorrow"
    if diff < 0:
        return f"{-diff} days ago"
    return f"in {diff} days"


# ── App ───────────────────────────────────────────────────────


class MoodPlanApp(App):
    """Today screen with recommendations, quick wins and weekly stats."""

    TITLE = "MoodPlan"

    CSS = """
    #mood-bar { height: 3; padding: 1 2; }
    #body { height: 1fr; }
    #tasks { width: 2fr; }
    #side { width: 1fr; padding: 0 1; }
    #quick { height: auto; margin-bottom: 1; }
    #notice { height: 1; padding: 0 2; text-style: italic; }
    """

    BINDINGS = [
        Binding("1", "pick_mood('1')", "Calm", show=False),
        Binding("2", "pick_mood('2')", "Focused", show=False),
        Binding("3", "pick_mood('3')", "Tired", show=False),
        Binding("4", "pick_mood('4')", "Inspired", show=False),
        Binding("5", "pick_mood('5')", "Anxious", show=False),
        Binding("space", "toggle_done", "Done/undo"),
        Binding("c", "carry_over", "Carry overdue"),
        Binding("w", "skip_weekends", "Skip weekends"),
        Binding("n", "normalize", "Tidy titles"),
        Binding("r", "reload", "Reload"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self) -> None:
        super().__init__()
        self.settings = load_settings()
        self.tasks_file = load_tasks()
        self.plans_file = load_plans()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static(id="mood-bar")
        with Horizontal(id="body"):
            yield DataTable(id="tasks", cursor_type="row", zebra_stripes=True)
            with Vertical(id="side"):
                yield Static(id="quick")
                yield Static(id="stats")
        yield Static(id="notice")
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#tasks", DataTable)
        table.add_columns("", "Task", "Due", "Mood", "Score")
        moved = apply_auto_carry(self.settings, self.tasks_file, today())
        if moved:
            save_tasks(self.tasks_file)
            self._notice(f"Carried {moved} overdue task(s) to today.")
        self._refresh_views()

    # ── Rendering ─────────────────────────────────────────────

    def _notice(self, text: str) -> None:
        self.query_one("#notice", Static).update(text)

    def _refresh_views(self) -> None:
        day = today()
        mood = mood_for(self.plans_file, day)
        table = self.query_one("#tasks", DataTable)
        table.clear()

        if mood is None:
            keys = "  ".join(f"{k} {mood_badge(m)}" for k, m in MOOD_KEYS.items())
            self.query_one("#mood-bar", Static).update(f"How do you feel today?  {keys}")
            self.query_one("#quick", Static).update("")
        else:
            self.query_one("#mood-bar", Static).update(
                f"{day.strftime('%A, %b %d')}  Mood: {mood_badge(mood)}  [dim](1-5 to change)[/dim]"
            )
            recs = recommend(self.tasks_file.tasks, mood, day)
            for t in recs:
                table.add_row(
                    "✓" if t.done else "○",
                    t.title,
                    due_label(t, day),
                    mood_badge(t.mood_hint),
                    str(score(t, mood, day)),
                    key=t.id,
                )
            wins = quick_wins(recs, mood, day)
            lines = ["[b]Quick wins[/b]"]
            lines += [f"• {t.title}" for t in wins] or ["[dim]nothing short on deck[/dim]"]
            self.query_one("#quick", Static).update("\n".join(lines))

        self._render_stats()

    def _render_stats(self) -> None:
        start, end = week_bounds(today(), self.settings.week_start)
        summary = compute_stats(
            self.tasks_file.tasks,
            self.plans_file.plans,
            start,
            end,
            week_start=self.settings.week_start,
        )
        lines = [
            f"[b]This week[/b] {start.strftime('%b %d')} - {end.strftime('%b %d')}",
            f"Completion: {summary.completion_rate:.0%}",
            f"Best streak: {summary.longest_streak} day(s)",
            f"Done per day: {summary.avg_done_per_day:.1f}",
            "",
            "[b]Moods[/b]",
        ]
        for share in summary.mood_shares:
            bar = "█" * round(share.share * 10)
            lines.append(f"{mood_badge(share.mood):<30} {bar} {share.count}")
        lines += ["", "[b]Days[/b]"]
        for d in summary.daily:
            lines.append(f"{d.date.strftime('%a')}  {d.done}/{d.total}  {mood_badge(d.mood)}")
        self.query_one("#stats", Static).update("\n".join(lines))

    # ── Actions ───────────────────────────────────────────────

    def action_pick_mood(self, key: str) -> None:
        mood = MOOD_KEYS.get(key)
        if mood is None:
            return
        set_mood(self.plans_file, mood, today())
        save_plans(self.plans_file)
        self._refresh_views()

    def action_toggle_done(self) -> None:
        table = self.query_one("#tasks", DataTable)
        if table.row_count == 0:
            return
        row_key, _ = table.coordinate_to_cell_key(table.cursor_coordinate)
        task = toggle_task(self.tasks_file, str(row_key.value))
        if task is None:
            return
        save_tasks(self.tasks_file)
        self._notice(f"{'Completed' if task.done else 'Reopened'}: {task.title}")
        self._refresh_views()

    def action_carry_over(self) -> None:
        moved = carry_over_overdue(self.tasks_file, today())
        if moved:
            save_tasks(self.tasks_file)
        self._notice(f"Carried {moved} overdue task(s) to today.")
        self._refresh_views()

    def action_skip_weekends(self) -> None:
        moved = skip_past_weekends(self.tasks_file, today(), self.settings.weekend_days)
        if moved:
            save_tasks(self.tasks_file)
        self._notice(f"Moved {moved} task(s) off past weekends.")
        self._refresh_views()

    def action_normalize(self) -> None:
        changed = normalize_titles(self.tasks_file)
        if changed:
            save_tasks(self.tasks_file)
        self._notice(f"Tidied {changed} title(s).")
        self._refresh_views()

    def action_reload(self) -> None:
        self.settings = load_settings()
        self.tasks_file = load_tasks()
        self.plans_file = load_plans()
        self._notice("Reloaded from disk.")
        self._refresh_views()


def main() -> None:
    root = workspace_root()
    if not root.exists():
        print(f"Workspace not found: {root}")
        print("Set MOODPLAN_ROOT or create the directory first.")
        sys.exit(1)
    logging.basicConfig(
        filename=str(log_path(root)),
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    MoodPlanApp().run()


if __name__ == "__main__":
    main()
