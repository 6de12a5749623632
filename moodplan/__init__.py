"""MoodPlan core library: records, engines and file-backed repositories.

Public API re-exports for convenient imports:
    from moodplan import Mood, Task, recommend, quick_wins, compute_stats, ...
"""

__version__ = "0.1.0"

# Workspace & paths
from moodplan.workspace import (
    workspace_root,
    get_user_timezone,
    now_local,
    today,
    tasks_path,
    plans_path,
    journal_path,
    focus_path,
    settings_path,
)

# Models
from moodplan.models import (
    Mood,
    Task,
    TasksFile,
    DayPlan,
    PlansFile,
    JournalEntry,
    FocusSession,
    FocusState,
    Settings,
    DaySummary,
    MoodShare,
    StatsSummary,
)

# Calendar helpers
from moodplan.dates import (
    as_day,
    day_range,
    days_between,
    weekday_number,
    is_weekend,
    week_bounds,
    month_bounds,
)

# Recommendation engine
from moodplan.recommend import (
    score,
    ordered,
    top,
    recommend,
    quick_wins,
)

# Task utility engine
from moodplan.housekeeping import (
    carry_over_overdue,
    apply_auto_carry,
    tasks_for_day,
    move_task,
    clear_due_date,
    bulk_set_done,
    normalize_title,
    normalize_titles,
    group_by_day,
    skip_past_weekends,
)

# Statistics engine
from moodplan.stats import (
    mood_histogram,
    mood_share,
    completion_rate,
    daily_summary,
    longest_productive_streak,
    weekday_completion,
    average_created_per_day,
    average_done_per_day,
    compute_stats,
)

# Repositories
from moodplan.tasks import (
    validate_task,
    load_tasks,
    save_tasks,
    find_task,
    create_task,
    update_task,
    delete_task,
    toggle_task,
)
from moodplan.plans import load_plans, save_plans, plan_for, set_mood, mood_for
from moodplan.settings import load_settings, save_settings, update_settings
