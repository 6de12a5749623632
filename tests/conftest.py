"""Shared test fixtures for MoodPlan tests."""

from __future__ import annotations

import json
import os
from pathlib import Path

import pytest
import yaml


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create a temporary workspace with the standard data files."""
    root = tmp_path / "workspace"
    root.mkdir(parents=True)

    # Settings
    settings = {
        "auto_carry_tasks": True,
        "timezone": "UTC",
        "week_start": "mon",
        "weekend_days": ["sat", "sun"],
        "accent_color_id": "brandGreen",
    }
    (root / "settings.yaml").write_text(
        yaml.dump(settings, default_flow_style=False), encoding="utf-8"
    )

    # Tasks
    tasks = [
        {
            "id": "report",
            "title": "Quarterly report",
            "moodHint": "focused",
            "dueDate": "2026-02-10",
            "isDone": False,
            "colorID": "brandBlue",
            "iconName": "briefcase.fill",
            "createdAt": "2026-02-01T09:00:00",
        },
        {
            "id": "walk",
            "title": "Walk",
            "moodHint": "calm",
            "dueDate": "2026-02-11",
            "isDone": False,
            "colorID": "brandGreen",
            "iconName": "leaf.fill",
            "createdAt": "2026-02-09T18:30:00",
        },
        {
            "id": "tax",
            "title": "Sort tax receipts",
            "note": "shoebox in the hall closet",
            "isDone": True,
            "colorID": "brandYellow",
            "iconName": "banknote.fill",
            "createdAt": "2026-02-09T08:00:00",
        },
    ]
    (root / "tasks.json").write_text(json.dumps(tasks, indent=2), encoding="utf-8")

    # Day plans
    plans = [
        {"id": "p1", "date": "2026-02-09", "selectedMood": "calm", "tasks": []},
        {"id": "p2", "date": "2026-02-10", "selectedMood": "focused", "tasks": []},
    ]
    (root / "moodplans.json").write_text(json.dumps(plans, indent=2), encoding="utf-8")

    os.environ["MOODPLAN_ROOT"] = str(root)
    yield root
    if "MOODPLAN_ROOT" in os.environ:
        del os.environ["MOODPLAN_ROOT"]
