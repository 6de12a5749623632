"""User settings persisted in settings.yaml."""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from moodplan.fileio import read_yaml, write_yaml_atomic
from moodplan.models import Settings
from moodplan.workspace import settings_path

logger = logging.getLogger(__name__)


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml; a missing file gives the defaults."""
    return Settings.from_dict(read_yaml(settings_path(root)))


def save_settings(settings: Settings, root: Path | None = None) -> None:
    write_yaml_atomic(settings_path(root), settings.to_dict())


def update_settings(root: Path | None = None, **changes: Any) -> tuple[Settings, list[str]]:
    """Apply *changes* to the stored settings. Returns (settings, errors).

    Nothing is written when any key is unknown.
    """
    known = {f.name for f in fields(Settings)}
    errors = [f"Unknown setting: {k}" for k in changes if k not in known]
    settings = load_settings(root)
    if errors:
        return settings, errors

    data = settings.to_dict()
    data.update(changes)
    updated = Settings.from_dict(data)
    if updated != settings:
        save_settings(updated, root)
        logger.info("Updated settings: %s", ", ".join(sorted(changes)))
    return updated, []


def reset_settings(root: Path | None = None) -> Settings:
    settings = Settings()
    save_settings(settings, root)
    return settings
