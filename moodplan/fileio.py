"""Whole-file document storage for the MoodPlan repositories.

Each repository file is read in one go and replaced in one go: writers go
to a locked sibling temp file which is then renamed over the target, so a
reader never sees a half-written document.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterator

import yaml

logger = logging.getLogger(__name__)


def _load_text(path: Path) -> str | None:
    """File contents, or None when the file is absent or only whitespace."""
    if not path.is_file():
        return None
    text = path.read_text(encoding="utf-8")
    return text if text.strip() else None


def read_json(path: Path, default: Any = None) -> Any:
    """Decode a JSON document. Missing/blank files give *default*."""
    text = _load_text(path)
    if text is None:
        return default
    return json.loads(text)


def read_yaml(path: Path) -> dict[str, Any]:
    """Decode a YAML mapping. Anything else (including no file) gives {}."""
    text = _load_text(path)
    if text is None:
        return {}
    data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


@contextmanager
def _replacing(path: Path) -> Iterator[IO[str]]:
    """Yield a locked temp file that replaces *path* when the block succeeds."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX)
            try:
                yield fh
                fh.flush()
                os.fsync(fh.fileno())
            finally:
                fcntl.flock(fh.fileno(), fcntl.LOCK_UN)
        os.replace(tmp, path)
    except BaseException:
        if os.path.exists(tmp):
            os.unlink(tmp)
        raise
    logger.debug("Replaced %s", path)


def write_json_atomic(path: Path, data: Any) -> None:
    """Replace *path* with *data* as indented JSON (objects or arrays)."""
    with _replacing(path) as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False)
        fh.write("\n")


def write_yaml_atomic(path: Path, data: dict[str, Any]) -> None:
    with _replacing(path) as fh:
        yaml.safe_dump(data, fh, default_flow_style=False, allow_unicode=True, sort_keys=False)
