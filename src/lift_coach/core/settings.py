"""
YAML user settings.

Loads ~/.lift-coach/settings.yaml (the base directory can be moved with
the LIFT_COACH_HOME environment variable):

    user_id: local
    data_file: ~/.lift-coach/history.json
    maxes:
      squat: 315
      bench: 225
      deadlift: 405

A missing file yields defaults.  A file that cannot be parsed produces a
warning and is ignored (no crash).
"""

from __future__ import annotations

import os
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .models import LiftMaxes

DEFAULT_USER_ID = "local"


@dataclass(frozen=True)
class Settings:
    """Resolved user settings."""

    user_id: str = DEFAULT_USER_ID
    data_file: Path | None = None
    maxes: LiftMaxes | None = None


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def get_home_dir() -> Path:
    """Return the lift-coach base directory."""
    override = os.environ.get("LIFT_COACH_HOME")
    if override:
        return Path(override).expanduser()
    return Path(os.environ.get("HOME", "~")).expanduser() / ".lift-coach"


def get_settings_path() -> Path:
    return get_home_dir() / "settings.yaml"


def get_default_data_path() -> Path:
    return get_home_dir() / "history.json"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a single YAML file; warn and return {} on parse errors."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        warnings.warn(f"lift-coach: ignoring unreadable settings file {path}: {e}", stacklevel=2)
        return {}
    if data is None:
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"lift-coach: settings file {path} is not a mapping; ignored", stacklevel=2)
        return {}
    return data


def _parse_maxes(raw: Any) -> LiftMaxes | None:
    if not isinstance(raw, dict):
        return None
    try:
        return LiftMaxes(
            squat=float(raw["squat"]),
            bench=float(raw["bench"]),
            deadlift=float(raw["deadlift"]),
        )
    except (KeyError, TypeError, ValueError):
        warnings.warn("lift-coach: 'maxes' needs numeric squat, bench and deadlift; ignored", stacklevel=3)
        return None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_settings(path: Path | None = None) -> Settings:
    """
    Load user settings.

    Args:
        path: Settings file; defaults to get_settings_path()

    Returns:
        Settings with defaults for anything not configured
    """
    path = path or get_settings_path()
    if not path.exists():
        return Settings()

    data = _load_yaml_file(path)
    data_file = data.get("data_file")

    return Settings(
        user_id=str(data.get("user_id") or DEFAULT_USER_ID),
        data_file=Path(data_file).expanduser() if data_file else None,
        maxes=_parse_maxes(data.get("maxes")),
    )


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Write settings as YAML, creating the directory if needed."""
    path = path or get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    data: dict[str, Any] = {"user_id": settings.user_id}
    if settings.data_file is not None:
        data["data_file"] = str(settings.data_file)
    if settings.maxes is not None:
        data["maxes"] = {
            "squat": settings.maxes.squat,
            "bench": settings.maxes.bench,
            "deadlift": settings.maxes.deadlift,
        }

    with open(path, "w", encoding="utf-8") as fh:
        yaml.safe_dump(data, fh, sort_keys=False)
    return path
