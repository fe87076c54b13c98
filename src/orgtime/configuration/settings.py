"""Typed settings management for orgtime.

This module wraps user configuration in Pydantic models so the timestamp engine
and CLI commands can rely on validated settings. The timestamp engine reads
three values from here: the ISO weekday a week starts on, the ISO weekday a
week ends on, and the default deadline warning window in days.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from orgtime.errors import InvalidConfigError, MissingConfigError

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = Path.home() / ".orgtime" / "config.json"


class TimestampSettings(BaseModel):
    """Calendar conventions used by timestamp arithmetic."""

    model_config = ConfigDict(frozen=True)

    week_start_day: int = Field(1, ge=1, le=7, description="ISO weekday a week starts on (1 = Monday)")
    week_end_day: int = Field(7, ge=1, le=7, description="ISO weekday a week ends on (7 = Sunday)")
    deadline_warning_days: int = Field(14, ge=0, description="Default warning window for deadlines")


class Settings(BaseModel):
    """Root configuration state."""

    timestamps: TimestampSettings = Field(default_factory=TimestampSettings)


_active_settings: TimestampSettings = TimestampSettings()


def get_settings() -> TimestampSettings:
    """Return the process-wide default timestamp settings."""

    return _active_settings


def configure(settings: TimestampSettings | Settings) -> TimestampSettings:
    """Replace the process-wide default timestamp settings."""

    global _active_settings
    if isinstance(settings, Settings):
        settings = settings.timestamps
    _active_settings = settings
    logger.debug("Timestamp settings configured: %s", settings.model_dump())
    return settings


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings from disk or raise if invalid."""

    if not path.exists():
        raise MissingConfigError(
            f"Settings file not found at {path}", details={"path": str(path)}
        )
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidConfigError(
            f"Settings file is not valid JSON: {exc}", details={"path": str(path)}
        ) from exc
    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise InvalidConfigError(
            f"Invalid configuration: {exc}", details={"path": str(path)}
        ) from exc


def save_settings(settings: Settings, path: Path = DEFAULT_CONFIG_PATH) -> None:
    """Persist settings to disk."""

    payload = settings.model_dump(mode="json")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def bootstrap_settings(
    *,
    path: Path = DEFAULT_CONFIG_PATH,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Create or load settings respecting explicit and environment overrides."""

    overrides = overrides or {}

    if path.exists():
        settings = load_settings(path)
    else:
        settings = Settings()
        save_settings(settings, path)
        logger.info("Created default settings at %s", path)

    merged = settings.model_dump(mode="python")
    merged = _apply_overrides(merged, overrides)
    merged = _apply_env_overrides(merged)

    try:
        resolved = Settings.model_validate(merged)
    except ValidationError as exc:
        raise InvalidConfigError(f"Invalid configuration: {exc}") from exc
    save_settings(resolved, path)
    return resolved


def _apply_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = base.copy()
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    timestamps = data.setdefault("timestamps", {})
    _set_env_override(timestamps, "week_start_day", "ORGTIME_WEEK_START_DAY")
    _set_env_override(timestamps, "week_end_day", "ORGTIME_WEEK_END_DAY")
    _set_env_override(timestamps, "deadline_warning_days", "ORGTIME_DEADLINE_WARNING_DAYS")
    return data


def _set_env_override(mapping: Dict[str, Any], key: str, env_name: str) -> None:
    raw = os.getenv(env_name)
    if raw is None:
        return
    try:
        mapping[key] = int(raw)
    except ValueError as exc:
        raise InvalidConfigError(
            f"{env_name} must be an integer, got {raw!r}",
            details={"variable": env_name},
        ) from exc
