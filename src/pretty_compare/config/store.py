"""Load/save settings and resolve the process-wide settings."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from pretty_compare.config.models import AppSettings
from pretty_compare.paths import settings_path
from pretty_compare.runtime_logging import get_runtime_logger

COLOR_ENV = "PRETTY_COMPARE_COLOR"
GRANULARITY_ENV = "PRETTY_COMPARE_GRANULARITY"

_process_settings: AppSettings | None = None


class SettingsStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = path or settings_path()

    def exists(self) -> bool:
        return self.path.exists()

    def load(self) -> AppSettings:
        if not self.path.exists():
            settings = AppSettings()
            self.save(settings)
            return settings

        raw = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(raw)
            return AppSettings.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as exc:
            # Fall back to defaults while preserving corrupt payload for debugging.
            backup = self.path.with_suffix(".corrupt.json")
            backup.write_text(raw, encoding="utf-8")
            get_runtime_logger().warning(
                "settings.corrupt",
                path=str(self.path),
                backup=str(backup),
                error=exc.__class__.__name__,
            )
            settings = AppSettings()
            self.save(settings)
            return settings

    def save(self, settings: AppSettings) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(settings.model_dump(mode="json"), indent=2, sort_keys=True)
        self.path.write_text(f"{payload}\n", encoding="utf-8")

    def update(self, dotted_key: str, value: Any) -> AppSettings:
        settings = self.load()
        data = settings.model_dump()

        keys = dotted_key.split(".")
        cursor: dict[str, Any] = data
        for key in keys[:-1]:
            nested = cursor.get(key)
            if not isinstance(nested, dict):
                raise KeyError(f"Unknown setting path: {dotted_key}")
            cursor = nested
        if keys[-1] not in cursor:
            raise KeyError(f"Unknown setting path: {dotted_key}")
        cursor[keys[-1]] = value

        updated = AppSettings.model_validate(data)
        self.save(updated)
        return updated


_ENV_OVERRIDES: tuple[tuple[str, str, str], ...] = (
    (COLOR_ENV, "output", "color"),
    (GRANULARITY_ENV, "diff", "granularity"),
)


def apply_env_overrides(settings: AppSettings) -> AppSettings:
    """Layer environment overrides on ``settings``.

    A value the schema rejects is logged as ``settings.env_invalid`` and
    ignored, leaving the stored or default setting in place.
    """
    for variable, section, key in _ENV_OVERRIDES:
        raw = os.getenv(variable)
        if not raw:
            continue
        data = settings.model_dump()
        data[section][key] = raw.strip().lower()
        try:
            settings = AppSettings.model_validate(data)
        except ValidationError as exc:
            get_runtime_logger().warning(
                "settings.env_invalid",
                variable=variable,
                value=raw,
                setting=f"{section}.{key}",
                error=exc.errors()[0]["msg"],
            )
    return settings


def load_settings(store: SettingsStore | None = None, *, reload: bool = False) -> AppSettings:
    """Return the process settings.

    The settings file is read only when it already exists; defaults are used
    otherwise. Environment overrides are applied on top of either. Only the
    default store's result is cached.
    """
    global _process_settings

    if store is not None:
        return _resolve(store)
    if _process_settings is None or reload:
        _process_settings = _resolve(SettingsStore())
    return _process_settings


def _resolve(store: SettingsStore) -> AppSettings:
    settings = store.load() if store.exists() else AppSettings()
    return apply_env_overrides(settings)
