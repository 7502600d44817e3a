"""XDG path helpers for settings and runtime state.

Nothing here creates directories; writers create parents on demand.
"""

from __future__ import annotations

from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "pretty-compare"
APP_AUTHOR = "pretty-compare"


def dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=APP_AUTHOR, roaming=False)


def config_root() -> Path:
    return Path(dirs().user_config_path)


def state_root() -> Path:
    return Path(dirs().user_state_path)


def settings_path() -> Path:
    return config_root() / "settings.json"


def runtime_log_path() -> Path:
    return state_root() / "logs" / "pretty-compare.runtime.jsonl"
