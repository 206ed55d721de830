"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Pomodesk/settings.json

Set ``POMODESK_HOME`` to use another directory.  Timer durations, the
focus history and the theme are not kept here; they live in the
key-value store (see ``persistence.py``).

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path

log = logging.getLogger(__name__)


def _app_support_dir() -> Path:
    override = os.environ.get("POMODESK_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Library" / "Application Support" / "Pomodesk"


APP_SUPPORT_DIR = _app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

PERMISSION_VALUES = ("granted", "denied", "not-yet-asked")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class Settings:
    """All user-configurable preferences outside the timer itself."""

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True
    notification_permission: str = "not-yet-asked"

    # ── wake lock ─────────────────────────────────────────────────────
    wake_lock_enabled: bool = True

    # ── timer driver ──────────────────────────────────────────────────
    tick_interval_ms: int = 250

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "INFO"

    # ── window ────────────────────────────────────────────────────────
    minimize_to_tray: bool = True
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 440
    window_height: int = 640

    def normalized(self) -> Settings:
        """Copy with every field forced back into its valid type and range.

        A field holding the wrong JSON type falls back to its default
        on its own; the other fields are kept.
        """
        defaults = Settings()

        def flag(name: str) -> bool:
            value = getattr(self, name)
            if isinstance(value, bool):
                return value
            log.warning("Ignoring invalid setting %s=%r", name, value)
            return getattr(defaults, name)

        def number(name: str, optional: bool = False) -> int | None:
            value = getattr(self, name)
            if value is None and optional:
                return None
            if isinstance(value, int) and not isinstance(value, bool):
                return value
            log.warning("Ignoring invalid setting %s=%r", name, value)
            return getattr(defaults, name)

        level = str(self.log_level).upper()
        width = number("window_width")
        height = number("window_height")
        return replace(
            self,
            sound_enabled=flag("sound_enabled"),
            sound_volume=max(0, min(number("sound_volume"), 100)),
            notifications_enabled=flag("notifications_enabled"),
            notification_permission=(
                self.notification_permission
                if self.notification_permission in PERMISSION_VALUES
                else defaults.notification_permission
            ),
            wake_lock_enabled=flag("wake_lock_enabled"),
            tick_interval_ms=max(100, min(number("tick_interval_ms"), 1000)),
            log_level=level if level in LOG_LEVELS else defaults.log_level,
            minimize_to_tray=flag("minimize_to_tray"),
            window_x=number("window_x", optional=True),
            window_y=number("window_y", optional=True),
            window_width=width if width > 0 else defaults.window_width,
            window_height=height if height > 0 else defaults.window_height,
        )


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered).normalized()
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("Ignoring unreadable settings file %s: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON.  Raises ``OSError`` on failure."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
