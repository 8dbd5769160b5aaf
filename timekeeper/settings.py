"""Application settings with JSON persistence.

Settings are stored at:
    ~/.config/timekeeper/settings.json

Usage::

    settings = load_settings()
    settings.tick_interval_ms = 250
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "timekeeper"
SETTINGS_PATH = CONFIG_DIR / "settings.json"

MIN_TICK_INTERVAL_MS = 10


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    tick_interval_ms: int = 1000
    allow_end_while_paused: bool = True

    # ── display ───────────────────────────────────────────────────────
    display_smallest_unit: str = "second"  # hour | minute | second | millisecond

    # ── logging ───────────────────────────────────────────────────────
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.tick_interval_ms = max(MIN_TICK_INTERVAL_MS, int(self.tick_interval_ms))
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            logger.warning("Unknown log level %r, using WARNING", self.log_level)
            self.log_level = "WARNING"


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        # Only use keys that exist in the dataclass
        valid_keys = {f.name for f in fields(Settings)}
        filtered = {k: v for k, v in data.items() if k in valid_keys}
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings at %s: %s", SETTINGS_PATH, exc)
        return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
