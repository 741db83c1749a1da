from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PROGRESS_PATH = Path.home() / ".wordy" / "progress.json"


@dataclass
class MusicSettings:
    enabled: bool = True
    volume: float = 0.5


def _category_slug(category: str) -> str:
    return category.replace(" & ", "_")


def level_key(category: str) -> str:
    """Storage key of a category's last unlocked level, e.g. ``level_Science_Nature``."""
    return f"level_{_category_slug(category)}"


def first_time_hint_key(category: str) -> str:
    return f"first_time_hint_{_category_slug(category)}"


def _clamp_volume(volume: Any) -> float:
    try:
        value = float(volume)
    except (TypeError, ValueError):
        return MusicSettings().volume
    return max(0.0, min(1.0, value))


class ProgressStore:
    """Key-value progress persisted as JSON, by default in ~/.wordy/progress.json.

    Every read and write degrades to defaults on I/O or parse errors; the
    player never sees a persistence failure.
    """

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or DEFAULT_PROGRESS_PATH
        self._values, self._flags, self._music = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get(self, key: str) -> Optional[int]:
        return self._values.get(key)

    def set(self, key: str, value: int) -> None:
        self._values[key] = int(value)
        self._save()

    def get_level(self, category: str) -> int:
        """Last unlocked level for the category, 1 if never played."""
        level = self.get(level_key(category))
        return level if level is not None else 1

    def has_level(self, category: str) -> bool:
        return level_key(category) in self._values

    def set_level(self, category: str, level: int) -> None:
        if level < 1:
            raise ValueError(f"level must be positive, got {level}")
        logger.info("Saving level %d for %s", level, level_key(category))
        self.set(level_key(category), level)

    def hint_intro_shown(self, category: str) -> bool:
        return self._flags.get(first_time_hint_key(category), False)

    def mark_hint_intro_shown(self, category: str) -> None:
        self._flags[first_time_hint_key(category)] = True
        self._save()

    def get_music_settings(self) -> MusicSettings:
        return MusicSettings(enabled=self._music.enabled, volume=self._music.volume)

    def update_music_settings(self, enabled: Optional[bool] = None, volume: Optional[float] = None) -> MusicSettings:
        if enabled is not None:
            self._music.enabled = bool(enabled)
        if volume is not None:
            self._music.volume = _clamp_volume(volume)
        self._save()
        return self.get_music_settings()

    def save(self) -> None:
        """Persist current state to disk (e.g. on app exit)."""
        self._save()

    def _load(self) -> Tuple[Dict[str, int], Dict[str, bool], MusicSettings]:
        values: Dict[str, int] = {}
        flags: Dict[str, bool] = {}
        music = MusicSettings()
        if not self._file_path.exists():
            return values, flags, music
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return values, flags, music
        if not isinstance(payload, dict):
            logger.warning("Ignoring progress file %s: expected an object", self._file_path)
            return values, flags, music

        raw_values = payload.get("values", {})
        if isinstance(raw_values, dict):
            for key, value in raw_values.items():
                # bool is an int subclass; a stored true is not a level
                if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
                    values[key] = value
                else:
                    logger.warning("Ignoring invalid stored value %r for %s", value, key)
        raw_flags = payload.get("flags", {})
        if isinstance(raw_flags, dict):
            flags = {key: bool(value) for key, value in raw_flags.items()}
        raw_music = payload.get("music", {})
        if isinstance(raw_music, dict):
            music = MusicSettings(
                enabled=bool(raw_music.get("enabled", True)),
                volume=_clamp_volume(raw_music.get("volume", MusicSettings().volume)),
            )
        return values, flags, music

    def _save(self) -> None:
        payload = {
            "values": dict(self._values),
            "flags": dict(self._flags),
            "music": asdict(self._music),
        }
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
