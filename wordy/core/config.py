from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from wordy.core.hints import DEFAULT_HINTS
from wordy.core.levels import DEFAULT_PACK_SIZE
from wordy.core.progress import DEFAULT_PROGRESS_PATH
from wordy.core.questions import DEFAULT_QUESTIONS_PATH
from wordy.core.rewards import DEFAULT_REWARD_HINTS

logger = logging.getLogger(__name__)

DEFAULT_REVERT_DELAY_MS = 1000


@dataclass(frozen=True)
class GameConfig:
    """Tunable game constants. ``from_env`` applies ``WORDY_*`` overrides."""

    pack_size: int = DEFAULT_PACK_SIZE
    initial_hints: int = DEFAULT_HINTS
    revert_delay_ms: int = DEFAULT_REVERT_DELAY_MS
    reward_hints: int = DEFAULT_REWARD_HINTS
    questions_path: Path = field(default=DEFAULT_QUESTIONS_PATH)
    progress_path: Path = field(default=DEFAULT_PROGRESS_PATH)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "GameConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        questions = env.get("WORDY_QUESTIONS")
        progress = env.get("WORDY_PROGRESS")
        return cls(
            pack_size=_int_setting(env, "WORDY_PACK_SIZE", defaults.pack_size, minimum=1),
            initial_hints=_int_setting(env, "WORDY_INITIAL_HINTS", defaults.initial_hints, minimum=0),
            revert_delay_ms=_int_setting(env, "WORDY_REVERT_DELAY_MS", defaults.revert_delay_ms, minimum=0),
            reward_hints=_int_setting(env, "WORDY_REWARD_HINTS", defaults.reward_hints, minimum=1),
            questions_path=Path(questions).expanduser() if questions else defaults.questions_path,
            progress_path=Path(progress).expanduser() if progress else defaults.progress_path,
        )


def _int_setting(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default
    if value < minimum:
        logger.warning("Ignoring %s=%d: must be at least %d", name, value, minimum)
        return default
    return value
