from __future__ import annotations

import logging
import random
from typing import List, Optional

from wordy.core.config import GameConfig
from wordy.core.hints import HintBudget
from wordy.core.levels import LevelRepository
from wordy.core.progress import MusicSettings, ProgressStore
from wordy.core.questions import QuestionBank
from wordy.core.rewards import FixedReward, RewardSource
from wordy.core.session import EventHandler, GameSession

logger = logging.getLogger(__name__)


class AppState:
    """Services shared by every screen, created once at startup and shut down on exit."""

    def __init__(
        self,
        config: GameConfig,
        bank: QuestionBank,
        progress: ProgressStore,
        rng: Optional[random.Random] = None,
        rewards: Optional[RewardSource] = None,
    ) -> None:
        self.config = config
        self.bank = bank
        self.levels = LevelRepository(bank, pack_size=config.pack_size)
        self.progress = progress
        self.hints = HintBudget(config.initial_hints)
        self.rng = rng if rng is not None else random.Random()
        self.rewards = rewards if rewards is not None else FixedReward(config.reward_hints)
        self._closed = False

    @classmethod
    def create(
        cls,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rewards: Optional[RewardSource] = None,
    ) -> "AppState":
        config = config or GameConfig.from_env()
        bank = QuestionBank.load(config.questions_path)
        progress = ProgressStore(config.progress_path)
        return cls(config, bank, progress, rng=random.Random(seed), rewards=rewards)

    def categories(self) -> List[str]:
        return self.bank.categories()

    def new_session(self, category: str, on_event: Optional[EventHandler] = None) -> GameSession:
        return GameSession(
            self.levels,
            self.progress,
            category,
            hints=self.hints,
            rng=self.rng,
            on_event=on_event,
        )

    @property
    def music(self) -> MusicSettings:
        return self.progress.get_music_settings()

    def set_music_enabled(self, enabled: bool) -> MusicSettings:
        return self.progress.update_music_settings(enabled=enabled)

    def set_music_volume(self, volume: float) -> MusicSettings:
        return self.progress.update_music_settings(volume=volume)

    def shutdown(self) -> None:
        """Flush progress. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self.progress.save()
        logger.info("Application state shut down")
