"""Tests for wordy.core.config – defaults and WORDY_* overrides."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from wordy.core.config import DEFAULT_REVERT_DELAY_MS, GameConfig
from wordy.core.hints import DEFAULT_HINTS
from wordy.core.levels import DEFAULT_PACK_SIZE
from wordy.core.progress import DEFAULT_PROGRESS_PATH
from wordy.core.questions import DEFAULT_QUESTIONS_PATH
from wordy.core.rewards import DEFAULT_REWARD_HINTS


class TestDefaults:
    def test_values(self):
        config = GameConfig()
        assert config.pack_size == DEFAULT_PACK_SIZE == 5
        assert config.initial_hints == DEFAULT_HINTS == 3
        assert config.revert_delay_ms == DEFAULT_REVERT_DELAY_MS == 1000
        assert config.reward_hints == DEFAULT_REWARD_HINTS == 1
        assert config.questions_path == DEFAULT_QUESTIONS_PATH
        assert config.progress_path == DEFAULT_PROGRESS_PATH

    def test_empty_environment(self):
        assert GameConfig.from_env({}) == GameConfig()

    def test_frozen(self):
        with pytest.raises(AttributeError):
            GameConfig().pack_size = 2  # type: ignore[misc]


class TestFromEnv:
    def test_overrides(self, tmp_path: Path):
        env = {
            "WORDY_PACK_SIZE": "4",
            "WORDY_INITIAL_HINTS": "0",
            "WORDY_REVERT_DELAY_MS": "250",
            "WORDY_REWARD_HINTS": "2",
            "WORDY_QUESTIONS": str(tmp_path / "bank.yaml"),
            "WORDY_PROGRESS": str(tmp_path / "p.json"),
        }
        config = GameConfig.from_env(env)
        assert config.pack_size == 4
        assert config.initial_hints == 0
        assert config.revert_delay_ms == 250
        assert config.reward_hints == 2
        assert config.questions_path == tmp_path / "bank.yaml"
        assert config.progress_path == tmp_path / "p.json"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("WORDY_PACK_SIZE", "2")
        assert GameConfig.from_env().pack_size == 2

    def test_blank_value_uses_default(self):
        assert GameConfig.from_env({"WORDY_PACK_SIZE": "  "}).pack_size == DEFAULT_PACK_SIZE
        assert GameConfig.from_env({"WORDY_QUESTIONS": ""}).questions_path == DEFAULT_QUESTIONS_PATH

    def test_expands_user(self):
        config = GameConfig.from_env({"WORDY_PROGRESS": "~/wordy.json"})
        assert config.progress_path == Path("~/wordy.json").expanduser()

    @pytest.mark.parametrize(
        "name, raw",
        [
            ("WORDY_PACK_SIZE", "five"),
            ("WORDY_PACK_SIZE", "0"),
            ("WORDY_INITIAL_HINTS", "-1"),
            ("WORDY_REVERT_DELAY_MS", "1.5"),
            ("WORDY_REWARD_HINTS", "0"),
        ],
    )
    def test_invalid_values_fall_back(self, name, raw, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="wordy.core.config"):
            config = GameConfig.from_env({name: raw})
        assert config == GameConfig()
        assert name in caplog.text
