"""Qt bridge between a GameSession and the widgets."""

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, Optional

from PySide6.QtCore import QObject, QTimer, Signal

from wordy.core.app_state import AppState
from wordy.core.hints import HintResult
from wordy.core.puzzle import PuzzleState
from wordy.core.session import Focus, GameEvent, GameSession

logger = logging.getLogger(__name__)


class GameController(QObject):
    """Re-emits session events as Qt signals and owns the wrong-answer revert timers.

    Each wrong answer gets its own single-shot timer keyed by the revert
    token. Loading a level stops them all, and the session drops any revert
    whose token went stale in the meantime.
    """

    correct_answer = Signal()
    wrong_answer = Signal(int)
    level_complete = Signal(int)
    category_complete = Signal()
    no_hints_available = Signal()
    all_solved = Signal()
    no_hint_targets = Signal()
    hints_granted = Signal(int)
    reward_unavailable = Signal()
    hint_reminder = Signal(str)
    board_changed = Signal()

    def __init__(self, app_state: AppState, category: str, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._app_state = app_state
        self._session: GameSession = app_state.new_session(category, on_event=self._dispatch)
        self._revert_timers: Dict[int, QTimer] = {}

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def state(self) -> Optional[PuzzleState]:
        return self._session.state

    @property
    def focus(self) -> Optional[Focus]:
        return self._session.focus

    @property
    def level(self) -> int:
        return self._session.level

    @property
    def hints_left(self) -> int:
        return self._session.hints_left

    def is_revert_pending(self) -> bool:
        return any(timer.isActive() for timer in self._revert_timers.values())

    def start(self) -> None:
        self._stop_revert()
        self._session.start()
        self.board_changed.emit()

    def next_level(self) -> None:
        self._stop_revert()
        self._session.next_level()
        self.board_changed.emit()

    def restart_category(self) -> None:
        self._stop_revert()
        self._session.restart_category()
        self.board_changed.emit()

    def leave(self) -> None:
        """Drop any in-flight revert when navigating away from the board."""
        self._stop_revert()
        self._session.cancel_revert()

    def select_cell(self, clue_index: int, cell_index: int) -> None:
        if self._session.select_cell(clue_index, cell_index):
            self.board_changed.emit()

    def type_letter(self, letter: str) -> None:
        self._session.type_letter(letter)
        self.board_changed.emit()

    def backspace(self) -> None:
        self._session.backspace()
        self.board_changed.emit()

    def enter(self) -> None:
        self._session.enter()
        self.board_changed.emit()

    def request_hint(self) -> HintResult:
        result = self._session.request_hint()
        self.board_changed.emit()
        return result

    def request_reward(self) -> bool:
        """Ask the reward source for more hints. Grants arrive through :meth:`grant_hints`."""
        if not self._app_state.rewards.request(self.grant_hints):
            logger.info("No reward ready for %r", self._session.category)
            self.reward_unavailable.emit()
            return False
        return True

    def grant_hints(self, amount: int) -> None:
        """Slot for reward callbacks; runs on the GUI thread like every other mutation."""
        if self._session.grant_hints(amount):
            self.board_changed.emit()

    def _dispatch(self, event: GameEvent, payload: Any) -> None:
        if event is GameEvent.CORRECT_ANSWER:
            self.correct_answer.emit()
        elif event is GameEvent.WRONG_ANSWER:
            self._schedule_revert(int(payload))
            self.wrong_answer.emit(int(payload))
        elif event is GameEvent.LEVEL_COMPLETE:
            self.level_complete.emit(int(payload))
        elif event is GameEvent.CATEGORY_COMPLETE:
            self.category_complete.emit()
        elif event is GameEvent.NO_HINTS_AVAILABLE:
            self.no_hints_available.emit()
        elif event is GameEvent.ALL_SOLVED:
            self.all_solved.emit()
        elif event is GameEvent.NO_HINT_TARGETS_IN_CLUE:
            self.no_hint_targets.emit()
        elif event is GameEvent.HINT_GRANTED:
            self.hints_granted.emit(int(payload))
        elif event is GameEvent.HINT_REMINDER:
            self.hint_reminder.emit(str(payload))

    def _schedule_revert(self, clue_index: int) -> None:
        pending = self._session.pending_revert(clue_index)
        if pending is None:
            return
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(partial(self._on_revert_timeout, pending.token))
        self._revert_timers[pending.token] = timer
        timer.start(self._app_state.config.revert_delay_ms)

    def _stop_revert(self) -> None:
        for timer in self._revert_timers.values():
            timer.stop()
            timer.deleteLater()
        self._revert_timers.clear()

    def _on_revert_timeout(self, token: int) -> None:
        timer = self._revert_timers.pop(token, None)
        if timer is None:
            return
        timer.deleteLater()
        position = self._session.apply_revert(token)
        if position is None:
            logger.debug("Discarded stale revert %d", token)
            return
        self.board_changed.emit()
