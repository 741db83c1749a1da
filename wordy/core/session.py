from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from wordy.core.engine import Resolution, SubmitOutcome, clear_incorrect, submit_answer
from wordy.core.hints import HintBudget, HintOutcome, HintResult, allocate_hint
from wordy.core.levels import LevelRepository
from wordy.core.progress import ProgressStore
from wordy.core.puzzle import CellStatus, PuzzleState

logger = logging.getLogger(__name__)

FIRST_PLAY_REMINDER = "Use hints if you get stuck!"
WRONG_ANSWER_REMINDER = "Stuck? Try using a hint!"


class GameEvent(Enum):
    CORRECT_ANSWER = "correct_answer"
    WRONG_ANSWER = "wrong_answer"
    LEVEL_COMPLETE = "level_complete"
    CATEGORY_COMPLETE = "category_complete"
    NO_HINTS_AVAILABLE = "no_hints_available"
    ALL_SOLVED = "all_solved"
    NO_HINT_TARGETS_IN_CLUE = "no_hint_targets_in_clue"
    HINT_GRANTED = "hint_granted"
    HINT_REMINDER = "hint_reminder"


EventHandler = Callable[[GameEvent, Any], None]

_HINT_EVENTS = {
    HintOutcome.NO_HINTS_AVAILABLE: GameEvent.NO_HINTS_AVAILABLE,
    HintOutcome.ALL_SOLVED: GameEvent.ALL_SOLVED,
    HintOutcome.NO_TARGETS_IN_CLUE: GameEvent.NO_HINT_TARGETS_IN_CLUE,
}


@dataclass(frozen=True)
class Focus:
    clue_index: int
    cell_index: int


@dataclass(frozen=True)
class PendingRevert:
    """A wrong answer waiting to be cleared. Only the matching token may apply it."""

    clue_index: int
    token: int


class GameSession:
    """Plays one category: loads levels, routes input, tracks progression.

    All mutation happens synchronously inside the public methods. The only
    deferred action is the wrong-answer revert: the host waits its delay and
    then calls :meth:`apply_revert` with the token from :meth:`pending_revert`.
    Tokens go stale when a level is loaded or the clue is submitted again.
    """

    def __init__(
        self,
        levels: LevelRepository,
        progress: ProgressStore,
        category: str,
        hints: Optional[HintBudget] = None,
        rng: Optional[random.Random] = None,
        on_event: Optional[EventHandler] = None,
    ) -> None:
        self._levels = levels
        self._progress = progress
        self._category = category
        self._hints = hints if hints is not None else HintBudget()
        self._rng = rng if rng is not None else random.Random()
        self._on_event = on_event
        self._state: Optional[PuzzleState] = None
        self._level = 1
        self._focus: Optional[Focus] = None
        self._pending: Dict[int, PendingRevert] = {}
        self._revert_token = 0
        self._level_reported = False

    @property
    def category(self) -> str:
        return self._category

    @property
    def level(self) -> int:
        return self._level

    @property
    def level_count(self) -> int:
        return self._levels.level_count(self._category)

    @property
    def state(self) -> Optional[PuzzleState]:
        return self._state

    @property
    def focus(self) -> Optional[Focus]:
        return self._focus

    @property
    def hints_left(self) -> int:
        return self._hints.remaining

    def pending_revert(self, clue_index: int) -> Optional[PendingRevert]:
        return self._pending.get(clue_index)

    def pending_reverts(self) -> List[PendingRevert]:
        return list(self._pending.values())

    def is_level_complete(self) -> bool:
        return self._state is not None and self._state.is_complete()

    # -- level lifecycle -------------------------------------------------

    def start(self) -> Optional[PuzzleState]:
        """Load the saved level for the category (level 1 on first play)."""
        first_play = not self._progress.has_level(self._category)
        state = self.load_level(self._progress.get_level(self._category))
        if first_play and not self._progress.hint_intro_shown(self._category):
            self._emit(GameEvent.HINT_REMINDER, FIRST_PLAY_REMINDER)
            self._progress.mark_hint_intro_shown(self._category)
        return state

    def load_level(self, level_number: int) -> Optional[PuzzleState]:
        """Replace the board with a fresh one for ``level_number``.

        Past the last pack the category wraps: CATEGORY_COMPLETE is emitted,
        level 1 is persisted and loaded instead. Returns None only when the
        category has no packs at all.
        """
        self.cancel_revert()
        self._focus = None
        self._level_reported = False
        pack = self._levels.get(self._category, level_number)
        if pack is None:
            logger.info("Category %r complete at level %d, restarting from level 1", self._category, level_number)
            self._emit(GameEvent.CATEGORY_COMPLETE, None)
            self._progress.set_level(self._category, 1)
            level_number = 1
            pack = self._levels.get(self._category, 1)
        self._level = level_number
        if pack is None:
            logger.warning("Category %r has no playable levels", self._category)
            self._state = None
            return None
        self._state = PuzzleState(pack)
        logger.info("Loaded %r level %d (%d clues)", self._category, level_number, self._state.clue_count)
        return self._state

    def next_level(self) -> Optional[PuzzleState]:
        return self.load_level(self._level + 1)

    def restart_category(self) -> Optional[PuzzleState]:
        self._progress.set_level(self._category, 1)
        return self.load_level(1)

    # -- input -----------------------------------------------------------

    def select_cell(self, clue_index: int, cell_index: int) -> bool:
        if not self._is_editable(clue_index, cell_index):
            return False
        self._focus = Focus(clue_index, cell_index)
        return True

    def clear_selection(self) -> None:
        self._focus = None

    def type_letter(self, letter: str) -> None:
        focus = self._focus
        if focus is None or not self._is_editable(focus.clue_index, focus.cell_index):
            return
        letter = letter.upper()
        if len(letter) != 1 or not letter.isalpha():
            return
        state = self._state
        state.set_cell(focus.clue_index, focus.cell_index, letter, CellStatus.INPUT)
        if state.is_filled(focus.clue_index):
            self._focus = None
            self.submit(focus.clue_index)
            return
        self._focus = self._next_editable(focus.clue_index, focus.cell_index + 1)

    def backspace(self) -> None:
        focus = self._focus
        if focus is None or not self._is_editable(focus.clue_index, focus.cell_index):
            return
        state = self._state
        state.clear_cell(focus.clue_index, focus.cell_index)
        previous = focus.cell_index - 1
        while previous >= 0 and state.cell(focus.clue_index, previous).is_locked:
            previous -= 1
        if previous >= 0:
            self._focus = Focus(focus.clue_index, previous)

    def enter(self) -> None:
        focus = self._focus
        if focus is None or self._state is None or self._state.is_solved(focus.clue_index):
            return
        if self._state.is_filled(focus.clue_index):
            self.submit(focus.clue_index)

    def submit(self, clue_index: int) -> Resolution:
        if self._state is None:
            return Resolution(SubmitOutcome.IGNORED, clue_index)
        resolution = submit_answer(self._state, clue_index)
        self._after_submit(resolution)
        return resolution

    # -- wrong-answer revert ---------------------------------------------

    def apply_revert(self, token: int) -> Optional[int]:
        """Clear the wrong letters of the pending clue. Returns the new cursor position.

        Stale or unknown tokens do nothing and return None.
        """
        pending = next((p for p in self._pending.values() if p.token == token), None)
        if pending is None or self._state is None:
            return None
        del self._pending[pending.clue_index]
        if self._state.is_solved(pending.clue_index):
            return None
        position = clear_incorrect(self._state, pending.clue_index)
        self._focus = Focus(pending.clue_index, position)
        self._emit(GameEvent.HINT_REMINDER, WRONG_ANSWER_REMINDER)
        return position

    def cancel_revert(self, clue_index: Optional[int] = None) -> None:
        """Forget the pending revert of one clue, or of every clue."""
        if clue_index is None:
            self._pending.clear()
        else:
            self._pending.pop(clue_index, None)

    # -- hints -----------------------------------------------------------

    def request_hint(self) -> HintResult:
        if self._state is None:
            self._emit(GameEvent.ALL_SOLVED, None)
            return HintResult(HintOutcome.ALL_SOLVED)
        result = allocate_hint(self._state, self._hints, self._rng)
        if result.outcome is not HintOutcome.PLACED:
            self._emit(_HINT_EVENTS[result.outcome], None)
            return result
        if result.resolution is not None:
            self._after_submit(result.resolution)
        self._repair_focus()
        return result

    def grant_hints(self, amount: int) -> int:
        """Merge a reward grant into the budget."""
        added = self._hints.grant(amount)
        if added:
            self._emit(GameEvent.HINT_GRANTED, added)
        return added

    # -- internals -------------------------------------------------------

    def _after_submit(self, resolution: Resolution) -> None:
        if resolution.outcome not in (SubmitOutcome.CORRECT, SubmitOutcome.WRONG):
            return
        self.cancel_revert(resolution.clue_index)
        if resolution.outcome is SubmitOutcome.WRONG:
            self._revert_token += 1
            self._pending[resolution.clue_index] = PendingRevert(resolution.clue_index, self._revert_token)
            self._emit(GameEvent.WRONG_ANSWER, resolution.clue_index)
            return
        logger.debug("Clue %d solved, cascade completed %s", resolution.clue_index, resolution.solved)
        self._repair_focus()
        self._emit(GameEvent.CORRECT_ANSWER, resolution.clue_index)
        self._check_level_complete()

    def _check_level_complete(self) -> None:
        if self._level_reported or not self.is_level_complete():
            return
        self._level_reported = True
        self._focus = None
        logger.info("Level %d of %r completed", self._level, self._category)
        self._progress.set_level(self._category, self._level + 1)
        self._emit(GameEvent.LEVEL_COMPLETE, self._level)

    def _repair_focus(self) -> None:
        focus = self._focus
        if focus is None or self._is_editable(focus.clue_index, focus.cell_index):
            return
        if self._state.is_solved(focus.clue_index):
            self._focus = None
            return
        self._focus = self._next_editable(focus.clue_index, focus.cell_index)

    def _is_editable(self, clue_index: int, cell_index: int) -> bool:
        state = self._state
        if state is None or not state.has_clue(clue_index) or state.is_solved(clue_index):
            return False
        if not 0 <= cell_index < len(state.answer(clue_index)):
            return False
        return not state.cell(clue_index, cell_index).is_locked

    def _next_editable(self, clue_index: int, start: int) -> Optional[Focus]:
        cells = self._state.cells(clue_index)
        for position in range(start, len(cells)):
            if not cells[position].is_locked:
                return Focus(clue_index, position)
        return None

    def _emit(self, event: GameEvent, payload: Any) -> None:
        if self._on_event is not None:
            self._on_event(event, payload)
