from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from wordy.core.engine import Resolution, submit_answer
from wordy.core.puzzle import CellStatus, PuzzleState

DEFAULT_HINTS = 3


class HintBudget:
    """Hints available to the player for the lifetime of the process."""

    def __init__(self, initial: int = DEFAULT_HINTS) -> None:
        self._remaining = max(0, int(initial))

    @property
    def remaining(self) -> int:
        return self._remaining

    def consume(self) -> bool:
        """Spend one hint. Returns False if none are left."""
        if self._remaining <= 0:
            return False
        self._remaining -= 1
        return True

    def grant(self, amount: int) -> int:
        """Add rewarded hints. Non-positive amounts are ignored. Returns the amount added."""
        amount = int(amount)
        if amount <= 0:
            return 0
        self._remaining += amount
        return amount


class HintOutcome(Enum):
    PLACED = "placed"
    NO_HINTS_AVAILABLE = "no_hints_available"
    ALL_SOLVED = "all_solved"
    NO_TARGETS_IN_CLUE = "no_targets_in_clue"


@dataclass
class HintResult:
    outcome: HintOutcome
    clue_index: Optional[int] = None
    position: Optional[int] = None
    resolution: Optional[Resolution] = None


def allocate_hint(state: PuzzleState, budget: HintBudget, rng: random.Random) -> HintResult:
    """Reveal one random empty cell of one random unsolved clue.

    The budget is only charged when a letter is actually placed. If the hint
    fills the clue, the clue is submitted and may start a cascade.
    """
    if budget.remaining <= 0:
        return HintResult(HintOutcome.NO_HINTS_AVAILABLE)

    unsolved = state.unsolved_indices()
    if not unsolved:
        return HintResult(HintOutcome.ALL_SOLVED)

    clue_index = rng.choice(unsolved)
    # Cells flagged INCORRECT still hold a letter until the revert clears them.
    targets = state.empty_positions(clue_index)
    if not targets:
        return HintResult(HintOutcome.NO_TARGETS_IN_CLUE, clue_index=clue_index)

    position = rng.choice(targets)
    state.set_cell(clue_index, position, state.answer(clue_index)[position], CellStatus.HINT)
    budget.consume()

    result = HintResult(HintOutcome.PLACED, clue_index=clue_index, position=position)
    if state.is_filled(clue_index):
        result.resolution = submit_answer(state, clue_index)
    return result
