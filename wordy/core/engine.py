"""Answer checking and cross-clue letter cascades."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Deque, List, Set, Tuple

from wordy.core.puzzle import CellStatus, PuzzleState

logger = logging.getLogger(__name__)


class SubmitOutcome(Enum):
    IGNORED = "ignored"
    INCOMPLETE = "incomplete"
    CORRECT = "correct"
    WRONG = "wrong"


@dataclass
class Resolution:
    """What a submission changed.

    ``solved`` lists clue indices in the order the cascade completed them,
    starting with the submitted clue. ``revealed`` lists every
    ``(clue_index, position)`` that received a revealed letter.
    """

    outcome: SubmitOutcome
    clue_index: int
    solved: List[int] = field(default_factory=list)
    revealed: List[Tuple[int, int]] = field(default_factory=list)


def submit_answer(state: PuzzleState, clue_index: int) -> Resolution:
    """Check a clue's letters against its answer and cascade reveals on success.

    Out-of-range and already-solved clues are ignored. A clue with empty cells
    is reported as incomplete and left untouched. A wrong answer flags every
    ``INPUT`` cell as ``INCORRECT``; clearing them is :func:`clear_incorrect`'s job.
    """
    if not state.has_clue(clue_index) or state.is_solved(clue_index):
        return Resolution(SubmitOutcome.IGNORED, clue_index)
    if not state.is_filled(clue_index):
        return Resolution(SubmitOutcome.INCOMPLETE, clue_index)

    if state.word(clue_index) != state.answer(clue_index):
        for position, cell in enumerate(state.cells(clue_index)):
            if cell.status is CellStatus.INPUT:
                state.set_cell(clue_index, position, cell.letter, CellStatus.INCORRECT)
        return Resolution(SubmitOutcome.WRONG, clue_index)

    resolution = Resolution(SubmitOutcome.CORRECT, clue_index)
    _cascade(state, clue_index, resolution)
    return resolution


def _cascade(state: PuzzleState, first: int, resolution: Resolution) -> None:
    queue: Deque[int] = deque([first])
    processed: Set[int] = set()
    while queue:
        current = queue.popleft()
        if current in processed:
            continue
        processed.add(current)
        state.mark_solved(current)
        resolution.solved.append(current)

        word = state.answer(current)
        letters = set(word)
        for other in range(state.clue_count):
            if state.is_solved(other):
                continue
            target = state.answer(other)
            changed = False
            for position, letter in enumerate(target):
                if letter in letters and state.cell(other, position).is_empty:
                    state.set_cell(other, position, letter, CellStatus.REVEALED)
                    resolution.revealed.append((other, position))
                    changed = True
            if changed and state.is_filled(other) and state.word(other) == target:
                logger.debug("Clue %d completed by cascade from clue %d", other, current)
                queue.append(other)


def clear_incorrect(state: PuzzleState, clue_index: int) -> int:
    """Empty every non-locked cell of a clue after a wrong answer.

    Returns the position of the first cleared cell, or 0 when nothing was
    cleared, so the caller can put the cursor back there. Solved clues are
    left alone.
    """
    if not state.has_clue(clue_index) or state.is_solved(clue_index):
        return 0
    first_cleared = -1
    for position, cell in enumerate(state.cells(clue_index)):
        if cell.is_locked:
            continue
        if first_cleared == -1:
            first_cleared = position
        state.clear_cell(clue_index, position)
    return first_cleared if first_cleared != -1 else 0
