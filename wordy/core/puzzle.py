from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from wordy.core.levels import LevelPack
from wordy.core.questions import Clue


class CellStatus(str, Enum):
    EMPTY = "empty"
    INPUT = "input"
    HINT = "hint"
    REVEALED = "revealed"
    INCORRECT = "incorrect"


@dataclass
class Cell:
    letter: str = ""
    status: CellStatus = CellStatus.EMPTY

    @property
    def is_empty(self) -> bool:
        return self.letter == ""

    @property
    def is_locked(self) -> bool:
        """Hint and revealed cells always hold the right letter and never change again."""
        return self.status in (CellStatus.HINT, CellStatus.REVEALED)


class PuzzleState:
    """Answer cells and solved flags for every clue of one loaded level.

    Cells are addressed by ``(clue_index, position)``. A new level gets a new
    ``PuzzleState``; instances are never migrated between levels.
    """

    def __init__(self, pack: LevelPack) -> None:
        self._pack = pack
        self._clues: Tuple[Clue, ...] = pack.clues
        self._cells: List[List[Cell]] = [[Cell() for _ in clue.answer] for clue in self._clues]
        self._solved: List[bool] = [False] * len(self._clues)

    @property
    def pack(self) -> LevelPack:
        return self._pack

    @property
    def clues(self) -> Tuple[Clue, ...]:
        return self._clues

    @property
    def clue_count(self) -> int:
        return len(self._clues)

    def has_clue(self, clue_index: int) -> bool:
        return 0 <= clue_index < len(self._clues)

    def answer(self, clue_index: int) -> str:
        return self._clues[clue_index].answer

    def cells(self, clue_index: int) -> List[Cell]:
        return self._cells[clue_index]

    def cell(self, clue_index: int, position: int) -> Cell:
        return self._cells[clue_index][position]

    def set_cell(self, clue_index: int, position: int, letter: str, status: CellStatus) -> None:
        self._cells[clue_index][position] = Cell(letter=letter, status=status)

    def clear_cell(self, clue_index: int, position: int) -> None:
        self._cells[clue_index][position] = Cell()

    def word(self, clue_index: int) -> str:
        return "".join(cell.letter for cell in self._cells[clue_index])

    def is_filled(self, clue_index: int) -> bool:
        return all(not cell.is_empty for cell in self._cells[clue_index])

    def is_solved(self, clue_index: int) -> bool:
        return self._solved[clue_index]

    def mark_solved(self, clue_index: int) -> None:
        self._solved[clue_index] = True

    @property
    def solved(self) -> List[bool]:
        return list(self._solved)

    def unsolved_indices(self) -> List[int]:
        return [index for index, done in enumerate(self._solved) if not done]

    def empty_positions(self, clue_index: int) -> List[int]:
        return [pos for pos, cell in enumerate(self._cells[clue_index]) if cell.is_empty]

    def is_complete(self) -> bool:
        return bool(self._solved) and all(self._solved)
