from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from wordy.core.questions import Clue, QuestionBank

logger = logging.getLogger(__name__)

DEFAULT_PACK_SIZE = 5


@dataclass(frozen=True)
class LevelPack:
    category: str
    number: int
    clues: Tuple[Clue, ...]

    @property
    def answer_length(self) -> int:
        return len(self.clues[0].answer) if self.clues else 0


def build_level_packs(clues: Iterable[Clue], category: str, pack_size: int = DEFAULT_PACK_SIZE) -> List[LevelPack]:
    """Partition a category's clues into same-answer-length packs of ``pack_size``.

    Clues are bucketed by answer length, buckets are visited shortest first and
    each bucket is cut into consecutive slices in bank order. Leftovers smaller
    than a full pack are dropped. The index of a pack in the result is its
    level index, so the output depends only on the input order.
    """
    if pack_size < 1:
        raise ValueError(f"pack_size must be positive, got {pack_size}")

    buckets: Dict[int, List[Clue]] = {}
    for clue in clues:
        if clue.category != category:
            continue
        buckets.setdefault(len(clue.answer), []).append(clue)

    packs: List[LevelPack] = []
    for length in sorted(buckets):
        group = buckets[length]
        for start in range(0, len(group) - pack_size + 1, pack_size):
            packs.append(
                LevelPack(
                    category=category,
                    number=len(packs) + 1,
                    clues=tuple(group[start:start + pack_size]),
                )
            )
    return packs


class LevelRepository:
    """Builds level packs per category on first use and keeps them for the process lifetime."""

    def __init__(self, bank: QuestionBank, pack_size: int = DEFAULT_PACK_SIZE) -> None:
        if pack_size < 1:
            raise ValueError(f"pack_size must be positive, got {pack_size}")
        self._bank = bank
        self._pack_size = pack_size
        self._packs: Dict[str, List[LevelPack]] = {}

    @property
    def pack_size(self) -> int:
        return self._pack_size

    def categories(self) -> List[str]:
        return self._bank.categories()

    def packs(self, category: str) -> List[LevelPack]:
        if category not in self._packs:
            packs = build_level_packs(self._bank.clues(category), category, self._pack_size)
            logger.info("Category %r: %d levels of %d clues", category, len(packs), self._pack_size)
            self._packs[category] = packs
        return list(self._packs[category])

    def level_count(self, category: str) -> int:
        return len(self.packs(category))

    def get(self, category: str, level_number: int) -> Optional[LevelPack]:
        """Return the pack for a 1-based level number, or None once the category is exhausted."""
        packs = self.packs(category)
        if level_number < 1 or level_number > len(packs):
            return None
        return packs[level_number - 1]
