from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import yaml

from wordy.core.text import decode_text, normalize_answer

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONS_PATH = Path(__file__).resolve().parent.parent / "data" / "questions.yaml"


@dataclass(frozen=True)
class Clue:
    """A trivia prompt paired with its normalized answer."""

    id: int
    text: str
    answer: str
    category: str


class QuestionBank:
    """Read-only, ordered collection of validated clues."""

    def __init__(self, clues: Iterable[Clue]) -> None:
        self._clues = list(clues)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "QuestionBank":
        path = path or DEFAULT_QUESTIONS_PATH
        if not path.exists():
            raise FileNotFoundError(f"Question bank not found: {path}")
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if not isinstance(raw, list):
            raise ValueError(f"{path.name}: expected a list of questions")
        bank = cls.from_records(raw)
        logger.info("Loaded %d clues in %d categories from %s", len(bank), len(bank.categories()), path)
        return bank

    @classmethod
    def from_records(cls, records: Iterable[Any]) -> "QuestionBank":
        clues: List[Clue] = []
        for index, record in enumerate(records):
            clue = _parse_record(index, record)
            if clue is not None:
                clues.append(clue)
        return cls(clues)

    def __len__(self) -> int:
        return len(self._clues)

    def all(self) -> List[Clue]:
        return list(self._clues)

    def categories(self) -> List[str]:
        """Distinct categories in first-seen order."""
        seen: Dict[str, None] = {}
        for clue in self._clues:
            seen.setdefault(clue.category, None)
        return list(seen)

    def clues(self, category: str) -> List[Clue]:
        return [clue for clue in self._clues if clue.category == category]


def _parse_record(index: int, record: Any) -> Optional[Clue]:
    if not isinstance(record, dict):
        logger.warning("Skipping question #%d: expected a mapping, got %s", index, type(record).__name__)
        return None
    fields = {}
    for name in ("category", "question", "answer"):
        value = record.get(name)
        if not isinstance(value, str) or not value.strip():
            logger.warning("Skipping question #%d: missing or invalid '%s'", index, name)
            return None
        fields[name] = value
    answer = normalize_answer(fields["answer"])
    if not answer.isalpha():
        logger.warning("Skipping question #%d: answer %r is not made of letters", index, answer)
        return None
    return Clue(
        id=index,
        text=decode_text(fields["question"]),
        answer=answer,
        category=fields["category"],
    )
