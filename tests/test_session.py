"""Tests for wordy.core.session – level lifecycle, input focus and events."""

from __future__ import annotations

from pathlib import Path

import pytest

from wordy.core.engine import SubmitOutcome
from wordy.core.hints import HintBudget, HintOutcome
from wordy.core.levels import LevelRepository
from wordy.core.progress import ProgressStore
from wordy.core.puzzle import Cell, CellStatus
from wordy.core.questions import QuestionBank
from wordy.core.session import (
    FIRST_PLAY_REMINDER,
    WRONG_ANSWER_REMINDER,
    Focus,
    GameEvent,
    GameSession,
)

# Level 1: PARIS, RIVER. Level 2: ABCDE, VWXYZ.
ANSWERS = ["PARIS", "RIVER", "ABCDE", "VWXYZ"]


class FirstChoice:
    def choice(self, seq):
        return seq[0]


class Recorder:
    def __init__(self) -> None:
        self.events: list[tuple[GameEvent, object]] = []

    def __call__(self, event: GameEvent, payload: object) -> None:
        self.events.append((event, payload))

    def kinds(self) -> list[GameEvent]:
        return [event for event, _ in self.events]

    def clear(self) -> None:
        self.events.clear()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def levels() -> LevelRepository:
    records = [{"category": "Geo", "question": f"q{i}", "answer": a} for i, a in enumerate(ANSWERS)]
    return LevelRepository(QuestionBank.from_records(records), pack_size=2)


@pytest.fixture()
def progress(tmp_path: Path) -> ProgressStore:
    return ProgressStore(tmp_path / "progress.json")


@pytest.fixture()
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture()
def session(levels: LevelRepository, progress: ProgressStore, recorder: Recorder) -> GameSession:
    s = GameSession(levels, progress, "Geo", hints=HintBudget(3), rng=FirstChoice(), on_event=recorder)
    s.start()
    recorder.clear()
    return s


def _type(session: GameSession, clue_index: int, cell_index: int, letters: str) -> None:
    assert session.select_cell(clue_index, cell_index)
    for letter in letters:
        session.type_letter(letter)


# ---------------------------------------------------------------------------
# start / load_level
# ---------------------------------------------------------------------------

class TestStart:
    def test_first_play_loads_level_one(self, levels, progress, recorder):
        s = GameSession(levels, progress, "Geo", on_event=recorder)
        state = s.start()
        assert s.level == 1
        assert [c.answer for c in state.clues] == ["PARIS", "RIVER"]

    def test_first_play_shows_hint_reminder_once(self, levels, progress, recorder):
        GameSession(levels, progress, "Geo", on_event=recorder).start()
        assert recorder.events == [(GameEvent.HINT_REMINDER, FIRST_PLAY_REMINDER)]
        assert progress.hint_intro_shown("Geo")
        recorder.clear()
        GameSession(levels, progress, "Geo", on_event=recorder).start()
        assert recorder.events == []

    def test_resumes_saved_level(self, levels, progress, recorder):
        progress.set_level("Geo", 2)
        s = GameSession(levels, progress, "Geo", on_event=recorder)
        s.start()
        assert s.level == 2
        assert s.state.clues[0].answer == "ABCDE"
        assert GameEvent.HINT_REMINDER not in recorder.kinds()

    def test_saved_level_past_end_wraps(self, levels, progress, recorder):
        progress.set_level("Geo", 9)
        s = GameSession(levels, progress, "Geo", on_event=recorder)
        s.start()
        assert s.level == 1
        assert recorder.kinds() == [GameEvent.CATEGORY_COMPLETE]
        assert progress.get_level("Geo") == 1


class TestLoadLevel:
    def test_fresh_board(self, session: GameSession):
        _type(session, 0, 0, "PA")
        state = session.load_level(1)
        assert all(c == Cell() for i in range(state.clue_count) for c in state.cells(i))
        assert state.solved == [False, False]
        assert session.focus is None

    def test_replaces_state_object(self, session: GameSession):
        before = session.state
        assert session.load_level(1) is not before

    def test_category_complete_reloads_level_one(self, session, progress, recorder):
        progress.set_level("Geo", 3)
        state = session.load_level(3)
        assert recorder.kinds() == [GameEvent.CATEGORY_COMPLETE]
        assert session.level == 1
        assert progress.get_level("Geo") == 1
        assert [c.answer for c in state.clues] == ["PARIS", "RIVER"]
        assert state.solved == [False, False]

    def test_empty_category(self, levels, progress, recorder):
        s = GameSession(levels, progress, "History", on_event=recorder)
        assert s.start() is None
        assert s.state is None
        assert GameEvent.CATEGORY_COMPLETE in recorder.kinds()
        assert s.submit(0).outcome is SubmitOutcome.IGNORED

    def test_restart_category(self, session, progress):
        session.load_level(2)
        session.restart_category()
        assert session.level == 1
        assert progress.get_level("Geo") == 1


# ---------------------------------------------------------------------------
# Input focus
# ---------------------------------------------------------------------------

class TestSelectCell:
    def test_select_empty_cell(self, session: GameSession):
        assert session.select_cell(0, 2)
        assert session.focus == Focus(0, 2)

    @pytest.mark.parametrize("clue, cell", [(5, 0), (-1, 0), (0, 5), (0, -1)])
    def test_out_of_range(self, session: GameSession, clue, cell):
        assert not session.select_cell(clue, cell)
        assert session.focus is None

    def test_revealed_cell_not_selectable(self, session: GameSession):
        _type(session, 0, 0, "PARIS")
        assert session.state.cell(1, 0).status is CellStatus.REVEALED
        assert not session.select_cell(1, 0)

    def test_solved_clue_not_selectable(self, session: GameSession):
        _type(session, 0, 0, "PARIS")
        assert not session.select_cell(0, 0)

    def test_hint_cell_not_selectable(self, session: GameSession):
        session.request_hint()
        assert session.state.cell(0, 0).status is CellStatus.HINT
        assert not session.select_cell(0, 0)


class TestTypeLetter:
    def test_writes_input_and_advances(self, session: GameSession):
        _type(session, 0, 0, "p")
        assert session.state.cell(0, 0) == Cell("P", CellStatus.INPUT)
        assert session.focus == Focus(0, 1)

    def test_ignored_without_selection(self, session: GameSession):
        session.type_letter("A")
        assert all(c.is_empty for c in session.state.cells(0))

    @pytest.mark.parametrize("key", ["", "AB", "1", " "])
    def test_ignores_non_letters(self, session: GameSession, key):
        session.select_cell(0, 0)
        session.type_letter(key)
        assert session.state.cell(0, 0).is_empty
        assert session.focus == Focus(0, 0)

    def test_skips_revealed_cells(self, session: GameSession):
        _type(session, 0, 0, "PARIS")
        # RIVER now shows R I _ _ R
        _type(session, 1, 2, "V")
        assert session.focus == Focus(1, 3)

    def test_unselects_when_no_editable_cell_follows(self, session: GameSession):
        _type(session, 0, 4, "S")
        assert session.focus is None
        assert session.state.cell(0, 4) == Cell("S", CellStatus.INPUT)

    def test_filling_clue_submits(self, session: GameSession, recorder: Recorder):
        _type(session, 0, 0, "PARIS")
        assert session.state.is_solved(0)
        assert session.focus is None
        assert recorder.kinds() == [GameEvent.CORRECT_ANSWER]


class TestBackspace:
    def test_clears_current_and_moves_back(self, session: GameSession):
        _type(session, 0, 0, "PA")
        session.backspace()
        assert session.focus == Focus(0, 1)
        assert session.state.cell(0, 1) == Cell("A", CellStatus.INPUT)
        session.backspace()
        assert session.state.cell(0, 1).is_empty
        assert session.focus == Focus(0, 0)

    def test_stays_at_first_cell(self, session: GameSession):
        _type(session, 0, 0, "P")
        session.select_cell(0, 0)
        session.backspace()
        assert session.state.cell(0, 0).is_empty
        assert session.focus == Focus(0, 0)

    def test_skips_revealed_cells(self, session: GameSession):
        _type(session, 0, 0, "PARIS")
        session.select_cell(1, 3)
        session.backspace()
        assert session.focus == Focus(1, 2)
        session.backspace()
        # cells 0 and 1 are revealed, so the cursor stays put
        assert session.focus == Focus(1, 2)
        assert session.state.cell(1, 1) == Cell("I", CellStatus.REVEALED)

    def test_ignored_without_selection(self, session: GameSession):
        session.backspace()
        assert session.focus is None


class TestEnter:
    def test_submits_full_clue(self, session: GameSession, recorder: Recorder):
        for i, letter in enumerate("PARIX"):
            session.state.set_cell(0, i, letter, CellStatus.INPUT)
        session.select_cell(0, 0)
        session.enter()
        assert recorder.kinds() == [GameEvent.WRONG_ANSWER]

    def test_ignores_partial_clue(self, session: GameSession, recorder: Recorder):
        _type(session, 0, 0, "PA")
        session.enter()
        assert recorder.events == []

    def test_ignored_without_selection(self, session: GameSession, recorder: Recorder):
        session.enter()
        assert recorder.events == []


# ---------------------------------------------------------------------------
# Answers and progression
# ---------------------------------------------------------------------------

class TestProgression:
    def test_cascade_reveals_every_shared_letter(self, session: GameSession):
        _type(session, 0, 0, "PARIS")
        assert [c.letter for c in session.state.cells(1)] == ["R", "I", "", "", "R"]
        positions = [p for p, c in enumerate(session.state.cells(1)) if c.status is CellStatus.REVEALED]
        assert positions == [0, 1, 4]

    def test_level_complete(self, session, progress, recorder):
        _type(session, 0, 0, "PARIS")
        _type(session, 1, 2, "VE")
        assert recorder.kinds() == [GameEvent.CORRECT_ANSWER, GameEvent.CORRECT_ANSWER, GameEvent.LEVEL_COMPLETE]
        assert recorder.events[-1] == (GameEvent.LEVEL_COMPLETE, 1)
        assert progress.get_level("Geo") == 2
        assert session.is_level_complete()

    def test_next_level(self, session):
        _type(session, 0, 0, "PARIS")
        _type(session, 1, 2, "VE")
        state = session.next_level()
        assert session.level == 2
        assert [c.answer for c in state.clues] == ["ABCDE", "VWXYZ"]

    def test_finishing_last_level_wraps_on_next(self, session, progress, recorder):
        session.load_level(2)
        _type(session, 0, 0, "ABCDE")
        _type(session, 1, 0, "VWXYZ")
        assert progress.get_level("Geo") == 3
        session.next_level()
        assert GameEvent.CATEGORY_COMPLETE in recorder.kinds()
        assert session.level == 1
        assert progress.get_level("Geo") == 1

    def test_resubmitting_solved_clue_is_silent(self, session, recorder):
        _type(session, 0, 0, "PARIS")
        recorder.clear()
        result = session.submit(0)
        assert result.outcome is SubmitOutcome.IGNORED
        assert recorder.events == []

    def test_out_of_range_submit_ignored(self, session, recorder):
        assert session.submit(7).outcome is SubmitOutcome.IGNORED
        assert recorder.events == []

    def test_level_complete_emitted_once(self, session, recorder):
        _type(session, 0, 0, "PARIS")
        _type(session, 1, 2, "VE")
        session.submit(1)
        session.request_hint()
        assert recorder.kinds().count(GameEvent.LEVEL_COMPLETE) == 1


# ---------------------------------------------------------------------------
# Wrong answers and reverts
# ---------------------------------------------------------------------------

class TestWrongAnswer:
    @pytest.fixture()
    def wrong(self, session: GameSession) -> GameSession:
        session.load_level(2)
        _type(session, 0, 0, "ABCDX")
        return session

    def test_marks_incorrect_and_signals(self, wrong, recorder):
        assert recorder.events == [(GameEvent.WRONG_ANSWER, 0)]
        assert all(c.status is CellStatus.INCORRECT for c in wrong.state.cells(0))
        assert wrong.pending_revert(0) is not None

    def test_revert_clears_and_refocuses(self, wrong, recorder):
        token = wrong.pending_revert(0).token
        assert wrong.apply_revert(token) == 0
        assert all(c == Cell() for c in wrong.state.cells(0))
        assert wrong.focus == Focus(0, 0)
        assert wrong.pending_revert(0) is None
        assert recorder.events[-1] == (GameEvent.HINT_REMINDER, WRONG_ANSWER_REMINDER)

    def test_revert_keeps_hint_cells(self, session: GameSession):
        session.load_level(2)
        session.request_hint()  # FirstChoice: clue 0, cell 0 -> "A"
        _type(session, 0, 1, "XXXX")
        token = session.pending_revert(0).token
        assert session.apply_revert(token) == 1
        assert session.state.cell(0, 0) == Cell("A", CellStatus.HINT)
        assert session.state.empty_positions(0) == [1, 2, 3, 4]
        assert session.focus == Focus(0, 1)

    def test_revert_applies_once(self, wrong):
        token = wrong.pending_revert(0).token
        wrong.apply_revert(token)
        _type(wrong, 0, 0, "AB")
        assert wrong.apply_revert(token) is None
        assert wrong.state.word(0) == "AB"

    def test_level_change_makes_revert_stale(self, wrong):
        token = wrong.pending_revert(0).token
        wrong.load_level(2)
        _type(wrong, 0, 0, "ABC")
        assert wrong.apply_revert(token) is None
        assert wrong.state.word(0) == "ABC"

    def test_cancel_revert(self, wrong):
        token = wrong.pending_revert(0).token
        wrong.cancel_revert()
        assert wrong.apply_revert(token) is None
        assert wrong.state.word(0) == "ABCDX"

    def test_correct_resubmission_makes_revert_stale(self, wrong, recorder):
        token = wrong.pending_revert(0).token
        _type(wrong, 0, 4, "E")
        assert wrong.state.is_solved(0)
        assert wrong.apply_revert(token) is None
        assert wrong.state.word(0) == "ABCDE"
        assert recorder.kinds()[-1] is GameEvent.CORRECT_ANSWER

    def test_each_clue_has_its_own_revert(self, wrong):
        _type(wrong, 1, 0, "VWXYA")
        first, second = wrong.pending_revert(0), wrong.pending_revert(1)
        assert first.token != second.token
        assert wrong.apply_revert(first.token) == 0
        assert wrong.state.word(1) == "VWXYA"
        assert wrong.apply_revert(second.token) == 0
        assert wrong.state.word(1) == ""

    def test_unknown_token(self, wrong):
        assert wrong.apply_revert(999) is None
        assert wrong.state.word(0) == "ABCDX"


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------

class TestHints:
    def test_places_hint(self, session: GameSession):
        result = session.request_hint()
        assert result.outcome is HintOutcome.PLACED
        assert session.state.cell(0, 0) == Cell("P", CellStatus.HINT)
        assert session.hints_left == 2

    def test_no_hints_available(self, levels, progress, recorder):
        s = GameSession(levels, progress, "Geo", hints=HintBudget(0), rng=FirstChoice(), on_event=recorder)
        s.start()
        recorder.clear()
        result = s.request_hint()
        assert result.outcome is HintOutcome.NO_HINTS_AVAILABLE
        assert recorder.kinds() == [GameEvent.NO_HINTS_AVAILABLE]
        assert s.hints_left == 0
        assert all(c.is_empty for i in range(s.state.clue_count) for c in s.state.cells(i))

    def test_all_solved(self, session, recorder):
        _type(session, 0, 0, "PARIS")
        _type(session, 1, 2, "VE")
        recorder.clear()
        assert session.request_hint().outcome is HintOutcome.ALL_SOLVED
        assert recorder.kinds() == [GameEvent.ALL_SOLVED]
        assert session.hints_left == 3

    def test_no_targets_while_wrong_letters_shown(self, session, recorder):
        session.load_level(2)
        _type(session, 0, 0, "ABCDX")
        recorder.clear()
        assert session.request_hint().outcome is HintOutcome.NO_TARGETS_IN_CLUE
        assert recorder.kinds() == [GameEvent.NO_HINT_TARGETS_IN_CLUE]

    def test_hint_completing_clue_cascades(self, session, recorder):
        _type(session, 0, 1, "ARIS")
        assert session.state.word(0) == "ARIS"
        session.request_hint()
        assert session.state.cell(0, 0) == Cell("P", CellStatus.HINT)
        assert session.state.is_solved(0)
        assert session.state.cell(1, 0).status is CellStatus.REVEALED
        assert recorder.kinds() == [GameEvent.CORRECT_ANSWER]

    def test_hint_on_focused_cell_moves_focus(self, session):
        session.select_cell(0, 0)
        session.request_hint()
        assert session.focus == Focus(0, 1)

    def test_budget_shared_across_sessions(self, levels, progress):
        budget = HintBudget(1)
        first = GameSession(levels, progress, "Geo", hints=budget, rng=FirstChoice())
        first.start()
        first.request_hint()
        second = GameSession(levels, progress, "Geo", hints=budget, rng=FirstChoice())
        second.start()
        assert second.hints_left == 0

    def test_grant_hints(self, session, recorder):
        assert session.grant_hints(2) == 2
        assert session.hints_left == 5
        assert recorder.events == [(GameEvent.HINT_GRANTED, 2)]

    def test_grant_zero_is_silent(self, session, recorder):
        assert session.grant_hints(0) == 0
        assert recorder.events == []
