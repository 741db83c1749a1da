from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QCloseEvent, QKeyEvent
from PySide6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from wordy.core.app_state import AppState
from wordy.ui.colors import WordyColors, cell_color
from wordy.ui.controller import GameController
from wordy.ui.models import CategoryState
from wordy.ui.settings_panel import SettingsPanel

logger = logging.getLogger(__name__)

_MESSAGE_MS = 2000
_REMINDER_MS = 3000
_LEVEL_COMPLETE_DELAY_MS = 500


def _button_style(bg: str = WordyColors.ACCENT) -> str:
    return f"""
        QPushButton {{
            background: {bg};
            color: {WordyColors.TEXT_LIGHT};
            border: 1px solid rgba(255, 255, 255, 0.2);
            border-radius: 10px;
            padding: 8px 14px;
            font-size: 14px;
        }}
        QPushButton:pressed {{ background: {WordyColors.ACCENT_PRESSED}; }}
    """


class MainWindow(QMainWindow):
    """Category picker, settings and game board.

    The board is rebuilt from the controller's PuzzleState on every
    ``board_changed``; widgets never hold game state of their own.
    """

    def __init__(self, app_state: AppState) -> None:
        super().__init__()
        self._app_state = app_state
        self._controller: Optional[GameController] = None
        self.setWindowTitle("Wordy")
        self.setStyleSheet(f"QMainWindow {{ background: {WordyColors.BG}; }}")

        self._stack = QStackedWidget()
        self.setCentralWidget(self._stack)
        self._home_screen = QWidget()
        self._home_layout = QVBoxLayout(self._home_screen)
        self._game_screen = self._build_game_screen()
        self.settings_panel = SettingsPanel(app_state)
        self.settings_panel.closed.connect(self.show_home_screen)
        self._stack.addWidget(self._home_screen)
        self._stack.addWidget(self._game_screen)
        self._stack.addWidget(self.settings_panel)

        self._message_timer = QTimer(self)
        self._message_timer.setSingleShot(True)
        self._message_timer.timeout.connect(lambda: self._message_label.setVisible(False))

        self._complete_timer = QTimer(self)
        self._complete_timer.setSingleShot(True)
        self._complete_timer.timeout.connect(lambda: self.complete_panel.setVisible(True))

        self.show_home_screen()

    @property
    def controller(self) -> Optional[GameController]:
        return self._controller

    def current_screen(self) -> QWidget:
        return self._stack.currentWidget()

    # -- screens ---------------------------------------------------------

    def _category_states(self) -> list[CategoryState]:
        progress = self._app_state.progress
        levels = self._app_state.levels
        return [
            CategoryState(category=c, level=progress.get_level(c), total_levels=levels.level_count(c))
            for c in self._app_state.categories()
        ]

    def show_home_screen(self) -> None:
        self._complete_timer.stop()
        if self._controller is not None:
            self._controller.leave()
            self._controller.deleteLater()
            self._controller = None
        while self._home_layout.count():
            item = self._home_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        title = QLabel("Wordy")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet(f"color: {WordyColors.TEXT_LIGHT}; font-size: 36px;")
        self._home_layout.addWidget(title)
        for state in self._category_states():
            button = QPushButton(state.label)
            button.setStyleSheet(_button_style())
            button.setEnabled(state.playable)
            button.clicked.connect(lambda _=False, c=state.category: self.start_category(c))
            self._home_layout.addWidget(button)
        self._home_layout.addStretch(1)
        settings = QPushButton("Settings")
        settings.setStyleSheet(_button_style(WordyColors.BG))
        settings.clicked.connect(self.show_settings)
        self._home_layout.addWidget(settings)
        self._stack.setCurrentWidget(self._home_screen)

    def show_settings(self) -> None:
        self.settings_panel.refresh()
        self._stack.setCurrentWidget(self.settings_panel)

    def _build_game_screen(self) -> QWidget:
        screen = QWidget()
        layout = QVBoxLayout(screen)

        header = QHBoxLayout()
        back = QPushButton("←")
        back.setStyleSheet(_button_style())
        back.clicked.connect(self.show_home_screen)
        self._level_label = QLabel()
        self._level_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._level_label.setStyleSheet(f"color: {WordyColors.TEXT_MUTED}; font-size: 14px;")
        self._hint_button = QPushButton()
        self._hint_button.setStyleSheet(_button_style())
        self._hint_button.clicked.connect(self._on_hint_clicked)
        header.addWidget(back)
        header.addWidget(self._level_label, 1)
        header.addWidget(self._hint_button)
        layout.addLayout(header)

        self._message_label = QLabel()
        self._message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._message_label.setStyleSheet(
            f"color: white; background: {WordyColors.REMINDER_BG};"
            f" border: 2px solid {WordyColors.REMINDER_BORDER}; border-radius: 12px; padding: 6px;"
        )
        self._message_label.setVisible(False)
        layout.addWidget(self._message_label)

        # Offered instead of a hint once the budget is empty
        self.reward_panel = QFrame()
        self.reward_panel.setStyleSheet(f"QFrame {{ background: {WordyColors.REMINDER_BG}; border-radius: 12px; }}")
        reward_layout = QHBoxLayout(self.reward_panel)
        reward_label = QLabel("You have no hints left. Watch an ad to get more!")
        reward_label.setStyleSheet(f"color: {WordyColors.TEXT_LIGHT}; font-size: 14px;")
        watch_button = QPushButton("Watch Ad")
        watch_button.setStyleSheet(_button_style(WordyColors.CELL_CORRECT))
        watch_button.clicked.connect(self._on_watch_ad)
        dismiss_button = QPushButton("Close")
        dismiss_button.setStyleSheet(_button_style())
        dismiss_button.clicked.connect(lambda: self.reward_panel.setVisible(False))
        reward_layout.addWidget(reward_label, 1)
        reward_layout.addWidget(watch_button)
        reward_layout.addWidget(dismiss_button)
        self.reward_panel.setVisible(False)
        layout.addWidget(self.reward_panel)

        self._board = QWidget()
        self._board_layout = QGridLayout(self._board)
        self._board_layout.setSpacing(4)
        layout.addWidget(self._board, 1)

        self.complete_panel = QFrame()
        self.complete_panel.setStyleSheet(f"QFrame {{ background: {WordyColors.ACCENT}; border-radius: 14px; }}")
        panel_layout = QHBoxLayout(self.complete_panel)
        self._complete_label = QLabel()
        self._complete_label.setStyleSheet(f"color: {WordyColors.TEXT_LIGHT}; font-size: 18px;")
        next_button = QPushButton("Next Level")
        next_button.setStyleSheet(_button_style(WordyColors.CELL_CORRECT))
        next_button.clicked.connect(self._on_next_level)
        menu_button = QPushButton("Back to Menu")
        menu_button.setStyleSheet(_button_style())
        menu_button.clicked.connect(self.show_home_screen)
        panel_layout.addWidget(self._complete_label, 1)
        panel_layout.addWidget(next_button)
        panel_layout.addWidget(menu_button)
        self.complete_panel.setVisible(False)
        layout.addWidget(self.complete_panel)
        return screen

    def start_category(self, category: str) -> None:
        self._complete_timer.stop()
        if self._controller is not None:
            self._controller.leave()
            self._controller.deleteLater()
        controller = GameController(self._app_state, category, parent=self)
        controller.board_changed.connect(self._render_board)
        controller.correct_answer.connect(lambda: self._show_message("Correct!"))
        controller.wrong_answer.connect(lambda _i: self._show_message("Not quite."))
        controller.level_complete.connect(self._on_level_complete)
        controller.category_complete.connect(
            lambda: self._show_message("Category Complete! Restarting from Level 1.")
        )
        controller.no_hints_available.connect(lambda: self.reward_panel.setVisible(True))
        controller.all_solved.connect(lambda: self._show_message("All questions are answered!"))
        controller.no_hint_targets.connect(lambda: self._show_message("No more hints available for this question."))
        controller.hints_granted.connect(self._on_hints_granted)
        controller.reward_unavailable.connect(
            lambda: self._show_message("Ad not ready yet. Please try again in a moment.")
        )
        controller.hint_reminder.connect(lambda text: self._show_message(f"💡 {text}", _REMINDER_MS))
        self._controller = controller
        self.complete_panel.setVisible(False)
        self.reward_panel.setVisible(False)
        self._stack.setCurrentWidget(self._game_screen)
        controller.start()

    # -- board -----------------------------------------------------------

    def _render_board(self) -> None:
        controller = self._controller
        if controller is None:
            return
        while self._board_layout.count():
            item = self._board_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        session = controller.session
        self._level_label.setText(f"{session.category} - Level {session.level}")
        self._hint_button.setText(f"Hint: {controller.hints_left}")
        state = controller.state
        if state is None:
            return
        focus = controller.focus
        for row, clue in enumerate(state.clues):
            text = QLabel(clue.text)
            text.setWordWrap(True)
            text.setStyleSheet(
                f"color: {WordyColors.TEXT_LIGHT}; background: {WordyColors.BG};"
                " border-radius: 6px; padding: 4px 10px; font-size: 14px;"
            )
            self._board_layout.addWidget(text, row, 0)
            cells = QWidget()
            cells_layout = QHBoxLayout(cells)
            cells_layout.setContentsMargins(2, 2, 2, 2)
            cells_layout.setSpacing(2)
            solved = state.is_solved(row)
            for position, cell in enumerate(state.cells(row)):
                selected = focus is not None and (focus.clue_index, focus.cell_index) == (row, position)
                box = QPushButton(cell.letter)
                box.setFocusPolicy(Qt.FocusPolicy.NoFocus)
                box.setMinimumSize(36, 48)
                box.setStyleSheet(
                    f"background: {cell_color(cell.status, solved, selected)};"
                    f" color: {WordyColors.TEXT_DARK}; border-radius: 4px; font-size: 20px;"
                )
                box.setEnabled(not solved)
                box.clicked.connect(lambda _=False, r=row, p=position: self._controller.select_cell(r, p))
                cells_layout.addWidget(box)
            self._board_layout.addWidget(cells, row, 1)
        self._board_layout.setColumnStretch(0, 3)
        self._board_layout.setColumnStretch(1, 7)

    def _show_message(self, text: str, duration_ms: int = _MESSAGE_MS) -> None:
        self._message_label.setText(text)
        self._message_label.setVisible(True)
        self._message_timer.start(duration_ms)

    def _on_hint_clicked(self) -> None:
        if self._controller is not None:
            self._controller.request_hint()

    def _on_watch_ad(self) -> None:
        self.reward_panel.setVisible(False)
        if self._controller is not None:
            self._controller.request_reward()

    def _on_hints_granted(self, amount: int) -> None:
        self.reward_panel.setVisible(False)
        self._show_message(f"You earned {amount} hint!")

    def _on_level_complete(self, level: int) -> None:
        self._complete_label.setText(f"Level {level} complete!")
        self._complete_timer.start(_LEVEL_COMPLETE_DELAY_MS)

    def _on_next_level(self) -> None:
        self._complete_timer.stop()
        self.complete_panel.setVisible(False)
        if self._controller is not None:
            self._controller.next_level()

    # -- events ----------------------------------------------------------

    def keyPressEvent(self, event: QKeyEvent) -> None:
        controller = self._controller
        if controller is None or self._stack.currentWidget() is not self._game_screen:
            super().keyPressEvent(event)
            return
        key = event.key()
        text = event.text()
        if key == Qt.Key.Key_Backspace:
            controller.backspace()
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            controller.enter()
        elif text and text.isalpha():
            controller.type_letter(text)
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event: QCloseEvent) -> None:
        """Drop pending reverts and persist progress when closing the app."""
        self._complete_timer.stop()
        if self._controller is not None:
            self._controller.leave()
        self._app_state.shutdown()
        super().closeEvent(event)
