"""Settings screen: background music switch and volume."""

from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from wordy.core.app_state import AppState
from wordy.ui.colors import WordyColors

_VOLUME_STEPS = 100


class SettingsPanel(QWidget):
    """Edits the persisted music settings. Every change is saved immediately."""

    closed = Signal()

    def __init__(self, app_state: AppState, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._app_state = app_state

        layout = QVBoxLayout(self)
        layout.setContentsMargins(40, 40, 40, 40)
        layout.addStretch(1)

        container = QFrame()
        container.setObjectName("settingsContainer")
        container.setStyleSheet(
            f"""
            QFrame#settingsContainer {{
                background: {WordyColors.ACCENT};
                border-radius: 20px;
            }}
            QLabel, QCheckBox {{
                color: {WordyColors.TEXT_LIGHT};
                font-size: 16px;
            }}
            """
        )
        container_layout = QVBoxLayout(container)
        container_layout.setContentsMargins(24, 24, 24, 24)
        container_layout.setSpacing(16)

        title = QLabel("Settings")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 24px;")
        container_layout.addWidget(title)

        self.music_checkbox = QCheckBox("Background Music")
        self.music_checkbox.toggled.connect(self._on_music_toggled)
        container_layout.addWidget(self.music_checkbox)

        volume_row = QHBoxLayout()
        volume_row.addWidget(QLabel("Volume"))
        self.volume_slider = QSlider(Qt.Orientation.Horizontal)
        self.volume_slider.setRange(0, _VOLUME_STEPS)
        self.volume_slider.valueChanged.connect(self._on_volume_changed)
        volume_row.addWidget(self.volume_slider, 1)
        container_layout.addLayout(volume_row)

        back = QPushButton("Back")
        back.setStyleSheet(
            f"background: {WordyColors.BG}; color: {WordyColors.TEXT_LIGHT};"
            " border-radius: 10px; padding: 8px 14px; font-size: 14px;"
        )
        back.clicked.connect(self._on_back)
        container_layout.addWidget(back)

        layout.addWidget(container)
        layout.addStretch(1)
        self.refresh()

    def refresh(self) -> None:
        """Show the stored settings without writing them back."""
        music = self._app_state.music
        self.music_checkbox.blockSignals(True)
        self.volume_slider.blockSignals(True)
        self.music_checkbox.setChecked(music.enabled)
        self.volume_slider.setValue(round(music.volume * _VOLUME_STEPS))
        self.music_checkbox.blockSignals(False)
        self.volume_slider.blockSignals(False)

    def _on_back(self) -> None:
        self.closed.emit()

    def _on_music_toggled(self, checked: bool) -> None:
        self._app_state.set_music_enabled(checked)

    def _on_volume_changed(self, value: int) -> None:
        self._app_state.set_music_volume(value / _VOLUME_STEPS)
