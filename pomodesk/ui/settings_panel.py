"""Inline settings panel shown under the timer card.

Duration edits go straight to the engine (which clamps and emits
``durations_changed`` for persistence).  Sound, notification and
wake-lock preferences are written to ``settings.json`` immediately and
announced through ``preferences_changed``.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QFormLayout, QFrame,
    QLabel, QSpinBox, QSlider, QCheckBox,
)

from ..settings import Settings, save_settings
from ..timer.durations import MAX_DURATIONS, MIN_DURATION, Mode
from ..timer.engine import TimerEngine

log = logging.getLogger(__name__)


class SettingsPanel(QWidget):
    preferences_changed = pyqtSignal(object)   # Settings

    def __init__(
        self,
        engine: TimerEngine,
        settings: Settings,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._settings = settings
        self._populating = False
        self._build_ui()
        self._populate()
        engine.durations_changed.connect(self._on_durations_changed)

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(20, 16, 20, 16)
        layout.setSpacing(10)

        # ── Timer section ────────────────────────────────────────────
        layout.addWidget(self._section_label("Timer"))
        timer_form = QFormLayout()
        timer_form.setHorizontalSpacing(20)

        self._spins: dict[Mode, QSpinBox] = {}
        for mode, label in (
            (Mode.FOCUS, "Focus:"),
            (Mode.SHORT_BREAK, "Short break:"),
            (Mode.LONG_BREAK, "Long break:"),
        ):
            spin = QSpinBox()
            spin.setRange(MIN_DURATION // 60, MAX_DURATIONS[mode] // 60)
            spin.setSuffix(" min")
            spin.valueChanged.connect(
                lambda value, m=mode: self._on_minutes_changed(m, value)
            )
            self._spins[mode] = spin
            timer_form.addRow(label, spin)
        layout.addLayout(timer_form)

        helper = QLabel("A running interval keeps its length; edits apply next time.")
        helper.setObjectName("helperText")
        helper.setWordWrap(True)
        layout.addWidget(helper)

        # ── Sound & Notifications section ────────────────────────────
        layout.addWidget(self._section_label("Sound & Notifications"))
        snd_form = QFormLayout()

        self._sound_cb = QCheckBox("Completion sound")
        self._sound_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._sound_cb)

        vol_row = QHBoxLayout()
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_label = QLabel("70%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)
        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        self._notif_cb = QCheckBox("Desktop notifications")
        self._notif_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._notif_cb)

        self._wake_cb = QCheckBox("Keep screen awake while running")
        self._wake_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._wake_cb)

        layout.addLayout(snd_form)

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setObjectName("sectionLabel")
        return lbl

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        self._populating = True
        try:
            for mode, spin in self._spins.items():
                spin.setValue(self._engine.duration_for(mode) // 60)
            s = self._settings
            self._sound_cb.setChecked(s.sound_enabled)
            self._vol_slider.setValue(s.sound_volume)
            self._vol_label.setText(f"{s.sound_volume}%")
            self._notif_cb.setChecked(s.notifications_enabled)
            self._wake_cb.setChecked(s.wake_lock_enabled)
        finally:
            self._populating = False

    def _on_durations_changed(self, durations: dict) -> None:
        self._populating = True
        try:
            for mode, seconds in durations.items():
                self._spins[mode].setValue(seconds // 60)
        finally:
            self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS
    # ══════════════════════════════════════════════════════════════════

    def _on_minutes_changed(self, mode: Mode, minutes: int) -> None:
        if self._populating:
            return
        self._engine.set_duration(mode, minutes * 60)

    def _on_toggle_changed(self) -> None:
        if self._populating:
            return
        self._settings.sound_enabled = self._sound_cb.isChecked()
        self._settings.notifications_enabled = self._notif_cb.isChecked()
        self._settings.wake_lock_enabled = self._wake_cb.isChecked()
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.sound_volume = value
        self._save()

    def _save(self) -> None:
        try:
            save_settings(self._settings)
        except OSError as exc:
            log.warning("Could not save preferences: %s", exc)
        self.preferences_changed.emit(self._settings)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings

    def spin_box(self, mode: Mode) -> QSpinBox:
        return self._spins[mode]
