"""Main timer card.

Layout (top → bottom):
    - Mode buttons (Focus / Short break / Long break)
    - Countdown (m:ss)
    - Wall clock (HH:MM:SS, 24-hour)
    - Start/Pause + Reset
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
    QButtonGroup, QProgressBar,
)

from ..history.ledger import date_key
from ..timer.clock import Clock, SystemClock
from ..timer.durations import Mode
from ..timer.engine import TimerEngine, TimerSnapshot


MODE_LABELS: dict[Mode, str] = {
    Mode.FOCUS:       "Focus",
    Mode.SHORT_BREAK: "Short break",
    Mode.LONG_BREAK:  "Long break",
}


def format_remaining(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes}:{secs:02d}"


class TimerWidget(QWidget):
    day_changed = pyqtSignal(str)   # new YYYY-MM-DD key

    def __init__(
        self,
        engine: TimerEngine,
        parent: QWidget | None = None,
        *,
        clock: Clock | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._clock = clock or SystemClock()
        self._day = date_key(self._clock.now())
        self._build_ui()
        self._connect_signals()
        self._on_state_changed(engine.snapshot())
        self.refresh_clock()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 20, 24, 24)
        layout.setSpacing(12)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        # ── mode row ─────────────────────────────────────────────────
        mode_row = QHBoxLayout()
        mode_row.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._mode_group = QButtonGroup(self)
        self._mode_group.setExclusive(True)
        self._mode_buttons: dict[Mode, QPushButton] = {}
        for mode in Mode:
            btn = QPushButton(MODE_LABELS[mode], card)
            btn.setObjectName("modeButton")
            btn.setCheckable(True)
            self._mode_group.addButton(btn)
            self._mode_buttons[mode] = btn
            mode_row.addWidget(btn)
        layout.addLayout(mode_row)

        # ── countdown + wall clock ───────────────────────────────────
        self._time_label = QLabel("", card)
        self._time_label.setObjectName("timerDisplay")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._progress = QProgressBar(card)
        self._progress.setRange(0, 1000)
        self._progress.setTextVisible(False)
        self._progress.setFixedHeight(6)
        layout.addWidget(self._progress)

        self._clock_label = QLabel("", card)
        self._clock_label.setObjectName("clockLabel")
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("secondaryButton")

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        self._clock_timer = QTimer(self)
        self._clock_timer.setInterval(1000)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_pause_btn.clicked.connect(self.toggle_running)
        self._reset_btn.clicked.connect(self._engine.reset)
        for mode, btn in self._mode_buttons.items():
            btn.clicked.connect(lambda _=False, m=mode: self._engine.switch_mode(m))

        self._engine.remaining_changed.connect(self._refresh_display)
        self._engine.state_changed.connect(self._on_state_changed)

        self._clock_timer.timeout.connect(self.refresh_clock)
        self._clock_timer.start()

    # ── slots ─────────────────────────────────────────────────────────────

    def toggle_running(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        self._start_pause_btn.setText("Pause" if snapshot.is_running else "Start")
        self._mode_buttons[snapshot.mode].setChecked(True)
        self._refresh_display(snapshot.remaining)

    def _refresh_display(self, remaining: int) -> None:
        self._time_label.setText(format_remaining(remaining))
        self._progress.setValue(round(self._engine.percent_complete * 1000))

    def refresh_clock(self) -> None:
        now = self._clock.now()
        self._clock_label.setText(now.strftime("%H:%M:%S"))
        day = date_key(now)
        if day != self._day:
            self._day = day
            self.day_changed.emit(day)

    # ── introspection (tests / tray) ─────────────────────────────────────

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def start_pause_text(self) -> str:
        return self._start_pause_btn.text()

    @property
    def progress_value(self) -> int:
        return self._progress.value()

    def mode_button(self, mode: Mode) -> QPushButton:
        return self._mode_buttons[mode]
