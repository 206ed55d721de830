"""Main application window for Pomodesk."""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QColor, QIcon, QPainter, QPixmap
from PyQt6.QtWidgets import (
    QApplication, QHBoxLayout, QLabel, QMainWindow, QMenu, QMessageBox,
    QPushButton, QStatusBar, QSystemTrayIcon, QVBoxLayout, QWidget,
)
from sqlalchemy.exc import SQLAlchemyError

from .audio.sounds import SoundManager
from .effects.dispatcher import SideEffectDispatcher
from .effects.notifications import NotificationPermission, Notifier
from .effects.wake_lock import WakeLock
from .persistence import PersistenceAdapter
from .settings import Settings, load_settings, save_settings
from .theme import Theme
from .timer.clock import Clock, SystemClock
from .timer.driver import TickDriver
from .timer.durations import Mode
from .timer.engine import CompletionEvent, TimerEngine, TimerSnapshot
from .ui.history_panel import HistoryPanel
from .ui.settings_panel import SettingsPanel
from .ui.styles import MODE_ACCENTS, build_stylesheet, get_palette
from .ui.timer_widget import MODE_LABELS, TimerWidget, format_remaining

log = logging.getLogger(__name__)


def _make_tray_icon(mode: Mode, running: bool) -> QIcon:
    """Filled dot while running, ring while idle, tinted by mode."""
    size = 64
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(MODE_ACCENTS[mode])
    if running:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
    else:
        pen = p.pen()
        pen.setColor(colour)
        pen.setWidth(6)
        p.setPen(pen)
        p.setBrush(Qt.BrushStyle.NoBrush)
    p.drawEllipse(6, 6, size - 12, size - 12)
    p.end()
    return QIcon(pixmap)


class PomodeskApp(QMainWindow):
    """Main window: owns the engine and wires every collaborator to it."""

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        persistence: PersistenceAdapter | None = None,
        clock: Clock | None = None,
        sound_manager: SoundManager | None = None,
        wake_lock: WakeLock | None = None,
        permission_prompt: Callable[[], bool] | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Pomodesk")

        # ── settings + stored state ───────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._persistence = persistence or PersistenceAdapter()
        self._clock = clock or SystemClock()
        self._theme: Theme = self._persistence.load_theme()
        self._permission_prompt = permission_prompt or self._ask_notification_permission
        self._pending_status: str | None = None

        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)

        # ── engine + driver ───────────────────────────────────────────
        self._engine = TimerEngine(
            self,
            clock=self._clock,
            durations=self._persistence.load_durations(),
            history=self._persistence.load_history(),
        )
        self._driver = TickDriver(
            self._engine, self, interval_ms=self._settings.tick_interval_ms,
        )

        # ── tray icon ─────────────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(self._engine.mode, False))
        self._tray_icon.setToolTip("Pomodesk")
        self._build_tray_menu()
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()

        # ── side effects ──────────────────────────────────────────────
        if sound_manager is None:
            sound_manager = SoundManager(parent=self)
        self._sound_manager = sound_manager
        self._notifier = Notifier(
            self._tray_icon.showMessage,
            NotificationPermission(self._settings.notification_permission),
        )
        self._dispatcher = SideEffectDispatcher(
            self._engine,
            self,
            sound=self._sound_manager,
            notifier=self._notifier,
            wake_lock=wake_lock if wake_lock is not None else WakeLock(),
        )
        self._apply_preferences(self._settings)

        # ── central widget ────────────────────────────────────────────
        central = QWidget()
        self.setCentralWidget(central)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(16, 12, 16, 12)
        root_layout.setSpacing(10)

        top_row = QHBoxLayout()
        title = QLabel("Pomodesk")
        title.setObjectName("sectionLabel")
        top_row.addWidget(title)
        top_row.addStretch()
        self._settings_btn = QPushButton("Settings")
        self._settings_btn.setObjectName("secondaryButton")
        self._settings_btn.setCheckable(True)
        self._theme_btn = QPushButton("")
        self._theme_btn.setObjectName("secondaryButton")
        top_row.addWidget(self._settings_btn)
        top_row.addWidget(self._theme_btn)
        root_layout.addLayout(top_row)

        self._timer_widget = TimerWidget(self._engine, central, clock=self._clock)
        root_layout.addWidget(self._timer_widget)

        self._settings_panel = SettingsPanel(self._engine, self._settings, central)
        self._settings_panel.setVisible(False)
        root_layout.addWidget(self._settings_panel)

        self._history_panel = HistoryPanel(central)
        root_layout.addWidget(self._history_panel)
        root_layout.addStretch()

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready to focus")

        # ── wire signals ──────────────────────────────────────────────
        self._settings_btn.toggled.connect(self._settings_panel.setVisible)
        self._theme_btn.clicked.connect(self.toggle_theme)
        self._timer_widget.day_changed.connect(self._on_day_changed)
        self._settings_panel.preferences_changed.connect(self._on_preferences_changed)

        self._engine.state_changed.connect(self._on_state_changed)
        self._engine.remaining_changed.connect(self._on_remaining_changed)
        self._engine.session_completed.connect(self._on_session_completed)
        self._engine.durations_changed.connect(self._on_durations_changed)
        self._engine.history_changed.connect(self._on_history_changed)

        self._apply_theme()
        self._refresh_history()

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def dispatcher(self) -> SideEffectDispatcher:
        return self._dispatcher

    @property
    def theme(self) -> Theme:
        return self._theme

    @property
    def history_panel(self) -> HistoryPanel:
        return self._history_panel

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def settings_panel(self) -> SettingsPanel:
        return self._settings_panel

    @property
    def status_text(self) -> str:
        return self._status_bar.currentMessage()

    def toggle_theme(self) -> None:
        self._theme = self._theme.toggled()
        self._persist(self._persistence.save_theme, self._theme)
        self._apply_theme()

    # ══════════════════════════════════════════════════════════════════
    #  TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(self._tray_toggle_start)

        reset_action = menu.addAction("Reset")
        reset_action.triggered.connect(self._engine.reset)

        menu.addSeparator()
        show_action = menu.addAction("Show Pomodesk")
        show_action.triggered.connect(self._show_window)

        menu.addSeparator()
        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)

    def _tray_toggle_start(self) -> None:
        if self._engine.is_running:
            self._engine.pause()
        else:
            self._engine.start()

    def _show_window(self) -> None:
        self.showNormal()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self._save_geometry()
        self._dispatcher.shutdown()
        self._tray_icon.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    # ══════════════════════════════════════════════════════════════════
    #  ENGINE SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_state_changed(self, snapshot: TimerSnapshot) -> None:
        self._tray_icon.setIcon(_make_tray_icon(snapshot.mode, snapshot.is_running))
        self._tray_start_action.setText("Pause" if snapshot.is_running else "Start")
        label = MODE_LABELS[snapshot.mode]
        message, self._pending_status = self._pending_status, None
        if message is None:
            message = f"{label} running" if snapshot.is_running else f"{label} paused"
        self._status_bar.showMessage(message)
        self._apply_theme(snapshot.mode)
        self._refresh_history()

    def _on_remaining_changed(self, remaining: int) -> None:
        self._tray_icon.setToolTip(
            f"Pomodesk — {MODE_LABELS[self._engine.mode]} {format_remaining(remaining)}"
        )

    def _on_session_completed(self, event: CompletionEvent) -> None:
        if event.finished_mode == Mode.FOCUS:
            self._pending_status = f"Focus done, {event.focus_count_today} today"
        else:
            self._pending_status = "Break over, back to focus"

    def _on_durations_changed(self, durations: dict) -> None:
        self._persist(self._persistence.save_durations, durations)

    def _on_history_changed(self, history: dict) -> None:
        self._persist(self._persistence.save_history, history)
        self._refresh_history()

    def _on_day_changed(self, day: str) -> None:
        log.debug("Date rolled over to %s", day)
        self._refresh_history()

    # ══════════════════════════════════════════════════════════════════
    #  PREFERENCES
    # ══════════════════════════════════════════════════════════════════

    def _on_preferences_changed(self, settings: Settings) -> None:
        if (
            settings.notifications_enabled
            and self._notifier.permission is NotificationPermission.NOT_YET_ASKED
        ):
            self._notifier.request_permission(self._permission_prompt)
            settings.notification_permission = self._notifier.permission.value
            try:
                save_settings(settings)
            except OSError as exc:
                log.warning("Could not save notification permission: %s", exc)
        self._apply_preferences(settings)

    def _apply_preferences(self, settings: Settings) -> None:
        self._sound_manager.set_volume(settings.sound_volume)
        self._sound_manager.set_enabled(settings.sound_enabled)
        self._notifier.enabled = settings.notifications_enabled
        self._dispatcher.set_wake_lock_enabled(settings.wake_lock_enabled)

    def _ask_notification_permission(self) -> bool:
        answer = QMessageBox.question(
            self,
            "Notifications",
            "Show a desktop notification when an interval ends?",
        )
        return answer == QMessageBox.StandardButton.Yes

    # ══════════════════════════════════════════════════════════════════
    #  THEME / HISTORY
    # ══════════════════════════════════════════════════════════════════

    def _apply_theme(self, mode: Mode | None = None) -> None:
        palette = get_palette(self._theme, mode or self._engine.mode)
        self.setStyleSheet(build_stylesheet(palette))
        self._theme_btn.setText("Light" if self._theme is Theme.DARK else "Dark")

    def _refresh_history(self) -> None:
        self._history_panel.refresh(self._engine.history, self._clock.now().date())

    def _persist(self, save: Callable, value: object) -> None:
        try:
            save(value)
        except SQLAlchemyError as exc:
            log.warning("Could not save state: %s", exc)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW
    # ══════════════════════════════════════════════════════════════════

    def _save_geometry(self) -> None:
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        try:
            save_settings(self._settings)
        except OSError as exc:
            log.warning("Could not save window geometry: %s", exc)

    def changeEvent(self, event) -> None:  # type: ignore[override]
        if event.type() in (QEvent.Type.WindowStateChange, QEvent.Type.ActivationChange):
            self._dispatcher.set_foreground(self.isVisible() and not self.isMinimized())
        super().changeEvent(event)

    def showEvent(self, event) -> None:  # type: ignore[override]
        self._dispatcher.set_foreground(not self.isMinimized())
        super().showEvent(event)

    def hideEvent(self, event) -> None:  # type: ignore[override]
        self._dispatcher.set_foreground(False)
        super().hideEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        if self._settings.minimize_to_tray and self._tray_icon.isVisible():
            event.ignore()
            self.hide()
            return
        self._save_geometry()
        self._dispatcher.shutdown()
        self._tray_icon.hide()
        event.accept()
