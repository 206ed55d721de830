"""Tests for the main window wiring.

Covers:
- Stored durations, history and theme restored at startup
- Start/Pause button text and tray state following the engine
- Completed focus intervals saved and shown in the history panel
- Duration edits from the settings panel persisted
- Theme toggle persisted
- Notification permission asked once, when notifications are enabled
- Preferences still applied when settings.json cannot be written
- Progress bar and the history panel rolling over at midnight
"""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pytest
from PyQt6.QtWidgets import QSlider

from pomodesk.app import PomodeskApp
from pomodesk.audio.sounds import SoundManager
from pomodesk.database.store import KeyValueStore
from pomodesk.history.ledger import HistoryLedger
from pomodesk.persistence import STORAGE_KEYS, PersistenceAdapter
from pomodesk.settings import Settings
from pomodesk.theme import Theme
from pomodesk.timer.durations import DurationTable, Mode

from helpers import run_out


class FakeWakeLock:
    held = False

    def acquire(self):
        self.held = True

    def release(self):
        self.held = False


@pytest.fixture(autouse=True)
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr("pomodesk.settings.SETTINGS_PATH", path)
    return path


@pytest.fixture
def store():
    return KeyValueStore()


@pytest.fixture
def persistence(store):
    return PersistenceAdapter(store)


@pytest.fixture
def make_window(qapp, clock, persistence, tmp_path):
    windows = []

    def factory(**kwargs):
        kwargs.setdefault("settings", Settings())
        kwargs.setdefault("persistence", persistence)
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("sound_manager", SoundManager(sounds_dir=tmp_path / "sounds"))
        kwargs.setdefault("wake_lock", FakeWakeLock())
        kwargs.setdefault("permission_prompt", lambda: True)
        window = PomodeskApp(**kwargs)
        windows.append(window)
        return window

    yield factory
    for w in windows:
        w.dispatcher.shutdown()
        w.deleteLater()


# ═══════════════════════════════════════════════════════════════════════
#  STARTUP
# ═══════════════════════════════════════════════════════════════════════


class TestStartup:
    def test_defaults(self, make_window):
        w = make_window()
        assert w.engine.mode == Mode.FOCUS
        assert w.engine.remaining == 1500
        assert w.engine.is_running is False
        assert w.timer_widget.time_text == "25:00"
        assert w.theme is Theme.DARK

    def test_restores_stored_state(self, make_window, persistence):
        persistence.save_durations(DurationTable({Mode.FOCUS: 50 * 60}))
        persistence.save_history(HistoryLedger({"2026-03-10": 3, "2026-03-09": 2}))
        persistence.save_theme(Theme.LIGHT)

        w = make_window()
        assert w.engine.remaining == 3000
        assert w.engine.total_focus_count == 5
        assert w.theme is Theme.LIGHT
        assert w.history_panel.summary.today == 3
        assert w.history_panel.summary.yesterday == 2

    def test_never_resumes_running(self, make_window):
        w = make_window()
        assert w.timer_widget.start_pause_text == "Start"


# ═══════════════════════════════════════════════════════════════════════
#  CONTROLS
# ═══════════════════════════════════════════════════════════════════════


class TestControls:
    def test_start_pause_text(self, make_window):
        w = make_window()
        w.timer_widget.toggle_running()
        assert w.engine.is_running is True
        assert w.timer_widget.start_pause_text == "Pause"
        w.timer_widget.toggle_running()
        assert w.engine.is_running is False
        assert w.timer_widget.start_pause_text == "Start"

    def test_countdown_display(self, make_window, clock):
        w = make_window()
        w.engine.start()
        clock.advance(61)
        w.engine.tick()
        assert w.timer_widget.time_text == "23:59"

    def test_mode_button_switches(self, make_window):
        w = make_window()
        w.timer_widget.mode_button(Mode.LONG_BREAK).click()
        assert w.engine.mode == Mode.LONG_BREAK
        assert w.timer_widget.time_text == "15:00"
        assert w.timer_widget.mode_button(Mode.LONG_BREAK).isChecked()

    def test_wake_lock_follows_running(self, make_window):
        lock = FakeWakeLock()
        w = make_window(wake_lock=lock)
        w.engine.start()
        assert lock.held is True
        w.engine.pause()
        assert lock.held is False


# ═══════════════════════════════════════════════════════════════════════
#  PERSISTENCE
# ═══════════════════════════════════════════════════════════════════════


class TestPersistence:
    def test_completion_saves_history(self, make_window, clock, store):
        w = make_window()
        w.engine.start()
        run_out(w.engine, clock)
        assert json.loads(store.get(STORAGE_KEYS["history"])) == {"2026-03-10": 1}
        assert w.history_panel.summary.today == 1
        assert w.status_text == "Focus done, 1 today"

    def test_break_completion_leaves_history(self, make_window, clock, store):
        w = make_window()
        w.engine.switch_mode(Mode.SHORT_BREAK)
        w.engine.start()
        run_out(w.engine, clock)
        assert store.get(STORAGE_KEYS["history"]) is None
        assert w.engine.mode == Mode.FOCUS

    def test_duration_edit_saved(self, make_window, store):
        w = make_window()
        w.settings_panel.spin_box(Mode.SHORT_BREAK).setValue(10)
        blob = json.loads(store.get(STORAGE_KEYS["durations"]))
        assert blob["shortSeconds"] == 600
        assert w.engine.duration_for(Mode.SHORT_BREAK) == 600

    def test_focus_edit_updates_idle_display(self, make_window):
        w = make_window()
        w.settings_panel.spin_box(Mode.FOCUS).setValue(30)
        assert w.timer_widget.time_text == "30:00"

    def test_theme_toggle_saved(self, make_window, store):
        w = make_window()
        w.toggle_theme()
        assert w.theme is Theme.LIGHT
        assert json.loads(store.get(STORAGE_KEYS["theme"])) == "light"
        w.toggle_theme()
        assert json.loads(store.get(STORAGE_KEYS["theme"])) == "dark"


# ═══════════════════════════════════════════════════════════════════════
#  PREFERENCES
# ═══════════════════════════════════════════════════════════════════════


class TestPreferences:
    def test_permission_asked_once(self, make_window, settings_path):
        asked = []

        def prompt():
            asked.append(1)
            return True

        w = make_window(permission_prompt=prompt)
        panel = w.settings_panel
        panel.settings.sound_volume = 30
        panel.preferences_changed.emit(panel.settings)
        panel.preferences_changed.emit(panel.settings)
        assert asked == [1]
        saved = json.loads(settings_path.read_text(encoding="utf-8"))
        assert saved["notification_permission"] == "granted"

    def test_no_prompt_when_notifications_off(self, make_window):
        asked = []
        settings = Settings(notifications_enabled=False)
        w = make_window(settings=settings, permission_prompt=lambda: asked.append(1))
        w.settings_panel.preferences_changed.emit(settings)
        assert asked == []

    def test_volume_applied(self, make_window, tmp_path):
        sound = SoundManager(sounds_dir=tmp_path / "other")
        w = make_window(sound_manager=sound)
        w.settings_panel.settings.sound_volume = 25
        w.settings_panel.preferences_changed.emit(w.settings_panel.settings)
        assert sound.volume == 25


class TestUnwritablePreferences:
    @pytest.fixture
    def blocked_path(self, tmp_path, monkeypatch):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        monkeypatch.setattr(
            "pomodesk.settings.SETTINGS_PATH", blocker / "sub" / "settings.json",
        )

    def test_slider_change_still_applied(self, make_window, tmp_path, blocked_path):
        sound = SoundManager(sounds_dir=tmp_path / "snd")
        w = make_window(sound_manager=sound)
        w.settings_panel.findChild(QSlider).setValue(20)
        assert sound.volume == 20

    def test_permission_kept_in_memory(self, make_window, blocked_path):
        w = make_window()
        panel = w.settings_panel
        panel.preferences_changed.emit(panel.settings)
        assert panel.settings.notification_permission == "granted"


# ═══════════════════════════════════════════════════════════════════════
#  DISPLAY
# ═══════════════════════════════════════════════════════════════════════


class TestDisplay:
    def test_progress_follows_countdown(self, make_window, clock):
        w = make_window()
        assert w.timer_widget.progress_value == 0
        w.engine.start()
        clock.advance(750)
        w.engine.tick()
        assert w.timer_widget.progress_value == 500

    def test_history_rolls_over_at_midnight(self, make_window, clock):
        clock.set(datetime(2026, 3, 10, 23, 0, tzinfo=timezone.utc))
        w = make_window()
        w.engine.start()
        run_out(w.engine, clock)
        w.engine.pause()
        assert w.history_panel.summary.today == 1

        clock.advance(3600)
        w.timer_widget.refresh_clock()
        assert w.history_panel.summary.today == 0
        assert w.history_panel.summary.yesterday == 1

    def test_same_day_refresh_keeps_counts(self, make_window, clock):
        w = make_window()
        w.engine.start()
        run_out(w.engine, clock)
        clock.advance(60)
        w.timer_widget.refresh_clock()
        assert w.history_panel.summary.today == 1
