"""UI package."""

from .timer_widget import TimerWidget
from .settings_panel import SettingsPanel
from .history_panel import HistoryPanel

__all__ = ["TimerWidget", "SettingsPanel", "HistoryPanel"]
