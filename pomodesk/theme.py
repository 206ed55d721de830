"""Light/dark theme preference."""

from __future__ import annotations

from enum import Enum


class Theme(Enum):
    LIGHT = "light"
    DARK = "dark"

    def toggled(self) -> Theme:
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


DEFAULT_THEME = Theme.DARK
