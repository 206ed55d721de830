"""QSS stylesheets and palettes for Pomodesk's light and dark themes."""

from __future__ import annotations

from ..theme import Theme
from ..timer.durations import Mode

# ── palettes ─────────────────────────────────────────────────────────────

PALETTES: dict[Theme, dict[str, str]] = {
    Theme.DARK: {
        "bg":           "#1A1A2E",
        "bg_secondary": "#232340",
        "surface":      "#2A2A4A",
        "text":         "#E2E2F0",
        "text_muted":   "#7A7A9A",
        "border":       "#313154",
    },
    Theme.LIGHT: {
        "bg":           "#F5F5F7",
        "bg_secondary": "#FFFFFF",
        "surface":      "#ECECF1",
        "text":         "#1D1D2C",
        "text_muted":   "#6E6E80",
        "border":       "#D8D8E0",
    },
}

# ── per-mode accents (shared by both themes) ─────────────────────────────

MODE_ACCENTS: dict[Mode, str] = {
    Mode.FOCUS:       "#FF6B6B",   # warm coral
    Mode.SHORT_BREAK: "#4ECDC4",   # cool teal
    Mode.LONG_BREAK:  "#A18CD1",   # calm purple
}


def get_palette(theme: Theme, mode: Mode = Mode.FOCUS) -> dict[str, str]:
    """Palette for *theme* with the accent of *mode* filled in."""
    palette = dict(PALETTES[theme])
    palette["accent"] = MODE_ACCENTS[mode]
    return palette


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str]) -> str:
    p = palette
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 8px 18px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 12px 36px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#modeButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid transparent;
        border-radius: 8px;
        padding: 6px 14px;
    }}

    QPushButton#modeButton:checked {{
        color: {p['text']};
        border-color: {p['accent']};
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 6px 12px;
        border-radius: 8px;
    }}

    QFrame#card {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    QLabel#timerDisplay {{
        font-size: 72px;
        font-weight: 700;
        color: {p['accent']};
        background-color: transparent;
    }}

    QLabel#clockLabel, QLabel#helperText {{
        font-size: 12px;
        color: {p['text_muted']};
        background-color: transparent;
    }}

    QLabel#sectionLabel {{
        font-size: 15px;
        font-weight: 700;
        background-color: transparent;
    }}

    QSpinBox {{
        background-color: {p['bg']};
        border: 1px solid {p['border']};
        border-radius: 6px;
        padding: 4px 8px;
    }}

    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
