"""Daily focus counts: today, yesterday, the past week."""

from __future__ import annotations

from datetime import date

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame

from ..history.ledger import HistoryLedger, HistorySummary, WEEK_DAYS


class HistoryPanel(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._summary: HistorySummary | None = None
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(20, 14, 20, 14)
        layout.setSpacing(6)

        header = QLabel("Focus history")
        header.setObjectName("sectionLabel")
        layout.addWidget(header)

        totals = QHBoxLayout()
        self._today_label = QLabel("")
        self._yesterday_label = QLabel("")
        self._week_label = QLabel("")
        for lbl in (self._today_label, self._yesterday_label, self._week_label):
            lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
            totals.addWidget(lbl)
        layout.addLayout(totals)

        self._day_labels: list[QLabel] = []
        for _ in range(WEEK_DAYS):
            row = QLabel("")
            row.setObjectName("helperText")
            layout.addWidget(row)
            self._day_labels.append(row)

    def refresh(self, history: HistoryLedger, reference: date) -> None:
        """Redraw from a ledger copy as of *reference*."""
        summary = history.summary(reference)
        self._summary = summary
        self._today_label.setText(f"Today\n{summary.today}")
        self._yesterday_label.setText(f"Yesterday\n{summary.yesterday}")
        self._week_label.setText(f"7 days\n{summary.week_total}")
        for lbl, day in zip(self._day_labels, summary.days):
            lbl.setText(f"{day.key}   {'●' * min(day.count, 12)} {day.count}")

    @property
    def summary(self) -> HistorySummary | None:
        return self._summary
