#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Panneau de mesures: nombre de points, distances et temps.
"""

from typing import Optional

from PyQt6.QtWidgets import QGroupBox, QGridLayout, QLabel, QWidget

from audiotrack.core.models.playback_models import Readout
from ..theme.styles import GROUPBOX_STYLE, LABEL_MUTED_STYLE, READOUT_VALUE_STYLE


def format_km(value: float) -> str:
    return f"{value:.1f} km"


def format_seconds(value: float) -> str:
    return f"{value:.1f} s"


class ReadoutPanel(QGroupBox):
    """Affiche la dernière mesure publiée par le contrôleur (ReadoutSinkPort)."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__("Mesures", parent)
        self.setStyleSheet(GROUPBOX_STYLE)

        layout = QGridLayout(self)
        layout.setHorizontalSpacing(16)
        layout.setVerticalSpacing(6)

        self.lbl_points = self._add_row(layout, 0, "Points GPS", "0")
        self.lbl_total = self._add_row(layout, 1, "Distance totale", format_km(0.0))
        self.lbl_covered = self._add_row(layout, 2, "Distance parcourue", format_km(0.0))
        self.lbl_time = self._add_row(layout, 3, "Temps", format_seconds(0.0))
        self.lbl_duration = self._add_row(layout, 4, "Durée audio", format_seconds(0.0))

    @staticmethod
    def _add_row(layout: QGridLayout, row: int, title: str, value: str) -> QLabel:
        lbl_title = QLabel(title)
        lbl_title.setStyleSheet(LABEL_MUTED_STYLE)
        lbl_value = QLabel(value)
        lbl_value.setStyleSheet(READOUT_VALUE_STYLE)
        layout.addWidget(lbl_title, row, 0)
        layout.addWidget(lbl_value, row, 1)
        return lbl_value

    def set_sample_count(self, count: int) -> None:
        self.lbl_points.setText(str(count))

    def update_readout(self, readout: Readout) -> None:
        self.lbl_total.setText(format_km(readout.total_distance_km))
        self.lbl_covered.setText(format_km(readout.distance_covered_km))
        self.lbl_time.setText(format_seconds(readout.current_time))
        self.lbl_duration.setText(format_seconds(readout.duration))
