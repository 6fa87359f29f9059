#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Visualiseur de forme d'onde WAV (Style oscilloscope sombre).
Affiche l'enveloppe crête du signal, indépendamment de la trace GPS.
"""

from typing import List, Optional, Sequence

from PyQt6.QtWidgets import QWidget, QSizePolicy
from PyQt6.QtGui import QPainter, QColor, QPen, QBrush, QLinearGradient, QPainterPath, QFont
from PyQt6.QtCore import Qt, QPointF

from audiotrack.core.waveform import compute_peak_envelope, envelope_outline
from audiotrack.infra.audio.wav_reader import WavHeader
from ..theme.styles import (
    WAVEFORM_BACKGROUND_TOP, WAVEFORM_BACKGROUND_BOTTOM, WAVEFORM_GRID,
    WAVEFORM_MIDLINE, WAVEFORM_FILL, WAVEFORM_STROKE, COLOR_TEXT_SECONDARY
)

GRID_SPACING_PX = 40


class WaveformWidget(QWidget):
    """Widget peignant l'enveloppe d'un fichier WAV."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setMinimumHeight(120)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        self.header: Optional[WavHeader] = None
        self._samples: Sequence[float] = ()
        # Enveloppe recalculée seulement quand la largeur change
        self._envelope: List[float] = []
        self._envelope_width = -1
        self.message = "Aucun fichier WAV"

    def set_waveform(self, header: WavHeader, samples: Sequence[float]) -> None:
        self.header = header
        self._samples = samples
        self._envelope_width = -1
        self.message = ""
        self.update()

    def set_message(self, message: str) -> None:
        """Affiche un message à la place de la forme d'onde (chargement, erreur)."""
        self.clear()
        self.message = message
        self.update()

    def clear(self) -> None:
        self.header = None
        self._samples = ()
        self._envelope = []
        self._envelope_width = -1
        self.message = "Aucun fichier WAV"
        self.update()

    def info_text(self) -> str:
        if self.header is None:
            return self.message
        return (
            f"{self.header.sample_rate} Hz · {self.header.bits_per_sample} bits · "
            f"{self.header.num_channels} canal(aux) · {self.header.duration_seconds:.1f} s"
        )

    def _envelope_for_width(self, width: int) -> List[float]:
        if width != self._envelope_width:
            self._envelope = compute_peak_envelope(self._samples, width) if self._samples else []
            self._envelope_width = width
        return self._envelope

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        width = self.width()
        height = self.height()

        # Fond
        gradient = QLinearGradient(0, 0, 0, height)
        gradient.setColorAt(0.0, QColor(WAVEFORM_BACKGROUND_TOP))
        gradient.setColorAt(1.0, QColor(WAVEFORM_BACKGROUND_BOTTOM))
        painter.fillRect(self.rect(), QBrush(gradient))

        # Grille
        painter.setPen(QPen(QColor(WAVEFORM_GRID), 1))
        for x in range(0, width, GRID_SPACING_PX):
            painter.drawLine(x, 0, x, height)
        for y in range(0, height, GRID_SPACING_PX):
            painter.drawLine(0, y, width, y)

        # Ligne médiane
        middle = height / 2
        painter.setPen(QPen(QColor(WAVEFORM_MIDLINE), 1))
        painter.drawLine(QPointF(0, middle), QPointF(width, middle))

        amplitudes = self._envelope_for_width(width)
        if amplitudes:
            upper, lower = envelope_outline(amplitudes, height)

            # Enveloppe pleine: contour haut puis bas à rebours
            outline = QPainterPath(QPointF(0, upper[0]))
            for x, y in enumerate(upper):
                outline.lineTo(x, y)
            for x in range(len(lower) - 1, -1, -1):
                outline.lineTo(x, lower[x])
            outline.closeSubpath()

            fill = QColor(WAVEFORM_FILL)
            fill.setAlpha(170)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(QBrush(fill))
            painter.drawPath(outline)

            stroke = QPainterPath(QPointF(0, upper[0]))
            for x, y in enumerate(upper):
                stroke.lineTo(x, y)
            painter.setBrush(Qt.BrushStyle.NoBrush)
            painter.setPen(QPen(QColor(WAVEFORM_STROKE), 1.2))
            painter.drawPath(stroke)

        # Infos
        painter.setPen(QColor(COLOR_TEXT_SECONDARY))
        painter.setFont(QFont("Segoe UI", 9))
        painter.drawText(8, 16, self.info_text())
        painter.end()
