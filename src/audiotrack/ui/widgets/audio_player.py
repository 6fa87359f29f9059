#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Lecteur audio pour AudioTrack.
Bouton lecture/pause, barre de position (scrub) et volume.
Le widget n'agit pas sur le lecteur: il émet des signaux que la fenêtre
principale relie au contrôleur de synchronisation.
"""

import os

from PyQt6.QtWidgets import (
    QHBoxLayout, QVBoxLayout, QPushButton,
    QSlider, QLabel, QStyle, QGroupBox
)
from PyQt6.QtCore import Qt, pyqtSignal

from audiotrack.app.config import SLIDER_STEPS_PER_SECOND
from audiotrack.core.models.playback_models import Readout
from ..theme.styles import GROUPBOX_STYLE, LABEL_MUTED_STYLE, LABEL_STYLE, SLIDER_STYLE, BUTTON_SECONDARY_STYLE


def format_clock(seconds: float) -> str:
    """mm:ss à partir d'un temps en secondes."""
    total = max(0, int(seconds))
    return f"{total // 60:02}:{total % 60:02}"


class AudioPlayerWidget(QGroupBox):
    """Widget de contrôle de la lecture audio."""

    play_toggled = pyqtSignal()
    seek_started = pyqtSignal()
    seek_moved = pyqtSignal(float)   # secondes
    seek_finished = pyqtSignal()
    volume_changed = pyqtSignal(float)  # 0..1

    def __init__(self, parent=None):
        super().__init__("Lecteur Audio", parent)
        self.setStyleSheet(GROUPBOX_STYLE)
        self._init_ui()

    def _init_ui(self):
        layout = QVBoxLayout(self)
        layout.setSpacing(6)

        self.lbl_source = QLabel("Aucun fichier audio")
        self.lbl_source.setStyleSheet(LABEL_MUTED_STYLE)
        layout.addWidget(self.lbl_source)

        # Contrôles
        controls_layout = QHBoxLayout()
        controls_layout.setContentsMargins(0, 0, 0, 0)

        self.btn_play = QPushButton()
        self.btn_play.setStyleSheet(BUTTON_SECONDARY_STYLE)
        self.btn_play.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaPlay))
        self.btn_play.setFixedSize(34, 30)
        self.btn_play.clicked.connect(self.play_toggled.emit)
        self.btn_play.setEnabled(False)

        # Slider position (en dixièmes de seconde)
        self.slider = QSlider(Qt.Orientation.Horizontal)
        self.slider.setStyleSheet(SLIDER_STYLE)
        self.slider.setRange(0, 0)
        self.slider.sliderPressed.connect(self.seek_started.emit)
        self.slider.valueChanged.connect(self._on_slider_value_changed)
        self.slider.sliderReleased.connect(self.seek_finished.emit)

        self.lbl_current = QLabel("00:00")
        self.lbl_current.setStyleSheet(LABEL_STYLE)
        self.lbl_duration = QLabel("00:00")
        self.lbl_duration.setStyleSheet(LABEL_STYLE)

        controls_layout.addWidget(self.btn_play)
        controls_layout.addWidget(self.lbl_current)
        controls_layout.addWidget(self.slider, 1)
        controls_layout.addWidget(self.lbl_duration)
        layout.addLayout(controls_layout)

        # Volume
        volume_layout = QHBoxLayout()
        lbl_volume = QLabel("Volume")
        lbl_volume.setStyleSheet(LABEL_STYLE)
        self.slider_volume = QSlider(Qt.Orientation.Horizontal)
        self.slider_volume.setStyleSheet(SLIDER_STYLE)
        self.slider_volume.setRange(0, 100)
        self.slider_volume.setValue(100)
        self.slider_volume.valueChanged.connect(self._on_volume_changed)
        self.lbl_volume = QLabel("100 %")
        self.lbl_volume.setStyleSheet(LABEL_STYLE)
        self.lbl_volume.setMinimumWidth(44)
        volume_layout.addWidget(lbl_volume)
        volume_layout.addWidget(self.slider_volume, 1)
        volume_layout.addWidget(self.lbl_volume)
        layout.addLayout(volume_layout)

    def set_source(self, path: str) -> None:
        """Affiche la source chargée et active les contrôles."""
        self.lbl_source.setText(os.path.basename(path))
        self.lbl_source.setToolTip(path)
        self.lbl_source.setStyleSheet(LABEL_STYLE)
        self.btn_play.setEnabled(True)

    def set_playing(self, playing: bool) -> None:
        icon = QStyle.StandardPixmap.SP_MediaPause if playing else QStyle.StandardPixmap.SP_MediaPlay
        self.btn_play.setIcon(self.style().standardIcon(icon))

    def update_readout(self, readout: Readout) -> None:
        """Synchronise la barre et les libellés avec la position publiée."""
        maximum = int(round(readout.duration * SLIDER_STEPS_PER_SECOND))
        value = int(round(readout.current_time * SLIDER_STEPS_PER_SECOND))

        # Mise à jour programmatique: ne pas renvoyer de seek
        self.slider.blockSignals(True)
        try:
            if self.slider.maximum() != maximum:
                self.slider.setRange(0, maximum)
            if self.slider.value() != value:
                self.slider.setValue(value)
        finally:
            self.slider.blockSignals(False)

        self.lbl_current.setText(format_clock(readout.current_time))
        self.lbl_duration.setText(format_clock(readout.duration))

    def _on_slider_value_changed(self, value: int) -> None:
        self.seek_moved.emit(value / SLIDER_STEPS_PER_SECOND)

    def _on_volume_changed(self, value: int) -> None:
        self.lbl_volume.setText(f"{value} %")
        self.volume_changed.emit(value / 100.0)

    def reset(self) -> None:
        self.lbl_source.setText("Aucun fichier audio")
        self.lbl_source.setStyleSheet(LABEL_MUTED_STYLE)
        self.btn_play.setEnabled(False)
        self.set_playing(False)
