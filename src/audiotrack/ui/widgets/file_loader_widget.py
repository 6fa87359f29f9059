#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Widget de chargement de fichiers pour AudioTrack.
Permet de sélectionner la trace GPS (.json/.fit), l'audio et le décalage.
"""

from typing import Optional
import os

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QPushButton, QLabel,
    QFileDialog, QGroupBox, QHBoxLayout, QStyle
)
from PyQt6.QtCore import pyqtSignal

from audiotrack.app.config import AUDIO_EXTENSIONS, TRACK_EXTENSIONS
from ..theme.styles import (
    BUTTON_SECONDARY_STYLE, GROUPBOX_STYLE,
    LABEL_STYLE, LABEL_MUTED_STYLE, LABEL_LOADED_STYLE
)
from .scrubber import ScrubberInput


def _dialog_filter(title: str, extensions) -> str:
    return f"{title} ({' '.join('*' + ext for ext in extensions)})"


class FileLoaderWidget(QWidget):
    """
    Widget permettant à l'utilisateur de charger la trace et l'audio.
    """

    # Signaux
    track_file_selected = pyqtSignal(str)  # Chemin de la trace
    audio_file_selected = pyqtSignal(str)  # Chemin de l'audio
    offset_changed = pyqtSignal(float)     # Décalage de la trace (s)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.track_path: Optional[str] = None
        self.audio_path: Optional[str] = None

        self._init_ui()

    def _init_ui(self) -> None:
        """Initialise l'interface utilisateur."""
        layout = QVBoxLayout(self)
        layout.setSpacing(14)
        layout.setContentsMargins(12, 12, 12, 12)

        # --- Section Trace GPS ---
        group_track = QGroupBox("Trace GPS")
        group_track.setStyleSheet(GROUPBOX_STYLE)
        track_layout = QVBoxLayout(group_track)
        track_layout.setSpacing(10)

        self.btn_load_track = QPushButton("Charger une trace (.json, .fit)")
        self.btn_load_track.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_DirOpenIcon))
        self.btn_load_track.setStyleSheet(BUTTON_SECONDARY_STYLE)
        self.btn_load_track.clicked.connect(self._browse_track)

        self.lbl_track_status = QLabel("Aucun fichier sélectionné")
        self.lbl_track_status.setStyleSheet(LABEL_MUTED_STYLE)
        self.lbl_track_status.setWordWrap(True)

        # Scrubber Décalage
        offset_layout = QHBoxLayout()
        offset_label = QLabel("Décalage (s):")
        offset_label.setStyleSheet(LABEL_STYLE)
        self.scrubber_offset = ScrubberInput()
        self.scrubber_offset.setRange(-3600, 3600)
        self.scrubber_offset.setSingleStep(0.1)
        self.scrubber_offset.setValue(0.0)
        self.scrubber_offset.setToolTip("Glissez pour décaler la trace par rapport au début de l'audio")
        self.scrubber_offset.value_committed.connect(self.offset_changed.emit)
        offset_layout.addWidget(offset_label)
        offset_layout.addWidget(self.scrubber_offset)

        track_layout.addWidget(self.btn_load_track)
        track_layout.addWidget(self.lbl_track_status)
        track_layout.addLayout(offset_layout)
        layout.addWidget(group_track)

        # --- Section Audio ---
        group_audio = QGroupBox("Audio")
        group_audio.setStyleSheet(GROUPBOX_STYLE)
        audio_layout = QVBoxLayout(group_audio)
        audio_layout.setSpacing(10)

        self.btn_load_audio = QPushButton("Charger un fichier audio")
        self.btn_load_audio.setIcon(self.style().standardIcon(QStyle.StandardPixmap.SP_MediaVolume))
        self.btn_load_audio.setStyleSheet(BUTTON_SECONDARY_STYLE)
        self.btn_load_audio.clicked.connect(self._browse_audio)

        self.lbl_audio_status = QLabel("Aucun fichier sélectionné")
        self.lbl_audio_status.setStyleSheet(LABEL_MUTED_STYLE)
        self.lbl_audio_status.setWordWrap(True)

        audio_layout.addWidget(self.btn_load_audio)
        audio_layout.addWidget(self.lbl_audio_status)
        layout.addWidget(group_audio)

        layout.addStretch()

    def _browse_track(self) -> None:
        """Ouvre un dialogue pour sélectionner un fichier de trace."""
        fname, _ = QFileDialog.getOpenFileName(
            self, "Sélectionner une trace GPS", "",
            _dialog_filter("Traces GPS", TRACK_EXTENSIONS)
        )
        if fname:
            self.set_track_file(fname)

    def _browse_audio(self) -> None:
        """Ouvre un dialogue pour sélectionner un fichier audio."""
        fname, _ = QFileDialog.getOpenFileName(
            self, "Sélectionner un fichier audio", "",
            _dialog_filter("Fichiers audio", AUDIO_EXTENSIONS)
        )
        if fname:
            self.set_audio_file(fname)

    def set_track_file(self, path: str) -> None:
        """Définit la trace (dialogue ou glisser-déposer)."""
        if os.path.isfile(path):
            self.track_path = path
            self.lbl_track_status.setText(os.path.basename(path))
            self.lbl_track_status.setStyleSheet(LABEL_LOADED_STYLE)
            self.track_file_selected.emit(path)

    def set_audio_file(self, path: str) -> None:
        """Définit l'audio (dialogue ou glisser-déposer)."""
        if os.path.isfile(path):
            self.audio_path = path
            self.lbl_audio_status.setText(os.path.basename(path))
            self.lbl_audio_status.setStyleSheet(LABEL_LOADED_STYLE)
            self.audio_file_selected.emit(path)

    def mark_track_failed(self, message: str) -> None:
        self.track_path = None
        self.lbl_track_status.setText(message)
        self.lbl_track_status.setStyleSheet(LABEL_MUTED_STYLE)

    def set_processing(self, processing: bool) -> None:
        """Désactive les contrôles de trace pendant un chargement."""
        self.btn_load_track.setEnabled(not processing)
        self.scrubber_offset.setEnabled(not processing)

    def get_offset(self) -> float:
        """Retourne le décalage de la trace en secondes."""
        return self.scrubber_offset.value()
