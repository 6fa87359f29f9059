#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Workers QThread pour AudioTrack.
Lecture des fichiers en arrière-plan pour ne pas bloquer l'UI.
"""

from PyQt6.QtCore import QThread, pyqtSignal

from audiotrack.infra.audio.wav_reader import load_wav
from audiotrack.services.replay_session import ReplaySession


class TrackLoadWorker(QThread):
    """
    Worker dédié à la lecture d'un fichier de trace.
    Les points sont installés dans la session par le thread UI.
    """

    loaded = pyqtSignal(str, list)  # (chemin, List[GeoSample])
    error = pyqtSignal(str)
    status_update = pyqtSignal(str)

    def __init__(self, session: ReplaySession, path: str) -> None:
        super().__init__()
        self.session = session
        self.path = path

    def run(self) -> None:
        try:
            self.status_update.emit("Lecture de la trace...")
            samples = self.session.read_track_file(self.path)
            self.loaded.emit(self.path, samples)
        except Exception as e:
            self.error.emit(f"Impossible de lire la trace: {e}")


class WaveformLoadWorker(QThread):
    """Worker dédié au décodage d'un fichier WAV."""

    loaded = pyqtSignal(object, object)  # (WavHeader, array('f'))
    error = pyqtSignal(str)

    def __init__(self, path: str) -> None:
        super().__init__()
        self.path = path

    def run(self) -> None:
        try:
            header, samples = load_wav(self.path)
            self.loaded.emit(header, samples)
        except Exception as e:
            self.error.emit(f"Impossible de lire le fichier WAV: {e}")
