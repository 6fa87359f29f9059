#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Transport audio basé sur QtMultimedia.
Traduit les signaux de QMediaPlayer en événements de transport typés.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QAudioOutput, QMediaPlayer

from audiotrack.core.models.playback_models import (
    DurationChanged,
    Ended,
    PlayStateChanged,
    TimeChanged,
    TransportEvent,
)
from audiotrack.core.ports.transport import TransportListener

logger = logging.getLogger(__name__)


class QtAudioTransport(QObject):
    """
    Lecteur audio (QMediaPlayer + QAudioOutput).
    Implémente AudioTransportPort (par structure: QObject ne peut pas hériter d'un Protocol).
    """

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)

        self.media_player = QMediaPlayer(self)
        self.audio_output = QAudioOutput(self)
        self.media_player.setAudioOutput(self.audio_output)

        self._listeners: List[TransportListener] = []
        self.current_path: Optional[str] = None

        # Connexions
        self.media_player.positionChanged.connect(self._on_position_changed)
        self.media_player.durationChanged.connect(self._on_duration_changed)
        self.media_player.playbackStateChanged.connect(self._on_playback_state_changed)
        self.media_player.mediaStatusChanged.connect(self._on_media_status_changed)
        self.media_player.errorOccurred.connect(self._on_error)

    # --- AudioTransportPort -------------------------------------------
    @property
    def current_time(self) -> float:
        return self.media_player.position() / 1000.0

    @property
    def duration(self) -> float:
        return max(0, self.media_player.duration()) / 1000.0

    def play(self) -> None:
        if self.current_path:
            self.media_player.play()

    def pause(self) -> None:
        self.media_player.pause()

    def seek_to(self, seconds: float) -> None:
        self.media_player.setPosition(int(round(seconds * 1000)))

    def subscribe(self, listener: TransportListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TransportListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # --- Commandes supplémentaires ------------------------------------
    def set_source(self, path: str) -> None:
        """Charge un fichier audio (sans lancer la lecture)."""
        self.current_path = path
        self.media_player.stop()
        self.media_player.setSource(QUrl.fromLocalFile(path))
        logger.info("Source audio: %s", path)

    @property
    def volume(self) -> float:
        return self.audio_output.volume()

    def set_volume(self, volume: float) -> None:
        self.audio_output.setVolume(min(1.0, max(0.0, volume)))

    @property
    def is_playing(self) -> bool:
        return self.media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    def stop(self) -> None:
        """Arrête la lecture et libère la source."""
        self.media_player.stop()
        self.media_player.setSource(QUrl())
        self.current_path = None

    # --- Signaux Qt -> événements -------------------------------------
    def _emit(self, event: TransportEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def _on_position_changed(self, position_ms: int) -> None:
        self._emit(TimeChanged(position_ms / 1000.0))

    def _on_duration_changed(self, duration_ms: int) -> None:
        self._emit(DurationChanged(max(0, duration_ms) / 1000.0))

    def _on_playback_state_changed(self, state) -> None:
        self._emit(PlayStateChanged(state == QMediaPlayer.PlaybackState.PlayingState))

    def _on_media_status_changed(self, status) -> None:
        if status == QMediaPlayer.MediaStatus.EndOfMedia:
            self._emit(Ended())

    def _on_error(self, error, error_string: str = "") -> None:
        logger.error("Erreur lecture audio: %s - %s", error, error_string or self.media_player.errorString())
