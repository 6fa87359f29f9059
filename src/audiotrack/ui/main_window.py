#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Fenêtre principale de l'application AudioTrack.
Orchestre les widgets (carte, lecteur, mesures, forme d'onde) et la session.
"""

import logging
import os
from typing import List, Optional

from PyQt6.QtWidgets import QMainWindow, QMessageBox, QFileDialog, QDockWidget, QWidget
from PyQt6.QtGui import QAction
from PyQt6.QtCore import Qt

from .widgets.map_widget import MapWidget
from .widgets.file_loader_widget import FileLoaderWidget
from .widgets.audio_player import AudioPlayerWidget
from .widgets.readout_panel import ReadoutPanel
from .widgets.waveform_widget import WaveformWidget
from .widgets.progress_indicator import ProgressIndicator
from .theme.styles import WINDOW_STYLE

from audiotrack.app.config import (
    APP_NAME, APP_VERSION, AUDIO_EXTENSIONS, FRAME_INTERVAL_MS,
    TRACK_EXTENSIONS, WAVEFORM_EXTENSIONS
)
from audiotrack.core.models.playback_models import PlayStateChanged, Readout, TransportEvent
from audiotrack.domain.track_types import GeoSample
from audiotrack.infra.audio.qt_transport import QtAudioTransport
from audiotrack.infra.system.qt_frame_scheduler import QtFrameScheduler
from audiotrack.services.replay_session import ReplaySession
from audiotrack.workers.worker_threads import TrackLoadWorker, WaveformLoadWorker

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Fenêtre principale de l'application."""

    def __init__(self) -> None:
        super().__init__()

        self.setWindowTitle(f"{APP_NAME} v{APP_VERSION} - Trace GPS & Audio")
        self.resize(1400, 900)
        self.setStyleSheet(WINDOW_STYLE)
        self.setAcceptDrops(True)

        # Workers
        self.track_worker: Optional[TrackLoadWorker] = None
        self.waveform_worker: Optional[WaveformLoadWorker] = None

        self._init_ui()
        self._create_menu_bar()

        # Transport + session (le contrôleur publie vers la carte et vers self)
        self.transport = QtAudioTransport(self)
        self.transport.subscribe(self._on_transport_event)
        self.session = ReplaySession(
            transport=self.transport,
            renderer=self.map_widget,
            readout_sink=self,
            frame_scheduler=QtFrameScheduler(FRAME_INTERVAL_MS),
        )
        self._connect_player()

    # ------------------------------------------------------------------
    # Interface
    # ------------------------------------------------------------------
    def _init_ui(self) -> None:
        """Initialise l'interface utilisateur avec Docking."""
        self.setDockOptions(QMainWindow.DockOption.AnimatedDocks | QMainWindow.DockOption.AllowNestedDocks)
        movable = QDockWidget.DockWidgetFeature.DockWidgetMovable | QDockWidget.DockWidgetFeature.DockWidgetFloatable

        # 1. Central Widget (Map)
        self.map_widget = MapWidget()
        self.setCentralWidget(self.map_widget)

        # 2. Left Dock (Fichiers)
        self.loader_widget = FileLoaderWidget()
        self.loader_widget.track_file_selected.connect(self._on_track_selected)
        self.loader_widget.audio_file_selected.connect(self._on_audio_selected)
        self.loader_widget.offset_changed.connect(self._on_offset_changed)
        self.dock_files = self._add_dock("Fichiers", self.loader_widget, Qt.DockWidgetArea.LeftDockWidgetArea, movable)
        self.dock_files.setMinimumWidth(300)

        # 3. Right Dock (Lecteur + Mesures)
        self.player_widget = AudioPlayerWidget()
        self.dock_player = self._add_dock("Lecture", self.player_widget, Qt.DockWidgetArea.RightDockWidgetArea, movable)
        self.dock_player.setMinimumWidth(340)

        self.readout_panel = ReadoutPanel()
        self.dock_readout = self._add_dock("Mesures", self.readout_panel, Qt.DockWidgetArea.RightDockWidgetArea, movable)

        # 4. Bottom Dock (Forme d'onde)
        self.waveform_widget = WaveformWidget()
        self.dock_waveform = self._add_dock(
            "Forme d'onde", self.waveform_widget, Qt.DockWidgetArea.BottomDockWidgetArea,
            movable | QDockWidget.DockWidgetFeature.DockWidgetClosable
        )
        self.dock_waveform.setMinimumHeight(150)

        # Statut
        self.progress_indicator = ProgressIndicator()
        self.statusBar().addPermanentWidget(self.progress_indicator, 1)

    def _add_dock(self, title: str, widget: QWidget, area: Qt.DockWidgetArea, features) -> QDockWidget:
        dock = QDockWidget(title, self)
        dock.setFeatures(features)
        dock.setWidget(widget)
        self.addDockWidget(area, dock)
        return dock

    def _create_menu_bar(self) -> None:
        """Crée la barre de menu."""
        file_menu = self.menuBar().addMenu("&Fichier")

        open_track = QAction("Ouvrir une &trace...", self)
        open_track.setShortcut("Ctrl+O")
        open_track.triggered.connect(self.loader_widget._browse_track)
        file_menu.addAction(open_track)

        open_audio = QAction("Ouvrir un &audio...", self)
        open_audio.setShortcut("Ctrl+Shift+O")
        open_audio.triggered.connect(self.loader_widget._browse_audio)
        file_menu.addAction(open_audio)

        open_wav = QAction("Afficher une &forme d'onde WAV...", self)
        open_wav.triggered.connect(self._browse_waveform)
        file_menu.addAction(open_wav)

        file_menu.addSeparator()

        quit_action = QAction("&Quitter", self)
        quit_action.setShortcut("Ctrl+Q")
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        playback_menu = self.menuBar().addMenu("&Lecture")
        toggle_action = QAction("Lecture / Pause", self)
        toggle_action.setShortcut("Space")
        toggle_action.triggered.connect(lambda: self.session.controller.toggle_play())
        playback_menu.addAction(toggle_action)

    def _connect_player(self) -> None:
        controller = self.session.controller
        self.player_widget.play_toggled.connect(controller.toggle_play)
        self.player_widget.seek_started.connect(controller.begin_seek)
        self.player_widget.seek_moved.connect(controller.seek_move)
        self.player_widget.seek_finished.connect(controller.end_seek)
        self.player_widget.volume_changed.connect(self.transport.set_volume)

    # ------------------------------------------------------------------
    # Glisser-déposer
    # ------------------------------------------------------------------
    def dragEnterEvent(self, event):
        if event.mimeData().hasUrls():
            event.accept()
        else:
            event.ignore()

    def dropEvent(self, event):
        for url in event.mimeData().urls():
            self.open_path(url.toLocalFile())

    def open_path(self, path: str) -> None:
        """Ouvre une trace ou un audio selon l'extension."""
        if not os.path.isfile(path):
            return
        ext = os.path.splitext(path)[1].lower()
        if ext in TRACK_EXTENSIONS:
            self.loader_widget.set_track_file(path)
        elif ext in AUDIO_EXTENSIONS:
            self.loader_widget.set_audio_file(path)
        else:
            logger.info("Fichier ignoré (format inconnu): %s", path)

    # ------------------------------------------------------------------
    # ReadoutSinkPort
    # ------------------------------------------------------------------
    def update_readout(self, readout: Readout) -> None:
        self.player_widget.update_readout(readout)
        self.readout_panel.update_readout(readout)

    def _on_transport_event(self, event: TransportEvent) -> None:
        if isinstance(event, PlayStateChanged):
            self.player_widget.set_playing(event.playing)

    # ------------------------------------------------------------------
    # Trace
    # ------------------------------------------------------------------
    def _on_track_selected(self, path: str) -> None:
        """Lance la lecture de la trace en arrière-plan."""
        if self.track_worker is not None and self.track_worker.isRunning():
            return

        self.loader_widget.set_processing(True)
        self.progress_indicator.set_busy(True, f"Chargement de {os.path.basename(path)}...")

        self.track_worker = TrackLoadWorker(self.session, path)
        self.track_worker.status_update.connect(self.progress_indicator.set_status)
        self.track_worker.loaded.connect(self._on_track_loaded)
        self.track_worker.error.connect(self._on_track_error)
        self.track_worker.finished.connect(self._on_track_worker_finished)
        self.track_worker.start()

    def _on_track_loaded(self, path: str, samples: List[GeoSample]) -> None:
        self.session.apply_track(path, samples, self.loader_widget.get_offset())
        self._refresh_summary()

    def _on_track_error(self, message: str) -> None:
        self.loader_widget.mark_track_failed("Échec du chargement")
        self._on_error(message)

    def _on_track_worker_finished(self) -> None:
        self.loader_widget.set_processing(False)
        self.progress_indicator.set_busy(False)
        self.track_worker = None

    def _on_offset_changed(self, offset: float) -> None:
        if not self.session.track_path:
            return
        self.session.set_offset(offset)
        self._refresh_summary()

    # ------------------------------------------------------------------
    # Audio
    # ------------------------------------------------------------------
    def _on_audio_selected(self, path: str) -> None:
        if not self.session.load_audio_file(path):
            self._on_error(self.session.last_error or f"Impossible de charger {path}")
            return

        self.player_widget.set_source(path)
        self.player_widget.set_playing(False)
        self._refresh_summary()

        if os.path.splitext(path)[1].lower() in WAVEFORM_EXTENSIONS:
            self._load_waveform(path)
        else:
            self.waveform_widget.set_message("Forme d'onde disponible pour les fichiers WAV uniquement")

    def _browse_waveform(self) -> None:
        fname, _ = QFileDialog.getOpenFileName(
            self, "Sélectionner un fichier WAV", "", "Fichiers WAV (*.wav)"
        )
        if fname:
            self._load_waveform(fname)

    def _load_waveform(self, path: str) -> None:
        if self.waveform_worker is not None and self.waveform_worker.isRunning():
            self.waveform_worker.wait()

        self.waveform_widget.set_message(f"Décodage de {os.path.basename(path)}...")
        self.waveform_worker = WaveformLoadWorker(path)
        self.waveform_worker.loaded.connect(self.waveform_widget.set_waveform)
        self.waveform_worker.error.connect(self._on_waveform_error)
        self.waveform_worker.start()

    def _on_waveform_error(self, message: str) -> None:
        self.waveform_widget.set_message(message)
        self.progress_indicator.set_status(f"Erreur: {message}")
        logger.error(message)

    # ------------------------------------------------------------------
    def _refresh_summary(self) -> None:
        summary = self.session.get_summary()
        self.readout_panel.set_sample_count(summary["track_points"])
        self.progress_indicator.set_status(
            f"{summary['track_points']} points · {summary['total_distance_km']:.1f} km"
        )

    def _on_error(self, message: str) -> None:
        """Affiche une erreur de chargement."""
        self.progress_indicator.set_status(f"Erreur: {message}")
        QMessageBox.critical(self, "Erreur", message)

    def closeEvent(self, event) -> None:
        """Gère la fermeture de la fenêtre."""
        for worker in (self.track_worker, self.waveform_worker):
            if worker is not None and worker.isRunning():
                worker.wait()

        self.transport.unsubscribe(self._on_transport_event)
        self.session.controller.attach_transport(None)
        self.transport.stop()
        self.player_widget.reset()
        self.map_widget.cleanup()

        event.accept()
