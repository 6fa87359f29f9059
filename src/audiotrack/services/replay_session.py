#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Façade "application" utilisée par l'UI.

Objectif: l'UI PyQt ne doit pas connaître l'infra (fitparse/json/fs).
La synchronisation est déportée dans `audiotrack.core` (usecase + ports).
"""

import logging
import os
from typing import List, Optional, Sequence

from audiotrack.app.config import AUDIO_EXTENSIONS, TICK_COALESCE_SECONDS
from audiotrack.core.ports.frame_scheduler import FrameSchedulerPort
from audiotrack.core.ports.readout import ReadoutSinkPort
from audiotrack.core.ports.renderer import TrackRendererPort
from audiotrack.core.usecases.playback_sync import PlaybackSyncController
from audiotrack.domain.track_types import GeoSample
from audiotrack.infra.tracks.errors import TrackLoadError
from audiotrack.infra.tracks.track_loader import TrackFileLoader, prepare_samples

logger = logging.getLogger(__name__)


class ReplaySession:
    """
    Session de relecture: une trace GPS + une source audio.
    Possède le loader, les points et le contrôleur de synchronisation.
    """

    def __init__(
        self,
        transport=None,
        renderer: Optional[TrackRendererPort] = None,
        readout_sink: Optional[ReadoutSinkPort] = None,
        frame_scheduler: Optional[FrameSchedulerPort] = None,
        loader: Optional[TrackFileLoader] = None,
    ) -> None:
        """
        Args:
            transport: Transport audio (QtAudioTransport ou équivalent avec set_source)
            renderer: Rendu carte
            readout_sink: Affichage des distances/temps
            frame_scheduler: Planificateur de frames pour regrouper les ticks
            loader: Loader de fichiers de trace
        """
        self.loader = loader or TrackFileLoader()
        self.transport = transport
        self.controller = PlaybackSyncController(
            transport=transport,
            renderer=renderer,
            readout_sink=readout_sink,
            frame_scheduler=frame_scheduler,
            coalesce_seconds=TICK_COALESCE_SECONDS,
        )

        # Points tels que lus (avant décalage)
        self._raw_samples: List[GeoSample] = []
        self.samples: List[GeoSample] = []
        self.offset_seconds: float = 0.0

        self.track_path: Optional[str] = None
        self.audio_path: Optional[str] = None
        self.last_error: Optional[str] = None

    # --- Trace --------------------------------------------------------
    def read_track_file(self, path: str) -> List[GeoSample]:
        """
        Lit un fichier de trace (appelable depuis un thread de travail).

        Raises:
            TrackLoadError: fichier illisible ou format non supporté
        """
        return self.loader.load_raw(path)

    def apply_track(self, path: str, raw_samples: Sequence[GeoSample], offset_seconds: float = 0.0) -> None:
        """Installe une trace déjà lue (thread UI)."""
        self.track_path = path
        self._raw_samples = list(raw_samples)
        self.set_offset(offset_seconds)
        logger.info("Trace active: %s (%d points)", os.path.basename(path), len(self.samples))

    def load_track_file(self, path: str, offset_seconds: float = 0.0) -> bool:
        """
        Charge et installe un fichier de trace.

        Returns:
            True si le chargement a réussi
        """
        try:
            raw = self.read_track_file(path)
        except TrackLoadError as e:
            self.last_error = str(e)
            logger.error("Chargement de la trace impossible: %s", e)
            return False

        self.last_error = None
        self.apply_track(path, raw, offset_seconds)
        return True

    def set_offset(self, offset_seconds: float) -> None:
        """Décale la trace par rapport au début de l'audio."""
        self.offset_seconds = offset_seconds
        self.samples = prepare_samples(self._raw_samples, offset_seconds)
        self.controller.set_samples(self.samples)

    def has_track(self) -> bool:
        return bool(self.samples)

    # --- Audio ----------------------------------------------------------
    def load_audio_file(self, path: str) -> bool:
        """
        Charge une source audio et ramène la lecture au début de la trace.

        Returns:
            True si la source a été transmise au transport
        """
        if not os.path.isfile(path):
            self.last_error = f"Le fichier n'existe pas: {path}"
            logger.error(self.last_error)
            return False

        _, ext = os.path.splitext(path)
        if ext.lower() not in AUDIO_EXTENSIONS:
            self.last_error = f"Format audio non supporté: {ext or os.path.basename(path)}"
            logger.error(self.last_error)
            return False

        if self.transport is None:
            self.last_error = "Aucun transport audio disponible"
            logger.warning(self.last_error)
            return False

        self.transport.set_source(path)
        self.audio_path = path
        self.last_error = None
        self.controller.load_source()
        return True

    # --- Résumé -----------------------------------------------------------
    def get_summary(self) -> dict:
        """Retourne un résumé de la session."""
        readout = self.controller.readout
        return {
            "track_path": self.track_path,
            "audio_path": self.audio_path,
            "track_points": len(self.samples),
            "total_distance_km": readout.total_distance_km,
            "distance_covered_km": readout.distance_covered_km,
            "current_time": readout.current_time,
            "duration": readout.duration,
            "offset_seconds": self.offset_seconds,
        }
