from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional, Sequence

from audiotrack.core.models.playback_models import (
    DurationChanged,
    Ended,
    PlaybackMode,
    PlaybackState,
    PlayStateChanged,
    Readout,
    TimeChanged,
    TransportEvent,
)
from audiotrack.core.ports.frame_scheduler import FrameSchedulerPort
from audiotrack.core.ports.readout import ReadoutSinkPort
from audiotrack.core.ports.renderer import TrackRendererPort
from audiotrack.core.ports.transport import AudioTransportPort
from audiotrack.core.track_interpolator import TrackGeometry, first_position, position_at
from audiotrack.domain.track_types import GeoSample, LatLng

logger = logging.getLogger(__name__)


class PlaybackSyncController:
    """
    Synchronise la position affichée sur la carte avec l'horloge audio.

    Machine à états Idle/Playing/Seeking: tant qu'un geste de seek est actif,
    les ticks du transport sont ignorés pour ne pas contrarier l'utilisateur.
    Les ticks rapprochés (< coalesce_seconds) sont regroupés en un seul
    recalcul par frame d'animation.

    Tous les collaborateurs sont optionnels; leur absence rend l'effet de
    bord correspondant muet.
    """

    def __init__(
        self,
        samples: Sequence[GeoSample] = (),
        transport: Optional[AudioTransportPort] = None,
        renderer: Optional[TrackRendererPort] = None,
        readout_sink: Optional[ReadoutSinkPort] = None,
        frame_scheduler: Optional[FrameSchedulerPort] = None,
        coalesce_seconds: float = 0.1,
    ) -> None:
        self._samples: Sequence[GeoSample] = samples
        self._geometry = TrackGeometry(samples)
        self._state = PlaybackState()
        self._position: LatLng = first_position(samples)

        self._renderer = renderer
        self._readout_sink = readout_sink
        self._frame_scheduler = frame_scheduler
        self._coalesce_seconds = coalesce_seconds

        # Tick en attente de la prochaine frame
        self._pending_time: Optional[float] = None
        self._frame_requested = False

        self._transport: Optional[AudioTransportPort] = None
        if transport is not None:
            self.attach_transport(transport)

    # ------------------------------------------------------------------
    # Accès en lecture
    # ------------------------------------------------------------------
    @property
    def state(self) -> PlaybackState:
        return replace(self._state)

    @property
    def mode(self) -> PlaybackMode:
        return self._state.mode

    @property
    def position(self) -> LatLng:
        return self._position

    @property
    def samples(self) -> Sequence[GeoSample]:
        return self._samples

    @property
    def geometry(self) -> TrackGeometry:
        return self._geometry

    @property
    def readout(self) -> Readout:
        query_time = self._state.query_time
        return Readout(
            total_distance_km=self._geometry.total_distance_km,
            distance_covered_km=self._geometry.distance_covered_km(query_time),
            current_time=query_time,
            duration=self._state.duration,
        )

    # ------------------------------------------------------------------
    # Collaborateurs
    # ------------------------------------------------------------------
    def attach_transport(self, transport: Optional[AudioTransportPort]) -> None:
        """Abonne le contrôleur à un transport (remplace le précédent)."""
        if self._transport is not None:
            self._transport.unsubscribe(self.handle_event)
        self._transport = transport
        if transport is None:
            return
        transport.subscribe(self.handle_event)
        self._state.duration = max(0.0, transport.duration or 0.0)

    def set_samples(self, samples: Sequence[GeoSample]) -> None:
        """Remplace la trace; la géométrie n'est recalculée que si la séquence change."""
        self._samples = samples
        if self._geometry.bind(samples):
            logger.debug("Géométrie recalculée: %d points, %.3f km",
                         self._geometry.sample_count, self._geometry.total_distance_km)
        if self._renderer is not None:
            self._renderer.show_track(samples)
        self._publish()

    # ------------------------------------------------------------------
    # Événements du transport
    # ------------------------------------------------------------------
    def handle_event(self, event: TransportEvent) -> None:
        """Fonction de transition unique pour les événements du transport."""
        if isinstance(event, TimeChanged):
            self._on_tick(event.time)
        elif isinstance(event, PlayStateChanged):
            self._state.is_playing = event.playing
        elif isinstance(event, DurationChanged):
            self._state.duration = max(0.0, event.duration)
            self._publish_readout()
        elif isinstance(event, Ended):
            self._state.is_playing = False
            self._pending_time = None
            # Pendant un geste, seul l'utilisateur déplace query_time
            if not self._state.is_seeking:
                self._apply_time(0.0)

    def _on_tick(self, time: float) -> None:
        if self._state.is_seeking:
            return

        if self._frame_scheduler is None or abs(time - self._state.query_time) >= self._coalesce_seconds:
            self._pending_time = None
            self._apply_time(time)
            return

        self._pending_time = time
        if not self._frame_requested:
            self._frame_requested = True
            self._frame_scheduler.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._frame_requested = False
        pending, self._pending_time = self._pending_time, None
        if pending is None or self._state.is_seeking:
            return
        self._apply_time(pending)

    # ------------------------------------------------------------------
    # Commandes utilisateur
    # ------------------------------------------------------------------
    def begin_seek(self) -> None:
        """Début du geste de scrub (pointer-down sur le slider)."""
        self._state.is_seeking = True
        self._pending_time = None

    def seek_move(self, value: float) -> None:
        """
        Déplace la position immédiatement, sans attendre un tick.

        Hors geste (clavier, clic sur la glissière), le transport suit tout de suite;
        pendant un geste, il ne suit qu'au relâchement.
        """
        value = self._clamp_time(value)
        self._pending_time = None
        self._apply_time(value)
        if not self._state.is_seeking and self._transport is not None:
            self._transport.seek_to(value)

    def end_seek(self) -> None:
        """Fin du geste: le transport reprend depuis la position choisie."""
        if not self._state.is_seeking:
            return
        self._state.is_seeking = False
        if self._transport is not None:
            self._transport.seek_to(self._state.query_time)

    def load_source(self) -> None:
        """Nouvelle source audio: retour au début de la trace."""
        self._state.query_time = 0.0
        self._state.is_playing = False
        self._state.is_seeking = False
        self._pending_time = None
        if self._transport is not None:
            self._state.duration = max(0.0, self._transport.duration or 0.0)
        self._position = first_position(self._samples)
        self._emit(self._position)

    def toggle_play(self) -> None:
        if self._transport is None:
            return
        if self._state.is_playing:
            self._transport.pause()
        else:
            self._transport.play()

    # ------------------------------------------------------------------
    # Publication
    # ------------------------------------------------------------------
    def _clamp_time(self, value: float) -> float:
        value = max(0.0, value)
        if self._state.duration > 0:
            value = min(value, self._state.duration)
        return value

    def _apply_time(self, time: float) -> None:
        self._state.query_time = time
        self._publish()

    def _publish(self) -> None:
        self._position = position_at(self._samples, self._state.query_time)
        self._emit(self._position)

    def _emit(self, position: LatLng) -> None:
        if self._renderer is not None:
            self._renderer.update_position(position)
        self._publish_readout()

    def _publish_readout(self) -> None:
        if self._readout_sink is not None:
            self._readout_sink.update_readout(self.readout)
