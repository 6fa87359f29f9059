#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Loader universel qui délègue au parser approprié selon l'extension du fichier.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Sequence

from audiotrack.core.ports.track_source import TrackSourcePort
from audiotrack.core.track_interpolator import is_time_ordered
from audiotrack.domain.track_types import GeoSample
from audiotrack.infra.garmin.fit_parser import FitParser
from audiotrack.infra.tracks.errors import TrackLoadError
from audiotrack.infra.tracks.json_track_source import JsonTrackSource

logger = logging.getLogger(__name__)


def prepare_samples(samples: Sequence[GeoSample], offset_seconds: float = 0.0) -> List[GeoSample]:
    """
    Décale, filtre et ordonne les points avant de les confier au moteur.

    - décalage temporel appliqué à tous les points;
    - points invalides ou de temps négatif écartés;
    - tri stable par temps si la séquence n'est pas monotone (avec avertissement).
      Les horodatages dupliqués sont conservés.
    """
    shifted = [
        GeoSample(time=s.time + offset_seconds, lat=s.lat, lng=s.lng)
        for s in samples
    ] if offset_seconds else list(samples)

    kept = [s for s in shifted if s.is_valid() and s.time >= 0]
    dropped = len(shifted) - len(kept)
    if dropped:
        logger.warning("%d point(s) invalide(s) ou avant le début de l'audio ignoré(s)", dropped)

    if not is_time_ordered(kept):
        logger.warning("Trace non triée par temps: tri appliqué")
        kept.sort(key=lambda s: s.time)

    return kept


class TrackFileLoader:
    """
    Loader composite qui choisit la source selon l'extension.
    """

    def __init__(self) -> None:
        self._sources: Dict[str, TrackSourcePort] = {
            ".json": JsonTrackSource(),
            ".fit": FitParser(),
        }

    @property
    def extensions(self) -> List[str]:
        return sorted(self._sources)

    def register(self, extension: str, source: TrackSourcePort) -> None:
        self._sources[extension.lower()] = source

    def load_raw(self, path: str) -> List[GeoSample]:
        """
        Lit un fichier de trace sans décalage ni tri.

        Raises:
            TrackLoadError: fichier absent, extension inconnue ou contenu invalide
        """
        if not os.path.isfile(path):
            raise TrackLoadError(f"Le fichier n'existe pas: {path}")

        _, ext = os.path.splitext(path)
        source = self._sources.get(ext.lower())
        if source is None:
            raise TrackLoadError(f"Format de trace non supporté: {ext or os.path.basename(path)}")

        return source.load(path)

    def load(self, path: str, offset_seconds: float = 0.0) -> List[GeoSample]:
        """Charge un fichier de trace prêt pour le moteur (décalé, filtré, trié)."""
        samples = prepare_samples(self.load_raw(path), offset_seconds)
        logger.info("Trace chargée: %s (%d points, décalage %.1fs)",
                    os.path.basename(path), len(samples), offset_seconds)
        return samples
