#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Parser de fichiers Garmin .fit pour AudioTrack.
Extrait les points GPS et les convertit en temps relatif au début de la trace.
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from fitparse import FitFile, FitParseError

from audiotrack.core.ports.track_source import TrackSourcePort
from audiotrack.domain.track_types import GeoSample
from audiotrack.infra.tracks.errors import TrackLoadError

logger = logging.getLogger(__name__)

# Constante de conversion semicircles -> degrés
SEMICIRCLES_TO_DEGREES: float = 180.0 / (2 ** 31)


class FitParser(TrackSourcePort):
    """
    Parser pour les fichiers Garmin .fit.
    Utilise la bibliothèque fitparse pour extraire les données GPS.
    """

    def __init__(self) -> None:
        self.start_time: Optional[datetime] = None

    def load(self, path: str) -> List[GeoSample]:
        """
        Parse le fichier .fit et retourne les points GPS.

        Args:
            path: Chemin vers le fichier .fit

        Returns:
            Points dont le temps est exprimé en secondes depuis le premier point
        """
        try:
            fit_file = FitFile(path)
            records = list(fit_file.get_messages("record"))
        except (OSError, FitParseError) as e:
            raise TrackLoadError(f"Fichier .fit illisible ({os.path.basename(path)}): {e}") from e

        samples = self.samples_from_records(records)
        if not samples:
            logger.warning("Aucun point GPS trouvé dans %s", path)
        else:
            logger.info("Fichier .fit parsé: %d points GPS (début %s)", len(samples), self.start_time)
        return samples

    def samples_from_records(self, records: Iterable) -> List[GeoSample]:
        """Convertit des enregistrements fitparse "record" en GeoSample."""
        fixes: List[Tuple[datetime, float, float]] = []
        for record in records:
            fix = self._extract_fix_from_record(record)
            if fix is not None:
                fixes.append(fix)

        if not fixes:
            self.start_time = None
            return []

        self.start_time = min(ts for ts, _, _ in fixes)
        samples = [
            GeoSample(
                time=(ts - self.start_time).total_seconds(),
                lat=lat,
                lng=lng,
            )
            for ts, lat, lng in fixes
        ]
        return [s for s in samples if s.is_valid()]

    def _extract_fix_from_record(self, record) -> Optional[Tuple[datetime, float, float]]:
        """
        Extrait (timestamp, lat, lng) depuis un enregistrement .fit.

        Returns:
            None si la position ou l'horodatage manque
        """
        lat_semicircles = None
        lon_semicircles = None
        timestamp = None

        for field in record:
            if field.value is None:
                continue
            if field.name == "position_lat":
                lat_semicircles = field.value
            elif field.name == "position_long":
                lon_semicircles = field.value
            elif field.name == "timestamp":
                # Les timestamps .fit sont en UTC
                timestamp = field.value
                if timestamp.tzinfo is None:
                    timestamp = timestamp.replace(tzinfo=timezone.utc)

        if lat_semicircles is None or lon_semicircles is None or timestamp is None:
            return None

        return (
            timestamp,
            lat_semicircles * SEMICIRCLES_TO_DEGREES,
            lon_semicircles * SEMICIRCLES_TO_DEGREES,
        )
