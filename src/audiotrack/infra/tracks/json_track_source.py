#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Lecture des traces au format JSON: tableau d'enregistrements {time, lat, lng}.
"""

from __future__ import annotations

import json
import logging
import numbers
from typing import Any, List

from audiotrack.core.ports.track_source import TrackSourcePort
from audiotrack.domain.track_types import GeoSample
from audiotrack.infra.tracks.errors import TrackLoadError

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("time", "lat", "lng")


class JsonTrackSource(TrackSourcePort):
    def load(self, path: str) -> List[GeoSample]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise TrackLoadError(f"JSON illisible dans {path}: {e}") from e

        samples = self.parse_records(payload)
        logger.info("Trace JSON lue: %s (%d points)", path, len(samples))
        return samples

    @staticmethod
    def parse_records(payload: Any) -> List[GeoSample]:
        """Convertit la liste décodée en GeoSample, en validant chaque enregistrement."""
        if not isinstance(payload, list):
            raise TrackLoadError("Le fichier doit contenir un tableau de points")

        samples: List[GeoSample] = []
        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                raise TrackLoadError(f"Point {index}: objet attendu")
            values = []
            for name in REQUIRED_FIELDS:
                value = record.get(name)
                # bool est un sous-type d'int: on l'écarte explicitement
                if isinstance(value, bool) or not isinstance(value, numbers.Real):
                    raise TrackLoadError(f"Point {index}: champ '{name}' manquant ou non numérique")
                values.append(float(value))
            samples.append(GeoSample(*values))
        return samples
