#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Types de données GPS pour AudioTrack.
Définit les types partagés par le moteur de lecture, les loaders et l'UI.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple


class LatLng(NamedTuple):
    """Position géographique (degrés décimaux)."""
    lat: float
    lng: float


# Position renvoyée quand la trace est vide (Moscou, valeur historique de l'app)
DEFAULT_POSITION = LatLng(55.7558, 37.6176)


@dataclass(frozen=True)
class GeoSample:
    """
    Représente un point GPS enregistré.

    Attributes:
        time: Secondes depuis le début de l'enregistrement (>= 0)
        lat: Latitude en degrés décimaux
        lng: Longitude en degrés décimaux
    """
    time: float
    lat: float
    lng: float

    @property
    def position(self) -> LatLng:
        return LatLng(self.lat, self.lng)

    def is_valid(self) -> bool:
        """Vérifie si le point a des coordonnées exploitables."""
        if not all(math.isfinite(v) for v in (self.time, self.lat, self.lng)):
            return False
        return (
            -90 <= self.lat <= 90
        ) and (
            -180 <= self.lng <= 180
        )
