#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Interpolation temporelle d'une trace GPS et calcul des distances.

Fonctions pures sur une séquence de GeoSample triée par temps croissant.
Aucune de ces fonctions ne lève d'exception pour des entrées finies: une
trace non triée donne un résultat géométriquement absurde mais exploitable.
"""

from __future__ import annotations

import math
from bisect import bisect_right
from itertools import accumulate
from operator import attrgetter
from typing import List, Optional, Sequence

from audiotrack.domain.track_types import DEFAULT_POSITION, GeoSample, LatLng


EARTH_RADIUS_KM: float = 6371.0

_sample_time = attrgetter("time")


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance orthodromique en km entre deux points (formule haversine)."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Les arrondis peuvent sortir a de [0, 1] aux antipodes
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def segment_km(a: GeoSample, b: GeoSample) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def ease_in_out_quad(progress: float) -> float:
    """
    Remappe une progression [0, 1] avec une accélération/décélération quadratique.

    Le marqueur accélère en quittant un point et ralentit en arrivant au suivant.
    """
    if progress < 0.5:
        return 2 * progress * progress
    return 1 - ((-2 * progress + 2) ** 2) / 2


def first_position(samples: Sequence[GeoSample]) -> LatLng:
    """Premier point de la trace, ou la position par défaut si elle est vide."""
    if not samples:
        return DEFAULT_POSITION
    return samples[0].position


def is_time_ordered(samples: Sequence[GeoSample]) -> bool:
    """True si les temps sont croissants (égalités autorisées)."""
    return all(a.time <= b.time for a, b in zip(samples, samples[1:]))


def _last_index_at_or_before(samples: Sequence[GeoSample], t: float) -> int:
    """Plus grand index i tel que samples[i].time <= t (0 si aucun)."""
    return max(bisect_right(samples, t, key=_sample_time) - 1, 0)


def position_at(samples: Sequence[GeoSample], t: float) -> LatLng:
    """
    Retourne la position interpolée à l'instant t.

    Args:
        samples: Points GPS triés par temps
        t: Temps de requête en secondes

    Returns:
        Position (lat, lng); le premier/dernier point hors limites,
        DEFAULT_POSITION si la trace est vide
    """
    if not samples:
        return DEFAULT_POSITION

    first, last = samples[0], samples[-1]
    if t <= first.time:
        return first.position
    if t >= last.time:
        return last.position

    idx = _last_index_at_or_before(samples, t)
    current = samples[idx]
    nxt = samples[idx + 1]

    span = nxt.time - current.time
    if span <= 0:
        # Inatteignable avec une trace triée
        return current.position

    eased = ease_in_out_quad((t - current.time) / span)
    return LatLng(
        current.lat + (nxt.lat - current.lat) * eased,
        current.lng + (nxt.lng - current.lng) * eased,
    )


def total_distance_km(samples: Sequence[GeoSample]) -> float:
    """Longueur totale de la trace en km (0 pour 0 ou 1 point)."""
    return sum(segment_km(a, b) for a, b in zip(samples, samples[1:]))


def distance_covered_km(samples: Sequence[GeoSample], t: float) -> float:
    """
    Distance parcourue en km à l'instant t.

    La fraction du segment en cours est linéaire en temps (pas d'easing):
    l'easing de la position reste purement visuel.
    """
    if not samples or t <= 0:
        return 0.0

    idx = _last_index_at_or_before(samples, t)
    distance = sum(segment_km(samples[i - 1], samples[i]) for i in range(1, idx + 1))

    if idx < len(samples) - 1:
        current = samples[idx]
        nxt = samples[idx + 1]
        span = nxt.time - current.time
        if current.time <= t <= nxt.time and span > 0:
            distance += segment_km(current, nxt) * ((t - current.time) / span)

    return distance


class TrackGeometry:
    """
    Géométrie dérivée d'une trace, mémorisée par identité de séquence.

    Les distances cumulées sont recalculées uniquement quand une autre
    séquence est liée: les appels à chaque frame restent en O(log n).
    """

    def __init__(self, samples: Optional[Sequence[GeoSample]] = None) -> None:
        self._samples: Sequence[GeoSample] = ()
        self._cumulative_km: List[float] = [0.0]
        self.bind(samples if samples is not None else ())

    def bind(self, samples: Sequence[GeoSample]) -> bool:
        """
        Lie une séquence de points.

        Returns:
            True si la géométrie a été recalculée
        """
        if samples is self._samples:
            return False
        self._samples = samples
        self._cumulative_km = list(
            accumulate((segment_km(a, b) for a, b in zip(samples, samples[1:])), initial=0.0)
        )
        return True

    @property
    def samples(self) -> Sequence[GeoSample]:
        return self._samples

    @property
    def sample_count(self) -> int:
        return len(self._samples)

    @property
    def total_distance_km(self) -> float:
        return self._cumulative_km[-1]

    def distance_covered_km(self, t: float) -> float:
        """Même sémantique que distance_covered_km(), via les sommes cumulées."""
        samples = self._samples
        if not samples or t <= 0:
            return 0.0

        idx = _last_index_at_or_before(samples, t)
        distance = self._cumulative_km[idx]

        if idx < len(samples) - 1:
            current = samples[idx]
            nxt = samples[idx + 1]
            span = nxt.time - current.time
            if current.time <= t <= nxt.time and span > 0:
                segment = self._cumulative_km[idx + 1] - self._cumulative_km[idx]
                distance += segment * ((t - current.time) / span)

        return distance
