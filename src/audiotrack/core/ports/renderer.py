from __future__ import annotations

from typing import Protocol, Sequence

from audiotrack.domain.track_types import GeoSample, LatLng


class TrackRendererPort(Protocol):
    """Carte: reçoit la trace et la position du marqueur, ne renvoie rien."""

    def show_track(self, samples: Sequence[GeoSample]) -> None: ...

    def update_position(self, position: LatLng) -> None: ...
