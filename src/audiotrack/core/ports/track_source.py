from __future__ import annotations

from typing import Protocol

from audiotrack.domain.track_types import GeoSample


class TrackSourcePort(Protocol):
    def load(self, path: str) -> list[GeoSample]: ...
