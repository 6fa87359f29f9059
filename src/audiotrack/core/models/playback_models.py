from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class PlaybackMode(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    SEEKING = "seeking"


@dataclass
class PlaybackState:
    """État de lecture possédé par le contrôleur de synchronisation."""

    query_time: float = 0.0
    is_seeking: bool = False
    is_playing: bool = False
    duration: float = 0.0

    @property
    def mode(self) -> PlaybackMode:
        # Le seek prime sur la lecture pour bloquer les ticks du transport
        if self.is_seeking:
            return PlaybackMode.SEEKING
        if self.is_playing:
            return PlaybackMode.PLAYING
        return PlaybackMode.IDLE


@dataclass(frozen=True)
class Readout:
    total_distance_km: float
    distance_covered_km: float
    current_time: float
    duration: float


@dataclass(frozen=True)
class TimeChanged:
    time: float


@dataclass(frozen=True)
class Ended:
    pass


@dataclass(frozen=True)
class PlayStateChanged:
    playing: bool


@dataclass(frozen=True)
class DurationChanged:
    duration: float


TransportEvent = Union[TimeChanged, Ended, PlayStateChanged, DurationChanged]
