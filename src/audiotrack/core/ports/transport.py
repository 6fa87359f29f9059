from __future__ import annotations

from typing import Callable, Protocol

from audiotrack.core.models.playback_models import TransportEvent


TransportListener = Callable[[TransportEvent], None]


class AudioTransportPort(Protocol):
    """Lecteur audio externe: horloge de lecture + commandes."""

    @property
    def current_time(self) -> float: ...

    @property
    def duration(self) -> float: ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek_to(self, seconds: float) -> None: ...

    def subscribe(self, listener: TransportListener) -> None: ...

    def unsubscribe(self, listener: TransportListener) -> None: ...
