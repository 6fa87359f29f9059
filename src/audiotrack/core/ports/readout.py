from __future__ import annotations

from typing import Protocol

from audiotrack.core.models.playback_models import Readout


class ReadoutSinkPort(Protocol):
    def update_readout(self, readout: Readout) -> None: ...
