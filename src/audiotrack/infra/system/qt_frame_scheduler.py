from __future__ import annotations

from typing import Callable

from PyQt6.QtCore import QTimer

from audiotrack.core.ports.frame_scheduler import FrameSchedulerPort


class QtFrameScheduler(FrameSchedulerPort):
    """Planifie un callback à la prochaine frame (~60 fps) dans la boucle Qt."""

    def __init__(self, interval_ms: int = 16) -> None:
        self.interval_ms = interval_ms

    def request_frame(self, callback: Callable[[], None]) -> None:
        QTimer.singleShot(self.interval_ms, callback)
