from __future__ import annotations

from typing import Callable, Protocol


class FrameSchedulerPort(Protocol):
    """Appelle le callback une seule fois à la prochaine frame d'animation."""

    def request_frame(self, callback: Callable[[], None]) -> None: ...
