from __future__ import annotations

import os
import sys
from typing import List


def is_frozen() -> bool:
    """True si l'application tourne en mode PyInstaller."""
    return getattr(sys, "frozen", False)


def get_base_path() -> str:
    """Chemin de base (PyInstaller: _MEIPASS, sinon dossier projet)."""
    if is_frozen():
        return sys._MEIPASS  # type: ignore[attr-defined]
    # En dev: racine du repo (..
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))


def resource_path(relative_path: str) -> str:
    """Chemin absolu vers une ressource (dev/frozen)."""
    return os.path.join(get_base_path(), relative_path)


TRACK_EXTENSIONS: List[str] = [".json", ".fit"]
AUDIO_EXTENSIONS: List[str] = [".wav", ".mp3"]
WAVEFORM_EXTENSIONS: List[str] = [".wav"]

# Lecture
FRAME_INTERVAL_MS: int = 16
TICK_COALESCE_SECONDS: float = 0.1
SLIDER_STEPS_PER_SECOND: int = 10

# Carte
MAP_FOLLOW_ZOOM: int = 17
MAP_TRACK_ZOOM: int = 16

LOG_FILENAME: str = "audiotrack.log"

APP_NAME: str = "AudioTrack"
APP_VERSION: str = "1.0.0"

# Trace d'exemple chargée au démarrage si aucune trace n'est fournie
SAMPLE_TRACK_PATH: str = os.path.join("data", "sample-locations.json")
