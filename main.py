#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
AudioTrack - Relecture d'une trace GPS synchronisée sur l'audio
Point d'entrée principal de l'application.

Application PyQt6 qui déplace un marqueur le long d'une trace GPS
(.json ou Garmin .fit) au rythme de la lecture d'un fichier audio.
"""

import sys
import os


def _ensure_src_on_path() -> None:
    """Permet d'exécuter `python main.py` sans installer le package."""
    if getattr(sys, "frozen", False):
        return

    repo_root = os.path.dirname(os.path.abspath(__file__))
    src_path = os.path.join(repo_root, "src")
    if src_path not in sys.path:
        sys.path.insert(0, src_path)


def main() -> int:
    """
    Point d'entrée principal de l'application.

    Returns:
        Code de retour de l'application
    """
    _ensure_src_on_path()
    from audiotrack.app.bootstrap import run

    return run(sys.argv)


if __name__ == "__main__":
    sys.exit(main())
