from __future__ import annotations


class TrackLoadError(ValueError):
    """Fichier de trace illisible ou invalide."""
