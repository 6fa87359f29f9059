#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Calcul de l'enveloppe d'une forme d'onde PCM.
Indépendant du lecteur de trace: sert uniquement au visualiseur WAV.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

# Fraction de la demi-hauteur occupée par une amplitude de 1.0
ENVELOPE_HEIGHT_RATIO: float = 0.45


def compute_peak_envelope(samples: Sequence[float], width: int) -> List[float]:
    """
    Réduit les échantillons à une amplitude crête par colonne de pixels.

    Args:
        samples: Échantillons normalisés [-1, 1]
        width: Nombre de colonnes

    Returns:
        `width` amplitudes normalisées dans [0, 1]
    """
    if width <= 0:
        return []

    count = len(samples)
    step = max(1, count // width)
    amplitudes: List[float] = []
    global_max = 0.0

    for column in range(width):
        start = column * step
        stop = min(start + step, count)
        peak = 0.0
        for i in range(start, stop):
            value = abs(samples[i])
            if value > peak:
                peak = value
        amplitudes.append(peak)
        if peak > global_max:
            global_max = peak

    norm = global_max if global_max > 0 else 1.0
    return [a / norm for a in amplitudes]


def envelope_outline(amplitudes: Sequence[float], height: float) -> Tuple[List[float], List[float]]:
    """
    Coordonnées y du contour supérieur et inférieur de l'enveloppe.

    Returns:
        (upper, lower), une valeur par colonne
    """
    middle = height / 2
    scale = height * ENVELOPE_HEIGHT_RATIO
    upper = [middle - a * scale for a in amplitudes]
    lower = [middle + a * scale for a in amplitudes]
    return upper, lower
