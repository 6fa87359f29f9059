#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Lecture des fichiers WAV PCM pour le visualiseur de forme d'onde.
Parse les chunks RIFF et décode les échantillons 8/16 bits.
"""

from __future__ import annotations

import array
import logging
import struct
import sys
from dataclasses import dataclass
from typing import Tuple

logger = logging.getLogger(__name__)

PCM_FORMAT: int = 1


class WavFormatError(ValueError):
    """Fichier WAV illisible ou non supporté."""


@dataclass(frozen=True)
class WavHeader:
    sample_rate: int
    bits_per_sample: int
    num_channels: int
    data_offset: int
    data_length: int

    @property
    def duration_seconds(self) -> float:
        bytes_per_frame = self.num_channels * self.bits_per_sample // 8
        if not self.sample_rate or not bytes_per_frame:
            return 0.0
        return self.data_length / bytes_per_frame / self.sample_rate


def parse_wav_header(data: bytes) -> WavHeader:
    """
    Parse l'en-tête RIFF/WAVE et localise les chunks fmt et data.

    Args:
        data: Contenu complet du fichier

    Returns:
        WavHeader

    Raises:
        WavFormatError: si le fichier n'est pas un WAV PCM valide
    """
    if len(data) < 12 or data[0:4] != b"RIFF":
        raise WavFormatError("Not a RIFF file")
    if data[8:12] != b"WAVE":
        raise WavFormatError("Not a WAVE file")

    offset = 12
    fmt_offset = -1
    data_offset = -1
    data_size = 0

    while offset + 8 <= len(data):
        chunk_id, size = struct.unpack_from("<4sI", data, offset)
        if chunk_id == b"fmt ":
            fmt_offset = offset + 8
        elif chunk_id == b"data":
            data_offset = offset + 8
            data_size = size
            break
        # Les chunks sont alignés sur 2 octets
        offset += 8 + size + (size & 1)

    if fmt_offset < 0 or data_offset < 0:
        raise WavFormatError("Invalid WAV: fmt or data chunk not found")
    if fmt_offset + 16 > len(data):
        raise WavFormatError("Invalid WAV: truncated fmt chunk")

    audio_format, num_channels, sample_rate = struct.unpack_from("<HHI", data, fmt_offset)
    (bits_per_sample,) = struct.unpack_from("<H", data, fmt_offset + 14)

    if audio_format != PCM_FORMAT:
        raise WavFormatError("Only PCM WAV (audioFormat=1) is supported")

    available = max(0, len(data) - data_offset)
    if data_size > available:
        logger.warning("Chunk data tronqué: %d octets annoncés, %d disponibles", data_size, available)
        data_size = available

    return WavHeader(
        sample_rate=sample_rate,
        bits_per_sample=bits_per_sample,
        num_channels=num_channels,
        data_offset=data_offset,
        data_length=data_size,
    )


def read_pcm_samples(data: bytes, header: WavHeader) -> array.array:
    """
    Décode les échantillons PCM en flottants [-1, 1].

    Les canaux restent entrelacés.

    Raises:
        WavFormatError: profondeur autre que 8 ou 16 bits
    """
    start = header.data_offset
    out = array.array("f")

    if header.bits_per_sample == 16:
        end = start + header.data_length - (header.data_length % 2)
        raw = array.array("h")
        raw.frombytes(data[start:end])
        if sys.byteorder == "big":
            raw.byteswap()
        out.extend(v / 32768 for v in raw)
        return out

    if header.bits_per_sample == 8:
        raw = data[start:start + header.data_length]
        out.extend((v - 128) / 128 for v in raw)
        return out

    raise WavFormatError("Only 8-bit or 16-bit PCM supported")


def load_wav(path: str) -> Tuple[WavHeader, array.array]:
    """Lit un fichier WAV et retourne son en-tête et ses échantillons."""
    with open(path, "rb") as f:
        data = f.read()
    header = parse_wav_header(data)
    samples = read_pcm_samples(data, header)
    logger.info(
        "WAV chargé: %s (%d Hz, %d bits, %d canaux, %d échantillons)",
        path, header.sample_rate, header.bits_per_sample, header.num_channels, len(samples),
    )
    return header, samples
