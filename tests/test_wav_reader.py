"""Tests for RIFF/WAVE parsing and PCM decoding."""

from __future__ import annotations

import struct

import pytest

from audiotrack.infra.audio.wav_reader import (
    WavFormatError,
    load_wav,
    parse_wav_header,
    read_pcm_samples,
)


def _wav_bytes(payload, *, sample_rate=8000, bits=16, channels=1, audio_format=1, extra_chunk=b""):
    block_align = channels * bits // 8
    fmt = struct.pack(
        "<HHIIHH", audio_format, channels, sample_rate, sample_rate * block_align, block_align, bits
    )
    body = b"WAVE"
    body += b"fmt " + struct.pack("<I", len(fmt)) + fmt
    body += extra_chunk
    body += b"data" + struct.pack("<I", len(payload)) + payload
    return b"RIFF" + struct.pack("<I", len(body)) + body


def test_header_of_16_bit_mono_file():
    data = _wav_bytes(struct.pack("<4h", 0, 1000, -1000, 0), sample_rate=44100)

    header = parse_wav_header(data)

    assert header.sample_rate == 44100
    assert header.bits_per_sample == 16
    assert header.num_channels == 1
    assert header.data_length == 8
    assert data[header.data_offset - 8:header.data_offset - 4] == b"data"


def test_unknown_chunks_are_skipped_with_padding():
    # Chunk impair: un octet de bourrage suit
    extra = b"LIST" + struct.pack("<I", 3) + b"abc" + b"\x00"
    data = _wav_bytes(struct.pack("<h", 123), extra_chunk=extra)

    header = parse_wav_header(data)

    assert header.data_length == 2


def test_16_bit_samples_are_scaled_to_unit_range():
    data = _wav_bytes(struct.pack("<4h", 0, 16384, -32768, 32767))
    header = parse_wav_header(data)

    samples = read_pcm_samples(data, header)

    assert list(samples) == pytest.approx([0.0, 0.5, -1.0, 32767 / 32768])


def test_8_bit_samples_are_centred():
    data = _wav_bytes(bytes([128, 255, 0, 192]), bits=8)
    header = parse_wav_header(data)

    samples = read_pcm_samples(data, header)

    assert list(samples) == pytest.approx([0.0, 127 / 128, -1.0, 0.5])


def test_stereo_samples_stay_interleaved():
    data = _wav_bytes(struct.pack("<4h", 16384, -16384, 8192, -8192), channels=2)
    header = parse_wav_header(data)

    samples = read_pcm_samples(data, header)

    assert header.num_channels == 2
    assert list(samples) == pytest.approx([0.5, -0.5, 0.25, -0.25])
    assert header.duration_seconds == pytest.approx(2 / 8000)


@pytest.mark.parametrize(
    "data, message",
    [
        (b"RIFX" + b"\x00" * 40, "Not a RIFF file"),
        (b"RIFF\x00\x00\x00\x00AVI " + b"\x00" * 32, "Not a WAVE file"),
        (b"RIFF\x04\x00\x00\x00WAVE", "fmt or data chunk not found"),
    ],
)
def test_invalid_containers_are_rejected(data, message):
    with pytest.raises(WavFormatError, match=message):
        parse_wav_header(data)


def test_non_pcm_format_is_rejected():
    data = _wav_bytes(b"\x00\x00\x00\x00", bits=32, audio_format=3)

    with pytest.raises(WavFormatError, match="Only PCM WAV"):
        parse_wav_header(data)


def test_unsupported_bit_depth_is_rejected():
    data = _wav_bytes(b"\x00" * 6, bits=24)
    header = parse_wav_header(data)

    with pytest.raises(WavFormatError, match="8-bit or 16-bit"):
        read_pcm_samples(data, header)


def test_truncated_data_chunk_is_clamped():
    data = _wav_bytes(struct.pack("<4h", 1, 2, 3, 4))[:-4]

    header = parse_wav_header(data)

    assert header.data_length == 4
    assert len(read_pcm_samples(data, header)) == 2


def test_load_wav_reads_file(tmp_path):
    path = tmp_path / "tone.wav"
    path.write_bytes(_wav_bytes(struct.pack("<2h", 32767, -32768)))

    header, samples = load_wav(str(path))

    assert header.sample_rate == 8000
    assert len(samples) == 2
