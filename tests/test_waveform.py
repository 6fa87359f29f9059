"""Tests for the peak envelope used by the WAV viewer."""

from __future__ import annotations

import pytest

from audiotrack.core.waveform import ENVELOPE_HEIGHT_RATIO, compute_peak_envelope, envelope_outline


def test_envelope_takes_absolute_peak_per_column():
    samples = [0.1, -0.4, 0.2, 0.2, -0.1, 0.05, 0.8, -0.8]

    envelope = compute_peak_envelope(samples, 4)

    assert envelope == pytest.approx([0.5, 0.25, 0.125, 1.0])


def test_envelope_is_normalised_to_global_peak():
    envelope = compute_peak_envelope([0.25, -0.5, 0.125, 0.5], 2)

    assert max(envelope) == pytest.approx(1.0)


def test_silence_does_not_divide_by_zero():
    assert compute_peak_envelope([0.0] * 10, 5) == [0.0] * 5


def test_more_columns_than_samples_pads_with_zeros():
    envelope = compute_peak_envelope([0.5, -1.0], 4)

    assert envelope == pytest.approx([0.5, 1.0, 0.0, 0.0])


def test_zero_width_gives_empty_envelope():
    assert compute_peak_envelope([0.3, 0.4], 0) == []


def test_outline_is_symmetric_around_middle():
    upper, lower = envelope_outline([0.0, 1.0, 0.5], 200)

    scale = 200 * ENVELOPE_HEIGHT_RATIO
    assert upper == pytest.approx([100.0, 100.0 - scale, 100.0 - scale / 2])
    assert lower == pytest.approx([100.0, 100.0 + scale, 100.0 + scale / 2])
