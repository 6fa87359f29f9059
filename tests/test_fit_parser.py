"""Tests for Garmin .fit record conversion."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

pytest.importorskip("fitparse")

from audiotrack.infra.garmin.fit_parser import SEMICIRCLES_TO_DEGREES, FitParser  # noqa: E402
from audiotrack.infra.tracks.errors import TrackLoadError  # noqa: E402


START = datetime(2024, 5, 1, 8, 0, 0)


def _field(name, value):
    return SimpleNamespace(name=name, value=value)


def _record(seconds, lat_deg=None, lng_deg=None):
    fields = [_field("timestamp", START + timedelta(seconds=seconds))]
    if lat_deg is not None:
        fields.append(_field("position_lat", int(round(lat_deg / SEMICIRCLES_TO_DEGREES))))
    if lng_deg is not None:
        fields.append(_field("position_long", int(round(lng_deg / SEMICIRCLES_TO_DEGREES))))
    fields.append(_field("heart_rate", None))
    return fields


def test_records_become_relative_samples():
    parser = FitParser()

    samples = parser.samples_from_records([
        _record(0, 45.0, 6.0),
        _record(4, 45.001, 6.002),
        _record(9, 45.002, 6.004),
    ])

    assert [s.time for s in samples] == [0.0, 4.0, 9.0]
    assert samples[1].lat == pytest.approx(45.001, abs=1e-6)
    assert samples[2].lng == pytest.approx(6.004, abs=1e-6)
    assert parser.start_time == START.replace(tzinfo=timezone.utc)


def test_records_without_position_are_skipped():
    parser = FitParser()

    samples = parser.samples_from_records([
        _record(0),
        _record(2, 45.0, 6.0),
        _record(3, 45.0),
        _record(5, 45.1, 6.1),
    ])

    assert [s.time for s in samples] == [0.0, 3.0]


def test_no_fix_returns_empty_track():
    parser = FitParser()

    assert parser.samples_from_records([_record(0), _record(1)]) == []
    assert parser.start_time is None


def test_unreadable_file_raises_track_load_error(tmp_path):
    path = tmp_path / "broken.fit"
    path.write_bytes(b"not a fit file at all")

    with pytest.raises(TrackLoadError):
        FitParser().load(str(path))
