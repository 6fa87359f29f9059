"""Tests for the replay session façade used by the main window."""

from __future__ import annotations

import json

import pytest

from audiotrack.domain.track_types import GeoSample
from audiotrack.services.replay_session import ReplaySession


class FakeTransport:
    def __init__(self):
        self.duration = 0.0
        self.current_time = 0.0
        self.sources = []
        self.listeners = []

    def set_source(self, path):
        self.sources.append(path)
        self.duration = 60.0

    def play(self):
        pass

    def pause(self):
        pass

    def seek_to(self, seconds):
        self.current_time = seconds

    def subscribe(self, listener):
        self.listeners.append(listener)

    def unsubscribe(self, listener):
        self.listeners.remove(listener)


class FakeRenderer:
    def __init__(self):
        self.tracks = []
        self.positions = []

    def show_track(self, samples):
        self.tracks.append(samples)

    def update_position(self, position):
        self.positions.append(position)


@pytest.fixture
def track_file(tmp_path):
    path = tmp_path / "walk.json"
    path.write_text(json.dumps([
        {"time": 0, "lat": 0.0, "lng": 0.0},
        {"time": 10, "lat": 0.0, "lng": 1.0},
        {"time": 20, "lat": 0.0, "lng": 2.0},
    ]), encoding="utf-8")
    return str(path)


def test_load_track_file_installs_samples(track_file):
    renderer = FakeRenderer()
    session = ReplaySession(renderer=renderer)

    assert session.load_track_file(track_file) is True

    assert session.has_track()
    assert session.track_path == track_file
    assert renderer.tracks[-1] == session.samples
    assert session.controller.samples is session.samples


def test_load_track_file_reports_errors(tmp_path):
    session = ReplaySession()

    assert session.load_track_file(str(tmp_path / "missing.json")) is False
    assert "n'existe pas" in session.last_error
    assert not session.has_track()


def test_offset_shifts_track_without_rereading(track_file):
    session = ReplaySession()
    session.load_track_file(track_file, offset_seconds=5.0)

    assert [s.time for s in session.samples] == [5.0, 15.0, 25.0]

    session.set_offset(-10.0)

    assert session.samples == [GeoSample(0.0, 0.0, 1.0), GeoSample(10.0, 0.0, 2.0)]
    assert session.get_summary()["offset_seconds"] == -10.0


def test_load_audio_file_resets_controller(tmp_path, track_file):
    audio = tmp_path / "walk.wav"
    audio.write_bytes(b"RIFF")
    transport = FakeTransport()
    renderer = FakeRenderer()
    session = ReplaySession(transport=transport, renderer=renderer)
    session.load_track_file(track_file)
    session.controller.seek_move(12.0)

    assert session.load_audio_file(str(audio)) is True

    assert transport.sources == [str(audio)]
    assert session.controller.state.query_time == 0.0
    assert session.controller.state.duration == 60.0
    assert renderer.positions[-1] == (0.0, 0.0)


def test_load_audio_file_rejects_unknown_format(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("x", encoding="utf-8")
    session = ReplaySession(transport=FakeTransport())

    assert session.load_audio_file(str(path)) is False
    assert "non supporté" in session.last_error


def test_load_audio_without_transport_fails(tmp_path):
    audio = tmp_path / "walk.mp3"
    audio.write_bytes(b"ID3")

    assert ReplaySession().load_audio_file(str(audio)) is False


def test_summary(track_file):
    session = ReplaySession()
    session.load_track_file(track_file)
    session.controller.seek_move(20.0)

    summary = session.get_summary()

    assert summary["track_points"] == 3
    assert summary["total_distance_km"] == pytest.approx(summary["distance_covered_km"])
    assert summary["current_time"] == 20.0


def test_load_track_file_reports_undecodable_json(tmp_path):
    path = tmp_path / "track.json"
    path.write_bytes(b'[{"time": 0, "lat": 1, "lng": 2, "note": "\xff\xfe"}]')
    session = ReplaySession()

    assert session.load_track_file(str(path)) is False
    assert "JSON illisible" in session.last_error
    assert not session.has_track()
