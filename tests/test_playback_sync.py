"""Tests for the playback synchronisation state machine."""

from __future__ import annotations

import pytest

from audiotrack.core.models.playback_models import (
    DurationChanged,
    Ended,
    PlaybackMode,
    PlayStateChanged,
    TimeChanged,
)
from audiotrack.core.track_interpolator import haversine_km, position_at
from audiotrack.core.usecases.playback_sync import PlaybackSyncController
from audiotrack.domain.track_types import DEFAULT_POSITION, GeoSample


SAMPLES = [
    GeoSample(0, 0.0, 0.0),
    GeoSample(10, 0.0, 1.0),
    GeoSample(20, 0.0, 2.0),
]


class FakeTransport:
    def __init__(self, duration=20.0):
        self.duration = duration
        self.current_time = 0.0
        self.listeners = []
        self.calls = []

    def play(self):
        self.calls.append(("play",))

    def pause(self):
        self.calls.append(("pause",))

    def seek_to(self, seconds):
        self.calls.append(("seek_to", seconds))

    def subscribe(self, listener):
        self.listeners.append(listener)

    def unsubscribe(self, listener):
        self.listeners.remove(listener)

    def emit(self, event):
        for listener in list(self.listeners):
            listener(event)


class FakeRenderer:
    def __init__(self):
        self.tracks = []
        self.positions = []

    def show_track(self, samples):
        self.tracks.append(samples)

    def update_position(self, position):
        self.positions.append(position)


class FakeReadoutSink:
    def __init__(self):
        self.readouts = []

    def update_readout(self, readout):
        self.readouts.append(readout)


class FakeScheduler:
    def __init__(self):
        self.callbacks = []

    def request_frame(self, callback):
        self.callbacks.append(callback)

    def flush(self):
        callbacks, self.callbacks = self.callbacks, []
        for callback in callbacks:
            callback()


def _controller(scheduler=None, duration=20.0):
    transport = FakeTransport(duration)
    renderer = FakeRenderer()
    sink = FakeReadoutSink()
    controller = PlaybackSyncController(
        samples=SAMPLES,
        transport=transport,
        renderer=renderer,
        readout_sink=sink,
        frame_scheduler=scheduler,
    )
    return controller, transport, renderer, sink


def test_initial_state_is_idle_at_first_sample():
    controller, transport, _, _ = _controller()

    assert controller.mode is PlaybackMode.IDLE
    assert controller.position == (0.0, 0.0)
    assert controller.state.duration == 20.0
    assert transport.listeners == [controller.handle_event]


def test_tick_updates_position_and_readout():
    controller, transport, renderer, sink = _controller()

    transport.emit(TimeChanged(5.0))

    assert controller.state.query_time == 5.0
    assert renderer.positions[-1].lng == pytest.approx(0.5)
    readout = sink.readouts[-1]
    assert readout.current_time == 5.0
    assert readout.distance_covered_km == pytest.approx(haversine_km(0, 0, 0, 1) / 2)
    assert readout.total_distance_km == pytest.approx(haversine_km(0, 0, 0, 2))


def test_ticks_are_ignored_while_seeking():
    controller, transport, renderer, _ = _controller()
    controller.begin_seek()
    published = len(renderer.positions)

    transport.emit(TimeChanged(12.0))

    assert controller.mode is PlaybackMode.SEEKING
    assert controller.state.query_time == 0.0
    assert len(renderer.positions) == published


def test_seeking_takes_precedence_over_playing():
    controller, transport, _, _ = _controller()
    transport.emit(PlayStateChanged(True))
    controller.begin_seek()

    assert controller.mode is PlaybackMode.SEEKING
    controller.end_seek()
    assert controller.mode is PlaybackMode.PLAYING


def test_seek_move_publishes_synchronously_during_gesture():
    controller, transport, renderer, _ = _controller()
    controller.begin_seek()

    controller.seek_move(15.0)

    assert controller.state.query_time == 15.0
    assert renderer.positions[-1] == position_at(SAMPLES, 15.0)
    # Le transport ne suit qu'au relâchement
    assert ("seek_to", 15.0) not in transport.calls


def test_release_after_seek_resumes_ticks_without_scheduler():
    controller, transport, _, _ = _controller()
    transport.emit(PlayStateChanged(True))
    controller.begin_seek()
    controller.seek_move(15.0)
    controller.end_seek()

    assert transport.calls[-1] == ("seek_to", 15.0)

    transport.emit(TimeChanged(15.05))

    assert controller.state.is_seeking is False
    assert controller.state.query_time == pytest.approx(15.05)


def test_release_after_seek_resumes_ticks_with_frame_coalescing():
    scheduler = FakeScheduler()
    controller, transport, _, _ = _controller(scheduler)
    transport.emit(PlayStateChanged(True))
    controller.begin_seek()
    controller.seek_move(15.0)
    controller.end_seek()

    transport.emit(TimeChanged(15.05))
    scheduler.flush()

    assert controller.state.query_time == pytest.approx(15.05)


def test_close_ticks_are_coalesced_into_one_frame():
    scheduler = FakeScheduler()
    controller, transport, renderer, _ = _controller(scheduler)
    transport.emit(TimeChanged(5.0))
    published = len(renderer.positions)

    transport.emit(TimeChanged(5.02))
    transport.emit(TimeChanged(5.04))
    transport.emit(TimeChanged(5.06))

    assert len(scheduler.callbacks) == 1
    assert len(renderer.positions) == published

    scheduler.flush()

    assert controller.state.query_time == pytest.approx(5.06)
    assert len(renderer.positions) == published + 1


def test_large_tick_is_applied_immediately_even_with_scheduler():
    scheduler = FakeScheduler()
    controller, transport, _, _ = _controller(scheduler)

    transport.emit(TimeChanged(3.0))

    assert controller.state.query_time == 3.0
    assert scheduler.callbacks == []


def test_pending_tick_is_dropped_when_seek_starts():
    scheduler = FakeScheduler()
    controller, transport, _, _ = _controller(scheduler)
    transport.emit(TimeChanged(5.0))
    transport.emit(TimeChanged(5.05))

    controller.begin_seek()
    scheduler.flush()

    assert controller.state.query_time == 5.0


def test_ended_resets_to_start():
    controller, transport, renderer, sink = _controller()
    transport.emit(PlayStateChanged(True))
    transport.emit(TimeChanged(18.0))

    transport.emit(Ended())

    assert controller.state.is_playing is False
    assert controller.state.query_time == 0.0
    assert renderer.positions[-1] == (0.0, 0.0)
    assert sink.readouts[-1].distance_covered_km == 0.0


def test_play_state_only_changes_flag():
    controller, transport, renderer, _ = _controller()
    published = len(renderer.positions)

    transport.emit(PlayStateChanged(True))

    assert controller.state.is_playing is True
    assert controller.mode is PlaybackMode.PLAYING
    assert len(renderer.positions) == published


def test_duration_change_republishes_readout():
    controller, transport, _, sink = _controller(duration=0.0)

    transport.emit(DurationChanged(42.0))

    assert controller.state.duration == 42.0
    assert sink.readouts[-1].duration == 42.0


def test_seek_move_is_clamped_to_duration():
    controller, _, _, _ = _controller(duration=20.0)

    controller.seek_move(-4.0)
    assert controller.state.query_time == 0.0

    controller.seek_move(99.0)
    assert controller.state.query_time == 20.0


def test_seek_move_without_gesture_seeks_transport_immediately():
    controller, transport, _, _ = _controller()

    controller.seek_move(7.5)

    assert transport.calls[-1] == ("seek_to", 7.5)


def test_end_seek_without_gesture_is_noop():
    controller, transport, _, _ = _controller()

    controller.end_seek()

    assert transport.calls == []


def test_load_source_resets_playback():
    controller, transport, renderer, _ = _controller()
    transport.emit(PlayStateChanged(True))
    transport.emit(TimeChanged(12.0))
    transport.duration = 33.0

    controller.load_source()

    state = controller.state
    assert state.query_time == 0.0
    assert state.is_playing is False
    assert state.duration == 33.0
    assert renderer.positions[-1] == (0.0, 0.0)


def test_toggle_play_drives_transport():
    controller, transport, _, _ = _controller()

    controller.toggle_play()
    assert transport.calls[-1] == ("play",)

    transport.emit(PlayStateChanged(True))
    controller.toggle_play()
    assert transport.calls[-1] == ("pause",)


def test_set_samples_shows_track_and_republishes():
    controller, _, renderer, sink = _controller()
    controller.seek_move(5.0)
    new_samples = [GeoSample(0, 10.0, 10.0), GeoSample(10, 10.0, 11.0)]

    controller.set_samples(new_samples)

    assert renderer.tracks[-1] is new_samples
    assert controller.geometry.samples is new_samples
    assert controller.position == position_at(new_samples, 5.0)
    assert sink.readouts[-1].total_distance_km == pytest.approx(haversine_km(10, 10, 10, 11))


def test_missing_collaborators_are_silent():
    controller = PlaybackSyncController()

    controller.handle_event(TimeChanged(3.0))
    controller.begin_seek()
    controller.seek_move(1.0)
    controller.end_seek()
    controller.toggle_play()
    controller.load_source()
    controller.handle_event(Ended())

    assert controller.position == DEFAULT_POSITION
    assert controller.readout.total_distance_km == 0.0


def test_attach_transport_replaces_previous_subscription():
    controller, first, _, _ = _controller()
    second = FakeTransport(duration=50.0)

    controller.attach_transport(second)

    assert first.listeners == []
    assert second.listeners == [controller.handle_event]
    assert controller.state.duration == 50.0


def test_state_is_a_copy():
    controller, _, _, _ = _controller()

    state = controller.state
    state.query_time = 99.0

    assert controller.state.query_time == 0.0


def test_ended_during_seek_keeps_user_position():
    controller, transport, _, _ = _controller()
    transport.emit(PlayStateChanged(True))
    controller.begin_seek()
    controller.seek_move(14.0)

    transport.emit(Ended())

    assert controller.state.is_playing is False
    assert controller.state.is_seeking is True
    assert controller.state.query_time == 14.0
    controller.end_seek()
    assert transport.calls[-1] == ("seek_to", 14.0)
