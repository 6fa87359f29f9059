"""Tests for the Leaflet page built with folium."""

from __future__ import annotations

import pytest

pytest.importorskip("folium")

from audiotrack.app.config import MAP_FOLLOW_ZOOM  # noqa: E402
from audiotrack.domain.track_types import DEFAULT_POSITION, GeoSample, LatLng  # noqa: E402
from audiotrack.ui.widgets.map.map_html_generator import (  # noqa: E402
    MAP_READY_MESSAGE,
    MapHTMLGenerator,
)


SAMPLES = [
    GeoSample(0, 55.7558, 37.6176),
    GeoSample(10, 55.7549, 37.6196),
    GeoSample(20, 55.7537, 37.6213),
]


def test_page_defines_runner_update_and_signals_ready():
    html = MapHTMLGenerator.generate(SAMPLES)

    assert "function updateRunner(lat, lng)" in html
    assert f'console.log("{MAP_READY_MESSAGE}")' in html
    assert f"Math.max(map.getZoom(), {MAP_FOLLOW_ZOOM})" in html


def test_track_is_drawn_as_polyline_with_endpoints():
    html = MapHTMLGenerator.generate(SAMPLES)

    assert "L.polyline" in html
    assert "#00E5FF" in html
    assert "Départ" in html
    assert "Arrivée" in html


def test_runner_starts_on_first_sample_by_default():
    html = MapHTMLGenerator.generate(SAMPLES)

    assert "L.circleMarker([55.7558, 37.6176]" in html


def test_runner_uses_given_position():
    html = MapHTMLGenerator.generate(SAMPLES, LatLng(55.75, 37.62))

    assert "L.circleMarker([55.75, 37.62]" in html


def test_empty_track_is_centred_on_default_position():
    fmap = MapHTMLGenerator.build_map(())
    html = fmap.get_root().render()

    assert list(fmap.location) == pytest.approx(list(DEFAULT_POSITION))
    assert "L.polyline" not in html
    assert "function updateRunner(lat, lng)" in html
