#!/usr/bin/env python
# -*- coding: utf-8 -*-

from typing import Optional, Sequence

import folium
from branca.element import MacroElement
from jinja2 import Template

from audiotrack.app.config import MAP_FOLLOW_ZOOM, MAP_TRACK_ZOOM
from audiotrack.domain.track_types import DEFAULT_POSITION, GeoSample, LatLng

DARK_TILES_URL = "https://{s}.basemaps.cartocdn.com/dark_all/{z}/{x}/{y}{r}.png"
DARK_TILES_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors '
    '&copy; <a href="https://carto.com/attributions">CARTO</a>'
)
MAP_READY_MESSAGE = "MAP_READY"

_ENDPOINT_ICON_HTML = (
    "<div style='background-color:{color};width:10px;height:10px;"
    "border-radius:50%;border:2px solid white;'></div>"
)


class RunnerMarker(MacroElement):
    """Marqueur de lecture pulsant + fonction JS `updateRunner(lat, lng)`."""

    _template = Template("""
{% macro script(this, kwargs) %}
    var map = {{ this._parent.get_name() }};
    L.control.zoom({position: 'bottomright'}).addTo(map);

    var runnerMarker = L.circleMarker([{{ this.lat }}, {{ this.lng }}], {
        radius: 12,
        fillColor: "#10b981",
        color: "#059669",
        weight: 3,
        opacity: 1,
        fillOpacity: 0.95,
        bubblingMouseEvents: false
    }).addTo(map);

    // Pulsation du marqueur
    var pulseTimer = setInterval(function() {
        var big = runnerMarker.getRadius() > 12;
        runnerMarker.setRadius(big ? 12 : 16);
        runnerMarker.setStyle({fillColor: big ? "#10b981" : "#34d399"});
    }, 350);

    function updateRunner(lat, lng) {
        var latlng = L.latLng(lat, lng);
        runnerMarker.setLatLng(latlng);
        if (!map.getBounds().pad(-0.2).contains(latlng)) {
            map.flyTo(latlng, Math.max(map.getZoom(), {{ this.follow_zoom }}), {duration: 0.6, animate: true});
        }
    }

    console.log("{{ this.ready_message }}");
{% endmacro %}
""")

    def __init__(self, position: LatLng, follow_zoom: int = MAP_FOLLOW_ZOOM) -> None:
        super().__init__()
        self._name = "RunnerMarker"
        self.lat = float(position.lat)
        self.lng = float(position.lng)
        self.follow_zoom = int(follow_zoom)
        self.ready_message = MAP_READY_MESSAGE


class MapHTMLGenerator:
    """Générateur de code HTML pour la carte Folium/Leaflet."""

    @staticmethod
    def build_map(
        samples: Sequence[GeoSample] = (),
        position: Optional[LatLng] = None,
    ) -> folium.Map:
        """Construit la carte folium (trace, départ/arrivée, marqueur de lecture)."""
        points = [(s.lat, s.lng) for s in samples]
        if position is None:
            position = LatLng(*points[0]) if points else DEFAULT_POSITION

        fmap = folium.Map(
            location=[position.lat, position.lng],
            zoom_start=MAP_TRACK_ZOOM,
            tiles=None,
            zoom_control=False,
            prefer_canvas=True,
        )
        folium.TileLayer(
            tiles=DARK_TILES_URL,
            attr=DARK_TILES_ATTRIBUTION,
            subdomains="abcd",
            max_zoom=20,
        ).add_to(fmap)

        if points:
            # Trace en Cyan technique
            folium.PolyLine(points, color="#00E5FF", weight=4, opacity=0.9).add_to(fmap)
            if len(points) > 1:
                fmap.fit_bounds([
                    [min(p[0] for p in points), min(p[1] for p in points)],
                    [max(p[0] for p in points), max(p[1] for p in points)],
                ])

            for location, color, label in (
                (points[0], "#4CAF50", "Départ"),
                (points[-1], "#F44336", "Arrivée"),
            ):
                folium.Marker(
                    location=location,
                    icon=folium.DivIcon(
                        html=_ENDPOINT_ICON_HTML.format(color=color),
                        icon_size=(14, 14),
                        icon_anchor=(7, 7),
                    ),
                    popup=label,
                ).add_to(fmap)

        fmap.add_child(RunnerMarker(position))
        return fmap

    @staticmethod
    def generate(
        samples: Sequence[GeoSample] = (),
        position: Optional[LatLng] = None,
    ) -> str:
        """Crée le code HTML complet de la carte (Dark Mode)."""
        return MapHTMLGenerator.build_map(samples, position).get_root().render()
