#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Widget carte pour AudioTrack.
Affiche la trace GPS (Leaflet via folium) et déplace le marqueur de lecture.
"""

import logging
from typing import Optional, Sequence

from PyQt6.QtWidgets import QWidget, QVBoxLayout
from PyQt6.QtWebEngineCore import QWebEngineSettings
from PyQt6.QtWebEngineWidgets import QWebEngineView
from PyQt6.QtCore import QUrl

from audiotrack.domain.track_types import GeoSample, LatLng
from .map.console_interceptor import ConsoleInterceptor
from .map.map_html_generator import MapHTMLGenerator

logger = logging.getLogger(__name__)


class MapWidget(QWidget):
    """
    Widget affichant une carte interactive avec la trace et le marqueur de lecture.
    Implémente TrackRendererPort: aucune valeur n'est renvoyée au contrôleur.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        """Initialise le widget carte."""
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        # WebView pour afficher la carte
        self.web_view = QWebEngineView()

        # Installer l'intercepteur
        self.page = ConsoleInterceptor(self)
        self.web_view.setPage(self.page)

        # Configurer pour permettre le chargement des tuiles distantes
        settings = self.web_view.settings()
        settings.setAttribute(QWebEngineSettings.WebAttribute.LocalContentCanAccessRemoteUrls, True)
        settings.setAttribute(QWebEngineSettings.WebAttribute.JavascriptEnabled, True)

        layout.addWidget(self.web_view)

        self.current_samples: Sequence[GeoSample] = ()
        self.current_position: Optional[LatLng] = None
        self._map_ready = False
        self._pending_position: Optional[LatLng] = None

        self.show_track(())

    # --- TrackRendererPort --------------------------------------------
    def show_track(self, samples: Sequence[GeoSample]) -> None:
        """Affiche la trace complète; le marqueur repart de la position courante."""
        self.current_samples = samples
        self._map_ready = False
        html = MapHTMLGenerator.generate(samples, self.current_position)
        self._display_html(html)

    def update_position(self, position: LatLng) -> None:
        """Déplace le marqueur de lecture."""
        self.current_position = position
        if not self._map_ready:
            # La page n'a pas encore défini updateRunner
            self._pending_position = position
            return
        self.web_view.page().runJavaScript(
            f"updateRunner({position.lat:.7f}, {position.lng:.7f});"
        )

    # --- Page -----------------------------------------------------------
    def on_map_ready(self) -> None:
        """Appelé par l'intercepteur quand le script de la carte est chargé."""
        self._map_ready = True
        if self._pending_position is not None:
            position, self._pending_position = self._pending_position, None
            self.update_position(position)

    def _display_html(self, html: str) -> None:
        """Affiche le HTML."""
        self.web_view.setHtml(html, QUrl("https://raw.githubusercontent.com/"))

    def cleanup(self) -> None:
        self.web_view.setHtml("")
