#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging

from PyQt6.QtWebEngineCore import QWebEnginePage

from .map_html_generator import MAP_READY_MESSAGE

logger = logging.getLogger(__name__)


class ConsoleInterceptor(QWebEnginePage):
    """Intercepte les messages console JS pour la communication."""

    def __init__(self, parent_widget):
        super().__init__(parent_widget)
        self.parent_widget = parent_widget

    def javaScriptConsoleMessage(self, level, message, line, source_id):
        # La carte signale qu'updateRunner est défini
        if message == MAP_READY_MESSAGE:
            if hasattr(self.parent_widget, 'on_map_ready'):
                self.parent_widget.on_map_ready()
            return

        logger.debug("JS console [%s:%s] %s", source_id, line, message)
