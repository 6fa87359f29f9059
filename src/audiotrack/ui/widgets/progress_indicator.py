#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Indicateur de chargement pour AudioTrack.
Message de statut + barre indéterminée pendant la lecture des fichiers.
"""

from typing import Optional

from PyQt6.QtWidgets import QWidget, QHBoxLayout, QProgressBar, QLabel

from ..theme.styles import LABEL_STYLE, PROGRESS_BAR_STYLE

READY_MESSAGE = "Prêt"


class ProgressIndicator(QWidget):
    """
    Widget affichant un message de statut et une barre d'activité.
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(5, 2, 5, 2)

        self.lbl_status = QLabel(READY_MESSAGE)
        self.lbl_status.setStyleSheet(LABEL_STYLE)
        self.lbl_status.setMinimumWidth(200)
        layout.addWidget(self.lbl_status, 1)

        self.progress_bar = QProgressBar()
        self.progress_bar.setStyleSheet(PROGRESS_BAR_STYLE)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setMaximumWidth(160)
        layout.addWidget(self.progress_bar)
        self.progress_bar.hide()

    def set_status(self, message: str) -> None:
        self.lbl_status.setText(message)

    def set_busy(self, busy: bool, message: Optional[str] = None) -> None:
        """
        Active/désactive la barre indéterminée.

        Args:
            busy: True pendant un chargement
            message: Message de statut optionnel
        """
        if message is not None:
            self.set_status(message)
        if busy:
            # Min == max == 0: mode indéterminé
            self.progress_bar.setRange(0, 0)
            self.progress_bar.show()
        else:
            self.progress_bar.setRange(0, 100)
            self.progress_bar.hide()

    def reset(self) -> None:
        self.set_busy(False, READY_MESSAGE)
