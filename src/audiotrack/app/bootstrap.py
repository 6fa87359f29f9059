from __future__ import annotations

import logging
import os
import sys
from typing import Sequence

from PyQt6.QtCore import QCoreApplication, Qt
from PyQt6.QtWidgets import QApplication

from audiotrack.app.config import APP_NAME, APP_VERSION, LOG_FILENAME, SAMPLE_TRACK_PATH, TRACK_EXTENSIONS, resource_path

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> str:
    """Journal dans le dossier utilisateur + sortie standard. Retourne le chemin du fichier."""
    log_file = os.path.join(os.path.expanduser("~"), LOG_FILENAME)
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(sys.stdout),
        ],
    )
    return log_file


def run(argv: Sequence[str]) -> int:
    log_file = configure_logging()
    logger.info("%s %s démarré (journal: %s)", APP_NAME, APP_VERSION, log_file)

    # QtWebEngine nécessite cette option AVANT la création de QCoreApplication.
    QCoreApplication.setAttribute(Qt.ApplicationAttribute.AA_ShareOpenGLContexts)

    app = QApplication(list(argv))
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(APP_VERSION)
    app.setOrganizationName(APP_NAME)
    app.setStyle("Fusion")

    from audiotrack.ui.main_window import MainWindow

    window = MainWindow()

    # Fichiers passés en ligne de commande (trace et/ou audio)
    paths = [p for p in list(argv)[1:] if os.path.isfile(p)]
    if not any(os.path.splitext(p)[1].lower() in TRACK_EXTENSIONS for p in paths):
        sample = resource_path(SAMPLE_TRACK_PATH)
        if os.path.isfile(sample):
            paths.insert(0, sample)
    for path in paths:
        window.open_path(path)

    window.show()
    return app.exec()
