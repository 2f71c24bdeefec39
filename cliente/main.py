"""Inicializacion de la aplicacion de cliente."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from cliente.backend.controller import AppController
from cliente.backend.gateway import LocalServerGateway
from cliente.frontend.main_window import MainWindow
from parametros import APP_NAME, DATA_DIR, VERSION
from servidor.services.ledger import StoreLedger
from servidor.services.sample_data import seed_sample_data
from servidor.services.storage import JsonBlobStore

LOGGER = logging.getLogger(__name__)


def main() -> int:
    """Ejecuta la aplicacion grafica."""
    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationVersion(VERSION)

    ledger = StoreLedger(store=JsonBlobStore(DATA_DIR))
    if seed_sample_data(ledger):
        LOGGER.info("Datos de ejemplo cargados en: %s", DATA_DIR)

    gateway = LocalServerGateway(ledger)
    controller = AppController(gateway=gateway)
    window = MainWindow(controller=controller)
    window.showMaximized()

    LOGGER.info("Aplicacion iniciada.")
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
