"""Base comun de las paginas embebidas en la ventana principal."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from shared.errors import LEDGER_ERRORS, ServiceError

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

# Errores que una pagina muestra al usuario en vez de propagar.
UI_ERRORS = (*LEDGER_ERRORS, ServiceError)


class BasePage(QWidget):
    """Pagina con titulo, boton de regreso y una tarjeta de contenido."""

    title = ""

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._on_back = on_back

        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(24, 24, 24, 24)

        self._card = QFrame(self)
        self._card.setObjectName("card")
        self._card_layout = QVBoxLayout(self._card)
        self._card_layout.setContentsMargins(24, 24, 24, 24)
        self._card_layout.setSpacing(14)

        header_layout = QHBoxLayout()
        title_label = QLabel(self.title, self._card)
        title_label.setObjectName("titleLabel")
        back_button = QPushButton("Volver", self._card)
        back_button.setObjectName("secondaryButton")
        back_button.setCursor(Qt.CursorShape.PointingHandCursor)
        back_button.clicked.connect(self._on_back_clicked)
        header_layout.addWidget(title_label)
        header_layout.addStretch(1)
        header_layout.addWidget(back_button)
        self._card_layout.addLayout(header_layout)

        shadow = QGraphicsDropShadowEffect(self._card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        self._card.setGraphicsEffect(shadow)

        root_layout.addWidget(self._card)

    def refresh(self) -> None:
        """Recarga los datos visibles. Las subclases lo sobrescriben."""

    def _on_back_clicked(self, _checked: bool = False) -> None:
        self._on_back()

    @staticmethod
    def _field_label(text: str, parent: QWidget) -> QLabel:
        label = QLabel(text, parent)
        label.setObjectName("fieldLabel")
        return label
