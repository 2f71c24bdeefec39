"""Dialogo para crear productos o ajustar su stock."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QDialog,
    QFormLayout,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from shared.errors import ServiceError, ValidationError
from shared.protocol import ProductDraft

if TYPE_CHECKING:
    from cliente.backend.controller import AppController


class ProductDialog(QDialog):
    """Dialogo modal de alta de producto.

    Si ya existe un producto activo con el mismo nombre, se actualizan sus
    precios y la cantidad se suma (o resta, si es negativa) a su stock.
    """

    def __init__(
        self,
        controller: AppController,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._nombre_input: QLineEdit
        self._costo_input: QLineEdit
        self._venta_input: QLineEdit
        self._cantidad_input: QLineEdit
        self._margin_label: QLabel

        self.setWindowTitle("Guardar producto")
        self.setModal(True)
        self.setMinimumSize(460, 360)

        self._build_ui()

    def _build_ui(self) -> None:
        """Construye widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card = QFrame(self)
        card.setObjectName("dialogCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)

        title_label = QLabel("Guardar producto", card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._nombre_input = QLineEdit(card)
        self._nombre_input.setPlaceholderText("Arroz Integral")
        self._costo_input = QLineEdit(card)
        self._costo_input.setPlaceholderText("12.00")
        self._venta_input = QLineEdit(card)
        self._venta_input.setPlaceholderText("18.00")
        self._cantidad_input = QLineEdit(card)
        self._cantidad_input.setPlaceholderText("0")

        self._margin_label = QLabel("Margen: 0.0%", card)
        self._margin_label.setObjectName("fieldLabel")

        self._costo_input.textChanged.connect(self._refresh_margin)
        self._venta_input.textChanged.connect(self._refresh_margin)

        form_layout = QFormLayout()
        form_layout.addRow(QLabel("Nombre", card), self._nombre_input)
        form_layout.addRow(QLabel("Precio de costo", card), self._costo_input)
        form_layout.addRow(QLabel("Precio de venta", card), self._venta_input)
        form_layout.addRow(QLabel("Cantidad (+/-)", card), self._cantidad_input)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)

        cancel_button = QPushButton("Cancelar", card)
        cancel_button.setObjectName("secondaryButton")
        save_button = QPushButton("Guardar", card)

        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)

        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addWidget(title_label)
        card_layout.addLayout(form_layout)
        card_layout.addWidget(self._margin_label)
        card_layout.addLayout(buttons_layout)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self._nombre_input.setFocus()

    def _refresh_margin(self, _text: str = "") -> None:
        margen = self._controller.build_margin_preview(
            self._costo_input.text(),
            self._venta_input.text(),
        )
        self._margin_label.setText(f"Margen: {margen:.1f}%")

    def _on_save_clicked(self) -> None:
        """Valida y guarda el producto usando el controller."""
        draft = ProductDraft(
            nombre=self._nombre_input.text(),
            precio_costo=self._costo_input.text(),
            precio_venta=self._venta_input.text(),
            cantidad=self._cantidad_input.text(),
        )
        try:
            producto = self._controller.on_save_product(draft)
        except (ValidationError, ServiceError) as exc:
            show_error(self, "Error al guardar producto", str(exc))
            return

        show_info(
            self,
            "Producto guardado",
            f"{producto.nombre}: stock actual {producto.cantidad}",
        )
        self.accept()
