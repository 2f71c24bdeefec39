"""Pagina de punto de venta."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QWidget,
)

from cliente.backend.ticket_formatter import format_sale_preview
from cliente.frontend.dialogs import show_error, show_info
from parametros import PAYMENT_CASH, PAYMENT_CREDIT
from shared.protocol import SaleDraft

from .base_page import UI_ERRORS, BasePage

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

_PAYMENT_LABELS = {PAYMENT_CASH: "Contado", PAYMENT_CREDIT: "Credito"}


class SalesPage(BasePage):
    """Registra ventas de contado o a credito.

    Los productos se capturan como `id:cantidad` separados por comas.
    """

    title = "Ventas"

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(controller, on_back, parent)

        self._payment_combo = QComboBox(self._card)
        for tipo in self._controller.payment_types():
            self._payment_combo.addItem(_PAYMENT_LABELS.get(tipo, tipo), tipo)
        self._customer_combo = QComboBox(self._card)
        self._items_input = QLineEdit(self._card)
        self._items_input.setPlaceholderText("1:2, 3:1")

        form_layout = QFormLayout()
        form_layout.addRow(self._field_label("Tipo de pago", self._card), self._payment_combo)
        form_layout.addRow(self._field_label("Cliente", self._card), self._customer_combo)
        form_layout.addRow(self._field_label("Productos", self._card), self._items_input)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)
        preview_button = QPushButton("Vista previa", self._card)
        preview_button.setObjectName("secondaryButton")
        sale_button = QPushButton("Registrar venta", self._card)
        buttons_layout.addWidget(preview_button)
        buttons_layout.addWidget(sale_button)

        self._output = QPlainTextEdit(self._card)
        self._output.setReadOnly(True)

        self._card_layout.addLayout(form_layout)
        self._card_layout.addLayout(buttons_layout)
        self._card_layout.addWidget(self._output)

        self._payment_combo.currentIndexChanged.connect(self._on_payment_changed)
        preview_button.clicked.connect(self._on_preview_clicked)
        sale_button.clicked.connect(self._on_sale_clicked)

    def refresh(self) -> None:
        current = self._customer_combo.currentData()
        self._customer_combo.clear()
        self._customer_combo.addItem("Selecciona un cliente", "")
        try:
            options = self._controller.customer_options()
        except UI_ERRORS as exc:
            show_error(self, "Error de ventas", str(exc))
            return

        for folio, nombre in options:
            self._customer_combo.addItem(f"{folio} - {nombre}", folio)
        index = self._customer_combo.findData(current)
        self._customer_combo.setCurrentIndex(max(index, 0))
        self._on_payment_changed()

    def _on_payment_changed(self, *_args: object) -> None:
        self._customer_combo.setEnabled(self._payment_combo.currentData() == PAYMENT_CREDIT)

    def _on_preview_clicked(self, _checked: bool = False) -> None:
        try:
            preview = self._controller.on_preview_sale(self._items_input.text())
        except UI_ERRORS as exc:
            show_error(self, "Vista previa", str(exc))
            return
        self._output.setPlainText(format_sale_preview(preview))

    def _on_sale_clicked(self, _checked: bool = False) -> None:
        tipo_pago = self._payment_combo.currentData()
        draft = SaleDraft(
            folio_cliente=self._customer_combo.currentData() if tipo_pago == PAYMENT_CREDIT else "",
            tipo_pago=tipo_pago,
            productos_input=self._items_input.text(),
        )
        try:
            venta = self._controller.on_record_sale(draft)
        except UI_ERRORS as exc:
            show_error(self, "Error al registrar venta", str(exc))
            return

        self._items_input.clear()
        self._output.setPlainText(self._controller.build_ticket(venta))
        show_info(self, "Venta registrada", f"Venta #{venta.id} registrada.")
