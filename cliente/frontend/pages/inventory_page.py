"""Pagina de inventario con busqueda y filtros de stock."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QLineEdit, QPushButton, QWidget

from cliente.frontend.dialogs import show_error
from cliente.frontend.product_dialog import ProductDialog
from cliente.frontend.widgets.data_table import DataTable
from servidor.services.ledger import FILTER_ALL, FILTER_LOW_STOCK, FILTER_OUT_OF_STOCK
from servidor.services.ledger_utils import format_money

from .base_page import UI_ERRORS, BasePage

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

_FILTER_OPTIONS = (
    ("Todos", FILTER_ALL),
    ("Stock bajo", FILTER_LOW_STOCK),
    ("Sin stock", FILTER_OUT_OF_STOCK),
)


class InventoryPage(BasePage):
    """Listado de productos activos."""

    title = "Inventario"

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(controller, on_back, parent)

        toolbar = QHBoxLayout()
        self._search_input = QLineEdit(self._card)
        self._search_input.setPlaceholderText("Buscar por nombre")
        self._filter_combo = QComboBox(self._card)
        for text, value in _FILTER_OPTIONS:
            self._filter_combo.addItem(text, value)
        new_button = QPushButton("Nuevo producto", self._card)

        toolbar.addWidget(self._search_input, 1)
        toolbar.addWidget(self._filter_combo)
        toolbar.addWidget(new_button)

        self._table = DataTable(
            ("ID", "Nombre", "Costo", "Venta", "Cantidad", "Vendidos"),
            self._card,
        )

        self._card_layout.addLayout(toolbar)
        self._card_layout.addWidget(self._table)

        self._search_input.textChanged.connect(self._on_search_changed)
        self._filter_combo.currentIndexChanged.connect(self._on_search_changed)
        new_button.clicked.connect(self._on_new_product_clicked)

    def refresh(self) -> None:
        try:
            productos = self._controller.on_search_inventory(
                self._search_input.text(),
                self._filter_combo.currentData(),
            )
        except UI_ERRORS as exc:
            show_error(self, "Error de inventario", str(exc))
            return

        self._table.set_rows(
            [
                (
                    producto.id,
                    producto.nombre,
                    format_money(producto.precio_costo),
                    format_money(producto.precio_venta),
                    producto.cantidad,
                    producto.ventas_totales,
                )
                for producto in productos
            ]
        )

    def _on_search_changed(self, *_args: object) -> None:
        self.refresh()

    def _on_new_product_clicked(self, _checked: bool = False) -> None:
        ProductDialog(controller=self._controller, parent=self).exec()
