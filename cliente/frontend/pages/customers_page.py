"""Pagina de clientes: alta, consulta de deuda e historial."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import QHBoxLayout, QLineEdit, QPlainTextEdit, QPushButton, QWidget

from cliente.backend.ticket_formatter import format_debt_summary
from cliente.frontend.customer_dialog import RegisterCustomerDialog
from cliente.frontend.dialogs import show_error, show_warning
from cliente.frontend.widgets.data_table import DataTable
from servidor.services.ledger_utils import format_money

from .base_page import UI_ERRORS, BasePage

if TYPE_CHECKING:
    from cliente.backend.controller import AppController


class CustomersPage(BasePage):
    title = "Clientes"

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(controller, on_back, parent)

        toolbar = QHBoxLayout()
        self._folio_input = QLineEdit(self._card)
        self._folio_input.setPlaceholderText("Folio del cliente")
        debt_button = QPushButton("Consultar deuda", self._card)
        history_button = QPushButton("Ver historial", self._card)
        new_button = QPushButton("Registrar cliente", self._card)
        toolbar.addWidget(self._folio_input, 1)
        toolbar.addWidget(debt_button)
        toolbar.addWidget(history_button)
        toolbar.addWidget(new_button)

        self._result_output = QPlainTextEdit(self._card)
        self._result_output.setReadOnly(True)
        self._result_output.setMaximumHeight(140)

        self._customers_table = DataTable(
            ("Folio", "Nombre", "Telefono", "Email", "Total compras", "Ultima compra"),
            self._card,
        )
        self._overdue_table = DataTable(("Folio", "Nombre", "Deuda", "Dias de atraso"), self._card)

        self._card_layout.addLayout(toolbar)
        self._card_layout.addWidget(self._result_output)
        self._card_layout.addWidget(self._field_label("Clientes activos", self._card))
        self._card_layout.addWidget(self._customers_table)
        self._card_layout.addWidget(self._field_label("Clientes en atraso", self._card))
        self._card_layout.addWidget(self._overdue_table)

        debt_button.clicked.connect(self._on_debt_clicked)
        history_button.clicked.connect(self._on_history_clicked)
        new_button.clicked.connect(self._on_new_customer_clicked)

    def refresh(self) -> None:
        try:
            clientes = self._controller.customers_with_credit()
            atrasados = self._controller.overdue_customers()
        except UI_ERRORS as exc:
            show_error(self, "Error de clientes", str(exc))
            return

        self._customers_table.set_rows(
            [
                (
                    cliente.folio,
                    cliente.nombre,
                    cliente.telefono,
                    cliente.email,
                    format_money(cliente.total_compras),
                    cliente.ultima_compra or "",
                )
                for cliente in clientes
            ]
        )
        self._overdue_table.set_rows(
            [
                (item.cliente.folio, item.cliente.nombre, format_money(item.deuda), item.dias_atraso)
                for item in atrasados
            ]
        )

    def _on_debt_clicked(self, _checked: bool = False) -> None:
        try:
            summary = self._controller.on_query_debt(self._folio_input.text())
        except UI_ERRORS as exc:
            show_error(self, "Error al consultar deuda", str(exc))
            return

        if summary is None:
            show_warning(self, "Consultar deuda", "Cliente no encontrado.")
            return
        self._result_output.setPlainText(format_debt_summary(summary))

    def _on_history_clicked(self, _checked: bool = False) -> None:
        try:
            ventas = self._controller.on_purchase_history(self._folio_input.text())
        except UI_ERRORS as exc:
            show_error(self, "Error al cargar historial", str(exc))
            return

        if not ventas:
            self._result_output.setPlainText("Sin compras registradas.")
            return
        lines = [
            f"{venta.fecha} {venta.hora}  {venta.tipo_pago:<7} {format_money(venta.total)}"
            f"{'' if venta.pagada else '  (pendiente)'}"
            for venta in ventas
        ]
        self._result_output.setPlainText("\n".join(lines))

    def _on_new_customer_clicked(self, _checked: bool = False) -> None:
        RegisterCustomerDialog(controller=self._controller, parent=self).exec()
