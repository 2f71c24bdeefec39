"""Panel principal con indicadores y actividad reciente."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import QFrame, QGridLayout, QLabel, QVBoxLayout, QWidget

from cliente.frontend.dialogs import show_error
from cliente.frontend.widgets.data_table import DataTable
from servidor.services.ledger_utils import format_money

from .base_page import UI_ERRORS, BasePage

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

_METRICS = (
    ("total_clientes", "Clientes"),
    ("total_productos", "Productos"),
    ("total_ventas", "Ventas"),
    ("deuda_total", "Deuda total"),
    ("ventas_semana", "Ventas (7 dias)"),
    ("productos_stock_bajo", "Stock bajo"),
    ("productos_sin_stock", "Sin stock"),
    ("ganancias_totales", "Ganancias"),
)
_MONEY_METRICS = frozenset({"deuda_total", "ganancias_totales"})


class DashboardPage(BasePage):
    title = "Panel principal"

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(controller, on_back, parent)

        grid = QGridLayout()
        self._metric_labels: dict[str, QLabel] = {}
        for index, (attribute, text) in enumerate(_METRICS):
            frame = QFrame(self._card)
            frame_layout = QVBoxLayout(frame)
            value_label = QLabel("0", frame)
            value_label.setObjectName("metricValue")
            frame_layout.addWidget(value_label)
            frame_layout.addWidget(self._field_label(text, frame))
            self._metric_labels[attribute] = value_label
            grid.addWidget(frame, index // 4, index % 4)

        self._activity_table = DataTable(("Fecha", "Tipo", "Mensaje"), self._card)

        self._card_layout.addLayout(grid)
        self._card_layout.addWidget(self._field_label("Actividad reciente", self._card))
        self._card_layout.addWidget(self._activity_table)

    def refresh(self) -> None:
        try:
            stats = self._controller.dashboard()
            actividad = self._controller.recent_activity()
        except UI_ERRORS as exc:
            show_error(self, "Error al cargar el panel", str(exc))
            return

        for attribute, label in self._metric_labels.items():
            value = getattr(stats, attribute)
            label.setText(format_money(value) if attribute in _MONEY_METRICS else str(value))

        self._activity_table.set_rows(
            [(item.timestamp[:19].replace("T", " "), item.tipo, item.mensaje) for item in actividad]
        )
