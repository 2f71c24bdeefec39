"""Pagina de reportes: producto mas/menos vendido y analisis financiero."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from PyQt6.QtWidgets import QComboBox, QHBoxLayout, QPlainTextEdit, QPushButton, QWidget

from cliente.frontend.dialogs import show_error
from servidor.services.ledger import TOP_LEAST, TOP_MOST
from servidor.services.ledger_utils import (
    PERIOD_ALL,
    PERIOD_MONTH,
    PERIOD_TODAY,
    PERIOD_WEEK,
    PERIOD_YEAR,
    format_money,
)
from shared.protocol import FinancialAnalysis, TopProduct

from .base_page import UI_ERRORS, BasePage

if TYPE_CHECKING:
    from cliente.backend.controller import AppController

_PERIOD_OPTIONS = (
    ("Hoy", PERIOD_TODAY),
    ("Ultima semana", PERIOD_WEEK),
    ("Ultimo mes", PERIOD_MONTH),
    ("Ultimo año", PERIOD_YEAR),
    ("Todo", PERIOD_ALL),
)


class ReportsPage(BasePage):
    title = "Reportes"

    def __init__(
        self,
        controller: AppController,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(controller, on_back, parent)

        toolbar = QHBoxLayout()
        self._period_combo = QComboBox(self._card)
        for text, value in _PERIOD_OPTIONS:
            self._period_combo.addItem(text, value)
        self._period_combo.setCurrentIndex(len(_PERIOD_OPTIONS) - 1)
        self._direction_combo = QComboBox(self._card)
        self._direction_combo.addItem("Mas vendido", TOP_MOST)
        self._direction_combo.addItem("Menos vendido", TOP_LEAST)
        run_button = QPushButton("Generar", self._card)
        toolbar.addWidget(self._field_label("Periodo", self._card))
        toolbar.addWidget(self._period_combo, 1)
        toolbar.addWidget(self._direction_combo)
        toolbar.addWidget(run_button)

        self._output = QPlainTextEdit(self._card)
        self._output.setReadOnly(True)

        self._card_layout.addLayout(toolbar)
        self._card_layout.addWidget(self._output)

        run_button.clicked.connect(self._on_run_clicked)

    def refresh(self) -> None:
        self._on_run_clicked()

    def _on_run_clicked(self, _checked: bool = False) -> None:
        periodo = self._period_combo.currentData()
        # "hoy" solo aplica al analisis financiero
        top_periodo = PERIOD_WEEK if periodo == PERIOD_TODAY else periodo
        try:
            top = self._controller.top_product(top_periodo, self._direction_combo.currentData())
            analisis = self._controller.financial_analysis(periodo)
        except UI_ERRORS as exc:
            show_error(self, "Error en reportes", str(exc))
            return

        self._output.setPlainText(
            self._format_top(top) + "\n\n" + self._format_analysis(analisis)
        )

    @staticmethod
    def _format_top(top: TopProduct | None) -> str:
        if top is None:
            return "Sin ventas en el periodo."
        nombre = top.producto.nombre if top.producto else f"Producto #{top.producto_id}"
        return f"Producto: {nombre}\nUnidades vendidas: {top.cantidad}\nPeriodo: {top.periodo}"

    @staticmethod
    def _format_analysis(analisis: FinancialAnalysis) -> str:
        return "\n".join(
            (
                f"Inversion en inventario: {format_money(analisis.total_inversion)}",
                f"Ventas: {format_money(analisis.total_ventas)} ({analisis.cantidad_ventas})",
                f"Costo de ventas: {format_money(analisis.costo_total_ventas)}",
                f"Ganancia: {format_money(analisis.ganancia_total)}",
                f"Margen: {analisis.margen_ganancia:.1f}%",
            )
        )
