"""Gateway de comunicacion cliente-servidor."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Protocol, TypeVar

from servidor.domain.activity import Actividad
from servidor.domain.models import Cliente, Producto, Venta
from servidor.services.ledger import StoreLedger
from shared.errors import LEDGER_ERRORS, ServiceError
from shared.protocol import (
    CustomerDebt,
    CustomerDebtSummary,
    FinancialAnalysis,
    NotificationCounts,
    SalePreview,
    StoreStatistics,
    TopProduct,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class ServerGateway(Protocol):
    """Interfaz de acceso del cliente a los servicios de la tienda."""

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Registra un callback para cambios de datos."""

    def add_customer(self, nombre: str, folio: str, telefono: str, email: str) -> Cliente:
        """Registra un cliente."""

    def active_customers(self) -> list[Cliente]:
        """Lista clientes activos."""

    def add_product(
        self,
        nombre: str,
        precio_costo: float,
        precio_venta: float,
        cantidad: int,
    ) -> Producto:
        """Crea o actualiza un producto."""

    def search_products(self, termino: str, filtro: str) -> list[Producto]:
        """Busca productos activos y aplica un filtro de stock."""

    def record_sale(self, folio_cliente: str, tipo_pago: str, productos_input: str) -> Venta:
        """Registra una venta."""

    def preview_sale(self, productos_input: str) -> SalePreview:
        """Calcula la vista previa de una venta."""

    def customer_debt(self, folio: str) -> CustomerDebtSummary | None:
        """Consulta la deuda de un cliente."""

    def purchase_history(self, folio: str) -> list[Venta]:
        """Lista las compras de un folio."""

    def customers_overdue(self) -> list[CustomerDebt]:
        """Lista clientes en atraso."""

    def customers_with_available_credit(self) -> list[Cliente]:
        """Lista clientes con credito vigente."""

    def top_product(self, periodo: str, tipo: str) -> TopProduct | None:
        """Producto mas o menos vendido."""

    def financial_analysis(self, periodo: str) -> FinancialAnalysis:
        """Analisis financiero del periodo."""

    def statistics(self) -> StoreStatistics:
        """Indicadores del panel principal."""

    def notification_counts(self) -> NotificationCounts:
        """Conteos para notificaciones."""

    def recent_activity(self) -> list[Actividad]:
        """Actividad reciente."""

    def current_theme(self) -> str:
        """Tema configurado."""

    def toggle_theme(self) -> str:
        """Alterna el tema."""

    def export_data(self, formato: str) -> str:
        """Exporta los datos en el formato pedido."""


class LocalServerGateway:
    """Implementacion local del gateway sobre un unico libro en memoria.

    Cada llamada se ejecuta bajo un lock: el libro asume acceso exclusivo
    durante sus validaciones y mutaciones.
    """

    def __init__(self, ledger: StoreLedger | None = None) -> None:
        self._ledger = ledger or StoreLedger()
        self._lock = threading.RLock()

    def subscribe(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._ledger.subscribe(callback)

    def add_customer(self, nombre: str, folio: str, telefono: str, email: str) -> Cliente:
        return self._call(
            "registrar cliente",
            lambda: self._ledger.add_customer(nombre, folio, telefono, email),
        )

    def active_customers(self) -> list[Cliente]:
        return self._call("listar clientes", self._ledger.active_customers)

    def add_product(
        self,
        nombre: str,
        precio_costo: float,
        precio_venta: float,
        cantidad: int,
    ) -> Producto:
        return self._call(
            "guardar producto",
            lambda: self._ledger.add_product(nombre, precio_costo, precio_venta, cantidad),
        )

    def search_products(self, termino: str, filtro: str) -> list[Producto]:
        return self._call(
            "buscar productos",
            lambda: self._ledger.filter_products(self._ledger.search_products(termino), filtro),
        )

    def record_sale(self, folio_cliente: str, tipo_pago: str, productos_input: str) -> Venta:
        return self._call(
            "registrar venta",
            lambda: self._ledger.record_sale(folio_cliente, tipo_pago, productos_input),
        )

    def preview_sale(self, productos_input: str) -> SalePreview:
        return self._call(
            "calcular vista previa",
            lambda: self._ledger.preview_sale(productos_input),
        )

    def customer_debt(self, folio: str) -> CustomerDebtSummary | None:
        return self._call("consultar deuda", lambda: self._ledger.customer_debt(folio))

    def purchase_history(self, folio: str) -> list[Venta]:
        return self._call("ver historial", lambda: self._ledger.purchase_history(folio))

    def customers_overdue(self) -> list[CustomerDebt]:
        return self._call("listar clientes en atraso", self._ledger.customers_overdue)

    def customers_with_available_credit(self) -> list[Cliente]:
        return self._call(
            "listar clientes con credito",
            self._ledger.customers_with_available_credit,
        )

    def top_product(self, periodo: str, tipo: str) -> TopProduct | None:
        return self._call("calcular top de productos", lambda: self._ledger.top_product(periodo, tipo))

    def financial_analysis(self, periodo: str) -> FinancialAnalysis:
        return self._call(
            "calcular analisis financiero",
            lambda: self._ledger.financial_analysis(periodo),
        )

    def statistics(self) -> StoreStatistics:
        return self._call("calcular estadisticas", self._ledger.statistics)

    def notification_counts(self) -> NotificationCounts:
        return self._call("calcular notificaciones", self._ledger.notification_counts)

    def recent_activity(self) -> list[Actividad]:
        return self._call("leer actividad", self._ledger.recent_activity)

    def current_theme(self) -> str:
        return self._call("leer tema", lambda: self._ledger.configuracion.tema)

    def toggle_theme(self) -> str:
        return self._call("cambiar tema", self._ledger.toggle_theme)

    def export_data(self, formato: str) -> str:
        return self._call("exportar datos", lambda: self._ledger.export_data(formato))

    def _call(self, operation: str, action: Callable[[], T]) -> T:
        """Ejecuta una operacion del libro bajo lock y normaliza errores inesperados."""
        with self._lock:
            try:
                return action()
            except (*LEDGER_ERRORS, ServiceError):
                raise
            except Exception as exc:
                LOGGER.exception("Fallo inesperado al %s.", operation)
                raise ServiceError(f"No fue posible {operation}.") from exc
