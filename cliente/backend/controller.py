"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from parametros import OUTPUT_DIR, PAYMENT_CASH, PAYMENT_CREDIT
from servidor.domain.activity import Actividad
from servidor.domain.models import Cliente, Producto, Venta
from servidor.services.exporter import EXPORT_FORMATS, build_export_filename, write_export
from shared.errors import ValidationError
from shared.protocol import (
    CustomerDebt,
    CustomerDebtSummary,
    CustomerDraft,
    FinancialAnalysis,
    NotificationCounts,
    ProductDraft,
    SaleDraft,
    SalePreview,
    StoreStatistics,
    TopProduct,
)

from .gateway import ServerGateway
from .ticket_formatter import format_sale_ticket
from .validators import parse_price, parse_quantity, validate_output_dir

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

LOGGER = logging.getLogger(__name__)


class AppController:
    """Coordina acciones de UI y servicios de negocio."""

    def __init__(
        self,
        gateway: ServerGateway,
        output_dir: Path = OUTPUT_DIR,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._gateway = gateway
        self._output_dir = output_dir
        self._today = today

    def subscribe(self, callback: Callable[[], None]) -> None:
        """Conecta un callback de refresco a los cambios del libro."""
        self._gateway.subscribe(callback)

    def on_register_customer(self, draft: CustomerDraft) -> Cliente:
        """Registra un cliente desde el formulario."""
        cliente = self._gateway.add_customer(
            draft.nombre.strip(),
            draft.folio.strip(),
            draft.telefono.strip(),
            draft.email.strip(),
        )
        LOGGER.info("Cliente registrado desde UI: folio=%s", cliente.folio)
        return cliente

    def on_save_product(self, draft: ProductDraft) -> Producto:
        """Valida numeros del formulario y crea o actualiza el producto."""
        precio_costo = parse_price(draft.precio_costo, "Precio de costo")
        precio_venta = parse_price(draft.precio_venta, "Precio de venta")
        cantidad = parse_quantity(draft.cantidad)

        producto = self._gateway.add_product(
            draft.nombre.strip(),
            precio_costo,
            precio_venta,
            cantidad,
        )
        LOGGER.info("Producto guardado desde UI: id=%s", producto.id)
        return producto

    def on_record_sale(self, draft: SaleDraft) -> Venta:
        """Registra la venta del formulario."""
        venta = self._gateway.record_sale(
            draft.folio_cliente.strip(),
            draft.tipo_pago.strip(),
            draft.productos_input.strip(),
        )
        LOGGER.info("Venta registrada desde UI: id=%s", venta.id)
        return venta

    def on_preview_sale(self, productos_input: str) -> SalePreview:
        """Calcula la vista previa; falla si ninguna linea corresponde a un producto."""
        preview = self._gateway.preview_sale(productos_input.strip())
        if not preview.lineas:
            raise ValidationError("No se encontraron productos.")
        return preview

    def on_query_debt(self, folio: str) -> CustomerDebtSummary | None:
        """Consulta la deuda de un folio; None si el cliente no existe."""
        return self._gateway.customer_debt(folio.strip())

    def on_purchase_history(self, folio: str) -> list[Venta]:
        """Historial de compras de un folio."""
        return self._gateway.purchase_history(folio.strip())

    def on_search_inventory(self, termino: str, filtro: str) -> list[Producto]:
        """Busca y filtra productos para la vista de inventario."""
        return self._gateway.search_products(termino.strip(), filtro)

    def on_toggle_theme(self) -> str:
        tema = self._gateway.toggle_theme()
        LOGGER.info("Tema cambiado a: %s", tema)
        return tema

    def current_theme(self) -> str:
        return self._gateway.current_theme()

    def on_export(self, formato: str, output_dir: Path | None = None) -> Path:
        """Exporta los datos a un archivo `inventario_<fecha>.<formato>`."""
        if formato not in EXPORT_FORMATS:
            raise ValidationError(f"Formato de exportacion invalido: {formato}")

        target_dir = output_dir or self._output_dir
        validate_output_dir(target_dir)
        content = self._gateway.export_data(formato)
        return write_export(content, target_dir, build_export_filename(formato, self._today()))

    def dashboard(self) -> StoreStatistics:
        return self._gateway.statistics()

    def recent_activity(self) -> list[Actividad]:
        return self._gateway.recent_activity()

    def customer_options(self) -> list[tuple[str, str]]:
        """Pares (folio, nombre) de clientes activos para listas desplegables."""
        return [(cliente.folio, cliente.nombre) for cliente in self._gateway.active_customers()]

    def overdue_customers(self) -> list[CustomerDebt]:
        return self._gateway.customers_overdue()

    def customers_with_credit(self) -> list[Cliente]:
        return self._gateway.customers_with_available_credit()

    def top_product(self, periodo: str, tipo: str) -> TopProduct | None:
        return self._gateway.top_product(periodo, tipo)

    def financial_analysis(self, periodo: str) -> FinancialAnalysis:
        return self._gateway.financial_analysis(periodo)

    def notifications(self) -> tuple[NotificationCounts, str]:
        """Conteos de notificaciones y el mensaje a mostrar."""
        counts = self._gateway.notification_counts()
        if counts.total == 0:
            return counts, "Sin notificaciones"

        message = (
            f"{counts.clientes_en_atraso} cliente(s) en atraso\n"
            f"{counts.productos_stock_bajo} producto(s) con stock bajo"
        )
        return counts, message

    def on_exit(
        self,
        app: QApplication | Callable[[], None] | None,
    ) -> None:
        """Cierra la aplicacion."""
        LOGGER.info("Accion ejecutada: salir")

        if callable(app):
            app()
            return

        if app is not None:
            app.quit()

    @staticmethod
    def build_ticket(venta: Venta) -> str:
        return format_sale_ticket(venta)

    @staticmethod
    def build_margin_preview(precio_costo: str, precio_venta: str) -> float:
        """Margen porcentual sobre el costo para la vista previa del producto."""
        try:
            costo = float((precio_costo or "").strip().replace(",", ".") or 0)
            venta = float((precio_venta or "").strip().replace(",", ".") or 0)
        except ValueError:
            return 0.0
        return (venta - costo) / costo * 100 if costo > 0 else 0.0

    @staticmethod
    def payment_types() -> tuple[str, str]:
        return PAYMENT_CASH, PAYMENT_CREDIT
