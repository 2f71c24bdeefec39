"""Formateo de textos para ticket de venta y consulta de deuda."""

from __future__ import annotations

from parametros import APP_NAME
from servidor.domain.models import Venta
from servidor.services.ledger_utils import format_money
from shared.protocol import CustomerDebtSummary, SalePreview

TICKET_SEPARATOR = "-" * 30
_NAME_WIDTH = 15


def format_sale_ticket(venta: Venta) -> str:
    """Construye el ticket de texto plano de una venta."""
    lines = [
        APP_NAME,
        f"Fecha: {venta.fecha} {venta.hora}",
        f"Tipo: {venta.tipo_pago}",
    ]
    if not venta.es_anonima:
        lines.append(f"Cliente: {venta.folio_cliente}")

    lines.append(TICKET_SEPARATOR)
    for linea in venta.productos:
        lines.append(
            f"{linea.nombre.ljust(_NAME_WIDTH)} x{linea.cantidad} {format_money(linea.subtotal)}"
        )
    lines.append(TICKET_SEPARATOR)
    lines.append(f"TOTAL: {format_money(venta.total)}")
    return "\n".join(lines) + "\n"


def format_sale_preview(preview: SalePreview) -> str:
    """Lista las lineas de una vista previa con su subtotal."""
    lines = [
        f"{linea.nombre} (ID: {linea.producto_id} x {linea.cantidad}) "
        f"{format_money(linea.subtotal)}"
        for linea in preview.lineas
    ]
    lines.append(f"Total: {format_money(preview.total)}")
    return "\n".join(lines)


def format_debt_summary(summary: CustomerDebtSummary) -> str:
    """Resume la deuda de un cliente para mostrar en pantalla."""
    estado = "Al corriente" if summary.al_corriente else "Pendiente"
    lines = [
        f"{summary.cliente.nombre} ({summary.cliente.folio})",
        f"Deuda: {format_money(summary.deuda)}",
        estado,
    ]
    if summary.cliente.telefono:
        lines.append(f"Tel: {summary.cliente.telefono}")
    return "\n".join(lines)
