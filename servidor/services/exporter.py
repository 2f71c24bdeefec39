"""Exportacion del estado de la tienda a JSON o CSV."""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Iterable
from datetime import date
from io import StringIO
from pathlib import Path
from typing import Any

from parametros import DEFAULT_EXPORT_FILENAME_STEM
from servidor.domain.models import Cliente, Metricas, Producto, Venta
from shared.csv_schema import (
    CUSTOMER_EXPORT_FIELDS,
    CUSTOMER_EXPORT_HEADERS,
    CUSTOMERS_SECTION,
    EXPORT_PREAMBLE,
    PRODUCT_EXPORT_FIELDS,
    PRODUCT_EXPORT_HEADERS,
    PRODUCTS_SECTION,
)
from shared.errors import ServiceError

LOGGER = logging.getLogger(__name__)

FORMAT_JSON = "json"
FORMAT_CSV = "csv"
EXPORT_FORMATS: tuple[str, ...] = (FORMAT_JSON, FORMAT_CSV)


def build_export_payload(
    clientes: Iterable[Cliente],
    productos: Iterable[Producto],
    ventas: Iterable[Venta],
    metricas: Metricas,
    exported_at: str,
) -> dict[str, Any]:
    """Arma el objeto exportable con copias serializadas de cada coleccion."""
    return {
        "customers": [cliente.to_dict() for cliente in clientes],
        "products": [producto.to_dict() for producto in productos],
        "sales": [venta.to_dict() for venta in ventas],
        "metrics": metricas.to_dict(),
        "exportedAt": exported_at,
    }


def to_json(payload: dict[str, Any]) -> str:
    """Serializa el payload como JSON indentado."""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def to_csv(payload: dict[str, Any]) -> str:
    """Serializa clientes y productos en un CSV de dos secciones (sin ventas)."""
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow(EXPORT_PREAMBLE)
    writer.writerow([CUSTOMERS_SECTION])
    writer.writerow(CUSTOMER_EXPORT_HEADERS)
    for cliente in payload.get("customers", []):
        writer.writerow(_row_from_record(cliente, CUSTOMER_EXPORT_HEADERS, CUSTOMER_EXPORT_FIELDS))

    writer.writerow([])
    writer.writerow([PRODUCTS_SECTION])
    writer.writerow(PRODUCT_EXPORT_HEADERS)
    for producto in payload.get("products", []):
        writer.writerow(_row_from_record(producto, PRODUCT_EXPORT_HEADERS, PRODUCT_EXPORT_FIELDS))

    return buffer.getvalue()


def build_export_filename(formato: str, fecha: date) -> str:
    """Nombre de archivo de exportacion, ej. `inventario_2026-10-17.json`."""
    return f"{DEFAULT_EXPORT_FILENAME_STEM}_{fecha.isoformat()}.{formato}"


def write_export(content: str, output_dir: Path, filename: str) -> Path:
    """Escribe el contenido exportado y retorna su ruta."""
    if output_dir.exists() and not output_dir.is_dir():
        raise ServiceError(f"La ruta de salida no es un directorio: {output_dir}")

    output_path = output_dir / filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8", newline="")
    except OSError as exc:
        raise ServiceError(f"No fue posible escribir la exportacion: {output_path}") from exc

    LOGGER.info("Exportacion escrita en: %s", output_path)
    return output_path


def _row_from_record(
    record: dict[str, Any],
    headers: tuple[str, ...],
    fields: dict[str, str],
) -> list[str]:
    row: list[str] = []
    for header in headers:
        value = record.get(fields[header])
        row.append("" if value is None else str(value))
    return row
