"""Esquema de columnas para la exportacion CSV de la tienda."""

from __future__ import annotations

EXPORT_PREAMBLE: tuple[str, str] = ("Tipo", "Datos")

CUSTOMERS_SECTION = "Clientes"
PRODUCTS_SECTION = "Productos"

CUSTOMER_EXPORT_HEADERS: tuple[str, ...] = (
    "ID",
    "Nombre",
    "Folio",
    "Telefono",
    "Email",
    "FechaRegistro",
)

PRODUCT_EXPORT_HEADERS: tuple[str, ...] = (
    "ID",
    "Nombre",
    "PrecioCosto",
    "PrecioVenta",
    "Cantidad",
)

# Atributo del modelo que alimenta cada columna exportada.
CUSTOMER_EXPORT_FIELDS: dict[str, str] = {
    "ID": "id",
    "Nombre": "nombre",
    "Folio": "folio",
    "Telefono": "telefono",
    "Email": "email",
    "FechaRegistro": "fecha_registro",
}

PRODUCT_EXPORT_FIELDS: dict[str, str] = {
    "ID": "id",
    "Nombre": "nombre",
    "PrecioCosto": "precio_costo",
    "PrecioVenta": "precio_venta",
    "Cantidad": "cantidad",
}

