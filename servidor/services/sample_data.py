"""Datos de ejemplo para una tienda vacia."""

from __future__ import annotations

import logging

from parametros import APP_NAME
from servidor.domain.activity import CATEGORY_SYSTEM
from servidor.services.ledger import StoreLedger
from shared.errors import DuplicateKeyError, ValidationError

LOGGER = logging.getLogger(__name__)

# (nombre, precio_costo, precio_venta, cantidad)
SAMPLE_PRODUCTS: tuple[tuple[str, float, float, int], ...] = (
    ("Arroz Integral", 12.0, 18.0, 25),
    ("Frijoles Negros", 10.0, 15.0, 30),
    ("Leche Deslactosada", 15.0, 22.0, 5),
    ("Aceite de Oliva", 25.0, 35.0, 12),
    ("Azúcar Morena", 8.0, 12.0, 40),
    ("Café Molido", 30.0, 45.0, 8),
    ("Galletas Integrales", 7.0, 12.0, 22),
    ("Jabón Líquido", 18.0, 25.0, 15),
)

# (nombre, folio, telefono, email)
SAMPLE_CUSTOMERS: tuple[tuple[str, str, str, str], ...] = (
    ("Ana García López", "CLI-001", "555-123-4567", "ana.garcia@email.com"),
    ("Carlos Mendoza Ruiz", "CLI-002", "555-987-6543", "carlos.mendoza@email.com"),
)


def seed_sample_data(ledger: StoreLedger) -> bool:
    """Carga productos y clientes de ejemplo si las colecciones estan vacias.

    Retorna True si se agrego algun dato.
    """
    seeded = False

    if not ledger.productos:
        for nombre, precio_costo, precio_venta, cantidad in SAMPLE_PRODUCTS:
            ledger.add_product(nombre, precio_costo, precio_venta, cantidad)
        seeded = True

    if not ledger.clientes:
        for nombre, folio, telefono, email in SAMPLE_CUSTOMERS:
            try:
                ledger.add_customer(nombre, folio, telefono, email)
            except (ValidationError, DuplicateKeyError):
                LOGGER.exception("Error agregando cliente de ejemplo: %s", folio)
        seeded = True

    if seeded:
        ledger.log_activity(CATEGORY_SYSTEM, f"Sistema {APP_NAME} inicializado")
        ledger.save()
        LOGGER.info("Datos de ejemplo cargados.")

    return seeded
