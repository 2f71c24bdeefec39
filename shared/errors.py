"""Excepciones compartidas del proyecto."""

from __future__ import annotations


class ValidationError(Exception):
    """Error de validacion de datos de entrada."""


class DuplicateKeyError(Exception):
    """El folio de cliente ya esta registrado."""


class NotFoundError(Exception):
    """El producto referenciado no existe o esta inactivo."""


class InsufficientStockError(Exception):
    """La cantidad solicitada supera el stock disponible."""


class ServiceError(Exception):
    """Error en la ejecucion de servicios (almacenamiento, exportacion)."""


LEDGER_ERRORS: tuple[type[Exception], ...] = (
    ValidationError,
    DuplicateKeyError,
    NotFoundError,
    InsufficientStockError,
)
