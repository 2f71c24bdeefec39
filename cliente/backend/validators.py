"""Validaciones para entradas del cliente."""

from __future__ import annotations

import math
from pathlib import Path

from shared.errors import ValidationError


def validate_output_dir(path: Path) -> None:
    """Valida que la ruta de salida sea utilizable para archivos exportados."""
    if path.exists() and not path.is_dir():
        raise ValidationError(f"La ruta no es un directorio: {path}")

    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ValidationError(f"No se pudo crear/acceder al directorio: {path}") from exc


def parse_price(raw_value: str, field_name: str) -> float:
    """Convierte texto de precio (acepta coma decimal) a float finito."""
    text = (raw_value or "").strip().replace(",", ".")
    if not text:
        raise ValidationError(f"{field_name} es obligatorio.")

    try:
        value = float(text)
    except ValueError as exc:
        raise ValidationError(f"{field_name} invalido: {raw_value}") from exc

    if not math.isfinite(value):
        raise ValidationError(f"{field_name} invalido: {raw_value}")
    return value


def parse_quantity(raw_value: str) -> int:
    """Convierte texto de cantidad a entero; vacio equivale a 0."""
    text = (raw_value or "").strip()
    if not text:
        return 0

    try:
        return int(text)
    except ValueError as exc:
        raise ValidationError(f"Cantidad invalida: {raw_value}") from exc
