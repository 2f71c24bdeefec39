"""Almacen clave -> JSON en disco para el estado de la tienda."""

from __future__ import annotations

import json
import logging
import re
from pathlib import Path
from typing import Any

from parametros import DATA_DIR
from shared.errors import ServiceError

LOGGER = logging.getLogger(__name__)


class JsonBlobStore:
    """Guarda un objeto JSON por clave, un archivo `<clave>.json` por entrada."""

    _KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

    def __init__(self, data_dir: Path = DATA_DIR) -> None:
        self._data_dir = data_dir

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """Ruta del archivo asociado a una clave."""
        if not self._KEY_PATTERN.fullmatch(key):
            raise ServiceError(f"Clave de almacenamiento invalida: {key!r}")
        return self._data_dir / f"{key}.json"

    def read_blob(self, key: str) -> dict[str, Any] | None:
        """Lee el objeto guardado bajo `key`; retorna None si no existe."""
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            raw_text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ServiceError(f"No fue posible leer {path.name}.") from exc

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as exc:
            raise ServiceError(f"{path.name} tiene formato invalido.") from exc

        if data is None:
            return None
        if not isinstance(data, dict):
            raise ServiceError(f"{path.name} debe ser un objeto JSON.")
        return data

    def write_blob(self, key: str, data: dict[str, Any]) -> None:
        """Escribe el objeto de manera segura (temp + replace)."""
        path = self.path_for(key)
        temp_path = path.with_name(f"{path.name}.tmp")
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            serialized = json.dumps(data, ensure_ascii=False, indent=2)
            temp_path.write_text(serialized + "\n", encoding="utf-8")
            temp_path.replace(path)
        except (OSError, TypeError, ValueError) as exc:
            raise ServiceError(f"No fue posible persistir {path.name}.") from exc
        finally:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)

        LOGGER.debug("Estado persistido en: %s", path)

