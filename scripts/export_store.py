"""Exporta el estado guardado de la tienda a un archivo JSON o CSV."""

from __future__ import annotations

import argparse
import logging
from datetime import date
from pathlib import Path
from typing import Sequence

from parametros import DATA_DIR, DATABASE_KEY, OUTPUT_DIR
from servidor.services.exporter import EXPORT_FORMATS, FORMAT_JSON, build_export_filename, write_export
from servidor.services.ledger import StoreLedger
from servidor.services.storage import JsonBlobStore
from shared.errors import ServiceError, ValidationError

LOGGER = logging.getLogger(__name__)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parsea argumentos CLI de exportacion."""
    parser = argparse.ArgumentParser(
        description=(
            "Exporta clientes, productos y ventas de DANY-SHOP a "
            "<output-dir>/inventario_<fecha>.<formato>."
        )
    )
    parser.add_argument(
        "--formato",
        choices=EXPORT_FORMATS,
        default=FORMAT_JSON,
        help="Formato de salida (por defecto: json).",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=DATA_DIR,
        help="Directorio donde se guarda el estado de la tienda.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_DIR,
        help="Directorio donde se escribe el archivo exportado.",
    )
    return parser.parse_args(argv)


def configure_logging() -> None:
    """Configura logging para salida en consola."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )


def run_export(
    formato: str,
    data_dir: Path,
    output_dir: Path,
    today: date | None = None,
) -> int:
    """Carga la tienda desde `data_dir` y escribe la exportacion."""
    store = JsonBlobStore(data_dir)
    if not store.path_for(DATABASE_KEY).exists():
        LOGGER.error("No hay datos guardados en: %s", data_dir)
        return 1

    ledger = StoreLedger(store=store)
    if ledger.carga_fallida:
        LOGGER.error("Datos guardados invalidos en: %s", data_dir)
        return 1

    try:
        content = ledger.export_data(formato)
        path = write_export(
            content,
            output_dir,
            build_export_filename(formato, today or ledger.today()),
        )
    except (ValidationError, ServiceError) as exc:
        LOGGER.error("Exportacion fallida: %s", exc)
        return 1

    LOGGER.info(
        "Exportados %d clientes, %d productos y %d ventas en %s",
        len(ledger.clientes),
        len(ledger.productos),
        len(ledger.ventas),
        path,
    )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Punto de entrada CLI."""
    configure_logging()
    args = parse_args(argv)
    return run_export(
        formato=args.formato,
        data_dir=args.data_dir,
        output_dir=args.output_dir,
    )


if __name__ == "__main__":
    raise SystemExit(main())
