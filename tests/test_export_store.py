"""Tests del script CLI de exportacion."""

from __future__ import annotations

import csv
import json
import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path

from parametros import DATABASE_KEY, PAYMENT_CASH
from scripts.export_store import main, parse_args, run_export
from servidor.services.ledger import StoreLedger
from servidor.services.storage import JsonBlobStore


class ExportStoreScriptTests(unittest.TestCase):
    """Valida argumentos, exportacion y codigos de salida."""

    def _seed_store(self, data_dir: Path) -> None:
        ledger = StoreLedger(
            store=JsonBlobStore(data_dir),
            clock=lambda: datetime(2026, 3, 10, 12, 0, 0),
        )
        ledger.add_customer("Ana", "CLI-001")
        ledger.add_product("Arroz", 10, 15, 20)
        ledger.record_sale(None, PAYMENT_CASH, "1:2")

    def test_parse_args_defaults_to_json(self) -> None:
        args = parse_args([])

        self.assertEqual(args.formato, "json")

    def test_parse_args_rejects_unknown_format(self) -> None:
        with self.assertRaises(SystemExit):
            parse_args(["--formato", "xml"])

    def test_json_export(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base_path = Path(temp_dir)
            self._seed_store(base_path / "data")

            exit_code = run_export(
                formato="json",
                data_dir=base_path / "data",
                output_dir=base_path / "out",
                today=date(2026, 3, 11),
            )

            self.assertEqual(exit_code, 0)
            payload = json.loads(
                (base_path / "out" / "inventario_2026-03-11.json").read_text(encoding="utf-8")
            )
            self.assertEqual(len(payload["sales"]), 1)
            self.assertEqual(payload["products"][0]["cantidad"], 18)

    def test_csv_export_through_main(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base_path = Path(temp_dir)
            self._seed_store(base_path / "data")

            exit_code = main(
                [
                    "--formato",
                    "csv",
                    "--data-dir",
                    str(base_path / "data"),
                    "--output-dir",
                    str(base_path / "out"),
                ]
            )

            self.assertEqual(exit_code, 0)
            exported = list((base_path / "out").glob("inventario_*.csv"))
            self.assertEqual(len(exported), 1)
            with exported[0].open("r", newline="", encoding="utf-8") as csv_file:
                rows = list(csv.reader(csv_file))
            self.assertEqual(rows[1], ["Clientes"])
            self.assertIn(["Productos"], rows)

    def test_missing_store_returns_error_code(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base_path = Path(temp_dir)

            with self.assertLogs("scripts.export_store", level="ERROR"):
                exit_code = run_export("json", base_path / "vacio", base_path / "out")

            self.assertEqual(exit_code, 1)
            self.assertFalse((base_path / "out").exists())

    def test_corrupt_store_returns_error_code(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            base_path = Path(temp_dir)
            data_dir = base_path / "data"
            data_dir.mkdir()
            (data_dir / f"{DATABASE_KEY}.json").write_text("{no es json", encoding="utf-8")

            with self.assertLogs("scripts.export_store", level="ERROR"):
                exit_code = run_export("json", data_dir, base_path / "out")

            self.assertEqual(exit_code, 1)
            self.assertFalse((base_path / "out").exists())


if __name__ == "__main__":
    unittest.main()
