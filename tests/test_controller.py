"""Tests de AppController y LocalServerGateway."""

from __future__ import annotations

import json
import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path
from unittest import mock

from cliente.backend.controller import AppController
from cliente.backend.gateway import LocalServerGateway
from parametros import PAYMENT_CASH, PAYMENT_CREDIT
from servidor.services.exporter import FORMAT_CSV, FORMAT_JSON
from servidor.services.ledger import FILTER_LOW_STOCK, StoreLedger
from servidor.services.storage import JsonBlobStore
from shared.errors import DuplicateKeyError, ServiceError, ValidationError
from shared.protocol import CustomerDraft, ProductDraft, SaleDraft

NOW = datetime(2026, 3, 10, 12, 0, 0)


class AppControllerTests(unittest.TestCase):
    """Valida conversion de formularios y consultas del controller."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp_dir.cleanup)
        base_path = Path(self._temp_dir.name)
        self.ledger = StoreLedger(store=JsonBlobStore(base_path / "data"), clock=lambda: NOW)
        self.gateway = LocalServerGateway(self.ledger)
        self.output_dir = base_path / "output"
        self.controller = AppController(
            gateway=self.gateway,
            output_dir=self.output_dir,
            today=lambda: date(2026, 3, 10),
        )

    def _add_rice(self) -> None:
        self.controller.on_save_product(
            ProductDraft(nombre=" Arroz ", precio_costo="10,50", precio_venta="15", cantidad="20")
        )

    def test_save_product_parses_form_text(self) -> None:
        self._add_rice()

        producto = self.ledger.find_product_by_id(1)
        self.assertEqual(producto.nombre, "Arroz")
        self.assertEqual(producto.precio_costo, 10.5)
        self.assertEqual(producto.cantidad, 20)

    def test_save_product_empty_quantity_defaults_to_zero(self) -> None:
        producto = self.controller.on_save_product(
            ProductDraft(nombre="Sal", precio_costo="3", precio_venta="5")
        )

        self.assertEqual(producto.cantidad, 0)

    def test_save_product_invalid_numbers(self) -> None:
        drafts = (
            ProductDraft(nombre="Sal", precio_costo="", precio_venta="5"),
            ProductDraft(nombre="Sal", precio_costo="abc", precio_venta="5"),
            ProductDraft(nombre="Sal", precio_costo="3", precio_venta="nan"),
            ProductDraft(nombre="Sal", precio_costo="3", precio_venta="5", cantidad="2.5"),
        )
        for draft in drafts:
            with self.subTest(draft=draft):
                with self.assertRaises(ValidationError):
                    self.controller.on_save_product(draft)
        self.assertEqual(self.ledger.productos, [])

    def test_register_customer_and_duplicate(self) -> None:
        cliente = self.controller.on_register_customer(
            CustomerDraft(nombre=" Ana ", folio=" CLI-001 ", telefono=" 555 ")
        )

        self.assertEqual((cliente.nombre, cliente.folio, cliente.telefono), ("Ana", "CLI-001", "555"))
        self.assertEqual(self.controller.customer_options(), [("CLI-001", "Ana")])
        with self.assertRaises(DuplicateKeyError):
            self.controller.on_register_customer(CustomerDraft(nombre="Otra", folio="CLI-001"))

    def test_record_sale_and_ticket(self) -> None:
        self._add_rice()
        self.controller.on_register_customer(CustomerDraft(nombre="Ana", folio="CLI-001"))

        venta = self.controller.on_record_sale(
            SaleDraft(folio_cliente=" CLI-001 ", tipo_pago=PAYMENT_CREDIT, productos_input=" 1:2 ")
        )

        self.assertEqual(venta.folio_cliente, "CLI-001")
        self.assertIn("TOTAL: $30.00", self.controller.build_ticket(venta))
        self.assertEqual(self.controller.on_query_debt("CLI-001").deuda, 30)
        self.assertEqual(len(self.controller.on_purchase_history("CLI-001")), 1)
        self.assertEqual([c.folio for c in self.controller.customers_with_credit()], ["CLI-001"])
        self.assertEqual(self.controller.overdue_customers(), [])

    def test_preview_without_known_products_fails(self) -> None:
        self._add_rice()

        with self.assertRaises(ValidationError):
            self.controller.on_preview_sale("99:1")
        self.assertEqual(self.controller.on_preview_sale("1:2").total, 30)

    def test_search_inventory_applies_filter(self) -> None:
        self._add_rice()
        self.controller.on_save_product(
            ProductDraft(nombre="Leche", precio_costo="15", precio_venta="22", cantidad="5")
        )

        resultado = self.controller.on_search_inventory("", FILTER_LOW_STOCK)
        self.assertEqual([p.nombre for p in resultado], ["Leche"])

    def test_notifications_message(self) -> None:
        counts, message = self.controller.notifications()
        self.assertEqual(counts.total, 0)
        self.assertEqual(message, "Sin notificaciones")

        self.controller.on_save_product(
            ProductDraft(nombre="Leche", precio_costo="15", precio_venta="22", cantidad="5")
        )
        _, message = self.controller.notifications()
        self.assertEqual(message, "0 cliente(s) en atraso\n1 producto(s) con stock bajo")

    def test_export_writes_dated_file(self) -> None:
        self._add_rice()

        json_path = self.controller.on_export(FORMAT_JSON)
        csv_path = self.controller.on_export(FORMAT_CSV)

        self.assertEqual(json_path, self.output_dir / "inventario_2026-03-10.json")
        self.assertEqual(json.loads(json_path.read_text(encoding="utf-8"))["products"][0]["id"], 1)
        self.assertTrue(csv_path.read_text(encoding="utf-8").startswith("Tipo,Datos\n"))

    def test_export_rejects_unknown_format(self) -> None:
        with self.assertRaises(ValidationError):
            self.controller.on_export("xml")
        self.assertFalse(self.output_dir.exists())

    def test_toggle_theme_and_dashboard(self) -> None:
        tema = self.controller.on_toggle_theme()

        self.assertEqual(self.controller.current_theme(), tema)
        self.assertEqual(self.controller.dashboard().total_productos, 0)
        self.assertEqual(len(self.controller.recent_activity()), 0)

    def test_subscribe_receives_changes(self) -> None:
        callback = mock.Mock()
        self.controller.subscribe(callback)

        self._add_rice()

        callback.assert_called_once_with()

    def test_margin_preview(self) -> None:
        self.assertAlmostEqual(AppController.build_margin_preview("10", "15"), 50.0)
        self.assertEqual(AppController.build_margin_preview("0", "15"), 0.0)
        self.assertEqual(AppController.build_margin_preview("abc", "15"), 0.0)
        self.assertEqual(AppController.payment_types(), (PAYMENT_CASH, PAYMENT_CREDIT))

    def test_on_exit_accepts_callable_or_app(self) -> None:
        quit_callback = mock.Mock()
        self.controller.on_exit(quit_callback)
        quit_callback.assert_called_once_with()

        app = mock.NonCallableMock(spec=["quit"])
        self.controller.on_exit(app)
        app.quit.assert_called_once_with()


class LocalServerGatewayTests(unittest.TestCase):
    """Valida la normalizacion de errores en el gateway."""

    def setUp(self) -> None:
        self.ledger = mock.Mock(spec=StoreLedger)
        self.gateway = LocalServerGateway(self.ledger)

    def test_domain_errors_pass_through(self) -> None:
        self.ledger.add_customer.side_effect = DuplicateKeyError("El folio ya existe")

        with self.assertRaises(DuplicateKeyError):
            self.gateway.add_customer("Ana", "CLI-001", "", "")

    def test_unexpected_errors_become_service_error(self) -> None:
        self.ledger.statistics.side_effect = KeyError("boom")

        with self.assertLogs("cliente.backend.gateway", level="ERROR"):
            with self.assertRaises(ServiceError) as context:
                self.gateway.statistics()

        self.assertEqual(str(context.exception), "No fue posible calcular estadisticas.")
        self.assertIsInstance(context.exception.__cause__, KeyError)

    def test_search_combines_search_and_filter(self) -> None:
        self.ledger.search_products.return_value = ["a"]
        self.ledger.filter_products.return_value = ["b"]

        self.assertEqual(self.gateway.search_products("arr", FILTER_LOW_STOCK), ["b"])
        self.ledger.search_products.assert_called_once_with("arr")
        self.ledger.filter_products.assert_called_once_with(["a"], FILTER_LOW_STOCK)


if __name__ == "__main__":
    unittest.main()
