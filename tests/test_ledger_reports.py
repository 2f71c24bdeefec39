"""Tests de credito, deudas y reportes del libro."""

from __future__ import annotations

import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from parametros import DATABASE_KEY, PAYMENT_CASH, PAYMENT_CREDIT
from servidor.services.ledger import TOP_LEAST, TOP_MOST, StoreLedger
from servidor.services.ledger_utils import PERIOD_ALL, PERIOD_TODAY, PERIOD_WEEK
from servidor.services.storage import JsonBlobStore
from shared.errors import ValidationError


class _Clock:
    """Reloj ajustable para fechar ventas en el pasado."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class LedgerCreditTests(unittest.TestCase):
    """Valida clientes en atraso, credito vigente y consulta de deuda."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp_dir.cleanup)
        self.clock = _Clock(datetime(2026, 3, 1, 9, 0, 0))
        self.ledger = StoreLedger(
            store=JsonBlobStore(Path(self._temp_dir.name)),
            clock=self.clock,
            grace_days=7,
        )
        self.ledger.add_product("Arroz", 10, 20, 100)
        self.ledger.add_customer("Ana", "CLI-001")
        self.ledger.add_customer("Carlos", "CLI-002")

    def _deactivate_first(self, coleccion: str) -> None:
        """Marca inactivo el primer registro guardado y recarga el libro."""
        store = JsonBlobStore(Path(self._temp_dir.name))
        blob = store.read_blob(DATABASE_KEY)
        blob[coleccion][0]["activo"] = False
        store.write_blob(DATABASE_KEY, blob)
        self.ledger.load()

    def test_overdue_boundary(self) -> None:
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:1")

        self.clock.now = datetime(2026, 3, 8, 18, 0, 0)
        self.assertEqual(self.ledger.customers_overdue(), [])
        self.assertEqual([c.folio for c in self.ledger.customers_with_available_credit()], ["CLI-001"])

        self.clock.now = datetime(2026, 3, 9, 8, 0, 0)
        overdue = self.ledger.customers_overdue()
        self.assertEqual([item.cliente.folio for item in overdue], ["CLI-001"])
        self.assertEqual(self.ledger.customers_with_available_credit(), [])

    def test_overdue_debt_sums_all_unpaid_credit_sales(self) -> None:
        """La deuda incluye ventas aun dentro de la gracia; los dias salen de la venta vencida."""
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:1")
        self.clock.now = datetime(2026, 3, 7, 9, 0, 0)
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:2")
        self.ledger.record_sale("CLI-001", PAYMENT_CASH, "1:5")

        self.clock.now = datetime(2026, 3, 10, 12, 0, 0)
        overdue = self.ledger.customers_overdue()

        self.assertEqual(len(overdue), 1)
        self.assertEqual(overdue[0].deuda, 60)
        # 9.5 dias transcurridos -> 10 - 7
        self.assertEqual(overdue[0].dias_atraso, 3)
        self.assertEqual(
            [c.folio for c in self.ledger.customers_with_available_credit()],
            ["CLI-001"],
        )

    def test_overdue_order_follows_sales(self) -> None:
        self.ledger.record_sale("CLI-002", PAYMENT_CREDIT, "1:1")
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:1")
        self.ledger.record_sale("CLI-002", PAYMENT_CREDIT, "1:1")

        self.clock.now = datetime(2026, 4, 1, 9, 0, 0)
        overdue = self.ledger.customers_overdue()

        self.assertEqual([item.cliente.folio for item in overdue], ["CLI-002", "CLI-001"])
        self.assertEqual(overdue[0].deuda, 40)

    def test_credit_sale_without_date_is_skipped(self) -> None:
        """Una venta guardada sin fecha no rompe las consultas de credito."""
        store = JsonBlobStore(Path(self._temp_dir.name))
        blob = store.read_blob(DATABASE_KEY)
        blob["sales"] = [{"id": 1, "folio_cliente": "CLI-001", "tipo_pago": PAYMENT_CREDIT, "total": 10}]
        store.write_blob(DATABASE_KEY, blob)
        self.ledger.load()

        self.clock.now = datetime(2026, 4, 1, 9, 0, 0)
        with self.assertLogs("servidor.services.ledger", level="WARNING"):
            self.assertEqual(self.ledger.customers_overdue(), [])
            self.assertEqual(self.ledger.customers_with_available_credit(), [])
            self.assertEqual(self.ledger.notification_counts().clientes_en_atraso, 0)
        self.assertEqual(self.ledger.customer_debt("CLI-001").deuda, 10)

    def test_inactive_customer_is_not_reported(self) -> None:
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:1")
        self._deactivate_first("customers")

        self.clock.now = datetime(2026, 4, 1, 9, 0, 0)
        self.assertEqual(self.ledger.customers_overdue(), [])

    def test_customer_debt_summary(self) -> None:
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:3")

        summary = self.ledger.customer_debt("CLI-001")
        self.assertEqual(summary.deuda, 60)
        self.assertFalse(summary.al_corriente)
        self.assertTrue(self.ledger.customer_debt("CLI-002").al_corriente)
        self.assertIsNone(self.ledger.customer_debt("NO-EXISTE"))

    def test_notification_counts(self) -> None:
        self.ledger.add_product("Leche", 15, 22, 5)
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:1")
        self.clock.now = datetime(2026, 4, 1, 9, 0, 0)

        counts = self.ledger.notification_counts()
        self.assertEqual(counts.clientes_en_atraso, 1)
        self.assertEqual(counts.productos_stock_bajo, 1)
        self.assertEqual(counts.total, 2)


class LedgerReportTests(unittest.TestCase):
    """Valida top de productos, analisis financiero y estadisticas."""

    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self._temp_dir.cleanup)
        self.clock = _Clock(datetime(2026, 3, 1, 9, 0, 0))
        self.ledger = StoreLedger(
            store=JsonBlobStore(Path(self._temp_dir.name)),
            clock=self.clock,
        )
        self.ledger.add_product("Arroz", 10, 15, 100)
        self.ledger.add_product("Frijol", 8, 12, 100)
        self.ledger.add_product("Cafe", 30, 45, 100)

    def test_financial_analysis_today_without_sales(self) -> None:
        """Sin ventas hoy: total y margen en cero; la inversion no depende del periodo."""
        self.ledger.record_sale(None, PAYMENT_CASH, "1:2")
        self.clock.now = datetime(2026, 3, 10, 9, 0, 0)

        analisis = self.ledger.financial_analysis(PERIOD_TODAY)

        self.assertEqual(analisis.total_ventas, 0)
        self.assertEqual(analisis.margen_ganancia, 0)
        self.assertEqual(analisis.cantidad_ventas, 0)
        self.assertEqual(analisis.total_inversion, 10 * 98 + 8 * 100 + 30 * 100)

    def test_financial_analysis_all_periods(self) -> None:
        self.ledger.record_sale(None, PAYMENT_CASH, "1:2, 2:1")

        analisis = self.ledger.financial_analysis(PERIOD_ALL)

        self.assertEqual(analisis.total_ventas, 42)
        self.assertEqual(analisis.costo_total_ventas, 28)
        self.assertEqual(analisis.ganancia_total, 14)
        self.assertAlmostEqual(analisis.margen_ganancia, 14 / 42 * 100)
        self.assertEqual(analisis.periodo, PERIOD_ALL)

    def test_invalid_period_raises_validation_error(self) -> None:
        with self.assertRaises(ValidationError):
            self.ledger.financial_analysis("siglo")
        with self.assertRaises(ValidationError):
            self.ledger.top_product(PERIOD_TODAY, TOP_MOST)
        with self.assertRaises(ValidationError):
            self.ledger.top_product(PERIOD_WEEK, "medio")

    def test_top_product_most_and_least(self) -> None:
        self.ledger.record_sale(None, PAYMENT_CASH, "1:2, 2:5")
        self.ledger.record_sale(None, PAYMENT_CASH, "3:1, 1:1")

        most = self.ledger.top_product(PERIOD_WEEK, TOP_MOST)
        least = self.ledger.top_product(PERIOD_WEEK, TOP_LEAST)

        self.assertEqual((most.producto_id, most.cantidad), (2, 5))
        self.assertEqual(most.producto.nombre, "Frijol")
        self.assertEqual((least.producto_id, least.cantidad), (3, 1))

    def test_top_product_tie_keeps_first_seen(self) -> None:
        self.ledger.record_sale(None, PAYMENT_CASH, "2:3, 1:3")

        self.assertEqual(self.ledger.top_product(PERIOD_WEEK, TOP_MOST).producto_id, 2)
        self.assertEqual(self.ledger.top_product(PERIOD_WEEK, TOP_LEAST).producto_id, 2)

    def test_top_product_respects_period(self) -> None:
        self.ledger.record_sale(None, PAYMENT_CASH, "1:9")
        self.clock.now = datetime(2026, 3, 20, 9, 0, 0)
        self.ledger.record_sale(None, PAYMENT_CASH, "3:1")

        self.assertEqual(self.ledger.top_product(PERIOD_WEEK, TOP_MOST).producto_id, 3)
        self.assertEqual(self.ledger.top_product(PERIOD_ALL, TOP_MOST).producto_id, 1)

    def test_top_product_without_sales_is_none(self) -> None:
        self.assertIsNone(self.ledger.top_product(PERIOD_WEEK, TOP_MOST))

    def test_statistics(self) -> None:
        self.ledger.add_customer("Ana", "CLI-001")
        self.ledger.record_sale("CLI-001", PAYMENT_CREDIT, "1:2")
        self.ledger.record_sale(None, PAYMENT_CASH, "2:1")

        stats = self.ledger.statistics()

        self.assertEqual(stats.total_clientes, 1)
        self.assertEqual(stats.total_productos, 3)
        self.assertEqual(stats.total_ventas, 2)
        self.assertEqual(stats.deuda_total, 30)
        self.assertEqual(stats.ventas_semana, 2)
        self.assertEqual(stats.productos_stock_bajo, 0)
        self.assertEqual(stats.productos_sin_stock, 0)
        self.assertEqual(stats.ganancias_totales, 14)


if __name__ == "__main__":
    unittest.main()
