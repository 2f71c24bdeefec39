"""Tests de textos de ticket, vista previa y deuda."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from cliente.backend.ticket_formatter import (
    TICKET_SEPARATOR,
    format_debt_summary,
    format_sale_preview,
    format_sale_ticket,
)
from cliente.backend.validators import parse_price, parse_quantity, validate_output_dir
from parametros import CASH_FOLIO, PAYMENT_CASH, PAYMENT_CREDIT
from servidor.domain.models import Cliente, LineaVenta, Venta
from shared.errors import ValidationError
from shared.protocol import CustomerDebtSummary, SalePreview, SalePreviewLine


class TicketFormatterTests(unittest.TestCase):
    """Valida el formato de texto plano de cada salida."""

    def _build_sale(self, folio: str, tipo_pago: str) -> Venta:
        return Venta(
            id=1,
            folio_cliente=folio,
            tipo_pago=tipo_pago,
            productos=(
                LineaVenta(id=1, cantidad=3, nombre="Arroz", precio_unitario=15.0, costo_unitario=10.0),
            ),
            total=45.0,
            ganancia=15.0,
            fecha="2026-03-10",
            hora="12:00:00",
            pagada=tipo_pago == PAYMENT_CASH,
        )

    def test_cash_ticket_omits_customer(self) -> None:
        ticket = format_sale_ticket(self._build_sale(CASH_FOLIO, PAYMENT_CASH))

        self.assertEqual(
            ticket,
            "DANY-SHOP\n"
            "Fecha: 2026-03-10 12:00:00\n"
            "Tipo: cash\n"
            f"{TICKET_SEPARATOR}\n"
            "Arroz           x3 $45.00\n"
            f"{TICKET_SEPARATOR}\n"
            "TOTAL: $45.00\n",
        )

    def test_credit_ticket_includes_customer(self) -> None:
        ticket = format_sale_ticket(self._build_sale("CLI-001", PAYMENT_CREDIT))

        self.assertIn("Cliente: CLI-001\n", ticket)

    def test_preview_lines_and_total(self) -> None:
        preview = SalePreview(
            lineas=(SalePreviewLine(producto_id=2, nombre="Leche", cantidad=2, precio_unitario=22.0),),
            total=44.0,
            ganancia=14.0,
        )

        self.assertEqual(
            format_sale_preview(preview),
            "Leche (ID: 2 x 2) $44.00\nTotal: $44.00",
        )

    def test_debt_summary_states(self) -> None:
        cliente = Cliente(
            id=1,
            nombre="Ana",
            folio="CLI-001",
            fecha_registro="2026-03-01",
            telefono="555-123",
        )

        pendiente = format_debt_summary(CustomerDebtSummary(cliente=cliente, deuda=30.0))
        al_corriente = format_debt_summary(CustomerDebtSummary(cliente=cliente, deuda=0.0))

        self.assertEqual(pendiente, "Ana (CLI-001)\nDeuda: $30.00\nPendiente\nTel: 555-123")
        self.assertIn("Al corriente", al_corriente)


class ValidatorTests(unittest.TestCase):
    """Valida la conversion de texto de formularios."""

    def test_parse_price(self) -> None:
        self.assertEqual(parse_price(" 12,5 ", "Precio"), 12.5)
        for raw in ("", "doce", "inf"):
            with self.subTest(raw=raw):
                with self.assertRaises(ValidationError):
                    parse_price(raw, "Precio")

    def test_parse_quantity(self) -> None:
        self.assertEqual(parse_quantity(""), 0)
        self.assertEqual(parse_quantity("-3"), -3)
        with self.assertRaises(ValidationError):
            parse_quantity("tres")

    def test_validate_output_dir(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            target = Path(temp_dir) / "a" / "b"
            validate_output_dir(target)
            self.assertTrue(target.is_dir())

            file_path = Path(temp_dir) / "archivo.txt"
            file_path.write_text("x", encoding="utf-8")
            with self.assertRaises(ValidationError):
                validate_output_dir(file_path)


if __name__ == "__main__":
    unittest.main()
