"""Tests de utilidades puras de ventas, fechas y periodos."""

from __future__ import annotations

import unittest
from datetime import date, datetime

from servidor.domain.models import LineItemRequest
from servidor.services.ledger_utils import (
    PERIOD_ALL,
    PERIOD_MONTH,
    PERIOD_TODAY,
    PERIOD_WEEK,
    PERIOD_YEAR,
    add_days,
    days_overdue,
    format_money,
    is_overdue,
    parse_iso_date,
    parse_line_items,
    period_start,
    shift_months,
)


class ParseLineItemsTests(unittest.TestCase):
    """Valida el parser de texto `id:cantidad`."""

    def test_drops_blank_zero_and_non_numeric_segments(self) -> None:
        """Debe conservar solo pares numericos con cantidad positiva."""
        result = parse_line_items("1:2, , 3:0, abc:1, 4:5")

        self.assertEqual(
            result,
            [LineItemRequest(id=1, cantidad=2), LineItemRequest(id=4, cantidad=5)],
        )

    def test_empty_and_none_input_yield_empty_list(self) -> None:
        self.assertEqual(parse_line_items(""), [])
        self.assertEqual(parse_line_items(None), [])
        self.assertEqual(parse_line_items("   "), [])

    def test_negative_quantity_and_missing_separator_are_dropped(self) -> None:
        self.assertEqual(parse_line_items("2:-1, 5, 7:"), [])

    def test_repeated_ids_are_kept_as_separate_lines(self) -> None:
        result = parse_line_items(" 1 : 2 ,1:3")

        self.assertEqual(
            result,
            [LineItemRequest(id=1, cantidad=2), LineItemRequest(id=1, cantidad=3)],
        )

    def test_decimal_tokens_are_rejected(self) -> None:
        self.assertEqual(parse_line_items("1.5:2, 2:1.5"), [])


class DateRulesTests(unittest.TestCase):
    """Valida reglas de atraso y calculo de periodos."""

    def test_is_overdue_boundary_with_seven_grace_days(self) -> None:
        """Al dia 7 no hay atraso; al dia 8 si."""
        self.assertFalse(is_overdue("2026-03-01", date(2026, 3, 8), 7))
        self.assertTrue(is_overdue("2026-03-01", date(2026, 3, 9), 7))

    def test_is_overdue_accepts_full_iso_datetime(self) -> None:
        self.assertTrue(is_overdue("2026-03-01T10:30:00", date(2026, 3, 9), 7))

    def test_days_overdue_rounds_partial_days_up(self) -> None:
        """9.5 dias transcurridos cuentan como 10; menos 7 de gracia quedan 3."""
        now = datetime(2026, 3, 10, 12, 0, 0)

        self.assertEqual(days_overdue("2026-03-01", now, 7), 3)

    def test_days_overdue_at_exact_midnight(self) -> None:
        now = datetime(2026, 3, 9, 0, 0, 0)

        self.assertEqual(days_overdue("2026-03-01", now, 7), 1)

    def test_add_days_crosses_month_boundary(self) -> None:
        self.assertEqual(add_days("2026-02-25", 7), "2026-03-04")

    def test_parse_iso_date_rejects_garbage(self) -> None:
        with self.assertRaises(ValueError):
            parse_iso_date("no-es-fecha")

    def test_shift_months_clamps_to_last_day(self) -> None:
        self.assertEqual(shift_months(date(2026, 3, 31), -1), date(2026, 2, 28))
        self.assertEqual(shift_months(date(2026, 1, 15), -12), date(2025, 1, 15))

    def test_period_start_for_each_period(self) -> None:
        today = date(2026, 3, 10)

        self.assertEqual(period_start(PERIOD_TODAY, today), today)
        self.assertEqual(period_start(PERIOD_WEEK, today), date(2026, 3, 3))
        self.assertEqual(period_start(PERIOD_MONTH, today), date(2026, 2, 10))
        self.assertEqual(period_start(PERIOD_YEAR, today), date(2025, 3, 10))
        self.assertEqual(period_start(PERIOD_ALL, today), date.min)


class FormatMoneyTests(unittest.TestCase):
    def test_two_decimals_with_symbol(self) -> None:
        self.assertEqual(format_money(45), "$45.00")
        self.assertEqual(format_money(12.345), "$12.35")


if __name__ == "__main__":
    unittest.main()
