"""Utilidades puras para ventas, fechas y periodos de reporte."""

from __future__ import annotations

import calendar
import math
from datetime import date, datetime, time, timedelta

from servidor.domain.models import LineItemRequest

PERIOD_TODAY = "hoy"
PERIOD_WEEK = "semana"
PERIOD_MONTH = "mes"
PERIOD_YEAR = "anio"
PERIOD_ALL = "todo"

REPORT_PERIODS: tuple[str, ...] = (
    PERIOD_TODAY,
    PERIOD_WEEK,
    PERIOD_MONTH,
    PERIOD_YEAR,
    PERIOD_ALL,
)

_SECONDS_PER_DAY = 24 * 60 * 60


def parse_line_items(raw_input: str | None) -> list[LineItemRequest]:
    """Parsea pares `id:cantidad` separados por coma, descartando los invalidos."""
    result: list[LineItemRequest] = []
    if not raw_input:
        return result

    for raw_pair in raw_input.split(","):
        pair = raw_pair.strip()
        if not pair:
            continue

        parts = [part.strip() for part in pair.split(":")]
        if len(parts) < 2:
            continue

        try:
            product_id = int(parts[0])
            cantidad = int(parts[1])
        except ValueError:
            continue

        if cantidad > 0:
            result.append(LineItemRequest(id=product_id, cantidad=cantidad))

    return result


def parse_iso_date(value: str) -> date:
    """Convierte `YYYY-MM-DD` (o un datetime ISO) a fecha."""
    return date.fromisoformat(value.strip()[:10])


def add_days(value: str, days: int) -> str:
    """Suma dias a una fecha ISO y retorna otra fecha ISO."""
    return (parse_iso_date(value) + timedelta(days=days)).isoformat()


def is_overdue(sale_date: str, today: date, grace_days: int) -> bool:
    """Indica si hoy ya supero el limite `fecha + grace_days`."""
    return today > parse_iso_date(sale_date) + timedelta(days=grace_days)


def days_overdue(sale_date: str, now: datetime, grace_days: int) -> int:
    """Dias de atraso: dias transcurridos (redondeo hacia arriba) menos gracia."""
    start = datetime.combine(parse_iso_date(sale_date), time.min)
    elapsed_days = (now - start).total_seconds() / _SECONDS_PER_DAY
    return math.ceil(elapsed_days) - grace_days


def shift_months(value: date, months: int) -> date:
    """Desplaza meses ajustando el dia al ultimo valido del mes destino."""
    month_index = value.month - 1 + months
    year = value.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def period_start(period: str, today: date) -> date:
    """Retorna la fecha de corte de un periodo; periodos desconocidos abarcan todo."""
    if period == PERIOD_TODAY:
        return today
    if period == PERIOD_WEEK:
        return today - timedelta(days=7)
    if period == PERIOD_MONTH:
        return shift_months(today, -1)
    if period == PERIOD_YEAR:
        return shift_months(today, -12)
    return date.min


def format_money(amount: float) -> str:
    """Formatea un monto con signo de pesos y dos decimales."""
    return f"${amount:.2f}"
