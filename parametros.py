"""Parametros globales del proyecto."""

from __future__ import annotations

import logging
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = DATA_DIR / "output"

APP_NAME = "DANY-SHOP"
VERSION = "2.2.0"
DATABASE_KEY = "dany_shop_v2"
NOTIFICATION_TIMEOUT_MS = 5000

DEBT_GRACE_DAYS = 7
LOW_STOCK_THRESHOLD = 10
ACTIVITY_LIMIT = 50
RECENT_ACTIVITY_LIMIT = 5

CASH_FOLIO = "CASH"
PAYMENT_CASH = "cash"
PAYMENT_CREDIT = "credit"

DEFAULT_EXPORT_FILENAME_STEM = "inventario"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
