"""Hojas de estilo QSS de la aplicacion."""

from __future__ import annotations

from servidor.domain.models import THEME_DARK

_LIGHT_PALETTE = {
    "background": "#eef1f4",
    "card": "#ffffff",
    "text": "#111827",
    "muted": "#475569",
    "input": "#f8fafc",
    "border": "#d1d5db",
}

_DARK_PALETTE = {
    "background": "#111827",
    "card": "#1f2937",
    "text": "#f3f4f6",
    "muted": "#9ca3af",
    "input": "#374151",
    "border": "#4b5563",
}

_WINDOW_TEMPLATE = """
QMainWindow, QDialog {{
    background-color: {background};
}}
QFrame#card, QFrame#dialogCard {{
    background-color: {card};
    border-radius: 16px;
}}
QLabel {{
    color: {text};
    font-family: "Segoe UI";
    font-size: 13px;
}}
QLabel#titleLabel {{
    font-size: 22px;
    font-weight: 700;
}}
QLabel#fieldLabel {{
    color: {muted};
    font-weight: 600;
}}
QLabel#metricValue {{
    font-size: 26px;
    font-weight: 700;
}}
QLineEdit, QComboBox, QTextEdit, QPlainTextEdit {{
    background-color: {input};
    border: 1px solid {border};
    border-radius: 8px;
    color: {text};
    font-family: "Segoe UI";
    font-size: 13px;
    padding: 8px;
}}
QLineEdit:focus, QTextEdit:focus, QPlainTextEdit:focus {{
    border: 1px solid #2563eb;
}}
QTableWidget {{
    background-color: {card};
    alternate-background-color: {input};
    color: {text};
    border: 1px solid {border};
    border-radius: 8px;
}}
QPushButton {{
    background-color: #C80202;
    border: none;
    border-radius: 10px;
    color: #ffffff;
    font-family: "Segoe UI";
    font-size: 13px;
    font-weight: 600;
    min-height: 38px;
    padding: 6px 14px;
}}
QPushButton:hover {{
    background-color: #A30202;
}}
QPushButton:pressed {{
    background-color: #820101;
}}
QPushButton#secondaryButton {{
    background-color: #e5e7eb;
    color: #1f2937;
}}
QPushButton#secondaryButton:hover {{
    background-color: #d1d5db;
}}
QPushButton#navButton {{
    background-color: transparent;
    color: {text};
    text-align: left;
}}
QPushButton#navButton:checked {{
    background-color: #C80202;
    color: #ffffff;
}}
"""


def build_stylesheet(tema: str) -> str:
    """Retorna la hoja de estilo para el tema indicado."""
    palette = _DARK_PALETTE if tema == THEME_DARK else _LIGHT_PALETTE
    return _WINDOW_TEMPLATE.format(**palette)
