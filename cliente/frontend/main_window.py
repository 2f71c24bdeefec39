"""Ventana principal de DANY-SHOP."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QGuiApplication
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from cliente.backend.controller import AppController
from cliente.frontend.dialogs import show_error, show_info
from cliente.frontend.pages.base_page import UI_ERRORS, BasePage
from cliente.frontend.pages.customers_page import CustomersPage
from cliente.frontend.pages.dashboard_page import DashboardPage
from cliente.frontend.pages.inventory_page import InventoryPage
from cliente.frontend.pages.reports_page import ReportsPage
from cliente.frontend.pages.sales_page import SalesPage
from cliente.frontend.styles import build_stylesheet
from parametros import APP_NAME, NOTIFICATION_TIMEOUT_MS, VERSION
from servidor.services.exporter import FORMAT_CSV, FORMAT_JSON


class MainWindow(QMainWindow):
    """Ventana principal con el menu de secciones de la tienda."""

    def __init__(self, controller: AppController) -> None:
        super().__init__()
        self._controller = controller

        self._stack: QStackedWidget
        self._menu_page: QWidget
        self._pages: list[BasePage] = []
        self._notification_label: QLabel
        self._theme_button: QPushButton

        self.setWindowTitle(f"{APP_NAME} v{VERSION}")
        screen = QGuiApplication.primaryScreen()
        geo = screen.availableGeometry()
        w = int(geo.width() * 0.65)
        h = int(geo.height() * 0.85)
        self.resize(w, h)
        self.setMinimumSize(int(w * 0.70), int(h * 0.70))
        self._build_ui()
        self._apply_styles()
        self._controller.subscribe(self._on_data_changed)
        self._refresh_notifications()

    def _build_ui(self) -> None:
        """Construye la estructura de paginas de la ventana principal."""
        self._stack = QStackedWidget(self)
        self.setCentralWidget(self._stack)

        self._menu_page = self._build_menu_page()
        self._stack.addWidget(self._menu_page)
        self._show_menu_page()

    def _build_menu_page(self) -> QWidget:
        """Construye y retorna la pagina de menu principal."""
        page = QWidget(self)

        root_layout = QVBoxLayout(page)
        root_layout.setContentsMargins(40, 40, 40, 40)
        root_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card = QFrame(page)
        card.setObjectName("card")
        card.setMinimumWidth(460)
        card.setMaximumWidth(520)
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(40, 40, 40, 40)
        card_layout.setSpacing(12)

        title_label = QLabel(card)
        title_label.setObjectName("titleLabel")
        title_label.setFont(QFont("Segoe UI", 24, QFont.Weight.Bold))
        title_label.setTextFormat(Qt.TextFormat.RichText)
        title_label.setText(
            '<span style="color:#C80202;">DANY</span>'
            '<span>-SHOP</span>'
        )
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._notification_label = QLabel("Sin notificaciones", card)
        self._notification_label.setObjectName("fieldLabel")
        self._notification_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card_layout.addWidget(title_label)
        card_layout.addWidget(self._notification_label)
        card_layout.addSpacing(12)

        for text, page_class in (
            ("Panel principal", DashboardPage),
            ("Inventario", InventoryPage),
            ("Clientes", CustomersPage),
            ("Ventas", SalesPage),
            ("Reportes", ReportsPage),
        ):
            section = page_class(
                controller=self._controller,
                on_back=self._show_menu_page,
                parent=self,
            )
            self._pages.append(section)
            self._stack.addWidget(section)
            button = self._build_button(text)
            button.clicked.connect(
                lambda _checked=False, target=section: self._show_page(target)
            )
            card_layout.addWidget(button)

        export_layout = QHBoxLayout()
        json_button = self._build_button("Exportar JSON")
        csv_button = self._build_button("Exportar CSV")
        json_button.clicked.connect(lambda _checked=False: self._on_export_clicked(FORMAT_JSON))
        csv_button.clicked.connect(lambda _checked=False: self._on_export_clicked(FORMAT_CSV))
        export_layout.addWidget(json_button)
        export_layout.addWidget(csv_button)

        self._theme_button = self._build_button("Cambiar tema")
        self._theme_button.setObjectName("secondaryButton")
        self._theme_button.clicked.connect(self._on_theme_clicked)

        exit_button = self._build_button("Salir")
        exit_button.setObjectName("secondaryButton")
        exit_button.clicked.connect(self._on_exit_clicked)

        card_layout.addSpacing(8)
        card_layout.addLayout(export_layout)
        card_layout.addWidget(self._theme_button)
        card_layout.addWidget(exit_button)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(38)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(0, 0, 0, 38))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        return page

    def _apply_styles(self, tema: str | None = None) -> None:
        """Aplica estilos QSS segun el tema configurado."""
        if tema is None:
            try:
                tema = self._controller.current_theme()
            except UI_ERRORS as exc:
                show_error(self, "Error de configuracion", str(exc))
                return
        self.setStyleSheet(build_stylesheet(tema))

    def _show_menu_page(self) -> None:
        self._stack.setCurrentWidget(self._menu_page)

    def _show_page(self, page: BasePage) -> None:
        page.refresh()
        self._stack.setCurrentWidget(page)

    def _on_data_changed(self) -> None:
        """Refresca la pagina visible y las notificaciones tras un guardado."""
        current = self._stack.currentWidget()
        if isinstance(current, BasePage):
            current.refresh()
        self._refresh_notifications()

    def _refresh_notifications(self) -> None:
        try:
            counts, message = self._controller.notifications()
        except UI_ERRORS as exc:
            show_error(self, "Error de notificaciones", str(exc))
            return

        self._notification_label.setText(message.replace("\n", " | "))
        if counts.total:
            self.statusBar().showMessage(message.replace("\n", ", "), NOTIFICATION_TIMEOUT_MS)

    def _on_theme_clicked(self, _checked: bool = False) -> None:
        try:
            tema = self._controller.on_toggle_theme()
        except UI_ERRORS as exc:
            show_error(self, "Error al cambiar tema", str(exc))
            return
        self._apply_styles(tema)

    def _on_export_clicked(self, formato: str) -> None:
        try:
            path = self._controller.on_export(formato)
        except UI_ERRORS as exc:
            show_error(self, "Error de exportacion", str(exc))
            return
        show_info(self, "Exportacion completada", f"Archivo generado: {path}")

    def _on_exit_clicked(self, _checked: bool = False) -> None:
        """Solicita al controller el cierre de la app."""
        self._controller.on_exit(QApplication.instance())

    @staticmethod
    def _build_button(text: str) -> QPushButton:
        """Construye un boton estandar del menu principal."""
        button = QPushButton(text)
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        return button
