"""Dialogo para registrar clientes."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor
from PyQt6.QtWidgets import (
    QDialog,
    QFormLayout,
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from cliente.frontend.dialogs import show_error, show_info
from shared.errors import DuplicateKeyError, ServiceError, ValidationError
from shared.protocol import CustomerDraft

if TYPE_CHECKING:
    from cliente.backend.controller import AppController


class RegisterCustomerDialog(QDialog):
    """Dialogo modal para dar de alta un cliente con folio unico."""

    def __init__(
        self,
        controller: AppController,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._nombre_input: QLineEdit
        self._folio_input: QLineEdit
        self._telefono_input: QLineEdit
        self._email_input: QLineEdit

        self.setWindowTitle("Registrar cliente")
        self.setModal(True)
        self.setMinimumSize(460, 340)

        self._build_ui()

    def _build_ui(self) -> None:
        """Construye widgets del dialogo."""
        root_layout = QVBoxLayout(self)
        root_layout.setContentsMargins(18, 18, 18, 18)

        card = QFrame(self)
        card.setObjectName("dialogCard")
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(24, 24, 24, 24)
        card_layout.setSpacing(12)

        title_label = QLabel("Registrar cliente", card)
        title_label.setObjectName("titleLabel")
        title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._nombre_input = QLineEdit(card)
        self._nombre_input.setPlaceholderText("Ana García López")
        self._folio_input = QLineEdit(card)
        self._folio_input.setPlaceholderText("CLI-003")
        self._telefono_input = QLineEdit(card)
        self._telefono_input.setPlaceholderText("555-123-4567")
        self._email_input = QLineEdit(card)
        self._email_input.setPlaceholderText("cliente@email.com")

        form_layout = QFormLayout()
        form_layout.addRow(self._field_label("Nombre", card), self._nombre_input)
        form_layout.addRow(self._field_label("Folio", card), self._folio_input)
        form_layout.addRow(self._field_label("Telefono", card), self._telefono_input)
        form_layout.addRow(self._field_label("Email", card), self._email_input)

        buttons_layout = QHBoxLayout()
        buttons_layout.addStretch(1)

        cancel_button = QPushButton("Cancelar", card)
        cancel_button.setObjectName("secondaryButton")
        save_button = QPushButton("Registrar", card)

        cancel_button.clicked.connect(self.reject)
        save_button.clicked.connect(self._on_save_clicked)

        buttons_layout.addWidget(cancel_button)
        buttons_layout.addWidget(save_button)

        card_layout.addWidget(title_label)
        card_layout.addLayout(form_layout)
        card_layout.addLayout(buttons_layout)

        shadow = QGraphicsDropShadowEffect(card)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 6)
        shadow.setColor(QColor(0, 0, 0, 35))
        card.setGraphicsEffect(shadow)

        root_layout.addWidget(card)
        self._nombre_input.setFocus()

    def _on_save_clicked(self) -> None:
        """Envia el formulario al controller."""
        draft = CustomerDraft(
            nombre=self._nombre_input.text(),
            folio=self._folio_input.text(),
            telefono=self._telefono_input.text(),
            email=self._email_input.text(),
        )
        try:
            cliente = self._controller.on_register_customer(draft)
        except (ValidationError, DuplicateKeyError, ServiceError) as exc:
            show_error(self, "Error al registrar cliente", str(exc))
            return

        show_info(self, "Cliente registrado", f"{cliente.nombre} ({cliente.folio})")
        self.accept()

    @staticmethod
    def _field_label(text: str, parent: QWidget) -> QLabel:
        label = QLabel(text, parent)
        label.setObjectName("fieldLabel")
        return label
