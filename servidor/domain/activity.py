"""Registro de actividad con payloads tipados por clase de evento."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from servidor.domain.models import Cliente, Producto, Venta

CATEGORY_CUSTOMER = "cliente"
CATEGORY_INVENTORY = "inventario"
CATEGORY_SALE = "venta"
CATEGORY_SYSTEM = "system"

STOCK_CHANGE_ADD = "agregar"
STOCK_CHANGE_REMOVE = "quitar"


@dataclass(frozen=True, slots=True)
class CustomerAddedPayload:
    """Cliente recien registrado."""

    cliente: Cliente
    kind: str = field(default="customer-added", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "cliente": self.cliente.to_dict()}


@dataclass(frozen=True, slots=True)
class ProductAddedPayload:
    """Producto nuevo en inventario."""

    producto: Producto
    kind: str = field(default="product-added", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "producto": self.producto.to_dict()}


@dataclass(frozen=True, slots=True)
class StockAdjustedPayload:
    """Ajuste de stock sobre un producto existente."""

    producto: Producto
    cambio: int
    tipo: str
    kind: str = field(default="stock-adjusted", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "producto": self.producto.to_dict(),
            "cambio": self.cambio,
            "tipo": self.tipo,
        }


@dataclass(frozen=True, slots=True)
class SaleRecordedPayload:
    """Venta registrada."""

    venta: Venta
    kind: str = field(default="sale-recorded", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind, "venta": self.venta.to_dict()}


@dataclass(frozen=True, slots=True)
class SystemPayload:
    """Evento del sistema sin datos asociados."""

    kind: str = field(default="system", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind}


ActivityPayload = Union[
    CustomerAddedPayload,
    ProductAddedPayload,
    StockAdjustedPayload,
    SaleRecordedPayload,
    SystemPayload,
]


def payload_from_dict(data: dict[str, Any] | None) -> ActivityPayload:
    """Reconstruye el payload persistido; datos legados sin `kind` quedan como system."""
    if not data:
        return SystemPayload()

    kind = data.get("kind")
    if kind == "customer-added" or (kind is None and "cliente" in data):
        return CustomerAddedPayload(cliente=Cliente.from_dict(data["cliente"]))
    if kind == "stock-adjusted" or (kind is None and "cambio" in data):
        return StockAdjustedPayload(
            producto=Producto.from_dict(data["producto"]),
            cambio=int(data.get("cambio", 0)),
            tipo=str(data.get("tipo", STOCK_CHANGE_ADD)),
        )
    if kind == "product-added" or (kind is None and "producto" in data):
        return ProductAddedPayload(producto=Producto.from_dict(data["producto"]))
    if kind == "sale-recorded" or (kind is None and "venta" in data):
        return SaleRecordedPayload(venta=Venta.from_dict(data["venta"]))
    return SystemPayload()


@dataclass(frozen=True, slots=True)
class Actividad:
    """Entrada del registro de actividad."""

    id: int
    tipo: str
    mensaje: str
    datos: ActivityPayload
    timestamp: str
    leida: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tipo": self.tipo,
            "mensaje": self.mensaje,
            "datos": self.datos.to_dict(),
            "timestamp": self.timestamp,
            "leida": self.leida,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Actividad:
        return cls(
            id=int(data["id"]),
            tipo=str(data.get("tipo", CATEGORY_SYSTEM)),
            mensaje=str(data.get("mensaje", "")),
            datos=payload_from_dict(data.get("datos")),
            timestamp=str(data.get("timestamp", "")),
            leida=bool(data.get("leida", False)),
        )
