"""Modelos de dominio de la tienda."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from parametros import CASH_FOLIO, PAYMENT_CASH, PAYMENT_CREDIT

THEME_LIGHT = "claro"
THEME_DARK = "oscuro"


@dataclass(slots=True)
class Producto:
    """Representa un producto en inventario."""

    id: int
    nombre: str
    precio_costo: float
    precio_venta: float
    cantidad: int
    fecha_creacion: str
    activo: bool = True
    ventas_totales: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Producto:
        return cls(
            id=int(data["id"]),
            nombre=str(data["nombre"]),
            precio_costo=float(data.get("precio_costo", 0)),
            precio_venta=float(data.get("precio_venta", 0)),
            cantidad=int(data.get("cantidad", 0)),
            fecha_creacion=str(data.get("fecha_creacion", "")),
            activo=bool(data.get("activo", True)),
            ventas_totales=int(data.get("ventas_totales", 0)),
        )


@dataclass(slots=True)
class Cliente:
    """Representa un cliente identificado por su folio."""

    id: int
    nombre: str
    folio: str
    fecha_registro: str
    telefono: str = ""
    email: str = ""
    activo: bool = True
    total_compras: float = 0.0
    ultima_compra: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Cliente:
        ultima_compra = data.get("ultima_compra")
        return cls(
            id=int(data["id"]),
            nombre=str(data["nombre"]),
            folio=str(data["folio"]),
            fecha_registro=str(data.get("fecha_registro", "")),
            telefono=str(data.get("telefono") or ""),
            email=str(data.get("email") or ""),
            activo=bool(data.get("activo", True)),
            total_compras=float(data.get("total_compras", 0)),
            ultima_compra=str(ultima_compra) if ultima_compra else None,
        )


@dataclass(frozen=True, slots=True)
class LineItemRequest:
    """Par (id de producto, cantidad) leido desde el texto de la venta."""

    id: int
    cantidad: int


@dataclass(frozen=True, slots=True)
class LineaVenta:
    """Copia de los datos del producto al momento de vender."""

    id: int
    cantidad: int
    nombre: str
    precio_unitario: float
    costo_unitario: float

    @property
    def subtotal(self) -> float:
        return self.precio_unitario * self.cantidad

    @property
    def ganancia(self) -> float:
        return (self.precio_unitario - self.costo_unitario) * self.cantidad

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineaVenta:
        return cls(
            id=int(data["id"]),
            cantidad=int(data["cantidad"]),
            nombre=str(data.get("nombre", "")),
            precio_unitario=float(data.get("precio_unitario", 0)),
            costo_unitario=float(data.get("costo_unitario", 0)),
        )


@dataclass(frozen=True, slots=True)
class Venta:
    """Venta registrada; solo `pagada` podria cambiar en el futuro."""

    id: int
    folio_cliente: str
    tipo_pago: str
    productos: tuple[LineaVenta, ...]
    total: float
    ganancia: float
    fecha: str
    hora: str
    pagada: bool

    @property
    def es_credito(self) -> bool:
        return self.tipo_pago == PAYMENT_CREDIT

    @property
    def es_anonima(self) -> bool:
        return self.folio_cliente == CASH_FOLIO

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "folio_cliente": self.folio_cliente,
            "tipo_pago": self.tipo_pago,
            "productos": [linea.to_dict() for linea in self.productos],
            "total": self.total,
            "ganancia": self.ganancia,
            "fecha": self.fecha,
            "hora": self.hora,
            "pagada": self.pagada,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Venta:
        tipo_pago = str(data.get("tipo_pago", PAYMENT_CASH))
        return cls(
            id=int(data["id"]),
            folio_cliente=str(data.get("folio_cliente") or CASH_FOLIO),
            tipo_pago=tipo_pago,
            productos=tuple(
                LineaVenta.from_dict(item) for item in data.get("productos", [])
            ),
            total=float(data.get("total", 0)),
            ganancia=float(data.get("ganancia", 0)),
            fecha=str(data.get("fecha", "")),
            hora=str(data.get("hora", "")),
            pagada=bool(data.get("pagada", tipo_pago == PAYMENT_CASH)),
        )


@dataclass(slots=True)
class Configuracion:
    """Preferencias libres de la tienda."""

    tema: str = THEME_LIGHT

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Configuracion:
        if not data:
            return cls()
        return cls(tema=str(data.get("tema") or THEME_LIGHT))


@dataclass(slots=True)
class Metricas:
    """Contadores derivados; se recalculan en cada guardado."""

    ventas_totales: int = 0
    ganancias_totales: float = 0.0
    clientes_activos: int = 0
    productos_activos: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> Metricas:
        if not data:
            return cls()
        return cls(
            ventas_totales=int(data.get("ventas_totales", 0)),
            ganancias_totales=float(data.get("ganancias_totales", 0)),
            clientes_activos=int(data.get("clientes_activos", 0)),
            productos_activos=int(data.get("productos_activos", 0)),
        )

