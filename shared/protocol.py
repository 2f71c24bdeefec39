"""DTOs intercambiados entre el cliente y los servicios de la tienda."""

from __future__ import annotations

from dataclasses import dataclass

from servidor.domain.models import Cliente, Producto


@dataclass(slots=True)
class CustomerDraft:
    """Datos crudos del formulario de alta de cliente."""

    nombre: str
    folio: str
    telefono: str = ""
    email: str = ""


@dataclass(slots=True)
class ProductDraft:
    """Datos crudos del formulario de alta/ajuste de producto."""

    nombre: str
    precio_costo: str
    precio_venta: str
    cantidad: str = ""


@dataclass(slots=True)
class SaleDraft:
    """Datos crudos del formulario de venta."""

    folio_cliente: str
    tipo_pago: str
    productos_input: str


@dataclass(frozen=True, slots=True)
class CustomerDebt:
    """Cliente en atraso con su deuda total y dias de atraso."""

    cliente: Cliente
    deuda: float
    dias_atraso: int


@dataclass(frozen=True, slots=True)
class CustomerDebtSummary:
    """Resultado de la consulta de deuda por folio."""

    cliente: Cliente
    deuda: float

    @property
    def al_corriente(self) -> bool:
        return self.deuda <= 0


@dataclass(frozen=True, slots=True)
class TopProduct:
    """Producto mas (o menos) vendido en un periodo."""

    producto_id: int
    producto: Producto | None
    cantidad: int
    periodo: str


@dataclass(frozen=True, slots=True)
class FinancialAnalysis:
    """Resumen financiero de un periodo."""

    total_inversion: float
    total_ventas: float
    costo_total_ventas: float
    ganancia_total: float
    margen_ganancia: float
    periodo: str
    cantidad_ventas: int


@dataclass(frozen=True, slots=True)
class StoreStatistics:
    """Indicadores del panel principal."""

    total_clientes: int
    total_productos: int
    total_ventas: int
    deuda_total: float
    ventas_semana: int
    productos_stock_bajo: int
    productos_sin_stock: int
    ganancias_totales: float


@dataclass(frozen=True, slots=True)
class SalePreviewLine:
    """Linea de la vista previa de una venta."""

    producto_id: int
    nombre: str
    cantidad: int
    precio_unitario: float

    @property
    def subtotal(self) -> float:
        return self.precio_unitario * self.cantidad


@dataclass(frozen=True, slots=True)
class SalePreview:
    """Vista previa de una venta sin validar ni registrar."""

    lineas: tuple[SalePreviewLine, ...]
    total: float
    ganancia: float


@dataclass(frozen=True, slots=True)
class NotificationCounts:
    """Conteos para el indicador de notificaciones."""

    clientes_en_atraso: int
    productos_stock_bajo: int

    @property
    def total(self) -> int:
        return self.clientes_en_atraso + self.productos_stock_bajo
