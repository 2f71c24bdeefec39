"""Libro de la tienda: clientes, productos, ventas y reportes."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import date, datetime
from typing import Any

from parametros import (
    ACTIVITY_LIMIT,
    CASH_FOLIO,
    DATABASE_KEY,
    DEBT_GRACE_DAYS,
    LOW_STOCK_THRESHOLD,
    PAYMENT_CASH,
    PAYMENT_CREDIT,
    RECENT_ACTIVITY_LIMIT,
)
from servidor.domain.activity import (
    CATEGORY_CUSTOMER,
    CATEGORY_INVENTORY,
    CATEGORY_SALE,
    STOCK_CHANGE_ADD,
    STOCK_CHANGE_REMOVE,
    Actividad,
    ActivityPayload,
    CustomerAddedPayload,
    ProductAddedPayload,
    SaleRecordedPayload,
    StockAdjustedPayload,
    SystemPayload,
)
from servidor.domain.models import (
    THEME_DARK,
    THEME_LIGHT,
    Cliente,
    Configuracion,
    LineaVenta,
    LineItemRequest,
    Metricas,
    Producto,
    Venta,
)
from servidor.services import exporter
from servidor.services.ledger_utils import (
    PERIOD_ALL,
    PERIOD_MONTH,
    PERIOD_WEEK,
    PERIOD_YEAR,
    REPORT_PERIODS,
    days_overdue,
    format_money,
    is_overdue,
    parse_iso_date,
    parse_line_items,
    period_start,
)
from servidor.services.storage import JsonBlobStore
from shared.errors import (
    DuplicateKeyError,
    InsufficientStockError,
    NotFoundError,
    ServiceError,
    ValidationError,
)
from shared.protocol import (
    CustomerDebt,
    CustomerDebtSummary,
    FinancialAnalysis,
    NotificationCounts,
    SalePreview,
    SalePreviewLine,
    StoreStatistics,
    TopProduct,
)

LOGGER = logging.getLogger(__name__)

FILTER_LOW_STOCK = "stock-bajo"
FILTER_OUT_OF_STOCK = "sin-stock"
FILTER_ALL = "todos"

TOP_MOST = "mas"
TOP_LEAST = "menos"
TOP_PERIODS: tuple[str, ...] = (PERIOD_WEEK, PERIOD_MONTH, PERIOD_YEAR, PERIOD_ALL)

PAYMENT_TYPES: tuple[str, ...] = (PAYMENT_CASH, PAYMENT_CREDIT)
THEMES: tuple[str, ...] = (THEME_LIGHT, THEME_DARK)

DataChangedCallback = Callable[[], None]


class StoreLedger:
    """Administra las colecciones de la tienda y aplica sus reglas de negocio.

    Todas las operaciones son sincronicas y asumen acceso exclusivo: las
    validaciones de tipo "revisar y luego actuar" (folio unico, stock
    suficiente) no son seguras ante mutaciones concurrentes. Quien exponga el
    libro como servicio debe serializar las llamadas.
    """

    def __init__(
        self,
        store: JsonBlobStore | None = None,
        storage_key: str = DATABASE_KEY,
        grace_days: int = DEBT_GRACE_DAYS,
        low_stock_threshold: int = LOW_STOCK_THRESHOLD,
        activity_limit: int = ACTIVITY_LIMIT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store or JsonBlobStore()
        self._storage_key = storage_key
        self._grace_days = grace_days
        self._low_stock_threshold = low_stock_threshold
        self._activity_limit = activity_limit
        self._clock = clock or datetime.now
        self._subscribers: list[DataChangedCallback] = []

        self._clientes: list[Cliente] = []
        self._productos: list[Producto] = []
        self._ventas: list[Venta] = []
        self._actividad: list[Actividad] = []
        self._configuracion = Configuracion()
        self._metricas = Metricas()

        self._next_cliente_id = 1
        self._next_producto_id = 1
        self._next_venta_id = 1
        self._carga_fallida = False

        self.load()

    # ------------------------------------------------------------------
    # Estado
    # ------------------------------------------------------------------
    @property
    def clientes(self) -> list[Cliente]:
        return [replace(cliente) for cliente in self._clientes]

    @property
    def productos(self) -> list[Producto]:
        return [replace(producto) for producto in self._productos]

    @property
    def ventas(self) -> list[Venta]:
        return list(self._ventas)

    @property
    def actividad(self) -> list[Actividad]:
        return list(self._actividad)

    @property
    def configuracion(self) -> Configuracion:
        return replace(self._configuracion)

    @property
    def metricas(self) -> Metricas:
        return replace(self._metricas)

    @property
    def carga_fallida(self) -> bool:
        """Indica si la ultima carga descarto datos invalidos y partio vacia."""
        return self._carga_fallida

    @property
    def grace_days(self) -> int:
        return self._grace_days

    @property
    def low_stock_threshold(self) -> int:
        return self._low_stock_threshold

    def now(self) -> datetime:
        return self._clock()

    def today(self) -> date:
        return self._clock().date()

    def today_iso(self) -> str:
        return self.today().isoformat()

    # ------------------------------------------------------------------
    # Clientes
    # ------------------------------------------------------------------
    def add_customer(
        self,
        nombre: str,
        folio: str,
        telefono: str = "",
        email: str = "",
    ) -> Cliente:
        """Registra un cliente nuevo; el folio debe ser unico entre todos los clientes."""
        nombre_clean = (nombre or "").strip()
        folio_clean = (folio or "").strip()
        if not nombre_clean or not folio_clean:
            raise ValidationError("Nombre y folio son obligatorios.")

        if any(cliente.folio == folio_clean for cliente in self._clientes):
            raise DuplicateKeyError(f"El folio ya existe: {folio_clean}")

        cliente = Cliente(
            id=self._next_cliente_id,
            nombre=nombre_clean,
            folio=folio_clean,
            telefono=(telefono or "").strip(),
            email=(email or "").strip(),
            fecha_registro=self.today_iso(),
        )
        self._next_cliente_id += 1
        self._clientes.append(cliente)

        self.log_activity(
            CATEGORY_CUSTOMER,
            f"Nuevo cliente registrado: {cliente.nombre} ({cliente.folio})",
            CustomerAddedPayload(cliente=replace(cliente)),
        )
        LOGGER.info("Cliente registrado: id=%s, folio=%s", cliente.id, cliente.folio)

        self.save()
        return replace(cliente)

    def find_customer_by_folio(self, folio: str) -> Cliente | None:
        """Busca un cliente activo por folio exacto."""
        cliente = self._customer_by_folio(folio)
        return replace(cliente) if cliente is not None else None

    def active_customers(self) -> list[Cliente]:
        return [replace(cliente) for cliente in self._clientes if cliente.activo]

    def _customer_by_folio(self, folio: str) -> Cliente | None:
        for cliente in self._clientes:
            if cliente.folio == folio and cliente.activo:
                return cliente
        return None

    # ------------------------------------------------------------------
    # Productos
    # ------------------------------------------------------------------
    def add_product(
        self,
        nombre: str,
        precio_costo: float,
        precio_venta: float,
        cantidad: int = 0,
    ) -> Producto:
        """Crea un producto o actualiza uno activo con el mismo nombre (sin mayusculas)."""
        nombre_clean = (nombre or "").strip()
        if (
            not nombre_clean
            or not math.isfinite(precio_costo)
            or not math.isfinite(precio_venta)
            or precio_costo < 0
            or precio_venta < 0
        ):
            raise ValidationError("Datos del producto invalidos.")

        existente = self._find_active_product_by_name(nombre_clean)
        if existente is not None:
            existente.precio_costo = precio_costo
            existente.precio_venta = precio_venta
            existente.cantidad = max(0, existente.cantidad + cantidad)

            if cantidad != 0:
                tipo = STOCK_CHANGE_ADD if cantidad > 0 else STOCK_CHANGE_REMOVE
                self.log_activity(
                    CATEGORY_INVENTORY,
                    f"Stock actualizado: {nombre_clean} ({cantidad:+d})",
                    StockAdjustedPayload(
                        producto=replace(existente),
                        cambio=cantidad,
                        tipo=tipo,
                    ),
                )
            LOGGER.info(
                "Producto actualizado: id=%s, cambio=%s, stock=%s",
                existente.id,
                cantidad,
                existente.cantidad,
            )
            producto = existente
        else:
            producto = Producto(
                id=self._next_producto_id,
                nombre=nombre_clean,
                precio_costo=precio_costo,
                precio_venta=precio_venta,
                cantidad=max(0, cantidad),
                fecha_creacion=self.today_iso(),
            )
            self._next_producto_id += 1
            self._productos.append(producto)

            self.log_activity(
                CATEGORY_INVENTORY,
                f"Nuevo producto agregado: {nombre_clean}",
                ProductAddedPayload(producto=replace(producto)),
            )
            LOGGER.info("Producto creado: id=%s, nombre=%s", producto.id, producto.nombre)

        self.save()
        return replace(producto)

    def find_product_by_id(self, product_id: int) -> Producto | None:
        """Busca un producto activo por id."""
        producto = self._product_by_id(product_id)
        return replace(producto) if producto is not None else None

    def active_products(self) -> list[Producto]:
        return [replace(producto) for producto in self._productos if producto.activo]

    def low_stock_products(self) -> list[Producto]:
        """Productos activos con stock en o bajo el umbral configurado."""
        return [
            producto
            for producto in self.active_products()
            if producto.cantidad <= self._low_stock_threshold
        ]

    def out_of_stock_products(self) -> list[Producto]:
        """Productos activos sin stock."""
        return [producto for producto in self.active_products() if producto.cantidad == 0]

    def _product_by_id(self, product_id: int) -> Producto | None:
        for producto in self._productos:
            if producto.id == product_id and producto.activo:
                return producto
        return None

    def search_products(self, termino: str | None) -> list[Producto]:
        """Filtra productos activos por nombre (sin mayusculas) o por id."""
        activos = self.active_products()
        if not termino:
            return activos

        termino_normalizado = termino.casefold()
        return [
            producto
            for producto in activos
            if termino_normalizado in producto.nombre.casefold()
            or termino in str(producto.id)
        ]

    def filter_products(self, productos: Iterable[Producto], filtro: str) -> list[Producto]:
        """Aplica el filtro de stock bajo, sin stock o todos."""
        if filtro == FILTER_LOW_STOCK:
            return [p for p in productos if p.cantidad <= self._low_stock_threshold]
        if filtro == FILTER_OUT_OF_STOCK:
            return [p for p in productos if p.cantidad == 0]
        if filtro != FILTER_ALL:
            LOGGER.warning("Filtro de productos desconocido: %s", filtro)
        return list(productos)

    def _find_active_product_by_name(self, nombre: str) -> Producto | None:
        nombre_normalizado = nombre.casefold()
        for producto in self._productos:
            if producto.activo and producto.nombre.casefold() == nombre_normalizado:
                return producto
        return None

    # ------------------------------------------------------------------
    # Ventas
    # ------------------------------------------------------------------
    @staticmethod
    def parse_line_items(productos_input: str | None) -> list[LineItemRequest]:
        """Parsea el texto `id:cantidad, id:cantidad` de una venta."""
        return parse_line_items(productos_input)

    def record_sale(
        self,
        folio_cliente: str | None,
        tipo_pago: str,
        productos_input: str,
    ) -> Venta:
        """Registra una venta completa o no modifica nada."""
        items = parse_line_items(productos_input)
        folio = (folio_cliente or "").strip()

        if tipo_pago not in PAYMENT_TYPES:
            raise ValidationError(f"Tipo de pago invalido: {tipo_pago}")
        if tipo_pago == PAYMENT_CREDIT and not folio:
            raise ValidationError("El folio es obligatorio para ventas a credito.")
        if not items:
            raise ValidationError("Formato de productos invalido.")

        lineas = self._validate_line_items(items)
        total = self.total_for_line_items(items)
        ganancia = self.profit_for_line_items(items)

        now = self.now()
        venta = Venta(
            id=self._next_venta_id,
            folio_cliente=folio or CASH_FOLIO,
            tipo_pago=tipo_pago,
            productos=tuple(lineas),
            total=total,
            ganancia=ganancia,
            fecha=now.date().isoformat(),
            hora=now.strftime("%H:%M:%S"),
            pagada=tipo_pago == PAYMENT_CASH,
        )
        self._next_venta_id += 1
        self._ventas.append(venta)
        self._apply_sale_effects(venta)

        self.log_activity(
            CATEGORY_SALE,
            f"Nueva venta registrada: {format_money(total)}",
            SaleRecordedPayload(venta=venta),
        )
        LOGGER.info(
            "Venta registrada: id=%s, folio=%s, tipo=%s, total=%.2f",
            venta.id,
            venta.folio_cliente,
            venta.tipo_pago,
            venta.total,
        )

        self.save()
        return venta

    def _validate_line_items(self, items: list[LineItemRequest]) -> list[LineaVenta]:
        """Valida existencia y stock de todas las lineas antes de mutar."""
        solicitado: dict[int, int] = {}
        lineas: list[LineaVenta] = []
        for item in items:
            producto = self._product_by_id(item.id)
            if producto is None:
                raise NotFoundError(f"Producto con ID {item.id} no existe.")

            solicitado[item.id] = solicitado.get(item.id, 0) + item.cantidad
            if producto.cantidad < solicitado[item.id]:
                raise InsufficientStockError(
                    f"Stock insuficiente para {producto.nombre}. "
                    f"Disponible: {producto.cantidad}"
                )

            lineas.append(
                LineaVenta(
                    id=producto.id,
                    cantidad=item.cantidad,
                    nombre=producto.nombre,
                    precio_unitario=producto.precio_venta,
                    costo_unitario=producto.precio_costo,
                )
            )
        return lineas

    def _apply_sale_effects(self, venta: Venta) -> None:
        """Descuenta stock, suma unidades vendidas y actualiza al cliente."""
        for linea in venta.productos:
            producto = self._product_by_id(linea.id)
            if producto is None:
                continue
            producto.ventas_totales += linea.cantidad
            producto.cantidad = max(0, producto.cantidad - linea.cantidad)

        if venta.es_anonima:
            return

        cliente = self._customer_by_folio(venta.folio_cliente)
        if cliente is None:
            LOGGER.warning(
                "Venta %s asociada a folio sin cliente activo: %s",
                venta.id,
                venta.folio_cliente,
            )
            return
        cliente.total_compras += venta.total
        cliente.ultima_compra = venta.fecha

    def total_for_line_items(self, items: Iterable[LineItemRequest]) -> float:
        """Suma precio de venta por cantidad; productos inexistentes aportan cero."""
        total = 0.0
        for item in items:
            producto = self._product_by_id(item.id)
            if producto is not None:
                total += producto.precio_venta * item.cantidad
        return total

    def profit_for_line_items(self, items: Iterable[LineItemRequest]) -> float:
        """Suma (precio - costo) por cantidad; productos inexistentes aportan cero."""
        ganancia = 0.0
        for item in items:
            producto = self._product_by_id(item.id)
            if producto is not None:
                ganancia += (producto.precio_venta - producto.precio_costo) * item.cantidad
        return ganancia

    def preview_sale(self, productos_input: str | None) -> SalePreview:
        """Calcula lineas y totales de una venta sin validarla ni registrarla."""
        items = parse_line_items(productos_input)
        lineas: list[SalePreviewLine] = []
        for item in items:
            producto = self._product_by_id(item.id)
            if producto is None:
                continue
            lineas.append(
                SalePreviewLine(
                    producto_id=producto.id,
                    nombre=producto.nombre,
                    cantidad=item.cantidad,
                    precio_unitario=producto.precio_venta,
                )
            )

        return SalePreview(
            lineas=tuple(lineas),
            total=self.total_for_line_items(items),
            ganancia=self.profit_for_line_items(items),
        )

    def purchase_history(self, folio: str) -> list[Venta]:
        """Ventas asociadas a un folio, en orden de registro."""
        return [venta for venta in self._ventas if venta.folio_cliente == folio]

    # ------------------------------------------------------------------
    # Credito y deudas
    # ------------------------------------------------------------------
    def is_overdue(self, fecha_venta: str) -> bool:
        """Indica si una venta a credito supero los dias de gracia."""
        return is_overdue(fecha_venta, self.today(), self._grace_days)

    def days_overdue(self, fecha_venta: str) -> int:
        """Dias de atraso de una venta; puede ser cero o negativo si no esta en atraso."""
        return days_overdue(fecha_venta, self.now(), self._grace_days)

    def customers_overdue(self) -> list[CustomerDebt]:
        """Clientes activos con al menos una venta a credito impaga en atraso."""
        result: list[CustomerDebt] = []
        vistos: set[str] = set()
        for venta in self._unpaid_credit_sales():
            if not self._sale_overdue(venta):
                continue

            cliente = self._customer_by_folio(venta.folio_cliente)
            if cliente is None or cliente.folio in vistos:
                continue

            vistos.add(cliente.folio)
            result.append(
                CustomerDebt(
                    cliente=replace(cliente),
                    deuda=self._debt_for_folio(cliente.folio),
                    dias_atraso=self.days_overdue(venta.fecha),
                )
            )
        return result

    def customers_with_available_credit(self) -> list[Cliente]:
        """Clientes activos con una venta a credito impaga aun dentro de la gracia."""
        folios = {
            venta.folio_cliente
            for venta in self._unpaid_credit_sales()
            if self._sale_overdue(venta) is False
        }
        return [cliente for cliente in self.active_customers() if cliente.folio in folios]

    def customer_debt(self, folio: str) -> CustomerDebtSummary | None:
        """Consulta la deuda pendiente de un cliente activo."""
        cliente = self._customer_by_folio(folio)
        if cliente is None:
            return None
        return CustomerDebtSummary(
            cliente=replace(cliente),
            deuda=self._debt_for_folio(cliente.folio),
        )

    def _unpaid_credit_sales(self) -> list[Venta]:
        return [venta for venta in self._ventas if venta.es_credito and not venta.pagada]

    def _sale_overdue(self, venta: Venta) -> bool | None:
        """Estado de atraso de una venta; `None` si su fecha no es valida."""
        try:
            return self.is_overdue(venta.fecha)
        except ValueError:
            LOGGER.warning("Venta %s con fecha invalida: %r", venta.id, venta.fecha)
            return None

    def _debt_for_folio(self, folio: str) -> float:
        return sum(
            venta.total
            for venta in self._unpaid_credit_sales()
            if venta.folio_cliente == folio
        )

    # ------------------------------------------------------------------
    # Reportes
    # ------------------------------------------------------------------
    def top_product(
        self,
        periodo: str = PERIOD_WEEK,
        tipo: str = TOP_MOST,
    ) -> TopProduct | None:
        """Producto con mas (o menos) unidades vendidas en el periodo.

        Los empates se resuelven a favor del producto que aparece primero
        en las ventas del periodo.
        """
        if periodo not in TOP_PERIODS:
            raise ValidationError(f"Periodo invalido: {periodo}")
        if tipo not in (TOP_MOST, TOP_LEAST):
            raise ValidationError(f"Tipo de ranking invalido: {tipo}")

        conteo: dict[int, int] = {}
        for venta in self._sales_since(period_start(periodo, self.today())):
            for linea in venta.productos:
                conteo[linea.id] = conteo.get(linea.id, 0) + linea.cantidad

        if not conteo:
            return None

        top_id, top_cantidad = next(iter(conteo.items()))
        for producto_id, cantidad in conteo.items():
            if tipo == TOP_MOST and cantidad > top_cantidad:
                top_id, top_cantidad = producto_id, cantidad
            elif tipo == TOP_LEAST and cantidad < top_cantidad:
                top_id, top_cantidad = producto_id, cantidad

        return TopProduct(
            producto_id=top_id,
            producto=self.find_product_by_id(top_id),
            cantidad=top_cantidad,
            periodo=periodo,
        )

    def financial_analysis(self, periodo: str = PERIOD_ALL) -> FinancialAnalysis:
        """Inversion actual en inventario y resultados de ventas del periodo."""
        if periodo not in REPORT_PERIODS:
            raise ValidationError(f"Periodo invalido: {periodo}")

        ventas = self._sales_since(period_start(periodo, self.today()))
        total_inversion = sum(p.precio_costo * p.cantidad for p in self._productos)
        total_ventas = sum(venta.total for venta in ventas)
        ganancia_total = sum(venta.ganancia for venta in ventas)
        costo_total_ventas = sum(
            linea.costo_unitario * linea.cantidad
            for venta in ventas
            for linea in venta.productos
        )
        margen = (ganancia_total / total_ventas) * 100 if total_ventas > 0 else 0.0

        return FinancialAnalysis(
            total_inversion=total_inversion,
            total_ventas=total_ventas,
            costo_total_ventas=costo_total_ventas,
            ganancia_total=ganancia_total,
            margen_ganancia=margen,
            periodo=periodo,
            cantidad_ventas=len(ventas),
        )

    def statistics(self) -> StoreStatistics:
        """Indicadores generales para el panel principal."""
        metricas = self._compute_metrics()
        return StoreStatistics(
            total_clientes=metricas.clientes_activos,
            total_productos=metricas.productos_activos,
            total_ventas=metricas.ventas_totales,
            deuda_total=sum(venta.total for venta in self._unpaid_credit_sales()),
            ventas_semana=len(self._sales_since(period_start(PERIOD_WEEK, self.today()))),
            productos_stock_bajo=len(self.low_stock_products()),
            productos_sin_stock=len(self.out_of_stock_products()),
            ganancias_totales=metricas.ganancias_totales,
        )

    def notification_counts(self) -> NotificationCounts:
        return NotificationCounts(
            clientes_en_atraso=len(self.customers_overdue()),
            productos_stock_bajo=len(self.low_stock_products()),
        )

    def _sales_since(self, desde: date) -> list[Venta]:
        ventas: list[Venta] = []
        for venta in self._ventas:
            try:
                fecha = parse_iso_date(venta.fecha)
            except ValueError:
                LOGGER.warning("Venta %s con fecha invalida: %r", venta.id, venta.fecha)
                continue
            if fecha >= desde:
                ventas.append(venta)
        return ventas

    # ------------------------------------------------------------------
    # Actividad y configuracion
    # ------------------------------------------------------------------
    def log_activity(
        self,
        tipo: str,
        mensaje: str,
        datos: ActivityPayload | None = None,
    ) -> Actividad:
        """Agrega una entrada al inicio del registro y conserva solo las ultimas."""
        now = self.now()
        actividad_id = int(now.timestamp() * 1000)
        if self._actividad and actividad_id <= self._actividad[0].id:
            actividad_id = self._actividad[0].id + 1

        actividad = Actividad(
            id=actividad_id,
            tipo=tipo,
            mensaje=mensaje,
            datos=datos if datos is not None else SystemPayload(),
            timestamp=now.isoformat(),
        )
        self._actividad.insert(0, actividad)
        del self._actividad[self._activity_limit:]
        return actividad

    def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT) -> list[Actividad]:
        return self._actividad[:limit]

    def set_theme(self, tema: str) -> None:
        """Guarda la preferencia de tema."""
        if tema not in THEMES:
            raise ValidationError(f"Tema invalido: {tema}")
        self._configuracion.tema = tema
        self.save()

    def toggle_theme(self) -> str:
        """Alterna entre tema claro y oscuro y retorna el nuevo valor."""
        tema = THEME_LIGHT if self._configuracion.tema == THEME_DARK else THEME_DARK
        self.set_theme(tema)
        return tema

    # ------------------------------------------------------------------
    # Exportacion
    # ------------------------------------------------------------------
    def export_data(self, formato: str = exporter.FORMAT_JSON) -> str:
        """Exporta clientes, productos, ventas y metricas como JSON o CSV."""
        payload = exporter.build_export_payload(
            clientes=self._clientes,
            productos=self._productos,
            ventas=self._ventas,
            metricas=self._metricas,
            exported_at=self.now().isoformat(),
        )
        if formato == exporter.FORMAT_JSON:
            return exporter.to_json(payload)
        if formato == exporter.FORMAT_CSV:
            return exporter.to_csv(payload)
        raise ValidationError(f"Formato de exportacion invalido: {formato}")

    # ------------------------------------------------------------------
    # Persistencia y notificaciones
    # ------------------------------------------------------------------
    def subscribe(self, callback: DataChangedCallback) -> None:
        """Registra un callback que se ejecuta tras cada guardado exitoso."""
        self._subscribers.append(callback)

    def unsubscribe(self, callback: DataChangedCallback) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def save(self) -> None:
        """Recalcula metricas, persiste el estado y notifica cambios.

        Un error de escritura se registra en el log y no se propaga; el
        estado en memoria se conserva aunque no haya quedado persistido.
        """
        self._metricas = self._compute_metrics()
        try:
            self._store.write_blob(self._storage_key, self._to_blob())
        except ServiceError:
            LOGGER.exception("Error guardando datos de la tienda.")
            return

        self._notify_data_changed()

    def load(self) -> None:
        """Carga el estado persistido; ante error o ausencia inicia vacio."""
        self._carga_fallida = False
        try:
            blob = self._store.read_blob(self._storage_key) or {}
            self._apply_blob(blob)
        except (ServiceError, KeyError, TypeError, ValueError, AttributeError, OverflowError):
            LOGGER.exception("Error cargando datos; se inicia con datos vacios.")
            self._reset_state()
            self._carga_fallida = True

        self._metricas = self._compute_metrics()
        self._init_ids()
        LOGGER.info(
            "Datos cargados: clientes=%d, productos=%d, ventas=%d",
            len(self._clientes),
            len(self._productos),
            len(self._ventas),
        )

    def _apply_blob(self, blob: dict[str, Any]) -> None:
        clientes = [Cliente.from_dict(item) for item in blob.get("customers") or []]
        productos = [Producto.from_dict(item) for item in blob.get("products") or []]
        ventas = [Venta.from_dict(item) for item in blob.get("sales") or []]
        actividad = [Actividad.from_dict(item) for item in blob.get("actividad") or []]
        configuracion = Configuracion.from_dict(blob.get("configuracion"))

        self._clientes = clientes
        self._productos = productos
        self._ventas = ventas
        self._actividad = actividad[: self._activity_limit]
        self._configuracion = configuracion

    def _reset_state(self) -> None:
        self._clientes = []
        self._productos = []
        self._ventas = []
        self._actividad = []
        self._configuracion = Configuracion()

    def _to_blob(self) -> dict[str, Any]:
        return {
            "customers": [cliente.to_dict() for cliente in self._clientes],
            "products": [producto.to_dict() for producto in self._productos],
            "sales": [venta.to_dict() for venta in self._ventas],
            "configuracion": self._configuracion.to_dict(),
            "metricas": self._metricas.to_dict(),
            "actividad": [actividad.to_dict() for actividad in self._actividad],
            "lastUpdated": self.now().isoformat(),
        }

    def _init_ids(self) -> None:
        self._next_cliente_id = max((c.id for c in self._clientes), default=0) + 1
        self._next_producto_id = max((p.id for p in self._productos), default=0) + 1
        self._next_venta_id = max((v.id for v in self._ventas), default=0) + 1

    def _compute_metrics(self) -> Metricas:
        return Metricas(
            ventas_totales=len(self._ventas),
            ganancias_totales=sum(venta.ganancia for venta in self._ventas),
            clientes_activos=sum(1 for cliente in self._clientes if cliente.activo),
            productos_activos=sum(1 for producto in self._productos if producto.activo),
        )

    def _notify_data_changed(self) -> None:
        for callback in list(self._subscribers):
            try:
                callback()
            except Exception:
                LOGGER.exception("Error en suscriptor de cambios de datos.")
