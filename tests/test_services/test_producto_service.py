"""
Tests for ProductoService business logic.

Tests cover:
- Price and stock validation before store access
- Nombre uniqueness
- Stock and price range queries
- Stock update
- Inventory summary
"""

import pytest
from datetime import datetime
from decimal import Decimal

from database.models import ProductoORM
from models.productos import ProductoDTO, ProductoUpdate, ResumenInventarioDTO
from services.producto_service import ProductoService
from services.interfaces import ProductoServiceInterface
from core.exceptions import (
    ConflictException,
    ErrorKind,
    InvalidArgumentException,
    NotFoundException,
)


class TestProductoServiceCreate:
    """Tests for creating productos."""

    def test_implements_widened_interface(self, producto_service: ProductoService):
        assert isinstance(producto_service, ProductoServiceInterface)

    def test_widget_scenario(self, producto_service: ProductoService):
        creado = producto_service.create(
            ProductoDTO(nombre="Widget", precio=Decimal("9.99"), stock=5)
        )

        leido = producto_service.get_by_id(creado.id)
        assert leido.nombre == "Widget"
        assert leido.precio == Decimal("9.99")
        assert leido.stock == 5
        assert leido.create_at is not None

        with pytest.raises(ConflictException) as exc_info:
            producto_service.create(ProductoDTO(nombre="Widget", precio=Decimal("1.00"), stock=1))
        assert exc_info.value.kind == ErrorKind.CONFLICT

    def test_negative_price_rejected_before_store(self, producto_service: ProductoService, db_session):
        with pytest.raises(InvalidArgumentException):
            producto_service.create(ProductoDTO(nombre="Negativo", precio=Decimal("-0.01")))

        assert db_session.query(ProductoORM).count() == 0

    def test_minimum_positive_price_accepted(self, producto_service: ProductoService):
        creado = producto_service.create(ProductoDTO(nombre="Barato", precio=Decimal("0.01")))

        assert creado.precio == Decimal("0.01")
        assert creado.stock == 0

    def test_negative_stock_rejected(self, producto_service: ProductoService):
        with pytest.raises(InvalidArgumentException):
            producto_service.create(ProductoDTO(nombre="Raro", precio=Decimal("1.00"), stock=-3))

    def test_blank_nombre_rejected(self, producto_service: ProductoService):
        with pytest.raises(InvalidArgumentException):
            producto_service.create(ProductoDTO(nombre="  ", precio=Decimal("1.00")))


class TestProductoServiceQueries:
    """Tests for producto queries."""

    def test_get_con_stock_default(self, producto_service: ProductoService, productos_inventario):
        nombres = [p.nombre for p in producto_service.get_con_stock()]

        assert nombres == ["Clavo", "Taladro", "Tornillo"]

    def test_get_con_stock_negative(self, producto_service: ProductoService):
        with pytest.raises(InvalidArgumentException):
            producto_service.get_con_stock(-1)

    def test_get_sin_stock(self, producto_service: ProductoService, productos_inventario):
        assert [p.nombre for p in producto_service.get_sin_stock()] == ["Martillo"]

    def test_get_by_rango_precio(self, producto_service: ProductoService, productos_inventario):
        productos = producto_service.get_by_rango_precio(Decimal("3"), Decimal("120"))

        assert [p.nombre for p in productos] == ["Clavo", "Martillo", "Taladro"]

    @pytest.mark.parametrize(
        "minimo,maximo",
        [(Decimal("-1"), Decimal("10")), (Decimal("10"), Decimal("-1")), (Decimal("20"), Decimal("10"))],
    )
    def test_get_by_rango_precio_invalid(self, producto_service: ProductoService, minimo, maximo):
        with pytest.raises(InvalidArgumentException):
            producto_service.get_by_rango_precio(minimo, maximo)

    def test_search_by_nombre_blank(self, producto_service: ProductoService):
        with pytest.raises(InvalidArgumentException):
            producto_service.search_by_nombre("")

    def test_get_recientes(self, producto_service: ProductoService, productos_inventario):
        assert len(producto_service.get_recientes()) == 4

    def test_get_resumen_inventario(self, producto_service: ProductoService, productos_inventario):
        resumen = producto_service.get_resumen_inventario()

        assert isinstance(resumen, ResumenInventarioDTO)
        assert resumen.total_productos == 4
        assert resumen.unidades == 142
        assert float(resumen.valor_total) == pytest.approx(420.0)


class TestProductoServiceUpdate:
    """Tests for updates."""

    def test_update(self, producto_service: ProductoService, producto_instance: ProductoORM):
        creado = producto_service.get_by_id(producto_instance.id)

        actualizado = producto_service.update(
            ProductoDTO(id=producto_instance.id, nombre="Widget Pro", precio=Decimal("19.99"), stock=1)
        )

        assert actualizado.nombre == "Widget Pro"
        assert actualizado.descripcion is None
        assert actualizado.create_at == creado.create_at

    def test_update_without_changes_refreshes_update_at(
        self,
        producto_service: ProductoService,
        monkeypatch,
    ):
        creado = producto_service.create(ProductoDTO(nombre="Tuerca", precio=Decimal("9.99"), stock=5))
        posterior = datetime(2030, 1, 1)
        monkeypatch.setattr("database.context.utc_now", lambda: posterior)

        actualizado = producto_service.update(creado.model_copy())

        assert actualizado.update_at == posterior
        assert actualizado.update_at > creado.update_at
        assert actualizado.create_at == creado.create_at

    def test_update_negative_price(self, producto_service: ProductoService, producto_instance: ProductoORM):
        with pytest.raises(InvalidArgumentException):
            producto_service.update(
                ProductoDTO(id=producto_instance.id, nombre="Widget", precio=Decimal("-5"))
            )

    def test_update_nombre_taken(self, producto_service: ProductoService, productos_inventario):
        tornillo = productos_inventario[0]

        with pytest.raises(ConflictException):
            producto_service.update(
                ProductoDTO(id=tornillo.id, nombre="martillo", precio=Decimal("0.50"), stock=100)
            )

    def test_update_partial_precio(self, producto_service: ProductoService, producto_instance: ProductoORM):
        assert producto_service.update_partial(
            ProductoUpdate(id=producto_instance.id, precio=Decimal("12.50"))
        ) is True

        producto = producto_service.get_by_id(producto_instance.id)
        assert producto.precio == Decimal("12.50")
        assert producto.nombre == "Widget"
        assert producto.stock == 3

    def test_update_partial_negative_stock(self, producto_service: ProductoService, producto_instance: ProductoORM):
        with pytest.raises(InvalidArgumentException):
            producto_service.update_partial(ProductoUpdate(id=producto_instance.id, stock=-1))

    def test_update_partial_invalid_values_checked_before_lookup(self, producto_service: ProductoService):
        with pytest.raises(InvalidArgumentException):
            producto_service.update_partial(ProductoUpdate(id=999, precio=Decimal("-0.01")))

    def test_update_stock(self, producto_service: ProductoService, producto_instance: ProductoORM):
        assert producto_service.update_stock(producto_instance.id, 42) is True

        assert producto_service.get_by_id(producto_instance.id).stock == 42

    def test_update_stock_missing(self, producto_service: ProductoService):
        with pytest.raises(NotFoundException):
            producto_service.update_stock(999, 1)

    def test_update_stock_negative(self, producto_service: ProductoService, producto_instance: ProductoORM):
        with pytest.raises(InvalidArgumentException):
            producto_service.update_stock(producto_instance.id, -1)

    def test_delete_missing(self, producto_service: ProductoService):
        with pytest.raises(NotFoundException):
            producto_service.delete(12345)

    def test_validate_unique_nombre(self, producto_service: ProductoService, producto_instance: ProductoORM):
        assert producto_service.validate_unique_nombre("WIDGET") is False
        assert producto_service.validate_unique_nombre("Widget", exclude_id=producto_instance.id) is True
        assert producto_service.validate_unique_nombre("") is False
