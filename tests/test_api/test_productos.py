"""
Tests for Producto API endpoints.

Tests cover:
- Creating productos (price/stock validation, duplicate nombre)
- Stock, price range and summary queries
- Updates, stock update, status change and delete
"""

import pytest
from decimal import Decimal
from fastapi.testclient import TestClient

from database.models import ProductoORM


class TestProductoCreation:
    """Tests for creating productos (POST /productos/)."""

    def test_crear_producto(self, client: TestClient):
        response = client.post(
            "/productos/",
            json={"nombre": "Widget", "precio": "9.99", "stock": 5}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["nombre"] == "Widget"
        assert Decimal(str(data["precio"])) == Decimal("9.99")
        assert data["stock"] == 5
        assert data["create_at"] is not None

        duplicado = client.post(
            "/productos/",
            json={"nombre": "Widget", "precio": "1.00", "stock": 1}
        )
        assert duplicado.status_code == 409

    def test_crear_producto_precio_negativo(self, client: TestClient):
        response = client.post("/productos/", json={"nombre": "Malo", "precio": "-0.01"})

        assert response.status_code == 400
        assert client.get("/productos/").json() == []

    def test_crear_producto_precio_minimo(self, client: TestClient):
        response = client.post("/productos/", json={"nombre": "Barato", "precio": "0.01"})

        assert response.status_code == 201

    def test_crear_producto_stock_negativo(self, client: TestClient):
        response = client.post("/productos/", json={"nombre": "Raro", "precio": "1.00", "stock": -1})

        assert response.status_code == 400


class TestProductoQueries:
    """Tests for producto query endpoints."""

    def test_listar_paginado(self, client: TestClient, productos_inventario):
        response = client.get("/productos/", params={"page": 1, "page_size": 3})

        data = response.json()
        assert response.status_code == 200
        assert len(data["data"]) == 3
        assert data["pagination"]["total_items"] == 4
        assert data["pagination"]["has_next"] is True

    def test_buscar(self, client: TestClient, productos_inventario):
        response = client.get("/productos/buscar", params={"nombre": "madera"})

        assert [p["nombre"] for p in response.json()] == ["Martillo"]

    def test_con_stock(self, client: TestClient, productos_inventario):
        response = client.get("/productos/stock", params={"stock_minimo": 50})

        assert [p["nombre"] for p in response.json()] == ["Tornillo"]

    def test_sin_stock(self, client: TestClient, productos_inventario):
        response = client.get("/productos/sin-stock")

        assert [p["nombre"] for p in response.json()] == ["Martillo"]

    def test_rango_precio(self, client: TestClient, productos_inventario):
        response = client.get(
            "/productos/rango-precio",
            params={"precio_minimo": "1", "precio_maximo": "20"}
        )

        assert response.status_code == 200
        assert [p["nombre"] for p in response.json()] == ["Clavo", "Martillo"]

    def test_rango_precio_invertido(self, client: TestClient):
        response = client.get(
            "/productos/rango-precio",
            params={"precio_minimo": "20", "precio_maximo": "1"}
        )

        assert response.status_code == 400

    def test_recientes(self, client: TestClient, productos_inventario):
        response = client.get("/productos/recientes", params={"dias": 1})

        assert len(response.json()) == 4

    def test_resumen(self, client: TestClient, productos_inventario):
        response = client.get("/productos/resumen")

        assert response.status_code == 200
        data = response.json()
        assert data["total_productos"] == 4
        assert data["unidades"] == 142
        assert float(data["valor_total"]) == pytest.approx(420.0)

    def test_validate_nombre(self, client: TestClient, producto_instance: ProductoORM):
        response = client.get("/productos/validate-nombre", params={"nombre": "widget"})

        assert response.json()["disponible"] is False

    def test_obtener_producto_inexistente(self, client: TestClient):
        assert client.get("/productos/999").status_code == 404


class TestProductoUpdate:
    """Tests for PUT, PATCH, status, stock and DELETE."""

    def test_actualizar_producto(self, client: TestClient, producto_instance: ProductoORM):
        producto_id = producto_instance.id
        response = client.put(
            f"/productos/{producto_id}",
            json={"nombre": "Widget", "descripcion": "Nueva", "precio": "10.50", "stock": 7}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["descripcion"] == "Nueva"
        assert Decimal(str(data["precio"])) == Decimal("10.50")

    def test_actualizar_parcial(self, client: TestClient, producto_instance: ProductoORM):
        producto_id = producto_instance.id
        response = client.patch(f"/productos/{producto_id}", json={"stock": 11})

        assert response.status_code == 200
        data = client.get(f"/productos/{producto_id}").json()
        assert data["stock"] == 11
        assert data["nombre"] == "Widget"

    def test_actualizar_stock(self, client: TestClient, producto_instance: ProductoORM):
        producto_id = producto_instance.id
        response = client.patch(f"/productos/{producto_id}/stock", json={"nuevo_stock": 0})

        assert response.status_code == 200
        assert client.get(f"/productos/{producto_id}").json()["stock"] == 0

    def test_actualizar_stock_negativo(self, client: TestClient, producto_instance: ProductoORM):
        producto_id = producto_instance.id
        response = client.patch(f"/productos/{producto_id}/stock", json={"nuevo_stock": -5})

        assert response.status_code == 400

    def test_actualizar_stock_inexistente(self, client: TestClient):
        response = client.patch("/productos/999/stock", json={"nuevo_stock": 1})

        assert response.status_code == 404

    def test_desactivar_producto(self, client: TestClient, producto_instance: ProductoORM):
        producto_id = producto_instance.id
        response = client.patch(f"/productos/{producto_id}/status", json={"status": False})

        assert response.status_code == 200
        assert client.get(f"/productos/{producto_id}").json()["is_active"] is False

    def test_eliminar_producto(self, client: TestClient, producto_instance: ProductoORM):
        producto_id = producto_instance.id

        assert client.delete(f"/productos/{producto_id}").status_code == 200
        assert client.delete(f"/productos/{producto_id}").status_code == 404


class TestGeneralEndpoints:

    def test_root(self, client: TestClient):
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "active"

    def test_health(self, client: TestClient):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["database"] == "connected"
