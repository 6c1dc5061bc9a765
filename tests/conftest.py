"""
Configuración de fixtures para pytest.

Este módulo contiene fixtures reutilizables para todos los tests.
"""

import pytest
import os
from typing import Generator, Dict, Any
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

# Configurar para usar base de datos en memoria para tests
os.environ["DATABASE_URL"] = "sqlite:///:memory:"

from main import app
from database.db import get_db
from database.models import Base, ClienteORM, ProductoORM
from database.context import DbContext
from repositories.cliente_repository import ClienteRepository
from repositories.producto_repository import ProductoRepository
from services.cliente_service import ClienteService
from services.producto_service import ProductoService


# ==================== Database Fixtures ====================

@pytest.fixture(scope="function")
def db_engine():
    """Create an in-memory SQLite database engine for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Create a new database session for a test."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def db_context(db_session: Session) -> DbContext:
    """Persistence context over the test session."""
    return DbContext(db_session)


@pytest.fixture(scope="function")
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create a test client with database session override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==================== Repository / Service Fixtures ====================

@pytest.fixture
def cliente_repository(db_context: DbContext) -> ClienteRepository:
    return ClienteRepository(db_context)


@pytest.fixture
def producto_repository(db_context: DbContext) -> ProductoRepository:
    return ProductoRepository(db_context)


@pytest.fixture
def cliente_service(cliente_repository: ClienteRepository) -> ClienteService:
    return ClienteService(cliente_repository)


@pytest.fixture
def producto_service(producto_repository: ProductoRepository) -> ProductoService:
    return ProductoService(producto_repository)


# ==================== Cliente Fixtures ====================

@pytest.fixture
def cliente_data() -> Dict[str, Any]:
    """Sample cliente data for testing."""
    return {
        "nombre": "Ana",
        "apellido": "García",
        "email": "ana@example.com",
        "telefono": "3001234567",
    }


@pytest.fixture
def cliente_instance(db_session: Session, cliente_data: Dict[str, Any]) -> ClienteORM:
    """Create a cliente in the database."""
    cliente = ClienteORM(**cliente_data)
    db_session.add(cliente)
    db_session.commit()
    db_session.refresh(cliente)
    return cliente


@pytest.fixture
def otro_cliente(db_session: Session) -> ClienteORM:
    """Create a second cliente in the database."""
    cliente = ClienteORM(
        nombre="Bruno",
        apellido="Pérez",
        email="bruno@example.com",
        telefono=None,
    )
    db_session.add(cliente)
    db_session.commit()
    db_session.refresh(cliente)
    return cliente


# ==================== Producto Fixtures ====================

@pytest.fixture
def producto_data() -> Dict[str, Any]:
    """Sample producto data for testing."""
    return {
        "nombre": "Widget",
        "descripcion": "Pieza de prueba",
        "precio": Decimal("9.99"),
        "stock": 3,
    }


@pytest.fixture
def producto_instance(db_session: Session, producto_data: Dict[str, Any]) -> ProductoORM:
    """Create a producto in the database."""
    producto = ProductoORM(**producto_data)
    db_session.add(producto)
    db_session.commit()
    db_session.refresh(producto)
    return producto


@pytest.fixture
def productos_inventario(db_session: Session) -> list[ProductoORM]:
    """Create several productos with different prices and stock."""
    productos = [
        ProductoORM(nombre="Tornillo", descripcion="Acero 5mm", precio=Decimal("0.50"), stock=100),
        ProductoORM(nombre="Martillo", descripcion="Mango de madera", precio=Decimal("15.00"), stock=0),
        ProductoORM(nombre="Taladro", descripcion="Inalámbrico", precio=Decimal("120.00"), stock=2),
        ProductoORM(nombre="Clavo", descripcion="Caja de tornillos y clavos", precio=Decimal("3.25"), stock=40),
    ]
    db_session.add_all(productos)
    db_session.commit()
    for producto in productos:
        db_session.refresh(producto)
    return productos
