"""
Dependency injection for services and repositories.

This module provides FastAPI dependencies for injecting services
and repositories into route handlers. Each request gets its own
session, persistence context, repositories and services.
"""

from sqlalchemy.orm import Session
from fastapi import Depends

from database.db import get_db
from database.context import DbContext
from repositories.cliente_repository import ClienteRepository
from repositories.producto_repository import ProductoRepository
from services.cliente_service import ClienteService
from services.producto_service import ProductoService
from services.interfaces import ClienteServiceInterface, ProductoServiceInterface


# ==================== Persistence Context ====================

def get_db_context(db: Session = Depends(get_db)) -> DbContext:
    """
    Get the persistence context for the current request.

    Args:
        db: Database session (injected by FastAPI)

    Returns:
        DbContext wrapping the request session
    """
    return DbContext(db)


# ==================== Repository Dependencies ====================

def get_cliente_repository(context: DbContext = Depends(get_db_context)) -> ClienteRepository:
    return ClienteRepository(context)


def get_producto_repository(context: DbContext = Depends(get_db_context)) -> ProductoRepository:
    return ProductoRepository(context)


# ==================== Service Dependencies ====================

def get_cliente_service(
    repository: ClienteRepository = Depends(get_cliente_repository),
) -> ClienteServiceInterface:
    """
    Get the cliente service.

    This is the main dependency to use in route handlers for cliente operations.

    Example:
        ```python
        @router.get("/clientes")
        async def get_clientes(
            service: ClienteServiceInterface = Depends(get_cliente_service)
        ):
            return service.get_all()
        ```
    """
    return ClienteService(repository)


def get_producto_service(
    repository: ProductoRepository = Depends(get_producto_repository),
) -> ProductoServiceInterface:
    """
    Get the producto service.

    This is the main dependency to use in route handlers for producto operations.
    """
    return ProductoService(repository)
