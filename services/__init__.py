"""
Capa de servicio para la lógica de negocio.
Este paquete contiene clases de servicio que implementan la lógica de negocio
y orquestan las operaciones entre repositorios.
"""

from .base_service import BaseService, UniqueFieldRule
from .mappers import EntityMapper, cliente_mapper, producto_mapper
from .interfaces import (
    CrudServiceInterface,
    ClienteServiceInterface,
    ProductoServiceInterface,
)
from .cliente_service import ClienteService
from .producto_service import ProductoService

__all__ = [
    "BaseService",
    "UniqueFieldRule",
    "EntityMapper",
    "cliente_mapper",
    "producto_mapper",
    "CrudServiceInterface",
    "ClienteServiceInterface",
    "ProductoServiceInterface",
    "ClienteService",
    "ProductoService",
]
