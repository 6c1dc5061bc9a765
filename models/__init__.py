from .base import BaseDTO, StatusUpdate
from .clientes import ClienteDTO, ClienteUpdate
from .productos import ProductoDTO, ProductoUpdate, StockUpdate, ResumenInventarioDTO
from .common import (
    SuccessResponse,
    DeleteResponse,
    HealthCheckResponse,
    create_success_response,
    create_delete_response,
)

__all__ = [
    # Base
    "BaseDTO", "StatusUpdate",
    # Clientes
    "ClienteDTO", "ClienteUpdate",
    # Productos
    "ProductoDTO", "ProductoUpdate", "StockUpdate", "ResumenInventarioDTO",
    # Common responses
    "SuccessResponse", "DeleteResponse", "HealthCheckResponse",
    "create_success_response", "create_delete_response",
]
