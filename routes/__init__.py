from .clientes import router as clientes_router
from .productos import router as productos_router

__all__ = [
    "clientes_router",
    "productos_router",
]
