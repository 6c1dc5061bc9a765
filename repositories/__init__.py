"""
Capa de repositorio para el acceso a datos.
Este paquete contiene clases de repositorio que gestionan todas las operaciones de la base de datos.
Los repositorios proporcionan una abstracción sobre el ORM y no deben contener
lógica de negocio más allá de las guardas propias de cada entidad.

"""

from .base_repository import BaseRepository
from .cliente_repository import ClienteRepository
from .producto_repository import ProductoRepository, ResumenInventario

__all__ = [
    "BaseRepository",
    "ClienteRepository",
    "ProductoRepository",
    "ResumenInventario",
]
