"""
Contratos de la capa de servicio.

Los controladores dependen de estas interfaces, nunca de las clases
concretas: las operaciones específicas de cada entidad (búsquedas, stock,
validación de unicidad) se declaran aquí en lugar de obtenerse por casting.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Generic, List, Optional, Tuple, TypeVar

from pydantic import BaseModel

from models.base import BaseDTO
from models.clientes import ClienteDTO, ClienteUpdate
from models.productos import ProductoDTO, ProductoUpdate, ResumenInventarioDTO

D = TypeVar('D', bound=BaseDTO)
P = TypeVar('P', bound=BaseModel)


class CrudServiceInterface(ABC, Generic[D, P]):
    """Operaciones CRUD comunes a todas las entidades."""

    @abstractmethod
    def get_all(self) -> List[D]:
        ...

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[D]:
        ...

    @abstractmethod
    def get_paged(self, page: int, page_size: int) -> Tuple[List[D], int]:
        ...

    @abstractmethod
    def create(self, dto: D) -> D:
        ...

    @abstractmethod
    def update(self, dto: D) -> D:
        ...

    @abstractmethod
    def delete(self, id: int) -> bool:
        ...

    @abstractmethod
    def update_partial(self, parcial: P) -> bool:
        ...

    @abstractmethod
    def set_active(self, id: int, status: bool) -> bool:
        ...

    @abstractmethod
    def validate_unique(self, value: Optional[str], exclude_id: Optional[int] = None) -> bool:
        ...


class ClienteServiceInterface(CrudServiceInterface[ClienteDTO, ClienteUpdate]):
    """Operaciones de negocio de clientes."""

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[ClienteDTO]:
        ...

    @abstractmethod
    def search_by_nombre(self, termino: str) -> List[ClienteDTO]:
        ...

    @abstractmethod
    def get_recientes(self, dias: Optional[int] = None) -> List[ClienteDTO]:
        ...

    @abstractmethod
    def validate_unique_email(self, email: Optional[str], exclude_id: Optional[int] = None) -> bool:
        ...


class ProductoServiceInterface(CrudServiceInterface[ProductoDTO, ProductoUpdate]):
    """Operaciones de negocio de productos."""

    @abstractmethod
    def search_by_nombre(self, termino: str) -> List[ProductoDTO]:
        ...

    @abstractmethod
    def get_con_stock(self, stock_minimo: int = 1) -> List[ProductoDTO]:
        ...

    @abstractmethod
    def get_sin_stock(self) -> List[ProductoDTO]:
        ...

    @abstractmethod
    def get_by_rango_precio(self, precio_minimo: Decimal, precio_maximo: Decimal) -> List[ProductoDTO]:
        ...

    @abstractmethod
    def get_recientes(self, dias: Optional[int] = None) -> List[ProductoDTO]:
        ...

    @abstractmethod
    def update_stock(self, producto_id: int, nuevo_stock: int) -> bool:
        ...

    @abstractmethod
    def validate_unique_nombre(self, nombre: Optional[str], exclude_id: Optional[int] = None) -> bool:
        ...

    @abstractmethod
    def get_resumen_inventario(self, solo_activos: bool = True) -> ResumenInventarioDTO:
        ...
